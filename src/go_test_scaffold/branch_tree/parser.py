"""Go front end: tree-sitter parse tree -> package, types and function declarations."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import tree_sitter_go
from tree_sitter import Language, Node, Parser

from go_test_scaffold.exceptions import GoParseError, InputError

GO_LANGUAGE = Language(tree_sitter_go.language())


@dataclass(frozen=True, slots=True)
class FunctionDecl:
    """A top-level ``func`` declaration, with or without receiver."""

    name: str
    receiver_type: str  # "" for free functions
    line: int
    body: Node | None  # None for body-less declarations


@dataclass(slots=True)
class ParsedFile:
    """Everything the branch extractor and grouper need from one file."""

    file_path: str
    package_name: str
    source: bytes
    type_names: list[str] = field(default_factory=list)
    functions: list[FunctionDecl] = field(default_factory=list)


def node_text(source: bytes, node: Node) -> str:
    """Decode the source span covered by a node."""
    return source[node.start_byte : node.end_byte].decode("utf-8", errors="replace")


def node_line(node: Node) -> int:
    """1-based line of a node's first byte."""
    return node.start_point[0] + 1


def parse_file(path: str | Path) -> ParsedFile:
    """Read and parse a Go file. Raises InputError or GoParseError."""
    file_path = str(path)
    try:
        source = Path(path).read_bytes()
    except FileNotFoundError:
        raise InputError(file_path, "no such file") from None
    except IsADirectoryError:
        raise InputError(file_path, "is a directory") from None
    except OSError as exc:
        raise InputError(file_path, exc.strerror or str(exc)) from exc
    return parse_source(source, file_path)


def parse_source(source: bytes | str, file_path: str = "<source>") -> ParsedFile:
    """Parse Go source held in memory."""
    if isinstance(source, str):
        source = source.encode("utf-8")

    tree = Parser(GO_LANGUAGE).parse(source)
    root = tree.root_node
    if root.has_error:
        _raise_first_error(root, source, file_path)

    package_name = _package_name(root, source)
    if not package_name:
        raise GoParseError(file_path, "expected 'package' clause")

    parsed = ParsedFile(file_path=file_path, package_name=package_name, source=source)
    for child in root.named_children:
        if child.type == "type_declaration":
            parsed.type_names.extend(_struct_type_names(child, source))
        elif child.type in ("function_declaration", "method_declaration"):
            parsed.functions.append(_function_decl(child, source))
    return parsed


def resolve_receiver_type(receiver: Node | None, source: bytes) -> str:
    """Receiver type name with one level of pointer (and type arguments) removed.

    ``(w Widget)``, ``(w *Widget)`` and ``(s *Stack[T])`` resolve to the bare
    type name; any other receiver shape resolves to "".
    """
    if receiver is None:
        return ""
    params = [c for c in receiver.named_children if c.type == "parameter_declaration"]
    if not params:
        return ""
    type_node = params[0].child_by_field_name("type")
    if type_node is not None and type_node.type == "pointer_type":
        type_node = type_node.named_children[0] if type_node.named_children else None
    if type_node is not None and type_node.type == "generic_type":
        type_node = type_node.child_by_field_name("type")
    if type_node is None or type_node.type != "type_identifier":
        return ""
    return node_text(source, type_node)


def _package_name(root: Node, source: bytes) -> str:
    for child in root.named_children:
        if child.type == "package_clause":
            for ident in child.named_children:
                if ident.type == "package_identifier":
                    return node_text(source, ident)
    return ""


def _struct_type_names(decl: Node, source: bytes) -> list[str]:
    """Names of struct types declared in a ``type`` declaration (grouped or not)."""
    names: list[str] = []
    for spec in decl.named_children:
        if spec.type != "type_spec":
            continue
        name = spec.child_by_field_name("name")
        type_node = spec.child_by_field_name("type")
        if name is not None and type_node is not None and type_node.type == "struct_type":
            names.append(node_text(source, name))
    return names


def _function_decl(node: Node, source: bytes) -> FunctionDecl:
    name = node.child_by_field_name("name")
    receiver_type = ""
    if node.type == "method_declaration":
        receiver_type = resolve_receiver_type(node.child_by_field_name("receiver"), source)
    return FunctionDecl(
        name=node_text(source, name) if name is not None else "",
        receiver_type=receiver_type,
        line=node_line(node),
        body=node.child_by_field_name("body"),
    )


def _first_error(node: Node) -> Node | None:
    """Depth-first search for the first ERROR or MISSING node."""
    if node.type == "ERROR" or node.is_missing:
        return node
    for child in node.children:
        if child.has_error or child.is_missing:
            found = _first_error(child)
            if found is not None:
                return found
    return None


def _raise_first_error(root: Node, source: bytes, file_path: str) -> None:
    bad = _first_error(root) or root
    line, column = bad.start_point[0] + 1, bad.start_point[1] + 1
    if bad.is_missing:
        message = f"syntax error: missing {bad.type!r}"
    else:
        snippet = " ".join(node_text(source, bad).split())[:40]
        message = f"syntax error near {snippet!r}" if snippet else "syntax error"
    raise GoParseError(file_path, message, line=line, column=column)
