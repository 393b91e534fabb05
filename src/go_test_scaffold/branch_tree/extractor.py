"""BranchExtractor: reduce a Go function body to its tree of control-flow branches."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import TYPE_CHECKING

from go_test_scaffold.branch_tree.parser import node_line, node_text
from go_test_scaffold.branch_tree.types import Branch, BranchKind, mark_reachability

if TYPE_CHECKING:
    from tree_sitter import Node

# Case clause node types per switch-like statement
_SWITCH_CASES = frozenset({"expression_case", "type_case", "default_case"})
_SELECT_CASES = frozenset({"communication_case", "default_case"})

SELECT_MARKER = "select"
ELSE_MARKER = "else"
DEFAULT_MARKER = "default"
BLOCK_MARKER = "block"


def squash(text: str) -> str:
    """Collapse all whitespace runs to single spaces."""
    return " ".join(text.split())


class BranchExtractor:
    """Walk function bodies and emit an ordered ``Branch`` forest.

    Only control-flow statements produce branches; assignments, calls,
    declarations and anything unrecognized are skipped without breaking
    the surrounding statement sequence.

    Usage:
        extractor = BranchExtractor(parsed.source)
        branches = extractor.extract(decl.body)
    """

    def __init__(self, source: bytes) -> None:
        self.source = source
        self._handlers: dict[str, Callable[[Node], list[Branch]]] = {
            "return_statement": self._visit_return,
            "if_statement": self._visit_if,
            "for_statement": self._visit_for,
            "expression_switch_statement": self._visit_switch,
            "type_switch_statement": self._visit_type_switch,
            "select_statement": self._visit_select,
            "block": self._visit_block,
            "labeled_statement": self._visit_labeled,
        }

    def extract(self, body: Node | None) -> list[Branch]:
        """Extract the branch forest of a function body, reachability marked."""
        if body is None:
            return []
        branches = self._extract_list(_statements(body))
        mark_reachability(branches)
        return branches

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def _extract_list(self, statements: Iterator[Node]) -> list[Branch]:
        out: list[Branch] = []
        for stmt in statements:
            out.extend(self._visit(stmt))
        return out

    def _visit(self, stmt: Node) -> list[Branch]:
        """Branches contributed by one statement: zero, one, or inlined several."""
        handler = self._handlers.get(stmt.type)
        if handler is None:
            return []
        return handler(stmt)

    # ------------------------------------------------------------------
    # Statement handlers
    # ------------------------------------------------------------------

    def _visit_return(self, node: Node) -> list[Branch]:
        first_line = self._text(node).splitlines()[0]
        return [
            Branch(
                kind=BranchKind.RETURN,
                line=node_line(node),
                excerpt=first_line.strip(),
                reaches_return=True,
            )
        ]

    def _visit_if(self, node: Node) -> list[Branch]:
        """Collapse an if / else if / else chain into one if-group."""
        head_line = node_line(node)
        head_excerpt = self._condition(node)

        clauses: list[Branch] = []
        current: Node | None = node
        kind = BranchKind.IF
        while current is not None:
            clauses.append(
                Branch(
                    kind=kind,
                    line=node_line(current),
                    excerpt=self._condition(current),
                    children=self._extract_block(current.child_by_field_name("consequence")),
                )
            )
            alternative = current.child_by_field_name("alternative")
            if alternative is None:
                current = None
            elif alternative.type == "if_statement":
                current = alternative
                kind = BranchKind.ELSE_IF
            else:
                clauses.append(
                    Branch(
                        kind=BranchKind.ELSE,
                        line=node_line(alternative),
                        excerpt=ELSE_MARKER,
                        children=self._extract_block(alternative),
                        origin_line=head_line,
                        origin_excerpt=head_excerpt,
                    )
                )
                current = None

        # Lone `if` without else: no wrapper
        if len(clauses) == 1:
            return clauses
        return [
            Branch(
                kind=BranchKind.IF_GROUP,
                line=head_line,
                excerpt=head_excerpt,
                children=clauses,
            )
        ]

    def _visit_for(self, node: Node) -> list[Branch]:
        body = node.child_by_field_name("body")
        is_range = any(child.type == "range_clause" for child in node.named_children)
        header_end = body.start_byte if body is not None else node.end_byte
        return [
            Branch(
                kind=BranchKind.RANGE if is_range else BranchKind.FOR,
                line=node_line(node),
                excerpt=self._span(node.start_byte, header_end),
                children=self._extract_block(body),
            )
        ]

    def _visit_switch(self, node: Node) -> list[Branch]:
        value = node.child_by_field_name("value")
        excerpt = squash(self._text(value)) if value is not None else ""
        return [self._switch_like(node, BranchKind.SWITCH, excerpt, _SWITCH_CASES)]

    def _visit_type_switch(self, node: Node) -> list[Branch]:
        # Header is `[alias :=] value.(type)`; any initializer is dropped.
        start_node = node.child_by_field_name("alias") or node.child_by_field_name("value")
        brace = _first_token(node, "{")
        excerpt = ""
        if start_node is not None:
            end = brace.start_byte if brace is not None else start_node.end_byte
            excerpt = self._span(start_node.start_byte, end)
        return [self._switch_like(node, BranchKind.TYPE_SWITCH, excerpt, _SWITCH_CASES)]

    def _visit_select(self, node: Node) -> list[Branch]:
        return [self._switch_like(node, BranchKind.SELECT, SELECT_MARKER, _SELECT_CASES)]

    def _visit_block(self, node: Node) -> list[Branch]:
        """Nested block: transparent when it yields a single branch."""
        children = self._extract_block(node)
        if len(children) <= 1:
            return children
        return [
            Branch(
                kind=BranchKind.BLOCK,
                line=node_line(node),
                excerpt=BLOCK_MARKER,
                children=children,
            )
        ]

    def _visit_labeled(self, node: Node) -> list[Branch]:
        out: list[Branch] = []
        for child in node.named_children:
            if child.type not in ("label_name", "comment"):
                out.extend(self._visit(child))
        return out

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _switch_like(
        self,
        node: Node,
        kind: BranchKind,
        excerpt: str,
        case_types: frozenset[str],
    ) -> Branch:
        """Shared shape of switch, type switch and select: one child per clause."""
        line = node_line(node)
        is_select = kind == BranchKind.SELECT
        branch = Branch(kind=kind, line=line, excerpt=excerpt)
        for clause in node.named_children:
            if clause.type not in case_types:
                continue
            if clause.type == "default_case":
                branch.children.append(
                    Branch(
                        kind=BranchKind.SELECT_DEFAULT if is_select else BranchKind.DEFAULT,
                        line=node_line(clause),
                        excerpt=DEFAULT_MARKER,
                        children=self._extract_list(_clause_statements(clause)),
                        origin_line=line,
                        origin_excerpt=excerpt,
                    )
                )
            else:
                branch.children.append(
                    Branch(
                        kind=BranchKind.SELECT_CASE if is_select else BranchKind.CASE,
                        line=node_line(clause),
                        excerpt=self._case_header(clause),
                        children=self._extract_list(_clause_statements(clause)),
                    )
                )
        return branch

    def _extract_block(self, block: Node | None) -> list[Branch]:
        if block is None:
            return []
        return self._extract_list(_statements(block))

    def _condition(self, if_node: Node) -> str:
        condition = if_node.child_by_field_name("condition")
        return squash(self._text(condition)) if condition is not None else ""

    def _case_header(self, clause: Node) -> str:
        """Text between the `case` keyword and the clause colon."""
        keyword = _first_token(clause, "case")
        colon = _first_token(clause, ":")
        if keyword is None or colon is None:
            return ""
        return self._span(keyword.end_byte, colon.start_byte)

    def _text(self, node: Node) -> str:
        return node_text(self.source, node)

    def _span(self, start: int, end: int) -> str:
        return squash(self.source[start:end].decode("utf-8", errors="replace"))


def _first_token(node: Node, token: str) -> Node | None:
    for child in node.children:
        if child.type == token:
            return child
    return None


def _flatten(nodes: list[Node]) -> Iterator[Node]:
    """Yield statements, looking through statement_list wrappers and skipping comments."""
    for child in nodes:
        if child.type == "statement_list":
            yield from _flatten(child.named_children)
        elif child.type != "comment":
            yield child


def _statements(block: Node) -> Iterator[Node]:
    """Statements of a ``{ ... }`` block."""
    return _flatten(block.named_children)


def _clause_statements(clause: Node) -> Iterator[Node]:
    """Statements of a case clause: everything after its colon."""
    after_colon: list[Node] = []
    seen_colon = False
    for child in clause.children:
        if seen_colon:
            if child.is_named:
                after_colon.append(child)
        elif child.type == ":":
            seen_colon = True
    return _flatten(after_colon)
