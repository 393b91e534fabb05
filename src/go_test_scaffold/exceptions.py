"""Error taxonomy for the scaffold pipeline.

The extractor, grouper and filters never raise for a well-formed tree;
every error below originates in a collaborator (reading, parsing,
rendering, writing) and carries enough context to be actionable.
"""

from __future__ import annotations


class ScaffoldError(Exception):
    """Base class for all go-test-scaffold errors."""


class InputError(ScaffoldError):
    """Source file missing or unreadable. Fatal for the whole run."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")


class GoParseError(ScaffoldError):
    """Malformed Go source. Fatal for that file only."""

    def __init__(self, path: str, message: str, line: int = 0, column: int = 0) -> None:
        self.path = path
        self.line = line
        self.column = column
        location = f"{path}:{line}:{column}" if line else path
        super().__init__(f"{location}: {message}")


class RenderError(ScaffoldError):
    """Scaffold text could not be produced for a group."""

    def __init__(self, group: str, message: str) -> None:
        self.group = group
        label = group or "<free functions>"
        super().__init__(f"render {label}: {message}")


class OutputWriteError(ScaffoldError):
    """Generated file could not be written."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"write {path}: {reason}")
