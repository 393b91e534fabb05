"""Configuration management for go-test-scaffold."""

from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path


class Scope(StrEnum):
    FUNC = "func"
    STRUCT = "struct"
    ALL = "all"


class PathMode(StrEnum):
    ALL = "all"
    RETURN = "return"


@dataclass
class Config:
    """Options for one generation run, threaded explicitly through the pipeline."""

    # Which groups are emitted
    scope: Scope = Scope.ALL
    # Keep every branch, or only branches on a path to a return
    paths: PathMode = PathMode.ALL

    # Constructor heuristic: drop free functions named <prefix><TypeName>
    exclude_constructors: bool = False
    constructor_prefixes: tuple[str, ...] = ("New",)

    # Output
    output_dir: Path | None = None
    gofmt: bool = True
    pending_message: str = "not implemented"

    # JSONL run log (disabled when None)
    log_dir: Path | None = None

    def __post_init__(self) -> None:
        self.scope = Scope(self.scope)
        self.paths = PathMode(self.paths)
        self.constructor_prefixes = tuple(self.constructor_prefixes)
        if self.output_dir is not None:
            self.output_dir = Path(self.output_dir)
        if self.log_dir is not None:
            self.log_dir = Path(self.log_dir)

    @property
    def emits_free_functions(self) -> bool:
        return self.scope in (Scope.FUNC, Scope.ALL)

    @property
    def emits_types(self) -> bool:
        return self.scope in (Scope.STRUCT, Scope.ALL)

    def ensure_dirs(self) -> None:
        """Create output and log directories if configured."""
        if self.output_dir is not None:
            self.output_dir.mkdir(parents=True, exist_ok=True)
        if self.log_dir is not None:
            self.log_dir.mkdir(parents=True, exist_ok=True)
