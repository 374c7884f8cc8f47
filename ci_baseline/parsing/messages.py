"""
Positional parse diagnostics.

A ParseError remembers where in the input it happened and renders itself
with the offending line and a caret under the failing column.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

# Leads the echoed source line; the caret line is padded to the same width.
EXPRESSION_PREFIX = "    on expression: "


@dataclass(frozen=True)
class SourceLoc:
    """A cursor position in parsed text."""

    offset: int
    start_of_line: int
    row: int
    column: int


@dataclass(frozen=True)
class ParseError:
    """
    A fatal parse error.

    Attributes:
        origin: Label of the input, usually a file name.
        row: 1-based line number.
        column: 1-based column, with tabs expanded to 8-column stops.
        caret_col: Number of characters of ``line`` drawn before the caret.
        line: The text of the offending line, without its line ending.
        message: Human readable description of what was expected.
    """

    origin: str
    row: int
    column: int
    caret_col: int
    line: str
    message: str

    def format(self) -> str:
        """Render the error with the offending line and a caret."""
        alignment = "".join("\t" if ch == "\t" else " " for ch in self.line[: self.caret_col])
        return (
            f"{self.origin}:{self.row}:{self.column}: error: {self.message}\n"
            f"{EXPRESSION_PREFIX}{self.line}\n"
            f"{' ' * len(EXPRESSION_PREFIX)}{alignment}^\n"
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "origin": self.origin,
            "row": self.row,
            "column": self.column,
            "line": self.line,
            "message": self.message,
        }

    def __str__(self) -> str:
        return f"{self.origin}:{self.row}:{self.column}: error: {self.message}"


@dataclass
class ParseMessages:
    """Diagnostics produced by a single parse."""

    error: Optional[ParseError] = None
    warnings: list[ParseError] = field(default_factory=list)

    def good(self) -> bool:
        """Check that no error occurred."""
        return self.error is None

    @property
    def any_warnings(self) -> bool:
        return bool(self.warnings)
