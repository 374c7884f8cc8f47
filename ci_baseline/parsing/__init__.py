"""Baseline file parsing with positional diagnostics."""

from ci_baseline.parsing.ci_baseline import (
    BaselineParseError,
    CiBaselineParser,
    load_ci_baseline,
    parse_ci_baseline,
)
from ci_baseline.parsing.messages import ParseError, ParseMessages, SourceLoc
from ci_baseline.parsing.parser_base import ParserBase

__all__ = [
    "BaselineParseError",
    "CiBaselineParser",
    "load_ci_baseline",
    "parse_ci_baseline",
    "ParseError",
    "ParseMessages",
    "ParserBase",
    "SourceLoc",
]
