"""
Parser for CI baseline files.

A baseline file lists, one per line, ports whose CI build on a triplet is
expected to fail or must be skipped::

    # comments run to the end of the line
    apr:arm64-windows=fail
    catch-classic:x64-linux   = skip   # whitespace around '=' is fine

The first malformed line aborts the whole parse: no entries are returned,
only a single diagnostic.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

from ci_baseline.models.base import CiBaselineState, Triplet, parse_triplet_name
from ci_baseline.models.baseline import CiBaselineLine
from ci_baseline.parsing.messages import ParseError, ParseMessages
from ci_baseline.parsing.parser_base import ParserBase
from ci_baseline.utils.logging import get_logger

logger = get_logger("ci_baseline", parent="parsing")

MSG_EXPECTED_PORT_NAME = "expected a port name here"
MSG_EXPECTED_TRIPLET_NAME = "expected a triplet name here"
MSG_EXPECTED_FAIL_OR_SKIP = "expected 'fail' or 'skip' here"
MSG_UNKNOWN_BASELINE_CONTENT = "unrecognizable baseline entry; expected 'port:triplet=(fail|skip)'"


class BaselineParseError(Exception):
    """Raised when a baseline file cannot be parsed."""

    def __init__(self, error: ParseError) -> None:
        self.error = error
        super().__init__(str(error))


class CiBaselineParser(ParserBase):
    """Recursive-descent parser for ``port:triplet=(fail|skip)`` lines."""

    def parse(self) -> list[CiBaselineLine]:
        """
        Parse every entry in the input.

        Returns:
            Entries in file order, or an empty list if any line is malformed.
            Check ``messages`` for the error.
        """
        result: list[CiBaselineLine] = []
        while True:
            self.skip_whitespace()
            if self.at_eof():
                return result

            if self.cur() == "#":
                self.skip_line()
                continue

            line = self.parse_line()
            if line is None:
                return []
            result.append(line)

    def parse_line(self) -> Optional[CiBaselineLine]:
        port_name = self.parse_port_name()
        if port_name is None or not self.require_character(":"):
            return None

        triplet = self.parse_triplet()
        if triplet is None:
            return None

        self.skip_tabs_spaces()
        if not self.require_character("="):
            return None

        self.skip_tabs_spaces()
        state = self.parse_state()
        if state is None or not self.parse_line_end():
            return None

        return CiBaselineLine(port_name=port_name, triplet=triplet, state=state)

    def parse_port_name(self) -> Optional[str]:
        if not self.is_lower_alpha(self.cur()):
            self.add_error(MSG_EXPECTED_PORT_NAME)
            return None
        return self.match_while(self.is_package_name_char)

    def parse_triplet(self) -> Optional[Triplet]:
        loc = self.cur_loc()
        triplet = parse_triplet_name(self.match_while(self.is_package_name_char))
        if triplet is None:
            self.add_error(MSG_EXPECTED_TRIPLET_NAME, loc)
        return triplet

    def parse_state(self) -> Optional[CiBaselineState]:
        for state in (CiBaselineState.FAIL, CiBaselineState.SKIP):
            if self.try_match_keyword(state.value):
                return state
        self.add_error(MSG_EXPECTED_FAIL_OR_SKIP)
        return None

    def parse_line_end(self) -> bool:
        """Accept trailing blanks followed by a comment, a line ending or end of input."""
        self.skip_tabs_spaces()
        ch = self.cur()
        if ch == "#":
            self.skip_line()
        elif self.is_lineend(ch):
            self.skip_newline()
        elif not self.at_eof():
            self.add_error(MSG_UNKNOWN_BASELINE_CONTENT)
            return False
        return True


def parse_ci_baseline(text: str, origin: str) -> tuple[list[CiBaselineLine], ParseMessages]:
    """
    Parse the text of a baseline file.

    Args:
        text: Full contents of the baseline file.
        origin: Label used to prefix diagnostics, usually the file name.

    Returns:
        Tuple of (entries, messages). On error, entries is empty and
        ``messages.error`` describes the first problem found.
    """
    parser = CiBaselineParser(text, origin)
    lines = parser.parse()
    messages = parser.extract_messages()
    if messages.error is not None:
        logger.debug("Baseline rejected", origin=origin, row=messages.error.row, column=messages.error.column)
        return [], messages

    logger.debug("Parsed baseline", origin=origin, entries=len(lines))
    return lines, messages


def load_ci_baseline(path: Union[str, Path]) -> list[CiBaselineLine]:
    """
    Read and parse a baseline file.

    Args:
        path: Path to the baseline file (UTF-8).

    Returns:
        Parsed entries in file order.

    Raises:
        FileNotFoundError: If the file does not exist.
        BaselineParseError: If the file is malformed.
    """
    path = Path(path)
    text = path.read_text(encoding="utf-8")
    lines, messages = parse_ci_baseline(text, str(path))
    if messages.error is not None:
        raise BaselineParseError(messages.error)
    return lines
