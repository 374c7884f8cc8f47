"""
Cursor-based building blocks for hand-written parsers.

ParserBase walks a string one character at a time while keeping row and
column bookkeeping, and records at most one error. Once an error is
recorded the cursor jumps to the end of the input so that every further
rule sees end-of-file and the caller's loop stops.
"""

from __future__ import annotations

from typing import Callable, Optional

from ci_baseline.parsing.messages import ParseError, ParseMessages, SourceLoc

TAB_WIDTH = 8


class ParserBase:
    """Character cursor over ``text`` with positional error reporting."""

    def __init__(self, text: str, origin: str) -> None:
        self._text = text
        self._origin = origin
        self._pos = 0
        self._start_of_line = 0
        self._row = 1
        self._column = 1
        self._messages = ParseMessages()

    @staticmethod
    def is_lower_alpha(ch: str) -> bool:
        return "a" <= ch <= "z"

    @staticmethod
    def is_ascii_digit(ch: str) -> bool:
        return "0" <= ch <= "9"

    @staticmethod
    def is_package_name_char(ch: str) -> bool:
        return ParserBase.is_lower_alpha(ch) or ParserBase.is_ascii_digit(ch) or ch == "-"

    @staticmethod
    def is_word_char(ch: str) -> bool:
        return ch.isascii() and (ch.isalnum() or ch == "_")

    @staticmethod
    def is_tab_or_space(ch: str) -> bool:
        return ch in (" ", "\t")

    @staticmethod
    def is_whitespace(ch: str) -> bool:
        return ch in (" ", "\t", "\r", "\n")

    @staticmethod
    def is_lineend(ch: str) -> bool:
        return ch in ("\r", "\n")

    def cur(self) -> str:
        """Current character, or the empty string at end of input."""
        if self._pos < len(self._text):
            return self._text[self._pos]
        return ""

    def at_eof(self) -> bool:
        return self._pos >= len(self._text)

    def cur_loc(self) -> SourceLoc:
        return SourceLoc(self._pos, self._start_of_line, self._row, self._column)

    def next(self) -> str:
        """Advance past the current character and return the new current one."""
        if self.at_eof():
            return ""

        ch = self._text[self._pos]
        self._pos += 1
        if ch == "\n" or (ch == "\r" and self.cur() != "\n"):
            self._row += 1
            self._column = 1
            self._start_of_line = self._pos
        elif ch == "\t":
            self._column = ((self._column + TAB_WIDTH - 1) // TAB_WIDTH) * TAB_WIDTH + 1
        elif ch != "\r":
            self._column += 1

        return self.cur()

    def match_while(self, predicate: Callable[[str], bool]) -> str:
        """Consume the longest run of characters satisfying ``predicate``."""
        start = self._pos
        while not self.at_eof() and predicate(self.cur()):
            self.next()
        return self._text[start:self._pos]

    def skip_whitespace(self) -> None:
        self.match_while(self.is_whitespace)

    def skip_tabs_spaces(self) -> None:
        self.match_while(self.is_tab_or_space)

    def skip_newline(self) -> None:
        """Consume one line ending (``\\n``, ``\\r\\n`` or ``\\r``)."""
        if self.cur() == "\r":
            self.next()
        if self.cur() == "\n":
            self.next()

    def skip_line(self) -> None:
        """Consume the rest of the current line including its line ending."""
        self.match_while(lambda ch: not self.is_lineend(ch))
        self.skip_newline()

    def skip_to_eof(self) -> None:
        self.match_while(lambda ch: True)

    def try_match_keyword(self, keyword: str) -> bool:
        """
        Consume ``keyword`` if it appears at the cursor as a whole word.

        The cursor does not move when the keyword is absent or is only the
        prefix of a longer word.
        """
        end = self._pos + len(keyword)
        if self._text[self._pos:end] != keyword:
            return False
        if end < len(self._text) and self.is_word_char(self._text[end]):
            return False
        for _ in keyword:
            self.next()
        return True

    def require_character(self, ch: str) -> bool:
        """Consume ``ch``, or record an error at the cursor and return False."""
        if self.cur() == ch:
            self.next()
            return True
        self.add_error(f"expected '{ch}' here")
        return False

    def add_error(self, message: str, loc: Optional[SourceLoc] = None) -> None:
        """
        Record an error at ``loc`` (default: the cursor).

        Only the first error is kept. Parsing then skips to end of input.
        """
        if self._messages.error is None:
            if loc is None:
                loc = self.cur_loc()
            line_end = loc.start_of_line
            while line_end < len(self._text) and not self.is_lineend(self._text[line_end]):
                line_end += 1
            caret_col = loc.offset - loc.start_of_line
            if loc.offset >= len(self._text) and caret_col > 0:
                # At end of input the caret points at the last character.
                caret_col -= 1
            self._messages.error = ParseError(
                origin=self._origin,
                row=loc.row,
                column=loc.column,
                caret_col=caret_col,
                line=self._text[loc.start_of_line:line_end],
                message=message,
            )

        self.skip_to_eof()

    def extract_messages(self) -> ParseMessages:
        """Hand the collected diagnostics to the caller and reset them."""
        messages = self._messages
        self._messages = ParseMessages()
        return messages
