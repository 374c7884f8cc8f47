"""Tests for the cursor-based parser primitives."""

from __future__ import annotations

from ci_baseline.parsing import ParseError, ParseMessages, ParserBase


class TestCursor:
    """Test cursor movement and position bookkeeping."""

    def test_columns_advance_per_character(self):
        """Should count one column per character."""
        parser = ParserBase("abc", "test")
        parser.next()
        parser.next()
        loc = parser.cur_loc()
        assert (loc.row, loc.column, loc.offset) == (1, 3, 2)

    def test_tab_advances_to_next_tab_stop(self):
        """Should move to the column after the next multiple of eight."""
        parser = ParserBase("ab\tc", "test")
        parser.match_while(lambda ch: ch != "c")
        assert parser.cur_loc().column == 9

    def test_tab_at_tab_stop(self):
        """Should move a full tab width from column 9."""
        parser = ParserBase("12345678\tx", "test")
        parser.match_while(lambda ch: ch != "x")
        assert parser.cur_loc().column == 17

    def test_newline_resets_column(self):
        """Should start a new row after each line ending."""
        parser = ParserBase("ab\ncd\r\nef\rgh", "test")
        parser.match_while(lambda ch: ch != "g")
        loc = parser.cur_loc()
        assert loc.row == 4
        assert loc.column == 1
        assert loc.start_of_line == loc.offset

    def test_cur_at_eof(self):
        """Should return an empty string at end of input."""
        parser = ParserBase("", "test")
        assert parser.at_eof()
        assert parser.cur() == ""
        assert parser.next() == ""

    def test_skip_line(self):
        """Should consume the rest of the line and its ending."""
        parser = ParserBase("# comment\r\nnext", "test")
        parser.skip_line()
        assert parser.cur() == "n"
        assert parser.cur_loc().row == 2


class TestMatching:
    """Test matching helpers."""

    def test_match_while(self):
        """Should consume the longest matching run."""
        parser = ParserBase("zlib-ng:x64", "test")
        assert parser.match_while(ParserBase.is_package_name_char) == "zlib-ng"
        assert parser.cur() == ":"

    def test_try_match_keyword(self):
        """Should consume a keyword at a word boundary."""
        parser = ParserBase("skip # why", "test")
        assert parser.try_match_keyword("skip")
        assert parser.cur() == " "

    def test_try_match_keyword_requires_word_boundary(self):
        """Should not move when the keyword is a prefix of a longer word."""
        parser = ParserBase("skipped", "test")
        assert not parser.try_match_keyword("skip")
        assert parser.cur_loc().offset == 0

    def test_try_match_keyword_allows_punctuation_after(self):
        """Should accept a keyword followed by non-word punctuation."""
        parser = ParserBase("fail#", "test")
        assert parser.try_match_keyword("fail")
        assert parser.cur() == "#"

    def test_require_character(self):
        """Should consume the expected character."""
        parser = ParserBase(":x", "test")
        assert parser.require_character(":")
        assert parser.cur() == "x"
        assert parser.extract_messages().good()


class TestErrors:
    """Test error recording."""

    def test_require_character_records_error(self):
        """Should record an error and jump to end of input."""
        parser = ParserBase("ab", "origin")
        parser.next()
        assert not parser.require_character("=")
        assert parser.at_eof()
        error = parser.extract_messages().error
        assert error.message == "expected '=' here"
        assert (error.row, error.column) == (1, 2)

    def test_only_first_error_is_kept(self):
        """Should ignore errors after the first."""
        parser = ParserBase("abc", "test")
        parser.add_error("first")
        parser.add_error("second")
        assert parser.extract_messages().error.message == "first"

    def test_error_at_explicit_location(self):
        """Should report the given location rather than the cursor."""
        parser = ParserBase("line one\nline two", "test")
        parser.match_while(lambda ch: ch != "\n")
        parser.next()
        loc = parser.cur_loc()
        parser.match_while(lambda ch: ch != "t")
        parser.add_error("here", loc)
        error = parser.extract_messages().error
        assert (error.row, error.column, error.line) == (2, 1, "line two")

    def test_extract_messages_resets(self):
        """Should hand over the messages and start fresh."""
        parser = ParserBase("x", "test")
        parser.add_error("oops")
        messages = parser.extract_messages()
        assert not messages.good()
        assert parser.extract_messages().good()


class TestParseError:
    """Test diagnostic rendering."""

    def test_format(self):
        """Should render header, expression and caret lines."""
        error = ParseError(origin="f.txt", row=3, column=5, caret_col=4, line="abcdefg", message="bad")
        assert error.format() == (
            "f.txt:3:5: error: bad\n"
            "    on expression: abcdefg\n"
            "                       ^\n"
        )

    def test_format_copies_tabs(self):
        """Should reproduce tabs before the caret."""
        error = ParseError(origin="f", row=1, column=10, caret_col=2, line="\t\tx", message="m")
        assert error.format().splitlines()[2] == " " * 19 + "\t\t^"

    def test_str_is_header_only(self):
        error = ParseError(origin="f", row=1, column=1, caret_col=0, line="x", message="m")
        assert str(error) == "f:1:1: error: m"

    def test_messages_good(self):
        assert ParseMessages().good()
        assert not ParseMessages().any_warnings
