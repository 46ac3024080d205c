"""Tests for the board text format."""

from pathlib import Path

import pytest
from lifeboard.core.board_file import (
    ALIVE_CHAR,
    DEAD_CHAR,
    format_board_text,
    parse_board_text,
    read_board_file,
)
from lifeboard.core.cell import BorderPolicy, Cell
from lifeboard.core.errors import ParseError

BOARDS = Path(__file__).parent.parent / "fixtures" / "boards"

D, A = Cell.DEAD, Cell.ALIVE


class TestParseBoardText:
    """Test cases for parsing board text."""

    def test_characters(self):
        """Test the documented cell characters."""
        assert ALIVE_CHAR == "#"
        assert DEAD_CHAR == "_"

    def test_parse_without_header(self):
        """Test parsing rows with no header line."""
        rows, border = parse_board_text("#_\n_#\n")

        assert rows == [[A, D], [D, A]]
        assert border is None

    def test_parse_with_header(self):
        """Test a border keyword on the first line."""
        rows, border = parse_board_text("solid\n#\n")

        assert rows == [[A]]
        assert border is BorderPolicy.ALIVE

    def test_trailing_blank_lines_ignored(self):
        """Test that blank lines at the end are not grid rows."""
        rows, _ = parse_board_text("__\n__\n\n\n   \n")
        assert len(rows) == 2

    def test_missing_trailing_newline(self):
        """Test text without a final newline."""
        rows, _ = parse_board_text("_#\n#_")
        assert rows == [[D, A], [A, D]]

    def test_blank_line_inside_grid(self):
        """Test that a blank line between rows is an error."""
        with pytest.raises(ParseError) as excinfo:
            parse_board_text("___\n\n___\n___\n")

        assert excinfo.value.line_number == 2
        assert excinfo.value.line == ""

    def test_ragged_rows(self):
        """Test rows of differing length."""
        with pytest.raises(ParseError) as excinfo:
            parse_board_text("___\n__\n___\n")

        assert excinfo.value.line_number == 2
        assert excinfo.value.line == "__"
        assert "line 2" in str(excinfo.value)

    def test_unknown_character(self):
        """Test a row holding an unrecognized character."""
        with pytest.raises(ParseError) as excinfo:
            parse_board_text("__\n_O\n")

        assert excinfo.value.line_number == 2
        assert excinfo.value.line == "_O"

    def test_line_numbers_count_header(self):
        """Test that line numbers refer to the text, header included."""
        with pytest.raises(ParseError) as excinfo:
            parse_board_text("wrap\n__\n_x\n")

        assert excinfo.value.line_number == 3

    def test_not_square(self):
        """Test equal-length rows that do not form a square."""
        with pytest.raises(ParseError) as excinfo:
            parse_board_text("___\n___\n")

        assert excinfo.value.line_number == 2
        assert "square" in str(excinfo.value)

    @pytest.mark.parametrize("text", ["", "\n\n", "dead\n", "loop\n\n"])
    def test_no_rows(self, text):
        """Test text without any grid rows."""
        with pytest.raises(ParseError) as excinfo:
            parse_board_text(text)

        assert excinfo.value.line_number == 0

    def test_parse_error_is_value_error(self):
        """Test that ParseError can be caught as ValueError."""
        with pytest.raises(ValueError):
            parse_board_text("#_\n")


class TestReadBoardFile:
    """Test cases for reading board files."""

    def test_glider(self):
        """Test the glider fixture."""
        rows, border = read_board_file(BOARDS / "glider.txt")

        assert border is None
        assert len(rows) == 5
        assert all(len(row) == 5 for row in rows)
        alive = {(r, c) for r, row in enumerate(rows) for c, cell in enumerate(row) if cell is A}
        assert alive == {(1, 2), (2, 3), (3, 1), (3, 2), (3, 3)}

    def test_header_and_trailing_blank_lines(self):
        """Test a fixture with a header line and blank lines at the end."""
        rows, border = read_board_file(BOARDS / "block_wrap.txt")

        assert border is BorderPolicy.WRAP
        assert rows == [
            [D, D, D, D],
            [D, A, A, D],
            [D, A, A, D],
            [D, D, D, D],
        ]

    def test_crlf_line_endings(self):
        """Test a fixture with Windows line endings."""
        rows, border = read_board_file(str(BOARDS / "blinker_crlf.txt"))

        assert border is BorderPolicy.ALIVE
        assert rows == [[D, A, D], [D, A, D], [D, A, D]]

    def test_ragged_fixture(self):
        """Test the ragged fixture reports the short row."""
        with pytest.raises(ParseError) as excinfo:
            read_board_file(BOARDS / "ragged.txt")

        assert excinfo.value.line_number == 4
        assert excinfo.value.line == "____"

    def test_bad_character_fixture(self):
        """Test the fixture with an unknown character."""
        with pytest.raises(ParseError) as excinfo:
            read_board_file(BOARDS / "bad_char.txt")

        assert excinfo.value.line_number == 2

    def test_not_square_fixture(self):
        """Test the fixture with three rows of four cells."""
        with pytest.raises(ParseError) as excinfo:
            read_board_file(BOARDS / "not_square.txt")

        assert excinfo.value.line_number == 3

    def test_missing_file(self, tmp_path):
        """Test that file errors propagate unchanged."""
        with pytest.raises(FileNotFoundError):
            read_board_file(tmp_path / "missing.txt")

    def test_undecodable_bytes(self, tmp_path):
        """Test that an invalid UTF-8 byte is reported on its line."""
        path = tmp_path / "binary.txt"
        path.write_bytes(b"wrap\n__\n_\xfe\n")

        with pytest.raises(ParseError) as excinfo:
            read_board_file(path)

        assert excinfo.value.line_number == 3
        assert excinfo.value.line == "_\ufffd"


class TestFormatBoardText:
    """Test cases for formatting board text."""

    def test_format(self):
        """Test formatting rows of cells."""
        assert format_board_text([[A, D], [D, D]]) == "#_\n__\n"

    def test_format_accepts_ints_and_bools(self):
        """Test that any truthy value is alive."""
        assert format_board_text([[1, 0], [False, True]]) == "#_\n_#\n"

    def test_format_with_header(self):
        """Test emitting a border header."""
        assert format_board_text([[A]], BorderPolicy.WRAP) == "wrap\n#\n"

    def test_parse_formatted_text(self):
        """Test that formatted text parses back to the same rows and border."""
        rows = [[A, D, A], [D, D, D], [A, A, D]]

        parsed_rows, border = parse_board_text(format_board_text(rows, BorderPolicy.ALIVE))

        assert parsed_rows == rows
        assert border is BorderPolicy.ALIVE
