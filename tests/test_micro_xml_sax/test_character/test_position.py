"""Tests for offset to line/column resolution."""

import pytest

from micro_xml_sax.character.position import DocumentPosition, locate


class TestLocate:
    """Tests for locate()."""

    def test_first_line(self):
        """Test offsets on the first line."""
        assert locate("abc", 0) == DocumentPosition(1, 1, 0)
        assert locate("abc", 2) == DocumentPosition(1, 3, 2)

    def test_end_of_document(self):
        """Test that the end offset is addressable."""
        assert locate("abc", 3).column == 4
        assert locate("", 0) == DocumentPosition(1, 1, 0)

    @pytest.mark.parametrize("offset,line,column", [
        (2, 2, 1),   # after "\n"
        (3, 2, 2),   # the "\r" of "\r\n"
        (5, 3, 1),   # after "\r\n"
        (7, 4, 1),   # after lone "\r"
    ])
    def test_all_terminators(self, offset, line, column):
        """Test "\\n", "\\r\\n" and lone "\\r" each count once."""
        document = "a\nb\r\nc\rd"
        position = locate(document, offset)
        assert (position.line, position.column) == (line, column)

    def test_split_crlf_counts_as_lone_cr(self):
        """Test an offset between "\\r" and "\\n"."""
        position = locate("a\nb\r\nc", 4)
        assert (position.line, position.column) == (3, 1)

    @pytest.mark.parametrize("offset", [-1, 4])
    def test_offset_out_of_range(self, offset):
        """Test offsets outside the document."""
        with pytest.raises(ValueError, match="outside document"):
            locate("abc", offset)


class TestDocumentPosition:
    """Tests for DocumentPosition."""

    def test_validation(self):
        """Test DocumentPosition validation for invalid values."""
        with pytest.raises(ValueError, match="Line number must be >= 1"):
            DocumentPosition(line=0, column=1, offset=0)
        with pytest.raises(ValueError, match="Column number must be >= 1"):
            DocumentPosition(line=1, column=0, offset=0)
        with pytest.raises(ValueError, match="Offset must be >= 0"):
            DocumentPosition(line=1, column=1, offset=-1)

    def test_str(self):
        """Test the line:column rendering."""
        assert str(DocumentPosition(3, 7, 20)) == "3:7"
