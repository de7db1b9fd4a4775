"""
Unit tests for reading-order reconstruction (smartocr/layout/).

Tests the layout components:
- LineClassifier
- BlockSegmenter
- BlockReorderer
- TextPipeline
"""

import pytest

from smartocr.layout.classifier import LineClassifier, split_lines
from smartocr.layout.pipeline import ReorderStrategy, TextPipeline
from smartocr.layout.reorderer import (
    CONTENT_ORDER,
    FOOTER_ORDER,
    HEADER_ORDER,
    TITLE_ORDER,
    BlockReorderer,
    block_order,
)
from smartocr.layout.segmenter import BlockSegmenter
from smartocr.models import ClassifiedLine, ContentBlock, LineType

# =============================================================================
# LineClassifier Tests
# =============================================================================


class TestLineClassifier:
    """Tests for LineClassifier."""

    @pytest.fixture
    def classifier(self):
        """Create a classifier with the default rule table."""
        return LineClassifier()

    def test_page_number(self, classifier):
        """Page markers are footer material with the highest priority."""
        line = classifier.classify("Page 3", index=7)
        assert line.index == 7
        assert line.line_type is LineType.PAGE_NUMBER
        assert line.priority == 100
        assert line.is_footer
        assert not line.is_header

    def test_all_caps_title(self, classifier):
        """All-caps lines of four or more characters are titles."""
        line = classifier.classify("REPORT TITLE")
        assert line.line_type is LineType.TITLE
        assert line.priority == 1
        assert line.is_header

    def test_short_caps_is_content(self, classifier):
        """Three capitals are too short for a title."""
        assert classifier.classify("ABC").line_type is LineType.CONTENT

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("Subject: Quarterly results", LineType.HEADER),
            ("To: Alice", LineType.HEADER),
            ("Report on the findings", LineType.DOCUMENT_TYPE),
            ("© 2024", LineType.COPYRIGHT),
            ("Draft agenda", LineType.STATUS),
            ("1. First item", LineType.NUMBERED_LIST),
            ("a) option", LineType.LETTERED_LIST),
            ("- bullet", LineType.BULLET_LIST),
            ("• point", LineType.BULLET_LIST),
            ("Therefore we conclude", LineType.CONCLUSION),
            ("In conclusion, it works", LineType.CONCLUSION),
            ("Just some text.", LineType.CONTENT),
        ],
    )
    def test_line_types(self, classifier, text, expected):
        """Each rule in the table assigns its line type."""
        assert classifier.classify(text).line_type is expected

    def test_header_can_be_footer(self, classifier):
        """Footer patterns are checked on every line, independent of the type."""
        line = classifier.classify("Date: 03/06/2025")
        assert line.line_type is LineType.HEADER
        assert line.is_header
        assert line.is_footer

    def test_title_flagged_as_status(self, classifier):
        """An all-caps status marker is a title that is also footer material."""
        line = classifier.classify("CONFIDENTIAL")
        assert line.line_type is LineType.TITLE
        assert line.is_footer

    def test_content_defaults(self, classifier):
        """Unmatched lines are content with priority 0 and no flags."""
        line = classifier.classify("Just some text.")
        assert line.priority == 0
        assert not line.is_header
        assert not line.is_footer

    def test_text_is_trimmed(self, classifier):
        """Surrounding whitespace is ignored."""
        line = classifier.classify("  Page 3  ")
        assert line.text == "Page 3"
        assert line.line_type is LineType.PAGE_NUMBER

    def test_classify_lines_skips_blanks(self, classifier):
        """classify_lines drops blank lines and renumbers from 0."""
        lines = classifier.classify_lines("first\n\n   \n  second  \n")
        assert [(line.index, line.text) for line in lines] == [(0, "first"), (1, "second")]


class TestSplitLines:
    """Tests for split_lines."""

    def test_empty_text(self):
        """Empty text has no lines."""
        assert split_lines("") == []

    def test_indices_are_consecutive(self):
        """Indices count only non-empty lines."""
        lines = split_lines("a\n\nb\nc")
        assert [line.index for line in lines] == [0, 1, 2]


# =============================================================================
# BlockSegmenter Tests
# =============================================================================


def _classify(text):
    return LineClassifier().classify_lines(text)


class TestBlockSegmenter:
    """Tests for BlockSegmenter."""

    def test_title_stands_alone(self):
        """A title opens a block and the next line opens another."""
        blocks = BlockSegmenter().segment(_classify("REPORT TITLE\nBody.\nPage 3"))
        assert [b.text for b in blocks] == ["REPORT TITLE", "Body.", "Page 3"]

    def test_document_type_starts_block(self):
        """Document-type lines open a block and keep following content."""
        blocks = BlockSegmenter().segment(_classify("intro text\nMemo to staff\nmore text"))
        assert [b.text for b in blocks] == ["intro text", "Memo to staff\nmore text"]

    def test_content_after_footer_starts_block(self):
        """Body text after footer material does not join the footer block."""
        blocks = BlockSegmenter().segment(_classify("Page 3\n© 2024\nBody line one."))
        assert [b.text for b in blocks] == ["Page 3", "© 2024", "Body line one."]

    def test_length_jump(self):
        """A sharp change in line length splits blocks."""
        text = "short line\n" + "a long line of running text " * 3
        blocks = BlockSegmenter().segment(_classify(text))
        assert len(blocks) == 2

    def test_custom_length_jump(self):
        """The length threshold is configurable."""
        blocks = BlockSegmenter(length_jump=2).segment(_classify("ab\nabcdef"))
        assert len(blocks) == 2

    def test_uniform_text_single_block(self):
        """Lines of similar plain content stay together."""
        blocks = BlockSegmenter().segment(_classify("one\ntwo\nthree"))
        assert len(blocks) == 1
        assert len(blocks[0]) == 3

    def test_lossless(self):
        """Concatenated blocks reproduce the input lines."""
        lines = _classify("REPORT TITLE\nSubject: x\nBody\n1. item\nPage 2\n© 2024\nmore")
        blocks = BlockSegmenter().segment(lines)
        assert [line for block in blocks for line in block.lines] == lines

    def test_empty_input(self):
        """No lines, no blocks."""
        assert BlockSegmenter().segment([]) == []


# =============================================================================
# BlockReorderer Tests
# =============================================================================


def _reorder(text):
    return BlockReorderer().reorder(BlockSegmenter().segment(_classify(text)))


class TestBlockReorderer:
    """Tests for BlockReorderer."""

    def test_block_order_keys(self):
        """Block keys follow the role of the first line."""
        title = ClassifiedLine(0, "TITLE", LineType.TITLE, 1, is_header=True)
        header = ClassifiedLine(1, "To: Bob", LineType.HEADER, 1, is_header=True)
        body = ClassifiedLine(2, "text")
        footer = ClassifiedLine(3, "Page 1", LineType.PAGE_NUMBER, 100, is_footer=True)
        assert block_order(ContentBlock((title,))) == TITLE_ORDER
        assert block_order(ContentBlock((header,))) == HEADER_ORDER
        assert block_order(ContentBlock((body, footer))) == CONTENT_ORDER
        assert block_order(ContentBlock((footer, body))) == FOOTER_ORDER

    def test_empty_block_rejected(self):
        """ContentBlock requires at least one line."""
        with pytest.raises(ValueError):
            ContentBlock(())

    def test_canonical_order_unchanged(self):
        """Text already in reading order is reported unchanged."""
        result = _reorder("REPORT TITLE\nBody line one.\nPage 3\n© 2024")
        assert not result.changed
        assert len(result.blocks) == 4

    def test_scrambled_input(self):
        """Title moves first and footer material moves last."""
        result = _reorder("Page 3\n© 2024\nBody line one.\nREPORT TITLE")
        assert result.changed
        assert result.text == "REPORT TITLE\nBody line one.\nPage 3\n© 2024"

    def test_equal_keys_keep_input_order(self):
        """Two footer blocks keep their relative order."""
        result = _reorder("Body line one.\n© 2024\nREPORT TITLE\nPage 3")
        assert result.text == "REPORT TITLE\nBody line one.\n© 2024\nPage 3"

    def test_idempotent(self):
        """Reordering already reordered text changes nothing."""
        first = _reorder("Page 3\n© 2024\nBody line one.\nREPORT TITLE")
        second = _reorder(first.text)
        assert not second.changed
        assert second.text == first.text

    def test_permutation(self):
        """Every input line appears exactly once in the output."""
        lines = _classify("Page 3\nTo: Bob\nBody\nREPORT TITLE\n- item\n© 2024")
        result = BlockReorderer().reorder(BlockSegmenter().segment(lines))
        assert sorted(line.index for line in result.lines) == list(range(len(lines)))


# =============================================================================
# TextPipeline Tests
# =============================================================================


class TestTextPipeline:
    """Tests for TextPipeline."""

    def test_generic_reorder(self):
        """A trailing title is moved to the front."""
        result = TextPipeline().process("Body text.\nREPORT TITLE")
        assert result.text == "REPORT TITLE\nBody text."
        assert result.strategy is ReorderStrategy.BLOCKS
        assert result.reordered
        assert result.family is None

    def test_unchanged_keeps_spacing(self):
        """When nothing moves the text is returned as read."""
        text = "Plain   text here\nsecond line"
        result = TextPipeline().process(text)
        assert result.text == text
        assert result.strategy is ReorderStrategy.NONE
        assert result.line_count == 2

    def test_reorder_disabled(self):
        """reorder_lines=False leaves line order alone."""
        result = TextPipeline(reorder_lines=False).process("Body text.\nREPORT TITLE")
        assert result.text == "Body text.\nREPORT TITLE"
        assert not result.reordered

    def test_general_cleanup_opt_in(self):
        """General cleanup only runs when enabled."""
        assert TextPipeline().process("T he cat sat.").text == "T he cat sat."
        assert TextPipeline(general_cleanup=True).process("T he cat sat.").text == "The cat sat."

    def test_empty_text(self):
        """Empty input gives empty output."""
        result = TextPipeline().process("")
        assert result.text == ""
        assert result.line_count == 0
        assert result.structured_data is None

    def test_original_text_kept(self):
        """The result records the input it was built from."""
        result = TextPipeline().process("Body text.\nREPORT TITLE")
        assert result.original_text == "Body text.\nREPORT TITLE"
        assert result.processing_time_ms >= 0
