"""Tests for inline span segmentation."""

import pytest

from noteclip.blocks import segment
from noteclip.models import Annotations, InlineMode, RichTextSpan

BOLD = Annotations(bold=True)
ITALIC = Annotations(italic=True)
BOLD_ITALIC = Annotations(bold=True, italic=True)
CODE = Annotations(code=True)


class TestScanOrder:
    """Tests for the default scan-order segmentation."""

    def test_empty_text(self):
        """Test that empty text yields one empty plain span."""
        assert segment("") == [RichTextSpan("")]

    def test_plain_text(self):
        """Test text without formatting."""
        assert segment("nothing to see") == [RichTextSpan("nothing to see")]

    def test_each_category(self):
        """Test every formatting category on its own."""
        assert segment("***both***") == [RichTextSpan("both", BOLD_ITALIC)]
        assert segment("**bold**") == [RichTextSpan("bold", BOLD)]
        assert segment("*star*") == [RichTextSpan("star", ITALIC)]
        assert segment("_under_") == [RichTextSpan("under", ITALIC)]
        assert segment("`code`") == [RichTextSpan("code", CODE)]
        assert segment("[text](https://example.com)") == [
            RichTextSpan("text", link="https://example.com")
        ]

    def test_gaps_become_plain_spans(self):
        """Test text before, between and after matches."""
        spans = segment("a **b** c *d* e")

        assert spans == [
            RichTextSpan("a "),
            RichTextSpan("b", BOLD),
            RichTextSpan(" c "),
            RichTextSpan("d", ITALIC),
            RichTextSpan(" e"),
        ]

    def test_unmatched_markers_stay_literal(self):
        """Test that lone markers are kept as text."""
        assert segment("2 * 3 = 6 and a `tick") == [RichTextSpan("2 * 3 = 6 and a `tick")]

    def test_covered_candidates_are_discarded(self):
        """Test that matches inside an accepted bold span are dropped."""
        spans = segment("**a `b` c**")

        assert spans == [RichTextSpan("a `b` c", BOLD)]

    def test_link_inside_bold_is_not_a_link(self):
        """Test that bold, scanned first, claims a link inside it."""
        assert segment("**[t](u)**") == [RichTextSpan("[t](u)", BOLD)]

    def test_link_text_is_not_rescanned(self):
        """Test that emphasis markers in link text stay literal."""
        spans = segment("see [a _b_ c](https://x.example) now")

        assert spans == [
            RichTextSpan("see "),
            RichTextSpan("a _b_ c", link="https://x.example"),
            RichTextSpan(" now"),
        ]

    def test_partial_overlap_keeps_leftmost(self):
        """Test that a candidate starting inside an emitted one is skipped."""
        spans = segment("*a `b* c`")

        assert spans == [RichTextSpan("a `b", ITALIC), RichTextSpan(" c`")]

    def test_italic_star_ignores_bold_markers(self):
        """Test that single-star italic does not match inside double stars."""
        assert segment("**x**") == [RichTextSpan("x", BOLD)]

    def test_underscores_inside_words(self):
        """Test that scan-order matches underscores even inside words."""
        spans = segment("snake_case_name")

        assert spans == [RichTextSpan("snake"), RichTextSpan("case", ITALIC), RichTextSpan("name")]

    def test_multiline_text(self):
        """Test that matches do not cross line breaks."""
        spans = segment("**open\nclose**")

        assert spans == [RichTextSpan("**open\nclose**")]


class TestDelimiterMode:
    """Tests for delimiter-stack segmentation."""

    def _segment(self, text):
        return segment(text, InlineMode.DELIMITER)

    def test_empty_text(self):
        """Test that empty text yields one empty plain span."""
        assert self._segment("") == [RichTextSpan("")]

    def test_simple_emphasis(self):
        """Test bold, italic and both."""
        assert self._segment("**b**") == [RichTextSpan("b", BOLD)]
        assert self._segment("*i*") == [RichTextSpan("i", ITALIC)]
        assert self._segment("_i_") == [RichTextSpan("i", ITALIC)]
        assert self._segment("***x***") == [RichTextSpan("x", BOLD_ITALIC)]

    def test_nested_emphasis(self):
        """Test italic nested in bold."""
        spans = self._segment("**bold *both* bold**")

        assert spans == [
            RichTextSpan("bold ", BOLD),
            RichTextSpan("both", BOLD_ITALIC),
            RichTextSpan(" bold", BOLD),
        ]

    def test_intraword_underscore(self):
        """Test that underscores inside words are literal."""
        assert self._segment("snake_case_name") == [RichTextSpan("snake_case_name")]

    def test_spaced_star_is_literal(self):
        """Test that a star surrounded by spaces is not emphasis."""
        assert self._segment("2 * 3 * 4") == [RichTextSpan("2 * 3 * 4")]

    def test_bold_link(self):
        """Test that emphasis applies to a link inside it."""
        assert self._segment("**[t](u)**") == [RichTextSpan("t", BOLD, link="u")]

    def test_code_is_atomic(self):
        """Test that markers inside code are literal."""
        assert self._segment("`**not bold**`") == [RichTextSpan("**not bold**", CODE)]

    def test_unbalanced_runs(self):
        """Test that leftover markers stay literal."""
        spans = self._segment("***a**")

        assert "".join(span.content for span in spans) == "*a"
        assert spans[-1] == RichTextSpan("a", BOLD)

    def test_plain_text_around(self):
        """Test text before and after emphasis."""
        spans = self._segment("This is **bold** text")

        assert spans == [RichTextSpan("This is "), RichTextSpan("bold", BOLD), RichTextSpan(" text")]

    def test_strong_inside_emphasis_without_spaces(self):
        """Test that inner double stars nest instead of closing the italic."""
        spans = self._segment("*foo**bar**baz*")

        assert spans == [
            RichTextSpan("foo", ITALIC),
            RichTextSpan("bar", BOLD_ITALIC),
            RichTextSpan("baz", ITALIC),
        ]

    def test_multiple_of_three_rule(self):
        """Test that a closer run does not pair when the lengths sum to a multiple of three."""
        spans = self._segment("*foo**bar*")

        assert spans == [RichTextSpan("foo**bar", ITALIC)]

    def test_code_inside_emphasis(self):
        """Test that code keeps the surrounding emphasis."""
        spans = self._segment("*a `b` c*")

        assert spans == [
            RichTextSpan("a ", ITALIC),
            RichTextSpan("b", Annotations(italic=True, code=True)),
            RichTextSpan(" c", ITALIC),
        ]

    def test_italic_link_text(self):
        """Test emphasis inside link text."""
        spans = self._segment("[a *b*](https://x.example)")

        assert spans == [
            RichTextSpan("a ", link="https://x.example"),
            RichTextSpan("b", ITALIC, link="https://x.example"),
        ]

    def test_backslash_escape(self):
        """Test that escaped markers are literal."""
        assert self._segment(r"\*not italic\*") == [RichTextSpan("*not italic*")]


@pytest.mark.parametrize("mode", list(InlineMode))
def test_reconstructs_text_without_markers(mode):
    """Test that span contents rebuild the source minus matched markers."""
    spans = segment("plain **bold** `code` [link](https://l.example) end", mode)

    assert "".join(span.content for span in spans) == "plain bold code link end"
