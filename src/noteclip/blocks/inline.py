"""Inline formatting: split block text into styled rich text spans."""

import re
from dataclasses import dataclass
from typing import Optional

from markdown_it import MarkdownIt

from ..models.blocks import PLAIN, Annotations, RichTextSpan
from ..models.config import InlineMode

BOLD_ITALIC_PATTERN = re.compile(r"\*\*\*(.+?)\*\*\*")
BOLD_PATTERN = re.compile(r"\*\*(.+?)\*\*")
ITALIC_STAR_PATTERN = re.compile(r"(?<!\*)\*([^*]+?)\*(?!\*)")
ITALIC_UNDERSCORE_PATTERN = re.compile(r"_(.+?)_")
CODE_PATTERN = re.compile(r"`(.+?)`")
LINK_PATTERN = re.compile(r"\[(.+?)\]\((.+?)\)")

# Acceptance order: an earlier category claims text before a later one
SCAN_ORDER = (
    (BOLD_ITALIC_PATTERN, Annotations(bold=True, italic=True)),
    (BOLD_PATTERN, Annotations(bold=True)),
    (ITALIC_STAR_PATTERN, Annotations(italic=True)),
    (ITALIC_UNDERSCORE_PATTERN, Annotations(italic=True)),
    (CODE_PATTERN, Annotations(code=True)),
    (LINK_PATTERN, PLAIN),
)


@dataclass(frozen=True)
class _Candidate:
    start: int
    end: int
    content: str
    annotations: Annotations
    link: Optional[str] = None


def segment(text: str, mode: InlineMode = InlineMode.SCAN_ORDER) -> list[RichTextSpan]:
    """
    Split text into rich text spans.

    Matched formatting markers are removed from span contents, everything
    else is kept, so joining the span contents gives back the text minus
    its markers. Unmatched markers stay literal.

    Delimiter mode hands the text to markdown-it's CommonMark inline
    parser, so emphasis nests and pairs by CommonMark rules and backslash
    escapes are consumed as well.

    Args:
        text: Block text (a heading, paragraph, list item or quote)
        mode: Overlap resolution strategy

    Returns:
        Ordered spans; a single plain span when nothing is formatted
    """
    if mode == InlineMode.DELIMITER:
        spans = _segment_delimiters(text)
    else:
        spans = _segment_scan_order(text)

    if not spans:
        return [RichTextSpan(text)]
    return spans


def _segment_scan_order(text: str) -> list[RichTextSpan]:
    accepted: list[_Candidate] = []

    for pattern, annotations in SCAN_ORDER:
        for match in pattern.finditer(text):
            start, end = match.span()
            if any(c.start <= start and c.end >= end for c in accepted):
                continue
            link = match.group(2) if pattern is LINK_PATTERN else None
            accepted.append(_Candidate(start, end, match.group(1), annotations, link))

    accepted.sort(key=lambda c: c.start)

    spans: list[RichTextSpan] = []
    pos = 0
    for candidate in accepted:
        # Partially overlaps something already emitted
        if candidate.start < pos:
            continue
        if candidate.start > pos:
            spans.append(RichTextSpan(text[pos : candidate.start]))
        spans.append(RichTextSpan(candidate.content, candidate.annotations, candidate.link))
        pos = candidate.end

    if pos < len(text):
        spans.append(RichTextSpan(text[pos:]))

    return spans


def _make_parser() -> MarkdownIt:
    """Build the CommonMark inline parser used by delimiter mode."""
    return MarkdownIt("commonmark", options_update={"linkify": False})


_COMMONMARK = _make_parser()

# Inline tokens rendered as their literal content
TEXT_TOKENS = {"text", "text_special", "html_inline"}
BREAK_TOKENS = {"softbreak", "hardbreak"}


def _segment_delimiters(text: str) -> list[RichTextSpan]:
    spans: list[RichTextSpan] = []
    bold = italic = 0
    link: Optional[str] = None

    def emit(content: str, code: bool = False) -> None:
        if not content:
            return
        annotations = Annotations(bold=bold > 0, italic=italic > 0, code=code)
        if spans and spans[-1].annotations == annotations and spans[-1].link == link:
            previous = spans.pop()
            content = previous.content + content
        spans.append(RichTextSpan(content, annotations, link))

    for inline in _COMMONMARK.parseInline(text):
        for token in inline.children or []:
            if token.type == "strong_open":
                bold += 1
            elif token.type == "strong_close":
                bold -= 1
            elif token.type == "em_open":
                italic += 1
            elif token.type == "em_close":
                italic -= 1
            elif token.type == "link_open":
                href = token.attrGet("href")
                link = str(href) if href is not None else None
            elif token.type == "link_close":
                link = None
            elif token.type == "code_inline":
                emit(token.content, code=True)
            elif token.type in BREAK_TOKENS:
                emit("\n")
            elif token.type == "image":
                # Alt text only; images are not rich text
                emit(token.content)
            elif token.type in TEXT_TOKENS:
                emit(token.content)

    return spans
