"""HTML to Markdown conversion."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Iterator, Optional
from urllib.parse import urljoin

from bs4 import BeautifulSoup
from bs4.element import NavigableString, PageElement, PreformattedString, Tag

from .plaintext import strip_html

logger = logging.getLogger(__name__)

LANGUAGE_CLASS_PATTERN = re.compile(r"language-([\w+#-]+)")

# URL prefixes left alone when resolving against a base URL
ABSOLUTE_PREFIXES = ("#", "http://", "https://", "//", "mailto:", "tel:", "data:")

Child = tuple[PageElement, Optional["TagRule"]]


def _resolve_url(url: str, base_url: Optional[str]) -> str:
    if not base_url or url.startswith(ABSOLUTE_PREFIXES):
        return url
    return urljoin(base_url, url)


def _class_names(tag: Tag) -> str:
    classes = tag.get("class") or []
    if isinstance(classes, str):
        return classes
    return " ".join(classes)


class TagRule:
    """
    Conversion rule for one kind of element.

    A rule chooses which child nodes get visited and combines their
    rendered output. The base rule is the pass-through used for any tag
    without a dedicated rule: every child is visited and the outputs are
    concatenated, so unknown markup degrades to its text.
    """

    def children(self, node: Tag) -> list[Child]:
        return [(child, None) for child in node.children]

    def render(self, node: Tag, parts: list[Any]) -> Any:
        return "".join(parts)


class WrapRule(TagRule):
    """Surround the children output with fixed text."""

    def __init__(self, prefix: str, suffix: str):
        self.prefix = prefix
        self.suffix = suffix

    def render(self, node: Tag, parts: list[Any]) -> str:
        return f"{self.prefix}{''.join(parts)}{self.suffix}"


class ConstantRule(TagRule):
    """Emit fixed text; children are not visited."""

    def __init__(self, text: str):
        self.text = text

    def children(self, node: Tag) -> list[Child]:
        return []

    def render(self, node: Tag, parts: list[Any]) -> str:
        return self.text


class InlineCodeRule(TagRule):
    def render(self, node: Tag, parts: list[Any]) -> str:
        content = "".join(parts)
        if node.find_parent("pre") is not None:
            return content
        return f"`{content}`"


class LinkRule(TagRule):
    def __init__(self, base_url: Optional[str] = None):
        self.base_url = base_url

    def render(self, node: Tag, parts: list[Any]) -> str:
        text = "".join(parts)
        href = node.get("href")
        if not href or not isinstance(href, str):
            return text
        if href.strip().lower().startswith("javascript:"):
            return text
        return f"[{text}]({_resolve_url(href, self.base_url)})"


class ListRule(TagRule):
    """Bulleted or numbered list; only direct ``li`` children are rendered."""

    def __init__(self, ordered: bool):
        self.ordered = ordered

    def children(self, node: Tag) -> list[Child]:
        return [(child, None) for child in node.children if isinstance(child, Tag) and child.name == "li"]

    def render(self, node: Tag, parts: list[Any]) -> str:
        lines = []
        for index, content in enumerate(parts, start=1):
            prefix = f"{index}. " if self.ordered else "- "
            lines.append(f"{prefix}{content.strip()}\n")
        return "".join(lines) + "\n"


class PreformattedRule(TagRule):
    """Fenced code block from ``pre``; inner markup is read as literal text."""

    def children(self, node: Tag) -> list[Child]:
        return []

    def render(self, node: Tag, parts: list[Any]) -> str:
        code = node.find("code")
        language = ""
        if code is not None:
            match = LANGUAGE_CLASS_PATTERN.search(_class_names(code))
            if match:
                language = match.group(1)
        text = code.get_text() if code is not None else node.get_text()
        return f"\n```{language}\n{text}\n```\n"


class BlockquoteRule(TagRule):
    def render(self, node: Tag, parts: list[Any]) -> str:
        inner = "".join(parts).strip()
        return "\n".join(f"> {line}" for line in inner.split("\n")) + "\n\n"


class ImageRule(ConstantRule):
    def __init__(self, base_url: Optional[str] = None):
        super().__init__("")
        self.base_url = base_url

    def render(self, node: Tag, parts: list[Any]) -> str:
        alt = node.get("alt")
        if alt and isinstance(alt, str):
            return f"[{alt}]"
        src = node.get("src")
        if src and isinstance(src, str):
            return f"[image: {_resolve_url(src, self.base_url)}]"
        return ""


class TableRowRule(TagRule):
    """Collect a row's direct cells as trimmed, pipe-escaped strings."""

    def children(self, node: Tag) -> list[Child]:
        return [
            (child, None)
            for child in node.children
            if isinstance(child, Tag) and child.name in ("td", "th")
        ]

    def render(self, node: Tag, parts: list[Any]) -> list[str]:
        return [cell.strip().replace("|", "\\|") for cell in parts]


TABLE_ROW = TableRowRule()


class TableRule(TagRule):
    """Pipe table; first row becomes the header, short rows are padded."""

    def children(self, node: Tag) -> list[Child]:
        return [(row, TABLE_ROW) for row in node.find_all("tr")]

    def render(self, node: Tag, parts: list[Any]) -> str:
        rows = [row for row in parts if row]
        if not rows:
            return "\n\n"

        max_cols = max(len(row) for row in rows)
        rows = [row + [""] * (max_cols - len(row)) for row in rows]

        lines = [_table_line(rows[0]), _table_line(["---"] * max_cols)]
        lines.extend(_table_line(row) for row in rows[1:])
        return "".join(lines) + "\n\n"


def _table_line(cells: list[str]) -> str:
    return "| " + " | ".join(cells) + " |\n"


PASS_THROUGH = TagRule()


def build_rule_table(base_url: Optional[str] = None) -> dict[str, TagRule]:
    """
    Build the tag name to rule mapping.

    Tags missing from the table (including ``li``, ``tr``, ``td``, ``th``,
    ``thead``, ``tbody`` and ``tfoot`` outside their list or table) use
    PASS_THROUGH.
    """
    strong = WrapRule("**", "**")
    emphasis = WrapRule("*", "*")
    ignored = ConstantRule("")

    rules: dict[str, TagRule] = {
        "strong": strong,
        "b": strong,
        "em": emphasis,
        "i": emphasis,
        "code": InlineCodeRule(),
        "a": LinkRule(base_url),
        "br": ConstantRule("\n"),
        "p": WrapRule("", "\n\n"),
        "div": WrapRule("", "\n"),
        "ul": ListRule(ordered=False),
        "ol": ListRule(ordered=True),
        "pre": PreformattedRule(),
        "blockquote": BlockquoteRule(),
        "hr": ConstantRule("\n---\n\n"),
        "script": ignored,
        "style": ignored,
        "noscript": ignored,
        "template": ignored,
        "img": ImageRule(base_url),
        "table": TableRule(),
    }
    for level in range(1, 7):
        rules[f"h{level}"] = WrapRule("#" * level + " ", "\n\n")
    return rules


@dataclass
class _Frame:
    node: Tag
    rule: TagRule
    pending: Iterator[Child]
    parts: list[Any] = field(default_factory=list)


class HtmlToMarkdown:
    """
    Converts captured HTML fragments to Markdown.

    The tree is walked with an explicit stack, so deeply nested markup
    does not exhaust the interpreter's recursion limit. Conversion never
    raises: on any failure the plain text of the fragment is returned.

    Example:
        converter = HtmlToMarkdown()
        markdown = converter.convert("<p>Some <strong>bold</strong> text</p>")
    """

    def __init__(self, base_url: Optional[str] = None):
        """
        Initialize the Markdown converter.

        Args:
            base_url: Resolve relative link and image URLs against this URL
        """
        self._base_url = base_url
        self._rules = build_rule_table(base_url)

    def _rule_for(self, tag: Tag) -> TagRule:
        return self._rules.get((tag.name or "").lower(), PASS_THROUGH)

    def _render(self, root: Tag) -> str:
        stack = [_Frame(root, PASS_THROUGH, iter(PASS_THROUGH.children(root)))]
        result: Any = ""

        while stack:
            frame = stack[-1]
            child = next(frame.pending, None)

            if child is None:
                stack.pop()
                value = frame.rule.render(frame.node, frame.parts)
                if stack:
                    stack[-1].parts.append(value)
                else:
                    result = value
                continue

            node, rule = child
            if isinstance(node, Tag):
                rule = rule or self._rule_for(node)
                stack.append(_Frame(node, rule, iter(rule.children(node))))
            elif isinstance(node, NavigableString) and not isinstance(node, PreformattedString):
                frame.parts.append(str(node))
            # Comments, doctypes and processing instructions emit nothing

        return result

    def convert(self, html: Optional[str]) -> str:
        """
        Convert HTML to Markdown.

        Args:
            html: HTML fragment; None and empty strings give ""

        Returns:
            Markdown string without leading or trailing whitespace
        """
        if not html or not isinstance(html, str):
            return ""

        try:
            soup = BeautifulSoup(html, "html.parser")
            return self._render(soup).strip()
        except Exception as e:
            logger.warning(f"Failed to convert HTML to Markdown, using plain text: {e}")
            return strip_html(html)


def html_to_markdown(html: Optional[str], base_url: Optional[str] = None) -> str:
    """Convert an HTML fragment to Markdown; see HtmlToMarkdown."""
    return HtmlToMarkdown(base_url=base_url).convert(html)
