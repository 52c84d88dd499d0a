"""
Rewrites the leading marker of markdown bullet list lines into a glyph
that depends on the nesting level of the item.
"""
import re
from typing import Iterator, NamedTuple

from ..utils.config import GlyphTable


# indent (spaces/tabs), marker, separator (required), content
LIST_LINE_RE = re.compile(r"([ \t]*)([-*+])(\s+)(.*)", re.DOTALL)
LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")
SPACES_PER_LEVEL = 2


class LineMatch(NamedTuple):
    """Parsed parts of a single bullet list line."""
    indent: str
    bullet: str
    separator: str
    content: str

    @property
    def level(self) -> int:
        return nesting_level(self.indent)


def match_line(line_text: str) -> LineMatch | None:
    """Returns the parts of a bullet list line, or None if the line is not one."""
    m = LIST_LINE_RE.fullmatch(line_text)
    if m is None:
        return None
    return LineMatch(*m.groups())


def nesting_level(indent: str) -> int:
    """
    Computes the 1-based nesting level of a list item from its indentation.
    Each tab is one level, every 2 spaces are one level (remainder ignored),
    regardless of how tabs and spaces are mixed.
    """
    tab_count = indent.count("\t")
    space_count = len(indent.replace("\t", ""))
    return 1 + tab_count + space_count // SPACES_PER_LEVEL


def rewrite(line_text: str, glyphs: GlyphTable, enabled: bool = True) -> str:
    """
    Replaces the markdown marker (`-`, `*` or `+`) of a bullet list line with
    the glyph for its nesting level. Indentation, the whitespace after the
    marker and the content are kept as is.

    Lines that are not bullet list items, and every line when `enabled` is False,
    are returned unchanged.
    """
    if not enabled:
        return line_text

    match = match_line(line_text)
    if match is None:
        return line_text

    glyph = glyphs.for_level(match.level)
    return match.indent + glyph + match.separator + match.content


def iter_lines(text: str) -> Iterator[tuple[str, str]]:
    """
    Yields (line, ending) pairs of a document. Only `\\r\\n`, `\\r` and `\\n`
    end a line, other unicode separators stay part of the line text.
    A trailing line break does not produce an extra empty line.
    """
    start = 0
    for m in LINE_BREAK_RE.finditer(text):
        yield text[start:m.start()], m.group()
        start = m.end()
    if start < len(text):
        yield text[start:], ""


def rewrite_text(text: str, glyphs: GlyphTable, enabled: bool = True) -> str:
    """Applies `rewrite` to every line of a document. Line endings are preserved."""
    if not enabled:
        return text

    return "".join(rewrite(line, glyphs, enabled) + ending for line, ending in iter_lines(text))
