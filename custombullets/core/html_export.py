"""
Exports a markdown document, as rendered with custom bullets, to XHTML.
"""
import logging
import re
from pathlib import Path

from lxml import etree

from .rewriter import iter_lines, match_line
from ..utils.config import BulletSettings


log = logging.getLogger("custom_bullets")

XHTML_NS = "http://www.w3.org/1999/xhtml"
MAX_CSS_LEVEL = 5

# Control chars except TAB(0x09), LF(0x0A), CR(0x0D) are not allowed in XML
RE_XML_INVALID = re.compile(r"[\x00-\x08\x0B\x0C\x0E-\x1F\uFFFE\uFFFF]")


def _xml_safe(text: str) -> str:
    return RE_XML_INVALID.sub("", text)


def _stylesheet() -> str:
    rules = [
        "body { font-family: sans-serif; }",
        ".line, .bullet { white-space: pre-wrap; min-height: 1em; }",
        ".glyph { font-weight: bold; }",
    ]
    # level 5 and deeper share one style
    for level in range(1, MAX_CSS_LEVEL + 1):
        rules.append(f".level-{level} .glyph {{ opacity: {1 - 0.15 * (level - 1):.2f}; }}")
    return "\n".join(rules)


def _create_html(title: str) -> tuple[etree._Element, etree._Element]:
    """Creates a basic XHTML structure with head > title, style and an empty body."""
    html = etree.Element("html", nsmap={None: XHTML_NS})
    head = etree.SubElement(html, "head")
    etree.SubElement(head, "meta", charset="UTF-8")
    etree.SubElement(head, "title").text = _xml_safe(title)
    etree.SubElement(head, "style", type="text/css").text = _stylesheet()
    body = etree.SubElement(html, "body")
    return html, body


def _add_line(body: etree._Element, line: str, settings: BulletSettings):
    """Appends one source line to the body as a <div>."""
    match = match_line(line) if settings.enabled else None

    if match is None:
        div = etree.SubElement(body, "div", {"class": "line"})
        if line:
            div.text = _xml_safe(line)
        else:
            etree.SubElement(div, "br")
        return

    level = match.level
    div = etree.SubElement(body, "div", {
        "class": f"bullet level-{min(level, MAX_CSS_LEVEL)}",
        "data-level": str(level),
    })
    div.text = _xml_safe(match.indent) or None
    glyph = etree.SubElement(div, "span", {"class": "glyph"})
    glyph.text = _xml_safe(settings.glyphs.for_level(level))
    glyph.tail = _xml_safe(match.separator + match.content)


def build_html(text: str, settings: BulletSettings, title: str = "") -> etree._Element:
    """
    Builds an XHTML document with one <div> per source line.

    List lines get `class="bullet level-N"` and their glyph wrapped in
    `<span class="glyph">`. Other lines are kept verbatim.
    """
    html, body = _create_html(title or "Custom Bullets")
    count = 0
    for line, _ending in iter_lines(text):
        _add_line(body, line, settings)
        count += 1
    log.debug(f"Built XHTML document with {count} lines.")
    return html


def to_html_string(html: etree._Element) -> str:
    """Serializes an XHTML tree to a string with an HTML5 doctype."""
    return etree.tostring(html, pretty_print=True, encoding="unicode", doctype="<!DOCTYPE html>")


def write_html(html: etree._Element, filepath: Path | str):
    """Writes an XHTML element tree to a file."""
    etree.ElementTree(html).write(
        str(filepath),
        pretty_print=True,
        xml_declaration=True,
        encoding="UTF-8",
        doctype="<!DOCTYPE html>",
    )
    log.info(f"Created: {Path(filepath).name}")
