import pytest

from custombullets.core.rewriter import (
    LineMatch,
    iter_lines,
    match_line,
    nesting_level,
    rewrite,
    rewrite_text,
)
from custombullets.utils.config import GlyphTable


GLYPHS = GlyphTable()
MARKED = GlyphTable(level1="1", level2="2", level3="3", level4="4", level5="5")


@pytest.mark.parametrize(
    "line, level",
    [
        ("- a", 1),
        ("  - a", 2),
        ("    - a", 3),
        ("\t- a", 2),
        ("\t\t- a", 3),
        ("   - a", 2),
        (" - a", 1),
        ("\t  - a", 3),
        ("  \t- a", 3),
        ("\t\t\t\t\t\t- a", 7),
    ],
)
def test_nesting_level(line, level):
    match = match_line(line)
    assert match is not None
    assert match.level == level


def test_nesting_level_from_indent():
    assert nesting_level("") == 1
    assert nesting_level(" ") == 1
    assert nesting_level("      ") == 4
    assert nesting_level("\t \t ") == 4


def test_match_line_parts():
    assert match_line("  *\tcontent  here ") == LineMatch("  ", "*", "\t", "content  here ")


@pytest.mark.parametrize(
    "line, expected",
    [
        ("- a", "1 a"),
        ("  * a", "  2 a"),
        ("    + a", "    3 a"),
        ("      - a", "      4 a"),
        ("        - a", "        5 a"),
        ("\t\t\t\t\t\t- deep", "\t\t\t\t\t\t5 deep"),
    ],
)
def test_glyph_per_level(line, expected):
    assert rewrite(line, MARKED, True) == expected


def test_default_glyphs():
    assert rewrite("- a", GLYPHS) == "• a"
    assert rewrite("  - a", GLYPHS) == "  ◦ a"
    assert rewrite("    - a", GLYPHS) == "    ▪ a"
    assert rewrite("      - a", GLYPHS) == "      ▫ a"
    assert rewrite("        - a", GLYPHS) == "        ⁃ a"


def test_preserves_indent_separator_and_content():
    assert rewrite("  - task [ ]", GLYPHS, True) == "  ◦ task [ ]"
    assert rewrite("\t -   spaced", MARKED, True) == "\t 2   spaced"
    assert rewrite("- [x] done", GLYPHS, True) == "• [x] done"


def test_multi_character_glyph():
    glyphs = GlyphTable(level1="->")
    assert rewrite("- a", glyphs, True) == "-> a"


def test_marker_with_empty_content():
    assert rewrite("- ", GLYPHS, True) == "• "


@pytest.mark.parametrize(
    "line",
    [
        "",
        "plain text",
        "1. numbered",
        "---",
        "***",
        "-no space",
        "-",
        "  ",
        "# - heading",
        "text - with dash",
    ],
)
def test_non_list_lines_unchanged(line):
    assert rewrite(line, MARKED, True) == line


def test_disabled_returns_input():
    for line in ["- a", "  * b", "\t+ c", "plain", ""]:
        assert rewrite(line, MARKED, False) == line


def test_stable_after_first_rewrite():
    once = rewrite("  - item", GLYPHS, True)
    twice = rewrite(once, GLYPHS, True)
    assert once == twice == "  ◦ item"


def test_rewrite_text_keeps_line_endings():
    text = "- a\r\n  - b\n\tc\r- d"
    assert rewrite_text(text, MARKED, True) == "1 a\r\n  2 b\n\tc\r1 d"


def test_rewrite_text_trailing_newline():
    assert rewrite_text("- a\n", MARKED) == "1 a\n"
    assert rewrite_text("", MARKED) == ""


def test_rewrite_text_disabled():
    text = "- a\n  - b\n"
    assert rewrite_text(text, MARKED, False) == text


@pytest.mark.parametrize("separator", ["\u2028", "\u2029", "\x85", "\x0b", "\x0c", "\x1c", "\x1d", "\x1e"])
def test_rewrite_text_only_splits_on_newlines(separator):
    text = f"text{separator}- x"
    assert rewrite_text(text, MARKED, True) == text


def test_iter_lines():
    assert list(iter_lines("a\r\nb\rc\nd")) == [("a", "\r\n"), ("b", "\r"), ("c", "\n"), ("d", "")]
    assert list(iter_lines("a\n\n")) == [("a", "\n"), ("", "\n")]
    assert list(iter_lines("")) == []
    assert list(iter_lines("a\u2028b")) == [("a\u2028b", "")]
