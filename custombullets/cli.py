"""
Handles command-line argument parsing and renders a single markdown document.
This is the entry point for the console script.
"""
import argparse
import logging
import sys
from pathlib import Path

from .core.rewriter import rewrite_text
from .core.settings_store import SettingsStore, DEFAULT_SETTINGS_PATH
from .core.html_export import build_html, to_html_string, write_html
from .utils.config import GLYPH_FIELDS
from .utils.logger import setup_main_logger


# Get logger (will be configured in run_cli)
log = logging.getLogger("custom_bullets")


def glyph(value: str) -> str:
    """Checks that a glyph is a non-empty string."""
    if not value:
        raise argparse.ArgumentTypeError("Glyph must not be empty.")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="custombullets",
        description="Render markdown bullet lists with level dependent glyphs.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("input_path", type=Path,
                        help="Input markdown file, or '-' to read stdin.")
    parser.add_argument("-o", "--output", type=Path, default=None,
                        help="Output file. If omitted, the result is written to stdout.")
    parser.add_argument("-f", "--format", choices=("text", "html"), default="text",
                        help="Output format.")
    parser.add_argument("--settings", type=Path, default=DEFAULT_SETTINGS_PATH,
                        help="Settings file (JSON) to load glyphs from.")
    for level, field_name in enumerate(GLYPH_FIELDS, start=1):
        depth = f"{level}+" if level == len(GLYPH_FIELDS) else str(level)
        parser.add_argument(f"--{field_name}", type=glyph, default=None, metavar="GLYPH",
                            help=f"Glyph for level {depth} bullets (overrides the settings file).")
    parser.add_argument("--disable", action="store_true",
                        help="Leave bullet markers unchanged.")
    parser.add_argument("--save-settings", action="store_true",
                        help="Persist the effective settings (including overrides) to the settings file.")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Show informational messages on the console.")
    return parser


def _read_input(path: Path) -> str:
    """Reads the document without newline translation, so CRLF/CR endings survive."""
    if str(path) == "-":
        return sys.stdin.buffer.read().decode("utf-8")
    with open(path, "r", encoding="utf-8", newline="") as f:
        return f.read()


def _write_output(rendered: str, path: Path | None):
    """Writes the rendered document to `path` or stdout, keeping its line endings."""
    if path is None:
        sys.stdout.flush()
        sys.stdout.buffer.write(rendered.encode("utf-8"))
        sys.stdout.buffer.flush()
        return
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(rendered)
    log.info(f"Created: {path.name}")


def run_cli(argv: list[str] | None = None) -> int:
    """
    The main function for the command-line interface.
    Parses arguments, renders the document and returns the exit status.
    """
    args = build_parser().parse_args(argv)

    console_level = logging.INFO if args.verbose else logging.ERROR
    setup_main_logger(console_level)

    store = SettingsStore(args.settings)
    try:
        settings = store.load()
        for field_name in GLYPH_FIELDS:
            override = getattr(args, field_name)
            if override is not None:
                settings.set_glyph(field_name, override)
        if args.disable:
            settings.enabled = False

        if args.save_settings:
            store.save(settings).result()
            log.info(f"Settings saved to {store.path}")
    finally:
        store.close()

    try:
        text = _read_input(args.input_path)
    except (OSError, UnicodeDecodeError) as e:
        log.error(f"Could not read input {args.input_path}: {e}")
        return 1

    if args.format == "html":
        title = "" if str(args.input_path) == "-" else args.input_path.stem
        html = build_html(text, settings, title)
        if args.output:
            write_html(html, args.output)
        else:
            sys.stdout.write(to_html_string(html))
        return 0

    rendered = rewrite_text(text, settings.glyphs, settings.enabled)
    _write_output(rendered, args.output)
    return 0
