"""
Entry point of Custom Bullets.

Arguments on the command line mean a document should be rendered (CLI);
a bare start opens the editor window (GUI).
"""
from enum import Enum
import sys
import logging


log = logging.getLogger("custom_bullets")


class AppMode(Enum):
    CLI = 1
    GUI = 2
    AUTO = 3


def resolve_mode(mode: AppMode, argv: list[str]) -> AppMode:
    """AUTO becomes CLI when anything follows the program name, GUI otherwise."""
    if mode != AppMode.AUTO:
        return mode
    return AppMode.CLI if argv[1:] else AppMode.GUI


def _launch_cli() -> int:
    from .cli import run_cli
    return run_cli()


def _launch_gui() -> int:
    try:
        from .gui import run_gui
    except ImportError as e:
        log.error(f"Tk or Pillow ImageTk is not available, the editor cannot start: {e}")
        return 1
    log.info("Starting the editor window...")
    run_gui()
    return 0


def main(mode: AppMode = AppMode.AUTO):
    """Runs the CLI or the GUI and exits with its status."""
    mode = resolve_mode(mode, sys.argv)
    launch = _launch_cli if mode == AppMode.CLI else _launch_gui

    try:
        status = launch()
    except Exception:
        log.exception(f"Custom Bullets {mode.name} stopped on an unexpected error.")
        sys.exit(1)
    sys.exit(status)


if __name__ == '__main__':
    main()
