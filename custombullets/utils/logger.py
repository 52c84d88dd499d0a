"""
Handles configuration of logging for the application process.
"""
import logging
import sys
import os
from pathlib import Path
from datetime import datetime

# Define a consistent log directory
LOG_DIR = Path("./logs")
LOGGER_NAME = "custom_bullets"
MAX_LOG_FILES = 20
CONSOLE_LOG_FORMAT = "%(levelname)s: %(message)s"
FILE_LOG_FORMAT = (
    "%(asctime)s [%(threadName)s] %(levelname)s - [%(module)s:%(lineno)d] - %(message)s"
)


def _rotate_logs(log_dir: Path, keep: int):
    """Removes the oldest log files so that `keep` files remain after a new one is created."""
    logs = sorted(
        [p for p in log_dir.glob("custombullets_*.log") if p.is_file()],
        key=os.path.getmtime,
    )
    files_to_remove = len(logs) - (keep - 1)
    if files_to_remove > 0:
        for log_file in logs[:files_to_remove]:
            try:
                log_file.unlink()
            except OSError:
                pass  # file may be locked by another instance


def setup_main_logger(console_level=logging.ERROR, log_dir: Path | None = None) -> logging.Logger:
    """
    Configures the application logger.

    Console output respects `console_level`, the file handler always logs
    at DEBUG level into a new, unique file per run. Old files are rotated.
    """
    log_dir = log_dir or LOG_DIR
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG)  # Capture all levels

    # Avoid adding duplicate handlers
    if logger.hasHandlers():
        for handler in list(logger.handlers):
            handler.close()
        logger.handlers.clear()

    # --- Console Handler ---
    try:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(console_level)
        console_handler.setFormatter(logging.Formatter(CONSOLE_LOG_FORMAT))
        logger.addHandler(console_handler)
    except Exception as e:
        # stderr can be missing in windowed builds
        print(f"Warning: Could not set up console logger: {e}")

    # --- File Handler (Rotation and New File) ---
    try:
        log_dir.mkdir(parents=True, exist_ok=True)
        _rotate_logs(log_dir, MAX_LOG_FILES)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
        new_log_path = log_dir / f"custombullets_{timestamp}.log"

        file_handler = logging.FileHandler(new_log_path, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(file_handler)

        logger.info(
            "Main logger initialized. Console level: %s, File level: DEBUG. Logging to: %s",
            logging.getLevelName(console_level),
            new_log_path,
        )
    except Exception:
        logger.error("CRITICAL: Failed to set up file logging.", exc_info=True)

    return logger
