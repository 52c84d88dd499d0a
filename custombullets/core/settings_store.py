"""
Persists the extension settings as a flat JSON record.

Saves run on a single background worker so the UI never waits for the disk,
while writes still land in the order they were requested.
"""
import json
import logging
import concurrent.futures
from pathlib import Path

from ..utils.config import BulletSettings


log = logging.getLogger("custom_bullets")

DEFAULT_SETTINGS_PATH = Path.home() / ".custom_bullets" / "settings.json"


class SettingsStore:
    """Loads and saves `BulletSettings` to a JSON file."""

    def __init__(self, path: Path | str | None = None):
        self.path = Path(path) if path else DEFAULT_SETTINGS_PATH
        self._executor = concurrent.futures.ThreadPoolExecutor(
            max_workers=1, thread_name_prefix="settings-store"
        )
        self._pending: concurrent.futures.Future | None = None


    def load(self) -> BulletSettings:
        """
        Returns the stored settings merged over the defaults.
        Waits for a pending save first. A missing or broken file gives the defaults.
        """
        self.flush()
        return BulletSettings.from_record(self._read_record())


    def save(self, settings: BulletSettings) -> concurrent.futures.Future:
        """
        Schedules a write of the current settings and returns its future.
        The record is captured now, later mutations don't affect this write.
        """
        record = settings.to_record()
        self._pending = self._executor.submit(self._write_record, record)
        return self._pending


    def flush(self):
        """Blocks until the last scheduled save has finished."""
        pending = self._pending
        if pending is None:
            return
        try:
            pending.result()
        except OSError as e:
            log.error(f"Previous settings save to {self.path} failed: {e}")


    def close(self):
        """Flushes pending writes and stops the worker."""
        self.flush()
        self._executor.shutdown(wait=True)


    def _read_record(self) -> dict:
        if not self.path.is_file():
            log.info(f"No settings file at {self.path}, using defaults.")
            return {}

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            log.error(f"Failed to load settings from {self.path}: {e}")
            return {}

        if not isinstance(data, dict):
            log.error(f"Settings file {self.path} must contain a JSON object, got {type(data).__name__}.")
            return {}

        log.debug(f"Loaded settings from {self.path}: {data}")
        return data


    def _write_record(self, record: dict):
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(record, f, ensure_ascii=False, indent=2)
        log.debug(f"Saved settings to {self.path}")
