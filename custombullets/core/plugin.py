"""
Connects the bullet rewriter to a host editor.

The host implements `EditorHost`. The plugin owns the settings object,
registers its line processor and the toggle command, and writes every
settings change through to the store.
"""
import logging
import concurrent.futures
from dataclasses import dataclass
from typing import Callable

from .rewriter import rewrite
from .settings_store import SettingsStore
from ..utils.config import BulletSettings


log = logging.getLogger("custom_bullets")

LineProcessor = Callable[[str], str]


class EditorHost:
    """
    The part of a host editor the plugin talks to.
    Hosts (the GUI, tests) subclass it and implement every method.
    """

    def register_line_processor(self, processor: LineProcessor):
        """The host calls `processor(line_text)` for every line it renders."""
        raise NotImplementedError

    def unregister_line_processor(self, processor: LineProcessor):
        raise NotImplementedError

    def register_command(self, command_id: str, name: str, callback: Callable[[], object]):
        raise NotImplementedError

    def set_status(self, text: str):
        raise NotImplementedError

    def refresh(self):
        """Re-renders the visible document. Cursor and scroll position must be kept."""
        raise NotImplementedError


@dataclass
class PluginHandle:
    """Returned by `CustomBulletsPlugin.start()`, consumed by `stop()`."""
    store: SettingsStore
    settings: BulletSettings
    processor: LineProcessor
    active: bool = True


class CustomBulletsPlugin:
    """Replaces markdown list markers with level dependent glyphs in a host editor."""

    COMMAND_ID = "toggle-custom-bullets"
    COMMAND_NAME = "Toggle Custom Bullets"
    STATUS_PREFIX = "Custom Bullets: "

    def __init__(self, host: EditorHost):
        self.host = host
        self.settings: BulletSettings | None = None
        self.store: SettingsStore | None = None


    # --- Lifecycle ---

    def start(self, store: SettingsStore) -> PluginHandle:
        """Loads settings and registers the plugin with the host."""
        log.info("Loading Custom Bullets plugin")
        self.store = store
        self.settings = store.load()

        self.host.register_line_processor(self.process_line)
        self.host.register_command(self.COMMAND_ID, self.COMMAND_NAME, self.toggle)
        self.host.set_status(self.status_text())

        return PluginHandle(store=store, settings=self.settings, processor=self.process_line)


    def stop(self, handle: PluginHandle):
        """Unregisters the line processor and waits for pending saves."""
        if not handle.active:
            log.debug("Plugin handle already stopped.")
            return

        log.info("Unloading Custom Bullets plugin")
        self.host.unregister_line_processor(handle.processor)
        handle.store.flush()
        handle.active = False
        self.settings = None
        self.store = None


    # --- Rendering ---

    def process_line(self, line_text: str) -> str:
        """Line processor registered with the host."""
        settings = self._require_settings()
        return rewrite(line_text, settings.glyphs, settings.enabled)


    def status_text(self) -> str:
        settings = self._require_settings()
        return self.STATUS_PREFIX + ("ON" if settings.enabled else "OFF")


    # --- Settings mutations ---

    def toggle(self) -> concurrent.futures.Future:
        """The toggle command. Flips `enabled`, saves and refreshes the host view."""
        settings = self._require_settings()
        return self.set_enabled(not settings.enabled)


    def set_enabled(self, value: bool) -> concurrent.futures.Future:
        settings = self._require_settings()
        settings.enabled = bool(value)
        log.info(f"Custom bullets {'enabled' if settings.enabled else 'disabled'}.")
        self.host.set_status(self.status_text())
        return self._commit()


    def set_glyph(self, field_name: str, value: str) -> concurrent.futures.Future:
        """Sets the glyph of one level. An empty value stores the level default."""
        settings = self._require_settings()
        settings.set_glyph(field_name, value)
        log.debug(f"Glyph '{field_name}' set to '{getattr(settings.glyphs, field_name)}'.")
        return self._commit()


    def _commit(self) -> concurrent.futures.Future:
        """Persists the settings and refreshes the host. The in-memory change is already visible."""
        future = self.store.save(self.settings)
        future.add_done_callback(self._on_saved)
        self.host.refresh()
        return future


    def _on_saved(self, future: concurrent.futures.Future):
        exc = future.exception()
        if exc is not None:
            log.error(f"Failed to save settings: {exc}")


    def _require_settings(self) -> BulletSettings:
        if self.settings is None:
            raise RuntimeError("Custom Bullets plugin is not started.")
        return self.settings
