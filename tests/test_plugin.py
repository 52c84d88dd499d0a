import json

import pytest

from custombullets.core.plugin import CustomBulletsPlugin
from custombullets.utils.config import DEFAULT_GLYPHS, GLYPH_FIELDS


def test_start_registers_with_host(plugin, host):
    assert host.processors == [plugin.process_line]
    assert host.commands["toggle-custom-bullets"][0] == "Toggle Custom Bullets"
    assert host.statuses[-1] == "Custom Bullets: ON"


def test_start_loads_persisted_settings(host, store, settings_path):
    settings_path.write_text(json.dumps({"level1": "→", "enabled": False}), encoding="utf-8")
    plugin = CustomBulletsPlugin(host)
    handle = plugin.start(store)
    assert plugin.settings.glyphs.level1 == "→"
    assert host.statuses[-1] == "Custom Bullets: OFF"
    plugin.stop(handle)


def test_host_renders_through_processor(plugin, host):
    text = "- a\n  - b\n1. c"
    assert host.render(text) == "• a\n  ◦ b\n1. c"


def test_toggle_command(plugin, host, store):
    _name, callback = host.commands[CustomBulletsPlugin.COMMAND_ID]

    callback().result()

    assert plugin.settings.enabled is False
    assert host.statuses[-1] == "Custom Bullets: OFF"
    assert host.refresh_count == 1
    assert host.render("- a") == "- a"
    assert store.load().enabled is False

    plugin.toggle().result()
    assert plugin.settings.enabled is True
    assert host.statuses[-1] == "Custom Bullets: ON"
    assert host.refresh_count == 2


def test_mutation_visible_before_save_completes(plugin, host):
    future = plugin.set_glyph("level1", "★")
    # in-memory settings are updated immediately
    assert host.render("- a") == "★ a"
    future.result()


@pytest.mark.parametrize("field_name", GLYPH_FIELDS)
def test_set_glyph_empty_persists_default(plugin, store, settings_path, field_name):
    plugin.set_glyph(field_name, "x").result()
    plugin.set_glyph(field_name, "").result()

    default = DEFAULT_GLYPHS[field_name]
    assert getattr(plugin.settings.glyphs, field_name) == default
    data = json.loads(settings_path.read_text(encoding="utf-8"))
    assert data[field_name] == default


def test_stop_unregisters(host, store):
    plugin = CustomBulletsPlugin(host)
    handle = plugin.start(store)
    plugin.stop(handle)

    assert host.processors == []
    assert handle.active is False
    # second stop is a no-op
    plugin.stop(handle)


def test_not_started():
    plugin = CustomBulletsPlugin(host=None)
    with pytest.raises(RuntimeError):
        plugin.toggle()
    with pytest.raises(RuntimeError):
        plugin.process_line("- a")
