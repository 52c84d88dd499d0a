"""
Declarative description of the settings panel.

Every UI draws the same list of fields with one loop, instead of
hand-writing a block per setting.
"""
from typing import Any, Callable, NamedTuple

from .plugin import CustomBulletsPlugin
from ..utils.config import DEFAULT_GLYPHS, DEFAULT_ENABLED


PANEL_TITLE = "Custom Bullets Settings"


class SettingField(NamedTuple):
    """One row of the settings panel."""
    key: str
    name: str
    description: str
    kind: str       # "toggle" or "text"
    getter: Callable[[], Any]
    setter: Callable[[Any], Any]
    default: Any


def _glyph_labels(field_name: str) -> tuple[str, str]:
    level = field_name.removeprefix("level")
    if field_name == "level5":
        return f"Level {level}+ Bullet", f"Character to use for level {level} and deeper bullets"
    return f"Level {level} Bullet", f"Character to use for level {level} bullets"


def build_setting_fields(plugin: CustomBulletsPlugin) -> list[SettingField]:
    """Returns the panel rows. Setters write through the plugin (save + refresh)."""
    fields = [
        SettingField(
            key="enabled",
            name="Enable Custom Bullets",
            description="Toggle custom bullets on or off",
            kind="toggle",
            getter=lambda: plugin.settings.enabled,
            setter=plugin.set_enabled,
            default=DEFAULT_ENABLED,
        )
    ]

    for field_name, default in DEFAULT_GLYPHS.items():
        name, description = _glyph_labels(field_name)
        fields.append(SettingField(
            key=field_name,
            name=name,
            description=description,
            kind="text",
            # bind field_name now, not at call time
            getter=lambda f=field_name: getattr(plugin.settings.glyphs, f),
            setter=lambda value, f=field_name: plugin.set_glyph(f, value),
            default=default,
        ))

    return fields
