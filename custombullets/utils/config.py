"""
Defines the glyph table and the settings record used by the bullet rewriter.
"""
import dataclasses
import logging
from dataclasses import dataclass, field


log = logging.getLogger("custom_bullets")


# Ordered: level field -> default glyph
DEFAULT_GLYPHS = {
    "level1": "•",
    "level2": "◦",
    "level3": "▪",
    "level4": "▫",
    "level5": "⁃",     # level 5 and deeper
}
GLYPH_FIELDS = tuple(DEFAULT_GLYPHS)
DEFAULT_ENABLED = True


@dataclass(frozen=True)
class GlyphTable:
    """
    Maps a list nesting level to the glyph displayed in place of the markdown marker.
    Levels 1-4 have their own glyph, level 5 and beyond share `level5`.
    """
    level1: str = DEFAULT_GLYPHS["level1"]
    level2: str = DEFAULT_GLYPHS["level2"]
    level3: str = DEFAULT_GLYPHS["level3"]
    level4: str = DEFAULT_GLYPHS["level4"]
    level5: str = DEFAULT_GLYPHS["level5"]

    def for_level(self, level: int) -> str:
        """Returns the glyph for a 1-based nesting level."""
        if 1 <= level <= 4:
            return getattr(self, f"level{level}")
        return self.level5

    def with_glyph(self, field_name: str, value: str) -> "GlyphTable":
        """Returns a copy with one level replaced. Empty values fall back to the level default."""
        if field_name not in DEFAULT_GLYPHS:
            raise KeyError(f"Unknown glyph field: '{field_name}'. Must be one of {GLYPH_FIELDS}.")
        return dataclasses.replace(self, **{field_name: value or DEFAULT_GLYPHS[field_name]})


@dataclass
class BulletSettings:
    """
    A container for all user settings of the extension.
    One instance is owned by the plugin and passed explicitly to every rewrite call.
    """
    glyphs: GlyphTable = field(default_factory=GlyphTable)
    enabled: bool = DEFAULT_ENABLED

    def set_glyph(self, field_name: str, value: str):
        """Updates one level in place (the table itself is immutable and gets replaced)."""
        self.glyphs = self.glyphs.with_glyph(field_name, value)

    def to_record(self) -> dict:
        """Returns the flat record that is persisted to disk."""
        record: dict = dataclasses.asdict(self.glyphs)
        record["enabled"] = self.enabled
        return record

    @classmethod
    def from_record(cls, record: dict | None) -> "BulletSettings":
        """
        Merges a persisted (possibly partial) record over the defaults.

        Empty or non-string glyphs and a non-boolean `enabled` are replaced with defaults,
        so the resulting object always satisfies the glyph table invariants.
        """
        record = record or {}
        glyphs = {}
        for name, default in DEFAULT_GLYPHS.items():
            value = record.get(name, default)
            if not isinstance(value, str) or not value:
                log.warning(f"Invalid value for '{name}': {value!r}. Using default '{default}'.")
                value = default
            glyphs[name] = value

        enabled = record.get("enabled", DEFAULT_ENABLED)
        if not isinstance(enabled, bool):
            log.warning(f"Invalid value for 'enabled': {enabled!r}. Using default {DEFAULT_ENABLED}.")
            enabled = DEFAULT_ENABLED

        unknown = set(record) - set(DEFAULT_GLYPHS) - {"enabled"}
        if unknown:
            log.debug(f"Ignoring unknown settings keys: {sorted(unknown)}")

        return cls(glyphs=GlyphTable(**glyphs), enabled=enabled)
