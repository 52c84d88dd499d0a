from custombullets.core.settings_panel import PANEL_TITLE, build_setting_fields


def test_fields_in_order(plugin):
    fields = build_setting_fields(plugin)
    assert [f.key for f in fields] == ["enabled", "level1", "level2", "level3", "level4", "level5"]
    assert [f.kind for f in fields] == ["toggle"] + ["text"] * 5
    assert PANEL_TITLE == "Custom Bullets Settings"


def test_labels(plugin):
    fields = {f.key: f for f in build_setting_fields(plugin)}
    assert fields["enabled"].name == "Enable Custom Bullets"
    assert fields["level2"].name == "Level 2 Bullet"
    assert fields["level2"].description == "Character to use for level 2 bullets"
    assert fields["level5"].name == "Level 5+ Bullet"
    assert fields["level5"].description == "Character to use for level 5 and deeper bullets"


def test_defaults_and_getters(plugin):
    fields = {f.key: f for f in build_setting_fields(plugin)}
    assert fields["enabled"].default is True
    assert fields["level3"].default == "▪"
    assert fields["level3"].getter() == "▪"


def test_setters_write_through(plugin, host, store):
    fields = {f.key: f for f in build_setting_fields(plugin)}

    fields["level3"].setter("✦").result()
    fields["enabled"].setter(False).result()

    assert fields["level3"].getter() == "✦"
    assert fields["enabled"].getter() is False
    assert host.refresh_count == 2
    saved = store.load()
    assert saved.glyphs.level3 == "✦"
    assert saved.enabled is False


def test_each_setter_targets_its_own_level(plugin):
    fields = build_setting_fields(plugin)
    for i, field in enumerate(fields[1:], start=1):
        field.setter(str(i)).result()
    assert [f.getter() for f in fields[1:]] == ["1", "2", "3", "4", "5"]
