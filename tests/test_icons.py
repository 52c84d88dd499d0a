from custombullets.resources.icons import OFF_COLOR, ON_COLOR, render_app_icon, render_status_icon


def test_status_icon_colors():
    on = render_status_icon(True, size=16)
    off = render_status_icon(False, size=16)

    assert on.size == (16, 16)
    assert on.getpixel((8, 8)) == ON_COLOR
    assert off.getpixel((8, 8)) == OFF_COLOR
    # corners stay transparent
    assert on.getpixel((0, 0))[3] == 0


def test_app_icon():
    img = render_app_icon(64)
    assert img.size == (64, 64)
    assert img.mode == "RGBA"
    assert img.getbbox() is not None
