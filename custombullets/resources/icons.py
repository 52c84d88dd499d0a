"""
Icons for the GUI, drawn with Pillow at runtime.
"""
import logging

from PIL import Image, ImageDraw


log = logging.getLogger("custom_bullets")

ON_COLOR = (46, 160, 67, 255)
OFF_COLOR = (150, 150, 150, 255)
INK_COLOR = (60, 60, 60, 255)
TRANSPARENT = (0, 0, 0, 0)


def render_status_icon(enabled: bool, size: int = 16) -> Image.Image:
    """A filled dot: green when custom bullets are on, gray when off."""
    img = Image.new("RGBA", (size, size), TRANSPARENT)
    pad = max(1, size // 8)
    draw = ImageDraw.Draw(img)
    draw.ellipse(
        (pad, pad, size - pad - 1, size - pad - 1),
        fill=ON_COLOR if enabled else OFF_COLOR,
    )
    return img


def render_app_icon(size: int = 64, levels: int = 3) -> Image.Image:
    """
    A nested list drawn as dots and lines, one row per level,
    each row indented and with a smaller bullet than the one above.
    """
    img = Image.new("RGBA", (size, size), TRANSPARENT)
    draw = ImageDraw.Draw(img)

    row_height = size // levels
    for i in range(levels):
        radius = max(1, row_height // 4 - i)
        cx = size // 8 + i * (size // 6)
        cy = i * row_height + row_height // 2
        draw.ellipse((cx - radius, cy - radius, cx + radius, cy + radius), fill=INK_COLOR)
        line_width = max(1, radius // 2)
        draw.line((cx + 2 * radius, cy, size - size // 10, cy), fill=INK_COLOR, width=line_width)
    return img


def load_photo_image(img: Image.Image):
    """Converts a PIL image to a Tk-compatible PhotoImage. Requires a Tk root."""
    from PIL import ImageTk
    return ImageTk.PhotoImage(img)
