"""System-tray icon: ISO week number image and menu via pystray."""

from typing import Callable

import pystray
from PIL import Image, ImageDraw, ImageFont
from pystray import Menu, MenuItem

from calendar_dates import CalendarDate

ICON_SIZE = 64


def _largest_font(draw: ImageDraw.ImageDraw, text: str, size: int):
    """Biggest TrueType font whose rendering of text fits a size×size box."""
    for font_size in range(size * 2, 10, -2):
        try:
            font = ImageFont.truetype("DejaVuSans-Bold.ttf", font_size)
        except OSError:
            return ImageFont.load_default()
        left, top, right, bottom = draw.textbbox((0, 0), text, font=font)
        if right - left <= size and bottom - top <= size:
            return font
    return ImageFont.load_default()


def create_icon_image(day: CalendarDate | None = None) -> Image.Image:
    """Return a square RGBA image showing the ISO week of ``day`` (default today)."""
    day = day or CalendarDate.today()
    text = str(day.week_of_year())

    img = Image.new("RGBA", (ICON_SIZE, ICON_SIZE), "white")
    draw = ImageDraw.Draw(img)
    font = _largest_font(draw, text, ICON_SIZE)

    # Centre the visible pixels, not the font's advance box
    left, top, right, bottom = draw.textbbox((0, 0), text, font=font)
    x = (ICON_SIZE - (right - left)) / 2 - left
    y = (ICON_SIZE - (bottom - top)) / 2 - top
    draw.text((x, y), text, fill="black", font=font)
    return img


def tray_title(day: CalendarDate | None = None) -> str:
    day = day or CalendarDate.today()
    return f"Mini Calendar – CW {day.week_of_year()}"


def create_tray(
    on_show: Callable[[], None],
    on_exit: Callable[[], None],
    on_settings: Callable[[], None] | None = None,
) -> pystray.Icon:
    """Build and return a pystray Icon (not yet started)."""
    items: list[MenuItem | Menu] = [
        MenuItem("Show Calendar", lambda _icon, _item: on_show(), default=True),
    ]
    if on_settings is not None:
        items.append(MenuItem("Settings", lambda _icon, _item: on_settings()))
    items.append(Menu.SEPARATOR)
    items.append(MenuItem("Exit", lambda _icon, _item: on_exit()))
    return pystray.Icon("mini-calendar", create_icon_image(), tray_title(), Menu(*items))
