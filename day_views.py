"""Day-cell renderers: one per marking type, all drawing on a tk Canvas.

Each view turns a :class:`CellRecord` into a :class:`DayAppearance` (pure,
no widgets) and :func:`draw` paints that appearance on any object with the
``tkinter.Canvas`` drawing methods.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from calendar_logic import DayState
from calendar_model import CellRecord
from marking import marking_entries

logger = logging.getLogger(__name__)

# Colours
ACCENT = "#0078D4"
SEL_BG = "#B3D7F2"
GRID_BG = "white"
TEXT_FG = "black"
WEEKEND_FG = "#CC0000"
DISABLED_FG = "#B0B0B0"


@dataclass(frozen=True)
class Band:
    color: str
    starts: bool = False
    ends: bool = False


@dataclass(frozen=True)
class DayAppearance:
    text: str
    text_color: str = TEXT_FG
    bold: bool = False
    circle: str | None = None
    dots: tuple[str, ...] = ()
    band: Band | None = None
    stripes: tuple[Band, ...] = ()
    background: str | None = None


class DayView:
    """Base renderer: state colours shared by every marking type."""

    name = "base"

    def appearance(self, cell: CellRecord) -> DayAppearance:
        raise NotImplementedError

    @staticmethod
    def _merged(cell: CellRecord) -> dict:
        merged: dict = {}
        for entry in marking_entries(cell.marking):
            for key, value in entry.items():
                merged.setdefault(key, value)
        return merged

    @staticmethod
    def _text_color(cell: CellRecord, merged: dict) -> tuple[str, bool]:
        if cell.state == DayState.DISABLED or merged.get("disabled"):
            return DISABLED_FG, False
        if cell.state == DayState.TODAY:
            return ACCENT, True
        if cell.date.weekday() in (0, 6):
            return WEEKEND_FG, False
        return TEXT_FG, False


class BasicDay(DayView):
    """Single mark: selection circle plus at most one dot."""

    name = "dot"

    def appearance(self, cell: CellRecord) -> DayAppearance:
        m = self._merged(cell)
        fg, bold = self._text_color(cell, m)
        circle = None
        if m.get("selected"):
            circle = m.get("selectedColor", ACCENT)
            fg = m.get("selectedTextColor", "white")
        dots = (m.get("dotColor", ACCENT),) if m.get("marked") else ()
        return DayAppearance(str(cell.date.day), fg, bold, circle, dots)


class PeriodDay(DayView):
    """Continuous band across a date range, rounded at its ends."""

    name = "period"

    def appearance(self, cell: CellRecord) -> DayAppearance:
        m = self._merged(cell)
        fg, bold = self._text_color(cell, m)
        band = None
        if m.get("color") or m.get("startingDay") or m.get("endingDay"):
            band = Band(m.get("color", SEL_BG),
                        bool(m.get("startingDay")), bool(m.get("endingDay")))
            if m.get("textColor"):
                fg = m["textColor"]
        dots = (m.get("dotColor", ACCENT),) if m.get("marked") else ()
        return DayAppearance(str(cell.date.day), fg, bold, dots=dots, band=band)


class MultiDotDay(DayView):
    """Several coloured dots under the day number."""

    name = "multi-dot"

    def appearance(self, cell: CellRecord) -> DayAppearance:
        m = self._merged(cell)
        fg, bold = self._text_color(cell, m)
        selected = bool(m.get("selected"))
        circle = None
        if selected:
            circle = m.get("selectedColor", ACCENT)
            fg = "white"
        dots = []
        for dot in self._dots(cell):
            color = dot.get("selectedDotColor") if selected else None
            dots.append(color or dot.get("color", ACCENT))
        return DayAppearance(str(cell.date.day), fg, bold, circle, tuple(dots))

    @staticmethod
    def _dots(cell: CellRecord) -> list[dict]:
        found: list[dict] = []
        for entry in marking_entries(cell.marking):
            if "dots" in entry:
                found.extend(d for d in entry["dots"] if d)
            elif "color" in entry:
                found.append(entry)
        return found


class MultiPeriodDay(DayView):
    """Stacked period stripes below the day number."""

    name = "multi-period"

    def appearance(self, cell: CellRecord) -> DayAppearance:
        m = self._merged(cell)
        fg, bold = self._text_color(cell, m)
        stripes = []
        for entry in marking_entries(cell.marking):
            periods = entry.get("periods", [entry] if "color" in entry else [])
            for period in periods:
                stripes.append(Band(period.get("color", "transparent"),
                                    bool(period.get("startingDay")),
                                    bool(period.get("endingDay"))))
        return DayAppearance(str(cell.date.day), fg, bold, stripes=tuple(stripes))


class CustomDay(DayView):
    """Colours taken straight from ``customStyles``."""

    name = "custom"

    def appearance(self, cell: CellRecord) -> DayAppearance:
        m = self._merged(cell)
        fg, bold = self._text_color(cell, m)
        styles = m.get("customStyles") or {}
        container = styles.get("container") or {}
        text = styles.get("text") or {}
        circle = ACCENT if m.get("selected") and not container else None
        if circle:
            fg = "white"
        return DayAppearance(
            str(cell.date.day),
            text.get("color", fg),
            text.get("fontWeight") == "bold" or bold,
            circle,
            background=container.get("backgroundColor"),
        )


DAY_VIEWS: dict[str, type[DayView]] = {
    view.name: view
    for view in (BasicDay, PeriodDay, MultiDotDay, MultiPeriodDay, CustomDay)
}


def day_view_for(marking_type: str | None, day_component: Any = None) -> DayView:
    """Pick the renderer: an explicit component wins over the marking type."""
    if day_component is not None:
        return day_component() if isinstance(day_component, type) else day_component
    view = DAY_VIEWS.get(marking_type or "dot")
    if view is None:
        logger.warning("Unknown marking type %r, using single-mark days", marking_type)
        view = BasicDay
    return view()


# ------------------------------------------------------------------
# Canvas drawing
# ------------------------------------------------------------------
def _cell_size(canvas) -> tuple[int, int]:
    w = canvas.winfo_width()
    h = canvas.winfo_height()
    if w <= 1:
        w = int(canvas["width"]) + 2
    if h <= 1:
        h = int(canvas["height"]) + 2
    return w, h


def draw_blank(canvas) -> None:
    canvas.delete("all")
    canvas.configure(bg=GRID_BG, cursor="")


def draw(canvas, look: DayAppearance, font, bold_font, cursor: str = "") -> None:
    canvas.delete("all")
    w, h = _cell_size(canvas)
    canvas.configure(bg=look.background or GRID_BG, cursor=cursor)
    cx, cy = w // 2, h // 2
    r = min(w, h) // 2 - 1

    if look.band is not None:
        band = look.band
        x1 = cx if band.starts else 0
        x2 = cx if band.ends else w
        canvas.create_rectangle(x1, cy - r, x2, cy + r, fill=band.color, outline="")
        if band.starts or band.ends:
            canvas.create_oval(cx - r, cy - r, cx + r, cy + r,
                               fill=band.color, outline="")

    if look.circle:
        canvas.create_oval(cx - r, cy - r, cx + r, cy + r,
                           fill=look.circle, outline="")

    canvas.create_text(cx, cy - 1, text=look.text, fill=look.text_color,
                       font=bold_font if look.bold else font)

    if look.dots:
        size = 4
        total = len(look.dots) * (size + 2) - 2
        x = cx - total // 2
        y = h - size - 2
        for color in look.dots:
            canvas.create_oval(x, y, x + size, y + size, fill=color, outline="")
            x += size + 2

    # Stripes stack upward from the bottom edge
    stripe_h = 3
    for i, stripe in enumerate(look.stripes):
        if stripe.color == "transparent":
            continue
        y2 = h - 1 - i * (stripe_h + 1)
        x1 = 2 if stripe.starts else 0
        x2 = w - 2 if stripe.ends else w
        canvas.create_rectangle(x1, y2 - stripe_h, x2, y2,
                                fill=stripe.color, outline="")
