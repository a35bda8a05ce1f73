"""Single-month calendar window (tkinter) positioned above the taskbar."""

import logging
import time
import tkinter as tk
from tkinter import colorchooser
from tkinter import font as tkfont

from calendar_dates import CalendarDate
from calendar_logic import DAY_ABBR
from calendar_model import Calendar, CalendarConfig, CellRecord
from day_views import (
    ACCENT,
    GRID_BG,
    SEL_BG,
    day_view_for,
    draw,
    draw_blank,
)
from gestures import SwipeRecognizer
from public_holidays import COUNTRIES, holiday_markings, holidays_by_country
from settings import MARKING_TYPES, config_options, load_settings, save_settings

logger = logging.getLogger(__name__)

HEADER_BG = "#F3F3F3"
WN_FG = "#888888"
ARROW_DISABLED_FG = "#C8C8C8"

LONG_PRESS_MS = 500


class _ToolTip:
    """Shared tooltip showing a cell's accessibility label."""

    __slots__ = ("_root", "_tw")

    def __init__(self, root: tk.Tk) -> None:
        self._root = root
        self._tw: tk.Toplevel | None = None

    def show(self, widget: tk.Widget, text: str) -> None:
        self.hide()
        tw = tk.Toplevel(self._root)
        tw.wm_overrideredirect(True)
        tw.wm_attributes("-topmost", True)
        tk.Label(
            tw, text=text, bg="#FFFFE0", fg="black", wraplength=260,
            relief="solid", borderwidth=1, padx=6, pady=3, justify="left",
        ).pack()
        x = widget.winfo_rootx() + widget.winfo_width() // 2
        y = widget.winfo_rooty() + widget.winfo_height() + 2
        tw.wm_geometry(f"+{x}+{y}")
        self._tw = tw

    def hide(self) -> None:
        if self._tw:
            self._tw.destroy()
            self._tw = None


class _MonthPanel:
    """Pre-allocated widgets for one month: weekday row, 6 weeks of cells."""

    __slots__ = ("frame", "wk_header", "day_headers", "week_nums", "day_cells")

    def __init__(self, parent: tk.Frame, fonts: dict, bind) -> None:
        self.frame = tk.Frame(parent, bg=GRID_BG)

        self.wk_header = tk.Label(
            self.frame, text="Wk", font=fonts["bold"], bg=GRID_BG, fg=WN_FG, width=3,
        )
        self.day_headers: list[tk.Label] = []
        for col in range(7):
            lbl = tk.Label(self.frame, font=fonts["bold"], bg=GRID_BG, width=3)
            lbl.grid(row=0, column=col + 1)
            self.day_headers.append(lbl)

        self.week_nums: list[tk.Label] = []
        self.day_cells: list[list[tk.Canvas]] = []
        for r in range(6):
            wn = tk.Label(self.frame, font=fonts["wn"], bg=GRID_BG, fg=WN_FG, width=3)
            self.week_nums.append(wn)
            row_cells: list[tk.Canvas] = []
            for c in range(7):
                cell = tk.Canvas(
                    self.frame, width=fonts["cell_w"], height=fonts["cell_h"],
                    bg=GRID_BG, highlightthickness=0, borderwidth=0,
                )
                cell.grid(row=r + 1, column=c + 1)
                bind(cell)
                row_cells.append(cell)
            self.day_cells.append(row_cells)

    def show_week_numbers(self, visible: bool) -> None:
        widgets = [self.wk_header] + self.week_nums
        for row, w in enumerate(widgets):
            if visible:
                w.grid(row=row, column=0)
            else:
                w.grid_remove()


class CalendarWindow:
    """Month calendar that appears above the taskbar."""

    def __init__(self) -> None:
        self.root = tk.Tk()
        self.root.title("Mini Calendar")
        self.root.resizable(False, False)
        self.root.configure(bg=GRID_BG)
        self.root.attributes("-topmost", True)

        self._setup_fonts()

        self.settings = load_settings()
        self._saved_width: int | None = self.settings["window_width"]
        self._saved_height: int | None = self.settings["window_height"]

        # Selection state
        self.sel_start: CalendarDate | None = None
        self.sel_end: CalendarDate | None = None
        self._extend_selection = False

        # Pointer state
        self._swipe = SwipeRecognizer()
        self._press_cell: CellRecord | None = None
        self._moved = False
        self._long_press_id: str | None = None
        self._long_pressed = False

        # Widget-to-cell mapping (filled during _render)
        self._widget_cells: dict[int, CellRecord] = {}

        self.calendar = Calendar(
            CalendarConfig(**config_options(self.settings)),
            on_day_press=self._on_day_press,
            on_day_long_press=self._on_day_long_press,
            on_month_change=self._on_month_change,
        )
        self.calendar.update(marked_dates=self._marked_dates())

        _tmp = tk.Label(self.root, text="00", font=self.font_normal, width=3)
        _tmp.update_idletasks()
        self._panel_fonts = {
            "bold": self.font_bold, "wn": self.font_wn,
            "cell_w": _tmp.winfo_reqwidth(), "cell_h": _tmp.winfo_reqheight() + 6,
        }
        _tmp.destroy()

        self._build_shell()
        self._tooltip = _ToolTip(self.root)
        self._render()

        self.root.bind("<Escape>", self._on_escape)
        self.root.bind("<Configure>", self._on_configure)
        self.root.protocol("WM_DELETE_WINDOW", self.hide)
        self.root.withdraw()

    # ------------------------------------------------------------------
    # Fonts
    # ------------------------------------------------------------------
    def _setup_fonts(self) -> None:
        families = tkfont.families(self.root)
        base = "Segoe UI" if "Segoe UI" in families else "TkDefaultFont"
        self.font_normal = tkfont.Font(family=base, size=9)
        self.font_bold = tkfont.Font(family=base, size=9, weight="bold")
        self.font_header = tkfont.Font(family=base, size=10, weight="bold")
        self.font_nav = tkfont.Font(family=base, size=12, weight="bold")
        self.font_wn = tkfont.Font(family=base, size=8)
        self.font_footer = tkfont.Font(family=base, size=9)

    # ------------------------------------------------------------------
    # Build shell (once): header row + month panel + footer
    # ------------------------------------------------------------------
    def _build_shell(self) -> None:
        self._outer = tk.Frame(self.root, bg=GRID_BG)
        self._outer.pack(padx=6, pady=4)

        # Header row: ◀  March 2024  ▶  Today
        nav = tk.Frame(self._outer, bg=HEADER_BG)
        nav.pack(fill="x", pady=(0, 2))

        self._btn_prev = tk.Label(
            nav, text="◀", font=self.font_nav, bg=HEADER_BG, cursor="hand2"
        )
        self._btn_prev.pack(side="left", padx=6)
        self._btn_prev.bind("<Button-1>", lambda _e: self._arrow(-1))

        self._btn_today = tk.Label(
            nav, text="Today", font=self.font_bold, bg=HEADER_BG, fg=ACCENT,
            cursor="hand2",
        )
        self._btn_today.pack(side="right", padx=6)
        self._btn_today.bind("<Button-1>", lambda _e: self._go_today())

        self._btn_next = tk.Label(
            nav, text="▶", font=self.font_nav, bg=HEADER_BG, cursor="hand2"
        )
        self._btn_next.pack(side="right", padx=6)
        self._btn_next.bind("<Button-1>", lambda _e: self._arrow(1))

        self._title = tk.Label(nav, font=self.font_header, bg=HEADER_BG, fg="#333333")
        self._title.pack(side="left", expand=True)

        self._panel = _MonthPanel(self._outer, self._panel_fonts, self._bind_cell)
        self._panel.frame.pack()

        self._footer_label = tk.Label(
            self._outer, font=self.font_footer, bg=GRID_BG, fg="#555555",
        )
        self._footer_label.pack(pady=(4, 0))

    def _bind_cell(self, cell: tk.Canvas) -> None:
        cell.bind("<ButtonPress-1>", self._on_press)
        cell.bind("<B1-Motion>", self._on_motion)
        cell.bind("<ButtonRelease-1>", self._on_release)
        cell.bind("<Enter>", self._on_cell_enter)
        cell.bind("<Leave>", self._on_cell_leave)

    # ------------------------------------------------------------------
    # Markings: holidays plus the current selection
    # ------------------------------------------------------------------
    def _marked_dates(self) -> dict:
        anchor = self.calendar.current_month
        marks = holiday_markings(
            (anchor.year - 1, anchor.year, anchor.year + 1),
            self.settings["holidays"], self.settings["holiday_colors"],
        )
        lo, hi = self._sel_range()
        if lo is None:
            return marks
        period = self.calendar.config.marking_type == "period"
        day = lo
        while day <= hi:
            entry = dict(marks.get(str(day), {}))
            if period:
                entry.update(color=SEL_BG, startingDay=day == lo, endingDay=day == hi)
            else:
                entry["selected"] = True
            marks[str(day)] = entry
            day = day.add_days(1)
        return marks

    def _refresh_marks(self) -> None:
        self.calendar.update(marked_dates=self._marked_dates())
        self._render()

    # ------------------------------------------------------------------
    # Render header + grid from the calendar model
    # ------------------------------------------------------------------
    def _render(self) -> None:
        self._widget_cells.clear()
        header = self.calendar.header()
        panel = self._panel

        title = header.title + ("  …" if header.show_indicator else "")
        self._title.configure(text=title)
        for btn, arrow, enabled in (
            (self._btn_prev, "◀", header.left_arrow_enabled),
            (self._btn_next, "▶", header.right_arrow_enabled),
        ):
            btn.configure(text=arrow if header.show_arrows else "",
                          fg="black" if enabled else ARROW_DISABLED_FG,
                          cursor="hand2" if enabled else "")

        for col, lbl in enumerate(panel.day_headers):
            if col < len(header.day_names):
                name = header.day_names[col]
                weekend = DAY_ABBR.index(name) in (0, 6)
                fg = ARROW_DISABLED_FG if col in header.disabled_day_indexes else (
                    "#CC0000" if weekend else "#333333")
                lbl.configure(text=name, fg=fg)
            else:
                lbl.configure(text="")
        panel.show_week_numbers(header.week_numbers)

        view = day_view_for(self.calendar.config.marking_type,
                            self.calendar.config.day_component)
        weeks = self.calendar.weeks()
        for r in range(6):
            week = weeks[r] if r < len(weeks) else None
            panel.week_nums[r].configure(
                text=str(week.week_number) if week and week.week_number else "")
            for c in range(7):
                canvas = panel.day_cells[r][c]
                cell = week.cells[c] if week else None
                if cell is None:
                    draw_blank(canvas)
                    continue
                cursor = "" if cell.touch_disabled else "hand2"
                draw(canvas, view.appearance(cell), self.font_normal, self.font_bold,
                     cursor=cursor)
                self._widget_cells[id(canvas)] = cell

        self._footer_label.configure(text=self._footer_text())

    # ------------------------------------------------------------------
    # Selection helpers
    # ------------------------------------------------------------------
    def _sel_range(self) -> tuple[CalendarDate | None, CalendarDate | None]:
        if self.sel_start and self.sel_end:
            return min(self.sel_start, self.sel_end), max(self.sel_start, self.sel_end)
        return None, None

    def _clear_selection(self) -> None:
        self.sel_start = None
        self.sel_end = None

    # ------------------------------------------------------------------
    # Calendar callbacks
    # ------------------------------------------------------------------
    def _on_day_press(self, data: dict) -> None:
        day = CalendarDate(data["year"], data["month"], data["day"])
        if self._extend_selection and self.sel_start is not None:
            self.sel_end = day
        else:
            self.sel_start = self.sel_end = day
        self._refresh_marks()

    def _on_day_long_press(self, data: dict) -> None:
        day = CalendarDate(data["year"], data["month"], data["day"])
        if self.sel_start is None:
            self.sel_start = day
        self.sel_end = day
        self._refresh_marks()

    def _on_month_change(self, data: dict) -> None:
        logger.debug("Showing %04d-%02d", data["year"], data["month"])
        self._refresh_marks()

    # ------------------------------------------------------------------
    # Pointer events: click, long press, swipe
    # ------------------------------------------------------------------
    def _on_press(self, event: tk.Event) -> None:
        self._press_cell = self._widget_cells.get(id(event.widget))
        self._extend_selection = bool(event.state & 0x0001)  # Shift
        self._moved = False
        self._long_pressed = False
        self._swipe.press(event.x_root, event.y_root, time.monotonic() * 1000)
        if self._press_cell is not None:
            self._long_press_id = self.root.after(LONG_PRESS_MS, self._fire_long_press)

    def _on_motion(self, event: tk.Event) -> None:
        if self._swipe.moved_beyond_click(event.x_root, event.y_root):
            self._moved = True
            self._cancel_long_press()

    def _on_release(self, event: tk.Event) -> None:
        self._cancel_long_press()
        direction = self._swipe.release(event.x_root, event.y_root,
                                        time.monotonic() * 1000)
        cell, self._press_cell = self._press_cell, None
        if self._long_pressed:
            return
        if direction is not None:
            self.calendar.on_swipe(direction)
            self._render()
        elif not self._moved and cell is not None and not cell.touch_disabled:
            self.calendar.press_day(cell.date)

    def _fire_long_press(self) -> None:
        self._long_press_id = None
        cell = self._press_cell
        if cell is None or self._moved or cell.touch_disabled:
            return
        self._long_pressed = True
        self.calendar.long_press_day(cell.date)

    def _cancel_long_press(self) -> None:
        if self._long_press_id is not None:
            self.root.after_cancel(self._long_press_id)
            self._long_press_id = None

    # ------------------------------------------------------------------
    # Tooltip on hover
    # ------------------------------------------------------------------
    def _on_cell_enter(self, event: tk.Event) -> None:
        cell = self._widget_cells.get(id(event.widget))
        if cell is None:
            return
        lines = [cell.accessibility_label]
        if isinstance(cell.marking, dict):
            lines.extend(cell.marking.get("holidays", []))
        self._tooltip.show(event.widget, "\n".join(lines))

    def _on_cell_leave(self, _event: tk.Event) -> None:
        self._tooltip.hide()

    # ------------------------------------------------------------------
    # Footer text
    # ------------------------------------------------------------------
    def _footer_text(self) -> str:
        today_str = f"Today: {CalendarDate.today().to_date().strftime('%d.%m.%Y')}"
        sel_lo, sel_hi = self._sel_range()
        if sel_lo is None or sel_lo == sel_hi:
            return today_str

        total_days = (sel_hi.to_date() - sel_lo.to_date()).days + 1
        full_weeks, rem_days = divmod(total_days, 7)

        parts: list[str] = []
        if full_weeks:
            parts.append(f"{full_weeks} week{'s' if full_weeks != 1 else ''}")
        if rem_days:
            parts.append(f"{rem_days} day{'s' if rem_days != 1 else ''}")

        lo, hi = sel_lo.to_date(), sel_hi.to_date()
        range_str = f"{lo.strftime('%d.%m')} → {hi.strftime('%d.%m')}"
        return f"{range_str}:  {total_days} days  ({', '.join(parts)})     {today_str}"

    # ------------------------------------------------------------------
    # ESC clears selection first, then hides
    # ------------------------------------------------------------------
    def _on_escape(self, _event: tk.Event) -> None:
        if self.sel_start is not None:
            self._clear_selection()
            self._refresh_marks()
        else:
            self.hide()

    # ------------------------------------------------------------------
    # Settings dialog
    # ------------------------------------------------------------------
    def open_settings(self) -> None:
        dlg = tk.Toplevel(self.root)
        dlg.title("Settings")
        dlg.resizable(False, False)
        dlg.attributes("-topmost", True)
        dlg.grab_set()

        frame = tk.Frame(dlg, padx=12, pady=8)
        frame.pack()

        tk.Label(frame, text="Week starts on:", font=self.font_normal).grid(
            row=0, column=0, sticky="w", pady=4,
        )
        first_day_var = tk.StringVar(value=DAY_ABBR[self.settings["first_day"]])
        tk.OptionMenu(frame, first_day_var, *DAY_ABBR).grid(
            row=0, column=1, sticky="w", padx=(8, 0), pady=4,
        )

        tk.Label(frame, text="Day style:", font=self.font_normal).grid(
            row=1, column=0, sticky="w", pady=4,
        )
        marking_var = tk.StringVar(value=self.settings["marking_type"])
        tk.OptionMenu(frame, marking_var, *MARKING_TYPES).grid(
            row=1, column=1, sticky="w", padx=(8, 0), pady=4,
        )

        bool_vars: dict[str, tk.BooleanVar] = {}
        options = [
            ("show_six_weeks", "Always show six weeks"),
            ("hide_extra_days", "Hide days of other months"),
            ("show_week_numbers", "Show week numbers"),
            ("enable_swipe_months", "Swipe to change month"),
            ("disable_month_change", "Stay on month when clicking other months"),
        ]
        for i, (key, text) in enumerate(options):
            var = tk.BooleanVar(value=self.settings[key])
            bool_vars[key] = var
            tk.Checkbutton(frame, text=text, variable=var, font=self.font_normal).grid(
                row=2 + i, column=0, columnspan=2, sticky="w",
            )

        # --- Holiday section ---
        holiday_frame = tk.LabelFrame(
            frame, text="Holidays", font=self.font_bold, padx=8, pady=4,
        )
        holiday_frame.grid(row=8, column=0, columnspan=2, sticky="we", pady=(8, 0))

        enabled = set(self.settings["holidays"])
        check_vars: dict[str, tk.BooleanVar] = {}
        color_vals: dict[str, str] = dict(self.settings["holiday_colors"])

        for col_idx, (code, country_name) in enumerate(COUNTRIES):
            col_frame = tk.Frame(holiday_frame)
            col_frame.grid(row=0, column=col_idx, padx=8, pady=2, sticky="n")

            hdr = tk.Frame(col_frame)
            hdr.pack(fill="x", pady=(0, 4))
            tk.Label(hdr, text=country_name, font=self.font_bold).pack(side="left")

            swatch = tk.Label(
                hdr, text="  ", bg=color_vals.get(code, "#888888"),
                relief="raised", borderwidth=1, cursor="hand2",
            )
            swatch.pack(side="right", padx=(4, 0))

            def _make_picker(c=code, sw=swatch):
                def _pick(_e=None):
                    result = colorchooser.askcolor(
                        color=color_vals.get(c), parent=dlg, title=f"Colour for {c}")
                    if result[1]:
                        color_vals[c] = result[1]
                        sw.configure(bg=result[1])
                return _pick

            swatch.bind("<Button-1>", _make_picker())

            for key, name in holidays_by_country(code):
                var = tk.BooleanVar(value=(key in enabled))
                check_vars[key] = var
                tk.Checkbutton(
                    col_frame, text=name, variable=var,
                    font=self.font_normal, anchor="w",
                ).pack(fill="x")

        # --- Buttons ---
        btn_frame = tk.Frame(frame)
        btn_frame.grid(row=9, column=0, columnspan=2, pady=(8, 0))

        def on_ok() -> None:
            self.settings["first_day"] = DAY_ABBR.index(first_day_var.get())
            self.settings["marking_type"] = marking_var.get()
            for key, var in bool_vars.items():
                self.settings[key] = var.get()
            self.settings["holidays"] = [k for k, v in check_vars.items() if v.get()]
            self.settings["holiday_colors"] = color_vals
            save_settings(self.settings)

            self._clear_selection()
            self.calendar.update(**config_options(self.settings))
            dlg.destroy()
            self._refresh_marks()

        tk.Button(btn_frame, text="OK", width=8, command=on_ok).pack(
            side="left", padx=4,
        )
        tk.Button(btn_frame, text="Cancel", width=8, command=dlg.destroy).pack(
            side="left", padx=4,
        )

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------
    def _arrow(self, direction: int) -> None:
        header = self.calendar.header()
        if not header.show_arrows:
            return
        if direction < 0 and header.left_arrow_enabled:
            self.calendar.press_arrow_left()
        elif direction > 0 and header.right_arrow_enabled:
            self.calendar.press_arrow_right()
        self._render()

    def _go_today(self) -> None:
        self._clear_selection()
        if not self.calendar.navigator.update_month(CalendarDate.today()):
            self._refresh_marks()

    # ------------------------------------------------------------------
    # Track and persist window size
    # ------------------------------------------------------------------
    def _on_configure(self, event: tk.Event) -> None:
        if event.widget is not self.root:
            return
        self._saved_width = self.root.winfo_width()
        self._saved_height = self.root.winfo_height()

    def _persist_size(self) -> None:
        self.settings["window_width"] = self._saved_width
        self.settings["window_height"] = self._saved_height
        save_settings(self.settings)

    # ------------------------------------------------------------------
    # Show / Hide / Toggle
    # ------------------------------------------------------------------
    def toggle(self) -> None:
        if self.root.state() == "withdrawn" or not self.root.winfo_viewable():
            self.show()
        else:
            self.hide()

    def show(self) -> None:
        self._clear_selection()
        self.calendar.navigator.update_month(CalendarDate.today(), silent=True)
        self._refresh_marks()
        self.root.deiconify()
        self._position_window()
        self.root.lift()
        self.root.focus_force()

    def hide(self) -> None:
        self._tooltip.hide()
        if self._saved_width is not None and self._saved_height is not None:
            self._persist_size()
        self.root.withdraw()

    # ------------------------------------------------------------------
    # Position bottom-right of the screen
    # ------------------------------------------------------------------
    def _position_window(self) -> None:
        self.root.update_idletasks()
        win_w = self.root.winfo_reqwidth()
        win_h = self.root.winfo_reqheight()
        x = self.root.winfo_screenwidth() - win_w - 12
        y = self.root.winfo_screenheight() - win_h - 60
        self.root.geometry(f"+{x}+{y}")
