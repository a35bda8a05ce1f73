"""Tests for the day-cell renderers."""

from calendar_dates import CalendarDate
from calendar_logic import DayState
from calendar_model import CellRecord
from day_views import (
    ACCENT,
    DISABLED_FG,
    GRID_BG,
    TEXT_FG,
    WEEKEND_FG,
    Band,
    BasicDay,
    CustomDay,
    DayAppearance,
    MultiDotDay,
    MultiPeriodDay,
    PeriodDay,
    day_view_for,
    draw,
    draw_blank,
)

THURSDAY = CalendarDate(2024, 3, 14)
SATURDAY = CalendarDate(2024, 3, 16)


def cell(marking=None, state=DayState.NORMAL, day=THURSDAY):
    return CellRecord(day, state, marking, "", f"slot-{day}")


class FakeCanvas:
    def __init__(self, width=30, height=24):
        self.size = (width, height)
        self.calls = []
        self.options = {}

    def winfo_width(self):
        return self.size[0]

    def winfo_height(self):
        return self.size[1]

    def __getitem__(self, key):
        return {"width": self.size[0], "height": self.size[1]}[key]

    def delete(self, tag):
        self.calls.append(("delete", tag))

    def configure(self, **kw):
        self.options.update(kw)

    def create_rectangle(self, *coords, **kw):
        self.calls.append(("rect", coords, kw["fill"]))

    def create_oval(self, *coords, **kw):
        self.calls.append(("oval", coords, kw["fill"]))

    def create_text(self, x, y, **kw):
        self.calls.append(("text", kw["text"], kw["fill"]))

    def kinds(self):
        return [c[0] for c in self.calls]


class TestBasicDay:
    def test_plain_states(self):
        view = BasicDay()
        assert view.appearance(cell()) == DayAppearance("14", TEXT_FG)
        assert view.appearance(cell(day=SATURDAY)).text_color == WEEKEND_FG
        today = view.appearance(cell(state=DayState.TODAY))
        assert today.text_color == ACCENT and today.bold
        assert view.appearance(cell(state=DayState.DISABLED)).text_color == DISABLED_FG
        assert view.appearance(cell({"disabled": True})).text_color == DISABLED_FG

    def test_selected_and_marked(self):
        look = BasicDay().appearance(cell({"selected": True, "marked": True,
                                           "dotColor": "#00AA00"}))
        assert look.circle == ACCENT
        assert look.text_color == "white"
        assert look.dots == ("#00AA00",)

    def test_custom_selected_colours(self):
        look = BasicDay().appearance(cell({"selected": True, "selectedColor": "#123456",
                                           "selectedTextColor": "#FFFF00"}))
        assert (look.circle, look.text_color) == ("#123456", "#FFFF00")


class TestPeriodDay:
    def test_band_ends(self):
        look = PeriodDay().appearance(cell({"startingDay": True, "color": "#50cebb",
                                            "textColor": "white"}))
        assert look.band == Band("#50cebb", starts=True, ends=False)
        assert look.text_color == "white"

    def test_middle_of_period(self):
        look = PeriodDay().appearance(cell({"color": "#70d7c7"}))
        assert look.band == Band("#70d7c7")

    def test_no_marking_no_band(self):
        assert PeriodDay().appearance(cell()).band is None


class TestMultiDotDay:
    def test_dots_from_entry(self):
        marking = {"dots": [{"key": "a", "color": "red"}, {"key": "b", "color": "blue"}]}
        assert MultiDotDay().appearance(cell(marking)).dots == ("red", "blue")

    def test_dots_from_sequence(self):
        marking = [{"key": "a", "color": "red"}, {"key": "b", "color": "green"}]
        assert MultiDotDay().appearance(cell(marking)).dots == ("red", "green")

    def test_selected_dot_colour(self):
        marking = {"selected": True,
                   "dots": [{"key": "a", "color": "red", "selectedDotColor": "white"}]}
        look = MultiDotDay().appearance(cell(marking))
        assert look.dots == ("white",)
        assert look.circle == ACCENT


class TestMultiPeriodDay:
    def test_stripes(self):
        marking = {"periods": [
            {"startingDay": True, "endingDay": False, "color": "#5f9ea0"},
            {"color": "transparent"},
            {"startingDay": False, "endingDay": True, "color": "#ffa500"},
        ]}
        look = MultiPeriodDay().appearance(cell(marking))
        assert look.stripes == (
            Band("#5f9ea0", True, False),
            Band("transparent"),
            Band("#ffa500", False, True),
        )


class TestCustomDay:
    def test_custom_styles(self):
        marking = {"customStyles": {"container": {"backgroundColor": "green"},
                                    "text": {"color": "black", "fontWeight": "bold"}}}
        look = CustomDay().appearance(cell(marking))
        assert look.background == "green"
        assert look.text_color == "black"
        assert look.bold


class TestSelection:
    def test_marking_type_switch(self):
        assert isinstance(day_view_for("dot"), BasicDay)
        assert isinstance(day_view_for(None), BasicDay)
        assert isinstance(day_view_for("period"), PeriodDay)
        assert isinstance(day_view_for("multi-dot"), MultiDotDay)
        assert isinstance(day_view_for("multi-period"), MultiPeriodDay)
        assert isinstance(day_view_for("custom"), CustomDay)

    def test_unknown_type_falls_back(self):
        assert isinstance(day_view_for("sparkles"), BasicDay)

    def test_explicit_component_wins(self):
        assert isinstance(day_view_for("dot", CustomDay), CustomDay)
        view = PeriodDay()
        assert day_view_for("dot", view) is view


class TestDraw:
    def test_blank(self):
        canvas = FakeCanvas()
        draw_blank(canvas)
        assert canvas.calls == [("delete", "all")]
        assert canvas.options["bg"] == GRID_BG

    def test_text_and_dots(self):
        canvas = FakeCanvas()
        draw(canvas, DayAppearance("14", TEXT_FG, dots=("red", "blue")), "f", "fb")
        assert canvas.kinds() == ["delete", "text", "oval", "oval"]
        assert canvas.calls[1] == ("text", "14", TEXT_FG)

    def test_selected_circle_under_text(self):
        canvas = FakeCanvas()
        draw(canvas, DayAppearance("14", "white", circle=ACCENT), "f", "fb")
        assert canvas.kinds() == ["delete", "oval", "text"]

    def test_period_band_start(self):
        canvas = FakeCanvas(width=30, height=24)
        draw(canvas, DayAppearance("14", band=Band("#abc", starts=True)), "f", "fb")
        rect = canvas.calls[1]
        assert rect[0] == "rect"
        assert rect[1][0] == 15 and rect[1][2] == 30
        assert canvas.calls[2][0] == "oval"

    def test_transparent_stripes_are_skipped(self):
        canvas = FakeCanvas()
        look = DayAppearance("14", stripes=(Band("transparent"), Band("#ffa500")))
        draw(canvas, look, "f", "fb")
        rects = [c for c in canvas.calls if c[0] == "rect"]
        assert [r[2] for r in rects] == ["#ffa500"]

    def test_unmapped_canvas_uses_configured_size(self):
        configured = {"width": 28, "height": 22}

        class Unmapped(FakeCanvas):
            def __getitem__(self, key):
                return configured[key]

        canvas = Unmapped(width=1, height=1)
        draw(canvas, DayAppearance("1", circle=ACCENT), "f", "fb")
        # 30x24 after the 2 px border allowance, radius 11
        assert canvas.calls[1] == ("oval", (4, 1, 26, 23), ACCENT)
