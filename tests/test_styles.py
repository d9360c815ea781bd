import datetime

import pytest

from ecal import palette
from ecal.models import Event
from ecal.styles import Cell, cell_codes, event_step, format_cell, today_step, weekend_step

MONDAY = datetime.date(2024, 1, 8)
SATURDAY = datetime.date(2024, 1, 6)


def event_on(day, fg=None, bg=None):
    return Event(date=day, description="x", fg_color=fg, bg_color=bg)


@pytest.mark.parametrize(
    ("name", "foreground", "code"),
    [("red", True, "\x1b[31m"), ("Blue", False, "\x1b[44m"), ("white", True, "\x1b[37m"), ("mauve", True, None), (None, True, None), ("", False, None)],
)
def test_color_code(name, foreground, code):
    assert palette.color_code(name, foreground) == code


def test_plain_weekday_has_no_style():
    assert cell_codes(Cell(day=MONDAY)) == []


def test_weekend():
    assert cell_codes(Cell(day=SATURDAY)) == [palette.WEEKEND_FG]
    assert cell_codes(Cell(day=SATURDAY, event=event_on(SATURDAY))) == [palette.WEEKEND_FG, palette.BOLD]


def test_weekend_ignores_custom_event_colors():
    cell = Cell(day=SATURDAY, event=event_on(SATURDAY, fg="green", bg="blue"))
    assert cell_codes(cell) == [palette.WEEKEND_FG, palette.BOLD]


def test_weekday_event_without_colors_is_inverted():
    assert cell_codes(Cell(day=MONDAY, event=event_on(MONDAY))) == [palette.INVERT]
    assert cell_codes(Cell(day=MONDAY, event=event_on(MONDAY, fg="mauve"))) == [palette.INVERT]


def test_weekday_event_with_colors():
    cell = Cell(day=MONDAY, event=event_on(MONDAY, fg="red", bg="blue"))
    assert cell_codes(cell) == ["\x1b[44m", "\x1b[31m", palette.BOLD]

    only_fg = Cell(day=MONDAY, event=event_on(MONDAY, fg="red"))
    assert cell_codes(only_fg) == ["\x1b[31m", palette.BOLD]


def test_today_replaces_everything():
    assert cell_codes(Cell(day=MONDAY, is_today=True)) == [palette.TODAY_BG, palette.TODAY_FG]

    cell = Cell(day=SATURDAY, event=event_on(SATURDAY, fg="green"), is_today=True)
    assert cell_codes(cell) == [palette.TODAY_BG, "\x1b[32m"]

    cell = Cell(day=MONDAY, event=event_on(MONDAY, bg="magenta"), is_today=True)
    assert cell_codes(cell) == ["\x1b[45m", palette.TODAY_FG]


def test_steps_are_independent():
    cell = Cell(day=SATURDAY, event=event_on(SATURDAY), is_today=True)

    assert weekend_step([], cell) == [palette.WEEKEND_FG, palette.BOLD]
    assert event_step([], cell) == []
    assert today_step(["ignored"], cell) == [palette.TODAY_BG, palette.TODAY_FG]
    assert cell_codes(cell, steps=[weekend_step]) == [palette.WEEKEND_FG, palette.BOLD]


def test_format_cell():
    assert format_cell(Cell(day=MONDAY)) == f" 8{palette.RESET}"
    assert format_cell(Cell(day=SATURDAY)) == f"{palette.WEEKEND_FG} 6{palette.RESET}"
