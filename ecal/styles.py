"""
Cell styling
------------
Each calendar day is styled by running a list of steps over an accumulator
of ANSI codes. Later steps win:

    weekend  ->  event  ->  today
"""

import datetime
from typing import Callable, List, Optional

from pydantic import BaseModel

from . import palette
from .models import Event


class Cell(BaseModel):
    """What the styling steps know about one day of the grid."""
    day: datetime.date
    event: Optional[Event] = None
    is_today: bool = False

    @property
    def is_weekend(self) -> bool:
        return self.day.isoweekday() >= 6

    @property
    def fg_code(self) -> Optional[str]:
        return palette.color_code(self.event.fg_color, True) if self.event else None

    @property
    def bg_code(self) -> Optional[str]:
        return palette.color_code(self.event.bg_color, False) if self.event else None


StyleStep = Callable[[List[str], Cell], List[str]]


def weekend_step(codes: List[str], cell: Cell) -> List[str]:
    if not cell.is_weekend:
        return codes
    codes = codes + [palette.WEEKEND_FG]
    if cell.event is not None:
        codes.append(palette.BOLD)
    return codes


def event_step(codes: List[str], cell: Cell) -> List[str]:
    if cell.event is None or cell.is_weekend:
        return codes
    fg, bg = cell.fg_code, cell.bg_code
    if fg or bg:
        return codes + [code for code in (bg, fg) if code] + [palette.BOLD]
    return codes + [palette.INVERT]


def today_step(codes: List[str], cell: Cell) -> List[str]:
    if not cell.is_today:
        return codes
    return [cell.bg_code or palette.TODAY_BG, cell.fg_code or palette.TODAY_FG]


CELL_STEPS: List[StyleStep] = [weekend_step, event_step, today_step]


def cell_codes(cell: Cell, steps: List[StyleStep] = CELL_STEPS) -> List[str]:
    """Runs the styling steps in order and returns the resulting codes."""
    codes: List[str] = []
    for step in steps:
        codes = step(codes, cell)
    return codes


def format_cell(cell: Cell) -> str:
    """Day number right-aligned to two characters, wrapped in its style codes."""
    return f"{''.join(cell_codes(cell))}{cell.day.day:2}{palette.RESET}"
