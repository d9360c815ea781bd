import datetime
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from jinja2 import Environment, FileSystemLoader, select_autoescape
from pydantic import BaseModel

from . import palette
from .grid import days_in_month, is_empty_week, week_number, week_start_day, weeks_in_month
from .models import CalendarConfig, Event
from .styles import Cell, format_cell

TEMPLATE_DIR = Path(__file__).parent / "templates"

MONTH_BLOCK_GAP = "    "
HEADER_BLOCK_GAP = "     "
EVENTS_RULE_WIDTH = 80


def ordinal_suffix(n: int) -> str:
    if 11 <= n % 100 <= 13:
        return "th"
    return {1: "st", 2: "nd", 3: "rd"}.get(n % 10, "th")


def relative_days_label(day: datetime.date, today: datetime.date) -> str:
    diff = (day - today).days
    if diff == 0:
        return ""
    if diff > 0:
        color, text = palette.FUTURE_FG, "In {n}{reset}{color} days"
    else:
        color, text = palette.PAST_FG, "{n}{reset}{color} days ago"
    body = text.format(n=f"{palette.BOLD}{abs(diff)}", reset=palette.RESET, color=color)
    return f" {color}({body}){palette.RESET}"


def anniversary_annotation(event: Event) -> str:
    label = event.anniversary_label
    if label is None:
        return ""
    count = event.date.year - event.original_year
    if count <= 0:
        return ""
    return f" ({count}{ordinal_suffix(count)} {label})"


class EventEntry(BaseModel):
    day: datetime.date
    prefix: str
    description: str
    annotation: str
    relative: str


class CalendarRenderer:
    """Renders the month grid and the events list as lines of terminal text."""

    def __init__(self, config: CalendarConfig, events: Sequence[Event], template_dir: Path = TEMPLATE_DIR):
        self.config = config
        self.events = list(events)
        self.env = Environment(
            loader=FileSystemLoader(str(template_dir)),
            autoescape=select_autoescape(),
            trim_blocks=True,
        )
        self._by_date: Dict[datetime.date, Event] = {}
        for event in self.events:
            self._by_date.setdefault(event.date, event)

    @property
    def grid_width(self) -> int:
        return 24 if self.config.show_week_numbers else 21

    def event_on(self, day: datetime.date) -> Optional[Event]:
        return self._by_date.get(day)

    # --- Calendar grid ---

    def month_header(self, month_start: datetime.date) -> str:
        title = f"{month_start.strftime('%B')} {month_start.year}"
        width = self.grid_width
        padding = max((width - len(title)) // 2, 0)
        r_padding = max(width - padding - len(title), 0)
        return f"{' ' * padding}{palette.BOLD}{title}{palette.RESET}{' ' * r_padding}"

    def weekday_header(self) -> str:
        red, blue, reset = palette.WEEKEND_FG, palette.WEEK_NUMBER_FG, palette.RESET
        if self.config.monday_first:
            header = f"Mo Tu We Th Fr {red}Sa Su{reset}"
        else:
            header = f"{red}Su{reset} Mo Tu We Th Fr {red}Sa{reset}"
        if self.config.show_week_numbers:
            header = f"{blue}Wk{reset} {header}"
        return header

    def week_row(self, month_start: datetime.date, week: int, today: datetime.date) -> str:
        monday_first = self.config.monday_first
        start = week_start_day(month_start, week, monday_first)
        last_day = days_in_month(month_start.year, month_start.month)
        parts = []

        if self.config.show_week_numbers:
            number = week_number(month_start, week, monday_first)
            if number is None:
                parts.append("   ")
            else:
                parts.append(f"{palette.WEEK_NUMBER_FG}{number:2}{palette.RESET} ")

        for day_number in range(start, start + 7):
            if 1 <= day_number <= last_day:
                day = month_start.replace(day=day_number)
                cell = Cell(day=day, event=self.event_on(day), is_today=day == today)
                parts.append(format_cell(cell) + " ")
            else:
                parts.append("   ")
        return "".join(parts)

    def month_row(self, month_starts: List[datetime.date], today: datetime.date) -> List[str]:
        monday_first = self.config.monday_first
        lines = [
            MONTH_BLOCK_GAP.join(self.month_header(m) for m in month_starts),
            HEADER_BLOCK_GAP.join(self.weekday_header() for _ in month_starts),
        ]
        max_weeks = max(weeks_in_month(m, monday_first) for m in month_starts)
        for week in range(max_weeks):
            if all(is_empty_week(m, week, monday_first) for m in month_starts):
                continue
            lines.append(MONTH_BLOCK_GAP.join(self.week_row(m, week, today) for m in month_starts))
        if max_weeks < 6:
            lines.append("")
        return lines

    def render_calendar(self, today: datetime.date) -> List[str]:
        per_row = self.config.months_per_row
        months = self.config.month_starts()
        rows = [months[i:i + per_row] for i in range(0, len(months), per_row)]
        lines: List[str] = []
        for index, row in enumerate(rows):
            lines.extend(self.month_row(row, today))
            if index < len(rows) - 1:
                lines.append("")
        return lines

    # --- Events list ---

    def visible_events(self) -> List[Event]:
        return [e for e in self.events if self.config.in_window(e.date)]

    def render_events(self, today: datetime.date) -> List[str]:
        visible = self.visible_events()
        if not visible:
            return []
        entries = [
            EventEntry(
                day=event.date,
                prefix=(palette.color_code(event.bg_color, False) or "") + (palette.color_code(event.fg_color, True) or ""),
                description=event.description,
                annotation=anniversary_annotation(event),
                relative=relative_days_label(event.date, today),
            )
            for event in visible
        ]
        template = self.env.get_template("events.txt.j2")
        text = template.render(
            entries=entries,
            bold=palette.BOLD,
            reset=palette.RESET,
            rule="-" * EVENTS_RULE_WIDTH,
        )
        return text.splitlines()

    def render(self, today: datetime.date) -> List[str]:
        lines: List[str] = []
        if self.config.show_calendar:
            lines.extend(self.render_calendar(today))
        if self.config.show_events:
            lines.extend(self.render_events(today))
        return lines
