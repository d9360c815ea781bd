import datetime
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

ANNIVERSARY_CATEGORIES = {"bday": "Birthday", "anni": "Anniversary"}


class RuleLine(BaseModel):
    """One parsed line of the rule file."""
    model_config = ConfigDict(frozen=True)

    rule_text: str
    description: str = ""
    category: Optional[str] = None
    fg_color: Optional[str] = None
    bg_color: Optional[str] = None

    @property
    def is_anniversary(self) -> bool:
        return self.category in ANNIVERSARY_CATEGORIES


# --- Rule variants ---
# weekday numbering follows datetime.date.isoweekday(): 1=Mon .. 7=Sun

class FixedDateRule(BaseModel):
    kind: Literal["fixed"] = "fixed"
    date: datetime.date


class EasterRule(BaseModel):
    kind: Literal["easter"] = "easter"
    offset: int = 0


class NthWeekdayRule(BaseModel):
    kind: Literal["nth_weekday"] = "nth_weekday"
    month: int
    weekday: int
    n: int


class ConditionalRule(BaseModel):
    kind: Literal["conditional"] = "conditional"
    month: int
    day: int
    weekday: Optional[int] = None  # None: no condition, plain MM/DD
    offset: int = 0


class AnnualRule(BaseModel):
    kind: Literal["annual"] = "annual"
    month: int
    day: int


DateRule = Annotated[
    Union[FixedDateRule, EasterRule, NthWeekdayRule, ConditionalRule, AnnualRule],
    Field(discriminator="kind"),
]


class Event(BaseModel):
    model_config = ConfigDict(frozen=True)

    date: datetime.date
    description: str = ""
    category: Optional[str] = None
    fg_color: Optional[str] = None
    bg_color: Optional[str] = None
    original_year: Optional[int] = None

    @property
    def anniversary_label(self) -> Optional[str]:
        if self.original_year is None:
            return None
        return ANNIVERSARY_CATEGORIES.get(self.category)


class CalendarConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    start_month: int = Field(ge=1, le=12)
    start_year: int
    num_months: int = Field(default=1, ge=1)
    num_columns: int = Field(default=3, ge=1)
    monday_first: bool = True
    show_calendar: bool = True
    show_events: bool = True
    show_week_numbers: bool = True

    @property
    def end_year_check(self) -> int:
        """Last year the recurrence expansion has to look at."""
        return (self.start_year * 12 + self.start_month + self.num_months - 1) // 12

    def in_window(self, day: datetime.date) -> bool:
        """True when `day` falls in the displayed months; the end bound is exclusive."""
        first = self.start_year * 12 + self.start_month - 1
        index = day.year * 12 + day.month - 1
        return first <= index < first + self.num_months

    @property
    def months_per_row(self) -> int:
        return 1 if self.num_months == 1 else self.num_columns

    def month_start(self, offset: int) -> datetime.date:
        """First day of the displayed month at position `offset`."""
        index = self.start_year * 12 + self.start_month - 1 + offset
        return datetime.date(index // 12, index % 12 + 1, 1)

    def month_starts(self) -> List[datetime.date]:
        return [self.month_start(i) for i in range(self.num_months)]


class Settings(BaseModel):
    num_months: int = Field(default=1, ge=1)
    num_columns: int = Field(default=3, ge=1)
    monday_first: bool = True
    show_week_numbers: bool = True
    events_file: str = "events.txt"
