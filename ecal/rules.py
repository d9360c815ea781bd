"""
Date rules
----------
Turns the compact rule grammar of the events file into concrete dates.

    DD-MM-YYYY, MM/DD/YYYY, YYYY-MM-DD   fixed date
    E, E+N, E-N                          Easter Sunday plus N days
    MM/DOW#N                             Nth weekday of a month (DOW 1=Mon..0=Sun, N=5 means last)
    MM/DD?D+N, MM/DD?D-N                 MM/DD shifted by N days if it falls on weekday D (0=Sun..6=Sat)
    MM/DD                                every year on that day
"""

import datetime
import logging
import re
from typing import Optional

from .models import (
    AnnualRule,
    ConditionalRule,
    DateRule,
    EasterRule,
    FixedDateRule,
    NthWeekdayRule,
)

logger = logging.getLogger(__name__)

FIXED_DATE_FORMATS = ("%d-%m-%Y", "%m/%d/%Y", "%Y-%m-%d")

_UINT = re.compile(r"\+?[0-9]+")
_INT = re.compile(r"[+-]?[0-9]+")
_CONDITION = re.compile(r"([0-6])([+-])([+-]?[0-9]+)")
_DIGITS = re.compile(r"[0-9]*")


def _parse_uint(text: str) -> Optional[int]:
    if _UINT.fullmatch(text):
        return int(text)
    return None


def _month_day(text: str):
    """Splits 'MM/DD...' into two unsigned ints; extra fields are ignored."""
    parts = text.split("/")
    if len(parts) < 2:
        return None
    first, second = _parse_uint(parts[0]), _parse_uint(parts[1])
    if first is None or second is None:
        return None
    return first, second


def _in_calendar(month: int, day: int) -> bool:
    return 1 <= month <= 12 and 1 <= day <= 31


def _make_date(year: int, month: int, day: int) -> Optional[datetime.date]:
    try:
        return datetime.date(year, month, day)
    except (ValueError, OverflowError):
        return None


def _shift(day: datetime.date, days: int) -> Optional[datetime.date]:
    try:
        return day + datetime.timedelta(days=days)
    except OverflowError:
        return None


def parse_fixed_date(rule_text: str) -> Optional[datetime.date]:
    """Parses DD-MM-YYYY, MM/DD/YYYY or YYYY-MM-DD, in that order."""
    for fmt in FIXED_DATE_FORMATS:
        try:
            return datetime.datetime.strptime(rule_text, fmt).date()
        except ValueError:
            continue
    return None


def classify_rule(rule_text: str) -> Optional[DateRule]:
    """
    Maps rule text onto one of the rule variants.
    Returns None for text that matches no known syntax.
    """
    rule = rule_text.strip()

    fixed = parse_fixed_date(rule)
    if fixed is not None:
        return FixedDateRule(date=fixed)

    if rule.startswith("E"):
        if rule == "E":
            return EasterRule(offset=0)
        if _INT.fullmatch(rule[1:]):
            return EasterRule(offset=int(rule[1:]))
        return None

    if "#" in rule:
        date_part, n_str = rule.split("#", 1)
        month_dow = _month_day(date_part)
        n = _parse_uint(n_str)
        if month_dow is None or n is None:
            return None
        month, dow = month_dow
        if not (1 <= month <= 12 and 0 <= dow <= 6 and 1 <= n <= 5):
            return None
        return NthWeekdayRule(month=month, weekday=7 if dow == 0 else dow, n=n)

    if "?" in rule:
        date_part, condition = rule.split("?", 1)
        month_day = _month_day(date_part)
        if month_day is None:
            return None
        month, day = month_day
        if not _in_calendar(month, day):
            return None
        # MM/DD? and MM/DD?YYYY behave like a plain MM/DD
        if _DIGITS.fullmatch(condition):
            return ConditionalRule(month=month, day=day)
        match = _CONDITION.fullmatch(condition)
        if match is None:
            return None
        dow, operator, offset = match.groups()
        offset = int(offset)
        return ConditionalRule(
            month=month,
            day=day,
            weekday=7 if dow == "0" else int(dow),
            offset=offset if operator == "+" else -offset,
        )

    if rule.count("/") == 1:
        month_day = _month_day(rule)
        if month_day is None or not _in_calendar(*month_day):
            return None
        return AnnualRule(month=month_day[0], day=month_day[1])

    return None


def calculate_easter(year: int) -> Optional[datetime.date]:
    """Calculates Western Easter date for a given year (Gauss). None before 1583."""
    if year < 1583:
        return None
    a = year % 19
    b = year // 100
    c = year % 100
    d = b // 4
    e = b % 4
    f = (b + 8) // 25
    g = (b - f + 1) // 3
    h = (19 * a + b - d - g + 15) % 30
    i = c // 4
    k = c % 4
    l = (32 + 2 * e + 2 * i - h - k) % 7
    m = (a + 11 * h + 22 * l) // 451
    month = (h + l - 7 * m + 114) // 31
    day = ((h + l - 7 * m + 114) % 31) + 1
    return _make_date(year, month, day)


def find_nth_dow(year: int, month: int, weekday: int, n: int) -> Optional[datetime.date]:
    """
    Returns the date of the Nth occurrence of a weekday in a month.
    weekday: 1=Mon .. 7=Sun
    n: 1..5, where 5 falls back to the last occurrence if there is no 5th
    """
    if not 1 <= n <= 5 or not 1 <= weekday <= 7:
        return None
    first = _make_date(year, month, 1)
    if first is None:
        return None

    current = _shift(first, (weekday - first.isoweekday()) % 7 + 7 * (n - 1))
    if current is None:
        return None
    if n == 5 and current.month != month:
        current -= datetime.timedelta(weeks=1)
    if current.month != month:
        return None
    return current


# --- One evaluator per rule kind ---

def _eval_fixed(rule: FixedDateRule, year: int) -> Optional[datetime.date]:
    return rule.date if rule.date.year == year else None


def _eval_easter(rule: EasterRule, year: int) -> Optional[datetime.date]:
    easter = calculate_easter(year)
    if easter is None:
        return None
    return _shift(easter, rule.offset)


def _eval_nth_weekday(rule: NthWeekdayRule, year: int) -> Optional[datetime.date]:
    return find_nth_dow(year, rule.month, rule.weekday, rule.n)


def _eval_conditional(rule: ConditionalRule, year: int) -> Optional[datetime.date]:
    target = _make_date(year, rule.month, rule.day)
    if target is None:
        return None
    if rule.weekday is None:
        return target
    if target.isoweekday() != rule.weekday:
        return None
    return _shift(target, rule.offset)


def _eval_annual(rule: AnnualRule, year: int) -> Optional[datetime.date]:
    return _make_date(year, rule.month, rule.day)


EVALUATORS = {
    "fixed": _eval_fixed,
    "easter": _eval_easter,
    "nth_weekday": _eval_nth_weekday,
    "conditional": _eval_conditional,
    "annual": _eval_annual,
}


def evaluate_rule(rule: DateRule, year: int) -> Optional[datetime.date]:
    """Computes the date a classified rule falls on in `year`, if any."""
    return EVALUATORS[rule.kind](rule, year)


def evaluate(rule_text: str, year: int) -> Optional[datetime.date]:
    """Computes the date `rule_text` falls on in `year`, if any."""
    rule = classify_rule(rule_text)
    if rule is None:
        logger.debug("Unrecognized rule %r", rule_text)
        return None
    return evaluate_rule(rule, year)
