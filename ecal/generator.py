import datetime
import logging
from typing import Iterable, List, Set

from .models import CalendarConfig, Event, RuleLine
from .rules import classify_rule, evaluate_rule, parse_fixed_date

logger = logging.getLogger(__name__)


class EventGenerator:
    """Expands parsed rules into concrete events for the years a calendar covers."""

    def __init__(self, config: CalendarConfig):
        self.config = config
        self.years = range(config.start_year, config.end_year_check + 1)

    def _event(self, rule: RuleLine, day: datetime.date, original_year=None) -> Event:
        return Event(
            date=day,
            description=rule.description,
            category=rule.category,
            fg_color=rule.fg_color,
            bg_color=rule.bg_color,
            original_year=original_year,
        )

    def expand(self, rule: RuleLine) -> List[Event]:
        """Returns the events of a single rule, at most one per date."""
        events = []
        seen: Set[datetime.date] = set()

        def add(day, original_year=None):
            if day is not None and day not in seen:
                seen.add(day)
                events.append(self._event(rule, day, original_year))

        fixed = parse_fixed_date(rule.rule_text)
        if fixed is not None:
            if rule.is_anniversary:
                for year in self.years:
                    if year < fixed.year:
                        continue
                    try:
                        add(fixed.replace(year=year), fixed.year)
                    except ValueError:
                        # Feb 29 outside leap years
                        continue
            elif fixed.year in self.years:
                add(fixed)
            return events

        date_rule = classify_rule(rule.rule_text)
        if date_rule is None:
            logger.debug("No date rule recognized in %r", rule.rule_text)
            return events
        for year in self.years:
            add(evaluate_rule(date_rule, year))
        return events

    def generate(self, rules: Iterable[RuleLine]) -> List[Event]:
        """Expands all rules and returns the events sorted by date."""
        events = []
        for rule in rules:
            events.extend(self.expand(rule))
        # list.sort is stable, so same-day events keep file order
        events.sort(key=lambda e: e.date)
        logger.debug("Generated %d events for %d-%d", len(events), self.config.start_year, self.config.end_year_check)
        return events
