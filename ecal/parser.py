import logging
from typing import Iterable, List, Optional

from .models import RuleLine

logger = logging.getLogger(__name__)


def _field(parts: List[str], index: int) -> Optional[str]:
    if index < len(parts) and parts[index]:
        return parts[index]
    return None


def parse_line(line: str) -> Optional[RuleLine]:
    """
    Parses one line of the events file:

        RULE[;[ [category,fg,bg,emoji] ]DESCRIPTION]

    Returns None for blank lines and comments. Never fails; a malformed
    metadata block ends up in the description.
    """
    line = line.strip()
    if not line or line.startswith("#"):
        return None

    rule_part, sep, rest = line.partition(";")
    rule_part = rule_part.strip()
    category = fg_color = bg_color = None

    if sep:
        rest = rest.strip()
        description = rest
        if rest.startswith("["):
            end = rest.find("]")
            if end != -1:
                meta = [part.strip() for part in rest[1:end].split(",")]
                # [category, fg, bg, emoji]; the emoji is accepted and ignored
                category = _field(meta, 0)
                fg_color = _field(meta, 1)
                bg_color = _field(meta, 2)
                description = rest[end + 1:].strip()
    else:
        # No separator: anything after the first whitespace is the description
        pieces = rule_part.split(None, 1)
        description = pieces[1].strip() if len(pieces) > 1 else ""

    return RuleLine(
        rule_text=rule_part,
        description=description,
        category=category,
        fg_color=fg_color,
        bg_color=bg_color,
    )


def parse_lines(lines: Iterable[str]) -> List[RuleLine]:
    """Parses every rule line, skipping blanks and comments."""
    rules = []
    for number, line in enumerate(lines, start=1):
        rule = parse_line(line)
        if rule is None:
            logger.debug("Skipping line %d", number)
            continue
        rules.append(rule)
    return rules
