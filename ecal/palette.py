from typing import Optional

# --- ANSI styling codes ---
RESET = "\x1b[0m"
BOLD = "\x1b[1m"
INVERT = "\x1b[7m"

WEEKEND_FG = "\x1b[31m"
WEEK_NUMBER_FG = "\x1b[34m"
TODAY_BG = "\x1b[43m"
TODAY_FG = "\x1b[30m"
FUTURE_FG = "\x1b[32m"
PAST_FG = "\x1b[34m"

COLORS = {
    "black": 0,
    "red": 1,
    "green": 2,
    "yellow": 3,
    "blue": 4,
    "magenta": 5,
    "cyan": 6,
    "white": 7,
}


def color_code(name: Optional[str], foreground: bool = True) -> Optional[str]:
    """Maps a color name to its ANSI code. Unknown names map to None."""
    if not name:
        return None
    index = COLORS.get(name.strip().lower())
    if index is None:
        return None
    base = 30 if foreground else 40
    return f"\x1b[{base + index}m"
