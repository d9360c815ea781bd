import logging
from pathlib import Path
from typing import List, Optional

import yaml

from .models import Settings

CONFIG_DIR = Path("config")
DEFAULT_SETTINGS_PATH = CONFIG_DIR / "settings.yaml"


def load_settings(path: Optional[Path] = None) -> Settings:
    """Loads run defaults from YAML. The default file is optional, an explicit one is not."""
    if path is None:
        path = DEFAULT_SETTINGS_PATH
        if not path.exists():
            return Settings()
    if not path.exists():
        raise FileNotFoundError(f"Settings file not found at {path}")

    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    return Settings(**(data or {}))


def read_rule_lines(path: Path) -> List[str]:
    """Reads the events file into memory, one entry per line."""
    if not path.exists():
        raise FileNotFoundError(f"Event file '{path}' not found")

    with open(path, "r", encoding="utf-8") as f:
        return f.read().splitlines()


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
