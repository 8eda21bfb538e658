"""Configuration for Flux Calc.

Reads optional settings from ``.flux-calc/config.json`` in a project
directory:
- History capacity
- Significant digits of canonical results
- Fractional digits and grouping of displayed numbers
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from .formatter import MAX_FRACTION_DIGITS, SIGNIFICANT_DIGITS
from .history import DEFAULT_CAPACITY


logger = logging.getLogger(__name__)

CONFIG_DIR = ".flux-calc"
CONFIG_FILE = "config.json"


@dataclass
class CalcConfig:
    """Calculator configuration options."""

    history_capacity: int = DEFAULT_CAPACITY
    significant_digits: int = SIGNIFICANT_DIGITS
    max_fraction_digits: int = MAX_FRACTION_DIGITS
    grouping: bool = True

    def validate(self) -> "CalcConfig":
        """Check value ranges.

        Raises:
            ValueError: If a setting is out of range or has the wrong type.
        """
        if self.history_capacity < 1:
            raise ValueError(f"history_capacity must be at least 1, got {self.history_capacity}")
        if self.significant_digits < 1:
            raise ValueError(f"significant_digits must be at least 1, got {self.significant_digits}")
        if self.max_fraction_digits < 0:
            raise ValueError(f"max_fraction_digits must not be negative, got {self.max_fraction_digits}")
        if not isinstance(self.grouping, bool):
            raise ValueError(f"grouping must be true or false, got {self.grouping!r}")
        return self


def config_path(project_path: str) -> Path:
    """Location of the config file for a project directory."""
    return Path(project_path) / CONFIG_DIR / CONFIG_FILE


def load_calc_config(project_path: str = ".") -> CalcConfig:
    """Load calculator configuration from project config.

    Args:
        project_path: Directory holding ``.flux-calc/config.json``.

    Returns:
        CalcConfig with settings from the "calculator" section, or defaults.
    """
    config_file = config_path(project_path)

    if config_file.exists():
        try:
            with open(config_file) as f:
                data = json.load(f)
            section = data.get("calculator", {})
            config = CalcConfig(
                history_capacity=int(section.get("history_capacity", DEFAULT_CAPACITY)),
                significant_digits=int(section.get("significant_digits", SIGNIFICANT_DIGITS)),
                max_fraction_digits=int(section.get("max_fraction_digits", MAX_FRACTION_DIGITS)),
                grouping=section.get("grouping", True),
            )
            return config.validate()
        except (json.JSONDecodeError, IOError, AttributeError, TypeError, ValueError) as e:
            logger.warning("Ignoring invalid config %s: %s", config_file, e)

    return CalcConfig()
