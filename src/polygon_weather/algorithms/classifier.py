"""
Threshold rule classification.

Maps a scalar value to a display color using a data source's color rules.
"""

import logging
import operator
from typing import Callable, Dict, Optional, Sequence

from ..core import constants
from ..models import ColorRule


COMPARATORS: Dict[str, Callable[[float, float], bool]] = {
    "=": operator.eq,
    "<": operator.lt,
    ">": operator.gt,
    "<=": operator.le,
    ">=": operator.ge,
}


class RuleClassifier:
    """Evaluate color rules against a value."""

    def __init__(
        self,
        default_color: str = constants.NO_MATCH_COLOR,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize classifier.

        Args:
            default_color: Color returned when no rule matches
            logger: Logger instance
        """
        self.default_color = default_color
        self.logger = logger or logging.getLogger(__name__)

    def classify(self, value: float, rules: Sequence[ColorRule]) -> str:
        """
        Return the color of the first matching rule.

        Rules are evaluated from the highest threshold down, so their stored
        order does not matter. Equal thresholds keep their stored order.
        '=' compares floats exactly.

        Args:
            value: Value to classify
            rules: Color rules of the data source

        Returns:
            Hex color string
        """
        ordered = sorted(rules, key=lambda rule: rule.value, reverse=True)

        for rule in ordered:
            if COMPARATORS[rule.operator](value, rule.value):
                self.logger.debug(
                    f"{format_value(value)} matched rule '{rule.label}' "
                    f"({rule.operator} {rule.value}) -> {rule.color}"
                )
                return rule.color

        self.logger.debug(f"No rule matched {format_value(value)}")
        return self.default_color


def classify(
    value: float,
    rules: Sequence[ColorRule],
    default: str = constants.NO_MATCH_COLOR
) -> str:
    """Module-level shortcut for RuleClassifier.classify."""
    return RuleClassifier(default_color=default).classify(value, rules)


def format_value(value: float, unit: str = "°C") -> str:
    """Format a value for display, e.g. '12.3°C'."""
    return f"{value:.1f}{unit}"
