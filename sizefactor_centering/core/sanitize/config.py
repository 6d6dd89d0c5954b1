"""Configuration for size factor sanitization."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Union


class HandlerAction(Enum):
    """How to handle one category of invalid size factors."""

    IGNORE = "ignore"
    ERROR = "error"
    SANITIZE = "sanitize"


def parse_action(value: Union[str, HandlerAction]) -> HandlerAction:
    """Resolve a handler action from its name or enum member."""
    if isinstance(value, HandlerAction):
        return value
    try:
        return HandlerAction(str(value).lower())
    except ValueError:
        valid = [a.value for a in HandlerAction]
        raise ValueError(f"Unknown handler action: {value!r} (expected one of {valid})")


@dataclass
class SanitizeConfig:
    """Configuration for replacing invalid size factors.

    Attributes
    ----------
    enabled : bool
        Whether SizeFactorCenterer sanitizes after centering
    handle_zero : HandlerAction
        Action for size factors equal to zero
    handle_negative : HandlerAction
        Action for negative size factors
    handle_nan : HandlerAction
        Action for NaN size factors
    handle_infinite : HandlerAction
        Action for positive infinite size factors
    """

    enabled: bool = False
    handle_zero: HandlerAction = HandlerAction.ERROR
    handle_negative: HandlerAction = HandlerAction.ERROR
    handle_nan: HandlerAction = HandlerAction.ERROR
    handle_infinite: HandlerAction = HandlerAction.ERROR

    def __post_init__(self):
        self.handle_zero = parse_action(self.handle_zero)
        self.handle_negative = parse_action(self.handle_negative)
        self.handle_nan = parse_action(self.handle_nan)
        self.handle_infinite = parse_action(self.handle_infinite)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "enabled": self.enabled,
            "handle_zero": self.handle_zero.value,
            "handle_negative": self.handle_negative.value,
            "handle_nan": self.handle_nan.value,
            "handle_infinite": self.handle_infinite.value,
        }
