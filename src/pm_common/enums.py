"""Global enums shared by the AMM core and the API layer."""

from enum import Enum

from src.pm_common.errors import InvalidOutcomeError


class Outcome(str, Enum):
    """Tradeable side of a binary event."""
    A = "A"
    B = "B"

    @property
    def opposite(self) -> "Outcome":
        return Outcome.B if self is Outcome.A else Outcome.A


class ResolutionResult(str, Enum):
    """Terminal outcome reported by the event source."""
    A = "A"
    B = "B"
    DRAW = "DRAW"


def _raw(value: object) -> str:
    # str() of a str-mixin Enum is "Cls.MEMBER", not its value
    return str(value.value if isinstance(value, Enum) else value).upper()


def parse_outcome(value: object) -> Outcome:
    """Coerce 'A'/'b'/Outcome.A to an Outcome, raising InvalidOutcomeError otherwise."""
    if isinstance(value, Outcome):
        return value
    try:
        return Outcome(_raw(value))
    except ValueError:
        raise InvalidOutcomeError(value) from None


def parse_resolution(value: object) -> ResolutionResult:
    if isinstance(value, ResolutionResult):
        return value
    try:
        return ResolutionResult(_raw(value))
    except ValueError:
        raise InvalidOutcomeError(value) from None
