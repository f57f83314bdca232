# Numeric and argument conversion helpers shared by the calculators

import math
from enum import Enum
from typing import Type, TypeVar

E = TypeVar("E", bound=Enum)


def round_half_up(value):
    """Round to the nearest integer, with halves rounded towards +infinity."""
    return int(math.floor(value + 0.5))


def clamp(value, lower, upper):
    """Bound value to [lower, upper]; when lower > upper, upper wins."""
    return min(max(value, lower), upper)


def to_enum(enum_cls: Type[E], value, error_cls) -> E:
    """Coerce a raw string (or member) to ``enum_cls``, raising ``error_cls``."""
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        raise error_cls(value) from None
