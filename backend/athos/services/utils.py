import math
from enum import Enum
from typing import Iterable


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up (2.5 -> 3, not 2)"""
    return int(math.floor(value + 0.5))


def enum_value(value):
    """Plain value of a str Enum member; other values pass through"""
    return value.value if isinstance(value, Enum) else value


def mean(values: Iterable[float]) -> float:
    values = list(values)
    return sum(values) / len(values) if values else 0.0
