from __future__ import annotations

import math

from brightness_notify.config import Direction


def step_size(current: int) -> float:
    """Square-root step, never smaller than 1 so low levels do not stall."""

    return max(math.sqrt(max(current, 0)), 1.0)


def next_value(current: int, max_value: int, direction: Direction) -> int:
    """Return the brightness to apply, always within [0, max_value].

    Fractions are truncated toward zero, so a decrease from 10 lands on 6
    (10 - 3.16) and an increase from 10 lands on 13.
    """

    if direction is Direction.INCREASE:
        result = current + step_size(current)
    elif direction is Direction.DECREASE:
        result = current - step_size(current)
    else:
        result = float(current)
    # Read values are not trusted to satisfy current <= max.
    return int(min(max(result, 0.0), float(max_value)))


def percent(value: int, max_value: int) -> int:
    return value * 100 // max_value
