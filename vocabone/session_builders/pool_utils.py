"""
Pool utilities for session builders.

These helpers provide shared, minimal primitives for building and reasoning
about session pools without enforcing a single scheduling policy.
"""

from __future__ import annotations
import random
from typing import Optional, Sequence, TypeVar


T = TypeVar("T")


def shuffled(items: Sequence[T], rng: Optional[random.Random] = None) -> list[T]:
    """
    Shuffled copy of `items` (the input is left untouched).
    """
    result = list(items)
    (rng or random).shuffle(result)
    return result


def interleave(first: Sequence[T], second: Sequence[T]) -> list[T]:
    """
    Alternate elements from two pools, starting with `first`.

    The longer pool's remainder is appended in order.
    """
    result: list[T] = []
    for i in range(max(len(first), len(second))):
        if i < len(first):
            result.append(first[i])
        if i < len(second):
            result.append(second[i])
    return result
