"""Configuration options for a skip list.

Each ``with_*`` function validates its arguments at once and returns an
option: a callable that applies the setting to a skip list by assigning one
of the attributes ``max_level``, ``probability``, ``rng``,
``level_cache_size``, ``preset_levels`` or ``allow_same_key``.
"""

from __future__ import annotations

import random
from collections import deque
from typing import Any, Callable

Option = Callable[[Any], None]


class SkipListOptionError(ValueError):
    """Raised for an invalid skip-list option."""


def with_max_level(level: int) -> Option:
    """Limit the number of levels a node may have."""
    if level < 1:
        raise SkipListOptionError("level must be at least 1")

    def apply(target: Any) -> None:
        target.max_level = level

    return apply


def with_probability(probability: float) -> Option:
    """Set the probability used when generating node levels."""
    if not 0 < probability < 1:
        raise SkipListOptionError("probability must be greater than 0 and less than 1")

    def apply(target: Any) -> None:
        target.probability = probability

    return apply


def with_level_rand_source(rd: random.Random) -> Option:
    """Use ``rd`` as the random source for node levels."""
    if rd is None:
        raise SkipListOptionError("random source is None")

    def apply(target: Any) -> None:
        target.rng = rd

    return apply


def with_level_cache_size(size: int, *args: int) -> Option:
    """Set the level buffer size, optionally preloading levels for the first nodes."""
    if size < 1:
        raise SkipListOptionError("cache size must be greater than 0")
    if len(args) > size:
        raise SkipListOptionError("cache params can not be more than cache size")
    preset = tuple(args)

    def apply(target: Any) -> None:
        target.level_cache_size = size
        target.preset_levels = deque(preset)

    return apply


def with_allow_the_same_key(allow: bool) -> Option:
    """Choose whether equal keys may be inserted more than once."""

    def apply(target: Any) -> None:
        target.allow_same_key = bool(allow)

    return apply