"""Three-way comparators used to order skip-list keys."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any


def _sign(a: Any, b: Any) -> int:
    if a < b:
        return -1
    if a > b:
        return 1
    return 0


class Comparator(ABC):
    """Orders two keys: -1 if a < b, 0 if equal, 1 if a > b."""

    @abstractmethod
    def compare(self, a: Any, b: Any) -> int:
        """Return -1, 0 or 1."""


class IntComparator(Comparator):
    """Natural ascending order of integers."""

    def compare(self, a: Any, b: Any) -> int:
        return _sign(a, b)


@dataclass(frozen=True)
class PriceTime:
    """A key made of a price and a creation time."""

    price: float
    create_time: int


class PriceTimeComparator(Comparator):
    """Orders PriceTime keys by price, then by creation time, both ascending."""

    def compare(self, a: PriceTime, b: PriceTime) -> int:
        by_price = _sign(a.price, b.price)
        if by_price:
            return by_price
        return _sign(a.create_time, b.create_time)