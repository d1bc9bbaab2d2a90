"""Aggregate rating computation.

The average is the arithmetic mean of all ratings rounded half-up to one
decimal place, and exactly ``0`` when there are no ratings. Rounding is done
on ``Decimal`` so values such as 4.25 round to 4.3 regardless of binary
float representation.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from collections.abc import AsyncIterable, Iterable

_ONE_DECIMAL = Decimal("0.1")


@dataclass(frozen=True, slots=True)
class RatingSummary:
    """Count and rounded average of a set of ratings."""

    count: int
    average_rating: float


class RatingAccumulator:
    """Incrementally fold ratings into a summary.

    The result depends only on the multiset of ratings added, never on their
    order, so streamed and materialized inputs agree.
    """

    __slots__ = ("_count", "_total")

    def __init__(self) -> None:
        self._count = 0
        self._total = 0

    def add(self, rating: int) -> None:
        self._count += 1
        self._total += rating

    @property
    def count(self) -> int:
        return self._count

    def summary(self) -> RatingSummary:
        if self._count == 0:
            return RatingSummary(count=0, average_rating=0)
        mean = Decimal(self._total) / Decimal(self._count)
        rounded = mean.quantize(_ONE_DECIMAL, rounding=ROUND_HALF_UP)
        return RatingSummary(count=self._count, average_rating=float(rounded))


def aggregate_ratings(ratings: Iterable[int]) -> RatingSummary:
    """Summarize a materialized collection of ratings."""
    acc = RatingAccumulator()
    for rating in ratings:
        acc.add(rating)
    return acc.summary()


async def aaggregate_ratings(ratings: AsyncIterable[int]) -> RatingSummary:
    """Summarize ratings arriving from an async stream."""
    acc = RatingAccumulator()
    async for rating in ratings:
        acc.add(rating)
    return acc.summary()
