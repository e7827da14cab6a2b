"""Rating Aggregate — derived (mean, count) statistic for a store.

Invariants:
    - build_aggregate is PURE: inputs are the live SUM and COUNT from the ledger
    - count == 0 → mean == 0.0
    - mean rounded half-up to 2 decimal places; count exact

Design Decisions:
    - Decimal for rounding: float round() is banker's rounding on binary values,
      so 2.675 would display as 2.67
"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP

_TWO_PLACES = Decimal("0.01")


@dataclass(frozen=True)
class RatingAggregate:
    mean: float
    count: int

    def to_dict(self) -> dict:
        return {"mean": self.mean, "count": self.count}


def build_aggregate(total: int, count: int) -> RatingAggregate:
    """Mean of `count` ratings summing to `total`."""
    if count <= 0:
        return RatingAggregate(mean=0.0, count=0)
    mean = (Decimal(total) / Decimal(count)).quantize(
        _TWO_PLACES, rounding=ROUND_HALF_UP,
    )
    return RatingAggregate(mean=float(mean), count=count)

