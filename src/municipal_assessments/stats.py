from __future__ import annotations

from dataclasses import asdict, dataclass
from decimal import ROUND_HALF_EVEN, Decimal
from typing import Any, Dict, Sequence, Union

from .schema.records import PropertyAssessment


Number = Union[int, float]


def format_currency(value: Number) -> str:
    """Whole dollars with thousands separators: 1234567.5 -> "$1,234,568"."""

    rounded = Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_EVEN)
    sign = "-" if rounded < 0 else ""
    return f"{sign}${abs(int(rounded)):,}"


@dataclass(frozen=True)
class AssessmentStatistics:
    n: int
    min: int
    max: int
    range: int
    mean: float
    median: int

    @classmethod
    def from_results(cls, results: Sequence[PropertyAssessment]) -> "AssessmentStatistics":
        """Summarize assessed values.

        `results` must already be sorted ascending by assessed value
        (`ResultSet.sorted_by_value()`): min, max and median are read from the
        first, last and middle positions and the order is not checked. The
        mean walks every record, so it is right for any order.
        """

        n = len(results)
        if n == 0:
            raise ValueError("empty result set")
        low = results[0].assessed_value
        high = results[n - 1].assessed_value
        total = sum(r.assessed_value for r in results)
        return cls(
            n=n,
            min=low,
            max=high,
            range=high - low,
            mean=total / n,
            median=results[n // 2].assessed_value,
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def summary(self) -> Dict[str, Any]:
        return {
            "n": self.n,
            "min": format_currency(self.min),
            "max": format_currency(self.max),
            "range": format_currency(self.range),
            "mean": format_currency(self.mean),
            "median": format_currency(self.median),
        }
