from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Union

from ..errors import InvalidArgument
from ..schema.records import PropertyAssessment
from ..store import ResultSet
from .filters import (
    is_blank,
    match_account_number,
    match_address,
    match_assessment_class,
    match_neighbourhood,
    match_value_range,
)


MIN_VALUE = 0
# Upper bound used when the caller leaves "max" empty (fits a signed 32-bit int).
MAX_VALUE = 2**31 - 1

Bound = Union[int, str, None]


def parse_bound(value: Bound, default: int) -> int:
    if value is None:
        return default
    if isinstance(value, bool):
        raise InvalidArgument("assessed value bound must be a number")
    if isinstance(value, int):
        return value
    text = str(value).strip().replace(",", "").lstrip("$")
    if not text:
        return default
    try:
        return int(text)
    except ValueError:
        raise InvalidArgument(f"assessed value bound is not a whole number: {value!r}") from None


def parse_account_number(value: Union[int, str, None]) -> int:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    text = "" if value is None else str(value).strip()
    try:
        return int(text)
    except ValueError:
        raise InvalidArgument(f"account number must be an integer: {value!r}") from None


@dataclass(frozen=True)
class SearchCriteria:
    account_number: Optional[str] = None
    neighbourhood: Optional[str] = None
    assessment_class: Optional[str] = None
    address: Optional[str] = None
    min_value: int = MIN_VALUE
    max_value: int = MAX_VALUE

    @classmethod
    def build(
        cls,
        account_number: Union[int, str, None] = None,
        neighbourhood: Optional[str] = None,
        assessment_class: Optional[str] = None,
        address: Optional[str] = None,
        min_value: Bound = None,
        max_value: Bound = None,
    ) -> "SearchCriteria":
        """Normalize raw inputs: blanks become None and bounds become ints."""

        def _clean(v):
            return None if is_blank(v) else str(v).strip()

        return cls(
            account_number=_clean(account_number),
            neighbourhood=_clean(neighbourhood),
            assessment_class=_clean(assessment_class),
            address=_clean(address),
            min_value=parse_bound(min_value, MIN_VALUE),
            max_value=parse_bound(max_value, MAX_VALUE),
        )

    @property
    def is_unbounded(self) -> bool:
        return self.min_value <= MIN_VALUE and self.max_value >= MAX_VALUE

    def matches(self, record: PropertyAssessment) -> bool:
        return (
            match_account_number(record, self.account_number)
            and match_neighbourhood(record, self.neighbourhood)
            and match_assessment_class(record, self.assessment_class)
            and match_address(record, self.address)
            and match_value_range(record, self.min_value, self.max_value)
        )


def filter_records(records: Iterable[PropertyAssessment], criteria: SearchCriteria) -> ResultSet:
    """Linear scan returning the matching records in their original order."""
    return ResultSet.of(r for r in records if criteria.matches(r))
