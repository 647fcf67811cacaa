from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple

from .schema.records import PropertyAssessment


@dataclass(frozen=True)
class ResultSet:
    """Ordered, read-only output of a query."""

    records: Tuple[PropertyAssessment, ...] = ()

    @classmethod
    def of(cls, records: Iterable[PropertyAssessment]) -> "ResultSet":
        return cls(tuple(records))

    @property
    def size(self) -> int:
        return len(self.records)

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[PropertyAssessment]:
        return iter(self.records)

    def __getitem__(self, index):
        return self.records[index]

    def __bool__(self) -> bool:
        return bool(self.records)

    def sorted_by_value(self) -> "ResultSet":
        # sorted() is stable, so equal assessed values keep their input order.
        return ResultSet(tuple(sorted(self.records, key=lambda r: r.assessed_value)))

    def to_dicts(self) -> List[Dict[str, Any]]:
        return [r.to_dict() for r in self.records]


class RecordStore:
    """Insertion-ordered records plus an account-number index.

    `add` never checks for duplicates (bulk file loads keep every row);
    `add_unique` skips account numbers that are already indexed (API loads).
    With duplicates the index points at the most recently added record.
    """

    def __init__(self, records: Optional[Iterable[PropertyAssessment]] = None) -> None:
        self._records: List[PropertyAssessment] = []
        self._by_account: Dict[int, PropertyAssessment] = {}
        for record in records or ():
            self.add(record)

    def add(self, record: PropertyAssessment) -> None:
        self._by_account[record.account_number] = record
        self._records.append(record)

    def add_unique(self, record: PropertyAssessment) -> bool:
        # Check-then-insert; callers sharing a store across threads must lock.
        if record.account_number in self._by_account:
            return False
        self.add(record)
        return True

    def get(self, account_number: int) -> Optional[PropertyAssessment]:
        return self._by_account.get(account_number)

    def __contains__(self, account_number: object) -> bool:
        return account_number in self._by_account

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[PropertyAssessment]:
        return iter(self._records)

    @property
    def records(self) -> Tuple[PropertyAssessment, ...]:
        return tuple(self._records)

    def snapshot(self) -> ResultSet:
        return ResultSet(tuple(self._records))
