"""Repository contract shared by the CSV and API sources.

Every operation is synchronous and returns either a single record or a new
ResultSet; the backing RecordStore is never filtered in place.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Protocol, Union, runtime_checkable

from .config import Settings, get_settings
from .ingest.csv_file import load_csv
from .ingest.socrata import SocrataClient, fetch_into
from .logging_utils import get_logger
from .schema.records import PropertyAssessment
from .search import query as soql
from .search.engine import Bound, SearchCriteria, filter_records, parse_account_number
from .store import RecordStore, ResultSet


logger = get_logger("repository")


@runtime_checkable
class PropertyAssessmentRepository(Protocol):
    source: str

    def get_by_key(self, account_number: Union[int, str]) -> Optional[PropertyAssessment]: ...

    def get_by_neighbourhood(self, neighbourhood: str) -> ResultSet: ...

    def get_by_assessment_class(self, assessment_class: str) -> ResultSet: ...

    def get_by_address(self, address: str) -> ResultSet: ...

    def multi_filter(
        self,
        account_number: Union[int, str, None] = None,
        neighbourhood: Optional[str] = None,
        assessment_class: Optional[str] = None,
        address: Optional[str] = None,
        min_value: Bound = None,
        max_value: Bound = None,
    ) -> ResultSet: ...

    def get_all(self) -> ResultSet: ...

    @property
    def size(self) -> int: ...

    def close(self) -> None: ...


class _StoreBackedRepository:
    """Query side shared by both variants; subclasses decide how the store fills."""

    source = ""

    def __init__(self) -> None:
        self._store = RecordStore()

    @property
    def size(self) -> int:
        return len(self._store)

    def close(self) -> None:
        """Release whatever the source holds open; the CSV variant holds nothing."""

    def _prepare(self, criteria: SearchCriteria) -> None:
        """Hook run before filtering (the API variant fetches here)."""

    def _prepare_key(self, account_number: int) -> None:
        """Hook run before a point lookup."""

    def get_by_key(self, account_number: Union[int, str]) -> Optional[PropertyAssessment]:
        key = parse_account_number(account_number)
        self._prepare_key(key)
        return self._store.get(key)

    def get_by_neighbourhood(self, neighbourhood: str) -> ResultSet:
        return self.multi_filter(neighbourhood=neighbourhood)

    def get_by_assessment_class(self, assessment_class: str) -> ResultSet:
        return self.multi_filter(assessment_class=assessment_class)

    def get_by_address(self, address: str) -> ResultSet:
        return self.multi_filter(address=address)

    def multi_filter(
        self,
        account_number: Union[int, str, None] = None,
        neighbourhood: Optional[str] = None,
        assessment_class: Optional[str] = None,
        address: Optional[str] = None,
        min_value: Bound = None,
        max_value: Bound = None,
    ) -> ResultSet:
        criteria = SearchCriteria.build(
            account_number=account_number,
            neighbourhood=neighbourhood,
            assessment_class=assessment_class,
            address=address,
            min_value=min_value,
            max_value=max_value,
        )
        self._prepare(criteria)
        return filter_records(self._store, criteria)

    def get_all(self) -> ResultSet:
        self._prepare(SearchCriteria())
        return self._store.snapshot()


class FileRepository(_StoreBackedRepository):
    """Assessments read from the bulk CSV export, once, at construction."""

    source = "file"

    def __init__(
        self,
        path: Union[str, Path, None] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        super().__init__()
        settings = settings or get_settings()
        self.path = Path(path or settings.csv_path)
        load_csv(self.path, self._store)


class RemoteRepository(_StoreBackedRepository):
    """Assessments fetched from the open-data API, one request per call.

    Fetched rows accumulate in the store (duplicates by account number are
    dropped) and each query filters everything gathered so far. Only the
    first page of each response is read, so `get_all()` holds at most the
    configured page size after a fresh start.
    """

    source = "remote"

    def __init__(
        self,
        client: Optional[SocrataClient] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        super().__init__()
        self.client = client or SocrataClient(settings=settings)

    def _prepare(self, criteria: SearchCriteria) -> None:
        fetch_into(self.client, soql.build_where(criteria) or None, self._store)

    def _prepare_key(self, account_number: int) -> None:
        fetch_into(self.client, soql.key_clause(account_number), self._store)

    def close(self) -> None:
        self.client.close()


_REPOSITORIES = {
    "file": FileRepository,
    "csv": FileRepository,
    "remote": RemoteRepository,
    "api": RemoteRepository,
}


def get_repository(source: str, **kwargs) -> PropertyAssessmentRepository:
    key = (source or "").strip().lower()
    cls = _REPOSITORIES.get(key)
    if cls is None:
        raise KeyError(f"No assessment repository registered for source={source}")
    logger.debug("opening %s repository", key)
    return cls(**kwargs)
