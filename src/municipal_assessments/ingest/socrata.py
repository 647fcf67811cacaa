from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping, Optional

import requests

from ..config import Settings, get_settings
from ..errors import SourceUnavailable
from ..logging_utils import get_logger
from ..schema.records import record_from_api_row
from ..search.query import build_query_url
from ..store import RecordStore


logger = get_logger("ingest.socrata")

_DEFAULT_UA = "municipal-assessments/0.1 (+requests)"


class SocrataClient:
    """Thin GET-only client for one Socrata resource (`.../resource/<id>.json`).

    One request per call and no retries; the page size comes from settings
    and later pages are never requested.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.settings = settings or get_settings()
        self._session = session or requests.Session()
        self._session.headers.update(
            {
                "User-Agent": _DEFAULT_UA,
                "Accept": "application/json",
            }
        )
        if self.settings.app_token:
            self._session.headers["X-App-Token"] = self.settings.app_token

    @property
    def page_size(self) -> int:
        return self.settings.page_size

    def url_for(self, where: Optional[str]) -> str:
        return build_query_url(self.settings.api_url, where, self.page_size)

    def fetch(self, where: Optional[str] = None) -> List[Dict[str, Any]]:
        """Return the JSON rows for one `$where` clause (first page only)."""

        url = self.url_for(where)
        try:
            resp = self._session.get(url, timeout=self.settings.http_timeout)
        except requests.RequestException as exc:
            raise SourceUnavailable(f"request failed: {exc}") from exc
        if not 200 <= resp.status_code < 300:
            raise SourceUnavailable(f"HTTP {resp.status_code} from {self.settings.api_url}")
        try:
            payload = resp.json()
        except ValueError as exc:
            raise SourceUnavailable("response is not valid JSON") from exc
        if not isinstance(payload, list):
            raise SourceUnavailable("expected a JSON array of rows")
        if len(payload) >= self.page_size:
            logger.debug("response filled a whole page (%d rows); later pages not fetched", len(payload))
        return [row for row in payload if isinstance(row, dict)]

    def close(self) -> None:
        self._session.close()


def merge_rows(rows: Iterable[Mapping[str, Any]], store: RecordStore) -> int:
    """Add API rows to `store`, skipping account numbers it already holds."""

    added = 0
    for row in rows:
        if store.add_unique(record_from_api_row(row)):
            added += 1
    return added


def fetch_into(client: SocrataClient, where: Optional[str], store: RecordStore) -> int:
    """Run one query and merge the rows. Source failures are logged, not raised."""

    try:
        rows = client.fetch(where)
    except SourceUnavailable as exc:
        logger.warning("assessment API unavailable: %s", exc)
        return 0
    added = merge_rows(rows, store)
    logger.info("fetched %d rows, %d new", len(rows), added, extra={"rows": len(rows), "added": added})
    return added
