"""SoQL `$where` clauses for the open-data API.

The API narrows results server-side; the local predicates in
`search.filters` still decide the final result set.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, List, Optional
from urllib.parse import quote, urlencode

from ..normalize import squash
from .engine import SearchCriteria
from .filters import FILTER_FIELDS


_STREET_PART_RE = re.compile(r"\D.*$")


@dataclass(frozen=True)
class BuiltQuery:
    where: str
    limit: int

    def params(self) -> Dict[str, str]:
        out = {}
        if self.where:
            out["$where"] = self.where
        out["$limit"] = str(self.limit)
        return out


def _literal(value: str) -> str:
    # SoQL string literal, upper-cased to match the dataset's casing.
    escaped = " ".join(str(value).split()).upper().replace("'", "''")
    return f"'{escaped}'"


def _like(value: str) -> str:
    escaped = " ".join(str(value).split()).upper().replace("'", "''")
    return f"'%{escaped}%'"


def _column(field: str) -> str:
    return FILTER_FIELDS[field].api_columns[0]


def key_clause(account_number: int) -> str:
    return f"{_column('account_number')} = '{int(account_number)}'"


def account_contains_clause(fragment: str) -> str:
    return f"{_column('account_number')} LIKE {_like(fragment)}"


def neighbourhood_clause(text: str) -> str:
    return f"upper({_column('neighbourhood')}) LIKE {_like(text)}"


def assessment_class_clause(text: str) -> str:
    columns = FILTER_FIELDS["assessment_class"].api_columns
    ors = " OR ".join(f"upper({col}) = {_literal(text)}" for col in columns)
    return f"({ors})"


def address_clause(text: str) -> Optional[str]:
    """Street-name pattern that keeps every row `match_address` could accept.

    The address key is house number, suite, then street name with spaces
    removed. House and suite are digits, so everything from the first
    non-digit character of the squashed input on must fall inside the street
    name, in order, with any spacing between. All-digit input can straddle
    house, suite and street, so it gets no clause.
    """

    m = _STREET_PART_RE.search(squash(text))
    if m is None:
        return None
    pattern = "%".join(m.group(0).upper()).replace("'", "''")
    return f"upper({_column('address')}) LIKE '%{pattern}%'"


def value_range_clause(low: int, high: int) -> str:
    return f"{_column('assessed_value')} BETWEEN {int(low)} AND {int(high)}"


def build_where(criteria: SearchCriteria) -> str:
    parts: List[str] = []
    if criteria.account_number:
        parts.append(account_contains_clause(criteria.account_number))
    if criteria.neighbourhood:
        parts.append(neighbourhood_clause(criteria.neighbourhood))
    if criteria.assessment_class:
        parts.append(assessment_class_clause(criteria.assessment_class))
    street = address_clause(criteria.address) if criteria.address else None
    if street:
        parts.append(street)
    if not criteria.is_unbounded:
        parts.append(value_range_clause(criteria.min_value, criteria.max_value))
    return " AND ".join(parts)


def build_query_url(base_url: str, where: Optional[str], limit: int) -> str:
    query = BuiltQuery(where=where or "", limit=limit)
    # Percent-encode everything (spaces as %20, not "+"); keep "$" readable in param names.
    encoded = urlencode(query.params(), safe="$", quote_via=quote)
    return f"{base_url}?{encoded}"
