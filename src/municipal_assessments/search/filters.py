from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from ..normalize import normalize_text, squash
from ..schema.records import PropertyAssessment


@dataclass(frozen=True)
class FieldDefinition:
    name: str
    api_columns: Tuple[str, ...]


# Search criteria understood by the engine, with the API columns each one maps to.
FILTER_FIELDS: Dict[str, FieldDefinition] = {
    "account_number": FieldDefinition("account_number", ("account_number",)),
    "neighbourhood": FieldDefinition("neighbourhood", ("neighbourhood",)),
    "assessment_class": FieldDefinition(
        "assessment_class",
        ("mill_class_1", "mill_class_2", "mill_class_3"),
    ),
    "address": FieldDefinition("address", ("street_name",)),
    "assessed_value": FieldDefinition("assessed_value", ("assessed_value",)),
}


def is_blank(criterion: Optional[str]) -> bool:
    return criterion is None or not str(criterion).strip()


def match_account_number(record: PropertyAssessment, criterion: Optional[str]) -> bool:
    # Substring of digits, not an exact key match ("1179" matches 1179381).
    if is_blank(criterion):
        return True
    return str(criterion).strip() in str(record.account_number)


def match_neighbourhood(record: PropertyAssessment, criterion: Optional[str]) -> bool:
    if is_blank(criterion):
        return True
    return normalize_text(criterion) in normalize_text(record.neighbourhood.neighbourhood)


def match_assessment_class(record: PropertyAssessment, criterion: Optional[str]) -> bool:
    if is_blank(criterion):
        return True
    wanted = normalize_text(criterion)
    return any(normalize_text(name) == wanted for name in record.assessment_class.names)


def match_address(record: PropertyAssessment, criterion: Optional[str]) -> bool:
    if is_blank(criterion):
        return True
    return squash(criterion) in record.address_key


def match_value_range(record: PropertyAssessment, low: int, high: int) -> bool:
    return low <= record.assessed_value <= high
