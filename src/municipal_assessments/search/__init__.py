from .engine import MAX_VALUE, MIN_VALUE, SearchCriteria, filter_records
from .filters import FILTER_FIELDS, FieldDefinition

__all__ = [
    "FILTER_FIELDS",
    "FieldDefinition",
    "MAX_VALUE",
    "MIN_VALUE",
    "SearchCriteria",
    "filter_records",
]
