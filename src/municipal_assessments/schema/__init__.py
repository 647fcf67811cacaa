from .records import (  # noqa: F401
    API_FIELDS,
    NUM_COLUMNS,
    AssessmentClass,
    BuildingInfo,
    Location,
    NeighbourhoodInfo,
    PropertyAssessment,
    record_from_api_row,
    record_from_cells,
)

__all__ = [
    "API_FIELDS",
    "NUM_COLUMNS",
    "AssessmentClass",
    "BuildingInfo",
    "Location",
    "NeighbourhoodInfo",
    "PropertyAssessment",
    "record_from_api_row",
    "record_from_cells",
]
