from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Sequence, Tuple

from ..normalize import squash, to_flag, to_float, to_int, to_text


# Field names used by the open-data API; to_dict() emits the same keys.
API_FIELDS = [
    "account_number",
    "suite",
    "house_number",
    "street_name",
    "garage",
    "neighbourhood_id",
    "neighbourhood",
    "ward",
    "assessed_value",
    "latitude",
    "longitude",
    "tax_class_pct_1",
    "tax_class_pct_2",
    "tax_class_pct_3",
    "mill_class_1",
    "mill_class_2",
    "mill_class_3",
]

# Column positions in the bulk CSV export.
ACCOUNT_NUM_INDEX = 0
SUITE_INDEX = 1
HOUSE_NUM_INDEX = 2
STREET_NAME_INDEX = 3
GARAGE_INDEX = 4
NEIGHBOURHOOD_ID_INDEX = 5
NEIGHBOURHOOD_NAME_INDEX = 6
WARD_INDEX = 7
ASSESSED_VALUE_INDEX = 8
LATITUDE_INDEX = 9
LONGITUDE_INDEX = 10
POINT_LOCATION_INDEX = 11  # unused
CLASS_PCT_INDEXES = (12, 13, 14)
CLASS_NAME_INDEXES = (15, 16, 17)
NUM_COLUMNS = 18


@dataclass(frozen=True)
class BuildingInfo:
    account_number: int
    suite: int = 0
    house_number: int = 0
    street_name: str = ""
    garage: bool = False


@dataclass(frozen=True)
class NeighbourhoodInfo:
    neighbourhood_id: int = 0
    neighbourhood: str = ""
    ward: str = ""
    assessed_value: int = 0


@dataclass(frozen=True)
class Location:
    # Kept as text: the API returns variable-precision strings we echo verbatim.
    latitude: str = ""
    longitude: str = ""


@dataclass(frozen=True)
class AssessmentClass:
    class_1: str = ""
    class_2: str = ""
    class_3: str = ""
    pct_1: float = 0.0
    pct_2: float = 0.0
    pct_3: float = 0.0

    @property
    def names(self) -> Tuple[str, str, str]:
        return (self.class_1, self.class_2, self.class_3)

    @property
    def percentages(self) -> Tuple[float, float, float]:
        return (self.pct_1, self.pct_2, self.pct_3)


@dataclass(frozen=True, eq=False)
class PropertyAssessment:
    """One property assessment.

    Identity (==, hash) is the account number. Ordering compares assessed
    value only, so two different accounts with the same value are neither
    < nor > each other.
    """

    building: BuildingInfo
    neighbourhood: NeighbourhoodInfo = NeighbourhoodInfo()
    location: Location = Location()
    assessment_class: AssessmentClass = AssessmentClass()

    @property
    def account_number(self) -> int:
        return self.building.account_number

    @property
    def assessed_value(self) -> int:
        return self.neighbourhood.assessed_value

    @property
    def address_key(self) -> str:
        parts = []
        if self.building.house_number:
            parts.append(str(self.building.house_number))
        if self.building.suite:
            parts.append(str(self.building.suite))
        parts.append(self.building.street_name)
        return squash("".join(parts))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PropertyAssessment):
            return NotImplemented
        return self.account_number == other.account_number

    def __hash__(self) -> int:
        return hash(self.account_number)

    def __lt__(self, other: "PropertyAssessment") -> bool:
        if not isinstance(other, PropertyAssessment):
            return NotImplemented
        return self.assessed_value < other.assessed_value

    def __le__(self, other: "PropertyAssessment") -> bool:
        if not isinstance(other, PropertyAssessment):
            return NotImplemented
        return self.assessed_value <= other.assessed_value

    def __gt__(self, other: "PropertyAssessment") -> bool:
        if not isinstance(other, PropertyAssessment):
            return NotImplemented
        return self.assessed_value > other.assessed_value

    def __ge__(self, other: "PropertyAssessment") -> bool:
        if not isinstance(other, PropertyAssessment):
            return NotImplemented
        return self.assessed_value >= other.assessed_value

    def to_dict(self) -> Dict[str, Any]:
        b, n, loc, ac = self.building, self.neighbourhood, self.location, self.assessment_class
        return {
            "account_number": b.account_number,
            "suite": b.suite,
            "house_number": b.house_number,
            "street_name": b.street_name,
            "garage": b.garage,
            "neighbourhood_id": n.neighbourhood_id,
            "neighbourhood": n.neighbourhood,
            "ward": n.ward,
            "assessed_value": n.assessed_value,
            "latitude": loc.latitude,
            "longitude": loc.longitude,
            "tax_class_pct_1": ac.pct_1,
            "tax_class_pct_2": ac.pct_2,
            "tax_class_pct_3": ac.pct_3,
            "mill_class_1": ac.class_1,
            "mill_class_2": ac.class_2,
            "mill_class_3": ac.class_3,
        }


def record_from_cells(cells: Sequence[str]) -> PropertyAssessment:
    """Build a record from one 18-cell CSV row.

    Numeric cells that do not parse become 0 / 0.0; text cells are kept as-is.
    """

    if len(cells) != NUM_COLUMNS:
        raise ValueError(f"expected {NUM_COLUMNS} cells, got {len(cells)}")

    return PropertyAssessment(
        building=BuildingInfo(
            account_number=to_int(cells[ACCOUNT_NUM_INDEX]),
            suite=to_int(cells[SUITE_INDEX]),
            house_number=to_int(cells[HOUSE_NUM_INDEX]),
            street_name=to_text(cells[STREET_NAME_INDEX]),
            garage=to_flag(cells[GARAGE_INDEX]),
        ),
        neighbourhood=NeighbourhoodInfo(
            neighbourhood_id=to_int(cells[NEIGHBOURHOOD_ID_INDEX]),
            neighbourhood=to_text(cells[NEIGHBOURHOOD_NAME_INDEX]),
            ward=to_text(cells[WARD_INDEX]),
            assessed_value=to_int(cells[ASSESSED_VALUE_INDEX]),
        ),
        location=Location(
            latitude=to_text(cells[LATITUDE_INDEX]),
            longitude=to_text(cells[LONGITUDE_INDEX]),
        ),
        assessment_class=AssessmentClass(
            class_1=to_text(cells[CLASS_NAME_INDEXES[0]]),
            class_2=to_text(cells[CLASS_NAME_INDEXES[1]]),
            class_3=to_text(cells[CLASS_NAME_INDEXES[2]]),
            pct_1=to_float(cells[CLASS_PCT_INDEXES[0]]),
            pct_2=to_float(cells[CLASS_PCT_INDEXES[1]]),
            pct_3=to_float(cells[CLASS_PCT_INDEXES[2]]),
        ),
    )


def record_from_api_row(row: Mapping[str, Any] | None) -> PropertyAssessment:
    """Build a record from one JSON object of the API response.

    Missing keys and nulls are treated like empty CSV cells.
    """

    if row is None:
        row = {}
    cells = [""] * NUM_COLUMNS
    cells[ACCOUNT_NUM_INDEX] = to_text(row.get("account_number"))
    cells[SUITE_INDEX] = to_text(row.get("suite"))
    cells[HOUSE_NUM_INDEX] = to_text(row.get("house_number"))
    cells[STREET_NAME_INDEX] = to_text(row.get("street_name"))
    cells[GARAGE_INDEX] = to_text(row.get("garage"))
    cells[NEIGHBOURHOOD_ID_INDEX] = to_text(row.get("neighbourhood_id"))
    cells[NEIGHBOURHOOD_NAME_INDEX] = to_text(row.get("neighbourhood"))
    cells[WARD_INDEX] = to_text(row.get("ward"))
    cells[ASSESSED_VALUE_INDEX] = to_text(row.get("assessed_value"))
    cells[LATITUDE_INDEX] = to_text(row.get("latitude"))
    cells[LONGITUDE_INDEX] = to_text(row.get("longitude"))
    for i, idx in enumerate(CLASS_PCT_INDEXES, start=1):
        cells[idx] = to_text(row.get(f"tax_class_pct_{i}"))
    for i, idx in enumerate(CLASS_NAME_INDEXES, start=1):
        cells[idx] = to_text(row.get(f"mill_class_{i}"))
    return record_from_cells(cells)
