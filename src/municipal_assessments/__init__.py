"""Package initializer for `municipal_assessments`."""

from .repository import (
    FileRepository,
    PropertyAssessmentRepository,
    RemoteRepository,
    get_repository,
)
from .schema import PropertyAssessment
from .stats import AssessmentStatistics
from .store import RecordStore, ResultSet

__all__ = [
    "AssessmentStatistics",
    "FileRepository",
    "PropertyAssessment",
    "PropertyAssessmentRepository",
    "RecordStore",
    "RemoteRepository",
    "ResultSet",
    "get_repository",
]
