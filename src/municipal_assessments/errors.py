from __future__ import annotations


class AssessmentError(Exception):
    """Base class for errors raised by municipal_assessments."""


class InvalidArgument(AssessmentError, ValueError):
    """A caller-supplied value could not be interpreted (e.g. a non-numeric account number)."""


class SourceUnavailable(AssessmentError, RuntimeError):
    """The backing file or HTTP endpoint could not be read.

    Ingestion pipelines catch this, log it and leave the store unchanged.
    """
