"""
Failure classification for ingestion and publication.

Every error the pipeline raises on purpose is a KnownError subclass with a
FailureKind. Adapter and merge errors abort the run; publisher errors are
scoped to a single chunk and reported through FailureDetail.

Taxonomy:
- MissingReferenceError: a release code has no match in reference data
- InvalidCardError: a card has no usable identity key
- SinkUnavailableError: the document store or search index rejected a call
- ReferenceFetchError: reference data could not be downloaded
"""

from enum import Enum

from pydantic import BaseModel, Field


class FailureKind(str, Enum):
    """Classification of failure types."""

    # Feed integrity failures
    MISSING_REFERENCE = "missing_reference"
    INVALID_CARD = "invalid_card"

    # External collaborators
    SINK_UNAVAILABLE = "sink_unavailable"
    EXTERNAL_API_ERROR = "external_api_error"

    UNKNOWN = "unknown"


class FailureDetail(BaseModel):
    """Detailed information about a failure."""

    kind: FailureKind = Field(
        ...,
        description="Classification of the failure",
    )
    message: str = Field(
        ...,
        description="Explanation of what went wrong",
    )
    detail: str | None = Field(
        default=None,
        description="Additional technical detail (optional)",
    )
    suggestion: str | None = Field(
        default=None,
        description="Suggested follow-up action",
    )


class KnownError(Exception):
    """
    Base class for exceptions that represent known, explainable failures.

    Subclass this for errors where the system knows exactly what went wrong.
    """

    def __init__(
        self,
        kind: FailureKind,
        message: str,
        detail: str | None = None,
        suggestion: str | None = None,
    ):
        self.kind = kind
        self.message = message
        self.detail = detail
        self.suggestion = suggestion
        super().__init__(message)

    def to_detail(self) -> FailureDetail:
        """Convert to a FailureDetail."""
        return FailureDetail(
            kind=self.kind,
            message=self.message,
            detail=self.detail,
            suggestion=self.suggestion,
        )


class MissingReferenceError(KnownError):
    """
    Raised when a record's release code cannot be resolved.

    This is a data-integrity bug in the feed. The whole adapter run fails;
    no partial output is produced.
    """

    def __init__(self, collection: str, code: str, referenced_by: str | None = None):
        self.collection = collection
        self.code = code
        self.referenced_by = referenced_by
        message = f"No {collection} entry with code '{code}'"
        if referenced_by:
            message = f"{message} (referenced by {referenced_by})"
        super().__init__(
            kind=FailureKind.MISSING_REFERENCE,
            message=message,
            suggestion="Refresh the reference data or fix the feed before re-running.",
        )


class InvalidCardError(KnownError):
    """Raised when a card reaches publication without an identity key."""

    def __init__(self, message: str, detail: str | None = None):
        super().__init__(
            kind=FailureKind.INVALID_CARD,
            message=message,
            detail=detail,
        )


class SinkUnavailableError(KnownError):
    """
    Raised when the document store or the search index rejects a call.

    The run does not retry internally; callers re-run the sync.
    """

    def __init__(self, sink: str, detail: str | None = None):
        self.sink = sink
        super().__init__(
            kind=FailureKind.SINK_UNAVAILABLE,
            message=f"{sink} rejected the request",
            detail=detail,
            suggestion="Re-run the sync; publishing the same cards again overwrites them.",
        )


class ReferenceFetchError(KnownError):
    """Raised when release reference data cannot be downloaded."""

    def __init__(self, url: str, detail: str | None = None):
        self.url = url
        super().__init__(
            kind=FailureKind.EXTERNAL_API_ERROR,
            message=f"Failed to fetch reference data from {url}",
            detail=detail,
        )
