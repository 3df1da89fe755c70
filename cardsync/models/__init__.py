from cardsync.models.card import (
    Card,
    ExtraAttribute,
    IndexProjection,
    IntermediateRecord,
    Printing,
)
from cardsync.models.failure import (
    FailureDetail,
    FailureKind,
    InvalidCardError,
    KnownError,
    MissingReferenceError,
    ReferenceFetchError,
    SinkUnavailableError,
)
from cardsync.models.release import (
    Release,
    ReleaseCatalog,
    ReleaseGroup,
    compose_release_label,
)

__all__ = [
    "Card",
    "ExtraAttribute",
    "FailureDetail",
    "FailureKind",
    "IndexProjection",
    "IntermediateRecord",
    "InvalidCardError",
    "KnownError",
    "MissingReferenceError",
    "Printing",
    "ReferenceFetchError",
    "Release",
    "ReleaseCatalog",
    "ReleaseGroup",
    "SinkUnavailableError",
    "compose_release_label",
]
