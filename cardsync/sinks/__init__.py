from cardsync.sinks.document_store import (
    CollectionRef,
    DocumentRef,
    DocumentStore,
    SqlDocumentStore,
    SqlWriteBatch,
    WriteBatch,
)
from cardsync.sinks.search_index import SearchIndex, SearchIndexClient

__all__ = [
    "CollectionRef",
    "DocumentRef",
    "DocumentStore",
    "SearchIndex",
    "SearchIndexClient",
    "SqlDocumentStore",
    "SqlWriteBatch",
    "WriteBatch",
]
