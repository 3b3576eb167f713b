"""Document stores backing the project API."""

from strategysuite.storage._factory import create_document_store
from strategysuite.storage._memory import MemoryDocumentStore
from strategysuite.storage._protocol import DocumentStore, StoreMetadata, document_path
from strategysuite.storage._sqlite import SqliteDocumentStore

__all__ = [
    "DocumentStore",
    "MemoryDocumentStore",
    "SqliteDocumentStore",
    "StoreMetadata",
    "create_document_store",
    "document_path",
]
