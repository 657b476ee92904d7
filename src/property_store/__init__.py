"""Page property store: the key/value layer the hierarchy reads through."""

from .errors import ZDocsError, StoreError, SnapshotError
from .store import PropertyStore, InMemoryPropertyStore, StoredPage
from . import keys

__all__ = [
    'ZDocsError',
    'StoreError',
    'SnapshotError',
    'PropertyStore',
    'InMemoryPropertyStore',
    'StoredPage',
    'keys',
]
