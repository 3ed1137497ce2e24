from .blob import JsonBlobStore, atomic_write_text
from .client import NotesStoreClient, StoreError, StoreTransportError
from .scheduler import SaveScheduler

__all__ = ["JsonBlobStore",
           "atomic_write_text",
           "NotesStoreClient",
           "StoreError",
           "StoreTransportError",
           "SaveScheduler",
           ]
