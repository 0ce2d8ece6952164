from .cache import ABSENT, RuntimeCache
from .fallback_store import LocalFallbackStore, StoredSnapshot
from .retry import RetryPolicy, call_with_retry
from .events import ChangeBus
from .service import SyncService

__all__ = [
    "ABSENT",
    "RuntimeCache",
    "LocalFallbackStore",
    "StoredSnapshot",
    "RetryPolicy",
    "call_with_retry",
    "ChangeBus",
    "SyncService",
]
