from __future__ import annotations

from typing import Optional

from .config import AppConfig, get_config
from .data.interface import RemoteDataSource
from .data.util import get_data_source
from .sync.fallback_store import LocalFallbackStore
from .sync.retry import RetryPolicy
from .sync.service import Notifier, SyncService


def build_sync_service(
    config: Optional[AppConfig] = None,
    remote: Optional[RemoteDataSource] = None,
    notifier: Optional[Notifier] = None,
) -> SyncService:
    """Assemble a SyncService from configuration. Create one per process."""
    config = config or get_config()
    return SyncService(
        remote=remote or get_data_source(config=config),
        store=LocalFallbackStore(config.fallback_dir, namespace=config.storage_namespace),
        retry_policy=RetryPolicy.from_config(config),
        freshness_window_s=config.freshness_window_s,
        poll_interval_s=config.poll_interval_s,
        notifier=notifier,
    )
