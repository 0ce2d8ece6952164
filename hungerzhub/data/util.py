from __future__ import annotations

from typing import Literal, Optional

from ..config import AppConfig, get_config
from .backends.http_backend import HttpDataSource
from .backends.json_backend import JsonFileDataSource
from .interface import RemoteDataSource


def get_data_source(kind: Optional[Literal["json", "http"]] = None, config: Optional[AppConfig] = None) -> RemoteDataSource:
    config = config or get_config()
    kind = kind or config.data_source
    if kind == "json":
        # Reads from configured JSON folder
        return JsonFileDataSource(data_dir=config.data_dir)
    if kind == "http":
        return HttpDataSource(
            base_url=config.api_base_url,
            api_key=config.api_key,
            timeout=config.request_timeout_s,
        )
    raise ValueError(f"Unknown data source kind: {kind}")
