from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

import yaml

from .paths import resolve_config_path


@dataclass
class RuntimeConfig:
    http_timeout_seconds: int
    fetch_max_retries: int
    fetch_backoff_seconds: float
    list_page_size: int
    default_concurrency: int
    default_max_pages: int
    default_target_count: int


def _load_runtime_yaml(path: Path | None = None) -> Dict[str, Any]:
    path = path or resolve_config_path("runtime.yaml")
    if not path.exists():
        return {}
    data = yaml.safe_load(path.read_text()) or {}
    return data if isinstance(data, dict) else {}


def _coerce_int(config: Dict[str, Any], key: str, default: int) -> int:
    value = config.get(key)
    if isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        return int(value)
    return default


def _coerce_float(config: Dict[str, Any], key: str, default: float) -> float:
    value = config.get(key)
    if isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        return float(value)
    return default


def load_runtime_config(path: Path | None = None) -> RuntimeConfig:
    raw = _load_runtime_yaml(path)
    return RuntimeConfig(
        http_timeout_seconds=_coerce_int(raw, "http_timeout_seconds", 60),
        fetch_max_retries=_coerce_int(raw, "fetch_max_retries", 3),
        fetch_backoff_seconds=_coerce_float(raw, "fetch_backoff_seconds", 1.0),
        list_page_size=_coerce_int(raw, "list_page_size", 100),
        default_concurrency=_coerce_int(raw, "default_concurrency", 5),
        default_max_pages=_coerce_int(raw, "default_max_pages", 50),
        default_target_count=_coerce_int(raw, "default_target_count", 200),
    )


runtime_config = load_runtime_config()
