from __future__ import annotations

import os
from pathlib import Path

CONFIG_DIR = Path(__file__).parent
DEFAULT_ENV = "dev"
ENV_VARS = ("JOB_SCRAPE_ENV", "APP_ENV")


def available_envs() -> set[str]:
    """``dev`` plus every environment that ships an override directory."""

    shipped = {
        child.name
        for child in CONFIG_DIR.iterdir()
        if child.is_dir() and not child.name.startswith("_")
    }
    return shipped | {DEFAULT_ENV}


def get_config_env() -> str:
    for name in ENV_VARS:
        raw = (os.getenv(name) or "").strip().lower()
        if raw:
            return raw if raw in available_envs() else DEFAULT_ENV
    return DEFAULT_ENV


def resolve_config_path(filename: str, env: str | None = None) -> Path:
    """``config/<env>/<filename>`` when that override exists, else the shared ``config/<filename>``."""

    override = CONFIG_DIR / (env or get_config_env()) / filename
    return override if override.exists() else CONFIG_DIR / filename
