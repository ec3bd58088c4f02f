from __future__ import annotations

import json
import os
import sys
from pathlib import Path
from typing import Any

import pytest

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def _disable_telemetry_env() -> None:
    os.environ["POSTHOG_DISABLED"] = "true"


def _sync_settings_flags() -> None:
    config_mod = sys.modules.get("job_board_scraper.config")
    if not config_mod:
        return
    settings = getattr(config_mod, "settings", None)
    if not settings:
        return
    settings.posthog_disabled = True


_disable_telemetry_env()
_sync_settings_flags()


def load_fixture_text(name: str) -> str:
    return (FIXTURES_DIR / name).read_text(encoding="utf-8")


def load_fixture_json(name: str) -> Any:
    return json.loads(load_fixture_text(name))


@pytest.fixture
def workable_list_page_1() -> Any:
    return load_fixture_json("workable/list_page_1.json")


@pytest.fixture
def workable_list_page_2() -> Any:
    return load_fixture_json("workable/list_page_2.json")


@pytest.fixture
def detail_json_ld_html() -> str:
    return load_fixture_text("workable/detail_json_ld.html")


@pytest.fixture
def detail_dom_only_html() -> str:
    return load_fixture_text("workable/detail_dom_only.html")
