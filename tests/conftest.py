# ruff: noqa: E402
import json
import sys
from pathlib import Path

# Ensure project root on sys.path
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

import pytest
from fastapi.testclient import TestClient

from locale_table.core.config import Settings
from locale_table.main import create_app


def write_json(path: Path, data) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
    return path


@pytest.fixture
def flat_dir(tmp_path: Path) -> Path:
    """
    Flat structure: en.json, vi.json in one folder.

    en has a nested object and an array; vi is partially translated.
    """
    root = tmp_path / "locales"
    write_json(
        root / "en.json",
        {
            "home": {"title": "Welcome", "items": ["One", "Two"]},
            "login": {"button": "Sign in"},
        },
    )
    write_json(root / "vi.json", {"home": {"title": "Xin chào"}})
    return root


@pytest.fixture
def nested_dir(tmp_path: Path) -> Path:
    """
    Nested structure: <lang>/<file>.json.

    'fr' has not started common.json yet, 'de' only has errors.json.
    """
    root = tmp_path / "i18n"
    write_json(root / "en" / "common.json", {"ok": "OK", "cancel": "Cancel"})
    write_json(root / "en" / "errors.json", {"e404": "Not found"})
    write_json(root / "vi" / "common.json", {"ok": "Đồng ý"})
    write_json(root / "de" / "errors.json", {"e404": "Nicht gefunden"})
    (root / "fr").mkdir(parents=True)
    return root


@pytest.fixture
def make_client():
    """Factory: TestClient for an app whose session points at ``folder``."""

    def _make(folder: Path | None = None, **overrides) -> TestClient:
        settings = Settings(CATALOG_DIR=folder, **overrides)
        return TestClient(create_app(settings))

    return _make
