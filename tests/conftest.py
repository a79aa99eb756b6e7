from __future__ import annotations

import importlib
import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient


def _configure(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    data_dir = tmp_path / "data"
    public_dir = tmp_path / "public"

    monkeypatch.setenv("APP_NAME", "Test Catalog Admin")
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{(data_dir / 'catalog.db').as_posix()}")
    monkeypatch.setenv("PUBLIC_ROOT", public_dir.as_posix())
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("ADMIN_PAGE_SIZE", "10")
    monkeypatch.setenv("CATALOG_PAGE_SIZE", "12")

    for name in list(sys.modules.keys()):
        if name == "catalogadmin" or name.startswith("catalogadmin."):
            del sys.modules[name]


@pytest.fixture
def public_dir(tmp_path: Path) -> Path:
    return tmp_path / "public"


@pytest.fixture
def storage_mod(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    _configure(tmp_path, monkeypatch)
    return importlib.import_module("catalogadmin.storage")


@pytest.fixture
def app_ctx(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    _configure(tmp_path, monkeypatch)

    app_main = importlib.import_module("catalogadmin.main")
    db_mod = importlib.import_module("catalogadmin.db")
    models_mod = importlib.import_module("catalogadmin.models")

    with TestClient(app_main.app) as client:
        yield client, db_mod, models_mod
