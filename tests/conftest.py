"""
Shared fixtures: every test gets its own SQLite file under ``tmp_path``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from person_api.app.core.config import Settings
from person_api.app.core.db import init_db
from person_api.app.main import create_app
from person_api.app.services.person_service import PersonService


@pytest.fixture
def database_url(tmp_path: Path) -> str:
    return str(tmp_path / "persons.db")


@pytest.fixture
def test_settings(database_url: str) -> Settings:
    return Settings(database_url=database_url, log_level="DEBUG")


@pytest.fixture
def service(database_url: str) -> PersonService:
    """A service over a freshly initialised database."""
    init_db(database_url)
    return PersonService(database_url)


@pytest.fixture
def app(test_settings: Settings) -> FastAPI:
    return create_app(test_settings)


@pytest.fixture
def client(app: FastAPI) -> Iterator[TestClient]:
    # Entering the context runs the startup hook, which creates the schema.
    with TestClient(app) as client:
        yield client
