import logging

import pytest

from person_api.app.core.config import Settings
from person_api.app.core.logging_config import setup_logging
from person_api.app.main import create_app
from person_api.app.services.person_service import PersonService


@pytest.fixture
def restore_root_level():
    root = logging.getLogger()
    level = root.level
    yield root
    root.setLevel(level)


def test_create_app_uses_given_settings(test_settings, database_url):
    app = create_app(test_settings)
    assert app.title == "Person API"
    assert app.state.settings is test_settings
    assert isinstance(app.state.person_service, PersonService)
    assert app.state.person_service.database_url == database_url


def test_settings_can_be_overridden():
    settings = Settings(project_name="Staff", database_url="/tmp/staff.db", port=9000)
    assert settings.project_name == "Staff"
    assert settings.port == 9000


def test_persons_routes_are_registered(app):
    assert app.url_path_for("list_persons") == "/persons"
    assert app.url_path_for("get_person", person_id=1) == "/persons/1"


def test_setup_logging_applies_level(restore_root_level):
    setup_logging("debug")
    assert restore_root_level.level == logging.DEBUG
    setup_logging("not-a-level")
    assert restore_root_level.level == logging.INFO
