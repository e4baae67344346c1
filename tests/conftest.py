"""
Shared test fixtures — a fresh JHipster app per test.
"""

import logging
from pathlib import Path

import pytest

from postgis_point.core.models.app import AppConfig
from tests.jhipster_app import CHANGELOG_PATH, DOMAIN_DIR, YO_RC, make_jhipster_app


@pytest.fixture
def app_root(tmp_path: Path) -> Path:
    """A fresh JHipster app on disk."""
    return make_jhipster_app(tmp_path / "shop")


@pytest.fixture
def app_config() -> AppConfig:
    """The AppConfig matching ``app_root``'s .yo-rc.json."""
    return AppConfig.model_validate(YO_RC["generator-jhipster"])


@pytest.fixture
def delivery_java(app_root: Path) -> Path:
    return app_root / DOMAIN_DIR / "Delivery.java"


@pytest.fixture
def delivery_changelog(app_root: Path) -> Path:
    return app_root / CHANGELOG_PATH


@pytest.fixture(autouse=True)
def _restore_logging():
    """Undo the root logger changes made by setup_logging and CLI runs."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yaml_level = logging.getLogger("yaml").level
    raise_exceptions = logging.raiseExceptions
    yield
    logging.raiseExceptions = raise_exceptions
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
    logging.getLogger("yaml").setLevel(yaml_level)
