"""Pytest setup: force temp files into the workspace and isolate env settings per test."""
from __future__ import annotations

import os
import tempfile
from pathlib import Path

import pytest

from gender_diversity.core.activation import ACTIVATION_SCOPE
from gender_diversity.rules.loader import clear_rule_cache
from shared.config import (
    ENV_ENABLED,
    ENV_FEMALE_PERCENTAGE,
    ENV_LOG_FILE,
    ENV_LORE_FRIENDLY,
    ENV_RULES_PATH,
    ENV_STRICT_TARGET,
)

_SETTINGS_ENV = (
    ENV_ENABLED,
    ENV_LORE_FRIENDLY,
    ENV_FEMALE_PERCENTAGE,
    ENV_STRICT_TARGET,
    ENV_RULES_PATH,
    ENV_LOG_FILE,
)


def pytest_sessionstart(session) -> None:
    """Redirect temp files to a writable workspace path for tests."""
    tmp_root = Path(__file__).resolve().parent / ".tmp"
    tmp_root.mkdir(parents=True, exist_ok=True)
    for key in ("TMPDIR", "TEMP", "TMP"):
        os.environ[key] = str(tmp_root)
    tempfile.tempdir = str(tmp_root)
    os.environ["GENDER_DIVERSITY_FILE_LOGGING"] = "0"


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch):
    """Every test starts from default settings, a fresh rule cache and an Idle default scope."""
    for name in _SETTINGS_ENV:
        monkeypatch.delenv(name, raising=False)
    clear_rule_cache()
    ACTIVATION_SCOPE.disable()
    yield
    ACTIVATION_SCOPE.disable()
    clear_rule_cache()
