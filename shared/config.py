"""Shared configuration constants used by the add-on and the CLI."""
from __future__ import annotations

import os
import tempfile
from pathlib import Path


def _env_flag(name: str, default: bool = False) -> bool:
    """Read boolean env flag."""
    val = os.environ.get(name, "").strip().lower()
    if not val:
        return default
    return val in ("1", "true", "yes", "on")


# Env var names (read live by shared.runtime_settings)
ENV_ENABLED = "GENDER_DIVERSITY_ENABLED"
ENV_LORE_FRIENDLY = "GENDER_DIVERSITY_LORE_FRIENDLY"
ENV_FEMALE_PERCENTAGE = "GENDER_DIVERSITY_FEMALE_PERCENTAGE"
ENV_STRICT_TARGET = "GENDER_DIVERSITY_STRICT_TARGET"
ENV_RULES_PATH = "GENDER_DIVERSITY_RULES_PATH"
ENV_LOG_FILE = "GENDER_DIVERSITY_LOG_FILE"

# Project root: resolve relative to this file's location
_PROJECT_ROOT = Path(__file__).resolve().parent.parent

# Default exclusion rules ship inside the package so installed copies find them
DEFAULT_RULES_PATH = _PROJECT_ROOT / "gender_diversity" / "rules" / "data" / "default_rules.yaml"


def resolve_rules_path() -> Path:
    """Rules file: GENDER_DIVERSITY_RULES_PATH when set, else the bundled default."""
    raw = os.environ.get(ENV_RULES_PATH, "").strip()
    return Path(raw) if raw else DEFAULT_RULES_PATH


def resolve_log_path() -> Path:
    """Log file: GENDER_DIVERSITY_LOG_FILE when set, else GenderDiversity.log in the temp dir."""
    raw = os.environ.get(ENV_LOG_FILE, "").strip()
    if raw:
        return Path(raw)
    return Path(tempfile.gettempdir()) / "GenderDiversity.log"


# File logging from the module lifecycle; disable for embedded hosts that own logging
ENABLE_FILE_LOGGING = _env_flag("GENDER_DIVERSITY_FILE_LOGGING", default=True)
