"""Runtime env parsing helpers for the live diversity settings."""
from __future__ import annotations

import logging
import os
from typing import Mapping

from pydantic import BaseModel, ConfigDict, field_validator

from shared.config import (
    ENV_ENABLED,
    ENV_FEMALE_PERCENTAGE,
    ENV_LORE_FRIENDLY,
    ENV_STRICT_TARGET,
)

logger = logging.getLogger(__name__)

DEFAULT_FEMALE_PERCENTAGE = 50


class DiversitySettings(BaseModel):
    """Read-only settings snapshot consulted once per decision."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    enabled: bool = True
    lore_friendly: bool = True
    female_percentage: int = DEFAULT_FEMALE_PERCENTAGE  # 0..100
    strict_target: bool = True

    @field_validator("female_percentage")
    @classmethod
    def _bounds_female_percentage(cls, v: int) -> int:
        if v < 0 or v > 100:
            raise ValueError("female_percentage must be within 0..100")
        return v


def env_flag(name: str, default: bool = False, environ: Mapping[str, str] | None = None) -> bool:
    """Read boolean env values from common truthy/falsey forms."""
    env = os.environ if environ is None else environ
    val = env.get(name, "").strip().lower()
    if not val:
        return default
    return val in ("1", "true", "yes", "on")


def env_int(name: str, default: int, environ: Mapping[str, str] | None = None) -> int:
    """Read an integer env value; malformed values fall back to default with a warning."""
    env = os.environ if environ is None else environ
    raw = env.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring non-integer %s=%r; using %d", name, raw, default)
        return default


def clamp_percentage(value: int) -> int:
    if value < 0 or value > 100:
        clamped = max(0, min(100, value))
        logger.warning("female percentage %d out of range; clamped to %d", value, clamped)
        return clamped
    return value


def load_diversity_settings(environ: Mapping[str, str] | None = None) -> DiversitySettings:
    """Build a settings snapshot from the environment (re-read on every call)."""
    env = os.environ if environ is None else environ
    return DiversitySettings(
        enabled=env_flag(ENV_ENABLED, default=True, environ=env),
        lore_friendly=env_flag(ENV_LORE_FRIENDLY, default=True, environ=env),
        female_percentage=clamp_percentage(
            env_int(ENV_FEMALE_PERCENTAGE, DEFAULT_FEMALE_PERCENTAGE, environ=env)
        ),
        strict_target=env_flag(ENV_STRICT_TARGET, default=True, environ=env),
    )
