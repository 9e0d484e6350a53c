"""Exclusion rule loader with module-level cache."""
from __future__ import annotations

import logging
import threading
from pathlib import Path

import yaml
from pydantic import ValidationError

from gender_diversity.rules.models import ExclusionRuleSet
from shared.config import resolve_rules_path

logger = logging.getLogger(__name__)

_RULE_CACHE: dict[str, ExclusionRuleSet] = {}
_CACHE_LOCK = threading.Lock()


class RuleSetError(ValueError):
    """Raised when a rules file is missing, unreadable, or fails validation."""


def _read_yaml(path: Path) -> object:
    return yaml.safe_load(path.read_text(encoding="utf-8"))


def parse_rule_set(data: object, *, source: str = "<memory>") -> ExclusionRuleSet:
    """Validate a decoded rules document (mapping, or None for an empty file)."""
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise RuleSetError(f"{source}: expected a mapping at top level, got {type(data).__name__}")
    try:
        return ExclusionRuleSet.model_validate(data)
    except ValidationError as e:
        raise RuleSetError(f"{source}: invalid rule set: {e}") from e


def load_rule_set(path: str | Path | None = None, *, use_cache: bool = True) -> ExclusionRuleSet:
    """Load the rule set from ``path`` (default: env override or the bundled file)."""
    p = Path(path) if path is not None else resolve_rules_path()
    key = str(p.resolve())
    if use_cache:
        with _CACHE_LOCK:
            cached = _RULE_CACHE.get(key)
        if cached is not None:
            return cached

    try:
        if not p.is_file():
            raise RuleSetError(f"rules file not found: {p}")
        data = _read_yaml(p)
    except yaml.YAMLError as e:
        raise RuleSetError(f"{p}: malformed YAML: {e}") from e
    except UnicodeDecodeError as e:
        raise RuleSetError(f"{p}: not valid UTF-8: {e}") from e
    except OSError as e:
        raise RuleSetError(f"{p}: cannot read rules file: {e}") from e

    rules = parse_rule_set(data, source=str(p))
    logger.info(
        "Loaded exclusion rules from %s (male=%d, female=%d, civilian=%d)",
        p,
        len(rules.always_male),
        len(rules.always_female),
        len(rules.civilian),
    )
    if use_cache:
        with _CACHE_LOCK:
            _RULE_CACHE[key] = rules
    return rules


def clear_rule_cache() -> None:
    """Drop cached rule sets (tests, or after editing the rules file)."""
    with _CACHE_LOCK:
        _RULE_CACHE.clear()
