"""Exclusion rule sets (always-male, always-female, civilian substrings)."""
from __future__ import annotations

from gender_diversity.rules.loader import RuleSetError, clear_rule_cache, load_rule_set
from gender_diversity.rules.models import ExclusionRuleSet

__all__ = ["ExclusionRuleSet", "RuleSetError", "clear_rule_cache", "load_rule_set"]
