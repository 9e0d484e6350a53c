"""``gendiv config`` — show effective settings and exclusion rules."""
from __future__ import annotations

from gender_diversity.rules.loader import RuleSetError, load_rule_set
from shared.config import (
    ENV_ENABLED,
    ENV_FEMALE_PERCENTAGE,
    ENV_LORE_FRIENDLY,
    ENV_RULES_PATH,
    ENV_STRICT_TARGET,
    resolve_rules_path,
)
from shared.runtime_settings import load_diversity_settings


def register(subparsers) -> None:
    p = subparsers.add_parser("config", help="Show effective settings and exclusion rules")
    p.set_defaults(func=run)


def run(args) -> int:
    settings = load_diversity_settings()
    print("Effective settings (after env overrides):")
    for key, value in settings.model_dump().items():
        print(f"- {key}: {value}")

    path = resolve_rules_path()
    print(f"\nExclusion rules: {path}")
    try:
        rules = load_rule_set(path)
    except RuleSetError as e:
        print(f"ERROR: {e}")
        return 1
    for section in ("always_male", "always_female", "civilian"):
        values = getattr(rules, section)
        print(f"- {section} ({len(values)}): {', '.join(values) or '-'}")

    print("\nOverride with:")
    for name in (ENV_ENABLED, ENV_LORE_FRIENDLY, ENV_FEMALE_PERCENTAGE, ENV_STRICT_TARGET, ENV_RULES_PATH):
        print(f"  {name}")
    return 0
