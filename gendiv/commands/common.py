"""Options shared by commands that evaluate verdicts."""
from __future__ import annotations

from gender_diversity.core.decision import default_rules
from gender_diversity.models.character import CharacterDescriptor
from gender_diversity.rules.loader import RuleSetError, load_rule_set
from gender_diversity.rules.models import ExclusionRuleSet
from shared.runtime_settings import DiversitySettings, load_diversity_settings


def add_decision_options(p) -> None:
    p.add_argument("identity", help="Troop identity key, e.g. aserai_mameluke_soldier")
    p.add_argument("--hero", action="store_true", help="Treat the character as a hero")
    p.add_argument("--female", action="store_true", help="Treat the character as already female")
    p.add_argument("--percentage", type=int, default=None, help="Female percentage 0-100 (default: env)")
    p.add_argument("--no-lore", action="store_true", help="Disable lore-friendly exclusions")
    p.add_argument("--disabled", action="store_true", help="Evaluate with the add-on disabled")
    p.add_argument("--rules", default=None, help="Path to an exclusion rules YAML file")


def settings_from_args(args) -> DiversitySettings:
    base = load_diversity_settings()
    updates: dict = {}
    if args.percentage is not None:
        updates["female_percentage"] = args.percentage
    if args.no_lore:
        updates["lore_friendly"] = False
    if args.disabled:
        updates["enabled"] = False
    if not updates:
        return base
    return DiversitySettings.model_validate({**base.model_dump(), **updates})


def rules_from_args(args) -> ExclusionRuleSet | None:
    """Rule set for the command; None (after printing the error) when the file is bad."""
    if not getattr(args, "rules", None):
        return default_rules()
    try:
        return load_rule_set(args.rules)
    except RuleSetError as e:
        print(f"ERROR: {e}")
        return None


def descriptor_from_args(args) -> CharacterDescriptor:
    return CharacterDescriptor(identity=args.identity, is_hero=args.hero, is_female=args.female)
