"""Decision engine: should this troop display as female?

Every rule is an early exit to the "no override" default. Nothing here
raises: absent settings, descriptors or rules degrade to False.
"""
from __future__ import annotations

import logging
import random

from gender_diversity.constants import PERCENT_SCALE
from gender_diversity.models.character import CharacterDescriptor, TroopCategory
from gender_diversity.rules.loader import RuleSetError, load_rule_set
from gender_diversity.rules.models import ExclusionRuleSet
from shared.runtime_settings import DiversitySettings

logger = logging.getLogger(__name__)

# Unseeded draws use OS entropy; SystemRandom is safe to share across threads
_ENTROPY_RNG = random.SystemRandom()


def default_rules() -> ExclusionRuleSet:
    """Cached default rule set; an unreadable rules file yields an empty set."""
    try:
        return load_rule_set()
    except RuleSetError as e:
        logger.error("Exclusion rules unavailable, continuing without exclusions: %s", e)
        return ExclusionRuleSet()


def classify(identity: str | None, rules: ExclusionRuleSet | None = None) -> TroopCategory:
    """Civilian when the identity key contains any civilian substring."""
    rules = rules if rules is not None else default_rules()
    if rules.is_civilian(identity):
        return TroopCategory.CIVILIAN
    return TroopCategory.COMBATANT


def _draw(seed: int) -> int:
    if seed != 0:
        return random.Random(seed).randrange(PERCENT_SCALE)
    return _ENTROPY_RNG.randrange(PERCENT_SCALE)


def decide(
    descriptor: CharacterDescriptor | None,
    seed: int,
    settings: DiversitySettings | None,
    rules: ExclusionRuleSet | None = None,
) -> bool:
    """Return True when the descriptor should display as female."""
    if settings is None or not settings.enabled:
        return False
    if descriptor is None:
        return False
    # Never flip already-female units
    if descriptor.is_female:
        return False
    # Named characters are exempt
    if descriptor.is_hero:
        return False

    rules = rules if rules is not None else default_rules()
    category = descriptor.category or classify(descriptor.identity, rules)
    if category == TroopCategory.CIVILIAN:
        return False

    if settings.lore_friendly:
        if rules.is_always_male(descriptor.identity):
            return False
        if rules.is_always_female(descriptor.identity):
            return False

    return _draw(seed) < settings.female_percentage


# Name used by the host-facing hooks
should_be_female = decide
