"""Probabilistic gender diversity for non-hero combat troops.

The public surface is the decision engine (``decide`` / ``generate_seed``) and
the activation scope that carries one verdict through a host callback
sequence. Host integration lives in ``gender_diversity.hooks``.
"""
from __future__ import annotations

from gender_diversity.core.activation import (
    ACTIVATION_SCOPE,
    ActivationRecord,
    ActivationScope,
    OverrideHandle,
    get_activation_scope,
)
from gender_diversity.core.decision import classify, decide, should_be_female
from gender_diversity.core.seeding import generate_seed, stable_hash
from gender_diversity.models.character import CharacterDescriptor, TroopCategory

__all__ = [
    "ACTIVATION_SCOPE",
    "ActivationRecord",
    "ActivationScope",
    "CharacterDescriptor",
    "OverrideHandle",
    "TroopCategory",
    "classify",
    "decide",
    "generate_seed",
    "get_activation_scope",
    "should_be_female",
    "stable_hash",
]
