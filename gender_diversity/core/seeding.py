"""Stable seeds: same troop in the same context always draws the same number."""
from __future__ import annotations

import hashlib

from gender_diversity.constants import SEED_MASK, SEED_MIX_MULTIPLIER


def stable_hash(text: str) -> int:
    """Deterministic unsigned 32-bit hash of ``text``.

    Derived from SHA-256 so the value never depends on the interpreter,
    process or hash randomization (unlike the builtin ``hash``).
    """
    digest = hashlib.sha256(text.encode("utf-8")).hexdigest()[:8]
    return int(digest, 16)


def generate_seed(identity: str | None, context_seed: int = 0) -> int:
    """Mix an identity key with a context value (battle index, roster slot, ...).

    Returns ``context_seed`` unchanged when there is no identity key.
    """
    if not identity:
        return context_seed
    return (stable_hash(identity) ^ (context_seed * SEED_MIX_MULTIPLIER)) & SEED_MASK
