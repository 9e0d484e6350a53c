"""Character descriptors: the read-only view of a host character the decision engine sees."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class TroopCategory(str, Enum):
    CIVILIAN = "civilian"
    COMBATANT = "combatant"


@dataclass(frozen=True)
class CharacterDescriptor:
    """Identity key plus the two flags the decision rules read.

    ``category`` may be left as None; the decision engine then derives it
    from the identity key against the rule set's civilian substrings.
    """

    identity: str | None = None
    is_hero: bool = False
    is_female: bool = False
    category: TroopCategory | None = None


# Host objects may follow Python or the engine's own property naming
_IDENTITY_ATTRS = ("string_id", "StringId", "identity")
_HERO_ATTRS = ("is_hero", "IsHero")
_FEMALE_ATTRS = ("is_female", "IsFemale")


def _first_attr(obj: Any, names: tuple[str, ...], default: Any = None) -> Any:
    for name in names:
        if hasattr(obj, name):
            return getattr(obj, name)
    return default


def identity_of(obj: Any) -> str | None:
    """Return the identity key of a descriptor, host object or raw string.

    Reads only the identity attribute, so it is safe to call from inside a
    gender-getter interception.
    """
    if obj is None:
        return None
    if isinstance(obj, str):
        return obj
    if isinstance(obj, CharacterDescriptor):
        return obj.identity
    value = _first_attr(obj, _IDENTITY_ATTRS)
    return str(value) if value is not None else None


def describe(obj: Any) -> CharacterDescriptor | None:
    """Build a descriptor from a host character object (None passes through)."""
    if obj is None:
        return None
    if isinstance(obj, CharacterDescriptor):
        return obj
    return CharacterDescriptor(
        identity=identity_of(obj),
        is_hero=bool(_first_attr(obj, _HERO_ATTRS, False)),
        is_female=bool(_first_attr(obj, _FEMALE_ATTRS, False)),
    )


def looks_like_character(obj: Any) -> bool:
    """Duck-typed check used when scanning host call arguments."""
    if obj is None or isinstance(obj, (str, bytes, int, float, bool)):
        return False
    if isinstance(obj, CharacterDescriptor):
        return True
    return any(hasattr(obj, name) for name in _IDENTITY_ATTRS) and any(
        hasattr(type(obj), name) or hasattr(obj, name) for name in _FEMALE_ATTRS
    )
