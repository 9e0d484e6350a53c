"""Pydantic model for exclusion rule sets."""
from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _normalize_substrings(values: object) -> list[str]:
    """Lowercase, strip, drop blanks and duplicates while preserving order."""
    if values is None:
        return []
    if isinstance(values, str):
        values = [values]
    if not isinstance(values, (list, tuple)):
        raise ValueError(f"expected a list of substrings, got {type(values).__name__}")
    out: list[str] = []
    seen: set[str] = set()
    for v in values:
        if isinstance(v, (dict, list, tuple)):
            raise ValueError(f"expected a substring, got {type(v).__name__}")
        key = str(v or "").strip().lower()
        if not key or key in seen:
            continue
        seen.add(key)
        out.append(key)
    return out


def _matches_any(identity: str | None, substrings: list[str]) -> bool:
    if not identity:
        return False
    key = identity.lower()
    return any(s in key for s in substrings)


class ExclusionRuleSet(BaseModel):
    """Ordered identity-key substrings consulted by the decision engine."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    always_male: List[str] = Field(default_factory=list)
    always_female: List[str] = Field(default_factory=list)
    civilian: List[str] = Field(default_factory=list)

    @field_validator("always_male", "always_female", "civilian", mode="before")
    @classmethod
    def _normalize(cls, v: object) -> list[str]:
        return _normalize_substrings(v)

    def is_always_male(self, identity: str | None) -> bool:
        return _matches_any(identity, self.always_male)

    def is_always_female(self, identity: str | None) -> bool:
        return _matches_any(identity, self.always_female)

    def is_civilian(self, identity: str | None) -> bool:
        return _matches_any(identity, self.civilian)
