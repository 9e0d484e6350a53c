"""Activation scope: carries one override verdict from a "before" hook to its "after" hook.

State lives in a ``contextvars.ContextVar`` owned by the scope, so every
thread and every asyncio task sees its own record and no locks are needed.
Each ``enable`` returns an :class:`OverrideHandle`; wrap the host call in
``with scope.override(...)`` (or release the handle in a ``finally``) so
the record is cleared on every exit path.

States are Idle and Active. ``enable`` moves to Active (overwriting any
current record, there is no nesting), ``disable`` moves to Idle.
"""
from __future__ import annotations

import contextvars
import itertools
import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Callable, Iterator

from gender_diversity.core.decision import decide, default_rules
from gender_diversity.models.character import describe, identity_of
from gender_diversity.rules.models import ExclusionRuleSet
from shared.runtime_settings import DiversitySettings, load_diversity_settings

logger = logging.getLogger(__name__)

SettingsProvider = Callable[[], "DiversitySettings | None"]
RulesProvider = Callable[[], ExclusionRuleSet]


@dataclass(frozen=True)
class ActivationRecord:
    active: bool = False
    verdict: bool = False
    target: str | None = None
    # Distinguishes one activation from the next so stale handles can't clear newer records
    generation: int = 0


IDLE = ActivationRecord()

_scope_ids = itertools.count(1)


class OverrideHandle:
    """Release handle for one activation; releasing twice is a no-op."""

    __slots__ = ("_scope", "_record", "_released")

    def __init__(self, scope: "ActivationScope", record: ActivationRecord) -> None:
        self._scope = scope
        self._record = record
        self._released = False

    @property
    def verdict(self) -> bool:
        return self._record.verdict

    @property
    def target(self) -> str | None:
        return self._record.target

    @property
    def released(self) -> bool:
        return self._released

    def release(self) -> None:
        if self._released:
            return
        self._released = True
        self._scope._release(self._record)

    def __enter__(self) -> "OverrideHandle":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()

    def __repr__(self) -> str:
        return (
            f"OverrideHandle(target={self._record.target!r}, verdict={self._record.verdict}, "
            f"released={self._released})"
        )


class ActivationScope:
    """Per-unit-of-work override record plus the providers used to decide it."""

    def __init__(
        self,
        settings_provider: SettingsProvider | None = None,
        rules_provider: RulesProvider | None = None,
        *,
        name: str | None = None,
    ) -> None:
        self._settings_provider = settings_provider or load_diversity_settings
        self._rules_provider = rules_provider or default_rules
        self.name = name or f"scope-{next(_scope_ids)}"
        self._record: contextvars.ContextVar[ActivationRecord] = contextvars.ContextVar(
            f"gender_diversity_activation_{self.name}", default=IDLE
        )
        self._generations = itertools.count(1)

    # --- configuration ---

    def settings(self) -> DiversitySettings | None:
        return self._settings_provider()

    def rules(self) -> ExclusionRuleSet:
        return self._rules_provider()

    # --- transitions ---

    def enable(self, character: Any, seed: int = 0) -> OverrideHandle:
        """Decide for ``character`` (descriptor or host object) and mark the scope Active."""
        descriptor = describe(character)
        # Decide before storing so getter interceptions during the decision see the old record
        verdict = decide(descriptor, seed, self.settings(), self.rules())
        record = ActivationRecord(
            active=True,
            verdict=verdict,
            target=descriptor.identity if descriptor is not None else None,
            generation=next(self._generations),
        )
        previous = self._record.get()
        if previous.active:
            logger.debug(
                "%s: enable for %r overwrites active record for %r",
                self.name,
                record.target,
                previous.target,
            )
        self._record.set(record)
        return OverrideHandle(self, record)

    def disable(self) -> None:
        self._record.set(IDLE)

    def _release(self, record: ActivationRecord) -> None:
        current = self._record.get()
        if current.generation != record.generation:
            logger.debug(
                "%s: stale release for %r ignored (current target %r)",
                self.name,
                record.target,
                current.target,
            )
            return
        self._record.set(IDLE)

    @contextmanager
    def override(self, character: Any, seed: int = 0) -> Iterator[OverrideHandle]:
        """Scoped acquisition: Active inside the block, released on every exit path."""
        handle = self.enable(character, seed)
        try:
            yield handle
        finally:
            handle.release()

    # --- reads ---

    def snapshot(self) -> ActivationRecord:
        return self._record.get()

    def is_active(self) -> bool:
        return self._record.get().active

    def current_verdict(self) -> bool:
        record = self._record.get()
        return record.active and record.verdict

    def is_target_character(self, candidate: Any) -> bool:
        """True when ``candidate`` is the character the active override was decided for."""
        record = self._record.get()
        if not record.active or record.target is None:
            return False
        return identity_of(candidate) == record.target


ACTIVATION_SCOPE = ActivationScope(name="default")


def get_activation_scope() -> ActivationScope:
    return ACTIVATION_SCOPE


__all__ = [
    "ACTIVATION_SCOPE",
    "ActivationRecord",
    "ActivationScope",
    "IDLE",
    "OverrideHandle",
    "get_activation_scope",
]
