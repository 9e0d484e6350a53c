"""OverrideHooks: the HostHooks implementation backed by an ActivationScope."""
from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Iterator, Sequence

from gender_diversity.core.activation import ActivationScope, OverrideHandle, get_activation_scope
from gender_diversity.core.seeding import generate_seed
from gender_diversity.hooks.interface import HostHooks
from gender_diversity.models.character import describe, identity_of, looks_like_character

logger = logging.getLogger(__name__)

_INSTANCE_SEED_MASK = 0x7FFFFFFF


def instance_context_seed(instance: Any) -> int:
    """Per-object context value: one view-model instance keeps one seed for its lifetime."""
    if instance is None:
        return 0
    return id(instance) & _INSTANCE_SEED_MASK


def party_slot_seed(character: Any, instance: Any) -> int:
    """Party screen rows: identity mixed with the row view-model."""
    return generate_seed(identity_of(character), instance_context_seed(instance))


def encyclopedia_seed(character: Any) -> int:
    """Encyclopedia pages: identity only, so a unit page always shows the same portrait."""
    return generate_seed(identity_of(character), 0)


def find_recruit_args(args: Sequence[Any], character_type: type | None = None) -> tuple[Any, int]:
    """Scan constructor args for the recruited character and its roster index.

    Later matches win, the same way positional args are scanned by the
    recruit view-model hook.
    """
    character = None
    index = 0
    for arg in args or ():
        if character_type is not None and isinstance(arg, character_type):
            character = arg
        elif character_type is None and looks_like_character(arg):
            character = arg
        elif isinstance(arg, int) and not isinstance(arg, bool):
            index = arg
    return character, index


def recruit_seed(args: Sequence[Any], character_type: type | None = None) -> tuple[Any, int]:
    """Return (character, seed) for a recruit-volunteer construction."""
    character, index = find_recruit_args(args, character_type)
    return character, generate_seed(identity_of(character), index)


def spawn_origin_seed(agent_build_data: Any) -> int:
    """Seed associated with a spawn origin (``agent_origin.seed``), 0 when unknown."""
    origin = getattr(agent_build_data, "agent_origin", None)
    seed = getattr(origin, "seed", None) if origin is not None else None
    try:
        return int(seed) if seed is not None else 0
    except (TypeError, ValueError):
        return 0


class OverrideHooks(HostHooks):
    """Hook implementation that routes every call through one ActivationScope."""

    def __init__(self, scope: ActivationScope | None = None, *, strict: bool | None = None) -> None:
        self.scope = scope or get_activation_scope()
        # None: follow the live strict_target setting
        self._strict = strict

    def strict(self) -> bool:
        if self._strict is not None:
            return self._strict
        settings = self.scope.settings()
        return True if settings is None else settings.strict_target

    def _before(self, character: Any, seed: int) -> OverrideHandle | None:
        descriptor = describe(character)
        if descriptor is None or descriptor.is_hero:
            return None
        handle = self.scope.enable(descriptor, seed)
        logger.debug("override enabled for %s (seed=%d, female=%s)", descriptor.identity, seed, handle.verdict)
        return handle

    def _after(self, handle: OverrideHandle | None) -> None:
        if handle is not None:
            handle.release()
        else:
            self.scope.disable()

    def before_spawn(self, character: Any, origin_seed: int = 0) -> OverrideHandle | None:
        return self._before(character, origin_seed)

    def after_spawn(self, handle: OverrideHandle | None = None) -> None:
        self._after(handle)

    def before_visual_construct(self, character: Any, context_seed: int = 0) -> OverrideHandle | None:
        return self._before(character, context_seed)

    def after_visual_construct(self, handle: OverrideHandle | None = None) -> None:
        self._after(handle)

    def intercept_gender_read(self, instance: Any, result: bool) -> bool:
        scope = self.scope
        if not scope.is_active() or not scope.current_verdict():
            return result
        if self.strict() and not scope.is_target_character(instance):
            return result
        return True

    @contextmanager
    def spawning(self, character: Any, origin_seed: int = 0) -> Iterator[OverrideHandle | None]:
        handle = self.before_spawn(character, origin_seed)
        try:
            yield handle
        finally:
            # A skipped character enabled nothing, so an outer record stays
            if handle is not None:
                self.after_spawn(handle)

    @contextmanager
    def constructing(self, character: Any, context_seed: int = 0) -> Iterator[OverrideHandle | None]:
        handle = self.before_visual_construct(character, context_seed)
        try:
            yield handle
        finally:
            if handle is not None:
                self.after_visual_construct(handle)
