"""Activation scope: state machine, scoped release, and per-thread/per-task isolation."""
from __future__ import annotations

import asyncio
import random
import threading
import time

import pytest

from gender_diversity.core.activation import (
    ACTIVATION_SCOPE,
    IDLE,
    ActivationScope,
    get_activation_scope,
)
from gender_diversity.models.character import CharacterDescriptor
from gender_diversity.rules.models import ExclusionRuleSet
from shared.runtime_settings import DiversitySettings

RULES = ExclusionRuleSet(always_male=["nord_huscarl"], civilian=["village_"])


def _scope(percentage: int = 100, **kw) -> ActivationScope:
    settings = DiversitySettings(female_percentage=percentage, **kw)
    return ActivationScope(lambda: settings, lambda: RULES)


FLIPS = CharacterDescriptor(identity="imperial_infantryman")
STAYS = CharacterDescriptor(identity="nord_huscarl")


class TestStateMachine:
    def test_starts_idle(self) -> None:
        scope = _scope()
        assert scope.snapshot() == IDLE
        assert scope.is_active() is False
        assert scope.current_verdict() is False
        assert scope.is_target_character(FLIPS) is False

    def test_enable_sets_active_record(self) -> None:
        scope = _scope()
        handle = scope.enable(FLIPS, seed=11)
        record = scope.snapshot()
        assert record.active is True
        assert record.verdict is True
        assert record.target == "imperial_infantryman"
        assert handle.verdict is True
        assert handle.target == "imperial_infantryman"

    def test_disable_returns_to_idle(self) -> None:
        scope = _scope()
        scope.enable(FLIPS, seed=11)
        scope.disable()
        assert scope.is_active() is False
        assert scope.current_verdict() is False
        assert scope.snapshot().target is None

    def test_excluded_character_is_active_with_false_verdict(self) -> None:
        scope = _scope()
        scope.enable(STAYS, seed=11)
        assert scope.is_active() is True
        assert scope.current_verdict() is False

    def test_enable_absent_character_is_active_without_target(self) -> None:
        scope = _scope()
        scope.enable(None)
        assert scope.is_active() is True
        assert scope.current_verdict() is False
        assert scope.is_target_character(FLIPS) is False

    def test_reenable_overwrites(self) -> None:
        scope = _scope()
        scope.enable(STAYS, seed=1)
        scope.enable(FLIPS, seed=2)
        assert scope.snapshot().target == "imperial_infantryman"
        assert scope.current_verdict() is True

    def test_is_target_accepts_descriptor_host_object_or_string(self) -> None:
        class HostCharacter:
            string_id = "imperial_infantryman"

        scope = _scope()
        scope.enable(FLIPS, seed=3)
        assert scope.is_target_character(FLIPS)
        assert scope.is_target_character(HostCharacter())
        assert scope.is_target_character("imperial_infantryman")
        assert not scope.is_target_character("battanian_fian")

    def test_settings_read_per_enable(self) -> None:
        current = {"pct": 0}
        scope = ActivationScope(lambda: DiversitySettings(female_percentage=current["pct"]), lambda: RULES)
        scope.enable(FLIPS, seed=5)
        assert scope.current_verdict() is False
        current["pct"] = 100
        scope.enable(FLIPS, seed=5)
        assert scope.current_verdict() is True

    def test_missing_settings_yield_false_verdict(self) -> None:
        scope = ActivationScope(lambda: None, lambda: RULES)
        scope.enable(FLIPS, seed=5)
        assert scope.current_verdict() is False


class TestScopedRelease:
    def test_override_context_releases_on_normal_exit(self) -> None:
        scope = _scope()
        with scope.override(FLIPS, seed=4) as handle:
            assert scope.current_verdict() is True
        assert handle.released is True
        assert scope.is_active() is False

    def test_override_context_releases_on_error(self) -> None:
        scope = _scope()
        with pytest.raises(RuntimeError):
            with scope.override(FLIPS, seed=4):
                raise RuntimeError("host failure")
        assert scope.is_active() is False

    def test_handle_is_a_context_manager(self) -> None:
        scope = _scope()
        with pytest.raises(KeyError):
            with scope.enable(FLIPS, seed=4):
                raise KeyError("boom")
        assert scope.is_active() is False

    def test_release_is_idempotent(self) -> None:
        scope = _scope()
        handle = scope.enable(FLIPS, seed=4)
        handle.release()
        later = scope.enable(STAYS, seed=4)
        handle.release()
        assert scope.is_active() is True
        assert scope.snapshot().target == later.target

    def test_stale_handle_does_not_clear_newer_activation(self) -> None:
        scope = _scope()
        first = scope.enable(STAYS, seed=1)
        second = scope.enable(FLIPS, seed=2)
        first.release()
        assert scope.is_active() is True
        assert scope.snapshot().target == "imperial_infantryman"
        second.release()
        assert scope.is_active() is False

    def test_scopes_are_independent(self) -> None:
        a, b = _scope(), _scope()
        a.enable(FLIPS, seed=1)
        assert b.is_active() is False


def test_default_scope_is_shared() -> None:
    assert get_activation_scope() is ACTIVATION_SCOPE


def test_threads_never_observe_each_others_verdict() -> None:
    """Stress harness: interleaved enable/read/disable on many threads."""
    scope = _scope(percentage=100)
    workers = 8
    rounds = 400
    start = threading.Barrier(workers)
    failures: list[str] = []
    lock = threading.Lock()

    def worker(n: int) -> None:
        rng = random.Random(n)
        # Even workers always flip, odd workers never do
        mine = FLIPS if n % 2 == 0 else STAYS
        expected = n % 2 == 0
        start.wait()
        for i in range(rounds):
            if scope.is_active():
                with lock:
                    failures.append(f"worker {n} round {i}: stale record before enable")
                return
            with scope.override(mine, seed=i + 1):
                for _ in range(rng.randint(1, 4)):
                    if scope.current_verdict() is not expected or not scope.is_target_character(mine):
                        with lock:
                            failures.append(f"worker {n} round {i}: saw foreign record {scope.snapshot()}")
                        return
                    if rng.random() < 0.5:
                        # Yield to other threads mid-activation
                        time.sleep(0)

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(workers)]
    for th in threads:
        th.start()
    for th in threads:
        th.join()

    assert failures == []
    assert scope.is_active() is False


def test_asyncio_tasks_are_isolated() -> None:
    scope = _scope(percentage=100)

    async def unit(character: CharacterDescriptor, expected: bool) -> list[bool]:
        seen = []
        with scope.override(character, seed=7):
            for _ in range(5):
                await asyncio.sleep(0)
                seen.append(scope.current_verdict() is expected and scope.is_target_character(character))
        return seen

    async def main() -> list[list[bool]]:
        return await asyncio.gather(*(unit(FLIPS if i % 2 else STAYS, bool(i % 2)) for i in range(10)))

    results = asyncio.run(main())
    assert all(all(seen) for seen in results)
    assert scope.is_active() is False
