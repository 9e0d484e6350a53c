"""Default host integration: which host members get hooked, and how.

Host types are given as classes or dotted names. Each hook installs on its
own; a missing type or member is logged and skipped so the remaining hooks
still work.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable

from pydantic import BaseModel, ConfigDict

from gender_diversity.core.error_handling import HookInstallError, log_error_with_context
from gender_diversity.hooks.overrides import (
    OverrideHooks,
    encyclopedia_seed,
    party_slot_seed,
    recruit_seed,
    spawn_origin_seed,
)
from gender_diversity.hooks.patcher import PatchRegistry, resolve_type

logger = logging.getLogger(__name__)


class HostTargets(BaseModel):
    """Host types to hook; each may be a class, a dotted name, or None to skip."""
    model_config = ConfigDict(arbitrary_types_allowed=True, extra="forbid")

    mission: Any = None
    character: Any = None
    party_character_vm: Any = None
    encyclopedia_unit_vm: Any = None
    recruit_volunteer_vm: Any = None

    def resolve(self, key: str) -> type | None:
        value = getattr(self, key)
        if value is None or isinstance(value, type):
            return value
        return resolve_type(str(value))

    def describe_target(self, key: str) -> str:
        value = getattr(self, key)
        if isinstance(value, type):
            return f"{value.__module__}.{value.__qualname__}"
        return str(value)


@dataclass
class InstallReport:
    installed: list[str] = field(default_factory=list)
    skipped: dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.skipped


def _releaser(after_hook: Callable[[Any], None]) -> Callable[[Any], None]:
    def after(handle):
        # Nothing was enabled when the before hook skipped the character
        if handle is not None:
            after_hook(handle)

    return after


def _install_spawn(registry: PatchRegistry, hooks: OverrideHooks, targets: HostTargets) -> None:
    def before(_mission, agent_build_data=None, *args, **kwargs):
        character = getattr(agent_build_data, "agent_character", None)
        if character is None:
            return None
        return hooks.before_spawn(character, spawn_origin_seed(agent_build_data))

    registry.patch_method(
        "mission.spawn_agent", targets.resolve("mission"), "spawn_agent", before, _releaser(hooks.after_spawn)
    )


def _install_gender_getter(registry: PatchRegistry, hooks: OverrideHooks, targets: HostTargets) -> None:
    registry.patch_property_getter(
        "character.is_female",
        targets.resolve("character"),
        "is_female",
        hooks.intercept_gender_read,
    )


def _install_party_vm(registry: PatchRegistry, hooks: OverrideHooks, targets: HostTargets) -> None:
    owner = targets.resolve("party_character_vm")

    def character_before(instance, value=None, *args, **kwargs):
        return hooks.before_visual_construct(value, party_slot_seed(value, instance))

    def troop_before(instance, value=None, *args, **kwargs):
        # Roster elements wrap the character
        character = getattr(value, "character", None) if value is not None else None
        return hooks.before_visual_construct(character, party_slot_seed(character, instance))

    errors: list[HookInstallError] = []
    for attr, before in (("character", character_before), ("troop", troop_before)):
        try:
            registry.patch_property_setter(
                f"party_character_vm.{attr}", owner, attr, before, _releaser(hooks.after_visual_construct)
            )
        except HookInstallError as e:
            errors.append(e)
    if len(errors) == 2:
        raise errors[0]
    for e in errors:
        logger.warning("Partial party screen hook: %s", e)


def _install_encyclopedia_vm(registry: PatchRegistry, hooks: OverrideHooks, targets: HostTargets) -> None:
    def before(_instance, character=None, *args, **kwargs):
        return hooks.before_visual_construct(character, encyclopedia_seed(character))

    registry.patch_constructor(
        "encyclopedia_unit_vm.__init__",
        targets.resolve("encyclopedia_unit_vm"),
        before,
        _releaser(hooks.after_visual_construct),
    )


def _install_recruit_vm(registry: PatchRegistry, hooks: OverrideHooks, targets: HostTargets) -> None:
    character_type = targets.resolve("character")

    def before(_instance, *args, **kwargs):
        character, seed = recruit_seed(list(args) + list(kwargs.values()), character_type)
        return hooks.before_visual_construct(character, seed)

    registry.patch_constructor(
        "recruit_volunteer_vm.__init__",
        targets.resolve("recruit_volunteer_vm"),
        before,
        _releaser(hooks.after_visual_construct),
    )


Installer = Callable[[PatchRegistry, OverrideHooks, HostTargets], None]

DEFAULT_INSTALLERS: tuple[tuple[str, str, Installer], ...] = (
    ("mission", "spawn", _install_spawn),
    ("character", "gender_getter", _install_gender_getter),
    ("party_character_vm", "party_screen", _install_party_vm),
    ("encyclopedia_unit_vm", "encyclopedia", _install_encyclopedia_vm),
    ("recruit_volunteer_vm", "recruitment", _install_recruit_vm),
)


def install_default_hooks(
    registry: PatchRegistry,
    hooks: OverrideHooks,
    targets: HostTargets,
) -> InstallReport:
    """Install every default hook independently and report what took."""
    report = InstallReport()
    logger.info("=== Hook installation started (%s) ===", registry.owner_id)
    for key, name, installer in DEFAULT_INSTALLERS:
        if getattr(targets, key) is None:
            report.skipped[name] = "no target configured"
            continue
        try:
            installer(registry, hooks, targets)
        except HookInstallError as e:
            log_error_with_context(e, name, target=targets.describe_target(key), level=logging.WARNING)
            report.skipped[name] = str(e)
            continue
        except Exception as e:
            log_error_with_context(e, name, target=targets.describe_target(key))
            report.skipped[name] = f"{type(e).__name__}: {e}"
            continue
        report.installed.append(name)
    logger.info(
        "=== Hook installation complete: %d installed, %d skipped ===",
        len(report.installed),
        len(report.skipped),
    )
    return report
