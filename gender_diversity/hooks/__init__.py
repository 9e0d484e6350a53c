"""Host hook points and the Python-host patching layer."""
from __future__ import annotations

from gender_diversity.hooks.integration import HostTargets, InstallReport, install_default_hooks
from gender_diversity.hooks.interface import HostHooks
from gender_diversity.hooks.overrides import OverrideHooks
from gender_diversity.hooks.patcher import PatchRegistry, resolve_type

__all__ = [
    "HostHooks",
    "HostTargets",
    "InstallReport",
    "OverrideHooks",
    "PatchRegistry",
    "install_default_hooks",
    "resolve_type",
]
