"""Hook points a host integration calls; the core depends only on this interface."""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from gender_diversity.core.activation import OverrideHandle


class HostHooks(ABC):
    """Before/after pairs around spawning and visual construction, plus the gender getter.

    ``before_*`` may return a handle; the integration must pass it to the
    matching ``after_*`` from a ``finally`` block so the override is cleared
    even when the host raises in between.
    """

    @abstractmethod
    def before_spawn(self, character: Any, origin_seed: int = 0) -> OverrideHandle | None: ...

    @abstractmethod
    def after_spawn(self, handle: OverrideHandle | None = None) -> None: ...

    @abstractmethod
    def before_visual_construct(self, character: Any, context_seed: int = 0) -> OverrideHandle | None: ...

    @abstractmethod
    def after_visual_construct(self, handle: OverrideHandle | None = None) -> None: ...

    @abstractmethod
    def intercept_gender_read(self, instance: Any, result: bool) -> bool:
        """Return the is-female value the host should see for ``instance``."""
