"""Runtime interception of Python host callables.

Every wrapper runs ``before`` first, then the original inside ``try/finally``
and always hands ``before``'s return value to ``after``, so an exception
raised by the host can never leave an override active.
"""
from __future__ import annotations

import functools
import importlib
import logging
from dataclasses import dataclass
from typing import Any, Callable

from gender_diversity.core.error_handling import HookInstallError

logger = logging.getLogger(__name__)

# before(instance, *args, **kwargs) -> token ; after(token) -> None
Before = Callable[..., Any]
After = Callable[[Any], None]
# postfix(instance, result) -> result
Postfix = Callable[[Any, Any], Any]


def resolve_type(dotted: str) -> type | None:
    """Resolve ``"pkg.module.Class"`` (nested classes allowed); None when unreachable."""
    parts = (dotted or "").strip().split(".")
    if len(parts) < 2:
        return None
    for split in range(len(parts) - 1, 0, -1):
        module_name = ".".join(parts[:split])
        try:
            obj: Any = importlib.import_module(module_name)
        except ImportError:
            continue
        try:
            for attr in parts[split:]:
                obj = getattr(obj, attr)
        except AttributeError:
            return None
        return obj if isinstance(obj, type) else None
    return None


def _wrap_call(original: Callable, before: Before, after: After) -> Callable:
    @functools.wraps(original)
    def wrapper(self, *args, **kwargs):
        token = before(self, *args, **kwargs)
        try:
            return original(self, *args, **kwargs)
        finally:
            after(token)

    return wrapper


@dataclass
class _AppliedPatch:
    name: str
    owner: type
    attr: str
    original: Any
    # True when the member came from a base class and owner had no own entry
    inherited: bool = False


class PatchRegistry:
    """Applies and tracks patches so they can be undone in reverse order.

    Members are looked up along the owner's MRO, the wrapper is always
    installed on the owner itself, so sibling subclasses of a shared base
    are left alone.
    """

    def __init__(self, owner_id: str = "mod.genderdiversity") -> None:
        self.owner_id = owner_id
        self._applied: list[_AppliedPatch] = []

    @property
    def applied(self) -> list[str]:
        return [p.name for p in self._applied]

    def _install(self, name: str, owner: type, attr: str, replacement: Any) -> None:
        inherited = attr not in owner.__dict__
        original = None if inherited else owner.__dict__[attr]
        setattr(owner, attr, replacement)
        self._applied.append(_AppliedPatch(name, owner, attr, original, inherited))
        logger.info("Patched %s (%s.%s)", name, owner.__name__, attr)

    def _lookup(self, name: str, owner: type | None, attr: str) -> Any:
        if owner is None:
            raise HookInstallError(name, "host type not found")
        for klass in owner.__mro__:
            if attr in klass.__dict__:
                return klass.__dict__[attr]
        raise HookInstallError(name, f"{owner.__name__}.{attr} not found")

    def patch_method(self, name: str, owner: type | None, attr: str, before: Before, after: After) -> None:
        original = self._lookup(name, owner, attr)
        if not callable(original):
            raise HookInstallError(name, f"{owner.__name__}.{attr} is not a method")
        self._install(name, owner, attr, _wrap_call(original, before, after))

    def patch_constructor(self, name: str, owner: type | None, before: Before, after: After) -> None:
        self.patch_method(name, owner, "__init__", before, after)

    def patch_property_setter(
        self, name: str, owner: type | None, attr: str, before: Before, after: After
    ) -> None:
        prop = self._lookup(name, owner, attr)
        if not isinstance(prop, property) or prop.fset is None:
            raise HookInstallError(name, f"{owner.__name__}.{attr} setter not found")
        wrapped = property(prop.fget, _wrap_call(prop.fset, before, after), prop.fdel, prop.__doc__)
        self._install(name, owner, attr, wrapped)

    def patch_property_getter(self, name: str, owner: type | None, attr: str, postfix: Postfix) -> None:
        prop = self._lookup(name, owner, attr)
        if not isinstance(prop, property) or prop.fget is None:
            raise HookInstallError(name, f"{owner.__name__}.{attr} getter not found")
        fget = prop.fget

        @functools.wraps(fget)
        def getter(self):
            return postfix(self, fget(self))

        self._install(name, owner, attr, property(getter, prop.fset, prop.fdel, prop.__doc__))

    def unpatch_all(self) -> None:
        while self._applied:
            patch = self._applied.pop()
            if patch.inherited:
                delattr(patch.owner, patch.attr)
            else:
                setattr(patch.owner, patch.attr, patch.original)
            logger.info("Unpatched %s", patch.name)
