"""Error handling utilities: hook installation errors and structured logging."""
from __future__ import annotations

import logging
from typing import Any

logger = logging.getLogger(__name__)


class HookInstallError(RuntimeError):
    """A host type, method or property needed by one hook could not be patched."""

    def __init__(self, hook_name: str, message: str) -> None:
        super().__init__(f"{hook_name}: {message}")
        self.hook_name = hook_name


def log_error_with_context(
    error: Exception,
    hook_name: str,
    target: str | None = None,
    extra_context: dict[str, Any] | None = None,
    *,
    level: int = logging.ERROR,
) -> None:
    """
    Log an error with its hook context and stack trace.

    Args:
        error: The exception that occurred
        hook_name: Name of the hook being installed or run (e.g. 'mission.spawn_agent')
        target: Dotted host type/attribute the hook points at
        extra_context: Additional context dict to include in the log record
        level: Logging level (hook install failures use WARNING)
    """
    context_str = f"target={target}" if target else "no target"

    extra: dict[str, Any] = {}
    if extra_context:
        extra.update(extra_context)
    if target:
        extra["hook_target"] = target
    extra["hook_name"] = hook_name

    logger.log(
        level,
        f"[{hook_name}] Error: {type(error).__name__}: {error} ({context_str})",
        exc_info=True,
        extra=extra,
    )
