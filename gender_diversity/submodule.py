"""Module lifecycle: install hooks on load, remove them on unload."""
from __future__ import annotations

import logging
from pathlib import Path

from gender_diversity.core.activation import ActivationScope, get_activation_scope
from gender_diversity.hooks.integration import HostTargets, InstallReport, install_default_hooks
from gender_diversity.hooks.overrides import OverrideHooks
from gender_diversity.hooks.patcher import PatchRegistry
from shared.config import ENABLE_FILE_LOGGING, resolve_log_path

logger = logging.getLogger(__name__)

PATCH_OWNER_ID = "mod.genderdiversity"
_PACKAGE_LOGGER = "gender_diversity"


def configure_file_logging(path: Path | None = None) -> logging.Handler | None:
    """Attach a file handler to the package logger; returns None when the file can't be opened."""
    log_path = path or resolve_log_path()
    try:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(log_path, encoding="utf-8")
    except OSError as e:
        logger.warning("File logging disabled, cannot open %s: %s", log_path, e)
        return None
    handler.setFormatter(logging.Formatter("[%(asctime)s] %(levelname)s %(name)s: %(message)s", "%H:%M:%S"))
    pkg_logger = logging.getLogger(_PACKAGE_LOGGER)
    pkg_logger.addHandler(handler)
    if pkg_logger.level == logging.NOTSET or pkg_logger.level > logging.INFO:
        pkg_logger.setLevel(logging.INFO)
    return handler


class GenderDiversityModule:
    """Entry object a host's module loader drives."""

    def __init__(
        self,
        targets: HostTargets,
        scope: ActivationScope | None = None,
        *,
        file_logging: bool | None = None,
        log_path: Path | None = None,
    ) -> None:
        self.targets = targets
        self.scope = scope or get_activation_scope()
        self.hooks = OverrideHooks(self.scope)
        self.registry: PatchRegistry | None = None
        self.report: InstallReport | None = None
        self._file_logging = ENABLE_FILE_LOGGING if file_logging is None else file_logging
        self._log_path = log_path
        self._log_handler: logging.Handler | None = None

    @property
    def loaded(self) -> bool:
        return self.registry is not None

    def on_load(self) -> InstallReport | None:
        if self.loaded:
            logger.info("GenderDiversity already loaded")
            return self.report
        if self._file_logging and self._log_handler is None:
            self._log_handler = configure_file_logging(self._log_path)
        logger.info("GenderDiversity loading...")
        registry = PatchRegistry(PATCH_OWNER_ID)
        try:
            self.report = install_default_hooks(registry, self.hooks, self.targets)
        except Exception:
            logger.exception("GenderDiversity failed to load; removing partial patches")
            registry.unpatch_all()
            return None
        self.registry = registry
        if self.report.skipped:
            for name, reason in self.report.skipped.items():
                logger.warning("Hook %s not installed: %s", name, reason)
        logger.info("GenderDiversity loaded (%s)", ", ".join(self.report.installed) or "no hooks")
        return self.report

    def on_unload(self) -> None:
        if self.registry is not None:
            self.registry.unpatch_all()
            self.registry = None
        self.scope.disable()
        logger.info("GenderDiversity unloaded")
        if self._log_handler is not None:
            logging.getLogger(_PACKAGE_LOGGER).removeHandler(self._log_handler)
            self._log_handler.close()
            self._log_handler = None
