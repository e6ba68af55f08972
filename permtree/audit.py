"""Structured audit logging of rule changes."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from typing import TYPE_CHECKING

from .config import LoggingSettings, PermissionsConfig

if TYPE_CHECKING:
    from .permission_list import PermissionList


AUDIT_LOGGER_NAME = "permtree.audit"


def _audit_handler(settings: LoggingSettings) -> logging.Handler:
    """Build the stream or rotating file handler named by ``settings.output``."""

    if settings.output == "stderr":
        return logging.StreamHandler()
    return RotatingFileHandler(settings.file_path, maxBytes=settings.rotate_bytes, backupCount=3)


class ChangeAuditLogger:
    """Writes recorded rule changes as JSON lines.

    Accepts either the logging section alone or a whole ``PermissionsConfig``.
    The handler is attached once per process; later instances only adjust the
    level.
    """

    def __init__(self, settings: LoggingSettings | PermissionsConfig | None = None) -> None:
        if isinstance(settings, PermissionsConfig):
            settings = settings.logging
        self.settings = settings or LoggingSettings()
        self.logger = logging.getLogger(AUDIT_LOGGER_NAME)
        if not self.logger.handlers:
            handler = _audit_handler(self.settings)
            handler.setFormatter(logging.Formatter("%(message)s"))
            self.logger.addHandler(handler)
        self.logger.setLevel(getattr(logging, self.settings.level.upper(), logging.INFO))

    def log_changes(self, permission_list: "PermissionList", *, actor: str = "anonymous") -> int:
        """Log one line per changed rule and return how many were written."""

        written = 0
        for resource, rule in permission_list.items():
            if not rule.is_changed():
                continue
            payload = {
                "ts": datetime.now(timezone.utc).isoformat(),
                "actor": actor,
                "resource": resource,
                "effect": rule.effect.value,
                "changes": rule.changes.to_dict(),
            }
            self.logger.info(json.dumps(payload))
            written += 1
        return written
