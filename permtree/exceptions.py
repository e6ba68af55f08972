"""Custom exceptions for permtree."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class PermissionsError(Exception):
    """Base class for permtree exceptions."""

    message: str
    details: dict[str, object] | None = None

    def __str__(self) -> str:  # pragma: no cover - dataclass str wrapper
        return self.message


class InvalidArgument(PermissionsError, ValueError):
    """Raised when an operation receives an argument it cannot work with."""


class InvalidRuleSpec(InvalidArgument):
    """Raised when a raw rule spec cannot be validated."""


class InvalidPrivilegeValue(InvalidArgument):
    """Raised for unrecognized privilege values when strict privileges are enabled."""


class BadConfig(PermissionsError):
    """Raised when a configuration file cannot be parsed or validated."""
