"""Shared value types for permtree."""

from __future__ import annotations

from enum import Enum
from typing import Any, Union

from .exceptions import InvalidPrivilegeValue


class Effect(str, Enum):
    """Whether a rule's granted privileges are added to or removed from the resolved set."""

    ALLOW = "ALLOW"
    DENY = "DENY"


class PrivilegeValue(Enum):
    """Tri-state value stored for a single privilege on a rule."""

    GRANTED = True
    DENIED = False
    INHERITED = "inherited"

    @classmethod
    def coerce(cls, value: Any, *, strict: bool = False) -> "PrivilegeValue":
        """Normalize a raw privilege value.

        ``True``, ``"true"`` and ``1`` grant, ``"inherited"`` is kept as is and
        everything else denies. With ``strict`` only ``False``, ``"false"``,
        ``0`` and ``None`` are accepted as denials.
        """

        if isinstance(value, cls):
            return value
        if value is True or value == "true" or _is_int(value, 1):
            return cls.GRANTED
        if value == "inherited":
            return cls.INHERITED
        if value is False or value is None or value == "false" or _is_int(value, 0):
            return cls.DENIED
        if strict:
            raise InvalidPrivilegeValue(
                message=f"Unrecognized privilege value: {value!r}",
                details={"value": value},
            )
        return cls.DENIED


def _is_int(value: Any, expected: int) -> bool:
    return type(value) is int and value == expected


RawPrivilege = Union[bool, str]
