"""Change records attached to rules."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .exceptions import InvalidArgument


@dataclass(slots=True)
class FieldChange:
    """Before/after pair for a single tracked field."""

    old: Any
    new: Any

    def to_dict(self) -> dict[str, Any]:
        return {"old": self.old, "new": self.new}


class Changes:
    """Diff of a rule's tracked fields and privileges.

    ``effect`` is the only tracked scalar field. Privilege diffs live in
    ``privileges`` as ``{"old": {...}, "new": {...}}`` once anything is recorded.
    """

    TRACKED_FIELDS = ("effect",)

    def __init__(self) -> None:
        self.effect: FieldChange | None = None
        self.privileges: dict[str, dict[str, Any]] = {}

    def add(self, field: str, old_value: Any, new_value: Any) -> None:
        if field not in self.TRACKED_FIELDS:
            raise InvalidArgument(message=f"Untracked field: {field}", details={"field": field})
        if old_value == new_value:
            return
        # new mirrors old
        self.effect = FieldChange(old=old_value, new=old_value)

    def add_privilege(self, key: str, old_value: Any, new_value: Any) -> None:
        self.privileges.setdefault("old", {})[key] = old_value
        self.privileges.setdefault("new", {})[key] = new_value

    def is_empty(self) -> bool:
        return self.effect is None and not self.privileges

    def is_present(self) -> bool:
        return not self.is_empty()

    def __bool__(self) -> bool:
        return self.is_present()

    def copy(self) -> "Changes":
        changes = Changes()
        if self.effect is not None:
            changes.effect = FieldChange(old=self.effect.old, new=self.effect.new)
        changes.privileges = {side: dict(values) for side, values in self.privileges.items()}
        return changes

    def to_dict(self) -> dict[str, Any]:
        return {
            "effect": self.effect.to_dict() if self.effect else {},
            "privileges": {side: dict(values) for side, values in self.privileges.items()},
        }

    def __repr__(self) -> str:
        return f"Changes(effect={self.effect!r}, privileges={self.privileges!r})"
