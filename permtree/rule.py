"""Permission rules for a single resource."""

from __future__ import annotations

from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .changes import Changes
from .config import DEFAULT_CONFIG, PermissionsConfig
from .exceptions import InvalidArgument, InvalidRuleSpec
from .resource import Resource
from .types import Effect, PrivilegeValue, RawPrivilege


class RuleSpec(BaseModel):
    """Raw rule input as found in serialized lists."""

    model_config = ConfigDict(extra="ignore")

    resource: str
    privileges: dict[Any, Any] = Field(default_factory=dict)
    effect: Effect = Effect.ALLOW
    title: str | None = None

    @field_validator("privileges", mode="before")
    @classmethod
    def default_privileges(cls, value: Any) -> Any:
        return {} if value is None else value

    @field_validator("effect", mode="before")
    @classmethod
    def default_effect(cls, value: Any) -> Any:
        return Effect.ALLOW if value is None else value


class Rule:
    """Effect, privileges and title for one resource."""

    def __init__(
        self,
        resource: str,
        privileges: Mapping[Any, Any] | None = None,
        effect: Effect | str = Effect.ALLOW,
        title: str | None = None,
        *,
        config: PermissionsConfig | None = None,
    ) -> None:
        self.config = config or DEFAULT_CONFIG
        self.resource = resource
        try:
            self.effect = Effect(effect)
        except ValueError as exc:
            raise InvalidArgument(message=f"Unknown effect: {effect!r}", details={"effect": effect}) from exc
        self.title = title
        self.privileges: dict[str, RawPrivilege] = self._normalize_privileges(privileges or {})
        self.changes = Changes()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], *, config: PermissionsConfig | None = None) -> "Rule":
        try:
            spec = RuleSpec.model_validate(dict(data))
        except ValidationError as exc:
            raise InvalidRuleSpec(message=str(exc), details={"spec": dict(data)}) from exc
        return cls(
            spec.resource,
            privileges=spec.privileges,
            effect=spec.effect,
            title=spec.title,
            config=config,
        )

    @property
    def parent(self) -> str | None:
        return Resource(self.resource, self.config).parent()

    def update(self, other: "Rule") -> "Rule":
        """Overwrite privileges from ``other`` and record what changed."""

        if self.resource != other.resource:
            raise InvalidArgument(
                message=f"Trying to update different resource: got {other.resource}, but expected {self.resource}",
                details={"expected": self.resource, "got": other.resource},
            )
        for key, value in other.privileges.items():
            if key in self.privileges and self.privileges[key] == value:
                continue
            old = self.privileges.get(key)
            self.privileges[key] = value
            if old == PrivilegeValue.INHERITED.value:
                continue
            old = False if old is None else old
            if old != value:
                self.changes.add_privilege(key, old, value)
        return self

    def is_changed(self) -> bool:
        return self.changes.is_present()

    def is_empty(self) -> bool:
        return not self.privileges

    def clone(self, *, keep_changes: bool = False) -> "Rule":
        """Return an independent copy.

        The copy starts with an empty change history unless ``keep_changes``
        is set, in which case the recorded changes are copied as well.
        """

        rule = self.from_dict(self.to_dict(), config=self.config)
        if keep_changes:
            rule.changes = self.changes.copy()
        return rule

    def privileges_as_list(self) -> list[str]:
        return [key for key, value in self.privileges.items() if value is True]

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "resource": self.resource,
            "privileges": dict(self.privileges),
            "effect": self.effect.value,
            "parent": self.parent,
        }
        if self.title and self.title.strip():
            data["title"] = self.title
        return data

    def _normalize_privileges(self, privileges: Mapping[Any, Any]) -> dict[str, RawPrivilege]:
        strict = self.config.strict_privileges
        return {
            str(key): PrivilegeValue.coerce(value, strict=strict).value
            for key, value in privileges.items()
        }

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Rule):
            return NotImplemented
        return (
            self.resource == other.resource
            and self.effect == other.effect
            and self.privileges == other.privileges
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Rule(resource={self.resource!r}, effect={self.effect.value!r}, privileges={self.privileges!r})"
