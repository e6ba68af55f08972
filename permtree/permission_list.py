"""Ordered collections of permission rules and privilege resolution."""

from __future__ import annotations

import json
import logging
from typing import Any, Iterable, Iterator, Mapping

from .config import DEFAULT_CONFIG, PermissionsConfig
from .exceptions import InvalidArgument
from .resource import Resource
from .rule import Rule
from .types import Effect

logger = logging.getLogger(__name__)


class PermissionList:
    """Resource name to rule mapping.

    ``select``, ``reject``, ``compact``, ``merge``, ``changes`` and ``clone``
    return new lists built from copies of the rules. ``merge_in_place``,
    ``update`` and ``set_inherited_privileges`` modify this list.
    """

    def __init__(
        self,
        rules: PermissionList | Mapping[str, Rule | Mapping[str, Any]] | None = None,
        *,
        config: PermissionsConfig | None = None,
    ) -> None:
        if isinstance(rules, PermissionList):
            self.config = config or rules.config
            self.rules = self._to_rules(rules.to_dict())
        elif rules is None or isinstance(rules, Mapping):
            self.config = config or DEFAULT_CONFIG
            self.rules = self._to_rules(rules or {})
        else:
            raise InvalidArgument(
                message="Rules must be a PermissionList or a mapping",
                details={"type": type(rules).__name__},
            )

    def _to_rules(self, raw: Mapping[str, Rule | Mapping[str, Any]]) -> dict[str, Rule]:
        rules: dict[str, Rule] = {}
        for key, value in raw.items():
            name = str(key)
            if isinstance(value, Rule):
                rule = value
            elif isinstance(value, Mapping):
                rule = Rule.from_dict({"resource": name, **value}, config=self.config)
            else:
                raise InvalidArgument(
                    message=f"Rule for {name} must be a Rule or a mapping",
                    details={"resource": name},
                )
            if rule.resource != name:
                raise InvalidArgument(
                    message=f"Rule stored under {name} is for {rule.resource}",
                    details={"key": name, "resource": rule.resource},
                )
            rules[name] = rule
        return rules

    # Mapping surface

    def __getitem__(self, key: str) -> Rule:
        return self.rules[key]

    def __setitem__(self, key: str, rule: Rule) -> None:
        if rule.resource != key:
            raise InvalidArgument(
                message=f"Rule stored under {key} is for {rule.resource}",
                details={"key": key, "resource": rule.resource},
            )
        self.rules[key] = rule

    def __contains__(self, key: object) -> bool:
        return key in self.rules

    def __iter__(self) -> Iterator[str]:
        return iter(self.rules)

    def __len__(self) -> int:
        return len(self.rules)

    def get(self, key: str, default: Rule | None = None) -> Rule | None:
        return self.rules.get(key, default)

    def keys(self) -> list[str]:
        return list(self.rules)

    def values(self) -> list[Rule]:
        return list(self.rules.values())

    def items(self) -> list[tuple[str, Rule]]:
        return list(self.rules.items())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PermissionList):
            return NotImplemented
        return self.rules == other.rules

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"PermissionList({list(self.rules)!r})"

    def _new(self, rules: Mapping[str, Rule]) -> PermissionList:
        return type(self)(rules, config=self.config)

    def _resource(self, value: str | Iterable[object]) -> Resource:
        return Resource(value, self.config)

    # Collection operations

    def append(self, rule: Rule) -> None:
        self.rules[rule.resource] = rule

    def changes(self) -> PermissionList:
        """Return a list of the rules that carry recorded changes."""

        return self._new(
            {key: rule.clone(keep_changes=True) for key, rule in self.rules.items() if rule.is_changed()}
        )

    def clone(self) -> PermissionList:
        """Return a new list with copies of all rules, without change history."""

        return self._new({key: rule.clone() for key, rule in self.rules.items()})

    def compact(self) -> PermissionList:
        """Return a new list without rules that have no privileges."""

        return self._new(
            {key: self.rules[key].clone() for key in sorted(self.rules) if not self.rules[key].is_empty()}
        )

    def delete(self, key: str | Rule) -> Rule | None:
        if isinstance(key, Rule):
            return self.rules.pop(key.resource, None)
        if isinstance(key, str):
            return self.rules.pop(key, None)
        raise InvalidArgument(message="Argument must be a str or Rule", details={"type": type(key).__name__})

    def _selected_keys(self, names: str | Iterable[str]) -> list[str]:
        if isinstance(names, str):
            names = [names]
        selected: dict[str, None] = {}
        for name in names:
            resource = self._resource(name)
            for key in self.rules:
                if resource.is_super_resource_of(key):
                    selected[key] = None
        return list(selected)

    def select(self, names: str | Iterable[str]) -> PermissionList:
        """Return rules for the given resources and their subresources."""

        return self._new({key: self.rules[key].clone() for key in self._selected_keys(names)})

    filter = select

    def reject(self, names: str | Iterable[str]) -> PermissionList:
        """Return every rule that ``select`` would leave out."""

        rejected = set(self._selected_keys(names))
        return self._new({key: rule.clone() for key, rule in self.rules.items() if key not in rejected})

    def merge(self, other: PermissionList) -> PermissionList:
        return self.clone().merge_in_place(other)

    def merge_in_place(self, other: PermissionList) -> PermissionList:
        """Merge ``other`` into this list without tracking changes.

        Privileges already granted here are never removed.
        """

        for resource, rule in other.items():
            existing = self.rules.get(resource)
            if existing is None:
                self.rules[resource] = rule.clone()
                continue
            for key, value in rule.privileges.items():
                existing.privileges[key] = existing.privileges.get(key) or value
        logger.debug("Merged %d rules into list of %d", len(other), len(self.rules))
        return self

    def update(self, other: PermissionList) -> PermissionList:
        """Update rules from ``other`` in place, tracking changes on every touched rule.

        A resource missing here gets a new rule with no privileges that takes
        the incoming rule's effect and title, rather than a plain ALLOW rule.
        """

        for resource, other_rule in other.items():
            if resource not in self.rules:
                self.rules[resource] = Rule(
                    resource,
                    effect=other_rule.effect,
                    title=other_rule.title,
                    config=self.config,
                )
            self.rules[resource].update(other_rule)
        logger.debug("Updated list from %d rules", len(other))
        return self

    # Privilege resolution

    def privileges(self, *resources: object) -> dict[str, bool]:
        """Return the effective privileges for a resource.

        >>> lst.privileges("paragraph", "contracts")
        {'admin': True, 'edit': True}
        """

        granted: dict[str, None] = {}
        for name in self._matching_resources(*resources):
            rule = self.rules.get(name)
            if rule is None:
                continue
            if rule.effect is Effect.ALLOW:
                granted.update(dict.fromkeys(rule.privileges_as_list()))
            else:
                for key in rule.privileges_as_list():
                    granted.pop(key, None)
        return {key: True for key in granted}

    def is_authorized(self, privilege: str | Iterable[str], *resources: object) -> bool:
        """Return True if any of the given privileges is granted on the resource.

        The wildcard literal as privilege asks whether anything is granted.
        """

        granted = self.privileges(*resources)
        if privilege == self.config.any_matcher:
            return bool(granted)
        names = [privilege] if isinstance(privilege, str) else [str(p) for p in privilege]
        return any(granted.get(name, False) for name in names)

    def is_subresource_authorized(self, privilege: str | Iterable[str], *resources: object) -> bool:
        return self.is_authorized(privilege, *resources, self.config.any_matcher)

    def set_inherited_privileges(self) -> PermissionList:
        """Fill declared privileges with their resolved values, in place."""

        for resource, rule in self.rules.items():
            for key, value in self.privileges(resource).items():
                if key in rule.privileges:
                    rule.privileges[key] = value
        return self

    def remove_inherited_rules(self) -> PermissionList:
        """Return a new list without inherited privileges and empty rules."""

        result = self._new({})
        for name in sorted(self.rules):
            rule = self.rules[name]
            new_rule = Rule(name, effect=rule.effect, title=rule.title, config=self.config)
            parent = new_rule.parent
            for key, value in rule.privileges.items():
                if value is not True:
                    continue
                if rule.effect is Effect.ALLOW and parent is not None and result.is_authorized(key, parent):
                    continue
                new_rule.privileges[key] = value
            if not new_rule.is_empty():
                result.append(new_rule)
        return result

    def _matching_resources(self, *resources: object) -> list[str]:
        resource = self._resource(resources)
        if not resource.is_wildcard():
            return resource.ancestors_and_self()
        return resource.ancestors() + [key for key in self.rules if resource.is_super_resource_of(key)]

    # Serialization

    def to_dict(self) -> dict[str, dict[str, Any]]:
        return {key: rule.to_dict() for key, rule in self.rules.items()}

    @classmethod
    def load(cls, text: str | None, *, config: PermissionsConfig | None = None) -> PermissionList:
        if text is None:
            return cls(config=config)
        return cls(json.loads(text), config=config)

    @staticmethod
    def dump(permission_list: PermissionList | None) -> str | None:
        if permission_list is None:
            return None
        return json.dumps(permission_list.to_dict())
