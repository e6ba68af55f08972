"""Hierarchical resource names."""

from __future__ import annotations

import re
from typing import Iterable

from .config import DEFAULT_CONFIG, PermissionsConfig


class Resource:
    """A delimiter-segmented resource path such as ``cms::projects::berlin``.

    The final segment may be the configured wildcard literal, in which case it
    stands for exactly one arbitrary segment at that depth.
    """

    def __init__(self, value: str | Iterable[object], config: PermissionsConfig | None = None) -> None:
        self.config = config or DEFAULT_CONFIG
        if isinstance(value, str):
            self.name = value
        else:
            self.name = self.config.delimiter.join(str(part) for part in value)
        self.parts = self.name.split(self.config.delimiter)

    def ancestors_and_self(self) -> list[str]:
        delimiter = self.config.delimiter
        return [delimiter.join(self.parts[: idx + 1]) for idx in range(len(self.parts))]

    def ancestors(self) -> list[str]:
        return self.ancestors_and_self()[:-1]

    def parent(self) -> str | None:
        return self.config.delimiter.join(self.parts[:-1]) or None

    def is_wildcard(self) -> bool:
        return self.parts[-1] == self.config.any_matcher

    def is_super_resource_of(self, value: str | Resource) -> bool:
        """Return True if this resource is ``value`` or one of its ancestors."""

        candidate = str(value)
        if self.name == candidate:
            return True
        delimiter = self.config.delimiter
        if self.is_wildcard():
            return self._pattern().fullmatch(candidate) is not None
        return f"{candidate}{delimiter}".startswith(f"{self.name}{delimiter}")

    def is_subresource_of(self, value: str | Resource) -> bool:
        """Return True if this resource is ``value`` or one of its descendants."""

        return Resource(str(value), self.config).is_super_resource_of(self.name)

    def _pattern(self) -> re.Pattern[str]:
        delimiter = re.escape(self.config.delimiter)
        prefix = "".join(f"{re.escape(part)}{delimiter}" for part in self.parts[:-1])
        # one non-empty segment, never spanning a delimiter
        return re.compile(f"{prefix}(?:(?!{delimiter}).)+")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Resource):
            return NotImplemented
        return self.name == other.name and self.config == other.config

    def __hash__(self) -> int:
        return hash(self.name)

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"Resource({self.name!r})"
