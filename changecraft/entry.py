"""Changelog entries and their YAML representation."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import yaml

from changecraft.scope import Scope

_PULL_URL = "https://github.com/pulumi/pulumi/pull/{number}"


@dataclass
class Entry:
    """One change: its type, scope, description and pull requests."""

    type: str = ""
    scope: Scope = field(default_factory=Scope)
    description: str = ""
    pull_request_numbers: list[int] = field(default_factory=list)

    def conventional(self) -> str:
        """Render the entry in the conventional-commit style."""
        message = f"{self.type}({self.scope}): {self.description}."
        links = [
            f"[#{number}]({_PULL_URL.format(number=number)})"
            for number in self.pull_request_numbers
        ]
        if links:
            message += " " + ", ".join(links)
        return message

    def to_dict(self) -> dict[str, Any]:
        """Return the entry as a mapping, leaving out empty fields."""
        data: dict[str, Any] = {}
        if self.type:
            data["type"] = self.type
        scope_text = self.scope.to_yaml()
        if scope_text:
            data["scope"] = scope_text
        if self.description:
            data["description"] = self.description
        if self.pull_request_numbers:
            data["prs"] = list(self.pull_request_numbers)
        return data

    @classmethod
    def from_dict(cls, data: Any) -> Entry:
        """Build an entry from a mapping as stored in a changelog file."""
        if not isinstance(data, Mapping):
            raise ValueError(f"changelog entry must be a mapping, got {type(data).__name__}")

        typ = data.get("type")
        description = data.get("description")
        raw_scope = data.get("scope")
        raw_prs = data.get("prs") or []

        if not isinstance(raw_prs, list) or not all(
            isinstance(number, int) and not isinstance(number, bool) for number in raw_prs
        ):
            raise ValueError("prs must be a list of integers")

        return cls(
            type="" if typ is None else str(typ),
            scope=Scope() if raw_scope is None else Scope.parse(str(raw_scope)),
            description="" if description is None else str(description),
            pull_request_numbers=list(raw_prs),
        )


@dataclass
class Changelog:
    """A list of changelog entries."""

    entries: list[Entry] = field(default_factory=list)

    def merge(self, other: Changelog) -> Changelog:
        """Return a new changelog with this one's entries followed by ``other``'s."""
        return Changelog([*self.entries, *other.entries])

    def to_yaml(self) -> str:
        data: dict[str, Any] = {}
        if self.entries:
            data["changes"] = [entry.to_dict() for entry in self.entries]
        return yaml.safe_dump(data, sort_keys=False, allow_unicode=True)

    @classmethod
    def from_yaml(cls, text: str) -> Changelog:
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise ValueError(f"invalid changelog YAML: {exc}") from exc
        if data is None:
            return cls()
        if not isinstance(data, Mapping):
            raise ValueError("changelog must be a mapping")
        changes = data.get("changes") or []
        if not isinstance(changes, list):
            raise ValueError("changes must be a list")
        return cls([Entry.from_dict(change) for change in changes])