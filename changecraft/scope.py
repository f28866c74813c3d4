"""Structured change scopes such as ``cli/backend,engine``."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from changecraft.config import Config


class InvalidScopeError(ValueError):
    """Raised when a scope or sub-scope is not permitted by the configuration."""

    def __init__(self, message: str, scope: str, sub_scopes: list[str]) -> None:
        super().__init__(message)
        self.scope = scope
        self.sub_scopes = sub_scopes


@dataclass
class Scope:
    """A primary scope with an optional list of sub-scopes."""

    primary: str = ""
    sub_scopes: list[str] = field(default_factory=list)

    def __str__(self) -> str:
        if not self.sub_scopes:
            return self.primary
        return f"{self.primary}/{','.join(self.sub_scopes)}"

    @classmethod
    def parse(cls, value: str) -> Scope:
        """Parse a scope string without checking it against any configuration."""
        primary, subs = parse_scope(None, value, True)
        return cls(primary, subs)

    def to_yaml(self) -> str:
        """Return the string under which the scope is stored in YAML documents."""
        return str(self)


def parse_scope(config: Config | None, value: str, force: bool) -> tuple[str, list[str]]:
    """Split a scope string into its primary scope and sub-scopes.

    Unless ``force`` is set, the result is checked against the scopes of
    ``config``; a ``config`` of None permits no scopes.
    """
    scopes = config.scopes if config is not None else {}

    value = value.strip().lower()
    if not value:
        return "", []

    scope, _, rest = value.partition("/")
    is_permitted = scope in scopes
    permitted_subs = scopes.get(scope, [])

    if not rest:
        if not is_permitted and not force:
            raise InvalidScopeError(
                f'invalid scope "{scope}" found, use --help to list available scopes',
                scope,
                [],
            )
        return scope, []

    subs = [sub.strip().lower() for sub in rest.split(",")]

    if force:
        return scope, subs

    if not is_permitted:
        raise InvalidScopeError(
            "invalid scope found, use --help to list available scopes", scope, subs
        )

    for sub in subs:
        if sub in permitted_subs:
            continue
        if not scopes:
            raise InvalidScopeError(
                f'invalid subscope "{sub}" found, scope {scope} expects none', scope, subs
            )
        raise InvalidScopeError(
            f'invalid subscope "{sub}" found, expected one of: '
            f"{', '.join(permitted_subs)}; or use the force option to override",
            scope,
            subs,
        )

    return scope, subs