"""Checks and listings of permitted change types and scopes."""

from __future__ import annotations

from changecraft.config import Config


class UnknownTypeError(ValueError):
    """Raised for a change type the configuration does not list."""

    def __init__(self, typ: str) -> None:
        super().__init__(f'unknown entry type "{typ}"')
        self.typ = typ


def validate_type(config: Config, typ: str) -> str:
    """Return the normalised type, or raise UnknownTypeError carrying it."""
    typ = typ.strip().lower()
    if typ in config.types:
        return typ
    raise UnknownTypeError(typ)


def permitted_types_string(config: Config) -> str:
    return ", ".join(config.types)


def permitted_scopes_string(config: Config, break_after_item: bool) -> str:
    separator = "\n" if break_after_item else ", "
    return separator.join(
        f"{scope}/{','.join(subs)}" if subs else scope for scope, subs in config.scopes.items()
    )