"""Changelog configuration: types, scopes, repository and template."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import jinja2
import yaml

from changecraft.markdown import new_template


class ConfigError(ValueError):
    """Raised when configuration cannot be read, parsed or resolved."""


@dataclass(frozen=True)
class GitHubRepository:
    """An ``owner/repo`` pair."""

    owner: str = ""
    repo: str = ""

    def __str__(self) -> str:
        if not self.owner:
            return ""
        return f"{self.owner}/{self.repo}"

    @classmethod
    def parse(cls, text: str) -> GitHubRepository:
        owner, repo = parse_github_repository(text)
        return cls(owner, repo)


def parse_github_repository(text: str) -> tuple[str, str]:
    """Split ``owner/repo`` into its two parts."""
    parts = text.split("/")
    if len(parts) != 2:
        raise ConfigError(f"invalid GitHub repository: {text}")
    return parts[0], parts[1]


def _string_map(value: Any, name: str) -> dict[str, str]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigError(f"{name} must be a mapping")
    result: dict[str, str] = {}
    for key, item in value.items():
        if not isinstance(key, str) or not isinstance(item, str):
            raise ConfigError(f"{name} must map strings to strings")
        result[key] = item
    return result


def _scope_map(value: Any) -> dict[str, list[str]]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigError("scopes must be a mapping")
    result: dict[str, list[str]] = {}
    for key, subs in value.items():
        if not isinstance(key, str):
            raise ConfigError("scope names must be strings")
        if subs is None:
            subs = []
        if not isinstance(subs, list) or not all(isinstance(sub, str) for sub in subs):
            raise ConfigError(f"sub-scopes of {key} must be a list of strings")
        result[key] = list(subs)
    return result


@dataclass
class Config:
    """Permitted types and scopes, with optional repository and template."""

    types: dict[str, str] = field(default_factory=dict)
    scopes: dict[str, list[str]] = field(default_factory=dict)
    github_repository: GitHubRepository = field(default_factory=GitHubRepository)
    template_source: str | None = None
    template: jinja2.Template | None = field(default=None, compare=False, repr=False)

    @classmethod
    def from_yaml(cls, text: str) -> Config:
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise ConfigError(f"invalid YAML: {exc}") from exc
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ConfigError("config must be a mapping")

        github = data.get("github")
        if github is None:
            repository = GitHubRepository()
        elif isinstance(github, str):
            repository = GitHubRepository.parse(github)
        else:
            raise ConfigError("github must be a string of the form owner/repo")

        source = data.get("template")
        template = None
        if source is not None:
            if not isinstance(source, str):
                raise ConfigError("template must be a string")
            try:
                template = new_template(source)
            except jinja2.TemplateSyntaxError as exc:
                raise ConfigError(f"failed to parse template: {exc}") from exc

        return cls(
            types=_string_map(data.get("types"), "types"),
            scopes=_scope_map(data.get("scopes")),
            github_repository=repository,
            template_source=source,
            template=template,
        )

    @classmethod
    def load(cls, path: str | os.PathLike[str]) -> Config:
        try:
            text = Path(path).read_text(encoding="utf-8")
        except OSError as exc:
            raise ConfigError(f"unable to read config file at path {path}: {exc}") from exc
        try:
            return cls.from_yaml(text)
        except ConfigError as exc:
            raise ConfigError(f"unable to parse config file: {exc}") from exc

    def to_yaml(self) -> str:
        data: dict[str, Any] = {
            "types": dict(self.types),
            "scopes": {name: list(subs) for name, subs in self.scopes.items()},
        }
        if self.github_repository.owner:
            data["github"] = str(self.github_repository)
        if self.template_source is not None:
            data["template"] = self.template_source
        return yaml.safe_dump(data, sort_keys=False, allow_unicode=True)

    def get_github_repository(self) -> tuple[str, str]:
        """Return the configured repository, or the one in GITHUB_REPOSITORY."""
        if self.github_repository.owner:
            return self.github_repository.owner, self.github_repository.repo
        if "GITHUB_REPOSITORY" in os.environ:
            return parse_github_repository(os.environ["GITHUB_REPOSITORY"])
        raise ConfigError(
            "GitHub repository not configured and GITHUB_REPOSITORY env var not set"
        )