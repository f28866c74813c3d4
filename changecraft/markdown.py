"""Rendering a changelog through a template."""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import cache
from typing import TYPE_CHECKING

import jinja2

from changecraft.entry import Changelog, Entry

if TYPE_CHECKING:
    from changecraft.config import Config

_MARKDOWN_TEMPLATE = """\
{%- macro render_scope(scope) -%}
{%- if scope.primary -%}
[{{ scope.primary }}
{%- if scope.sub_scopes | length == 1 %}/{{ scope.sub_scopes[0] }}
{%- elif scope.sub_scopes | length >= 2 %}/{{ '{' }}{{ scope.sub_scopes | join(',') }}{{ '}' }}
{%- endif %}] {% endif -%}
{%- endmacro -%}
## {{ version }} ({{ date }})

{% for group in groups %}
### {{ titles[group.type] }}
{% for change in group.changes %}
- {{ render_scope(change.scope) }}{{ change.description }}
{%- for pr in change.pull_request_numbers %}
  [#{{ pr }}](https://github.com/pulumi/pulumi/pull/{{ pr }})
{%- endfor %}
{% endfor %}
{% endfor -%}
"""

_ENVIRONMENT = jinja2.Environment(autoescape=False)


@dataclass
class Group:
    """Entries sharing one change type."""

    type: str
    changes: list[Entry] = field(default_factory=list)


@dataclass
class TemplateInputs:
    """Values handed to a changelog template."""

    version: str
    date: str
    groups: list[Group]
    titles: dict[str, str]


def new_template(text: str) -> jinja2.Template:
    """Compile template text; raises jinja2.TemplateSyntaxError when invalid."""
    return _ENVIRONMENT.from_string(text)


@cache
def default_template() -> jinja2.Template:
    """The built-in markdown template."""
    return new_template(_MARKDOWN_TEMPLATE)


def group_entries(changelog: Changelog) -> dict[str, list[Entry]]:
    """Group entries by type, sorting sub-scopes and then entries by scope."""
    grouped: dict[str, list[Entry]] = {}
    for entry in changelog.entries:
        entry.scope.sub_scopes.sort()
        grouped.setdefault(entry.type, []).append(entry)

    for entries in grouped.values():
        entries.sort(key=lambda e: (e.scope.primary, ",".join(e.scope.sub_scopes)))
    return grouped


def render_changelog(changelog: Changelog, config: Config, version: str, date: str) -> str:
    """Render the entries whose types the config lists, in the config's order."""
    grouped = group_entries(changelog)
    groups = [Group(name, grouped.pop(name)) for name in config.types if name in grouped]
    inputs = TemplateInputs(version=version, date=date, groups=groups, titles=dict(config.types))
    template = config.template if config.template is not None else default_template()
    return template.render(
        version=inputs.version,
        date=inputs.date,
        groups=inputs.groups,
        titles=inputs.titles,
    )