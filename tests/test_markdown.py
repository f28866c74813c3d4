import random

import jinja2
import pytest

from changecraft.config import Config
from changecraft.entry import Changelog, Entry
from changecraft.markdown import (
    Group,
    default_template,
    group_entries,
    new_template,
    render_changelog,
)
from changecraft.scope import Scope

EXPECTED = """## 3.39.0 (2022-08-19)


### Improvements

- [cli/{backend,engine}] Foo bar baz
  [#9001](https://github.com/pulumi/pulumi/pull/9001)

- [sdk/go] Make SDK go brrrr
  [#10000](https://github.com/pulumi/pulumi/pull/10000)


### Bug Fixes

- [sdkgen/go] Fix Go SDK code generation
  [#20001](https://github.com/pulumi/pulumi/pull/20001)

- [sdkgen/nodejs] Fix Typescript SDK code generation.
  [#20000](https://github.com/pulumi/pulumi/pull/20000)

"""

CONFIG_TEXT = """
types:
  improvement: Improvements
  fix: Bug Fixes
"""


def make_changes():
    return [
        Entry("improvement", Scope("cli", ["engine", "backend"]), "Foo bar baz", [9001]),
        Entry("improvement", Scope("sdk", ["go"]), "Make SDK go brrrr", [10000]),
        Entry("fix", Scope("sdkgen", ["nodejs"]), "Fix Typescript SDK code generation.", [20000]),
        Entry("fix", Scope("sdkgen", ["go"]), "Fix Go SDK code generation", [20001]),
    ]


@pytest.mark.parametrize("seed", range(6))
def test_markdown(seed):
    changes = make_changes()
    random.Random(seed).shuffle(changes)
    config = Config.from_yaml(CONFIG_TEXT)
    assert render_changelog(Changelog(changes), config, "3.39.0", "2022-08-19") == EXPECTED


def test_markdown_reversed_input():
    config = Config.from_yaml(CONFIG_TEXT)
    changes = list(reversed(make_changes()))
    assert render_changelog(Changelog(changes), config, "3.39.0", "2022-08-19") == EXPECTED


def test_group_entries_sorts_subscopes_and_entries():
    grouped = group_entries(Changelog(make_changes()))
    assert sorted(grouped) == ["fix", "improvement"]
    assert [str(e.scope) for e in grouped["fix"]] == ["sdkgen/go", "sdkgen/nodejs"]
    assert grouped["improvement"][0].scope.sub_scopes == ["backend", "engine"]


def test_unconfigured_types_are_left_out():
    config = Config.from_yaml("types:\n  fix: Bug Fixes\n")
    changes = [Entry("chore", Scope("cli"), "Tidy up"), Entry("fix", Scope("cli"), "Repair")]
    output = render_changelog(Changelog(changes), config, "1.0.0", "2022-01-01")
    assert "Tidy up" not in output
    assert "- [cli] Repair\n" in output


def test_entry_without_scope_has_no_brackets():
    config = Config.from_yaml("types:\n  fix: Bug Fixes\n")
    output = render_changelog(Changelog([Entry("fix", Scope(), "Repair")]), config, "1", "d")
    assert "\n- Repair\n" in output


def test_empty_changelog_renders_header_only():
    config = Config.from_yaml(CONFIG_TEXT)
    assert render_changelog(Changelog(), config, "3.39.0", "2022-08-19") == (
        "## 3.39.0 (2022-08-19)\n\n"
    )


def test_custom_template_from_config():
    config = Config.from_yaml(
        "types:\n  fix: Bug Fixes\n"
        "template: '{{ version }}|{% for g in groups %}{{ titles[g.type] }}:"
        "{{ g.changes | length }};{% endfor %}'\n"
    )
    changes = [Entry("fix", Scope("a"), "x"), Entry("fix", Scope("b"), "y")]
    assert render_changelog(Changelog(changes), config, "1.0", "d") == "1.0|Bug Fixes:2;"


def test_new_template_renders_group():
    template = new_template("{{ groups[0].type }}")
    assert template.render(groups=[Group("fix")]) == "fix"


def test_new_template_rejects_bad_syntax():
    with pytest.raises(jinja2.TemplateSyntaxError):
        new_template("{% for %}")


def test_default_template_renders_header():
    template = default_template()
    assert template is default_template()
    output = template.render(version="1.0", date="2022-01-01", groups=[], titles={})
    assert output == "## 1.0 (2022-01-01)\n\n"