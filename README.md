# changecraft

Keep your changelog as a folder of small YAML files, one per change, and
render them into release notes when you cut a release.

Each entry records the change's type (`feat`, `fix`, ...), its scope
(`cli`, `sdk/go`, `cli/backend,engine`), a one-line description and the
pull requests behind it. Because every change lives in its own file,
parallel branches never conflict on a shared changelog file.

## Installation

```
pip install changecraft
```

This installs the `changelog` command.

## Configuration

Create `changelog/config.yaml`:

```yaml
types:
  feat: Features
  fix: Bug Fixes
  chore: Miscellaneous Tasks
scopes:
  cli: [about, display, engine]
  sdk: [go, nodejs, python]
  docs: []
github: example-org/example-repo
```

- `types` maps each short type to the heading used when rendering; their
  order is the order of sections in the output.
- `scopes` maps each allowed scope to its allowed sub-scopes.
- `github` names the repository as `owner/repo`. If it is left out, the
  `GITHUB_REPOSITORY` environment variable is used; rendering fails if
  neither is set.
- `template` (optional) is a Jinja2 template used for rendering instead of
  the built-in Markdown one.

## Creating an entry

```
changelog create
```

Any of type, scope, description and file title that is not given on the
command line is asked for interactively: types and scopes are chosen from
a numbered list, sub-scopes are toggled on and off until you pick `Done`,
and each answer is confirmed with `Confirm [Y/n]?`. Everything can be
passed as options instead:

```
changelog create -t fix -s cli/display -d "Fix wrapping of long lines" \
    --title fix-wrapping-of-long-lines -p 1234
```

| Option | Meaning |
| --- | --- |
| `-c`, `--config` | config file (default `changelog/config.yaml`) |
| `-o`, `--out` | output directory (default `changelog/pending`), created if missing |
| `-t`, `--type` | type of entry, as defined by the config |
| `-s`, `--scope` | scope, with optional comma-separated sub-scopes |
| `-d`, `--description` | description of the change |
| `--title` | title of the entry file |
| `-i`, `--issue` | issues addressed by the change (comma-separated, repeatable) |
| `-p`, `--pull-request` | pull requests implementing the change (comma-separated, repeatable) |
| `-f`, `--force` | allow types and scopes not listed in the config |

Types and scopes are trimmed and lower-cased. Issue numbers are accepted
but are not written to the entry.

The entry is written to a file named from the current UTC date, the scope
and the title, such as
`changelog/pending/20240101--cli-display--fix-wrapping-of-long-lines.yaml`:

```yaml
changes:
- type: fix
  scope: cli/display
  description: Fix wrapping of long lines
  prs:
  - 1234
```

## Rendering

```
changelog render -v 3.39.0
```

Reads every `.yaml` file under `changelog/pending` (in name order,
descending into sub-directories), asks `git rev-list` for the commits that
touched each file, and asks the GitHub API which pull requests contain
those commits. Those pull request numbers are added to the file's entries.
Then the entries are grouped by type in the order of the config's `types`,
sorted by scope within each group, and printed:

```
## 3.39.0 (2022-08-19)


### Features

- [cli/{backend,engine}] Foo bar baz
  [#9001](...)
```

| Option | Meaning |
| --- | --- |
| `-c`, `--config` | config file (default `changelog/config.yaml`) |
| `-i`, `--input` | input directory (default `changelog/pending`) |
| `-v`, `--version` | version to put in the heading |
| `-f`, `--format` | `template` (default) or `conventional`; any other value prints nothing |
| `--github` / `--no-github` | accepted; pull requests are looked up either way |
| `--filter-since-commit` | only include files changed since this commit |
| `--filter-open-pr-number` | among open pull requests, only count this one |

With `-f conventional` each entry is printed on its own line as
`type(scope): description.` followed by its pull request links.

Things to know:

- Rendering has to run inside a git repository with network access to the
  GitHub API. Requests are made without authentication.
- A file is left out when `git` fails for it or a GitHub lookup fails.
- A file that is not valid changelog YAML stops the reading of the
  remaining files in its directory.
- Entries whose type is not listed in the config are not rendered by the
  template format.
- The pull request links point at a fixed repository that is built into
  the package; they do not follow the `github` setting.

## Custom templates

A `template` in the config is rendered with these variables:

- `version`, `date` – strings; `date` is today's UTC date as `YYYY-MM-DD`.
- `groups` – list of groups, each with `type` and `changes`.
- `titles` – mapping from type to its heading from the config.

Each change has `type`, `description`, `pull_request_numbers` and `scope`,
whose `primary` and `sub_scopes` hold the parts of the scope.

## Library use

```python
from changecraft.config import Config
from changecraft.entry import Changelog
from changecraft.markdown import render_changelog

config = Config.load("changelog/config.yaml")
with open("changelog/pending/20240101--fix.yaml", encoding="utf-8") as handle:
    changelog = Changelog.from_yaml(handle.read())
print(render_changelog(changelog, config, "1.2.0", "2024-01-01"))
```

- `changecraft.scope.parse_scope(config, value, force)` splits a scope
  string and raises `InvalidScopeError` when it is not permitted.
- `changecraft.validation.validate_type(config, typ)` raises
  `UnknownTypeError` for unlisted types; `permitted_types_string` and
  `permitted_scopes_string` list what the config allows.
- `changecraft.render.extract_changelog` and `render_command`, and
  `changecraft.create.create_command`, are what the two commands call.

## Development

```
pip install -e ".[test]"
pytest
```