import contextlib
import io
import json
import subprocess
from unittest import mock

import pytest

from changecraft.config import Config, ConfigError, GitHubRepository
from changecraft.render import extract_changelog, list_pull_requests_with_commit, render_command

ENTRY_TEXT = """changes:
- type: feat
  scope: foo/bar
  description: Did thing
  prs: [1]
"""

CONFIG_TEXT = """types:
  feat: Features
  fix: Bug Fixes
scopes:
  foo: [bar]
github: o/r
"""


def _config() -> Config:
    return Config(types={"feat": "Features"}, github_repository=GitHubRepository("o", "r"))


@contextlib.contextmanager
def _github(prs, git_output="sha1\n"):
    requests = []

    def fake_urlopen(request, timeout=None):
        requests.append(request)
        return io.BytesIO(json.dumps(prs).encode())

    completed = subprocess.CompletedProcess([], 0, stdout=git_output)
    with mock.patch("subprocess.run", return_value=completed) as run, mock.patch(
        "urllib.request.urlopen", side_effect=fake_urlopen
    ):
        yield run, requests


def test_adds_pull_requests_from_history(tmp_path):
    (tmp_path / "a.yaml").write_text(ENTRY_TEXT)
    with _github([{"number": 5, "state": "closed"}]):
        changelog = extract_changelog(_config(), tmp_path, "", 0)
    assert [e.pull_request_numbers for e in changelog.entries] == [[1, 5]]


def test_known_numbers_are_not_duplicated(tmp_path):
    (tmp_path / "a.yaml").write_text(ENTRY_TEXT)
    with _github([{"number": 1, "state": "closed"}, {"number": 5, "state": "closed"}]):
        changelog = extract_changelog(_config(), tmp_path, "", 0)
    assert sorted(changelog.entries[0].pull_request_numbers) == [1, 5]
    assert len(changelog.entries[0].pull_request_numbers) == 2


def test_filter_open_pr_number(tmp_path):
    (tmp_path / "a.yaml").write_text(ENTRY_TEXT)
    prs = [
        {"number": 5, "state": "open"},
        {"number": 6, "state": "open"},
        {"number": 7, "state": "closed"},
    ]
    with _github(prs):
        changelog = extract_changelog(_config(), tmp_path, "", 6)
    assert changelog.entries[0].pull_request_numbers == [1, 6, 7]


def test_git_failure_skips_file(tmp_path):
    (tmp_path / "a.yaml").write_text(ENTRY_TEXT)
    error = subprocess.CalledProcessError(128, ["git"])
    with mock.patch("subprocess.run", side_effect=error):
        changelog = extract_changelog(_config(), tmp_path, "", 0)
    assert changelog.entries == []


def test_since_commit_without_history_skips_file(tmp_path):
    (tmp_path / "a.yaml").write_text(ENTRY_TEXT)
    with _github([], git_output="\n") as (run, requests):
        changelog = extract_changelog(_config(), tmp_path, "abc", 0)
    assert changelog.entries == []
    assert run.call_args.args[0][:3] == ["git", "rev-list", "abc..HEAD"]
    assert requests == []


def test_unparsable_file_skips_rest_of_directory(tmp_path):
    (tmp_path / "a.yaml").write_text("changes: 5\n")
    (tmp_path / "b.yaml").write_text(ENTRY_TEXT)
    with _github([]) as (run, _):
        changelog = extract_changelog(_config(), tmp_path, "", 0)
    assert changelog.entries == []
    assert run.call_count == 0


def test_entries_in_subdirectories_are_merged(tmp_path):
    (tmp_path / "sub").mkdir()
    (tmp_path / "sub" / "b.yaml").write_text(ENTRY_TEXT)
    (tmp_path / "a.yaml").write_text(ENTRY_TEXT)
    (tmp_path / "notes.txt").write_text("ignored")
    with _github([]) as (run, _):
        changelog = extract_changelog(_config(), tmp_path, "", 0)
    assert len(changelog.entries) == 2
    assert run.call_count == 2


def test_missing_repository(tmp_path, monkeypatch):
    monkeypatch.delenv("GITHUB_REPOSITORY", raising=False)
    with pytest.raises(ConfigError):
        extract_changelog(Config(), tmp_path, "", 0)


def test_repository_from_environment(tmp_path, monkeypatch):
    monkeypatch.setenv("GITHUB_REPOSITORY", "env/repo")
    (tmp_path / "a.yaml").write_text(ENTRY_TEXT)
    with _github([]) as (_, requests):
        changelog = extract_changelog(Config(), tmp_path, "", 0)
    assert [e.pull_request_numbers for e in changelog.entries] == [[1]]
    assert requests[0].full_url.endswith("/repos/env/repo/commits/sha1/pulls")


def test_list_pull_requests_with_commit():
    with _github([{"number": 9, "state": "open"}]) as (_, requests):
        result = list_pull_requests_with_commit("o", "r", "abc")
    assert result == [{"number": 9, "state": "open"}]
    assert requests[0].full_url.endswith("/repos/o/r/commits/abc/pulls")


@pytest.fixture
def project(tmp_path):
    config = tmp_path / "config.yaml"
    config.write_text(CONFIG_TEXT)
    pending = tmp_path / "pending"
    pending.mkdir()
    (pending / "a.yaml").write_text(ENTRY_TEXT)
    return config, pending


def test_render_command_conventional(project):
    config, pending = project
    with _github([{"number": 5, "state": "closed"}]):
        output = render_command(config, pending, "1.0.0", "conventional", "", 0)
    assert output == (
        "feat(foo/bar): Did thing. [#1](https://github.com/pulumi/pulumi/pull/1), "
        "[#5](https://github.com/pulumi/pulumi/pull/5)"
    )


def test_render_command_template(project):
    config, pending = project
    with _github([]):
        output = render_command(config, pending, "1.0.0", "template", "", 0)
    assert output.startswith("## 1.0.0 (")
    assert "### Features" in output
    assert "- [foo/bar] Did thing" in output


def test_render_command_unknown_format(project):
    config, pending = project
    with _github([]):
        assert render_command(config, pending, "1.0.0", "xml", "", 0) == ""