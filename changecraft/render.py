"""Collecting changelog entries from a directory and rendering them."""

from __future__ import annotations

import json
import os
import subprocess
import urllib.request
from collections.abc import Callable
from datetime import datetime, timezone
from pathlib import Path
from typing import Any
from urllib.parse import quote

from changecraft.config import Config
from changecraft.entry import Changelog
from changecraft.markdown import render_changelog

_API_ROOT = "https://api.github.com"


def list_pull_requests_with_commit(owner: str, repo: str, sha: str) -> list[dict[str, Any]]:
    """Return the pull requests GitHub associates with a commit."""
    url = (
        f"{_API_ROOT}/repos/{quote(owner, safe='')}/{quote(repo, safe='')}"
        f"/commits/{quote(sha, safe='')}/pulls"
    )
    request = urllib.request.Request(
        url,
        headers={"Accept": "application/vnd.github+json", "User-Agent": "changecraft"},
    )
    with urllib.request.urlopen(request, timeout=30) as response:
        data = json.load(response)
    if not isinstance(data, list):
        raise ValueError("unexpected response listing pull requests")
    return [pr for pr in data if isinstance(pr, dict)]


def _walk(directory: Path, visit: Callable[[Path], bool]) -> None:
    """Visit YAML files depth-first in name order; a False result skips the rest of a directory."""
    for child in sorted(directory.iterdir(), key=lambda p: p.name):
        if child.is_dir() and not child.is_symlink():
            _walk(child, visit)
        elif child.name.endswith(".yaml") and not visit(child):
            return


def extract_changelog(
    config: Config,
    directory: str | os.PathLike[str],
    filter_since_commit: str = "",
    filter_open_pr_number: int = 0,
) -> Changelog:
    """Merge the entries of every YAML file under ``directory``, adding pull requests from git history."""
    owner, repo = config.get_github_repository()
    root = Path(os.path.normpath(directory))
    commit_range = f"{filter_since_commit}..HEAD" if filter_since_commit else "HEAD"
    full = Changelog()

    def visit(path: Path) -> bool:
        nonlocal full
        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError):
            return True
        try:
            changelog = Changelog.from_yaml(content)
        except ValueError:
            return False

        try:
            result = subprocess.run(
                ["git", "rev-list", commit_range, str(path)],
                capture_output=True,
                text=True,
                check=True,
            )
        except (OSError, subprocess.CalledProcessError):
            return True
        output = result.stdout.strip()
        if filter_since_commit and not output:
            return True

        pull_requests: dict[int, None] = {}
        for sha in output.split("\n"):
            try:
                found = list_pull_requests_with_commit(owner, repo, sha)
            except (OSError, ValueError):
                return True
            for pr in found:
                number = pr.get("number", 0)
                if (
                    filter_open_pr_number
                    and pr.get("state") == "open"
                    and number != filter_open_pr_number
                ):
                    continue
                pull_requests[number] = None

        for entry in changelog.entries:
            entry.pull_request_numbers = [
                number for number in entry.pull_request_numbers if number not in pull_requests
            ] + list(pull_requests)

        full = full.merge(changelog)
        return True

    if root.is_dir():
        _walk(root, visit)
    return full


def render_command(
    config_filename: str | os.PathLike[str],
    in_dir: str | os.PathLike[str],
    version: str = "",
    output_format: str = "template",
    filter_since_commit: str = "",
    filter_open_pr_number: int = 0,
) -> str:
    """Render the entries in ``in_dir`` as a template or as conventional-commit lines."""
    config = Config.load(config_filename)
    changelog = extract_changelog(config, in_dir, filter_since_commit, filter_open_pr_number)
    date = datetime.now(timezone.utc).strftime("%Y-%m-%d")

    if output_format == "template":
        return render_changelog(changelog, config, version, date)
    if output_format == "conventional":
        return "\n".join(entry.conventional() for entry in changelog.entries)
    return ""