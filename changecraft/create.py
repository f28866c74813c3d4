"""Creating a changelog entry file."""

from __future__ import annotations

import os
from datetime import datetime, timezone
from pathlib import Path

from slugify import slugify

from changecraft.config import Config
from changecraft.entry import Changelog, Entry
from changecraft.prompts import clear_back, confirmation_prompt, scope_prompt, text_prompt, type_prompt
from changecraft.scope import Scope, parse_scope
from changecraft.validation import UnknownTypeError, validate_type


def render_title(date: str, entry: Entry, title: str) -> str:
    """Build the file name of an entry from its date, scope and title."""
    scope = slugify(str(entry.scope), lowercase=False)
    prefix = "--" if scope else ""
    return (
        f"{slugify(date, lowercase=False)}{prefix}{scope}"
        f"--{slugify(title, lowercase=False)}.yaml"
    )


def create_command(
    config_filename: str | os.PathLike[str],
    out_dir: str | os.PathLike[str],
    typ: str = "",
    scope: str = "",
    description: str = "",
    title: str = "",
    issues: list[int] | None = None,
    prs: list[int] | None = None,
    force: bool = False,
) -> Path:
    """Write a new entry file, prompting for anything not given; return its path."""
    config = Config.load(config_filename)
    issues = list(issues or [])
    prs = list(prs or [])

    out_path = Path(out_dir)
    out_path.mkdir(mode=0o700, parents=True, exist_ok=True)

    if not typ:
        typ = type_prompt(config)
    else:
        try:
            typ = validate_type(config, typ)
        except UnknownTypeError as exc:
            if not force:
                raise
            typ = exc.typ

    if not scope:
        primary, subs = scope_prompt(config)
    else:
        primary, subs = parse_scope(config, scope, force)

    if not description:
        while True:
            description = text_prompt(
                "Description of change?",
                "Fix bug, add feature, update dependencies, etc.",
                description,
            )
            if confirmation_prompt():
                clear_back(1)
                break
            clear_back(2)

    entry = Entry(
        type=typ,
        scope=Scope(primary, subs),
        description=description,
        pull_request_numbers=prs,
    )
    content = Changelog([entry]).to_yaml()

    date = datetime.now(timezone.utc).strftime("%Y%m%d")

    if not title:
        while True:
            title = slugify(description)
            title = text_prompt(
                "Title of change entry?", "issue-1, convert-stack-references, etc.", title
            )
            title = slugify(title)
            print(f"Title will be: {render_title(date, entry, title)}")
            if confirmation_prompt():
                clear_back(1)
                break
            clear_back(3)

    # The file content is fixed above; sorting only affects the file name.
    subs.sort()
    issues.sort()
    prs.sort()

    filename = out_path / render_title(date, entry, title)
    print(f"Creating change entry: {filename}")

    fd = os.open(filename, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
    with open(fd, "w", encoding="utf-8") as handle:
        handle.write(content)
    return filename