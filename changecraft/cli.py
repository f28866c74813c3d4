"""Command line entry point: ``changelog create`` and ``changelog render``."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence

import jinja2

from changecraft.create import create_command
from changecraft.render import render_command


def _int_list(text: str) -> list[int]:
    try:
        return [int(part) for part in text.split(",") if part.strip()]
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer list: {text!r}") from None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="changelog", description="Creates and renders changelog entries"
    )
    commands = parser.add_subparsers(dest="command")

    create = commands.add_parser(
        "create",
        help="Create a changelog entry",
        description="Create a changelog entry. If not provided by arguments, prompts for the "
        "type, scope, and description of the change and the title of the entry file.",
    )
    create.add_argument("-c", "--config", default="changelog/config.yaml", help="Config file")
    create.add_argument("-o", "--out", default="changelog/pending", help="Output directory")
    create.add_argument("-t", "--type", default="", help="Type of entry, as defined by config")
    create.add_argument(
        "-s",
        "--scope",
        default="",
        help="Scope of entry, as defined by config, with optional comma-delimited subscopes.",
    )
    create.add_argument("-d", "--description", default="", help="Description of change")
    create.add_argument("--title", default="", help="Title of entry to create")
    create.add_argument(
        "-i", "--issue", type=_int_list, action="extend", default=None,
        help="Issues addressed by change.",
    )
    create.add_argument(
        "-p", "--pull-request", type=_int_list, action="extend", default=None,
        help="Pull request implementing change.",
    )
    create.add_argument(
        "-f", "--force", action="store_true",
        help="Allows unknown types and scopes to be specified.",
    )

    render = commands.add_parser(
        "render",
        help="Renders changelog entries to text",
        description="Renders changelog entries to text, defaulting to reading from "
        "changelog/pending and rendering to a markdown template",
    )
    render.add_argument("-c", "--config", default="changelog/config.yaml", help="Config file")
    render.add_argument("-f", "--format", default="template", help="Format")
    render.add_argument("-i", "--input", default="changelog/pending", help="Input directory")
    render.add_argument("-v", "--version", default="", help="Version")
    render.add_argument(
        "--github", action=argparse.BooleanOptionalAction, default=True,
        help="Use GitHub to resolve pull request numbers",
    )
    render.add_argument(
        "--filter-since-commit", default="",
        help="Filter changes to render to those since a given commitish",
    )
    render.add_argument(
        "--filter-open-pr-number", type=int, default=0,
        help="Filter PR number detection to a particular open PR number.",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command is None:
        parser.print_help()
        return 0

    try:
        if args.command == "create":
            create_command(
                args.config,
                args.out,
                args.type,
                args.scope,
                args.description,
                args.title,
                args.issue or [],
                args.pull_request or [],
                args.force,
            )
        else:
            sys.stdout.write(
                render_command(
                    args.config,
                    args.input,
                    args.version,
                    args.format,
                    args.filter_since_commit,
                    args.filter_open_pr_number,
                )
            )
    except KeyboardInterrupt:
        return 1
    except (ValueError, OSError, EOFError, jinja2.TemplateError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0