"""Interactive terminal prompts used when creating changelog entries."""

from __future__ import annotations

import sys
from collections.abc import Iterable

from changecraft.config import Config
from changecraft.scope import Scope

_CLEAR_LINE = "\033[2K"
_DONE = "    Done"
_RESET = "    Reset"


def parse_confirmation(answer: str) -> bool:
    """Interpret a yes/no answer; an empty answer means yes."""
    answer = answer.lower()
    if not answer or "yes".startswith(answer):
        return True
    if "no".startswith(answer):
        return False
    raise ValueError("expected yes or no")


def text_prompt(prompt: str, placeholder: str, value: str) -> str:
    """Ask for a line of text, keeping ``value`` when the answer is empty."""
    while True:
        if value:
            question = f"{prompt} [{value}] "
        elif placeholder:
            question = f"{prompt} ({placeholder}) "
        else:
            question = f"{prompt} "
        answer = input(question).strip()
        if answer:
            return answer
        if value:
            return value
        print("a value is required")


def confirmation_prompt() -> bool:
    """Ask until a yes or no answer is given."""
    while True:
        answer = input("Confirm [Y/n]? ").strip()
        try:
            return parse_confirmation(answer)
        except ValueError as exc:
            print(exc)


def select_prompt(prompt: str, choices: Iterable[str]) -> str:
    """Let the user pick one of ``choices`` by number or by name."""
    options = list(choices)
    if not options:
        raise ValueError("no choices to select from")
    while True:
        print(prompt)
        for number, choice in enumerate(options, 1):
            print(f"  {number}) {choice}")
        answer = input("> ").strip()
        if answer.isdigit() and 1 <= int(answer) <= len(options):
            return options[int(answer) - 1]
        for choice in options:
            if answer and answer.lower() == choice.strip().lower():
                return choice
        print(f"invalid choice: {answer!r}")


def scope_prompt(config: Config) -> tuple[str, list[str]]:
    """Ask for a scope and then toggle its sub-scopes until done."""
    scopes = list(config.scopes)
    if not scopes:
        return "", []

    while True:
        scope = select_prompt("Scope of change?", scopes)
        if confirmation_prompt():
            clear_back(1)
            break
        clear_back(2)

    selected: set[str] = set()
    while True:
        available = config.scopes.get(scope, [])
        subs = [sub for sub in available if sub in selected]
        choices = [f"[X] {sub}" if sub in selected else f"[ ] {sub}" for sub in available]
        choices += [_DONE, _RESET]

        current = render_current_choice(str(Scope(scope, subs)))
        choice = select_prompt(f"Select sub-scopes? Current scope: {current}", choices)[4:]

        if choice == "Done":
            break
        if choice == "Reset":
            selected.clear()
        elif choice in selected:
            selected.remove(choice)
        else:
            selected.add(choice)
        clear_back(1)

    return scope, subs


def type_prompt(config: Config) -> str:
    """Ask for one of the configured change types."""
    while True:
        typ = select_prompt("Type of change?", list(config.types))
        if confirmation_prompt():
            clear_back(1)
            return typ
        clear_back(2)


def render_current_choice(choice: str) -> str:
    """Colour a choice for display in a prompt."""
    return f"\x1b[38;5;32m{choice}\x1b[0m"


def clear_line() -> None:
    sys.stdout.write(_CLEAR_LINE)
    sys.stdout.flush()


def cursor_up(lines: int) -> None:
    sys.stdout.write(f"\033[{lines}A")
    sys.stdout.flush()


def clear_back(lines: int) -> None:
    """Clear the current line and the ``lines`` lines above it."""
    clear_line()
    for _ in range(lines):
        cursor_up(1)
        clear_line()