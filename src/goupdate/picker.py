"""Minimal terminal prompt for choosing one entry from a list."""

from __future__ import annotations

import sys
from collections.abc import Callable, Sequence
from typing import TextIO

QUIT_ANSWERS = frozenset({"", "q", "quit"})


def render_options(options: Sequence[str]) -> str:
    return "\n".join(f"{i}. {opt}" for i, opt in enumerate(options, start=1))


def select_one(
    options: Sequence[str],
    *,
    title: str = "Select a version",
    input_fn: Callable[[str], str] = input,
    output: TextIO | None = None,
) -> str | None:
    """Print ``options`` as a numbered list and return the one the user picks.

    Returns None when the list is empty or the user quits (blank line, ``q``,
    EOF or Ctrl-C). Out-of-range or non-numeric answers prompt again.
    """
    out = output or sys.stdout
    if not options:
        return None

    print(f"\n  {title}\n", file=out)
    print(render_options(options), file=out)

    while True:
        try:
            answer = input_fn(f"\nEnter 1-{len(options)} (q to quit): ").strip().lower()
        except (EOFError, KeyboardInterrupt):
            print(file=out)
            return None

        if answer in QUIT_ANSWERS:
            return None
        if answer.isdigit() and 1 <= int(answer) <= len(options):
            return options[int(answer) - 1]
        print(f"Invalid choice {answer!r}.", file=out)
