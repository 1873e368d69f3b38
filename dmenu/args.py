"""Parsing of short, clustered command-line flags."""

from __future__ import annotations

from collections import deque
from collections.abc import Container, Iterable


class UsageError(Exception):
    """The command line is malformed."""


def parse_flags(
    args: Iterable[str], valued: Container[str] = frozenset()
) -> tuple[list[tuple[str, str | None]], list[str]]:
    """Split ``args`` into flags and operands.

    Flags may be clustered (``-ab``). A flag in ``valued`` takes the rest of
    its argument or, if that is empty, the next argument. Parsing stops at
    ``--`` (which is dropped), at ``-`` and at the first non-flag argument.
    Returns ``(flags, operands)`` where each flag is ``(letter, value)``.
    """
    remaining = deque(args)
    flags: list[tuple[str, str | None]] = []
    while remaining:
        arg = remaining[0]
        if len(arg) < 2 or not arg.startswith("-"):
            break
        remaining.popleft()
        if arg == "--":
            break
        for position, letter in enumerate(arg[1:], start=1):
            if letter not in valued:
                flags.append((letter, None))
                continue
            rest = arg[position + 1:]
            if rest:
                flags.append((letter, rest))
            elif remaining:
                flags.append((letter, remaining.popleft()))
            else:
                raise UsageError(f"option requires an argument -- '{letter}'")
            break
    return flags, list(remaining)