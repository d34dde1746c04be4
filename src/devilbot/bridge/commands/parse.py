"""Command parsing utilities."""

from __future__ import annotations

import math


def parse_command(text: str) -> tuple[str, tuple[str, ...]]:
    """Split a chat line into (keyword, args).

    The keyword is the first whitespace-separated token, lowercased. Empty
    text yields an empty keyword.
    """
    tokens = text.split()
    if not tokens:
        return "", ()
    return tokens[0].lower(), tuple(tokens[1:])


def join_args(args: tuple[str, ...]) -> str:
    return " ".join(args)


def parse_number(token: str | None) -> float | None:
    """Parse a finite float, returning None for anything else."""
    if token is None:
        return None
    try:
        value = float(token)
    except ValueError:
        return None
    return value if math.isfinite(value) else None
