"""Depth-based re-indentation of flattened brace/tag-balanced text."""

from __future__ import annotations

from collections.abc import Callable, Iterable

LinePredicate = Callable[[str], bool]


def reindent(
    lines: Iterable[str],
    closes: LinePredicate,
    opens: LinePredicate,
    width: int = 2,
) -> str:
    """Re-apply indentation to ``lines`` by tracking an open/close balance.

    Walks the lines once. Each line is stripped; if it ``closes`` a block the
    depth drops first (never below zero), the line is emitted at
    ``depth * width`` spaces, and if it ``opens`` a block without also closing
    one the depth grows for the following lines. A line holding several
    openers or closers moves the depth by one level at most.

    Args:
        lines: Lines of text without trailing newlines.
        closes: Returns True when a stripped line decreases the depth.
        opens: Returns True when a stripped line increases the depth.
        width: Spaces per indentation level.

    Returns:
        The re-indented lines joined with ``\\n``.
    """
    depth = 0
    result: list[str] = []

    for line in lines:
        stripped = line.strip()
        is_close = closes(stripped)
        if is_close:
            depth = max(0, depth - 1)
        result.append(" " * (depth * width) + stripped)
        if opens(stripped) and not is_close:
            depth += 1

    return "\n".join(result)
