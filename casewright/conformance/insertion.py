"""Locating where a statement can be appended to a generated test block.

This is a brace-counting heuristic, not a parser: braces inside string
literals, template strings or comments are counted like any other.
"""

from collections.abc import Callable, Sequence

# (lines, index of the line opening the block) -> index of the closing line
InsertionLocator = Callable[[Sequence[str], int], int | None]

OPEN_DELIMITER = "{"
CLOSE_DELIMITER = "}"


def locate_insertion_point(lines: Sequence[str], start_index: int) -> int | None:
    """Find the line that closes the block opened on ``start_index``.

    Depth starts at 1 for the block opened on the declaration line, then
    every ``{`` and ``}`` on the following lines moves it up or down.

    Args:
        lines: The file's lines.
        start_index: Index of the line whose trailing ``{`` opens the block.

    Returns:
        Index of the first line on which depth reaches 0, or None if the
        block never closes before the end of the file.
    """
    depth = 1
    for index in range(start_index + 1, len(lines)):
        for char in lines[index]:
            if char == OPEN_DELIMITER:
                depth += 1
            elif char == CLOSE_DELIMITER:
                depth -= 1
                if depth == 0:
                    return index
    return None


def depth_after(text: str, depth: int = 1) -> int:
    """Track brace depth across ``text``; returns 0 as soon as the block closes."""
    for char in text:
        if char == OPEN_DELIMITER:
            depth += 1
        elif char == CLOSE_DELIMITER:
            depth -= 1
            if depth == 0:
                return 0
    return depth
