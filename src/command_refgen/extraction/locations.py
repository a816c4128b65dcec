"""Workspace-relative source locations."""

from __future__ import annotations

from ..config.defaults import DEFAULT_WORKSPACE_MARKER


def relativize_workspace_path(path: str, marker: str = DEFAULT_WORKSPACE_MARKER) -> str:
    """Strip everything up to and including the workspace marker.

    Both separator spellings of the marker are accepted and the first
    occurrence wins. Without a marker the whole path is kept. Backslashes are
    normalized to forward slashes.

    Args:
        path: Absolute or relative file path
        marker: Path fragment of the checkout root, e.g. ``github/workspace``

    Returns:
        Remaining path with ``/`` separators

    Examples:
        >>> relativize_workspace_path("/github/workspace/src/bot/fun.py")
        '/src/bot/fun.py'
        >>> relativize_workspace_path("/home/me/bot/fun.py")
        '/home/me/bot/fun.py'
    """
    spellings = {marker.replace("\\", "/"), marker.replace("/", "\\")}
    positions = []
    for spelling in spellings:
        index = path.find(spelling)
        if index != -1:
            positions.append((index, spelling))
    if positions:
        index, spelling = min(positions)
        path = path[index + len(spelling) :]
    return path.replace("\\", "/")


def format_location(path: str, start_line: int, end_line: int, marker: str = DEFAULT_WORKSPACE_MARKER) -> str:
    """Location string ``{relative path}#L{start}-L{end}`` (1-based, inclusive)."""
    return f"{relativize_workspace_path(path, marker)}#L{start_line}-L{end_line}"
