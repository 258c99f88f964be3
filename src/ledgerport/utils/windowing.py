"""Windowed list indexing.

Pure helpers that decide which slice of a long transaction list a renderer
has to materialize for the current scroll position. They keep no state and
touch no rendering surface, so they can run on every scroll/resize tick.
"""

import math
from typing import Sequence, TypeVar

from ledgerport.domain.entities import WindowRange

T = TypeVar("T")

DEFAULT_OVERSCAN = 5


def compute_window(
    total: int,
    container_height: float,
    row_height: float,
    scroll_top: float = 0,
    overscan: int = DEFAULT_OVERSCAN,
) -> WindowRange:
    """Compute the half-open index range of rows to render.

    Args:
        total: Number of rows in the full list
        container_height: Height of the visible viewport
        row_height: Fixed height of one row
        scroll_top: Current scroll offset from the top of the list
        overscan: Extra rows rendered above and below the viewport

    Returns:
        WindowRange with ``0 <= start <= end <= total``
    """
    if total <= 0 or container_height <= 0 or row_height <= 0:
        return WindowRange(0, 0)

    overscan = max(0, int(overscan))
    first = max(0, math.floor(max(0, scroll_top) / row_height) - overscan)
    visible_count = math.ceil(container_height / row_height) + 2 * overscan
    start = min(first, total)
    end = min(total, start + visible_count)
    return WindowRange(start, end)


def get_top_offset(start: int, row_height: float) -> float:
    """Pixel offset at which the rendered slice is positioned."""
    return max(0, start) * max(0, row_height)


def total_height(total: int, row_height: float) -> float:
    """Full scroll extent of a list of ``total`` rows."""
    return max(0, total) * max(0, row_height)


def visible_slice(items: Sequence[T], window: WindowRange) -> list[T]:
    """Items to materialize for ``window``, clamped to the sequence bounds."""
    start = max(0, min(window.start, len(items)))
    end = max(start, min(window.end, len(items)))
    return list(items[start:end])
