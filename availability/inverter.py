"""Gap inversion: busy time from sources that only report free time."""
from __future__ import annotations

from typing import Iterable, List

from .intervals import uncovered
from .models import StatusInterval, StatusKind, TimeInterval, WorkWindow


def invert_free_time(free: Iterable[TimeInterval], window: WorkWindow) -> List[StatusInterval]:
    """Return the busy gaps of ``window`` left uncovered by ``free``.

    Every input is treated as free regardless of its status; callers filter.
    """
    return [
        StatusInterval(gap.start, gap.end, status=StatusKind.BUSY)
        for gap in uncovered(list(free), window.bounds)
    ]


def busy_from_free_items(items: Iterable[StatusInterval], window: WorkWindow) -> List[StatusInterval]:
    """Busy blocks for a mailbox whose schedule items only describe free time."""
    return invert_free_time([it for it in items if it.status.is_free], window)


__all__ = ["invert_free_time", "busy_from_free_items"]
