"""Free-slot extraction within working hours."""
from __future__ import annotations

from typing import Iterable, List

from .intervals import uncovered
from .models import StatusInterval, StatusKind, TimeInterval, WorkWindow


def extract_free_slots(busy: Iterable[TimeInterval], window: WorkWindow) -> List[StatusInterval]:
    """Maximal free intervals of ``window`` not covered by any busy interval."""
    return [
        StatusInterval(gap.start, gap.end, status=StatusKind.FREE)
        for gap in uncovered(list(busy), window.bounds)
    ]


def free(slots: Iterable[StatusInterval], window: WorkWindow) -> List[StatusInterval]:
    """Free slots for a slot list; every non-Free status counts as occupied."""
    return extract_free_slots([s for s in slots if not s.status.is_free], window)


__all__ = ["extract_free_slots", "free"]
