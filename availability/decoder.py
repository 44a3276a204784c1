"""Decode Graph ``availabilityView`` strings into labelled status runs.

Each character covers one fixed-width bucket starting at ``window_start``:
0 free, 1 tentative, 2 busy, 3 out of office, 4 working elsewhere.
"""
from __future__ import annotations

import datetime as _dt
from typing import List, Optional

from .models import StatusInterval, StatusKind

DEFAULT_BUCKET_MINUTES = 30

AVAILABILITY_CODES = {
    "0": StatusKind.FREE,
    "1": StatusKind.TENTATIVE,
    "2": StatusKind.BUSY,
    "3": StatusKind.OUT_OF_OFFICE,
    "4": StatusKind.WORKING_ELSEWHERE,
}


def status_for_code(code: str) -> StatusKind:
    return AVAILABILITY_CODES.get(code, StatusKind.UNKNOWN)


def decode_availability_view(
    code: str,
    window_start: _dt.datetime,
    bucket_minutes: int = DEFAULT_BUCKET_MINUTES,
) -> List[StatusInterval]:
    """Coalesce consecutive same-status buckets into StatusIntervals.

    Free buckets never open a run; they only close the current one. Unknown
    codes form their own runs and never merge with a different status.
    """
    if bucket_minutes <= 0:
        raise ValueError(f"Bucket width must be positive, got {bucket_minutes}")
    width = _dt.timedelta(minutes=bucket_minutes)
    runs: List[StatusInterval] = []
    run_status: Optional[StatusKind] = None
    run_start: Optional[_dt.datetime] = None

    for idx, ch in enumerate(code or ""):
        status = status_for_code(ch)
        bucket_start = window_start + idx * width
        if status == run_status:
            continue
        if run_status is not None:
            runs.append(StatusInterval(run_start, bucket_start, status=run_status))
        if status.is_free:
            run_status, run_start = None, None
        else:
            run_status, run_start = status, bucket_start

    if run_status is not None:
        run_end = window_start + len(code) * width
        runs.append(StatusInterval(run_start, run_end, status=run_status))
    return runs


__all__ = [
    "AVAILABILITY_CODES",
    "DEFAULT_BUCKET_MINUTES",
    "decode_availability_view",
    "status_for_code",
]
