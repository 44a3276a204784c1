"""JSON-lines session log for CLI invocations.

Each command run writes a ``start`` record, optional ``info``/``error``
records, and an ``end`` record carrying status and duration. Writing never
raises: a broken log path must not break the command being logged.
"""

from __future__ import annotations

import json
import os
import time
import uuid
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional


class AppLogger:
    def __init__(self, path: str) -> None:
        self.path = path
        d = os.path.dirname(path)
        if d:
            try:
                os.makedirs(d, exist_ok=True)
            except OSError:  # nosec B110 - unwritable log dir, records are dropped
                pass

    def _write(self, record: Dict[str, Any]) -> None:
        try:
            with open(self.path, "a", encoding="utf-8") as fh:
                fh.write(json.dumps(record, ensure_ascii=False, default=str) + "\n")
        except Exception:  # noqa: S110 - logging must never crash the app
            pass

    def start(self, cmd: str, argv: Optional[List[str]] = None) -> str:
        sid = str(uuid.uuid4())
        self._write({
            "ts": time.time(),
            "event": "start",
            "cmd": cmd,
            "argv": argv,
            "pid": os.getpid(),
            "session_id": sid,
        })
        return sid

    def end(
        self,
        session_id: str,
        status: str = "ok",
        duration_ms: Optional[int] = None,
        error: Optional[str] = None,
    ) -> None:
        rec: Dict[str, Any] = {
            "ts": time.time(),
            "event": "end",
            "session_id": session_id,
            "status": status,
        }
        if duration_ms is not None:
            rec["duration_ms"] = int(duration_ms)
        if error:
            rec["error"] = error
        self._write(rec)

    def info(self, session_id: str, data: Dict[str, Any]) -> None:
        self._write({"ts": time.time(), "event": "info", "session_id": session_id, "data": data})

    def error(self, session_id: str, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        self._write({
            "ts": time.time(),
            "event": "error",
            "session_id": session_id,
            "message": message,
            "extra": extra,
        })

    @contextmanager
    def session(self, cmd: str, argv: Optional[List[str]] = None) -> Iterator["SessionRecorder"]:
        """Bracket a command run with start/end records.

        The yielded recorder lets the caller set the exit status; an escaping
        exception is logged as an error and re-raised.
        """
        t0 = time.monotonic()
        recorder = SessionRecorder(self, self.start(cmd, argv))
        try:
            yield recorder
        except BaseException as exc:
            self.error(recorder.session_id, str(exc), {"type": type(exc).__name__})
            recorder.status = "error"
            recorder.error_message = str(exc)
            raise
        finally:
            elapsed = (time.monotonic() - t0) * 1000
            self.end(recorder.session_id, recorder.status, elapsed, recorder.error_message)


class SessionRecorder:
    """Mutable status holder for one ``AppLogger.session`` block."""

    def __init__(self, logger: AppLogger, session_id: str) -> None:
        self.logger = logger
        self.session_id = session_id
        self.status = "ok"
        self.error_message: Optional[str] = None

    def info(self, **data: Any) -> None:
        self.logger.info(self.session_id, data)

    def set_exit_code(self, code: int) -> None:
        if code:
            self.status = "error"
