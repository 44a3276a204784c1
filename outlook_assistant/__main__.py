"""Outlook Assistant CLI entrypoint (``python -m outlook_assistant``)."""

from __future__ import annotations

from .cli.main import main

if __name__ == "__main__":
    raise SystemExit(main())
