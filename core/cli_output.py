"""CLI output formatting utilities.

Provides consistent output formatting across all commands.
Supports text, JSON, YAML, and table formats.
"""
from __future__ import annotations

import json
import sys
from dataclasses import dataclass, asdict, is_dataclass
from enum import Enum
from typing import Any, Iterable, List, Optional, TextIO

import yaml


class OutputFormat(str, Enum):
    """Output format options."""
    TEXT = "text"
    JSON = "json"
    YAML = "yaml"
    TABLE = "table"


@dataclass
class OutputConfig:
    """Configuration for output formatting."""
    format: OutputFormat = OutputFormat.TEXT
    verbose: bool = False
    quiet: bool = False
    file: Optional[TextIO] = None

    @property
    def stream(self) -> TextIO:
        """Get the output stream."""
        return self.file or sys.stdout


class OutputWriter:
    """Handles formatted output for CLI commands."""

    def __init__(self, config: Optional[OutputConfig] = None):
        self.config = config or OutputConfig()

    @property
    def structured(self) -> bool:
        """True when the caller asked for machine-readable output."""
        return self.config.format in (OutputFormat.JSON, OutputFormat.YAML)

    def print(self, *args, **kwargs) -> None:
        """Print to the configured output stream."""
        if self.config.quiet:
            return
        kwargs.setdefault("file", self.config.stream)
        print(*args, **kwargs)

    def print_lines(self, lines: Iterable[str]) -> None:
        for line in lines:
            self.print(line)

    def print_error(self, message: str) -> None:
        """Print an error: a JSON object in structured modes, stderr text otherwise."""
        if self.structured:
            self.print_data({"error": message})
            return
        print(f"Error: {message}", file=sys.stderr)

    def print_hint(self, hint: str) -> None:
        """Print a follow-up hint to stderr; structured modes carry only the error."""
        if not self.structured:
            print(f"Hint: {hint}", file=sys.stderr)

    def print_verbose(self, message: str) -> None:
        """Print a verbose message (only if verbose mode is enabled)."""
        if self.config.verbose:
            self.print(message)

    def print_data(self, data: Any, headers: Optional[List[str]] = None) -> None:
        """Print data in the configured format.

        Args:
            data: Data to print (dict, list, dataclass, or any serializable object).
            headers: Optional column headers for table format.
        """
        fmt = self.config.format

        if fmt == OutputFormat.JSON:
            self._print_json(data)
        elif fmt == OutputFormat.YAML:
            self._print_yaml(data)
        elif fmt == OutputFormat.TABLE:
            self._print_table(data, headers)
        else:
            self._print_text(data)

    def _print_json(self, data: Any) -> None:
        """Print data as JSON."""
        normalized = self._normalize_for_json(data)
        # --quiet does not apply to structured output
        print(json.dumps(normalized, indent=2, default=str, ensure_ascii=False), file=self.config.stream)

    def _print_yaml(self, data: Any) -> None:
        """Print data as YAML."""
        normalized = self._normalize_for_json(data)
        print(
            yaml.safe_dump(normalized, default_flow_style=False, sort_keys=False, allow_unicode=True),
            end="",
            file=self.config.stream,
        )

    def _print_table(self, data: Any, headers: Optional[List[str]] = None) -> None:
        """Print data as a table."""
        rows = self._to_rows(data)
        if not rows:
            return

        # Determine headers from first row if not provided
        if headers is None and isinstance(rows[0], dict):
            headers = list(rows[0].keys())

        if not headers:
            for row in rows:
                self.print(str(row))
            return

        str_rows = [[str(row.get(h, "")) if isinstance(row, dict) else str(row) for h in headers] for row in rows]
        widths = [len(h) for h in headers]
        for str_row in str_rows:
            for i, val in enumerate(str_row):
                widths[i] = max(widths[i], len(val))

        header_line = " | ".join(h.ljust(widths[i]) for i, h in enumerate(headers))
        self.print(header_line)
        self.print("-" * len(header_line))
        for str_row in str_rows:
            self.print(" | ".join(val.ljust(widths[i]) for i, val in enumerate(str_row)))

    def _print_text(self, data: Any) -> None:
        """Print data as plain text."""
        if isinstance(data, str):
            self.print(data)
        elif isinstance(data, dict):
            for key, value in data.items():
                self.print(f"{key}: {value}")
        elif isinstance(data, (list, tuple)):
            for item in data:
                self.print(item)
        elif is_dataclass(data):
            self._print_text(asdict(data))
        else:
            self.print(str(data))

    def _normalize_for_json(self, data: Any) -> Any:
        """Normalize data for JSON serialization."""
        if is_dataclass(data) and not isinstance(data, type):
            return self._normalize_for_json(asdict(data))
        if isinstance(data, dict):
            return {k: self._normalize_for_json(v) for k, v in data.items()}
        if isinstance(data, (list, tuple)):
            return [self._normalize_for_json(v) for v in data]
        if isinstance(data, Enum):
            return data.value
        return data

    def _to_rows(self, data: Any) -> List[Any]:
        """Convert data to a list of rows."""
        if isinstance(data, (list, tuple)):
            return list(data)
        if isinstance(data, dict):
            # {"events": [...]} style payloads table their inner list
            lists = [v for v in data.values() if isinstance(v, list)]
            return lists[0] if len(lists) == 1 else [data]
        if is_dataclass(data):
            return [asdict(data)]
        return [data]
