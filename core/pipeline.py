"""Shared consumer/processor/producer scaffolding.

Every command runs the same three steps: a processor turns a request into a
``ResultEnvelope`` (never raising), then a producer renders the envelope
through the command's ``OutputWriter``.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Generic, Optional, TypeVar

from .cli_errors import CLIError, ExitCode
from .cli_output import OutputWriter

LOG = logging.getLogger(__name__)

ResultT = TypeVar("ResultT")
T = TypeVar("T")
R = TypeVar("R")


@dataclass
class ResultEnvelope(Generic[ResultT]):
    status: str
    payload: Optional[ResultT] = None
    diagnostics: Optional[Dict[str, Any]] = None

    def ok(self) -> bool:
        return self.status.lower() == "success"

    @property
    def exit_code(self) -> int:
        if self.ok():
            return ExitCode.SUCCESS
        return int((self.diagnostics or {}).get("code", ExitCode.ERROR))


class SafeProcessor(Generic[T, R]):
    """Base processor with automatic error handling wrapper.

    Subclasses override ``_process_safe``. A ``CLIError`` keeps its exit code
    and hint; ``ValueError`` is a usage problem; anything else is a generic
    failure.
    """

    def process(self, payload: T) -> ResultEnvelope[R]:
        try:
            result = self._process_safe(payload)
            return ResultEnvelope(status="success", payload=result)
        except CLIError as e:
            return ResultEnvelope(
                status="error",
                diagnostics={"message": e.message, "code": int(e.code), "hint": e.hint},
            )
        except ValueError as e:
            return ResultEnvelope(status="error", diagnostics={"message": str(e), "code": int(ExitCode.USAGE)})
        except Exception as e:
            LOG.debug("processor %s failed", type(self).__name__, exc_info=True)
            return ResultEnvelope(status="error", diagnostics={"message": str(e), "code": int(ExitCode.ERROR)})

    def _process_safe(self, payload: T) -> R:
        raise NotImplementedError("Subclass must implement _process_safe")


class BaseProducer:
    """Base class for pipeline producers with common error handling.

    Subclasses override ``_produce_success``; failures are printed here, as
    ``{"error": ...}`` in structured modes and as ``Error:``/``Hint:`` text
    otherwise.
    """

    def __init__(self, writer: Optional[OutputWriter] = None) -> None:
        self.writer = writer or OutputWriter()

    def produce(self, result: ResultEnvelope) -> None:
        if not result.ok():
            self.print_error(result)
            return
        if result.payload is not None:
            self._produce_success(result.payload, result.diagnostics)

    def _produce_success(self, payload: Any, diagnostics: Optional[Dict[str, Any]]) -> None:
        raise NotImplementedError("Subclass must implement _produce_success")

    def print_error(self, result: ResultEnvelope) -> bool:
        """Print error message if result failed. Returns True if error was printed."""
        if result.ok():
            return False
        diag = result.diagnostics or {}
        self.writer.print_error(str(diag.get("message") or "Unknown error"))
        hint = diag.get("hint")
        if hint:
            self.writer.print_hint(hint)
        return True


def run_pipeline(
    request: Any,
    processor_cls: type,
    producer_cls: type,
    writer: Optional[OutputWriter] = None,
) -> int:
    """Execute a pipeline and return the CLI exit code.

    Args:
        request: The request object to process
        processor_cls: Processor class (instantiated with no args)
        producer_cls: Producer class (instantiated with the writer)
        writer: Output writer shared with the producer

    Returns:
        0 on success, otherwise the error's exit code (default 1)
    """
    envelope = processor_cls().process(request)
    producer_cls(writer).produce(envelope)
    return envelope.exit_code
