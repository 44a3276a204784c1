"""Tests for core/pipeline.py."""

from __future__ import annotations

import json
import unittest

from core.cli_errors import ExitCode, NotFoundError, UsageError
from core.pipeline import BaseProducer, ResultEnvelope, SafeProcessor, run_pipeline
from tests.fixtures import capture_output, make_writer


class TestResultEnvelopeOk(unittest.TestCase):
    """Tests for ResultEnvelope.ok() method."""

    def test_ok_returns_true_for_success(self):
        """Test ok() returns True for 'success' status."""
        envelope = ResultEnvelope(status="success", payload="data")
        self.assertTrue(envelope.ok())

    def test_ok_is_case_insensitive(self):
        """Test ok() is case-insensitive for status."""
        self.assertTrue(ResultEnvelope(status="SUCCESS").ok())
        self.assertTrue(ResultEnvelope(status="Success").ok())
        self.assertTrue(ResultEnvelope(status="success").ok())

    def test_ok_returns_false_for_error(self):
        """Test ok() returns False for non-success status."""
        envelope = ResultEnvelope(status="error")
        self.assertFalse(envelope.ok())

    def test_ok_returns_false_for_failed(self):
        """Test ok() returns False for 'failed' status."""
        envelope = ResultEnvelope(status="failed")
        self.assertFalse(envelope.ok())




class _Boom(SafeProcessor):
    def __init__(self, exc=None):
        self.exc = exc

    def _process_safe(self, payload):
        if self.exc is not None:
            raise self.exc
        return {"echo": payload}


class TestSafeProcessor(unittest.TestCase):
    def test_success_wraps_payload(self):
        env = _Boom().process("x")
        self.assertTrue(env.ok())
        self.assertEqual(env.payload, {"echo": "x"})
        self.assertEqual(env.exit_code, ExitCode.SUCCESS)

    def test_cli_error_keeps_code_and_hint(self):
        env = _Boom(NotFoundError("gone", hint="look elsewhere")).process("x")
        self.assertFalse(env.ok())
        self.assertEqual(env.exit_code, ExitCode.NOT_FOUND)
        self.assertEqual(env.diagnostics["hint"], "look elsewhere")

    def test_value_error_is_usage(self):
        env = _Boom(ValueError("bad hours")).process("x")
        self.assertEqual(env.exit_code, ExitCode.USAGE)
        self.assertEqual(env.diagnostics["message"], "bad hours")

    def test_unexpected_error_is_generic(self):
        env = _Boom(RuntimeError("kaput")).process("x")
        self.assertEqual(env.exit_code, ExitCode.ERROR)


class _EchoProducer(BaseProducer):
    def _produce_success(self, payload, diagnostics):
        self.writer.print(payload["echo"])


class _OkProcessor(_Boom):
    def __init__(self):
        super().__init__()


class _FailProcessor(_Boom):
    def __init__(self):
        super().__init__(UsageError("nope", hint="try --help"))


class TestRunPipeline(unittest.TestCase):
    def test_success_renders_and_returns_zero(self):
        with capture_output() as (out, _):
            code = run_pipeline("hello", _OkProcessor, _EchoProducer, make_writer())
        self.assertEqual(code, 0)
        self.assertEqual(out.getvalue(), "hello\n")

    def test_failure_prints_error_and_hint(self):
        with capture_output() as (_, err):
            code = run_pipeline("hello", _FailProcessor, _EchoProducer, make_writer())
        self.assertEqual(code, ExitCode.USAGE)
        self.assertIn("Error: nope", err.getvalue())
        self.assertIn("Hint: try --help", err.getvalue())

    def test_failure_in_json_mode(self):
        with capture_output() as (out, err):
            run_pipeline("hello", _FailProcessor, _EchoProducer, make_writer("json"))
        self.assertEqual(json.loads(out.getvalue()), {"error": "nope"})
        self.assertEqual(err.getvalue(), "")


if __name__ == "__main__":
    unittest.main()
