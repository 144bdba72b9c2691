"""Tests for the structured logger and the execution-time decorator."""

import json
import logging

import pytest

from exprcalc.logger import StructuredLogger
from exprcalc.logger import decorators


class TestStructuredLogger:

    def test_text_format_appends_fields(self, capsys):
        log = StructuredLogger(name="exprcalc.test.text")
        log.info("Expression evaluated", expression="1+2", result=3.0)

        line = capsys.readouterr().out.strip()
        assert "[INFO]" in line
        assert f"[session:{log.get_session_id()}]" in line
        assert "Expression evaluated" in line
        assert "expression=1+2" in line
        assert "result=3.0" in line

    def test_json_format(self, capsys):
        log = StructuredLogger(name="exprcalc.test.json", json_format=True)
        log.warning("Tool rejected input", tool="expression_evaluate")

        record = json.loads(capsys.readouterr().out.strip())
        assert record["level"] == "WARNING"
        assert record["message"] == "Tool rejected input"
        assert record["tool"] == "expression_evaluate"
        assert record["session_id"] == log.get_session_id()
        assert "timestamp" in record

    def test_reserved_names_are_prefixed(self, capsys):
        log = StructuredLogger(name="exprcalc.test.reserved", json_format=True)
        log.info("Routing", name="expression", module="engine")

        record = json.loads(capsys.readouterr().out.strip())
        assert record["_name"] == "expression"
        assert record["_module"] == "engine"

    def test_level_filtering(self, capsys):
        log = StructuredLogger(name="exprcalc.test.level", level=logging.WARNING)
        log.debug("hidden")
        log.info("hidden")
        log.error("shown")

        out = capsys.readouterr().out
        assert "hidden" not in out
        assert "shown" in out

    def test_log_file(self, tmp_path, capsys):
        path = tmp_path / "exprcalc.log"
        log = StructuredLogger(name="exprcalc.test.file", log_file=str(path))
        log.critical("disk message")

        logging.getLogger("exprcalc.test.file").handlers[-1].flush()
        assert "disk message" in path.read_text()

    def test_session_id(self):
        log = StructuredLogger(name="exprcalc.test.session")
        assert len(log.get_session_id()) == 8


class TestLogExecutionTime:

    @pytest.fixture
    def records(self, monkeypatch):
        calls = []

        class RecordingLogger:
            def debug(self, message, **kwargs):
                calls.append(("debug", message, kwargs))

            def info(self, message, **kwargs):
                calls.append(("info", message, kwargs))

            def error(self, message, **kwargs):
                calls.append(("error", message, kwargs))

        monkeypatch.setattr(decorators, "session_logger", RecordingLogger())
        return calls

    def test_success(self, records):
        @decorators.log_execution_time
        def add(a, b):
            return a + b

        assert add(1, b=2) == 3
        assert [level for level, _, _ in records] == ["debug", "info"]
        assert records[0][1] == "Starting add"
        assert records[0][2]["kwargs"] == {"b": "2"}
        assert records[1][2]["success"] is True

    def test_failure_is_reraised(self, records):
        @decorators.log_execution_time
        def fail():
            raise ValueError("nope")

        with pytest.raises(ValueError):
            fail()
        assert records[-1][0] == "error"
        assert records[-1][2]["error_type"] == "ValueError"

    def test_long_arguments_truncated(self, records):
        @decorators.log_execution_time
        def echo(text):
            return text

        echo("x" * 5000)
        logged = records[0][2]["args"][0]
        assert logged.endswith("...(truncated)")
        assert len(logged) < 1100

    def test_wraps_metadata(self):
        @decorators.log_execution_time
        def documented():
            """Docstring."""

        assert documented.__name__ == "documented"
        assert documented.__doc__ == "Docstring."
