# -*- coding: utf-8 -*-
"""
Unit tests for the loggers package.
"""

import json
import logging

import numpy as np
import pytest

from loggers import (
    Diagnostics,
    LogContext,
    get_module_logger,
    log_context,
    log_exceptions,
    log_execution,
    report,
    setup_logger,
    timed_stage,
)


@pytest.fixture(autouse=True)
def _clean_context():
    LogContext.clear()
    yield
    LogContext.clear()


class TestDiagnostics:
    def test_levels_recorded(self):
        diag = Diagnostics()
        diag.debug("d")
        diag.info("i")
        diag.warning("w")
        diag.error("e")
        assert [e["level"] for e in diag.entries] == ["DEBUG", "INFO", "WARNING", "ERROR"]
        assert diag.warnings == ["w"]
        assert len(diag) == 4

    def test_stage_from_context(self):
        diag = Diagnostics()
        with log_context(stage="normalization"):
            diag.warning("inside")
        diag.warning("outside")
        assert diag.for_stage("normalization")[0]["message"] == "inside"
        assert diag.entries[1]["stage"] == ""

    def test_explicit_stage_wins(self):
        diag = Diagnostics()
        with log_context(stage="a"):
            diag.info("msg", stage="b")
        assert diag.entries[0]["stage"] == "b"

    def test_json_handles_numpy(self):
        diag = Diagnostics()
        diag.info("payload", data={"arr": np.array([1.0, 2.0]), "n": np.int64(3)})
        records = json.loads(diag.to_json())
        assert records[0]["data"] == {"arr": [1.0, 2.0], "n": 3}
        assert diag.to_records() == records

    def test_to_frame(self):
        diag = Diagnostics()
        diag.warning("w", data={"row": 1})
        frame = diag.to_frame()
        assert list(frame.columns) == ["timestamp", "level", "stage", "message", "data"]
        assert frame.loc[0, "message"] == "w"

    def test_log_accepts_level_number_or_name(self):
        diag = Diagnostics()
        diag.log(logging.WARNING, "by number", {"k": 1})
        diag.log("INFO", "by name", stage="normalization")
        assert diag.entries[0]["level"] == "WARNING"
        assert diag.entries[0]["data"] == {"k": 1}
        assert diag.entries[1]["level"] == "INFO"
        assert diag.entries[1]["stage"] == "normalization"

    def test_callback(self):
        seen = []
        diag = Diagnostics(callback=seen.append)
        diag.warning("w")
        assert seen[0]["message"] == "w"


class TestReport:
    def test_logs_and_records(self, caplog):
        logger = get_module_logger("unit")
        diag = Diagnostics()
        with caplog.at_level(logging.WARNING, logger="merec"):
            report(logger, diag, logging.WARNING, "something odd", data={"k": 1})
        assert "something odd" in caplog.text
        assert diag.entries[0]["level"] == "WARNING"
        assert diag.entries[0]["data"] == {"k": 1}

    def test_without_sink(self, caplog):
        with caplog.at_level(logging.INFO, logger="merec"):
            report(get_module_logger("unit"), None, logging.INFO, "note")
        assert "note" in caplog.text


class TestContextManagers:
    def test_log_context_restores_previous_value(self):
        with log_context(stage="outer"):
            with log_context(stage="inner"):
                assert LogContext.get()["stage"] == "inner"
            assert LogContext.get()["stage"] == "outer"
        assert "stage" not in LogContext.get()

    def test_timed_stage_records_metrics(self):
        diag = Diagnostics()
        with timed_stage("normalization", diag) as metrics:
            assert LogContext.get()["stage"] == "normalization"
        assert metrics.status == "completed"
        assert metrics.end_time is not None
        assert diag.stages[0].name == "normalization"
        assert diag.stages[0].to_dict()["elapsed_ms"] >= 0

    def test_timed_stage_marks_failure(self):
        diag = Diagnostics()
        with pytest.raises(RuntimeError):
            with timed_stage("final_weights", diag):
                raise RuntimeError("boom")
        assert diag.stages[0].status == "failed"
        assert "stage" not in LogContext.get()


class TestDecorators:
    def test_log_execution_returns_result(self, caplog):
        @log_execution(logging.getLogger("merec.test"), level=logging.INFO)
        def add(a, b):
            return a + b

        with caplog.at_level(logging.INFO, logger="merec"):
            assert add(1, 2) == 3
        assert "completed" in caplog.text

    def test_log_exceptions_reraises(self, caplog):
        @log_exceptions(logging.getLogger("merec.test"))
        def fail():
            raise ValueError("bad")

        with caplog.at_level(logging.ERROR, logger="merec"):
            with pytest.raises(ValueError):
                fail()
        assert "ValueError: bad" in caplog.text

    def test_log_exceptions_swallow_when_asked(self):
        @log_exceptions(logging.getLogger("merec.test"), reraise=False)
        def fail():
            raise ValueError("bad")

        assert fail() is None


class TestSetupLogger:
    def test_idempotent(self):
        logger = setup_logger("merec.setup_test", level=logging.INFO)
        setup_logger("merec.setup_test", level=logging.DEBUG)
        handlers = [h for h in logger.handlers if getattr(h, "_merec_handler", False)]
        assert len(handlers) == 1
        assert logger.level == logging.DEBUG
        logger.removeHandler(handlers[0])
