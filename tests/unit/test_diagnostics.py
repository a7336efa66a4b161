"""Tests for the extraction diagnostics adapters."""

import logging

import pytest

from momo_exporter.adapters.diagnostics import CountingDiagnostics, LoggingDiagnostics
from momo_exporter.core.ports import ExtractionDiagnosticsPort, FetchPort
from tests.fakes import StaticFetcher


@pytest.mark.core
class TestPorts:
    """Adapters satisfy the runtime-checkable ports."""

    def test_diagnostics_adapters_implement_port(self) -> None:
        assert isinstance(CountingDiagnostics(), ExtractionDiagnosticsPort)
        assert isinstance(LoggingDiagnostics(), ExtractionDiagnosticsPort)

    def test_static_fetcher_implements_fetch_port(self) -> None:
        assert isinstance(StaticFetcher(body=b""), FetchPort)


@pytest.mark.core
class TestCountingDiagnostics:
    def test_counts_by_type_field_and_reason(self) -> None:
        diagnostics = CountingDiagnostics()
        diagnostics.field_skipped("codec", "clockRate", "absent")
        diagnostics.field_skipped("codec", "clockRate", "absent")
        diagnostics.field_skipped("codec", "payloadType", "type_mismatch")

        assert diagnostics.snapshot() == {
            ("codec", "clockRate", "absent"): 2,
            ("codec", "payloadType", "type_mismatch"): 1,
        }
        assert diagnostics.total() == 3

    def test_snapshot_is_a_copy(self) -> None:
        diagnostics = CountingDiagnostics()
        snapshot = diagnostics.snapshot()
        diagnostics.field_skipped("codec", "id", "absent")
        assert snapshot == {}


@pytest.mark.core
class TestLoggingDiagnostics:
    def test_logs_skipped_field_at_debug(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="momo_exporter.adapters.diagnostics"):
            LoggingDiagnostics().field_skipped("data-channel", "bytesSent", "type_mismatch")

        assert len(caplog.records) == 1
        record = caplog.records[0]
        assert record.levelno == logging.DEBUG
        assert record.report_type == "data-channel"
        assert record.field == "bytesSent"
        assert record.reason == "type_mismatch"
