"""Extraction diagnostics adapters.

Both implement ExtractionDiagnosticsPort and only observe skipped fields.
"""

import logging
import threading
from collections import Counter

logger = logging.getLogger(__name__)


class LoggingDiagnostics:
    """Logs every skipped field at DEBUG level."""

    def __init__(self, log: logging.Logger | None = None) -> None:
        self._logger = log or logger

    def field_skipped(self, report_type: str, source_key: str, reason: str) -> None:
        self._logger.debug(
            "Skipped field",
            extra={"report_type": report_type, "field": source_key, "reason": reason},
        )


class CountingDiagnostics:
    """Counts skipped fields by (report type, field, reason)."""

    def __init__(self) -> None:
        self._counts: Counter[tuple[str, str, str]] = Counter()
        self._lock = threading.Lock()

    def field_skipped(self, report_type: str, source_key: str, reason: str) -> None:
        with self._lock:
            self._counts[(report_type, source_key, reason)] += 1

    def snapshot(self) -> dict[tuple[str, str, str], int]:
        """Return a copy of the current counts."""
        with self._lock:
            return dict(self._counts)

    def total(self) -> int:
        with self._lock:
            return sum(self._counts.values())
