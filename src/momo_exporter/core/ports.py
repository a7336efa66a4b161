"""Port interfaces for the engine's external collaborators.

The core depends only on these protocols, not on concrete adapters.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class FetchPort(Protocol):
    """Port for fetching the raw stats document.

    Adapters return the response body or raise ``FetchError``.
    Examples: HTTPStatsFetcher.
    """

    def fetch(self) -> bytes:
        """Fetch the stats document and return its body."""
        ...

    def close(self) -> None:
        """Release any connection resources."""
        ...


@runtime_checkable
class ExtractionDiagnosticsPort(Protocol):
    """Port notified whenever a field or a duplicate sample is skipped.

    Purely observational: implementations must not alter which samples
    are emitted. Examples: LoggingDiagnostics, CountingDiagnostics.
    """

    def field_skipped(self, report_type: str, source_key: str, reason: str) -> None:
        """Record that ``source_key`` of a ``report_type`` report was skipped.

        Args:
            report_type: Discriminator of the report being dispatched.
            source_key: Field (or label) key that could not be extracted, or
                the metric name of a dropped duplicate series.
            reason: ``"absent"``, ``"type_mismatch"`` or ``"duplicate_series"``.
        """
        ...
