"""Exception types raised by the exporter.

Only ``UnsupportedSchemeError`` and configuration ``ValueError`` escape to
callers, at construction time. The others are raised inside a scrape cycle
and resolved by the scrape coordinator into ``up=0`` and counter updates.
"""


class MomoExporterError(Exception):
    """Base class for exporter errors."""


class UnsupportedSchemeError(MomoExporterError, ValueError):
    """The scrape URI does not use the http or https scheme."""

    def __init__(self, scheme: str) -> None:
        super().__init__(f"unsupported scheme: {scheme!r}")
        self.scheme = scheme


class FetchError(MomoExporterError):
    """The stats document could not be fetched (network, TLS or HTTP status)."""


class EnvelopeDecodeError(MomoExporterError):
    """The top-level stats envelope is not valid JSON of the expected shape."""


class StatsDecodeError(MomoExporterError):
    """The embedded ``stats`` string does not decode to a JSON array."""


class MissingDiscriminatorError(MomoExporterError):
    """A report has no string ``type`` field."""
