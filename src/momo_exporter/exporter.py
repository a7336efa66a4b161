"""Wiring of the engine, its fetch adapter and the collector facade."""

import httpx

from momo_exporter.adapters.collector import NAMESPACE, MomoCollector
from momo_exporter.adapters.fetch.http import HTTPStatsFetcher
from momo_exporter.core.catalog import CatalogBuilder
from momo_exporter.core.dispatch import ReportDispatcher
from momo_exporter.core.ports import ExtractionDiagnosticsPort, FetchPort
from momo_exporter.core.registry import ReportSchemaRegistry, default_registry
from momo_exporter.core.scrape import ScrapeCoordinator


def create_coordinator(
    fetcher: FetchPort,
    schema: ReportSchemaRegistry | None = None,
    diagnostics: ExtractionDiagnosticsPort | None = None,
) -> ScrapeCoordinator:
    """Assemble a scrape coordinator around any fetch implementation."""
    dispatcher = ReportDispatcher(schema or default_registry(), diagnostics)
    return ScrapeCoordinator(fetcher, CatalogBuilder(dispatcher, diagnostics))


def create_collector(
    scrape_uri: str,
    ssl_verify: bool = True,
    timeout: float = 5.0,
    *,
    schema: ReportSchemaRegistry | None = None,
    diagnostics: ExtractionDiagnosticsPort | None = None,
    namespace: str = NAMESPACE,
    transport: httpx.BaseTransport | None = None,
) -> MomoCollector:
    """Create a collector scraping ``scrape_uri`` over HTTP(S).

    Args:
        scrape_uri: URI of the Momo stats endpoint.
        ssl_verify: Verify TLS certificates.
        timeout: Scrape timeout in seconds.
        schema: Report schema registry (default: every known report type).
        diagnostics: Optional hook notified of skipped fields.
        namespace: Metric name prefix.
        transport: Optional httpx transport (used by tests).

    Raises:
        UnsupportedSchemeError: If ``scrape_uri`` is not http(s).
    """
    fetcher = HTTPStatsFetcher(scrape_uri, ssl_verify, timeout, transport=transport)
    return MomoCollector(create_coordinator(fetcher, schema, diagnostics), namespace)
