"""Prometheus exporter for WebRTC Native Client Momo stats."""

from momo_exporter.adapters.collector import MomoCollector, outcome_families
from momo_exporter.adapters.fetch.http import HTTPStatsFetcher
from momo_exporter.core.catalog import CatalogBuilder
from momo_exporter.core.dispatch import ReportDispatcher
from momo_exporter.core.extract import Extraction, extract
from momo_exporter.core.models import (
    FieldSpec,
    LabelSpec,
    MetricKind,
    MetricSample,
    ReportProjection,
    ScrapeOutcome,
    ValueType,
    VersionInfo,
)
from momo_exporter.core.registry import ReportSchemaRegistry, default_registry
from momo_exporter.core.scrape import ScrapeCoordinator
from momo_exporter.exporter import create_collector, create_coordinator

__version__ = "0.3.0"

__all__ = [
    "CatalogBuilder",
    "Extraction",
    "FieldSpec",
    "HTTPStatsFetcher",
    "LabelSpec",
    "MetricKind",
    "MetricSample",
    "MomoCollector",
    "ReportDispatcher",
    "ReportProjection",
    "ReportSchemaRegistry",
    "ScrapeCoordinator",
    "ScrapeOutcome",
    "ValueType",
    "VersionInfo",
    "create_collector",
    "create_coordinator",
    "default_registry",
    "extract",
    "outcome_families",
    "__version__",
]
