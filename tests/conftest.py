"""Shared test fixtures for all test modules."""

import logging
from collections.abc import Callable, Iterator
from typing import Any

import httpx
import pytest
from prometheus_client import CollectorRegistry

from momo_exporter.core.catalog import CatalogBuilder
from momo_exporter.core.dispatch import ReportDispatcher
from momo_exporter.core.registry import ReportSchemaRegistry, default_registry
from momo_exporter.core.scrape import ScrapeCoordinator
from momo_exporter.exporter import create_collector
from tests.fakes import StaticFetcher


@pytest.fixture(scope="session")
def schema() -> ReportSchemaRegistry:
    """The default report schema registry."""
    return default_registry()


@pytest.fixture
def dispatcher(schema: ReportSchemaRegistry) -> ReportDispatcher:
    return ReportDispatcher(schema)


@pytest.fixture
def builder(dispatcher: ReportDispatcher) -> CatalogBuilder:
    return CatalogBuilder(dispatcher)


@pytest.fixture
def coordinator_factory(
    builder: CatalogBuilder,
) -> Callable[..., tuple[ScrapeCoordinator, StaticFetcher]]:
    """Factory fixture for coordinators backed by a StaticFetcher.

    Usage:
        def test_something(coordinator_factory):
            coordinator, fetcher = coordinator_factory(body=make_envelope([]))
    """

    def _make(
        body: bytes | None = None, error: str | None = None
    ) -> tuple[ScrapeCoordinator, StaticFetcher]:
        fetcher = StaticFetcher(body=body, error=error)
        return ScrapeCoordinator(fetcher, builder), fetcher

    return _make


@pytest.fixture
def momo_transport() -> Callable[..., httpx.MockTransport]:
    """Factory fixture for an httpx transport standing in for Momo.

    Returns a callable taking the response body and status code.
    """

    def _transport(body: bytes = b"", status_code: int = 200) -> httpx.MockTransport:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(status_code, content=body)

        return httpx.MockTransport(handler)

    return _transport


@pytest.fixture
def asgi_test_client() -> Callable[..., httpx.AsyncClient]:
    """Factory fixture that creates an httpx.AsyncClient for ASGI testing.

    Usage:
        async def test_something(asgi_test_client):
            async with asgi_test_client(app) as client:
                response = await client.get("/metrics")
    """

    def _get_client(app: Any) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://test")

    return _get_client


@pytest.fixture
def momo_registry(
    momo_transport: Callable[..., httpx.MockTransport],
) -> Callable[..., CollectorRegistry]:
    """Factory fixture for a registry whose collector scrapes a fake Momo.

    Usage:
        def test_something(momo_registry):
            registry = momo_registry(make_envelope([]), status_code=200)
    """

    def _registry(body: bytes = b"", status_code: int = 200) -> CollectorRegistry:
        registry = CollectorRegistry()
        registry.register(
            create_collector(
                "http://momo.test/metrics",
                transport=momo_transport(body, status_code),
            )
        )
        return registry

    return _registry


@pytest.fixture
def restore_root_logger() -> Iterator[logging.Logger]:
    """Restore root logger handlers and level after the test."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for handler in list(root.handlers):
        root.removeHandler(handler)
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)
