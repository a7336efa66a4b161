"""Step definitions for scrape_cycle.feature."""

from dataclasses import dataclass, field
from typing import Any

import pytest
from prometheus_client.core import Metric
from pytest_bdd import given, parsers, then, when

from momo_exporter.adapters.collector import MomoCollector
from momo_exporter.exporter import create_coordinator
from tests.fakes import StaticFetcher, make_envelope, sample_value


@dataclass
class ScrapeScenarioContext:
    """State shared between the steps of one scenario."""

    fetcher: StaticFetcher = field(default_factory=StaticFetcher)
    collector: MomoCollector | None = None
    families: list[Metric] = field(default_factory=list)


def _data_channel(channel_id: str, label: str, sent: int) -> dict[str, Any]:
    return {"type": "data-channel", "id": channel_id, "label": label, "bytesSent": sent}


@pytest.fixture
def ctx() -> ScrapeScenarioContext:
    """Fresh scenario context for each test."""
    return ScrapeScenarioContext()


@given("a Momo exporter")
def given_exporter(ctx: ScrapeScenarioContext) -> None:
    ctx.collector = MomoCollector(create_coordinator(ctx.fetcher))


@given(
    parsers.parse(
        'Momo reports a data channel "{channel_id}" labelled "{label}" that sent {sent:d} bytes'
    )
)
def given_data_channel(ctx: ScrapeScenarioContext, channel_id: str, label: str, sent: int) -> None:
    ctx.fetcher.body = make_envelope([_data_channel(channel_id, label, sent)])


@given(
    parsers.parse(
        'Momo reports a report without a type next to a data channel "{channel_id}" '
        'labelled "{label}" that sent {sent:d} bytes'
    )
)
def given_untyped_report(
    ctx: ScrapeScenarioContext, channel_id: str, label: str, sent: int
) -> None:
    ctx.fetcher.body = make_envelope([{"id": "X"}, _data_channel(channel_id, label, sent)])


@given("Momo reports no stats")
def given_no_stats(ctx: ScrapeScenarioContext) -> None:
    ctx.fetcher.body = make_envelope([])


@given(parsers.parse("Momo answers with HTTP status {status:d}"))
def given_http_status(ctx: ScrapeScenarioContext, status: int) -> None:
    ctx.fetcher.error = f"HTTP status {status}"


@given(parsers.parse('Momo answers with the body "{body}"'))
def given_body(ctx: ScrapeScenarioContext, body: str) -> None:
    ctx.fetcher.body = body.encode()


@when("the exporter is scraped")
def when_scraped(ctx: ScrapeScenarioContext) -> None:
    assert ctx.collector is not None
    ctx.families = list(ctx.collector.collect())


@when(parsers.parse("the exporter is scraped {n:d} times"))
def when_scraped_n_times(ctx: ScrapeScenarioContext, n: int) -> None:
    assert ctx.collector is not None
    for _ in range(n):
        ctx.families = list(ctx.collector.collect())


@then(parsers.parse("momo_up is {value:d}"))
def then_up(ctx: ScrapeScenarioContext, value: int) -> None:
    assert sample_value(ctx.families, "momo_up") == float(value)


@then(parsers.parse("{n:d} scrapes have been counted"))
def then_scrapes(ctx: ScrapeScenarioContext, n: int) -> None:
    assert sample_value(ctx.families, "momo_exporter_scrapes_total") == float(n)


@then(parsers.parse("{n:d} JSON parse failures have been counted"))
def then_parse_failures(ctx: ScrapeScenarioContext, n: int) -> None:
    assert sample_value(ctx.families, "momo_exporter_json_parse_failures_total") == float(n)


@then(parsers.parse('the sample "{name}" for channel "{channel_id}" is {value:d}'))
def then_channel_sample(ctx: ScrapeScenarioContext, name: str, channel_id: str, value: int) -> None:
    labels = {"id": channel_id, "label": "serial"}
    assert sample_value(ctx.families, name, labels) == float(value)


@then("the version info is exported")
def then_version_info(ctx: ScrapeScenarioContext) -> None:
    assert any(family.name == "momo_version_info" for family in ctx.families)


@then("the version info is not exported")
def then_no_version_info(ctx: ScrapeScenarioContext) -> None:
    assert all(family.name != "momo_version_info" for family in ctx.families)
