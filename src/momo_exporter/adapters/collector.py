"""prometheus_client collector exposing scrape outcomes."""

from collections.abc import Iterator

from prometheus_client.core import CounterMetricFamily, GaugeMetricFamily, Metric
from prometheus_client.registry import Collector

from momo_exporter.core.models import MetricKind, ScrapeOutcome
from momo_exporter.core.scrape import ScrapeCoordinator

NAMESPACE = "momo"

VERSION_INFO_HELP = "WebRTC Native Client Momo version info."
UP_HELP = "Was the last scrape of WebRTC Native Client Momo successful."
SCRAPES_HELP = "Current total momo scrapes."
PARSE_FAILURES_HELP = "Number of failures while parsing JSON."
VERSION_LABELS = ["version", "environment", "libwebrtc"]


def _fqname(namespace: str, name: str) -> str:
    return f"{namespace}_{name}" if namespace else name


def outcome_families(outcome: ScrapeOutcome, namespace: str = NAMESPACE) -> list[Metric]:
    """Convert a scrape outcome into metric families.

    Samples sharing a name are grouped into one family, in order of first
    appearance. The version info family is present only when the envelope
    decoded; ``up`` and both counters are always present.

    Args:
        outcome: Result of one scrape cycle.
        namespace: Prefix for every metric name.

    Returns:
        Families ready to be yielded from ``Collector.collect``.
    """
    families: list[Metric] = []

    if outcome.version_info is not None:
        info = GaugeMetricFamily(
            _fqname(namespace, "version_info"), VERSION_INFO_HELP, labels=VERSION_LABELS
        )
        info.add_metric(
            [
                outcome.version_info.version,
                outcome.version_info.environment,
                outcome.version_info.libwebrtc,
            ],
            1.0,
        )
        families.append(info)

    grouped: dict[str, Metric] = {}
    for sample in outcome.samples:
        family = grouped.get(sample.name)
        if family is None:
            family_cls = (
                CounterMetricFamily if sample.kind is MetricKind.COUNTER else GaugeMetricFamily
            )
            family = family_cls(
                _fqname(namespace, sample.name),
                sample.help_text,
                labels=list(sample.label_names),
            )
            grouped[sample.name] = family
        family.add_metric(list(sample.label_values), sample.value)
    families.extend(grouped.values())

    families.append(GaugeMetricFamily(_fqname(namespace, "up"), UP_HELP, value=outcome.up))
    families.append(
        CounterMetricFamily(
            _fqname(namespace, "exporter_scrapes_total"),
            SCRAPES_HELP,
            value=outcome.total_scrapes,
        )
    )
    families.append(
        CounterMetricFamily(
            _fqname(namespace, "exporter_json_parse_failures_total"),
            PARSE_FAILURES_HELP,
            value=outcome.parse_failures,
        )
    )
    return families


class MomoCollector(Collector):
    """Collector that runs one scrape cycle per collection.

    Example:
        ```python
        from prometheus_client import CollectorRegistry, generate_latest

        registry = CollectorRegistry()
        registry.register(MomoCollector(coordinator))
        print(generate_latest(registry).decode())
        ```
    """

    def __init__(self, coordinator: ScrapeCoordinator, namespace: str = NAMESPACE) -> None:
        self._coordinator = coordinator
        self._namespace = namespace

    def close(self) -> None:
        """Release the connection resources of the underlying fetcher."""
        self._coordinator.close()

    def describe(self) -> Iterator[Metric]:
        """Describe the metrics exported on every collection."""
        yield GaugeMetricFamily(
            _fqname(self._namespace, "version_info"), VERSION_INFO_HELP, labels=VERSION_LABELS
        )
        yield GaugeMetricFamily(_fqname(self._namespace, "up"), UP_HELP)
        yield CounterMetricFamily(
            _fqname(self._namespace, "exporter_scrapes_total"), SCRAPES_HELP
        )
        yield CounterMetricFamily(
            _fqname(self._namespace, "exporter_json_parse_failures_total"),
            PARSE_FAILURES_HELP,
        )

    def collect(self) -> Iterator[Metric]:
        """Scrape Momo and yield the resulting families."""
        outcome = self._coordinator.scrape()
        yield from outcome_families(outcome, self._namespace)
