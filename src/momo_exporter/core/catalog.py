"""Metric catalog builder: stats array -> ordered metric samples."""

import logging
from collections.abc import Callable, Iterable
from typing import Any

from momo_exporter.core.dispatch import ReportDispatcher
from momo_exporter.core.models import MetricSample
from momo_exporter.core.ports import ExtractionDiagnosticsPort
from momo_exporter.errors import MissingDiscriminatorError

logger = logging.getLogger(__name__)

DUPLICATE_SERIES = "duplicate_series"


class CatalogBuilder:
    """Translates a decoded stats array into metric samples.

    Each report is dispatched on its own: a malformed report contributes
    zero samples and never stops the reports after it. A sample whose name
    and label values repeat an earlier sample is dropped, so every series
    appears at most once per scrape.
    """

    def __init__(
        self,
        dispatcher: ReportDispatcher,
        diagnostics: ExtractionDiagnosticsPort | None = None,
    ) -> None:
        self._dispatcher = dispatcher
        self._diagnostics = diagnostics

    def build(
        self,
        stats: Iterable[Any],
        on_parse_failure: Callable[[], None] | None = None,
    ) -> list[MetricSample]:
        """Dispatch every report and concatenate their samples.

        Args:
            stats: Decoded elements of the stats array, in input order.
            on_parse_failure: Called once per report lacking a discriminator.

        Returns:
            All samples, grouped by report in input order, first
            occurrence of each series only.
        """
        samples: list[MetricSample] = []
        seen: set[tuple[str, tuple[str, ...]]] = set()
        for index, report in enumerate(stats):
            try:
                emitted = self._dispatcher.dispatch(report)
            except MissingDiscriminatorError as exc:
                logger.error("Skipping report %d: %s", index, exc)
                if on_parse_failure is not None:
                    on_parse_failure()
                continue
            for sample in emitted:
                series = (sample.name, sample.label_values)
                if series in seen:
                    logger.debug(
                        "Dropping duplicate series",
                        extra={"metric": sample.name, "report": index},
                    )
                    if self._diagnostics is not None:
                        self._diagnostics.field_skipped(
                            report["type"], sample.name, DUPLICATE_SERIES
                        )
                    continue
                seen.add(series)
                samples.append(sample)
        return samples
