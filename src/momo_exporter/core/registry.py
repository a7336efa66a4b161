"""Report schema registry: report type -> projection lookup."""

from collections.abc import Iterable, Iterator
from string import Formatter

from momo_exporter.core.models import MetricKind, ReportProjection
from momo_exporter.core.stats_types import PROJECTIONS


def family_name(metric_name: str, kind: MetricKind) -> str:
    """Return the exposition family name of a metric.

    Counter families drop the ``_total`` suffix, so a gauge ``x`` and a
    counter ``x_total`` would share the family ``x``.
    """
    if kind is MetricKind.COUNTER and metric_name.endswith("_total"):
        return metric_name[: -len("_total")]
    return metric_name


def template_fields(metric_name: str) -> list[str]:
    """Return the placeholder names used in a metric name template."""
    return [name for _, name, _, _ in Formatter().parse(metric_name) if name]


class ReportSchemaRegistry:
    """Immutable table of report projections keyed by report type.

    The registry validates the exported metric namespace once, at
    construction, and is then shared read-only by the engine.
    """

    def __init__(self, projections: Iterable[ReportProjection]) -> None:
        """Build and validate the registry.

        Args:
            projections: One projection per report type.

        Raises:
            ValueError: On duplicate report types, duplicate label names,
                colliding metric names, or templates referencing unknown
                labels.
        """
        self._projections: dict[str, ReportProjection] = {}
        owners: dict[str, str] = {}
        for projection in projections:
            if projection.report_type in self._projections:
                raise ValueError(
                    f"report type {projection.report_type!r} already registered"
                )
            label_names = projection.label_names
            if len(set(label_names)) != len(label_names):
                raise ValueError(
                    f"duplicate label names in {projection.report_type!r}: {label_names}"
                )
            for spec in projection.fields:
                family = family_name(spec.metric_name, spec.kind)
                if family in owners:
                    raise ValueError(
                        f"metric {spec.metric_name!r} of {projection.report_type!r} "
                        f"collides with a metric of {owners[family]!r}"
                    )
                owners[family] = projection.report_type
                unknown = set(template_fields(spec.metric_name)) - set(label_names)
                if unknown:
                    raise ValueError(
                        f"metric {spec.metric_name!r} references unknown labels "
                        f"{sorted(unknown)}"
                    )
            self._projections[projection.report_type] = projection

    def lookup(self, report_type: str) -> ReportProjection | None:
        """Return the projection for ``report_type``, or None if unknown."""
        return self._projections.get(report_type)

    @property
    def report_types(self) -> tuple[str, ...]:
        return tuple(self._projections)

    def __contains__(self, report_type: object) -> bool:
        return report_type in self._projections

    def __iter__(self) -> Iterator[ReportProjection]:
        return iter(self._projections.values())

    def __len__(self) -> int:
        return len(self._projections)


def default_registry() -> ReportSchemaRegistry:
    """Return a registry holding every known WebRTC report type."""
    return ReportSchemaRegistry(PROJECTIONS)
