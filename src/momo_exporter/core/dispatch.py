"""Report dispatcher: one raw report -> its metric samples."""

import logging
import re
from typing import Any

from momo_exporter.core.extract import TYPE_MISMATCH, extract
from momo_exporter.core.models import (
    FieldSpec,
    MetricSample,
    ReportProjection,
    ValueType,
)
from momo_exporter.core.ports import ExtractionDiagnosticsPort
from momo_exporter.core.registry import ReportSchemaRegistry, template_fields
from momo_exporter.errors import MissingDiscriminatorError

logger = logging.getLogger(__name__)

_INVALID_NAME_CHARS = re.compile(r"[^a-zA-Z0-9_]")


def sanitize_name_part(value: str) -> str:
    """Map a label value onto the metric name alphabet ``[a-zA-Z0-9_]``."""
    return _INVALID_NAME_CHARS.sub("_", value)


class ReportDispatcher:
    """Routes a report to its projection and emits one sample per field.

    Unknown report types produce no samples and are not an error. A report
    without a string ``type`` raises MissingDiscriminatorError, which the
    catalog builder counts as a parse failure.
    """

    def __init__(
        self,
        registry: ReportSchemaRegistry,
        diagnostics: ExtractionDiagnosticsPort | None = None,
    ) -> None:
        self._registry = registry
        self._diagnostics = diagnostics

    def _skipped(self, report_type: str, key: str, reason: str | None) -> None:
        if self._diagnostics is not None and reason is not None:
            self._diagnostics.field_skipped(report_type, key, reason)

    def dispatch(self, report: Any) -> list[MetricSample]:
        """Project one report onto metric samples.

        Args:
            report: One decoded element of the stats array.

        Returns:
            Samples in projection field order; empty for unknown types.

        Raises:
            MissingDiscriminatorError: If ``type`` is absent or not a string.
        """
        discriminator = extract(report, "type", ValueType.STRING)
        if not discriminator.ok:
            raise MissingDiscriminatorError(
                f"stats must have 'type' field ({discriminator.reason})"
            )
        report_type = str(discriminator.value)
        logger.debug("Dispatching report", extra={"type": report_type})

        projection = self._registry.lookup(report_type)
        if projection is None:
            return []

        label_values = self._label_values(report, projection)
        labels = dict(zip(projection.label_names, label_values, strict=True))
        samples = []
        for spec in projection.fields:
            value = self._field_value(report, report_type, spec)
            if value is None:
                continue
            name = self._metric_name(spec, labels)
            if name is None:
                continue
            samples.append(
                MetricSample(
                    name=name,
                    kind=spec.kind,
                    value=value,
                    label_names=projection.label_names,
                    label_values=label_values,
                    help_text=spec.help_text,
                )
            )
        return samples

    def _label_values(self, report: Any, projection: ReportProjection) -> tuple[str, ...]:
        values = []
        for label in projection.label_fields:
            if label.value_type is ValueType.INT:
                numeric = extract(report, label.source_key, ValueType.INT)
                if numeric.ok:
                    values.append(str(numeric.value))
                    continue
            text = extract(report, label.source_key, ValueType.STRING)
            if not text.ok:
                self._skipped(projection.report_type, label.source_key, text.reason)
            values.append(str(text.value) if text.ok else "")
        return tuple(values)

    def _field_value(self, report: Any, report_type: str, spec: FieldSpec) -> float | None:
        if spec.value_type is ValueType.BOOL:
            flag = extract(report, spec.source_key, ValueType.BOOL)
            if not flag.ok:
                self._skipped(report_type, spec.source_key, flag.reason)
                return None
            return 1.0 if flag.value else 0.0

        result = extract(report, spec.source_key, ValueType.FLOAT)
        if not result.ok and spec.value_type is ValueType.INT:
            result = extract(report, spec.source_key, ValueType.INT)
        if not result.ok:
            self._skipped(report_type, spec.source_key, result.reason)
            return None
        try:
            return float(result.value)  # type: ignore[arg-type]
        except OverflowError:
            self._skipped(report_type, spec.source_key, TYPE_MISMATCH)
            return None

    @staticmethod
    def _metric_name(spec: FieldSpec, labels: dict[str, str]) -> str | None:
        if not spec.is_templated:
            return spec.metric_name
        parts = {key: sanitize_name_part(labels[key]) for key in template_fields(spec.metric_name)}
        # An empty placeholder would fold distinct reports into one name.
        if not all(parts.values()):
            return None
        return spec.metric_name.format_map(parts)
