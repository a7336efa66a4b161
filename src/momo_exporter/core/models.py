"""Core domain models for the stats translation engine."""

from dataclasses import dataclass, field
from enum import Enum


class MetricKind(Enum):
    """Prometheus value type of an emitted metric."""

    COUNTER = "counter"
    GAUGE = "gauge"


class ValueType(Enum):
    """Scalar type requested from the field extractor."""

    STRING = "string"
    INT = "int"
    FLOAT = "float"
    BOOL = "bool"


@dataclass(frozen=True)
class LabelSpec:
    """A report field exported as a label.

    Attributes:
        source_key: Key of the field in the raw report (e.g. ``mimeType``).
        label_name: Label name on the emitted metric (e.g. ``mime_type``).
        value_type: STRING, or INT for numeric fields rendered in base 10.
    """

    source_key: str
    label_name: str
    value_type: ValueType = ValueType.STRING


@dataclass(frozen=True)
class FieldSpec:
    """A numeric report field exported as one metric sample.

    Attributes:
        source_key: Key of the field in the raw report (e.g. ``bytesSent``).
        metric_name: Metric name without namespace. May hold a
            ``{label_name}`` placeholder filled from the report's labels.
        kind: Counter or gauge.
        help_text: Documentation string of the metric.
        value_type: FLOAT, INT or BOOL.
    """

    source_key: str
    metric_name: str
    kind: MetricKind
    help_text: str
    value_type: ValueType = ValueType.FLOAT

    @property
    def is_templated(self) -> bool:
        """True when the metric name is built from label values."""
        return "{" in self.metric_name


@dataclass(frozen=True)
class ReportProjection:
    """Mapping from one report type to the samples it produces.

    Attributes:
        report_type: Value of the ``type`` discriminator (e.g. ``codec``).
        fields: Fields exported as samples, in emission order.
        label_fields: Labels bound positionally to every sample.
    """

    report_type: str
    fields: tuple[FieldSpec, ...]
    label_fields: tuple[LabelSpec, ...] = ()

    @property
    def label_names(self) -> tuple[str, ...]:
        return tuple(label.label_name for label in self.label_fields)


@dataclass(frozen=True)
class MetricSample:
    """A single metric measurement derived from a report.

    Attributes:
        name: Metric name without namespace (e.g. datachannel_bytes_sent_total).
        kind: Counter or gauge.
        value: The metric value.
        label_names: Label names, aligned 1:1 with ``label_values``.
        label_values: Label values in the projection's label order.
        help_text: Documentation string of the metric.
    """

    name: str
    kind: MetricKind
    value: float
    label_names: tuple[str, ...] = ()
    label_values: tuple[str, ...] = ()
    help_text: str = ""

    @property
    def labels(self) -> dict[str, str]:
        return dict(zip(self.label_names, self.label_values, strict=True))


@dataclass(frozen=True)
class VersionInfo:
    """Build information reported in the stats envelope."""

    version: str
    environment: str
    libwebrtc: str


@dataclass(frozen=True)
class ScrapeOutcome:
    """Result of one scrape cycle.

    Attributes:
        up: 1.0 when the cycle reached the end, 0.0 otherwise.
        total_scrapes: Process-wide count of attempted scrapes.
        parse_failures: Process-wide count of JSON parse failures.
        samples: Samples built from the stats array, in input order.
        version_info: Envelope build info, when the envelope decoded.
        failure: Short description of why the cycle failed, if it did.
    """

    up: float
    total_scrapes: int
    parse_failures: int
    samples: tuple[MetricSample, ...] = ()
    version_info: VersionInfo | None = None
    failure: str | None = field(default=None, compare=False)
