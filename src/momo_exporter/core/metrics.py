"""Helper functions for declaring FieldSpec and LabelSpec objects."""

from momo_exporter.core.models import FieldSpec, LabelSpec, MetricKind, ValueType


def counter(
    source_key: str,
    name: str,
    help_text: str,
    value_type: ValueType = ValueType.INT,
) -> FieldSpec:
    """Declare a counter field.

    Args:
        source_key: Report field (e.g. "bytesSent")
        name: Metric name suffix, ending in ``_total`` (e.g. "bytes_sent_total")
        help_text: Metric documentation
        value_type: INT for WebRTC unsigned counters (default), FLOAT for
            accumulated durations and energies

    Returns:
        FieldSpec of kind COUNTER
    """
    return FieldSpec(
        source_key=source_key,
        metric_name=name,
        kind=MetricKind.COUNTER,
        help_text=help_text,
        value_type=value_type,
    )


def gauge(
    source_key: str,
    name: str,
    help_text: str,
    value_type: ValueType = ValueType.FLOAT,
) -> FieldSpec:
    """Declare a gauge field.

    Args:
        source_key: Report field (e.g. "framesPerSecond")
        name: Metric name suffix (e.g. "frames_per_second")
        help_text: Metric documentation
        value_type: FLOAT (default), INT, or BOOL for 0/1 flags

    Returns:
        FieldSpec of kind GAUGE
    """
    return FieldSpec(
        source_key=source_key,
        metric_name=name,
        kind=MetricKind.GAUGE,
        help_text=help_text,
        value_type=value_type,
    )


def flag(source_key: str, name: str, help_text: str) -> FieldSpec:
    """Declare a boolean field exported as a 0/1 gauge."""
    return gauge(source_key, name, help_text, value_type=ValueType.BOOL)


def label(
    source_key: str,
    name: str,
    value_type: ValueType = ValueType.STRING,
) -> LabelSpec:
    """Declare a label field."""
    return LabelSpec(source_key=source_key, label_name=name, value_type=value_type)
