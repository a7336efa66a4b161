"""Typed access to untyped, JSON-decoded report values.

``extract`` never raises: every lookup resolves to a value, an absent
outcome, or a type mismatch.

Coercion rules:
- STRING and BOOL require an exact type match.
- FLOAT accepts any JSON number (integers are widened).
- INT accepts integers and integer-valued floats (``30.0``).
- A string is never converted to a number, and ``bool`` is never a number.
- JSON ``null`` counts as absent.
"""

import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from momo_exporter.core.models import ValueType

ABSENT = "absent"
TYPE_MISMATCH = "type_mismatch"

_MISSING = object()

Scalar = str | int | float | bool


@dataclass(frozen=True)
class Extraction:
    """Outcome of one field lookup.

    Attributes:
        value: The typed value, or None when the lookup failed.
        reason: None on success, otherwise ``"absent"`` or ``"type_mismatch"``.
    """

    value: Scalar | None = None
    reason: str | None = None

    @property
    def ok(self) -> bool:
        return self.reason is None


_ABSENT = Extraction(reason=ABSENT)
_MISMATCH = Extraction(reason=TYPE_MISMATCH)


def _lookup(node: Any, key: str) -> Any:
    """Return the raw value under ``key``, or _MISSING.

    A key present verbatim wins over its dotted interpretation, so WebRTC
    field names never collide with paths.
    """
    if isinstance(node, Mapping) and key in node:
        return node[key]
    if "." not in key:
        return _MISSING
    for segment in key.split("."):
        if isinstance(node, Mapping):
            if segment not in node:
                return _MISSING
            node = node[segment]
        elif isinstance(node, Sequence) and not isinstance(node, str | bytes):
            if not segment.isdecimal() or int(segment) >= len(node):
                return _MISSING
            node = node[int(segment)]
        else:
            return _MISSING
    return node


def _coerce(raw: Any, want: ValueType) -> Extraction:
    if want is ValueType.STRING:
        return Extraction(raw) if isinstance(raw, str) else _MISMATCH
    if want is ValueType.BOOL:
        return Extraction(raw) if isinstance(raw, bool) else _MISMATCH
    if isinstance(raw, bool) or not isinstance(raw, int | float):
        return _MISMATCH
    if want is ValueType.FLOAT:
        try:
            return Extraction(float(raw))
        except OverflowError:
            return _MISMATCH
    # ValueType.INT
    if isinstance(raw, int):
        return Extraction(raw)
    if math.isfinite(raw) and raw.is_integer():
        return Extraction(int(raw))
    return _MISMATCH


def extract(report: Any, key: str, want: ValueType) -> Extraction:
    """Extract ``key`` from ``report`` as ``want``.

    Args:
        report: Any JSON-decoded value (usually a dict).
        key: A direct key, or a dotted path such as ``a.b.0``.
        want: The requested scalar type.

    Returns:
        Extraction with the typed value or the reason it is unavailable.
    """
    raw = _lookup(report, key)
    if raw is _MISSING or raw is None:
        return _ABSENT
    return _coerce(raw, want)
