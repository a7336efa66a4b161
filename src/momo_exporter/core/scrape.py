"""Scrape coordinator: fetch, decode and translate one stats document.

A cycle moves through fetching, envelope decoding, stats decoding and
building. Any failure in the first three ends the cycle with ``up=0``;
nothing raised inside a cycle escapes ``scrape()``.
"""

import json
import logging
import threading
from typing import Any

from momo_exporter.core.catalog import CatalogBuilder
from momo_exporter.core.models import ScrapeOutcome, VersionInfo
from momo_exporter.core.ports import FetchPort
from momo_exporter.errors import EnvelopeDecodeError, FetchError, StatsDecodeError

logger = logging.getLogger(__name__)

_ENVELOPE_FIELDS = ("version", "environment", "libwebrtc", "stats")


def decode_envelope(body: bytes) -> tuple[VersionInfo, str]:
    """Decode the top-level stats envelope.

    Args:
        body: Raw response body.

    Returns:
        The build info and the still-encoded ``stats`` string.

    Raises:
        EnvelopeDecodeError: If the body is not a JSON object whose
            version, environment, libwebrtc and stats members are strings.
    """
    try:
        envelope = json.loads(body)
    except (ValueError, RecursionError) as exc:
        # Also raised for over-long integer literals and deep nesting.
        raise EnvelopeDecodeError(str(exc)) from exc
    if not isinstance(envelope, dict):
        raise EnvelopeDecodeError(
            f"expected a JSON object, got {type(envelope).__name__}"
        )
    for name in _ENVELOPE_FIELDS:
        if name not in envelope:
            raise EnvelopeDecodeError(f"missing field {name!r}")
        if not isinstance(envelope[name], str):
            raise EnvelopeDecodeError(
                f"field {name!r} must be a string, got {type(envelope[name]).__name__}"
            )
    info = VersionInfo(
        version=envelope["version"],
        environment=envelope["environment"],
        libwebrtc=envelope["libwebrtc"],
    )
    return info, envelope["stats"]


def decode_stats(payload: str) -> list[Any]:
    """Decode the JSON-encoded stats array embedded in the envelope.

    Raises:
        StatsDecodeError: If ``payload`` is not a JSON array.
    """
    try:
        stats = json.loads(payload)
    except (ValueError, RecursionError) as exc:
        raise StatsDecodeError(str(exc)) from exc
    if not isinstance(stats, list):
        raise StatsDecodeError(f"expected a JSON array, got {type(stats).__name__}")
    return stats


class ScrapeCoordinator:
    """Runs scrape cycles and owns the process-wide scrape counters.

    Cycles are serialized by an internal lock, since the counters are
    shared between concurrent collection requests.
    """

    def __init__(self, fetcher: FetchPort, builder: CatalogBuilder) -> None:
        self._fetcher = fetcher
        self._builder = builder
        self._lock = threading.Lock()
        self._total_scrapes = 0
        self._parse_failures = 0

    @property
    def total_scrapes(self) -> int:
        return self._total_scrapes

    @property
    def parse_failures(self) -> int:
        return self._parse_failures

    def close(self) -> None:
        """Close the fetcher."""
        self._fetcher.close()

    def _count_parse_failure(self) -> None:
        self._parse_failures += 1

    def _failed(self, reason: str, info: VersionInfo | None = None) -> ScrapeOutcome:
        return ScrapeOutcome(
            up=0.0,
            total_scrapes=self._total_scrapes,
            parse_failures=self._parse_failures,
            version_info=info,
            failure=reason,
        )

    def scrape(self) -> ScrapeOutcome:
        """Run one full scrape cycle.

        Returns:
            The outcome, with ``up=1`` only if every stage succeeded.
        """
        with self._lock:
            self._total_scrapes += 1

            try:
                body = self._fetcher.fetch()
            except FetchError as exc:
                logger.error("Can't scrape WebRTC Native Client Momo: %s", exc)
                return self._failed(f"fetch: {exc}")

            try:
                info, payload = decode_envelope(body)
            except EnvelopeDecodeError as exc:
                logger.error(
                    "Failed to parse response from WebRTC Native Client Momo: %s", exc
                )
                self._count_parse_failure()
                return self._failed(f"envelope: {exc}")

            logger.debug("Received stats payload", extra={"stats": payload})

            try:
                stats = decode_stats(payload)
            except StatsDecodeError as exc:
                logger.error("Failed to parse WebRTC stats: %s", exc)
                self._count_parse_failure()
                return self._failed(f"stats: {exc}", info)

            samples = self._builder.build(stats, on_parse_failure=self._count_parse_failure)
            return ScrapeOutcome(
                up=1.0,
                total_scrapes=self._total_scrapes,
                parse_failures=self._parse_failures,
                samples=tuple(samples),
                version_info=info,
            )
