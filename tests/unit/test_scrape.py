"""Tests for ScrapeCoordinator and the envelope decoders."""

import json
import threading
from collections.abc import Callable

import pytest

from momo_exporter.core.models import VersionInfo
from momo_exporter.core.scrape import ScrapeCoordinator, decode_envelope, decode_stats
from momo_exporter.errors import EnvelopeDecodeError, StatsDecodeError
from tests.fakes import (
    DATA_CHANNEL_REPORT,
    TEST_ENVIRONMENT,
    TEST_LIBWEBRTC,
    TEST_VERSION,
    StaticFetcher,
    make_envelope,
)

CoordinatorFactory = Callable[..., tuple[ScrapeCoordinator, StaticFetcher]]

EXPECTED_INFO = VersionInfo(TEST_VERSION, TEST_ENVIRONMENT, TEST_LIBWEBRTC)


class TestDecodeEnvelope:
    """Tests for decode_envelope()."""

    @pytest.mark.core
    def test_returns_version_info_and_encoded_stats(self) -> None:
        info, stats = decode_envelope(make_envelope([]))
        assert info == EXPECTED_INFO
        assert stats == "[]"

    @pytest.mark.core
    @pytest.mark.parametrize(
        "body",
        [b"{", b"", b"[]", b'"stats"', b"\xff\xfe\xfa"],
    )
    def test_invalid_body_raises(self, body: bytes) -> None:
        with pytest.raises(EnvelopeDecodeError):
            decode_envelope(body)

    @pytest.mark.core
    @pytest.mark.parametrize("missing", ["version", "environment", "libwebrtc", "stats"])
    def test_missing_required_field_raises(self, missing: str) -> None:
        envelope = json.loads(make_envelope([]))
        del envelope[missing]
        with pytest.raises(EnvelopeDecodeError, match=missing):
            decode_envelope(json.dumps(envelope).encode())

    @pytest.mark.core
    def test_native_stats_array_raises(self) -> None:
        """The stats member must be a JSON-encoded string, not an array."""
        body = json.dumps(
            {"version": "v", "environment": "e", "libwebrtc": "l", "stats": []}
        ).encode()
        with pytest.raises(EnvelopeDecodeError, match="stats"):
            decode_envelope(body)

    @pytest.mark.core
    def test_oversized_integer_literal_raises(self) -> None:
        """Integer literals beyond the int conversion limit are rejected."""
        body = make_envelope([])[:-1] + b', "x": ' + b"1" * 5000 + b"}"
        with pytest.raises(EnvelopeDecodeError):
            decode_envelope(body)

    @pytest.mark.core
    def test_deeply_nested_body_raises(self) -> None:
        with pytest.raises(EnvelopeDecodeError):
            decode_envelope(b"[" * 100_000 + b"]" * 100_000)


class TestDecodeStats:
    @pytest.mark.core
    def test_decodes_array(self) -> None:
        assert decode_stats('[{"type": "codec"}]') == [{"type": "codec"}]

    @pytest.mark.core
    @pytest.mark.parametrize("payload", ["", "[", "{}", '"x"', "null"])
    def test_non_array_raises(self, payload: str) -> None:
        with pytest.raises(StatsDecodeError):
            decode_stats(payload)

    @pytest.mark.core
    @pytest.mark.parametrize(
        "payload",
        ["[" + "1" * 5000 + "]", "[" * 100_000 + "]" * 100_000],
        ids=["oversized-integer", "deep-nesting"],
    )
    def test_valid_but_undecodable_json_raises(self, payload: str) -> None:
        with pytest.raises(StatsDecodeError):
            decode_stats(payload)


class TestScrapeCoordinator:
    """Tests for ScrapeCoordinator.scrape()."""

    @pytest.mark.core
    def test_empty_stats_is_up_with_no_samples(
        self, coordinator_factory: CoordinatorFactory
    ) -> None:
        coordinator, _ = coordinator_factory(body=make_envelope([]))

        outcome = coordinator.scrape()

        assert outcome.up == 1.0
        assert outcome.samples == ()
        assert outcome.version_info == EXPECTED_INFO
        assert outcome.total_scrapes == 1
        assert outcome.parse_failures == 0

    @pytest.mark.core
    def test_invalid_envelope_counts_one_parse_failure(
        self, coordinator_factory: CoordinatorFactory
    ) -> None:
        coordinator, _ = coordinator_factory(body=b"{")

        outcome = coordinator.scrape()

        assert outcome.up == 0.0
        assert outcome.parse_failures == 1
        assert outcome.version_info is None
        assert outcome.samples == ()

    @pytest.mark.core
    def test_fetch_error_is_down_without_parse_failure(
        self, coordinator_factory: CoordinatorFactory
    ) -> None:
        coordinator, _ = coordinator_factory(error="HTTP status 404")

        outcome = coordinator.scrape()

        assert outcome.up == 0.0
        assert outcome.total_scrapes == 1
        assert outcome.parse_failures == 0
        assert outcome.samples == ()
        assert outcome.version_info is None
        assert outcome.failure is not None and "404" in outcome.failure

    @pytest.mark.core
    def test_invalid_stats_keeps_version_info(
        self, coordinator_factory: CoordinatorFactory
    ) -> None:
        """Version info is reported even when the stats payload is broken."""
        coordinator, _ = coordinator_factory(body=make_envelope("[{"))

        outcome = coordinator.scrape()

        assert outcome.up == 0.0
        assert outcome.parse_failures == 1
        assert outcome.version_info == EXPECTED_INFO

    @pytest.mark.core
    @pytest.mark.parametrize(
        "stats",
        ["[" + "1" * 5000 + "]", "[" * 100_000 + "]" * 100_000],
        ids=["oversized-integer", "deep-nesting"],
    )
    def test_undecodable_stats_never_escape_scrape(
        self, coordinator_factory: CoordinatorFactory, stats: str
    ) -> None:
        coordinator, _ = coordinator_factory(body=make_envelope(stats))

        outcome = coordinator.scrape()

        assert outcome.up == 0.0
        assert outcome.total_scrapes == 1
        assert outcome.parse_failures == 1
        assert outcome.version_info == EXPECTED_INFO

    @pytest.mark.core
    def test_oversized_integer_in_envelope_is_a_parse_failure(
        self, coordinator_factory: CoordinatorFactory
    ) -> None:
        body = make_envelope([])[:-1] + b', "x": ' + b"1" * 5000 + b"}"
        coordinator, _ = coordinator_factory(body=body)

        outcome = coordinator.scrape()

        assert outcome.up == 0.0
        assert outcome.parse_failures == 1
        assert outcome.version_info is None

    @pytest.mark.core
    def test_missing_discriminator_counts_but_stays_up(
        self, coordinator_factory: CoordinatorFactory
    ) -> None:
        coordinator, _ = coordinator_factory(
            body=make_envelope([{"id": "X"}, DATA_CHANNEL_REPORT, {"type": "track"}])
        )

        outcome = coordinator.scrape()

        assert outcome.up == 1.0
        assert outcome.parse_failures == 1
        assert len(outcome.samples) == 4

    @pytest.mark.core
    def test_counters_persist_across_cycles(
        self, coordinator_factory: CoordinatorFactory
    ) -> None:
        coordinator, fetcher = coordinator_factory(body=b"not json")
        coordinator.scrape()
        coordinator.scrape()
        fetcher.body = make_envelope([])

        outcome = coordinator.scrape()

        assert outcome.up == 1.0
        assert outcome.total_scrapes == 3
        assert outcome.parse_failures == 2
        assert coordinator.total_scrapes == 3
        assert coordinator.parse_failures == 2

    @pytest.mark.core
    def test_concurrent_scrapes_are_serialized(
        self, coordinator_factory: CoordinatorFactory
    ) -> None:
        """Every concurrent cycle increments the counters exactly once."""
        coordinator, fetcher = coordinator_factory(body=b"{")
        threads = [threading.Thread(target=coordinator.scrape) for _ in range(16)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert fetcher.calls == 16
        assert coordinator.total_scrapes == 16
        assert coordinator.parse_failures == 16
