"""Exporter settings."""

from dataclasses import dataclass

from momo_exporter.adapters.logging import LOG_FORMATS, LOG_LEVELS

DEFAULT_LISTEN_ADDRESS = ":9801"
DEFAULT_TELEMETRY_PATH = "/metrics"
DEFAULT_SCRAPE_URI = "http://localhost:8081/metrics"
DEFAULT_TIMEOUT = 5.0


@dataclass(frozen=True)
class ExporterConfig:
    """Validated exporter settings.

    Attributes:
        listen_address: ``host:port`` to serve on; empty host = all interfaces.
        telemetry_path: Path under which metrics are exposed.
        scrape_uri: URI of the Momo stats endpoint.
        ssl_verify: Verify TLS certificates of the scrape URI.
        timeout: Scrape timeout in seconds.
        log_level: debug, info, warn or error.
        log_format: logfmt or json.
    """

    listen_address: str = DEFAULT_LISTEN_ADDRESS
    telemetry_path: str = DEFAULT_TELEMETRY_PATH
    scrape_uri: str = DEFAULT_SCRAPE_URI
    ssl_verify: bool = True
    timeout: float = DEFAULT_TIMEOUT
    log_level: str = "info"
    log_format: str = "logfmt"

    def validate(self) -> "ExporterConfig":
        """Check every setting and return self.

        Raises:
            ValueError: On the first invalid setting.
        """
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")
        if not self.telemetry_path.startswith("/"):
            raise ValueError(f"telemetry path must start with '/': {self.telemetry_path!r}")
        if self.telemetry_path == "/":
            raise ValueError("telemetry path must not be '/'")
        if self.log_level not in LOG_LEVELS:
            raise ValueError(f"unknown log level {self.log_level!r}")
        if self.log_format not in LOG_FORMATS:
            raise ValueError(f"unknown log format {self.log_format!r}")
        # Accessing port validates the listen address.
        _ = self.port
        return self

    @property
    def host(self) -> str:
        host = self.listen_address.rpartition(":")[0]
        return host.strip("[]") or "0.0.0.0"

    @property
    def port(self) -> int:
        _, sep, port = self.listen_address.rpartition(":")
        if not sep or not port.isdigit() or not 0 < int(port) < 65536:
            raise ValueError(f"invalid listen address {self.listen_address!r}")
        return int(port)
