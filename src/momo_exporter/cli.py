"""Command line entry point: ``momo-exporter``."""

import logging
from typing import Annotated

import typer
import uvicorn
from prometheus_client import CollectorRegistry, Info, PlatformCollector, ProcessCollector

from momo_exporter import __version__
from momo_exporter.adapters.collector import MomoCollector
from momo_exporter.adapters.frameworks.asgi import create_asgi_app
from momo_exporter.adapters.logging import configure_logging
from momo_exporter.config import (
    DEFAULT_LISTEN_ADDRESS,
    DEFAULT_SCRAPE_URI,
    DEFAULT_TELEMETRY_PATH,
    DEFAULT_TIMEOUT,
    ExporterConfig,
)
from momo_exporter.errors import UnsupportedSchemeError
from momo_exporter.exporter import create_collector

logger = logging.getLogger(__name__)

BUILD_INFO_HELP = "Build information of momo_exporter."

app = typer.Typer(add_completion=False, context_settings={"help_option_names": ["-h", "--help"]})


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"momo_exporter, version {__version__}")
        raise typer.Exit()


def build_registry(collector: MomoCollector) -> CollectorRegistry:
    """Create the registry served by the exporter.

    Besides ``collector`` it holds the exporter build info and the process
    and platform collectors of prometheus_client.
    """
    registry = CollectorRegistry(auto_describe=True)
    registry.register(collector)
    build_info = Info("momo_exporter_build", BUILD_INFO_HELP, registry=registry)
    build_info.info({"version": __version__})
    ProcessCollector(registry=registry)
    PlatformCollector(registry=registry)
    return registry


@app.command()
def serve(
    listen_address: Annotated[
        str,
        typer.Option(
            "--web.listen-address",
            envvar="MOMO_EXPORTER_LISTEN_ADDRESS",
            help="Address to listen on for web interface and telemetry.",
        ),
    ] = DEFAULT_LISTEN_ADDRESS,
    telemetry_path: Annotated[
        str,
        typer.Option(
            "--web.telemetry-path",
            envvar="MOMO_EXPORTER_TELEMETRY_PATH",
            help="Path under which to expose metrics.",
        ),
    ] = DEFAULT_TELEMETRY_PATH,
    scrape_uri: Annotated[
        str,
        typer.Option(
            "--momo.scrape-uri",
            envvar="MOMO_EXPORTER_SCRAPE_URI",
            help="URI on which to scrape WebRTC Native Client Momo.",
        ),
    ] = DEFAULT_SCRAPE_URI,
    ssl_verify: Annotated[
        bool,
        typer.Option(
            "--momo.ssl-verify/--no-momo.ssl-verify",
            envvar="MOMO_EXPORTER_SSL_VERIFY",
            help="Enable SSL certificate verification for the scrape URI.",
        ),
    ] = True,
    timeout: Annotated[
        float,
        typer.Option(
            "--momo.timeout",
            envvar="MOMO_EXPORTER_TIMEOUT",
            help="Timeout in seconds for getting stats from WebRTC Native Client Momo.",
        ),
    ] = DEFAULT_TIMEOUT,
    log_level: Annotated[
        str,
        typer.Option(
            "--log.level",
            envvar="MOMO_EXPORTER_LOG_LEVEL",
            help="Only log messages with the given severity or above: debug, info, warn, error.",
        ),
    ] = "info",
    log_format: Annotated[
        str,
        typer.Option(
            "--log.format",
            envvar="MOMO_EXPORTER_LOG_FORMAT",
            help="Output format of log messages: logfmt or json.",
        ),
    ] = "logfmt",
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            callback=_version_callback,
            is_eager=True,
            help="Show the version and exit.",
        ),
    ] = False,
) -> None:
    """Export WebRTC Native Client Momo stats as Prometheus metrics."""
    config = ExporterConfig(
        listen_address=listen_address,
        telemetry_path=telemetry_path,
        scrape_uri=scrape_uri,
        ssl_verify=ssl_verify,
        timeout=timeout,
        log_level=log_level,
        log_format=log_format,
    )
    try:
        config.validate()
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc

    configure_logging(config.log_level, config.log_format)
    logger.info("Starting momo_exporter", extra={"version": __version__})

    try:
        collector = create_collector(config.scrape_uri, config.ssl_verify, config.timeout)
    except (UnsupportedSchemeError, ValueError) as exc:
        logger.error("Error creating an exporter: %s", exc)
        raise typer.Exit(code=1) from exc

    registry = build_registry(collector)
    logger.info("Listening on address", extra={"address": config.listen_address})
    try:
        uvicorn.run(
            create_asgi_app(registry, config.telemetry_path),
            host=config.host,
            port=config.port,
            log_config=None,
        )
    finally:
        collector.close()


def main() -> None:
    app()


if __name__ == "__main__":
    main()
