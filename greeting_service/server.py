"""Process entry point.

The listen socket is bound before uvicorn starts so that a taken port is a
clean, fatal startup error (exit status 1) instead of a log line inside the
server loop. The orchestrator's restart policy owns relaunching.
"""

from __future__ import annotations

import errno
import logging
import socket

import click
import uvicorn

from greeting_service.core.logging import setup_logging
from greeting_service.core.settings import Settings, get_settings
from greeting_service.domain.exceptions import PortUnavailableError

logger = logging.getLogger("greeting_service.server")

BACKLOG = 2048


def bind_socket(host: str, port: int) -> socket.socket:
    """Bind and listen on ``host:port``, raising PortUnavailableError on failure."""

    family = socket.AF_INET6 if ":" in host else socket.AF_INET
    sock = socket.socket(family, socket.SOCK_STREAM)
    # Same as uvicorn: lets a restarted replica rebind while old connections sit in TIME_WAIT.
    # A port held by a listening process still fails with EADDRINUSE.
    sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
    try:
        sock.bind((host, port))
        sock.listen(BACKLOG)
    except OSError as exc:
        sock.close()
        reason = "address already in use" if exc.errno == errno.EADDRINUSE else str(exc)
        raise PortUnavailableError(host=host, port=port, reason=reason) from exc
    return sock


def serve(settings: Settings) -> None:
    """Serve the app on the configured port until the process is terminated."""

    sock = bind_socket(settings.host, settings.port)
    logger.info(
        "Listening",
        extra={
            "app": settings.app_name,
            "env": settings.app_env,
            "host": settings.host,
            "port": sock.getsockname()[1],
        },
    )
    config = uvicorn.Config(
        "greeting_service.main:app",
        log_config=None,  # keep the JSON logging configured by setup_logging()
        access_log=False,  # HttpLoggingMiddleware already logs each request
        log_level=settings.log_level.lower(),
    )
    server = uvicorn.Server(config)
    try:
        server.run(sockets=[sock])
    finally:
        sock.close()


@click.command()
@click.option("--host", default=None, help="Interface to bind (default: $HOST or 0.0.0.0).")
@click.option("--port", type=click.IntRange(1, 65535), default=None, help="Port to listen on (default: $PORT or 3000).")
def main(host: str | None, port: int | None) -> None:
    """Run the greeting service."""

    settings = get_settings()
    overrides = {k: v for k, v in {"host": host, "port": port}.items() if v is not None}
    if overrides:
        settings = settings.model_copy(update=overrides)

    setup_logging(settings.log_level)
    try:
        serve(settings)
    except PortUnavailableError as exc:
        logger.error(
            "Startup failed: %s",
            exc,
            extra={"host": exc.host, "port": exc.port},
        )
        raise click.exceptions.Exit(1) from exc
