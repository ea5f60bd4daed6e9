"""HTTP listener bootstrap with explicit readiness and failure signalling."""
from __future__ import annotations
import logging

from flask import Flask
from werkzeug.serving import BaseWSGIServer, make_server

logger = logging.getLogger(__name__)


class StartupError(Exception):
    pass


def make_listener(app: Flask, host: str | None = None, port: int | None = None) -> BaseWSGIServer:
    """Bind a threaded listener for app. Raises StartupError if the bind fails."""
    host = host if host is not None else app.config["HTTP_HOST"]
    port = int(port if port is not None else app.config["HTTP_PORT"])
    try:
        return make_server(host, port, app, threaded=True)
    except (OSError, SystemExit) as e:
        # werkzeug exits instead of raising on some bind errors
        logger.error("Could not bind %s:%d: %s", host, port, e)
        raise StartupError(f"could not bind {host}:{port}") from e


def serve(app: Flask, host: str | None = None, port: int | None = None) -> None:
    server = make_listener(app, host, port)
    logger.info("Listening on http://%s:%d", server.host, server.server_port)
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        logger.info("Shutting down")
    finally:
        server.server_close()
