"""Entry point for the todo service."""

import argparse
import logging
import sys

from . import create_app
from .config import load_conf_file
from .server import StartupError, serve

logger = logging.getLogger("todo_service")


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(prog="todo_service", description="Todo REST service")
    parser.add_argument("--conf", help="JSON configuration file with dotted keys, e.g. {\"http.port\": 8081}")
    parser.add_argument("--host", help="listen address (overrides HTTP_HOST)")
    parser.add_argument("--port", type=int, help="listen port (overrides http.port / HTTP_PORT)")
    args = parser.parse_args(argv)

    overrides = load_conf_file(args.conf) if args.conf else {}
    if args.host:
        overrides["HTTP_HOST"] = args.host
    if args.port is not None:
        overrides["HTTP_PORT"] = args.port

    app = create_app(overrides)
    try:
        serve(app)
    except StartupError as e:
        logger.error("Startup failed: %s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
