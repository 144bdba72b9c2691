"""exprcalc Web Server entry point."""

import argparse
import sys

import uvicorn

from exprcalc.config import get_settings
from exprcalc.exceptions import ConfigurationError
from exprcalc.logger import Logger, session_logger
from exprcalc.web_server.web_server import ExprCalcWebServer

logger: Logger = session_logger


def parse_args(argv=None) -> argparse.Namespace:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="exprcalc Web Server - expression evaluation REST API")
    parser.add_argument(
        "--host",
        type=str,
        default=settings.server.host,
        help="Host address to bind to (default: 0.0.0.0, or EXPRCALC_HOST env var)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=settings.server.web_port,
        help="Port number to listen on (default: 8022, or EXPRCALC_WEB_PORT env var)",
    )
    return parser.parse_args(argv)


if __name__ == "__main__":
    try:
        args = parse_args()
    except ConfigurationError as e:
        logger.error("FATAL: Invalid configuration", error=str(e))
        sys.exit(1)

    server = ExprCalcWebServer(host=args.host, port=args.port)

    try:
        logger.info("=" * 70)
        logger.info("STARTING EXPRCALC WEB SERVER")
        logger.info("=" * 70)
        logger.info("Configuration", host=args.host, port=args.port)
        logger.info(f"Evaluate: POST http://{args.host}:{args.port}/evaluate")
        logger.info(f"Health check: http://{args.host}:{args.port}/health")
        logger.info("=" * 70)
        uvicorn.run(server.app, host=args.host, port=args.port, log_level="info")
        logger.info("Web server shutdown complete")
    except KeyboardInterrupt:
        logger.info("Web server stopped by user")
        sys.exit(0)
    except Exception as e:
        logger.error("Failed to start web server", error=str(e), error_type=type(e).__name__)
        sys.exit(1)
