import argparse
import asyncio
import sys

from exprcalc.config import get_settings
from exprcalc.exceptions import ConfigurationError
from exprcalc.logger import Logger, session_logger

logger: Logger = session_logger


def parse_args(argv=None) -> argparse.Namespace:
    settings = get_settings()
    parser = argparse.ArgumentParser(
        description="exprcalc MCP Server - expression evaluation via Model Context Protocol"
    )
    parser.add_argument(
        "--host",
        type=str,
        default=settings.server.host,
        help="Host address to bind to (default: 0.0.0.0, or EXPRCALC_HOST env var)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=settings.server.mcp_port,
        help="Port number to listen on (default: 8020, or EXPRCALC_MCP_PORT env var)",
    )
    return parser.parse_args(argv)


if __name__ == "__main__":
    try:
        args = parse_args()
    except ConfigurationError as e:
        logger.error("FATAL: Invalid configuration", error=str(e))
        sys.exit(1)

    from exprcalc.mcp_server.mcp_server import main

    try:
        logger.info("=" * 70)
        logger.info("STARTING EXPRCALC MCP SERVER")
        logger.info("=" * 70)
        logger.info(
            "Configuration",
            host=args.host,
            port=args.port,
            transport="HTTP Streamable",
        )
        logger.info(f"MCP endpoint: http://{args.host}:{args.port}/mcp")
        logger.info("=" * 70)
        asyncio.run(main(host=args.host, port=args.port))
        logger.info("MCP server shutdown complete")
    except KeyboardInterrupt:
        logger.info("Shutdown complete")
        sys.exit(0)
    except Exception as e:
        logger.error("Failed to start server", error=str(e), error_type=type(e).__name__)
        sys.exit(1)
