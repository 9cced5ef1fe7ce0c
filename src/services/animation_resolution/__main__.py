"""
Animation Resolution Service - CLI Entry Point

Usage:
    python -m src.services.animation_resolution [options]

Examples:
    # Start HTTP server (default port 3000)
    python -m src.services.animation_resolution

    # Start with custom config
    python -m src.services.animation_resolution --host 127.0.0.1 --port 8090 --timeout 5
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from src.common.logging import configure_sanitized_logging

from .config import AnimationServiceConfig


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Animation Resolution Service",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    # HTTP options
    parser.add_argument(
        "--host",
        default=None,
        help="Host to bind (default: from config or 0.0.0.0)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to bind (default: from config or 3000)",
    )

    # Upstream options
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Timeout in seconds for each outbound request (default: 10)",
    )
    parser.add_argument(
        "--no-credential-header",
        action="store_true",
        help="Ignore per-request credential headers",
    )

    # Logging
    parser.add_argument(
        "--log-level",
        choices=["debug", "info", "warning", "error"],
        default="info",
        help="Log level (default: info)",
    )

    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> AnimationServiceConfig:
    """Build configuration from args and environment."""
    overrides = {}

    if args.host:
        overrides["host"] = args.host
    if args.port is not None:
        overrides["port"] = args.port
    if args.timeout is not None:
        overrides["timeout_seconds"] = args.timeout
    if args.no_credential_header:
        overrides["accept_credential_header"] = False
    if args.log_level:
        overrides["log_level"] = args.log_level.upper()

    return AnimationServiceConfig(**overrides)


async def run_http(config: AnimationServiceConfig) -> None:
    """Run HTTP server."""
    from .transports.http import run_http_server

    await run_http_server(config)


def main() -> None:
    """Main entry point."""
    args = parse_args()
    configure_sanitized_logging(level=args.log_level)

    config = build_config(args)
    logger = logging.getLogger(__name__)

    logger.info("Starting Animation Resolution Service (http transport)")

    try:
        asyncio.run(run_http(config))
    except KeyboardInterrupt:
        logger.info("Shutting down...")
    except Exception as e:
        logger.exception(f"Fatal error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
