"""Command-line interface for the city infos service."""

import argparse
import logging
import sys

from city_infos import __version__


def configure_logging(level: str) -> None:
    """Configure root logging for the service."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    # httpx logs full request URLs, which carry the API key.
    logging.getLogger("httpx").setLevel(logging.WARNING)


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="City Infos - city insights, weather predictions and recipes"
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the HTTP server")
    serve_parser.add_argument(
        "--host",
        default=None,
        help="Interface to bind (default: from HOST / RENDER_EXTERNAL_URL)",
    )
    serve_parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to listen on (default: from PORT)",
    )
    serve_parser.add_argument(
        "--reload",
        action="store_true",
        help="Reload on code changes (development only)",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    import uvicorn

    from city_infos.config import get_settings

    settings = get_settings()
    configure_logging(settings.log_level)

    host = args.host or settings.bind_host
    port = args.port or settings.port
    logging.getLogger(__name__).info(f"Listening on {host}:{port}")

    uvicorn.run(
        "city_infos.api:create_app",
        factory=True,
        host=host,
        port=port,
        reload=args.reload,
        log_level=settings.log_level.lower(),
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
