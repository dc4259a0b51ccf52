"""CLI entry point for prowlstream.

Two subcommands:

  - ``serve``  — run the HTTP API with uvicorn
  - ``search`` — run one Prowlarr search and print the streams as JSON
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path

from prowlstream.adapters.base.exceptions import ConfigurationError
from prowlstream.config.settings import Settings
from prowlstream.models.options import ProwlarrOptions
from prowlstream.models.stream import StreamCollection, StreamRequest
from prowlstream.models.user import UserConfig


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for all subcommands."""
    parser = argparse.ArgumentParser(
        prog="prowlstream",
        description="prowlstream — Prowlarr search results as normalized streams",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=str,
        default=None,
        help="Path to YAML configuration file",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["debug", "info", "warning", "error"],
        default=None,
        help="Log level (overrides config)",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"prowlstream {_get_version()}",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    serve = subparsers.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", type=str, default=None, help="Server bind address (overrides config)")
    serve.add_argument("--port", "-p", type=int, default=None, help="Server port (overrides config)")
    serve.add_argument("--workers", "-w", type=int, default=None, help="Number of worker processes")
    serve.add_argument("--reload", action="store_true", help="Enable auto-reload for development")

    search = subparsers.add_parser("search", help="Search Prowlarr once and print streams as JSON")
    search.add_argument("id", type=str, help="Search term, e.g. an IMDb id")
    search.add_argument("--type", choices=["movie", "series"], default="movie", help="Media type")
    search.add_argument("--url", type=str, default=None, help="Prowlarr base URL (overrides config)")
    search.add_argument("--api-key", type=str, default=None, help="Prowlarr API key (overrides config)")
    search.add_argument("--timeout", type=str, default=None, help="Request timeout in milliseconds")
    search.add_argument("--ip", type=str, default=None, help="Client IP to forward to Prowlarr")

    return parser


def load_settings(config: str | None) -> Settings:
    """Load settings from *config* (YAML) or the environment."""
    if config:
        config_path = Path(config)
        if not config_path.exists():
            print(f"Error: Config file not found: {config_path}", file=sys.stderr)
            sys.exit(1)
        return Settings.from_yaml(config_path)
    return Settings()


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    settings = load_settings(args.config)
    if args.log_level:
        settings.observability.log_level = args.log_level

    from prowlstream.observability.logging import setup_logging

    # search writes JSON to stdout, so its logs go to stderr
    setup_logging(settings.observability, stream=sys.stderr if args.command == "search" else None)

    if args.command == "serve":
        _serve(args, settings)
    else:
        sys.exit(_search(args, settings))


def _serve(args: argparse.Namespace, settings: Settings) -> None:
    if args.host:
        settings.server.host = args.host
    if args.port:
        settings.server.port = args.port
    if args.workers:
        settings.server.workers = args.workers

    import uvicorn

    from prowlstream.api.app import create_app

    if args.reload or settings.server.workers > 1:
        # uvicorn needs an import string here; settings come from the environment
        uvicorn.run(
            "prowlstream.api.app:create_app",
            factory=True,
            host=settings.server.host,
            port=settings.server.port,
            workers=settings.server.workers if not args.reload else 1,
            reload=args.reload,
            log_level=settings.observability.log_level.lower(),
        )
        return

    uvicorn.run(
        create_app(settings),
        host=settings.server.host,
        port=settings.server.port,
        log_level=settings.observability.log_level.lower(),
    )


def _search(args: argparse.Namespace, settings: Settings) -> int:
    """Run one search. Returns the process exit code."""
    from prowlstream.core.service import StreamService

    defaults = settings.prowlarr
    options = ProwlarrOptions(
        prowlarr_url=args.url or defaults.url,
        api_key=args.api_key or defaults.api_key,
        override_name=defaults.name,
        indexer_timeout=args.timeout or str(defaults.default_timeout_ms),
    )
    request = StreamRequest(type=args.type, id=args.id)

    async def run() -> StreamCollection:
        service = StreamService(settings)
        await service.initialize()
        try:
            return await service.search(request, UserConfig(requesting_ip=args.ip), options)
        finally:
            await service.shutdown()

    try:
        collection = asyncio.run(run())
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    print(json.dumps(collection.model_dump(by_alias=True, exclude_none=True), indent=2, ensure_ascii=False))
    return 1 if collection.addon_errors else 0


def _get_version() -> str:
    """Get the package version."""
    try:
        from prowlstream import __version__

        return __version__
    except ImportError:
        return "unknown"


if __name__ == "__main__":
    main()
