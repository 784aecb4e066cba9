from __future__ import annotations

import argparse
import asyncio
import dataclasses
import json
import sys
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import structlog

from vidembed.domain.entities import ExtractorLink, SubtitleFile
from vidembed.infrastructure.config import AppConfig, load_config
from vidembed.infrastructure.logging.setup import configure_logging
from vidembed.plugins.vidembed import VidEmbedProvider

log = structlog.get_logger(__name__)


def _parse_args(argv: Iterable[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="vidembed",
        description="Query the VidEmbed provider the way a host application would.",
    )

    # Config wiring flags (no business logic)
    parser.add_argument("--config", default=None, help="Path to YAML config file.")
    parser.add_argument("--dotenv", default=None, help="Path to .env file.")
    parser.add_argument(
        "--main-url",
        default=None,
        help="Override the site base URL (e.g. a mirror).",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Override log level.",
    )
    parser.add_argument(
        "--log-format",
        default=None,
        choices=["json", "console"],
        help="Override log format.",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    p_search = sub.add_parser("search", help="Search the site.")
    p_search.add_argument("query")

    p_load = sub.add_parser("load", help="Load a detail page.")
    p_load.add_argument("url")

    sub.add_parser("home", help="Load the home page lists.")

    p_links = sub.add_parser("links", help="Resolve playable links for an episode.")
    p_links.add_argument("data", help="Episode URL (the 'data' field from load).")
    p_links.add_argument(
        "--casting",
        action="store_true",
        help="Request links suitable for casting.",
    )

    return parser.parse_args(argv)


def _to_jsonable(value: Any) -> Any:
    if value is None:
        return None
    if isinstance(value, list):
        return [_to_jsonable(v) for v in value]
    return {"kind": type(value).__name__, **dataclasses.asdict(value)}


async def _run(provider: VidEmbedProvider, args: argparse.Namespace) -> tuple[Any, int]:
    """Execute one command; returns (payload, exit code)."""
    try:
        if args.command == "search":
            return _to_jsonable(await provider.search(args.query)), 0

        if args.command == "load":
            response = await provider.load(args.url)
            return _to_jsonable(response), 0 if response is not None else 1

        if args.command == "home":
            return _to_jsonable(await provider.get_main_page()), 0

        links: list[ExtractorLink] = []
        subtitles: list[SubtitleFile] = []
        ok = await provider.load_links(
            args.data, args.casting, subtitles.append, links.append
        )
        payload = {
            "success": ok,
            "links": _to_jsonable(links),
            "subtitles": _to_jsonable(subtitles),
        }
        return payload, 0 if ok else 1
    finally:
        await provider.cleanup()


def start(argv: Iterable[str] | None = None) -> int:
    """
    Process entrypoint.

    Loads config exactly once, configures logging, runs one provider
    operation and prints its result as JSON on stdout.
    """
    if argv is None:
        argv = sys.argv[1:]

    args = _parse_args(argv)

    config: AppConfig = load_config(
        config_path=Path(args.config) if args.config else None,
        dotenv_path=Path(args.dotenv) if args.dotenv else None,
        cli_overrides={
            "main_url": args.main_url,
            "log_level": args.log_level,
            "log_format": args.log_format,
        },
    )
    configure_logging(config)
    log.debug("cli_command", command=args.command, main_url=config.main_url)

    provider = VidEmbedProvider(config)
    payload, exit_code = asyncio.run(_run(provider, args))

    json.dump(payload, sys.stdout, indent=2, ensure_ascii=False, default=str)
    sys.stdout.write("\n")
    return exit_code


def main() -> None:
    sys.exit(start())


if __name__ == "__main__":
    main()
