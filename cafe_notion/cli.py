"""Command-line entry point for extracting cafe posts and saving them to Notion."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
import time
from pathlib import Path
from typing import Any, Dict, Iterable, Sequence

from dotenv import load_dotenv

from .config import ExtractConfig
from .models import ExtractedPost
from .service import handle_extract, handle_extract_and_save, handle_save
from .session import LOGIN_URL, save_storage_state

logger = logging.getLogger("cafe_notion.cli")


def _ensure_command_prefix(argv: Sequence[str], commands: Iterable[str]) -> Sequence[str]:
    if not argv:
        return argv
    first = argv[0]
    if first in commands or first.startswith("-"):
        return argv
    return ("extract", *argv)


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--storage-state",
        type=Path,
        default=None,
        help="Saved session file (default: $CAFE_STORAGE_STATE or storage/naver-state.json)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )


def _add_browser_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--timeout",
        type=float,
        default=30.0,
        help="Navigation timeout in seconds",
    )
    parser.add_argument(
        "--headed",
        action="store_true",
        help="Show the browser window while extracting",
    )


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Extract a cafe post with Playwright and publish it to a Notion database.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    login_parser = subparsers.add_parser(
        "login", help="Sign in interactively and save the browser session"
    )
    login_parser.add_argument(
        "--login-url", default=LOGIN_URL, help="Page to open for signing in"
    )
    _add_common_arguments(login_parser)

    extract_parser = subparsers.add_parser(
        "extract", help="Extract a post and print it as JSON"
    )
    extract_parser.add_argument("url", help="Desktop URL of the post")
    _add_common_arguments(extract_parser)
    _add_browser_arguments(extract_parser)

    save_parser = subparsers.add_parser(
        "save", help="Extract a post (or read one from JSON) and save it to Notion"
    )
    source = save_parser.add_mutually_exclusive_group(required=True)
    source.add_argument("url", nargs="?", help="Desktop URL of the post")
    source.add_argument(
        "--post",
        type=Path,
        help="JSON file holding {title, contentText, url, dateText, imageUrls}",
    )
    save_parser.add_argument(
        "--no-images",
        action="store_true",
        help="Link images externally instead of re-uploading them",
    )
    _add_common_arguments(save_parser)
    _add_browser_arguments(save_parser)

    argv = list(sys.argv[1:] if argv is None else argv)
    argv = list(_ensure_command_prefix(argv, subparsers.choices.keys()))
    return parser.parse_args(argv)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
        force=True,
    )


def _build_config(args: argparse.Namespace) -> ExtractConfig:
    config = ExtractConfig.from_env(args.storage_state)
    if hasattr(args, "timeout"):
        config.navigation_timeout = args.timeout
        config.headless = not args.headed
    return config


def _emit(result: Dict[str, Any]) -> int:
    body = {key: value for key, value in result.items() if key != "status"}
    sys.stdout.write(json.dumps(body, ensure_ascii=False, indent=2) + "\n")
    sys.stdout.flush()
    return 0 if result.get("ok") else 1


def _run_login(args: argparse.Namespace) -> int:
    config = ExtractConfig.from_env(args.storage_state)
    asyncio.run(save_storage_state(config.storage_state, args.login_url))
    return 0


def _run_extract(args: argparse.Namespace) -> int:
    config = _build_config(args)
    start = time.perf_counter()
    result = asyncio.run(handle_extract(args.url, config))
    logger.info("Finished in %.2fs", time.perf_counter() - start)
    return _emit(result)


def _run_save(args: argparse.Namespace) -> int:
    config = _build_config(args)
    with_images = not args.no_images
    start = time.perf_counter()
    if args.post:
        data = json.loads(args.post.read_text(encoding="utf-8"))
        post = ExtractedPost.from_dict(data)
        result = asyncio.run(handle_save(post, config, with_images=with_images))
    else:
        result = asyncio.run(
            handle_extract_and_save(args.url, config, with_images=with_images)
        )
    logger.info("Finished in %.2fs", time.perf_counter() - start)
    return _emit(result)


def main(argv: Sequence[str] | None = None) -> int:
    load_dotenv()
    args = parse_args(argv)
    _configure_logging(args.verbose)
    if args.command == "login":
        return _run_login(args)
    if args.command == "extract":
        return _run_extract(args)
    return _run_save(args)


if __name__ == "__main__":
    sys.exit(main())
