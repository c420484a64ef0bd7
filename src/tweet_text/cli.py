"""CLI entry-point for tweet-text."""

from __future__ import annotations

import argparse
import logging
import pathlib
import sys

import requests

from tweet_text.config import MAX_LENGTH, ParseConfig, load_config
from tweet_text.text import legacy_length
from tweet_text.validate import (
    is_valid_hashtag,
    is_valid_list,
    is_valid_url,
    is_valid_username,
    parse_tweet,
    validate_tweet,
)

logger = logging.getLogger(__name__)

_ENTITY_CHECKS = {
    "username": is_valid_username,
    "list": is_valid_list,
    "hashtag": is_valid_hashtag,
}


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Check tweet text, usernames, lists, hashtags and URLs.",
    )
    parser.add_argument("text", nargs="?", help="Text to check (inline)")
    parser.add_argument(
        "--from-file", type=pathlib.Path, help="Read the text from a file",
    )
    parser.add_argument(
        "--kind",
        choices=["tweet", *_ENTITY_CHECKS, "url"],
        default="tweet",
        help="What the text is expected to be (default: tweet)",
    )
    parser.add_argument(
        "--legacy",
        action="store_true",
        help=f"Use the unweighted {MAX_LENGTH}-character limit",
    )
    parser.add_argument(
        "--config",
        metavar="SOURCE",
        help="Parse config: v1, v2, a JSON file or an http(s) URL "
             "(default: $TWEET_TEXT_CONFIG or v2)",
    )
    parser.add_argument(
        "--no-protocol",
        action="store_true",
        help="Accept URLs without an http(s) scheme (--kind url)",
    )
    parser.add_argument(
        "--ascii-only",
        action="store_true",
        help="Reject non-ASCII host names (--kind url)",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging",
    )
    return parser.parse_args(argv)


def _read_text(args: argparse.Namespace) -> str:
    if args.text:
        return args.text
    if args.from_file:
        return args.from_file.read_text(encoding="utf-8").strip()
    print("Enter text to check (Ctrl+D to finish):", file=sys.stderr)
    return sys.stdin.read().strip()


def _load_config(source: str | None) -> ParseConfig:
    try:
        return load_config(source)
    except (OSError, ValueError, requests.RequestException) as exc:
        print(f"Could not load config {source!r}: {exc}", file=sys.stderr)
        sys.exit(1)


def _check_tweet(text: str, args: argparse.Namespace) -> None:
    if args.legacy:
        error = validate_tweet(text)
        if error is None:
            print(f"Length: {legacy_length(text)}/{MAX_LENGTH}")
    else:
        config = _load_config(args.config)
        result, error = parse_tweet(text, config=config)
        print(
            f"Weighted length: {result.weighted_length}/{config.max_weighted_length} "
            f"({result.permillage}‰)",
        )
    if error is not None:
        print(error.message, file=sys.stderr)
        sys.exit(1)
    print("Valid tweet.")


def main(argv: list[str] | None = None) -> None:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    text = _read_text(args)
    logger.debug("Checking %d characters as %s", len(text), args.kind)

    if args.kind == "tweet":
        _check_tweet(text, args)
        return

    if args.kind == "url":
        valid = is_valid_url(
            text,
            require_protocol=not args.no_protocol,
            allow_unicode=not args.ascii_only,
        )
    else:
        valid = _ENTITY_CHECKS[args.kind](text)

    if not valid:
        print(f"Invalid {args.kind}: {text}", file=sys.stderr)
        sys.exit(1)
    print(f"Valid {args.kind}.")
