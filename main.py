"""Command line entry point: parse an API grammar directory and summarize it."""

import argparse
import logging
import sys
from pathlib import Path

from apidoc.api_parser import parse_api
from apidoc.errors import ApiParseError
from apidoc.load_config import config_fingerprint, load_config

logger = logging.getLogger("apidoc")


def build_arg_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        description="Parse an API markdown grammar into a documentation model."
    )
    parser.add_argument(
        "api_dir",
        type=Path,
        help="Directory containing the API *.md grammar files",
    )
    parser.add_argument(
        "--params",
        type=Path,
        help="Template params file (default: params.md inside api_dir)",
    )
    parser.add_argument(
        "--config",
        help="Path to configuration file",
    )
    parser.add_argument(
        "--lang",
        help="Restrict the model to one target language before summarizing",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log every parsed entity",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the parser and print a one-line summary of the model."""
    args = build_arg_parser().parse_args(argv)
    config = load_config(args.config)
    level = "DEBUG" if args.verbose else config["logging"]["level"]
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    try:
        documentation = parse_api(args.api_dir, args.params, config)
    except ApiParseError as e:
        logger.error("%s", e)
        return 1

    if args.lang:
        documentation = documentation.filter_for_language(args.lang)

    members = sum(len(c.members) for c in documentation.classes_array)
    scope = f" for {args.lang}" if args.lang else ""
    print(
        f"Parsed {len(documentation.classes_array)} classes and {members} members"
        f"{scope} (config {config_fingerprint(config)})"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
