# Copyright 2026 ALF Contributors
# SPDX-License-Identifier: Apache-2.0

"""Entry point for the ALF command-line interface."""

import argparse
import logging
import sys
from pathlib import Path

import yaml

from alf.config.loader import CONFIG_FILE_NAME, ReaderConfig, ReaderConfigError, load_reader_config
from alf.parser.decoder import Decoder
from alf.parser.item import Token
from alf.parser.lexer import Lexer

# ###############
# Public Interface
# ###############


def main() -> None:
    """Run the ALF CLI."""
    parser = argparse.ArgumentParser(
        prog="alf",
        description="ALF - Aurora Lyrics Format reader",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    # decode subcommand
    decode_parser = subparsers.add_parser(
        "decode",
        help="Decode an .alf file and print the song record",
        description="Decode an ALF source file and print its attributes.",
    )
    decode_parser.add_argument("file", help="Path to the .alf file")
    decode_parser.add_argument(
        "--format",
        choices=("json", "yaml"),
        default="json",
        help="Output format (default: json)",
    )
    decode_parser.add_argument(
        "--config",
        default=None,
        help=f"Reader configuration file (default: {CONFIG_FILE_NAME} next to the file, if present)",
    )
    decode_parser.add_argument(
        "--strict",
        action="store_true",
        help="Reject structurally unexpected input",
    )

    # tokens subcommand
    tokens_parser = subparsers.add_parser(
        "tokens",
        help="Print the located tokens of an .alf file",
        description="Run the lexer over an ALF source file and print one item per line.",
    )
    tokens_parser.add_argument("file", help="Path to the .alf file")

    args = parser.parse_args()
    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    sys.exit(_dispatch(args))


# ################
# Implementation
# ################


def _dispatch(args: argparse.Namespace) -> int:
    """Dispatch to the appropriate subcommand handler."""
    if args.command == "decode":
        return _cmd_decode(args)
    if args.command == "tokens":
        return _cmd_tokens(args)
    return 0


def _cmd_decode(args: argparse.Namespace) -> int:
    """Handle the decode subcommand."""
    path = Path(args.file)

    try:
        config = _load_config(path, args.config)
    except ReaderConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    strict = config.strict or args.strict

    try:
        with path.open("rb") as source:
            alf, error = Decoder(source, strict=strict, chunk_size=config.chunk_size).decode()
    except OSError as exc:
        print(f"Error: cannot read '{path}': {exc}", file=sys.stderr)
        return 1

    if error is not None:
        print(f"Error: {path}: {error}", file=sys.stderr)
        return 1

    if args.format == "yaml":
        print(yaml.safe_dump(alf.model_dump(by_alias=True), sort_keys=False, allow_unicode=True), end="")
    else:
        print(alf.model_dump_json(by_alias=True, indent=2))
    return 0


def _cmd_tokens(args: argparse.Namespace) -> int:
    """Handle the tokens subcommand."""
    path = Path(args.file)

    try:
        with path.open("rb") as source, Lexer(source) as lexer:
            for item in lexer.items():
                print(item)
                if item.token is Token.ERROR:
                    print(f"Error: {path}: {lexer.error()}", file=sys.stderr)
                    return 1
    except OSError as exc:
        print(f"Error: cannot read '{path}': {exc}", file=sys.stderr)
        return 1
    return 0


def _load_config(path: Path, explicit: str | None) -> ReaderConfig:
    """Load the explicit config file, or the one beside *path* when present."""
    if explicit is not None:
        return load_reader_config(Path(explicit))
    candidate = path.parent / CONFIG_FILE_NAME
    if candidate.exists():
        return load_reader_config(candidate)
    return ReaderConfig()
