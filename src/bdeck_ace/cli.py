"""CLI entry-point for bdeck-ace."""

from __future__ import annotations

import argparse
import logging
import sys

import yaml
from dotenv import load_dotenv
from pydantic import ValidationError

from bdeck_ace.ace import process_bdeck_files
from bdeck_ace.bdeck import BdeckFormatError
from bdeck_ace.report import format_report
from bdeck_ace.utils import list_files, load_config, load_config_file


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bdeck-ace",
        description="Compute Accumulated Cyclone Energy from bdeck best-track files.",
    )
    parser.add_argument("input_file", nargs="?", metavar="FILE", help="A single bdeck file")
    parser.add_argument(
        "-d",
        "--input-dir",
        metavar="DIR",
        help="Directory or pattern",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Alternative rules YAML (default: configs/ace.yaml or $BDECK_ACE_CONFIG).",
    )
    parser.add_argument("--debug", action="store_true", help="Verbose logging.")
    return parser


def main(argv: list[str] | None = None) -> None:
    load_dotenv()

    parser = _build_parser()
    args = parser.parse_args(argv)

    level = logging.DEBUG if args.debug else logging.INFO
    logging.basicConfig(format="%(asctime)s %(message)s", level=level)

    if args.input_file:
        file_list = [args.input_file]
    elif args.input_dir:
        try:
            file_list = list_files(args.input_dir)
        except NotADirectoryError as e:
            print(e)
            parser.print_help()
            return
    else:
        parser.print_help()
        return

    if not file_list:
        print("No files found!")
        return

    logging.debug("processing %d file(s)", len(file_list))

    try:
        config = load_config_file(args.config) if args.config else load_config()
        storms, yearly = process_bdeck_files(file_list, config)
    except (BdeckFormatError, OSError, yaml.YAMLError, ValidationError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    print(format_report(storms, yearly), end="")


if __name__ == "__main__":
    main()
