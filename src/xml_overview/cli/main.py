"""Main CLI entry point for the xml-overview command-line tool."""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from xml_overview import __version__
from xml_overview.api import XMLOverview
from xml_overview.shared import ConfigError, OverviewConfig, OverviewError, get_logger

logger = get_logger(__name__, None, "cli")


def create_argument_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog="xml-overview",
        description="Generates an overview of an XML file.",
    )

    parser.add_argument("--version", action="version", version=__version__)
    parser.add_argument(
        "--file", "-f",
        type=Path,
        required=True,
        help="The XML file to be converted",
    )
    parser.add_argument(
        "--depth", "-d",
        type=int,
        help="Maximum depth of the XML tree to show; omit to show the whole structure",
    )
    parser.add_argument(
        "--output", "-o",
        type=Path,
        help="File to write the overview to (default: stdout)",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Keep comments and note how many elements were omitted at each position",
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        help="JSON configuration file",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail when a closing tag does not match the open element",
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Only log errors",
    )

    return parser


def load_config(args: argparse.Namespace) -> OverviewConfig:
    """Build the pipeline configuration from a config file and CLI overrides.

    Raises:
        ConfigError: If the config file is unreadable or invalid
    """
    config = OverviewConfig()
    if args.config:
        try:
            config = OverviewConfig.from_json(args.config.read_text())
        except OSError as e:
            raise ConfigError(f"Could not read config file {args.config}: {e}") from e

    overrides = {}
    if args.verbose:
        overrides["verbose"] = True
    if args.depth is not None:
        overrides["max_depth"] = args.depth
    if args.strict:
        overrides["validate_closing_names"] = True

    return config.override(**overrides) if overrides else config


def configure_logging(args: argparse.Namespace, config: OverviewConfig) -> None:
    """Set up root logging from --quiet and the configured logging level."""
    if args.quiet:
        level = logging.ERROR
    else:
        level = getattr(logging, config.logging_level)
    logging.basicConfig(level=level, stream=sys.stderr)


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(args)
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    configure_logging(args, config)

    try:
        result = XMLOverview(config).convert_file(args.file)
    except OSError as e:
        print(f"Could not read {args.file}: {e}", file=sys.stderr)
        return 1
    except OverviewError as e:
        print(f"Failed to convert {args.file}: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nOperation interrupted by user", file=sys.stderr)
        return 130

    if args.output:
        try:
            args.output.write_text(result.text)
        except OSError as e:
            print(f"Error writing output: {e}", file=sys.stderr)
            return 1
        logger.info("Overview written", extra={"output": str(args.output)})
    else:
        sys.stdout.write(result.text)
        if not result.text.endswith("\n"):
            sys.stdout.write("\n")

    return 0


if __name__ == "__main__":
    sys.exit(main())
