"""Main CLI entry point for the piwis-zdc command-line tool.

Provides the ``dump`` and ``diff`` commands over session directories.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from piwis_zdc import __version__
from piwis_zdc.api.loader import load_session
from piwis_zdc.model.session import ZdcSession
from piwis_zdc.shared.config import ConfigError, LoaderConfig
from piwis_zdc.shared.errors import ZdcError
from piwis_zdc.shared.logging import get_logger
from piwis_zdc.tools.diff import diff_frame, diff_sessions, format_diff
from piwis_zdc.tools.dump import dump

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_DIFFERENCES = 2
EXIT_INTERRUPTED = 130


class CLIConfig:
    """Configuration management for CLI operations."""

    def __init__(self, loader_config: Optional[LoaderConfig] = None):
        self.loader_config = loader_config or LoaderConfig()
        self.verbose = False
        self.quiet = False

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "CLIConfig":
        """Build configuration from a JSON file and command-line overrides.

        Raises:
            ConfigError: If the configuration file is unreadable or invalid
        """
        loader_config = LoaderConfig()
        if args.config:
            try:
                loader_config = LoaderConfig.from_json(args.config.read_text())
            except OSError as e:
                raise ConfigError(f"Could not read config file: {e}") from e

        if args.allow_multiple:
            loader_config = loader_config.override(allow_multiple_matches=True)

        config = cls(loader_config)
        config.verbose = args.verbose
        config.quiet = args.quiet
        return config


class SessionLoader:
    """Loads session directories and reports the chosen export."""

    def __init__(self, config: CLIConfig):
        self.config = config
        self.logger = get_logger(__name__, None, "cli_loader")

    def _report_match(self, path: Path) -> None:
        if not self.config.quiet:
            print(f"Filename: {path.name}", file=sys.stderr)

    def load(self, directory: Path) -> ZdcSession:
        return load_session(directory, self.config.loader_config, self._report_match)


def create_argument_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog="piwis-zdc",
        description="Inspect and compare ZDC diagnostic session exports"
    )

    parser.add_argument("--version", action="version", version=__version__)

    # Global options
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output"
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Quiet output"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        help="Loader configuration file (JSON)"
    )
    parser.add_argument(
        "--allow-multiple",
        action="store_true",
        help="Use the first export when a directory holds several"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Dump command
    dump_parser = subparsers.add_parser("dump", help="Print every value of a session")
    dump_parser.add_argument(
        "dir",
        type=Path,
        help="Session directory"
    )

    # Diff command
    diff_parser = subparsers.add_parser("diff", help="Compare the values of two sessions")
    diff_parser.add_argument(
        "left",
        type=Path,
        help="Session directory to compare from"
    )
    diff_parser.add_argument(
        "right",
        type=Path,
        help="Session directory to compare to"
    )
    diff_parser.add_argument(
        "--format", "-f",
        choices=["text", "json", "csv"],
        default="text",
        help="Output format (default: text)"
    )

    return parser


def cmd_dump(args: argparse.Namespace, config: CLIConfig) -> int:
    """Handle dump command."""
    session = SessionLoader(config).load(args.dir)
    dump(session)
    return EXIT_OK


def cmd_diff(args: argparse.Namespace, config: CLIConfig) -> int:
    """Handle diff command.

    Exits with EXIT_DIFFERENCES when the sessions differ, like diff(1).
    """
    loader = SessionLoader(config)
    entries = diff_sessions(loader.load(args.left), loader.load(args.right))

    if args.format == "json":
        print(diff_frame(entries).to_json(orient="records", indent=2))
    elif args.format == "csv":
        print(diff_frame(entries).to_csv(index=False), end="")
    else:
        for line in format_diff(entries):
            print(line)

    return EXIT_DIFFERENCES if entries else EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return EXIT_FAILURE

    # Set up logging verbosity
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)
    elif args.quiet:
        logging.basicConfig(level=logging.ERROR)

    # Route to appropriate command handler
    try:
        config = CLIConfig.from_args(args)
        if args.command == "dump":
            return cmd_dump(args, config)
        if args.command == "diff":
            return cmd_diff(args, config)
        print(f"Unknown command: {args.command}", file=sys.stderr)
        return EXIT_FAILURE

    except (ConfigError, ZdcError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_FAILURE

    except KeyboardInterrupt:
        print("\nOperation interrupted by user", file=sys.stderr)
        return EXIT_INTERRUPTED


if __name__ == "__main__":
    sys.exit(main())
