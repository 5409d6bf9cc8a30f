"""
cli.py

Ranks Python classes by structural size: declared and inherited fields and
methods, subtype paths and supertypes.

  typestats N                       scan the loaded standard-library modules
  typestats INPUT OUTPUT N          analyze the type names listed in INPUT

Exit codes: 0 success or nothing to report, 1 failed before a report was
built (unreadable input, negative N, corrupt hierarchy, bad config), 2 bad
arguments, 3 report built but could not be written.
"""

import argparse
import logging
import sys
from typing import Any

from .config import ConfigurationManager
from .console import ConsoleManager, setup_logging
from .errors import (
    ConfigError,
    CorruptHierarchyError,
    InvalidArgumentError,
    SinkWriteError,
    UsageError,
)
from .report import dump_yaml, print_lines
from .service import TypeStatsService

USAGE_FORMS = (
    "1 argument: typestats <value-of-N>\n"
    "3 arguments: typestats <input-file> <output-file> <value-of-N>"
)


class CliInterface:
    """
    Handles command-line arguments and application bootstrapping.
    """

    def __init__(self) -> None:
        self._parser = self._build_parser()

    def run(self, argv: list[str] | None = None) -> None:
        args = self._parser.parse_intermixed_args(argv)

        log_level = args.log_level or logging.INFO
        setup_logging(log_level)
        logger = ConsoleManager(level=log_level, no_color=args.no_color)

        try:
            input_path, output_path, limit = self._split_operands(args.operands)
        except UsageError as e:
            print(f"Invalid arguments: {e}. Usage:", file=sys.stderr)
            print(USAGE_FORMS, file=sys.stderr)
            sys.exit(2)

        try:
            config = self._build_config(args)
            service = TypeStatsService(
                app_config=config, logger=logger, input_path=input_path
            )
            report = service.run(limit)
        except (ConfigError, InvalidArgumentError, CorruptHierarchyError) as e:
            logger.critical(str(e))
            sys.exit(1)

        if report.source.read_error:
            sys.exit(1)

        if not report.has_results:
            logger.warning("No types found; nothing to report.")
        else:
            try:
                self._emit(service, report, args, config, output_path)
            except SinkWriteError as e:
                logger.error(str(e))
                sys.exit(3)

        if args.print_summary:
            logger.print_summary(report)

        sys.exit(0)

    def _emit(self, service, report, args, config, output_path) -> None:
        if args.stdout:
            if config.get("format") == "yaml" and report.document is not None:
                dump_yaml(report.document)
            else:
                print_lines(report.lines)
            return
        service.write_report(report, output_path or config["default_output"])

    def _split_operands(self, operands: list[str]) -> tuple[str | None, str | None, int]:
        if len(operands) == 1:
            input_path, output_path, raw_n = None, None, operands[0]
        elif len(operands) == 3:
            input_path, output_path, raw_n = operands
        else:
            raise UsageError(f"expected 1 or 3 arguments, got {len(operands)}")

        try:
            limit = int(raw_n)
        except ValueError:
            raise UsageError(f"N must be an integer, got {raw_n!r}") from None
        return input_path, output_path, limit

    def _build_config(self, args: argparse.Namespace) -> dict[str, Any]:
        overrides = {
            "module_prefixes": args.module_prefixes,
            "exclude": args.excludes,
            "include_private_modules": args.include_private_modules,
            "max_depth": args.max_depth,
            "format": args.format,
        }

        mgr = ConfigurationManager()
        return mgr.load_config(args.config, overrides)

    def _build_parser(self) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(
            prog="typestats",
            description="Python type hierarchy statistics.",
            epilog=USAGE_FORMS,
            formatter_class=argparse.RawTextHelpFormatter,
        )

        parser.add_argument(
            "operands", nargs="*", metavar="ARG", help="N, or INPUT OUTPUT N."
        )

        # Core
        parser.add_argument("--config", help="Path to JSONC config.")
        parser.add_argument(
            "-m",
            "--module-prefix",
            action="append",
            dest="module_prefixes",
            help="Scan modules under this prefix instead of the stdlib. Repeatable.",
        )
        parser.add_argument(
            "-e",
            "--exclude",
            action="append",
            dest="excludes",
            help="Gitignore-style pattern over module paths (a/b/c). Repeatable.",
        )
        parser.add_argument(
            "--include-private-modules", action="store_true", default=None
        )
        parser.add_argument("--max-depth", type=int)

        # Output
        parser.add_argument("--format", choices=["text", "yaml"])
        parser.add_argument("--stdout", action="store_true")

        # Log
        log_g = parser.add_mutually_exclusive_group()
        log_g.add_argument(
            "-v",
            "--verbose",
            action="store_const",
            dest="log_level",
            const=logging.DEBUG,
        )
        log_g.add_argument(
            "-q", "--quiet", action="store_const", dest="log_level", const=logging.ERROR
        )
        parser.add_argument("--no-color", action="store_true")
        parser.add_argument("--print-summary", action="store_true")

        return parser


def main(argv: list[str] | None = None) -> None:
    CliInterface().run(argv)


if __name__ == "__main__":
    main()
