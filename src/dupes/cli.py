#!/usr/bin/env python3
"""
dupes CLI — finds byte-identical files under a directory and asks, group by
group, which copy to keep.

Nothing is deleted until the whole tree has been scanned. Every scan and
deletion error is collected and printed once, after the last group.
"""
from __future__ import annotations  # Enable postponed evaluation of annotations (PEP 563)
import argparse
import os
import sys
import time
import logging
from typing import Callable, List, Optional, NoReturn

LOG_FORMAT = "%(levelname)-8s | %(name)-25s | %(message)s"

logging.basicConfig(
    level=logging.ERROR,
    format=LOG_FORMAT
)

from dupes import __version__
from dupes.core.models import (
    ConfigError, DuplicateGroup, ResolutionStatus, ScanParams, ScanResult, ScanRootError,
)
from dupes.core.resolver import parse_decision
from dupes.commands import DuplicateScanCommand, build_resolver
from dupes.config import DupesConfig, load_config
from dupes.utils.convert_utils import ConvertUtils
from dupes.aliases import ALGORITHM_CHOICES, ALGORITHM_HELP_TEXT, EPILOG_TEXT, PROMPT_TEXT


class CLIApplication:
    """Main CLI application controller."""

    def __init__(self, input_func: Callable[[str], str] = input):
        self.start_time: float = time.time()
        self.verbose: bool = False
        self.quiet: bool = False
        self.input_func = input_func
        self.errors: List[str] = []

    @staticmethod
    def build_parser(config: DupesConfig) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(
            prog="dupes",
            description="Recursively searches for duplicate files in a directory tree",
            formatter_class=argparse.RawTextHelpFormatter,
            epilog=EPILOG_TEXT
        )

        parser.add_argument(
            "--dir", "-d",
            required=True,
            type=str,
            help="Top level directory to scan"
        )

        # Filtering options
        parser.add_argument(
            "--ignore-dotfiles",
            action=argparse.BooleanOptionalAction,
            default=config.ignore_dotfiles,
            help="Skip files whose name starts with '.'"
        )
        parser.add_argument(
            "--max-size", "-M",
            default=str(config.max_size),
            type=str,
            metavar='',
            help="Only files strictly smaller than this are compared (e.g., 500MB, 2GB). "
                 "Default: 500MB"
        )
        parser.add_argument(
            "--algorithm",
            choices=ALGORITHM_CHOICES,
            default=config.algorithm,
            type=str,
            help=ALGORITHM_HELP_TEXT
        )

        # Actions
        parser.add_argument(
            "--find-only",
            action=argparse.BooleanOptionalAction,
            default=config.find_only,
            help="List duplicates without prompting for deletion"
        )
        parser.add_argument(
            "--trash",
            action=argparse.BooleanOptionalAction,
            default=config.trash,
            help="Move removed copies to the system trash instead of deleting them"
        )
        parser.add_argument(
            "--stop-on-error",
            action=argparse.BooleanOptionalAction,
            default=config.stop_on_error,
            help="Stop removing files from a group after the first failed removal"
        )

        # Output options
        parser.add_argument(
            "--config",
            type=str,
            metavar='',
            help="Config file (default: ~/.dupes.toml)"
        )
        parser.add_argument(
            "--quiet", "-q",
            action="store_true",
            help="Suppress non-essential output"
        )
        parser.add_argument(
            "--verbose", "-v",
            action="store_true",
            help="Show progress and a scan summary"
        )
        parser.add_argument(
            "--version",
            action="version",
            version=f"%(prog)s {__version__}"
        )
        return parser

    def parse_args(self, args: Optional[List[str]] = None) -> argparse.Namespace:
        """
        Parse arguments in two passes: --config first, so the file can supply
        defaults for every other option.
        """
        pre = argparse.ArgumentParser(add_help=False)
        pre.add_argument("--config", type=str)
        known, _ = pre.parse_known_args(args)

        try:
            config = load_config(known.config)
        except ConfigError as e:
            self.error_exit(str(e))

        return self.build_parser(config).parse_args(args)

    def validate_args(self, args: argparse.Namespace) -> None:
        """Validate command-line arguments before execution."""
        if not os.path.exists(args.dir):
            self.error_exit(f"No such directory [{args.dir}]")
        if not os.path.isdir(args.dir):
            self.error_exit(f"Not a directory [{args.dir}]")

        try:
            max_size = ConvertUtils.human_to_bytes(args.max_size)
        except ValueError as e:
            self.error_exit(f"Invalid size format: {e}")
        if max_size <= 0:
            self.error_exit("Maximum size must be positive")

        # Prompts need a terminal unless the caller supplies its own input
        if not args.find_only and self.input_func is input and not sys.stdin.isatty():
            self.error_exit(
                "Cannot prompt for decisions in a non-interactive session.\n"
                "Use --find-only to list duplicates without deleting anything."
            )

    def create_params(self, args: argparse.Namespace) -> ScanParams:
        """Create ScanParams from CLI arguments."""
        try:
            return ScanParams(
                root_dir=args.dir,
                ignore_dotfiles=args.ignore_dotfiles,
                max_size_bytes=ConvertUtils.human_to_bytes(args.max_size),
                algorithm=args.algorithm,
                find_only=args.find_only,
                use_trash=args.trash,
                stop_on_error=args.stop_on_error,
            )
        except ValueError as e:
            self.error_exit(f"Parameter error: {e}")

    def progress_callback(self, stage: str, current: int, total: Optional[int]) -> None:
        """CLI progress callback - shows progress in console."""
        if total and total > 0:
            percent = (current / total) * 100
            sys.stderr.write(
                f"\r  [{stage}] {current}/{total} ({percent:.1f}%)"
            )
        else:
            sys.stderr.write(f"\r  [{stage}] {current} files processed...")
        sys.stderr.flush()

    def run_scan(self, params: ScanParams) -> ScanResult:
        """Execute the scan and fold its errors into the run's error list."""
        command = DuplicateScanCommand()
        try:
            result = command.execute(
                params,
                progress_callback=self.progress_callback if self.verbose else None,
            )
        except ScanRootError as e:
            self.error_exit(str(e))
        except ValueError as e:
            self.error_exit(f"Parameter error: {e}")

        if self.verbose:
            sys.stderr.write("\n")

        self.errors.extend(str(e) for e in result.errors)
        return result

    @staticmethod
    def reclaimable_bytes(groups: List[DuplicateGroup]) -> int:
        """Bytes freed if one file per group were kept."""
        total = 0
        for group in groups:
            try:
                total += os.path.getsize(group.paths[0]) * (len(group.paths) - 1)
            except OSError:
                continue
        return total

    def print_summary(self, result: ScanResult) -> None:
        groups = result.duplicates()
        dup_files = sum(len(g.paths) for g in groups)
        print(f"Files hashed: {result.files_hashed}")
        print(f"Duplicate groups: {len(groups)} ({dup_files} files)")
        print(f"Reclaimable space: {ConvertUtils.bytes_to_human(self.reclaimable_bytes(groups))}")

    def resolve_groups(self, result: ScanResult, params: ScanParams) -> None:
        """Show every duplicate group and, unless find-only, apply one decision per group."""
        groups = result.duplicates()
        if not groups:
            if not self.quiet:
                print("No duplicate files found.")
            return

        resolver = None if params.find_only else build_resolver(params)

        for group in groups:
            print(f"\nDupes found for {group.paths[0]}")
            for line in group.index():
                print(f"\t {line}")

            if resolver is None:
                continue

            try:
                answer = self.input_func(PROMPT_TEXT)
            except EOFError:
                print("\nNo more input. Remaining groups left untouched.")
                return

            outcome = resolver.resolve(group, parse_decision(answer))

            if outcome.status == ResolutionStatus.DECLINED:
                print("No action taken. Continuing.")
            elif outcome.status == ResolutionStatus.INVALID_INDEX:
                print(f"Error: {outcome.message}. No action taken.")
                self.errors.append(outcome.message)
            elif outcome.status == ResolutionStatus.DELETION_FAILED:
                for err in outcome.errors:
                    print(f"Error: {err}")
                self.errors.extend(str(err) for err in outcome.errors)
            elif not self.quiet:
                print(f"Kept [{outcome.kept_index}] {group.paths[outcome.kept_index]}, "
                      f"removed {len(outcome.removed)} file(s).")

    def report_errors(self) -> None:
        if not self.errors:
            return
        print("\nThe following errors occurred during the run:")
        for err in self.errors:
            print(err)

    @staticmethod
    def error_exit(message: str, code: int = 1) -> NoReturn:
        """Print error and exit."""
        print(message, file=sys.stderr)
        sys.exit(code)

    def run(self, argv: Optional[List[str]] = None) -> None:
        """Main entry point: scan everything, then resolve group by group."""
        args = self.parse_args(argv)
        self.verbose = args.verbose
        self.quiet = args.quiet
        if self.verbose:
            logging.getLogger().setLevel(logging.INFO)
        if os.environ.get("DEBUG"):
            logging.getLogger().setLevel(logging.DEBUG)

        self.validate_args(args)
        params = self.create_params(args)

        if not self.quiet:
            print("Preparing. This may take some time.")

        result = self.run_scan(params)
        if self.verbose:
            self.print_summary(result)

        self.resolve_groups(result, params)
        self.report_errors()

        if self.verbose:
            elapsed = time.time() - self.start_time
            print(f"\nCompleted in {elapsed:.2f} seconds")


def main() -> None:
    """Application entry point."""
    app = CLIApplication()
    try:
        app.run()
    except KeyboardInterrupt:
        print("\n⚠️  Operation cancelled by user (Ctrl+C)")
        sys.exit(130)
    except Exception as e:
        if os.environ.get("DEBUG"):
            raise
        print(f"❌ Unexpected error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
