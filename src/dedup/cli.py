#!/usr/bin/env python3
"""
dedup CLI — Command line interface for duplicate file removal.
Scans one or more paths, keeps one copy of every set of byte-identical files
and removes the rest (to the system trash unless --permanent is given).
"""
from __future__ import annotations  # Enable postponed evaluation of annotations (PEP 563)
import argparse
import logging
import os
import signal
import sys
import time
from typing import List, NoReturn, Optional

logging.basicConfig(
    level=logging.ERROR,
    format="%(levelname)-8s | %(name)-25s | %(message)s"
)

# === EARLY DEPENDENCY VALIDATION ===
_MISSING_DEPS = []
try:
    from send2trash import send2trash
except ImportError:
    _MISSING_DEPS.append("send2trash")

try:
    import xxhash
except ImportError:
    _MISSING_DEPS.append("xxhash")

if _MISSING_DEPS:
    print("❌ Missing required dependencies:", file=sys.stderr)
    print(f"   pip install {' '.join(_MISSING_DEPS)}", file=sys.stderr)
    sys.exit(1)

# === NORMAL IMPORTS (after validation) ===
from dedup.commands import DeduplicationCommand
from dedup.core.errors import ConfigurationError
from dedup.core.models import DEFAULT_CACHE_DIR, DeduplicationParams, ExitStatus
from dedup.services.confirmation import TerminalConfirmation
from dedup.services.updater import UpdaterImpl
from dedup.aliases import (
    EPILOG_TEXT, FILE_TYPE_HELP_TEXT, HASH_CHOICES, HASH_HELP_TEXT, POLICY_HELP_TEXT
)


class CLIApplication:
    """Main CLI application controller."""

    def __init__(self):
        self.start_time: float = time.time()
        self.verbose: bool = False
        self.quiet: bool = False
        self.updater = UpdaterImpl()

        # Fix encoding for Windows consoles to prevent UnicodeEncodeError
        for stream in (sys.stdout, sys.stderr):
            if hasattr(stream, "reconfigure"):
                stream.reconfigure(encoding='utf-8')

    @staticmethod
    def parse_args(args: Optional[List[str]] = None) -> argparse.Namespace:
        """Parse command-line arguments."""
        parser = argparse.ArgumentParser(
            prog="dedup",
            description="dedup — Remove duplicated files from your system",
            formatter_class=argparse.RawTextHelpFormatter,
            epilog=EPILOG_TEXT
        )

        parser.add_argument(
            "paths",
            nargs="+",
            metavar="PATH",
            help="Folders (or files) to scan for duplicates"
        )

        # Filtering options
        parser.add_argument(
            "--include", "-i",
            default="",
            type=str,
            metavar="TYPES",
            help="Scan & remove specified file types only.\n" + FILE_TYPE_HELP_TEXT
        )
        parser.add_argument(
            "--exclude", "-e",
            default="",
            type=str,
            metavar="TYPES",
            help="Do NOT scan & remove specified file types (same tokens as --include)"
        )
        parser.add_argument(
            "--exclude-dirs",
            nargs="+",
            default=[],
            type=str,
            metavar="DIR",
            dest="excluded_dirs",
            help="Excluded/ignored directories (space separated)"
        )

        # Deduplication options
        parser.add_argument(
            "--policy", "-p",
            default="",
            type=str,
            metavar="POLICY",
            help=POLICY_HELP_TEXT
        )
        parser.add_argument(
            "--hash",
            choices=HASH_CHOICES,
            default="sha256",
            dest="hash_algorithm",
            help=HASH_HELP_TEXT
        )
        parser.add_argument(
            "--cache-dir",
            default=DEFAULT_CACHE_DIR,
            type=str,
            metavar="DIR",
            help=f"Fingerprint cache directory. Default: {DEFAULT_CACHE_DIR}"
        )

        # Actions
        parser.add_argument(
            "--list", "-l",
            action="store_true",
            dest="list_only",
            help="Show duplicated files, do not delete them"
        )
        parser.add_argument(
            "--force", "-f",
            action="store_true",
            help="Do not prompt before removing files (for automation/scripts)"
        )
        parser.add_argument(
            "--permanent",
            action="store_true",
            help="Delete files permanently instead of moving them to trash"
        )

        # Output options
        parser.add_argument(
            "--quiet", "-q",
            action="store_true",
            help="Suppress non-essential output"
        )
        parser.add_argument(
            "--verbose", "-v",
            action="store_true",
            help="Verbose mode: trace every scanned folder and file"
        )

        return parser.parse_args(args)

    def validate_args(self, args: argparse.Namespace) -> None:
        """Validate command-line arguments before execution."""
        if args.verbose and args.quiet:
            self.error_exit("--verbose and --quiet cannot be used together")

        if args.list_only and (args.force or args.permanent):
            self.warning("--force and --permanent have no effect together with --list")

        # Prevent interactive confirmation in non-TTY environments
        if not args.list_only and not args.force:
            if not sys.stdin.isatty():
                self.error_exit(
                    "Cannot request interactive confirmation in non-interactive session.\n"
                    "Use --force to remove files without confirmation, or --list to only show them."
                )

    def create_params(self, args: argparse.Namespace) -> DeduplicationParams:
        """Create DeduplicationParams from CLI arguments."""
        try:
            return DeduplicationParams(
                roots=list(args.paths),
                list_only=args.list_only,
                force=args.force,
                permanent=args.permanent,
                includes=args.include,
                excludes=args.exclude,
                excluded_dirs=[d.strip() for d in args.excluded_dirs if d.strip()],
                policy=args.policy,
                hash_algorithm=args.hash_algorithm,
                cache_dir=args.cache_dir,
            )
        except ValueError as e:
            self.error_exit(f"Parameter error: {e}")

    def configure_logging(self) -> None:
        if self.verbose:
            level = logging.DEBUG
        elif self.quiet:
            level = logging.WARNING
        else:
            level = logging.INFO
        logging.getLogger().setLevel(level)

    def install_signal_handler(self) -> None:
        """
        First Ctrl+C requests cooperative cancellation (caches are still saved),
        a second one interrupts immediately.
        """
        def handler(signum, frame):
            print("\n⚠️  Cancelling... (press Ctrl+C again to force)", file=sys.stderr)
            self.updater.cancel()
            signal.signal(signal.SIGINT, signal.default_int_handler)

        signal.signal(signal.SIGINT, handler)

    def warning(self, message: str) -> None:
        """Print a warning message to stderr."""
        if not self.quiet:
            print(f"⚠️  {message}", file=sys.stderr)

    @staticmethod
    def error_exit(message: str, code: int = ExitStatus.CONFIGURATION_ERROR) -> NoReturn:
        """Print error and exit."""
        print(f"❌ Error: {message}", file=sys.stderr)
        sys.exit(int(code))

    def run(self, argv: Optional[List[str]] = None) -> int:
        """Main entry point. Returns the process exit code."""
        args = self.parse_args(argv)
        self.verbose = args.verbose
        self.quiet = args.quiet

        self.validate_args(args)
        self.configure_logging()
        params = self.create_params(args)

        confirmation = None
        if not params.list_only and not params.force:
            confirmation = TerminalConfirmation()

        previous_handler = signal.getsignal(signal.SIGINT)
        self.install_signal_handler()
        command = DeduplicationCommand()
        try:
            status, stats = command.execute(params, updater=self.updater, confirmation=confirmation)
        except ConfigurationError as e:
            self.error_exit(str(e))
        finally:
            signal.signal(signal.SIGINT, previous_handler)

        if status is ExitStatus.ABORTED:
            self.warning("Operation cancelled by user")

        if not self.quiet:
            print()
            print(stats.print_summary(list_only=params.list_only))

        elapsed = time.time() - self.start_time
        if self.verbose:
            print(f"\n✅ Completed in {elapsed:.2f} seconds")

        return int(status)


def main() -> None:
    """Application entry point."""
    app = CLIApplication()
    try:
        sys.exit(app.run())
    except KeyboardInterrupt:
        print("\n⚠️  Operation cancelled by user (Ctrl+C)", file=sys.stderr)
        sys.exit(130)
    except Exception as e:
        if os.environ.get("DEBUG"):
            raise
        print(f"❌ Unexpected error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
