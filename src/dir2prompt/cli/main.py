"""Command-line interface for dir2prompt.

This module provides the command-line interface for dir2prompt, which prints the files of a
directory that the inclusion rules select. The list is produced by the same selection
session and inclusion decision used by the interactive tree, so both always agree.

Exit Codes:
    0: Successful completion
    1: Runtime or configuration error (including invalid patterns)
    2: Command-line syntax error
    126: Unreadable directory with -P fail
    141: Broken pipe (output closed early, e.g. piped to `head`)

Example:
    # Python sources except tests
    $ dir2prompt -i "*.py" -x "tests/" /path/to/project

    # Display version information
    $ dir2prompt --version
"""

import logging
import os
import sys
from typing import Iterable, TextIO

from dir2prompt.cli.argparser import create_parser, validate_args
from dir2prompt.config import FilterConfig
from dir2prompt.exceptions import ConfigurationError, DirectoryLoadError
from dir2prompt.session import SelectionSession
from dir2prompt.types import PermissionAction


def configure_logging(verbose: bool) -> None:
    """Send library log records to stderr; debugging records only when verbose."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s | %(message)s",
        stream=sys.stderr,
    )


def write_paths(paths: Iterable[str], stream: TextIO) -> int:
    """Write one path per line and return how many were written."""
    count = 0
    for path in paths:
        stream.write(path + "\n")
        count += 1
    return count


def main() -> None:
    """Main entry point for the dir2prompt command-line interface.

    Exit codes:
        0: Successful completion
        1: Runtime or configuration error
        2: Command-line syntax error
        126: Unreadable directory with -P fail
        141: Broken pipe
    """
    config = FilterConfig()
    parser = create_parser(config)
    # argparse exits with 2 on syntax errors and 0 for --version
    args = parser.parse_args()
    configure_logging(args.verbose)

    try:
        validate_args(args)

        # "warn" stops the walk like "fail" but keeps the exit status at 0
        perm_action = {
            "ignore": PermissionAction.IGNORE,
            "warn": PermissionAction.RAISE,
            "fail": PermissionAction.RAISE,
        }[args.permission_action]

        session = SelectionSession(args.directory, config)
        # Reject invalid patterns up front instead of walking with the previous ones
        session.recompile()
        files = session.iterate_selected_files(follow_symlinks=args.follow_symlinks, permission_action=perm_action)
        paths = (relative for _, relative in files)

        output = open(args.output, "w", encoding="utf-8") if args.output else sys.stdout
        try:
            count = write_paths(paths, output)
        except DirectoryLoadError as e:
            if args.permission_action == "fail":
                print(f"Error: {str(e)}", file=sys.stderr)
                sys.exit(126)
            print(f"Warning: {str(e)}", file=sys.stderr)
            return
        finally:
            if output is not sys.stdout:
                output.close()

        if args.summary == "stdout":
            print(f"Files: {count}")
        elif args.summary == "stderr":
            print(f"Files: {count}", file=sys.stderr)

    except BrokenPipeError:
        # Redirect stdout so the flush at interpreter shutdown does not fail again
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())
        sys.exit(141)
    except ConfigurationError as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        print("Fix or remove the pattern and run again.", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
