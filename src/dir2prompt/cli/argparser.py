"""Command-line argument parsing for dir2prompt.

This module defines the command-line interface for dir2prompt,
handling argument parsing and validation.
"""

import argparse
from pathlib import Path
from typing import Any, List, Optional, Sequence, Type, Union

from dir2prompt import __version__
from dir2prompt.config import FilterConfig
from dir2prompt.matching.inclusion import normalize_relative_path
from dir2prompt.matching.pattern_matcher import read_pattern_file


def create_pattern_action(config: FilterConfig) -> Type[argparse.Action]:
    """Create a custom action class that fills a filter configuration.

    This factory function creates an action class that updates the provided configuration
    as arguments are processed. Exclude patterns given directly and those read from files
    keep the exact order in which they appear on the command line.

    Args:
        config: The configuration to update during parsing.

    Returns:
        A custom action class for use with argparse.
    """

    class PatternAction(argparse.Action):
        """Action to update the filter configuration as arguments are processed."""

        def __init__(self, option_strings: List[str], dest: str, **kwargs: Any) -> None:
            super().__init__(option_strings, dest, **kwargs)

        def __call__(
            self,
            parser: argparse.ArgumentParser,
            namespace: argparse.Namespace,
            values: Union[str, Sequence[Any], None],
            option_string: Optional[str] = None,
        ) -> None:
            if values is None:
                return

            if self.dest == "include":
                config.include_patterns.append(str(values))
            elif self.dest == "exclude":
                config.exclude_patterns.append(str(values))
            elif self.dest == "exclude_from":
                try:
                    config.exclude_patterns.extend(read_pattern_file(Path(str(values))))
                except FileNotFoundError as e:
                    parser.error(str(e))
            elif self.dest == "include_path":
                path = normalize_relative_path(str(values))
                config.explicit_excludes.discard(path)
                config.explicit_includes.add(path)
            elif self.dest == "exclude_path":
                path = normalize_relative_path(str(values))
                config.explicit_includes.discard(path)
                config.explicit_excludes.add(path)

            # Also keep the raw values on the namespace
            if getattr(namespace, self.dest, None) is None:
                setattr(namespace, self.dest, [])
            getattr(namespace, self.dest).append(values)

    return PatternAction


def create_parser(config: FilterConfig) -> argparse.ArgumentParser:
    """Create and configure the command-line argument parser.

    Args:
        config: The filter configuration to update during parsing.

    Returns:
        An ArgumentParser instance configured with dir2prompt's options.
    """
    description = """
    dir2prompt: Resolve which files of a directory go into an LLM prompt.

    The tool walks a directory and prints, one per line, the paths that the inclusion rules
    select. Rules combine gitignore-style include and exclude patterns with explicit
    per-path overrides, using this precedence:

      1. --exclude-path           always excluded
      2. --include-path           always included
      3. matches -x, not -i       excluded (also when no -i is given)
      4. matches -i, or no -i     included
      5. anything else            excluded
    """

    epilog = """
    Examples:
      # Every file of the project
      dir2prompt /path/to/project

      # Only Python files, except the tests
      dir2prompt -i "*.py" -x "tests/" /path/to/project

      # Exclude what .gitignore excludes, plus log files
      dir2prompt -e .gitignore -x "*.log" /path/to/project

      # Force a single file in or out regardless of patterns
      dir2prompt -i "*.py" --include-path README.md --exclude-path setup.py /path/to/project

      # Follow symbolic links and stop on unreadable directories
      dir2prompt -L -P fail /path/to/project

      # Write the list to a file and print a summary to stderr
      dir2prompt -o files.txt -s stderr /path/to/project

      # Display version information and exit
      dir2prompt -V
    """

    parser = argparse.ArgumentParser(
        prog="dir2prompt",
        description=description,
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "-V", "--version", action="version", version=f"dir2prompt {__version__}", help="Show the version and exit"
    )

    PatternAction = create_pattern_action(config)

    parser.add_argument(
        "directory",
        type=Path,
        help="The directory to process. All printed paths are relative to this directory.",
    )
    parser.add_argument(
        "-i",
        "--include",
        metavar="PATTERN",
        action=PatternAction,
        help="Gitignore-style pattern selecting files to include (can be specified multiple times).",
    )
    parser.add_argument(
        "-x",
        "--exclude",
        metavar="PATTERN",
        action=PatternAction,
        help="Gitignore-style pattern selecting files to exclude (can be specified multiple times).",
    )
    parser.add_argument(
        "-e",
        "--exclude-from",
        metavar="FILE",
        action=PatternAction,
        help=(
            "File of exclude patterns (e.g., .gitignore), one per line. Can be specified multiple times; "
            "patterns are added in the order they appear, mixed with -x/--exclude options."
        ),
    )
    parser.add_argument(
        "--include-path",
        metavar="PATH",
        action=PatternAction,
        help="Root-relative path to include regardless of patterns (can be specified multiple times).",
    )
    parser.add_argument(
        "--exclude-path",
        metavar="PATH",
        action=PatternAction,
        help="Root-relative path to exclude regardless of everything else (can be specified multiple times).",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        metavar="FILE",
        help="Output file path. If not specified, output is written to stdout.",
    )
    parser.add_argument(
        "-L",
        "--follow-symlinks",
        action="store_true",
        help="Follow symbolic links during traversal. By default, symlinks are skipped.",
    )
    parser.add_argument(
        "-s",
        "--summary",
        metavar="DEST",
        choices=["stderr", "stdout"],
        help="Print the number of included files. Valid destinations: stderr, stdout",
    )
    parser.add_argument(
        "-P",
        "--permission-action",
        choices=["ignore", "warn", "fail"],
        default="ignore",
        help="How to handle unreadable directories (default: ignore).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log debugging information to stderr.",
    )

    return parser


def validate_args(args: argparse.Namespace) -> None:
    """Validate command-line arguments.

    Performs additional validation beyond what argparse can handle.

    Args:
        args: Parsed command-line arguments.

    Raises:
        ValueError: If any arguments fail validation.
    """
    if not args.directory.exists():
        raise ValueError(f"Directory does not exist: {args.directory}")
    if not args.directory.is_dir():
        raise ValueError(f"Not a directory: {args.directory}")
