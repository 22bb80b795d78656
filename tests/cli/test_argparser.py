"""Unit tests for the argument parser module in dir2prompt CLI."""

import argparse
from pathlib import Path

import pytest

from dir2prompt.cli.argparser import create_parser, create_pattern_action, validate_args
from dir2prompt.config import FilterConfig


@pytest.fixture
def config():
    return FilterConfig()


@pytest.fixture
def parser(config):
    return create_parser(config)


def test_create_pattern_action(config):
    PatternAction = create_pattern_action(config)
    assert issubclass(PatternAction, argparse.Action)

    action = PatternAction(option_strings=["-i", "--include"], dest="include")
    namespace = argparse.Namespace()
    action(None, namespace, "*.py")

    assert config.include_patterns == ["*.py"]
    assert namespace.include == ["*.py"]


def test_defaults(parser, config):
    args = parser.parse_args(["project"])
    assert args.directory == Path("project")
    assert args.output is None
    assert not args.follow_symlinks
    assert args.summary is None
    assert args.permission_action == "ignore"
    assert not args.verbose
    assert config == FilterConfig()


def test_patterns_keep_command_line_order(parser, config, tmp_path):
    ignore_file = tmp_path / ".gitignore"
    ignore_file.write_text("# build output\nbuild/\n\n*.pyc\n")

    parser.parse_args(["-x", "*.log", "-e", str(ignore_file), "--exclude", "dist/", "-i", "*.py", "project"])

    assert config.exclude_patterns == ["*.log", "build/", "*.pyc", "dist/"]
    assert config.include_patterns == ["*.py"]


def test_explicit_paths_stay_disjoint(parser, config):
    parser.parse_args(["--include-path", "a.txt", "--exclude-path", "a.txt", "--include-path", "b.txt", "project"])
    assert config.explicit_excludes == {"a.txt"}
    assert config.explicit_includes == {"b.txt"}


def test_explicit_paths_are_normalized(parser, config):
    parser.parse_args(["--include-path", "./src/./main.py", "--exclude-path", ".\\a.txt", "project"])
    assert config.explicit_includes == {"src/main.py"}
    assert config.explicit_excludes == {"a.txt"}


def test_missing_exclude_file(parser, tmp_path):
    with pytest.raises(SystemExit) as exc_info:
        parser.parse_args(["-e", str(tmp_path / "missing.ignore"), "project"])
    assert exc_info.value.code == 2


def test_options(parser):
    args = parser.parse_args(["-o", "out.txt", "-L", "-s", "stderr", "-P", "fail", "-v", "project"])
    assert args.output == Path("out.txt")
    assert args.follow_symlinks
    assert args.summary == "stderr"
    assert args.permission_action == "fail"
    assert args.verbose


@pytest.mark.parametrize("argv", [["-s", "file", "project"], ["-P", "skip", "project"], []])
def test_invalid_arguments(parser, argv):
    with pytest.raises(SystemExit) as exc_info:
        parser.parse_args(argv)
    assert exc_info.value.code == 2


def test_validate_args(tmp_path):
    validate_args(argparse.Namespace(directory=tmp_path))

    with pytest.raises(ValueError, match="Directory does not exist"):
        validate_args(argparse.Namespace(directory=tmp_path / "missing"))

    file_path = tmp_path / "file.txt"
    file_path.write_text("content")
    with pytest.raises(ValueError, match="Not a directory"):
        validate_args(argparse.Namespace(directory=file_path))
