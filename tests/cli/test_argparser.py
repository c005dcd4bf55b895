"""Unit tests for the argument parser module in treeassert CLI."""

from pathlib import Path

import pytest

from treeassert.cli.argparser import create_parser


@pytest.fixture
def parser():
    return create_parser()


def test_check_defaults(parser):
    args = parser.parse_args(["check", "some/dir"])

    assert args.command == "check"
    assert args.root == Path("some/dir")
    assert args.spec == "-"
    assert args.contains is False
    assert args.verbose is False


def test_check_options(parser):
    args = parser.parse_args(["-v", "check", "-c", "-s", "expected.yaml", "dir"])

    assert args.verbose is True
    assert args.contains is True
    assert args.spec == "expected.yaml"


def test_dump_defaults(parser):
    args = parser.parse_args(["dump", "dir"])

    assert args.command == "dump"
    assert args.perm is False
    assert args.mode is False
    assert args.output is None


def test_dump_options(parser):
    args = parser.parse_args(["dump", "--perm", "--mode", "--output", "out.yaml", "dir"])

    assert args.perm is True
    assert args.mode is True
    assert args.output == Path("out.yaml")


def test_command_is_required(parser):
    with pytest.raises(SystemExit) as exc_info:
        parser.parse_args([])
    assert exc_info.value.code == 2


def test_root_is_required(parser):
    with pytest.raises(SystemExit):
        parser.parse_args(["check"])


def test_version(parser, capsys):
    with pytest.raises(SystemExit) as exc_info:
        parser.parse_args(["--version"])

    assert exc_info.value.code == 0
    assert capsys.readouterr().out.startswith("treeassert ")
