"""Tests for loading selection patterns from view files."""

import io

import pytest

from llmview.view_file import load_patterns, parse_patterns


@pytest.mark.parametrize(
    "text,expected",
    [
        ("backend/**\n!backend/migrations/**\n", ["backend/**", "!backend/migrations/**"]),
        ("# comment\n\n   \nsrc/**\n", ["src/**"]),
        ("src/**   # trailing comment\n", ["src/**"]),
        ("  docs/*.md  \r\n", ["docs/*.md"]),
        ("#!only/a/comment\n", []),
        ("", []),
    ],
)
def test_parse_patterns(text, expected):
    assert parse_patterns(text) == expected


def test_parse_patterns_keeps_order():
    assert parse_patterns("b\na\n!b\n") == ["b", "a", "!b"]


def test_load_patterns_from_file(tmp_path):
    view_file = tmp_path / ".llmview"
    view_file.write_text("# backend\nbackend/**\n!backend/migrations/**\n")
    assert load_patterns(view_file) == ["backend/**", "!backend/migrations/**"]


def test_load_patterns_from_str_path(tmp_path):
    view_file = tmp_path / "view.txt"
    view_file.write_text("*.md\n")
    assert load_patterns(str(view_file)) == ["*.md"]


def test_load_patterns_from_stdin():
    assert load_patterns("-", stdin=io.StringIO("src/**\n# skip\n")) == ["src/**"]
    assert load_patterns(None, stdin=io.StringIO("a\n")) == ["a"]


def test_load_patterns_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_patterns(tmp_path / "missing.llmview")


def test_load_patterns_directory(tmp_path):
    with pytest.raises(IsADirectoryError):
        load_patterns(tmp_path)


def test_load_patterns_empty_file(tmp_path):
    view_file = tmp_path / "empty.llmview"
    view_file.write_text("# nothing here\n")
    assert load_patterns(view_file) == []
