import pytest

from llmview.exclusion_rules.base_rules import RuleMatch
from llmview.exclusion_rules.git_rules import GitIgnoreRules, compile_rules, read_ignore_file


def excluded(rules, path):
    result = rules.test(path)
    return result.matched and not result.is_negated


@pytest.fixture
def gitignore_rules():
    return GitIgnoreRules(
        [
            "*.txt",
            "!important.txt",
            "subdir/",
            "*.py[cod]",
            "**/__pycache__/",
        ]
    )


@pytest.mark.parametrize(
    "path,expected",
    [
        ("file.txt", True),
        ("important.txt", False),
        ("file.py", False),
        ("subdir/", True),
        ("subdir", False),
        ("subdir/file.py", True),
        ("another_dir/file.txt", True),
        ("another_dir/file.py", False),
        ("nested/subdir/file.txt", True),
        ("file.pyc", True),
        ("__pycache__/", True),
        ("lib/__pycache__/", True),
    ],
)
def test_gitignore_rules(gitignore_rules, path, expected):
    assert excluded(gitignore_rules, path) == expected, f"Failed for path: {path}"


def test_negation_reports_match():
    rules = GitIgnoreRules(["*.log", "!important.log"])
    assert rules.test("debug.log") == RuleMatch(matched=True, is_negated=False)
    assert rules.test("important.log") == RuleMatch(matched=True, is_negated=True)
    assert rules.test("app.ts") == RuleMatch(matched=False, is_negated=False)


def test_last_matching_pattern_wins():
    rules = GitIgnoreRules(["!keep.log", "*.log"])
    assert excluded(rules, "keep.log")

    rules = GitIgnoreRules(["*.log", "!keep.log"])
    assert not excluded(rules, "keep.log")


def test_directory_only_pattern_needs_trailing_slash():
    rules = GitIgnoreRules(["build/"])
    assert excluded(rules, "build/")
    assert not excluded(rules, "build")
    assert excluded(rules, "packages/app/build/")


def test_anchored_pattern():
    rules = GitIgnoreRules(["/dist"])
    assert excluded(rules, "dist/")
    assert not excluded(rules, "packages/dist/")


def test_empty_rules_exclude_nothing():
    rules = GitIgnoreRules()
    assert len(rules) == 0
    assert not excluded(rules, "any_file.txt")


def test_comments_and_blank_lines_are_not_rules():
    rules = GitIgnoreRules(["# comment", "", "*.log"])
    assert len(rules) == 1
    assert not excluded(rules, "# comment")


@pytest.mark.parametrize("text", [None, "", "\n\n", "# only a comment\n"])
def test_compile_rules_without_patterns(text):
    assert len(compile_rules(text)) == 0


@pytest.mark.parametrize("bad_line", ["!", "weird\\"])
def test_invalid_line_leaves_other_rules_working(bad_line):
    rules = compile_rules(f".env\n*.log\n{bad_line}\n!keep.log\n")
    assert len(rules) == 3
    assert excluded(rules, ".env")
    assert excluded(rules, "debug.log")
    assert not excluded(rules, "keep.log")
    assert not excluded(rules, "main.py")


def test_read_ignore_file(tmp_path):
    ignore_file = tmp_path / ".gitignore"
    ignore_file.write_text("*.log\n!important.log\n")

    rules = read_ignore_file(ignore_file)
    assert rules is not None
    assert excluded(rules, "debug.log")
    assert not excluded(rules, "important.log")


def test_read_ignore_file_missing(tmp_path):
    assert read_ignore_file(tmp_path / ".gitignore") is None


def test_read_ignore_file_without_patterns(tmp_path):
    ignore_file = tmp_path / ".gitignore"
    ignore_file.write_text("# nothing to ignore\n\n")
    assert read_ignore_file(ignore_file) is None


def test_read_ignore_file_that_is_a_directory(tmp_path):
    (tmp_path / ".gitignore").mkdir()
    assert read_ignore_file(tmp_path / ".gitignore") is None


def test_read_ignore_file_not_utf8(tmp_path):
    ignore_file = tmp_path / ".gitignore"
    ignore_file.write_bytes(b"\xff\xfe*\x00.\x00l\x00o\x00g\x00")
    assert read_ignore_file(ignore_file) is None
