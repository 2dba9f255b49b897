"""Implementation of exclusion rules using .gitignore pattern syntax."""

import logging
from pathlib import Path
from typing import Iterable, Optional

from pathspec import PathSpec
from pathspec.patterns.gitignore import GitIgnorePatternError
from pathspec.patterns.gitignore.basic import GitIgnoreBasicPattern

from llmview.types import PathType

from .base_rules import NO_MATCH, BaseExclusionRules, RuleMatch

logger = logging.getLogger(__name__)


class GitIgnoreRules(BaseExclusionRules):
    """Compiled form of one ignore file's text.

    Patterns are compiled with the pathspec library's gitignore dialect. The
    subset llmview relies on:
    - One pattern per line; blank lines and lines starting with # are ignored
    - A leading ! negates the pattern
    - A trailing / restricts the pattern to directories
    - ** matches across path segments

    Within one rule set the last matching pattern wins, so a later ``!pattern``
    re-includes a path that an earlier pattern excluded. A line that is not a
    valid pattern (a lone ``!``, a trailing unescaped backslash) is skipped; the
    remaining lines still apply.

    Attributes:
        spec (PathSpec): Compiled pattern matcher from the pathspec library.

    Example:
        >>> rules = GitIgnoreRules(["build/", "*.log", "!"])
        >>> rules.test("build/").matched, rules.test("build").matched
        (True, False)
        >>> rules.test("src/error.log")
        RuleMatch(matched=True, is_negated=False)
        >>> len(rules)
        2

    Note:
        Paths handed to test() must use forward slashes, and directories must carry
        a trailing slash for directory-only patterns to apply.
    """

    def __init__(self, lines: Optional[Iterable[str]] = None):
        patterns = []
        for line in lines or ():
            if not line:
                continue
            try:
                patterns.append(GitIgnoreBasicPattern(line))
            except GitIgnorePatternError as e:
                logger.debug("Skipping invalid ignore pattern %r: %s", line, e)
        self.spec = PathSpec(patterns)

    def __len__(self) -> int:
        return sum(1 for pattern in self.spec.patterns if pattern.include is not None)

    def test(self, path: str) -> RuleMatch:
        """Match a path against the compiled patterns.

        Args:
            path: Slash-separated path relative to the rule set's scope.

        Returns:
            RuleMatch: ``matched`` is True if any pattern matched; ``is_negated``
            reflects the last matching pattern.

        Example:
            >>> rules = GitIgnoreRules(["*.txt", "!keep.txt", "keep.txt"])
            >>> rules.test("keep.txt")
            RuleMatch(matched=True, is_negated=False)
        """
        result = self.spec.check_file(path)
        if result.include is None:
            return NO_MATCH
        return RuleMatch(matched=True, is_negated=not result.include)


def compile_rules(text: Optional[str]) -> GitIgnoreRules:
    """Compile raw ignore-file text into a rule set.

    Empty or absent text yields a rule set that matches nothing. Invalid lines are
    dropped one by one, so a typo in one line never disables the others.

    Args:
        text: Contents of an ignore file, or None.

    Returns:
        GitIgnoreRules: The compiled rule set.

    Example:
        >>> len(compile_rules(None))
        0
        >>> len(compile_rules("# comment\\n\\n*.log\\n!keep.log\\n"))
        2
    """
    if not text:
        return GitIgnoreRules()
    return GitIgnoreRules(text.splitlines())


def read_ignore_file(path: PathType) -> Optional[GitIgnoreRules]:
    """Read and compile an ignore file if one exists.

    Args:
        path: Location of the candidate ignore file.

    Returns:
        The compiled rules, or None if the file is absent, unreadable, or holds no
        patterns. Most directories have no ignore file, so None is the common case.
    """
    path_obj = Path(path)
    try:
        text = path_obj.read_text(encoding="utf-8")
    except FileNotFoundError:
        return None
    except (OSError, UnicodeDecodeError) as e:
        logger.debug("Skipping unreadable ignore file %s: %s", path_obj, e)
        return None

    rules = compile_rules(text)
    return rules if len(rules) else None
