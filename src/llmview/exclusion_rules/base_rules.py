from abc import ABC, abstractmethod
from typing import NamedTuple


class RuleMatch(NamedTuple):
    """Outcome of testing one path against one rule set.

    Attributes:
        matched: True if at least one pattern in the rule set matched the path.
        is_negated: True if the last matching pattern was a negation (``!pattern``).
            Meaningless when ``matched`` is False.
    """

    matched: bool
    is_negated: bool


NO_MATCH = RuleMatch(matched=False, is_negated=False)


class BaseExclusionRules(ABC):
    """
    Abstract base class defining the interface for file/directory exclusion rules.

    Implementations report *how* a path matched rather than a plain verdict, so that
    callers stacking several rule sets can tell "explicitly re-included" apart from
    "not mentioned at all".

    Example:
        >>> from llmview.exclusion_rules.git_rules import GitIgnoreRules
        >>> rules = GitIgnoreRules(["*.log", "!important.log"])
        >>> rules.test("debug.log")
        RuleMatch(matched=True, is_negated=False)
        >>> rules.test("important.log")
        RuleMatch(matched=True, is_negated=True)
        >>> rules.test("app.ts")
        RuleMatch(matched=False, is_negated=False)
    """

    @abstractmethod
    def test(self, path: str) -> RuleMatch:
        """
        Match a path against the rules; the last matching rule decides.

        Args:
            path (str): A slash-separated path relative to the directory the rules
                belong to. Directories are passed with a trailing slash.

        Returns:
            RuleMatch: Whether any rule matched, and whether the deciding rule was negated.
        """
        pass
