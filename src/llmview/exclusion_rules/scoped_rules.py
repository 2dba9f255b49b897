"""Scope-aware resolution of stacked ignore rule sets.

Every ignore file found during traversal is paired with the directory it lives
in. The resulting stack is ordered root to leaf, and each rule set only sees
paths inside its own directory, expressed relative to it. Rules closer to the
leaf are consulted later and therefore override rules closer to the root,
mirroring how Git combines nested .gitignore files.
"""

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from llmview.constants import BASE_IGNORE_PATTERNS

from .base_rules import BaseExclusionRules
from .git_rules import GitIgnoreRules


@dataclass(frozen=True)
class ScopedIgnoreRule:
    """A compiled rule set together with the directory it applies to.

    Attributes:
        rules: The compiled ignore rules.
        scope: Slash-separated directory path relative to the scan root, ``""`` for
            the root itself.
    """

    rules: BaseExclusionRules
    scope: str = ""

    def local_path(self, path: str) -> Optional[str]:
        """Express a root-relative path relative to this rule's scope.

        Returns:
            The path with the scope prefix stripped, or None if the path lies
            outside the scope.

        Example:
            >>> rule = ScopedIgnoreRule(GitIgnoreRules(), "packages/app")
            >>> rule.local_path("packages/app/debug.log")
            'debug.log'
            >>> rule.local_path("packages/application/debug.log") is None
            True
        """
        if not self.scope:
            return path
        prefix = self.scope + "/"
        if not path.startswith(prefix):
            return None
        return path[len(prefix) :]  # noqa: E203


def base_scope_stack() -> Tuple[ScopedIgnoreRule, ...]:
    """Return the stack every scan starts from: the built-in root-scoped rules.

    Version-control metadata, OS metadata files, bytecode caches and dependency
    directories are excluded before any user ignore file is consulted.
    """
    return (ScopedIgnoreRule(GitIgnoreRules(BASE_IGNORE_PATTERNS), ""),)


def is_path_ignored(relative_path: str, is_directory: bool, stack: Sequence[ScopedIgnoreRule]) -> bool:
    """Resolve whether a path is excluded by a stack of scoped rule sets.

    Directories are tested with a trailing slash so that a rule such as ``build/``
    matches the directory but not a file of the same name. Rule sets are consulted
    in stack order; each one that matches sets the running verdict (excluded for a
    plain pattern, re-included for a negation) and rule sets that do not match leave
    it unchanged. The verdict after the last applicable rule set is the answer.

    Args:
        relative_path: Slash-separated path relative to the scan root.
        is_directory: Whether the path names a directory.
        stack: Scoped rule sets ordered from the root towards the path.

    Returns:
        bool: True if the path is excluded.

    Example:
        >>> stack = [
        ...     ScopedIgnoreRule(GitIgnoreRules(["dist/"]), ""),
        ...     ScopedIgnoreRule(GitIgnoreRules(["!dist/"]), "packages/special"),
        ... ]
        >>> is_path_ignored("dist", True, stack)
        True
        >>> is_path_ignored("packages/special/dist", True, stack)
        False
    """
    path_to_check = relative_path + "/" if is_directory else relative_path
    ignored = False

    for scoped in stack:
        local_path = scoped.local_path(path_to_check)
        if local_path is None:
            continue

        result = scoped.rules.test(local_path)
        if result.matched:
            ignored = not result.is_negated

    return ignored
