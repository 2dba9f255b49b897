"""Ignore rules for excluding files and directories during traversal."""

from .base_rules import BaseExclusionRules, RuleMatch
from .git_rules import GitIgnoreRules, compile_rules, read_ignore_file
from .scoped_rules import ScopedIgnoreRule, base_scope_stack, is_path_ignored

__all__ = [
    "BaseExclusionRules",
    "GitIgnoreRules",
    "RuleMatch",
    "ScopedIgnoreRule",
    "base_scope_stack",
    "compile_rules",
    "is_path_ignored",
    "read_ignore_file",
]
