"""Glob patterns matched against root-relative file paths.

The dialect follows the minimatch conventions used by view files:

- ``*`` matches any run of characters within one path segment
- ``?`` matches one character within a path segment
- ``[abc]``, ``[a-z]``, ``[!abc]`` match one character from (or not from) a set
- ``{src,test}`` expands to one alternative per comma-separated item
- ``{1..3}``, ``{01..10..2}`` and ``{a..e}`` expand to numeric or letter sequences
- a ``**`` segment matches zero or more whole path segments
- ``\\`` escapes the following character

Wildcards match dotfiles. Matching is case-sensitive and always against the
complete path, so ``*.py`` only matches files at the root while ``**/*.py``
matches at any depth. A leading ``!`` marks the pattern as an exclusion.

Extended globs such as ``+(a|b)`` or ``@(x|y)`` are not supported; their
characters match literally.
"""

import re
from typing import List, Optional, Pattern

SEQUENCE_RE = re.compile(r"(-?\d+|[A-Za-z])\.\.(-?\d+|[A-Za-z])(?:\.\.(-?\d+))?")


def _split_alternatives(body: str) -> List[str]:
    """Split the inside of a brace group on its top-level commas."""
    alternatives: List[str] = []
    depth = 0
    current = ""
    i = 0
    while i < len(body):
        char = body[i]
        if char == "\\" and i + 1 < len(body):
            current += body[i : i + 2]  # noqa: E203
            i += 2
            continue
        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
        elif char == "," and depth == 0:
            alternatives.append(current)
            current = ""
            i += 1
            continue
        current += char
        i += 1
    alternatives.append(current)
    return alternatives


def _expand_sequence(body: str) -> Optional[List[str]]:
    """Expand ``start..end[..step]`` into its items, or None if body is not a sequence.

    Numbers are zero-padded to the wider bound when either bound has a leading zero.

    Example:
        >>> _expand_sequence("01..10..3")
        ['01', '04', '07', '10']
        >>> _expand_sequence("c..a")
        ['c', 'b', 'a']
        >>> _expand_sequence("1..c") is None
        True
    """
    match = SEQUENCE_RE.fullmatch(body)
    if match is None:
        return None
    start, end, step_text = match.groups()
    step = abs(int(step_text)) if step_text else 1
    step = step or 1

    if start.isalpha() != end.isalpha():
        return None
    if start.isalpha():
        first, last = ord(start), ord(end)
        values = range(first, last + 1, step) if first <= last else range(first, last - 1, -step)
        return [chr(value) for value in values]

    padded = any(len(bound.lstrip("-")) > 1 and bound.lstrip("-").startswith("0") for bound in (start, end))
    width = max(len(start), len(end)) if padded else 0
    first, last = int(start), int(end)
    values = range(first, last + 1, step) if first <= last else range(first, last - 1, -step)
    return [str(value).zfill(width) for value in values]


def expand_braces(pattern: str) -> List[str]:
    """Expand ``{a,b}`` groups into the list of patterns they stand for.

    Sequences such as ``{1..3}`` expand to their items. Other groups without a
    comma are kept literally.

    Example:
        >>> expand_braces("src/{app,lib}/*.{ts,tsx}")
        ['src/app/*.ts', 'src/app/*.tsx', 'src/lib/*.ts', 'src/lib/*.tsx']
        >>> expand_braces("logs/day{1..3}.txt")
        ['logs/day1.txt', 'logs/day2.txt', 'logs/day3.txt']
        >>> expand_braces("{literal}.txt")
        ['{literal}.txt']
    """
    depth = 0
    start = -1
    i = 0
    while i < len(pattern):
        char = pattern[i]
        if char == "\\":
            i += 2
            continue
        if char == "{":
            if depth == 0:
                start = i
            depth += 1
        elif char == "}" and depth > 0:
            depth -= 1
            if depth == 0:
                body = pattern[start + 1 : i]  # noqa: E203
                alternatives = _split_alternatives(body)
                sequence = _expand_sequence(body) if len(alternatives) == 1 else None
                if sequence is not None:
                    alternatives = sequence
                if len(alternatives) > 1 or sequence is not None:
                    prefix, suffix = pattern[:start], pattern[i + 1 :]  # noqa: E203
                    expanded: List[str] = []
                    for alternative in alternatives:
                        expanded.extend(expand_braces(prefix + alternative + suffix))
                    return expanded
        i += 1
    return [pattern]


def _translate_segment(segment: str) -> str:
    """Translate one path segment (no slashes) to a regular expression."""
    output: List[str] = []
    i, n = 0, len(segment)
    while i < n:
        char = segment[i]
        i += 1
        if char == "\\":
            if i < n:
                output.append(re.escape(segment[i]))
                i += 1
            else:
                output.append(re.escape(char))
        elif char == "*":
            while i < n and segment[i] == "*":
                i += 1
            output.append("[^/]*")
        elif char == "?":
            output.append("[^/]")
        elif char == "[":
            j = i
            if j < n and segment[j] in "!^":
                j += 1
            if j < n and segment[j] == "]":
                j += 1
            while j < n and segment[j] != "]":
                j += 1
            if j >= n:
                output.append(re.escape(char))
                continue
            body = segment[i:j]
            i = j + 1
            negated = body[0] in "!^"
            if negated:
                body = body[1:]
            body = re.sub(r"([\\\[\]&~|^])", r"\\\1", body)
            output.append(f"[^/{body}]" if negated else f"[{body}]")
        else:
            output.append(re.escape(char))
    return "".join(output)


def _translate(pattern: str) -> str:
    segments = pattern.split("/")
    parts: List[str] = []
    for i, segment in enumerate(segments):
        is_last = i == len(segments) - 1
        if segment == "**":
            parts.append(".*" if is_last else "(?:[^/]*/)*")
        else:
            parts.append(_translate_segment(segment) + ("" if is_last else "/"))
    return "".join(parts)


def compile_glob(pattern: str) -> Pattern[str]:
    """Compile a glob (without a leading ``!``) into an anchored regular expression.

    Example:
        >>> regex = compile_glob("backend/**")
        >>> bool(regex.fullmatch("backend/migrations/001_init.sql"))
        True
        >>> bool(compile_glob("*.py").fullmatch("src/main.py"))
        False
        >>> bool(compile_glob("**/*.py").fullmatch("main.py"))
        True
    """
    alternatives = [_translate(expanded) for expanded in expand_braces(pattern)]
    return re.compile("(?s:" + "|".join(alternatives) + ")")


class GlobPattern:
    """A single user-supplied selection pattern.

    Attributes:
        pattern (str): The pattern as written, including any leading ``!``.
        negated (bool): True if the pattern excludes the files it matches.
        regex (Pattern[str]): Compiled form of the glob without the ``!``.

    Example:
        >>> include = GlobPattern("backend/**")
        >>> exclude = GlobPattern("!backend/migrations/**")
        >>> include.matches("backend/main.py"), include.negated
        (True, False)
        >>> exclude.matches("backend/migrations/001_init.sql"), exclude.negated
        (True, True)
        >>> GlobPattern("*.md").matches(".github/README.md"), GlobPattern("**/*.md").matches(".github/README.md")
        (False, True)
    """

    def __init__(self, pattern: str) -> None:
        self.pattern = pattern
        self.negated = pattern.startswith("!")
        self.regex = compile_glob(pattern[1:] if self.negated else pattern)

    def matches(self, path: str) -> bool:
        """Return True if the whole root-relative path matches the glob."""
        return self.regex.fullmatch(path) is not None

    def __repr__(self) -> str:
        return f"GlobPattern({self.pattern!r})"
