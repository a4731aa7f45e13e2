"""Exclude-list loading and glob matching for artifact paths."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterable, Optional

from docsrouter.errors import LocalValidationError


@dataclass(slots=True)
class ExcludeMatcher:
    """
    Match posix paths (relative to the artifact root) against exclude globs.

    Glob rules:
        - A leading "/" anchors the pattern to the root; otherwise it may match
          any trailing run of path segments ("*.buildinfo" matches
          "a/b/.buildinfo").
        - "*" and "?" do not cross "/"; "**" does.
        - A trailing "/" matches the directory and everything below it.
        - "{a,b}" alternation and "[...]" character classes are supported.
    """

    patterns: list[str] = field(default_factory=list)
    _compiled: list[re.Pattern[str]] = field(default_factory=list, init=False, repr=False)

    def __post_init__(self) -> None:
        self._compiled = [_compile_glob(p) for p in self.patterns]

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> ExcludeMatcher:
        patterns: list[str] = []
        for raw in lines:
            line = raw.strip()
            if not line or line.startswith(("#", ";")):
                continue
            patterns.append(line)
        return cls(patterns=patterns)

    def is_excluded(self, path: str) -> bool:
        return any(rx.match(path) for rx in self._compiled)


def load_exclude_file(path: Optional[str]) -> ExcludeMatcher:
    """
    Load an exclude file (one glob per line, "#"/";" comments).

    A None path yields a matcher that excludes nothing.

    Raises:
        LocalValidationError: if the file cannot be read or holds a bad pattern.
    """
    if path is None:
        return ExcludeMatcher()

    try:
        with open(path, "r", encoding="utf-8") as f:
            lines = f.readlines()
    except OSError as exc:
        raise LocalValidationError(
            "Failed to read exclude file",
            details={"exclude_file": path},
            cause=exc,
        ) from exc

    try:
        return ExcludeMatcher.from_lines(lines)
    except ValueError as exc:
        raise LocalValidationError(
            f"Invalid exclude pattern: {exc}",
            details={"exclude_file": path},
            cause=exc,
        ) from exc


def _compile_glob(pattern: str) -> re.Pattern[str]:
    anchored = pattern.startswith("/")
    body = pattern.lstrip("/")
    if body.endswith("/"):
        body += "**"
    if not body:
        raise ValueError(f"empty pattern: {pattern!r}")

    regex = _translate(body)
    prefix = "^" if anchored else "^(?:.*/)?"
    try:
        return re.compile(prefix + regex + "$")
    except re.error as exc:
        raise ValueError(f"bad pattern {pattern!r}: {exc}") from exc


def _translate(glob: str) -> str:
    out: list[str] = []
    i = 0
    n = len(glob)
    in_braces = False

    while i < n:
        c = glob[i]
        if c == "*":
            if i + 1 < n and glob[i + 1] == "*":
                out.append(".*")
                i += 2
                continue
            out.append("[^/]*")
        elif c == "?":
            out.append("[^/]")
        elif c == "[":
            j = i + 1
            negate = j < n and glob[j] == "!"
            if negate:
                j += 1
            # A "]" right after the opening bracket is a literal member.
            end = glob.find("]", j + 1 if j < n and glob[j] == "]" else j)
            if end == -1:
                raise ValueError(f"unterminated character class in {glob!r}")
            out.append(("[^" if negate else "[") + _class_body(glob[j:end]) + "]")
            i = end
        elif c == "{":
            if in_braces:
                raise ValueError(f"nested braces in {glob!r}")
            in_braces = True
            out.append("(?:")
        elif c == "}" and in_braces:
            in_braces = False
            out.append(")")
        elif c == "," and in_braces:
            out.append("|")
        elif c == "\\" and i + 1 < n:
            out.append(re.escape(glob[i + 1]))
            i += 1
        else:
            out.append(re.escape(c))
        i += 1

    if in_braces:
        raise ValueError(f"unterminated braces in {glob!r}")
    return "".join(out)


def _class_body(body: str) -> str:
    body = body.replace("\\", "\\\\").replace("[", "\\[").replace("]", "\\]")
    if body.startswith("^"):
        body = "\\" + body
    return body
