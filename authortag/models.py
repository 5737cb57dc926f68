"""Core data models shared across authortag components."""

import re
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Dict, List, Pattern, Sequence, Tuple


@dataclass(frozen=True)
class Author:
    """A contributor identity. Authors compare equal when their git ids match."""

    git_id: str
    display_name: str = field(default="", compare=False)
    emails: Tuple[str, ...] = field(default=(), compare=False)
    aliases: Tuple[str, ...] = field(default=(), compare=False)
    ignore_globs: Tuple[str, ...] = field(default=(), compare=False)

    @property
    def name(self) -> str:
        return self.display_name or self.git_id

    def is_ignoring_file(self, path: str) -> bool:
        """Return True when contributions by this author to ``path`` should be ignored."""
        return any(_glob_matches(path, pattern) for pattern in self.ignore_globs)

    def with_ignore_globs(self, globs: Sequence[str]) -> "Author":
        """Return a copy of this author with ``globs`` appended to its ignore list."""
        merged = self.ignore_globs + tuple(glob for glob in globs if glob not in self.ignore_globs)
        return Author(
            git_id=self.git_id,
            display_name=self.display_name,
            emails=self.emails,
            aliases=self.aliases,
            ignore_globs=merged,
        )


UNKNOWN_AUTHOR = Author(git_id="-", display_name="Unknown")


@dataclass
class LineInfo:
    """One line of a file together with the author it is currently credited to."""

    line_number: int
    content: str
    author: Author = UNKNOWN_AUTHOR


@dataclass
class FileInfo:
    """Ordered line authorship for a single file."""

    path: str
    lines: List[LineInfo] = field(default_factory=list)

    def author_contributions(self) -> Dict[Author, int]:
        """Count the lines credited to each author, in order of first appearance."""
        counts: Dict[Author, int] = {}
        for line in self.lines:
            counts[line.author] = counts.get(line.author, 0) + 1
        return counts


def _glob_matches(path: str, pattern: str) -> bool:
    """Match ``path`` against an ignore glob.

    ``*`` and ``?`` stay within one path segment and ``**`` spans segments.
    ``dir/`` and ``dir/**`` cover everything below ``dir``. A bare file name
    without wildcards matches that file in any directory.
    """
    normalized = path.replace("\\", "/")
    if normalized.startswith("./"):
        normalized = normalized[2:]
    if pattern.endswith("/**"):
        prefix = pattern[:-3]
        return normalized == prefix or normalized.startswith(f"{prefix}/")
    if pattern.endswith("/"):
        return normalized.startswith(pattern)
    if "/" not in pattern and not any(ch in pattern for ch in "*?["):
        return normalized == pattern or normalized.endswith(f"/{pattern}")
    return _compile_glob(pattern).fullmatch(normalized) is not None


@lru_cache(maxsize=256)
def _compile_glob(pattern: str) -> Pattern[str]:
    parts: List[str] = []
    index = 0
    while index < len(pattern):
        if pattern.startswith("**/", index):
            parts.append("(?:.*/)?")
            index += 3
        elif pattern.startswith("**", index):
            parts.append(".*")
            index += 2
        elif pattern[index] == "*":
            parts.append("[^/]*")
            index += 1
        elif pattern[index] == "?":
            parts.append("[^/]")
            index += 1
        elif pattern[index] == "[" and "]" in pattern[index + 2 :]:
            end = pattern.index("]", index + 2)
            body = pattern[index + 1 : end]
            if body.startswith("!"):
                body = "^" + body[1:]
            parts.append("[" + body.replace("\\", "\\\\") + "]")
            index = end + 1
        else:
            parts.append(re.escape(pattern[index]))
            index += 1
    return re.compile("".join(parts))
