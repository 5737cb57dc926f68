"""Analyzer that overrides line authorship using in-code ``@@author`` tags.

A tag line opens a block credited to the named author::

    // @@author alice
    ...lines credited to alice...
    // @@author

A bare tag closes the open block (the closing line still belongs to the block's
author). A bare tag with no open block credits only that line to the unknown
author. Tags naming an author who ignores the current file behave like bare tags.
"""

from __future__ import annotations

import re
from typing import Optional, Tuple

from .base import FileAnalyzer
from ..config import AuthorConfiguration
from ..logging import get_logger
from ..models import UNKNOWN_AUTHOR, Author, FileInfo

AUTHOR_TAG = "@@author"

# Leading run of non-word characters stands in for any comment syntax.
_TAG_LINE_PATTERN = re.compile(r"^[^A-Za-z0-9_]*" + re.escape(AUTHOR_TAG))
_AUTHOR_NAME_PATTERN = re.compile(r"[A-Za-z0-9](?:[A-Za-z0-9-]*[A-Za-z0-9])?")

_LOGGER = get_logger("analyzers.annotator")


class AnnotatorAnalyzer(FileAnalyzer):
    """Credits annotated line ranges to the author named in the enclosing tag."""

    def supports(self, file_info: FileInfo) -> bool:
        return bool(file_info.lines)

    def analyze(self, file_info: FileInfo, author_config: AuthorConfiguration) -> None:
        apply_annotations(file_info, author_config)


def apply_annotations(file_info: FileInfo, author_config: AuthorConfiguration) -> None:
    """Overwrite the authorship of ``file_info`` lines governed by ``@@author`` tags."""
    active: Optional[Author] = None
    for line in file_info.lines:
        line_author, active = _advance(line.content, active, file_info.path, author_config)
        if line_author is not None:
            line.author = line_author


def is_author_tag_line(content: str) -> bool:
    return _TAG_LINE_PATTERN.match(content) is not None


def extract_author_name(content: str) -> Optional[str]:
    """Return the first author name following the tag marker in ``content``, if any."""
    parts = content.split(AUTHOR_TAG)
    if len(parts) < 2:
        return None
    match = _AUTHOR_NAME_PATTERN.search(parts[1])
    return match.group(0) if match else None


def _advance(
    content: str,
    active: Optional[Author],
    path: str,
    author_config: AuthorConfiguration,
) -> Tuple[Optional[Author], Optional[Author]]:
    """Return ``(author for this line, active author afterwards)``.

    A ``None`` line author leaves the line's existing attribution untouched.
    """
    if not is_author_tag_line(content):
        return active, active

    tagged = _resolve_tagged_author(content, path, author_config)
    if tagged is not None:
        return tagged, tagged
    if active is not None:
        return active, None
    return UNKNOWN_AUTHOR, None


def _resolve_tagged_author(
    content: str, path: str, author_config: AuthorConfiguration
) -> Optional[Author]:
    name = extract_author_name(content)
    if name is None:
        return None
    author = author_config.find_or_register(name)
    if author == UNKNOWN_AUTHOR:
        _LOGGER.debug("Tag in %s names unknown author %s", path, name)
    elif author_config.is_ignoring_file(author, path):
        _LOGGER.debug("Ignoring tag for %s in %s (file excluded for author)", name, path)
        return None
    return author


__all__ = [
    "AUTHOR_TAG",
    "AnnotatorAnalyzer",
    "apply_annotations",
    "extract_author_name",
    "is_author_tag_line",
]
