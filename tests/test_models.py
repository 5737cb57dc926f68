"""Tests for authortag.models."""

from __future__ import annotations

import pytest

from authortag.models import UNKNOWN_AUTHOR, Author, FileInfo, LineInfo


def test_authors_compare_by_git_id() -> None:
    assert Author(git_id="alice", display_name="Alice") == Author(git_id="alice")
    assert Author(git_id="alice") != Author(git_id="Alice")
    assert len({Author(git_id="bob"), Author(git_id="bob", aliases=("b",))}) == 1


def test_unknown_author_ignores_nothing() -> None:
    assert UNKNOWN_AUTHOR.is_ignoring_file("anything/at/all.py") is False
    assert UNKNOWN_AUTHOR.name == "Unknown"


@pytest.mark.parametrize(
    "pattern, path, expected",
    [
        ("docs/**", "docs/guide/intro.md", True),
        ("docs/**", "docs", True),
        ("docs/**", "src/docs.md", False),
        ("build/", "build/out.txt", True),
        ("**/*.md", "README.md", True),
        ("**/*.md", "nested/notes.md", True),
        ("*.txt", "notes.txt", True),
        ("*.md", "docs/guide.md", False),
        ("**/*.md", "a/b/c.md", True),
        ("docs/*.md", "docs/sub/page.md", False),
        ("docs/**/*.md", "docs/page.md", True),
        ("src/?.py", "src/a.py", True),
        ("src/[!a]*.py", "src/build.py", True),
        ("src/[!a]*.py", "src/app.py", False),
        ("src/*.py", "src/app.py", True),
        ("src/*.py", "lib/app.py", False),
        ("Makefile", "tools/Makefile", True),
        ("Makefile", "Makefile.in", False),
        ("docs/**", "docs\\windows\\path.md", True),
        ("docs/**", "./docs/a.md", True),
    ],
)
def test_ignore_glob_matching(pattern: str, path: str, expected: bool) -> None:
    author = Author(git_id="alice", ignore_globs=(pattern,))
    assert author.is_ignoring_file(path) is expected


def test_with_ignore_globs_appends_without_duplicates() -> None:
    author = Author(git_id="alice", display_name="Alice", ignore_globs=("docs/**",))

    merged = author.with_ignore_globs(["docs/**", "vendor/**"])

    assert merged.ignore_globs == ("docs/**", "vendor/**")
    assert merged.display_name == "Alice"
    assert author.ignore_globs == ("docs/**",)


def test_author_contributions_count_lines_per_author() -> None:
    alice = Author(git_id="alice")
    bob = Author(git_id="bob")
    file_info = FileInfo(
        path="main.py",
        lines=[
            LineInfo(1, "a", bob),
            LineInfo(2, "b", alice),
            LineInfo(3, "c", bob),
            LineInfo(4, "d"),
        ],
    )

    contributions = file_info.author_contributions()

    assert contributions == {bob: 2, alice: 1, UNKNOWN_AUTHOR: 1}
    assert list(contributions) == [bob, alice, UNKNOWN_AUTHOR]
