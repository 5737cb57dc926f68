"""Author configuration loading for authortag (.authortag.yml)."""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence

import yaml

from .logging import get_logger
from .models import UNKNOWN_AUTHOR, Author

_CONFIG_FILENAME = ".authortag.yml"

_LOGGER = get_logger("config")


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


class AuthorConfiguration:
    """Registry mapping author names, aliases and emails to ``Author`` identities.

    A fixed configuration is one loaded from an explicit author list; it never
    grows. A dynamic configuration registers previously unseen names on demand.
    """

    def __init__(
        self,
        authors: Iterable[Author] = (),
        *,
        fixed: bool = False,
        ignore_globs: Sequence[str] = (),
    ) -> None:
        self._fixed = fixed
        self._ignore_globs = tuple(ignore_globs)
        self._authors: Dict[str, Author] = {}
        self._details_to_author: Dict[str, Author] = {}
        self._lock = threading.RLock()
        for author in authors:
            self.add_author(author)

    @property
    def is_fixed(self) -> bool:
        return self._fixed

    @property
    def authors(self) -> List[Author]:
        return list(self._authors.values())

    @property
    def ignore_globs(self) -> tuple[str, ...]:
        return self._ignore_globs

    def add_author(self, author: Author) -> Author:
        """Add ``author`` and index every name it can be referred to by."""
        if self._ignore_globs:
            author = author.with_ignore_globs(self._ignore_globs)
        self._authors[author.git_id] = author
        details = [author.git_id, *author.emails, *author.aliases]
        if author.display_name:
            details.append(author.display_name)
        for detail in details:
            # Earlier authors keep the names they already claimed.
            self._details_to_author.setdefault(detail, author)
        self._details_to_author[author.git_id] = author
        return author

    def lookup(self, name: str) -> Optional[Author]:
        if name == UNKNOWN_AUTHOR.git_id:
            return UNKNOWN_AUTHOR
        return self._details_to_author.get(name)

    def register(self, name: str) -> Author:
        """Register ``name`` as a new author unless the configuration is fixed."""
        with self._lock:
            existing = self.lookup(name)
            if existing is not None:
                return existing
            if self._fixed:
                return UNKNOWN_AUTHOR
            _LOGGER.debug("Registering new author %s", name)
            return self.add_author(Author(git_id=name))

    def find_or_register(self, name: str) -> Author:
        """Resolve ``name``, registering it first when dynamic growth is allowed."""
        author = self.lookup(name)
        if author is not None:
            return author
        return self.register(name)

    def is_ignoring_file(self, author: Author, path: str) -> bool:
        if author == UNKNOWN_AUTHOR:
            return False
        return author.is_ignoring_file(path)


def load_config(config_path: Path, *, required: bool = False) -> AuthorConfiguration:
    """Load the author configuration from disk.

    A missing file yields a dynamic configuration unless ``required`` is set, in
    which case ``FileNotFoundError`` is raised.
    """
    config_file = _resolve_config_path(config_path)

    if not config_file.exists():
        if required:
            raise FileNotFoundError(f"Author configuration not found: {config_file}")
        return AuthorConfiguration()

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{config_file.name} must contain a mapping at the root")

    ignore_globs = _as_str_list(data.get("ignore_globs"))

    if "authors" not in data:
        return AuthorConfiguration(ignore_globs=ignore_globs)

    raw_authors = data.get("authors")
    if raw_authors is None:
        raw_authors = []
    if not isinstance(raw_authors, list):
        raise ConfigError("'authors' must be a list of author entries")

    authors = [_parse_author(entry, index) for index, entry in enumerate(raw_authors)]
    return AuthorConfiguration(authors, fixed=True, ignore_globs=ignore_globs)


def _parse_author(entry: Any, index: int) -> Author:
    if isinstance(entry, str):
        git_id = entry.strip()
        if not git_id:
            raise ConfigError(f"Author entry #{index + 1} is empty")
        return Author(git_id=git_id)
    author_data = _as_dict(entry)
    git_id = _as_str(author_data.get("git_id"))
    if not git_id:
        raise ConfigError(f"Author entry #{index + 1} is missing 'git_id'")
    return Author(
        git_id=git_id,
        display_name=_as_str(author_data.get("display_name")) or "",
        emails=tuple(_as_str_list(author_data.get("emails"))),
        aliases=tuple(_as_str_list(author_data.get("aliases"))),
        ignore_globs=tuple(_as_str_list(author_data.get("ignore_globs"))),
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / _CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise ConfigError(f"{path.name} is not valid UTF-8: {exc}") from exc
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []


__all__ = ["AuthorConfiguration", "ConfigError", "load_config"]
