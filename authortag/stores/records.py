"""JSON storage for per-file line authorship records."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from ..config import AuthorConfiguration
from ..models import UNKNOWN_AUTHOR, Author, FileInfo, LineInfo

_RECORD_VERSION = 1


class RecordError(RuntimeError):
    """Raised when an authorship record document cannot be read."""


def load_records(path: Path, author_config: AuthorConfiguration) -> List[FileInfo]:
    """Load file records from ``path``, resolving line authors through ``author_config``."""
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        raise
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise RecordError(f"Failed to read {path.name}: {exc}") from exc

    if not isinstance(data, dict):
        raise RecordError(f"{path.name} must contain a JSON object at the root")
    if data.get("version") != _RECORD_VERSION:
        raise RecordError(
            f"Unsupported record version {data.get('version')!r} in {path.name}"
        )
    entries = data.get("files")
    if not isinstance(entries, list):
        raise RecordError(f"{path.name} is missing a 'files' list")

    files: List[FileInfo] = []
    for payload in entries:
        file_info = _file_from_dict(payload, author_config)
        if file_info is not None:
            files.append(file_info)
    return files


def dump_records(files: Sequence[FileInfo], path: Path) -> None:
    payload = {
        "version": _RECORD_VERSION,
        "files": [_file_to_dict(file_info) for file_info in files],
    }
    text = json.dumps(payload, indent=2)
    path.parent.mkdir(parents=True, exist_ok=True)
    # The existing record stays intact until the new one is fully written.
    temp_path = path.with_name(f".{path.name}.{os.getpid()}.tmp")
    try:
        temp_path.write_text(text, encoding="utf-8")
        temp_path.replace(path)
    except OSError:
        temp_path.unlink(missing_ok=True)
        raise


def _file_to_dict(file_info: FileInfo) -> Dict[str, object]:
    return {
        "path": file_info.path,
        "lines": [
            {
                "line_number": line.line_number,
                "content": line.content,
                "author": line.author.git_id,
            }
            for line in file_info.lines
        ],
        "contributions": {
            author.git_id: count
            for author, count in file_info.author_contributions().items()
        },
    }


def _file_from_dict(
    payload: object, author_config: AuthorConfiguration
) -> Optional[FileInfo]:
    if not isinstance(payload, dict):
        return None
    file_path = payload.get("path")
    raw_lines = payload.get("lines")
    if not isinstance(file_path, str) or not isinstance(raw_lines, list):
        return None
    lines: List[LineInfo] = []
    for index, raw in enumerate(raw_lines, start=1):
        if not isinstance(raw, dict) or not isinstance(raw.get("content"), str):
            continue
        line_number = raw.get("line_number")
        if not isinstance(line_number, int):
            line_number = index
        lines.append(
            LineInfo(
                line_number=line_number,
                content=raw["content"],
                author=_resolve_author(raw.get("author"), author_config),
            )
        )
    return FileInfo(path=file_path, lines=lines)


def _resolve_author(name: object, author_config: AuthorConfiguration) -> Author:
    if not isinstance(name, str) or not name.strip():
        return UNKNOWN_AUTHOR
    return author_config.find_or_register(name.strip())


__all__ = ["RecordError", "dump_records", "load_records"]
