"""Per-file authorship analyzers and discovery utilities."""

from __future__ import annotations

from typing import Callable, List, Sequence, Set

from .annotator import AnnotatorAnalyzer, apply_annotations
from .base import FileAnalyzer

_BUILTIN_FACTORIES: dict[str, Callable[[], FileAnalyzer]] = {
    "annotator": AnnotatorAnalyzer,
}


def discover_analyzers(enabled: Sequence[str] | None = None) -> List[FileAnalyzer]:
    """Return instantiated analyzers, honoring optional enabled names."""

    enabled_set: Set[str] | None = None
    if enabled is not None:
        enabled_set = {name.lower() for name in enabled}

    analyzers: List[FileAnalyzer] = []
    for name, factory in _BUILTIN_FACTORIES.items():
        if enabled_set is not None and name not in enabled_set:
            continue
        analyzers.append(factory())
        if enabled_set is not None:
            enabled_set.discard(name)

    if enabled_set:
        missing = ", ".join(sorted(enabled_set))
        raise ValueError(f"Unknown analyzers requested: {missing}")

    return analyzers


__all__ = [
    "AnnotatorAnalyzer",
    "FileAnalyzer",
    "apply_annotations",
    "discover_analyzers",
]
