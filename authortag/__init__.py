"""Annotation-driven line authorship overrides."""

from .analyzers import AnnotatorAnalyzer, apply_annotations
from .config import AuthorConfiguration, ConfigError, load_config
from .models import UNKNOWN_AUTHOR, Author, FileInfo, LineInfo

__all__ = [
    "AnnotatorAnalyzer",
    "Author",
    "AuthorConfiguration",
    "ConfigError",
    "FileInfo",
    "LineInfo",
    "UNKNOWN_AUTHOR",
    "apply_annotations",
    "load_config",
]
