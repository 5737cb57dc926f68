"""Base classes for per-file authorship analyzers."""

from abc import ABC, abstractmethod

from ..config import AuthorConfiguration
from ..models import FileInfo


class FileAnalyzer(ABC):
    """Contract for analyzers that refine the line authorship of one file."""

    @abstractmethod
    def supports(self, file_info: FileInfo) -> bool:
        """Return True when this analyzer should run for the file."""

    @abstractmethod
    def analyze(self, file_info: FileInfo, author_config: AuthorConfiguration) -> None:
        """Update ``file_info`` in place, registering authors in ``author_config`` as needed."""
