"""Pipeline orchestration for annotating authorship records."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence

from .analyzers import FileAnalyzer, discover_analyzers
from .config import AuthorConfiguration, load_config
from .logging import get_logger
from .models import Author, FileInfo
from .stores import dump_records, load_records


@dataclass
class AnnotationOutcome:
    """Result of annotating a record document."""

    path: Path
    files: List[FileInfo]
    contributions: Dict[Author, int]


class Orchestrator:
    """Runs per-file analyzers over authorship records that share one author registry."""

    def __init__(
        self,
        analyzers: Optional[Iterable[FileAnalyzer]] = None,
        *,
        max_workers: int = 1,
    ) -> None:
        if max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        self.analyzers = list(analyzers) if analyzers is not None else discover_analyzers()
        self.max_workers = max_workers
        self.logger = get_logger("orchestrator")

    def annotate(
        self, files: Sequence[FileInfo], author_config: AuthorConfiguration
    ) -> List[FileInfo]:
        """Apply every supporting analyzer to each file, in place."""
        self.logger.debug(
            "Annotating %d files with %d analyzers (workers=%d)",
            len(files),
            len(self.analyzers),
            self.max_workers,
        )
        if self.max_workers == 1 or len(files) <= 1:
            for file_info in files:
                self._annotate_file(file_info, author_config)
            return list(files)

        with ThreadPoolExecutor(
            max_workers=self.max_workers, thread_name_prefix="authortag"
        ) as executor:
            # list() surfaces the first analyzer exception, if any.
            list(
                executor.map(
                    lambda file_info: self._annotate_file(file_info, author_config),
                    files,
                )
            )
        return list(files)

    def run(
        self,
        record_path: Path,
        *,
        config_path: Path | None = None,
        output_path: Path | None = None,
    ) -> AnnotationOutcome:
        """Load records and configuration, annotate, and write the result."""
        record_path = record_path.expanduser().resolve()
        self.logger.info("Starting annotation run for %s", record_path)
        if config_path is not None:
            author_config = load_config(config_path, required=True)
        else:
            author_config = load_config(record_path.parent)
        self.logger.debug(
            "Loaded %d configured authors (fixed=%s)",
            len(author_config.authors),
            author_config.is_fixed,
        )

        files = load_records(record_path, author_config)
        self.logger.debug("Loaded %d file records", len(files))
        self.annotate(files, author_config)

        destination = (output_path or record_path).expanduser()
        dump_records(files, destination)
        self.logger.info("Annotated records written to %s", destination)
        return AnnotationOutcome(
            path=destination,
            files=files,
            contributions=_merge_contributions(files),
        )

    def _annotate_file(
        self, file_info: FileInfo, author_config: AuthorConfiguration
    ) -> None:
        for analyzer in self.analyzers:
            if analyzer.supports(file_info):
                analyzer.analyze(file_info, author_config)


def _merge_contributions(files: Iterable[FileInfo]) -> Dict[Author, int]:
    totals: Dict[Author, int] = {}
    for file_info in files:
        for author, count in file_info.author_contributions().items():
            totals[author] = totals.get(author, 0) + count
    return totals


__all__ = ["AnnotationOutcome", "Orchestrator"]
