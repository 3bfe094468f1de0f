import logging
import os
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Sequence

import pathspec

from .errors import FileProcessingError, InvalidArgumentError, InvalidPathError
from .formatters.base import SourceFormatter
from .models import FileOutcome, FileStatus, FileTask, FormatterConfiguration, RunSummary
from .pipeline import FormatterPipeline
from .rewriter import FileRewriter

logger = logging.getLogger(__name__)


class TraversalEngine:
    """Walks a file or directory tree and formats every eligible file."""

    def __init__(
        self,
        config: FormatterConfiguration,
        formatters: Sequence[SourceFormatter],
        jobs: int = 1,
        exclude: Iterable[str] = (),
        rewriter: Optional[FileRewriter] = None,
    ):
        self.config = config
        self.formatters = list(formatters)
        self.jobs = max(1, jobs)
        self.exclude = tuple(exclude)
        self.exclude_spec = self._build_exclude_spec(self.exclude)
        self.pipeline = FormatterPipeline(config)
        self.rewriter = rewriter or FileRewriter()

    def visit(self, root: Path) -> RunSummary:
        """Format root (a file or a directory) and summarize the per-file outcomes."""
        root = Path(root)
        if root.is_file():
            files: Iterable[Path] = [root]
        elif root.is_dir():
            files = self.discover(root)
        else:
            raise InvalidPathError(f"unsupported path : {root}")

        if self.jobs > 1:
            outcomes = self._process_parallel(files)
        else:
            outcomes = [self.process(path) for path in files]
        return RunSummary(outcomes=outcomes)

    def discover(self, root: Path) -> Iterator[Path]:
        """Yield every regular file under root, without following symbolic links."""

        def on_error(error: OSError) -> None:
            logger.warning("Cannot list %s: %s", error.filename, error.strerror)

        for dirpath, dirnames, filenames in os.walk(root, onerror=on_error, followlinks=False):
            current = Path(dirpath)
            dirnames[:] = sorted(d for d in dirnames if not self._is_excluded(current / d, root, is_dir=True))

            for name in sorted(filenames):
                path = current / name
                if path.is_symlink():
                    logger.debug("Not following symbolic link %s", path)
                    continue
                if not path.is_file():
                    logger.debug("Ignoring special file %s", path)
                    continue
                if self._is_excluded(path, root):
                    logger.debug("Excluded %s", path)
                    continue
                yield path

    def process(self, path: Path) -> FileOutcome:
        """Run the pipeline on one file and rewrite it if needed."""
        applicable = [f for f in self.formatters if f.is_applicable(path)]
        names = [f.name for f in applicable]
        if not applicable:
            logger.debug("No applicable formatter for %s", path)
            return FileOutcome(path=path, status=FileStatus.SKIPPED)

        try:
            task = FileTask(path=path, original_bytes=path.read_bytes(), encoding=self.config.encoding)
            formatted = self.pipeline.apply(task.original_bytes, applicable)
            changed = self.rewriter.rewrite(task.path, formatted, current=task.original_bytes)
        except FileProcessingError as e:
            logger.error("Failed to format %s: %s", path, e.message)
            return FileOutcome(path=path, status=FileStatus.FAILED, formatters=names, error=e.message)
        except OSError as e:
            message = e.strerror or str(e)
            logger.error("Failed to read %s: %s", path, message)
            return FileOutcome(path=path, status=FileStatus.FAILED, formatters=names, error=message)

        status = FileStatus.CHANGED if changed else FileStatus.UNCHANGED
        return FileOutcome(path=path, status=status, formatters=names)

    def _process_parallel(self, files: Iterable[Path]) -> List[FileOutcome]:
        outcomes = []
        executor = ThreadPoolExecutor(max_workers=self.jobs)
        try:
            futures = [executor.submit(self.process, path) for path in files]
            for future in as_completed(futures):
                outcomes.append(future.result())
        except BaseException:
            # In-flight files finish or are abandoned; pending ones never start
            executor.shutdown(wait=False, cancel_futures=True)
            raise
        executor.shutdown(wait=True)

        outcomes.sort(key=lambda o: str(o.path))
        return outcomes

    @staticmethod
    def _build_exclude_spec(patterns: Sequence[str]) -> Optional[pathspec.PathSpec]:
        """Compile exclude patterns with .gitignore semantics."""
        if not patterns:
            return None
        try:
            return pathspec.PathSpec.from_lines("gitignore", patterns)
        except ValueError as e:
            raise InvalidArgumentError(f"exclude : {e}") from e

    def _is_excluded(self, path: Path, root: Path, is_dir: bool = False) -> bool:
        if self.exclude_spec is None:
            return False
        relative = path.relative_to(root).as_posix()
        # Directory patterns such as build/ only match with the trailing slash
        if is_dir:
            relative += "/"
        return self.exclude_spec.match_file(relative)
