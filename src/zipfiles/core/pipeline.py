# src/zipfiles/core/pipeline.py
import logging
from dataclasses import replace
from pathlib import Path
from typing import Callable, Iterable, Optional, Sequence, Union

from zipfiles.core.aggregator import Aggregator
from zipfiles.core.cancellation import CancellationToken
from zipfiles.core.collector import Collector
from zipfiles.errors import EmptySelectionError
from zipfiles.models import AggregationResult, Configuration, FileRecord, Phase, ProgressEvent

logger = logging.getLogger(__name__)

ProgressSink = Callable[[ProgressEvent], None]

def zip_files(
    roots: Sequence[Union[str, Path]],
    config: Configuration,
    *,
    bases: Optional[Iterable[Union[str, Path]]] = None,
    on_progress: Optional[ProgressSink] = None,
    cancellation: Optional[CancellationToken] = None,
    max_workers: Optional[int] = None,
) -> AggregationResult:
    """
    Runs discovery, reading and summarizing for one selection.

    Raises EmptySelectionError when nothing matched, CancelledError when the
    token is signalled, and ReadError when any selected file cannot be read.
    Problems with individual roots do not stop the run; they are returned
    in `AggregationResult.warnings`.
    """
    token = cancellation or CancellationToken()

    def emit(processed: int, total: int, phase: Phase) -> None:
        if on_progress is not None:
            on_progress(ProgressEvent(processed=processed, total=total, phase=phase))

    # 1. Discovery
    total_roots = len(roots)
    roots_done = 0

    def on_root(_root: Path) -> None:
        nonlocal roots_done
        roots_done += 1
        emit(roots_done, total_roots, Phase.DISCOVERING)

    emit(0, total_roots, Phase.DISCOVERING)
    collector = Collector(bases=bases)
    files = collector.collect(roots, config, cancellation=token, on_root=on_root)
    warnings = tuple(collector.warnings)

    if not files:
        logger.info("No files found matching the include/exclude patterns")
        raise EmptySelectionError(warnings)

    # 2. Reading
    total_files = len(files)
    files_done = 0

    def on_file(_record: FileRecord) -> None:
        nonlocal files_done
        files_done += 1
        emit(files_done, total_files, Phase.READING)

    emit(0, total_files, Phase.READING)
    result = Aggregator(max_workers=max_workers).aggregate(files, config, on_progress=on_file, cancellation=token)

    # 3. Finalizing
    emit(total_files, total_files, Phase.FINALIZING)
    logger.debug("Combined %d files into %d bytes", total_files, result.total_bytes)
    return replace(result, warnings=warnings)
