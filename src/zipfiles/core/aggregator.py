# src/zipfiles/core/aggregator.py
import logging
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from typing import Callable, Dict, List, Optional, Sequence

from zipfiles.core.cancellation import CancellationToken
from zipfiles.core.reader import ContentReader
from zipfiles.core.summary import summarize
from zipfiles.models import AggregationResult, Configuration, FileRecord

logger = logging.getLogger(__name__)

class Aggregator:
    """
    Reads files concurrently and joins them in list order.

    Reads run on a thread pool; completions are handled on the calling
    thread, so `on_progress` is never called concurrently. Each future
    carries the index of its file, and blocks are joined by index rather
    than by completion order.

    The first ReadError aborts the run. Cancellation is checked after every
    completed read; reads already running are allowed to finish and their
    results are dropped.
    """

    def __init__(self, max_workers: Optional[int] = None, reader: Optional[ContentReader] = None):
        self.max_workers = max_workers
        self.reader = reader or ContentReader()

    def aggregate(
        self,
        files: Sequence[FileRecord],
        config: Configuration,
        on_progress: Optional[Callable[[FileRecord], None]] = None,
        cancellation: Optional[CancellationToken] = None,
    ) -> AggregationResult:
        token = cancellation or CancellationToken()
        files = list(files)
        logger.debug("Combining %d files", len(files))
        token.raise_if_cancelled()

        blocks: List[Optional[str]] = [None] * len(files)

        if files:
            with ThreadPoolExecutor(max_workers=self.max_workers, thread_name_prefix="zipfiles") as executor:
                future_to_index: Dict[Future, int] = {
                    executor.submit(self.reader.read, record, config.annotate): index
                    for index, record in enumerate(files)
                }
                try:
                    for future in as_completed(future_to_index):
                        index = future_to_index[future]
                        token.raise_if_cancelled()
                        blocks[index] = future.result()
                        if on_progress is not None:
                            on_progress(files[index])
                except BaseException:
                    # Stop queued reads; running ones finish when the pool shuts down
                    for pending in future_to_index:
                        pending.cancel()
                    raise

        token.raise_if_cancelled()
        combined_text = "".join(blocks)
        summary = summarize(files, combined_text)
        return AggregationResult(
            combined_text=combined_text,
            files=tuple(files),
            total_bytes=summary.total_bytes,
            distinct_extensions=summary.distinct_extensions,
        )

def aggregate_files(
    files: Sequence[FileRecord],
    config: Configuration,
    on_progress: Optional[Callable[[FileRecord], None]] = None,
    cancellation: Optional[CancellationToken] = None,
) -> AggregationResult:
    return Aggregator().aggregate(files, config, on_progress, cancellation)
