# tests/test_aggregator.py
import threading
import time

import pytest

from zipfiles.core.aggregator import Aggregator, aggregate_files
from zipfiles.core.cancellation import CancellationToken
from zipfiles.core.reader import ContentReader
from zipfiles.errors import CancelledError, ReadError
from zipfiles.models import Configuration, FileRecord

PLAIN = Configuration(include_patterns=(), exclude_patterns=(), annotate=False)
ANNOTATED = Configuration(include_patterns=(), exclude_patterns=(), annotate=True)

@pytest.fixture
def five_files(tmp_path):
    records = []
    for i in range(5):
        path = tmp_path / f"file{i}.py"
        path.write_text(f"value = {i}\n", encoding="utf-8")
        records.append(FileRecord(absolute_path=path, relative_path=path.name))
    return records

class SlowFirstReader(ContentReader):
    """Makes earlier files finish last so completion order differs from list order."""

    def read(self, record, annotate):
        index = int(record.absolute_path.stem[-1])
        time.sleep(0.02 * (5 - index))
        return super().read(record, annotate)

def test_output_preserves_list_order(five_files):
    result = Aggregator(max_workers=5, reader=SlowFirstReader()).aggregate(five_files, PLAIN)

    assert result.combined_text == "".join(f"value = {i}\n\n" for i in range(5))
    assert result.files == tuple(five_files)

def test_annotated_blocks(five_files):
    result = aggregate_files(five_files[:2], ANNOTATED)
    assert result.combined_text == "// file0.py\nvalue = 0\n\n// file1.py\nvalue = 1\n\n"

def test_progress_called_once_per_file(five_files):
    seen = []
    aggregate_files(five_files, PLAIN, on_progress=seen.append)

    assert sorted(r.relative_path for r in seen) == [r.relative_path for r in five_files]

def test_progress_called_on_caller_thread(five_files):
    threads = set()
    Aggregator(max_workers=4).aggregate(five_files, PLAIN, on_progress=lambda r: threads.add(threading.get_ident()))

    assert threads == {threading.get_ident()}

def test_metadata(tmp_path):
    a = tmp_path / "a.ts"
    a.write_text("  0123456789  \n", encoding="utf-8")
    b = tmp_path / "b.md"
    b.write_text("abcde", encoding="utf-8")
    records = [FileRecord(a, "a.ts"), FileRecord(b, "b.md")]

    result = aggregate_files(records, PLAIN)

    assert result.total_bytes == len("0123456789\n\nabcde\n\n".encode("utf-8"))
    assert result.distinct_extensions == {".ts", ".md"}
    assert result.summary.file_count == 2

def test_cancel_after_two_files(five_files):
    token = CancellationToken()
    seen = []

    def on_progress(record):
        seen.append(record)
        if len(seen) == 2:
            token.cancel()

    with pytest.raises(CancelledError):
        Aggregator(max_workers=1).aggregate(five_files, PLAIN, on_progress=on_progress, cancellation=token)

    assert len(seen) == 2

def test_cancel_before_start(five_files):
    token = CancellationToken()
    token.cancel()
    seen = []

    with pytest.raises(CancelledError):
        aggregate_files(five_files, PLAIN, on_progress=seen.append, cancellation=token)
    assert seen == []

def test_cancel_on_last_file_still_cancels(five_files):
    token = CancellationToken()
    seen = []

    def on_progress(record):
        seen.append(record)
        if len(seen) == len(five_files):
            token.cancel()

    with pytest.raises(CancelledError):
        aggregate_files(five_files, PLAIN, on_progress=on_progress, cancellation=token)

def test_fail_fast_on_unreadable_file(five_files):
    five_files[2].absolute_path.unlink()

    with pytest.raises(ReadError) as excinfo:
        Aggregator(max_workers=1).aggregate(five_files, PLAIN)

    assert excinfo.value.path == five_files[2].absolute_path
    assert "file2.py" in str(excinfo.value)

def test_empty_file_list():
    result = aggregate_files([], PLAIN)

    assert result.combined_text == ""
    assert result.total_bytes == 0
    assert result.distinct_extensions == frozenset()
