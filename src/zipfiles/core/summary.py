# src/zipfiles/core/summary.py
import logging
from functools import lru_cache
from typing import Sequence

import tiktoken

from zipfiles.core.reader import ENCODING
from zipfiles.models import FileRecord, Summary

logger = logging.getLogger(__name__)

TOKEN_ENCODING = "cl100k_base"
# Rough characters-per-token ratio for English text and code
CHARS_PER_TOKEN = 4

def summarize(files: Sequence[FileRecord], combined_text: str, encoding: str = ENCODING) -> Summary:
    """
    Derives the report for a finished run.
    `total_bytes` is the encoded size of the combined text, not the sum of
    the source files.
    """
    if not files and combined_text:
        raise ValueError("combined text given without any files")

    return Summary(
        file_count=len(files),
        total_bytes=len(combined_text.encode(encoding)),
        distinct_extensions=frozenset(f.extension for f in files if f.extension),
    )

@lru_cache(maxsize=None)
def _get_encoding(name: str = TOKEN_ENCODING) -> "tiktoken.Encoding":
    # The BPE file is downloaded and cached on first use
    return tiktoken.get_encoding(name)

def estimate_tokens(text: str) -> int:
    """Token count of the combined text as an LLM would see it."""
    try:
        encoding = _get_encoding()
    except (OSError, ValueError) as e:
        # requests' errors are OSErrors; ValueError covers an unknown encoding
        logger.debug("Token encoding unavailable, estimating from length: %s", e)
        return len(text) // CHARS_PER_TOKEN
    # Source files may legitimately contain strings like '<|endoftext|>'
    return len(encoding.encode(text, disallowed_special=()))

def format_size_kb(total_bytes: int) -> str:
    return f"{total_bytes / 1024:.2f} KB"

def format_report(summary: Summary) -> str:
    """Human-readable notification text for a successful run."""
    plural = "" if summary.file_count == 1 else "s"
    file_types = ", ".join(sorted(summary.distinct_extensions)) or "(none)"
    lines = [
        f"Code from {summary.file_count} file{plural} has been combined.",
        "",
        "Metadata:",
        f"- Number of files: {summary.file_count}",
        f"- Total size: {format_size_kb(summary.total_bytes)}",
        f"- File types: {file_types}",
    ]
    if summary.estimated_tokens is not None:
        lines.append(f"- Estimated tokens: {summary.estimated_tokens}")
    return "\n".join(lines)
