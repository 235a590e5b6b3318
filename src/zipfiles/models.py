# src/zipfiles/models.py
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import FrozenSet, Optional, Tuple

@dataclass(frozen=True)
class Configuration:
    """Resolved settings for a single run."""
    include_patterns: Tuple[str, ...]
    exclude_patterns: Tuple[str, ...]
    annotate: bool = True

@dataclass(frozen=True)
class FileRecord:
    """Immutable data class identifying one selected file."""
    absolute_path: Path
    relative_path: str

    @property
    def extension(self) -> str:
        return self.absolute_path.suffix.lower()

class Phase(Enum):
    DISCOVERING = "discovering"
    READING = "reading"
    FINALIZING = "finalizing"

@dataclass(frozen=True)
class ProgressEvent:
    processed: int
    total: int
    phase: Phase

@dataclass(frozen=True)
class Summary:
    file_count: int
    total_bytes: int
    distinct_extensions: FrozenSet[str]
    estimated_tokens: Optional[int] = None

@dataclass(frozen=True)
class AggregationResult:
    combined_text: str
    files: Tuple[FileRecord, ...]
    total_bytes: int
    distinct_extensions: FrozenSet[str]
    # DiscoveryError instances collected before aggregation
    warnings: Tuple[Exception, ...] = ()

    @property
    def summary(self) -> Summary:
        return Summary(
            file_count=len(self.files),
            total_bytes=self.total_bytes,
            distinct_extensions=self.distinct_extensions,
        )
