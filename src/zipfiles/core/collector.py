# src/zipfiles/core/collector.py
import logging
import os
import stat
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple, Union

from zipfiles.core.cancellation import CancellationToken
from zipfiles.core.scanner import PatternMatcher
from zipfiles.errors import DiscoveryError
from zipfiles.models import Configuration, FileRecord

logger = logging.getLogger(__name__)

# Root kinds
DIRECTORY = "directory"
FILE = "file"

def absolute_path(path: Union[str, Path]) -> Path:
    """Absolute, normalized path that keeps the symlinks the user chose."""
    return Path(os.path.abspath(path))

def relative_to_bases(path: Path, bases: Sequence[Path]) -> str:
    """
    Expresses `path` relative to the deepest base directory containing it,
    using '/' separators. Falls back to the absolute path.
    """
    best: Optional[Path] = None
    for base in bases:
        try:
            path.relative_to(base)
        except ValueError:
            continue
        if best is None or len(base.parts) > len(best.parts):
            best = base

    if best is None:
        return path.as_posix()
    return path.relative_to(best).as_posix()

class Collector:
    """
    Turns user-selected roots into a unique, ordered list of FileRecords.

    Ordering: roots in the order given; inside a directory root, matches
    sorted by relative POSIX path. The first occurrence of a file (by its
    resolved path) wins, but records keep the path as selected, so a
    symlink given as a root is reported under its own name.

    A root given as a file is always kept, even if an exclude pattern would
    have matched it during a directory scan. A root that is missing or
    cannot be inspected becomes a warning; the other roots still run.
    """

    def __init__(self, bases: Optional[Iterable[Union[str, Path]]] = None, matcher: Optional[PatternMatcher] = None):
        self.bases = [absolute_path(b) for b in bases] if bases is not None else None
        self.matcher = matcher or PatternMatcher()
        self.warnings: List[DiscoveryError] = []

    def _classify(self, root: Path) -> Optional[str]:
        try:
            mode = os.stat(root).st_mode
        except FileNotFoundError:
            self._warn(DiscoveryError(root, "path does not exist"))
            return None
        except OSError as e:
            self._warn(DiscoveryError(root, e.strerror or str(e)))
            return None
        return DIRECTORY if stat.S_ISDIR(mode) else FILE

    def _warn(self, warning: DiscoveryError) -> None:
        logger.warning("Skipping root: %s", warning)
        self.warnings.append(warning)

    def collect(
        self,
        roots: Sequence[Union[str, Path]],
        config: Configuration,
        cancellation: Optional[CancellationToken] = None,
        on_root: Optional[Callable[[Path], None]] = None,
    ) -> List[FileRecord]:
        classified: List[Tuple[Path, Optional[str]]] = [
            (root, self._classify(root)) for root in (absolute_path(r) for r in roots)
        ]
        bases = self.bases
        if bases is None:
            bases = [root for root, kind in classified if kind == DIRECTORY]

        seen: Dict[Path, FileRecord] = {}

        for root, kind in classified:
            if cancellation is not None:
                cancellation.raise_if_cancelled()

            if kind == DIRECTORY:
                matched = self.matcher.match(root, config.include_patterns, config.exclude_patterns)
                self._fold_matcher_warnings()
                candidates = sorted(matched, key=lambda p: p.relative_to(root).as_posix())
            elif kind == FILE:
                candidates = [root]
            else:
                candidates = []

            for path in candidates:
                key = path.resolve()
                if key in seen:
                    continue
                seen[key] = FileRecord(absolute_path=path, relative_path=relative_to_bases(path, bases))

            logger.debug("Root %s: %d candidates, %d files so far", root, len(candidates), len(seen))
            if on_root is not None:
                on_root(root)

        return list(seen.values())

    def _fold_matcher_warnings(self) -> None:
        self.warnings.extend(self.matcher.warnings)
        self.matcher.warnings = []

def collect_files(
    roots: Sequence[Union[str, Path]],
    config: Configuration,
    bases: Optional[Iterable[Union[str, Path]]] = None,
) -> List[FileRecord]:
    return Collector(bases=bases).collect(roots, config)
