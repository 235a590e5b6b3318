# src/zipfiles/core/scanner.py
import logging
import os
from pathlib import Path
from typing import List, Sequence, Set, Union

from zipfiles.core.patterns import is_path_matched, normalize_patterns, subtree_patterns
from zipfiles.errors import DiscoveryError

logger = logging.getLogger(__name__)

class PatternMatcher:
    """
    Expands include/exclude globs against a directory.
    Unreadable directories are skipped and recorded in `warnings`.
    """

    def __init__(self):
        self.warnings: List[DiscoveryError] = []

    def _on_walk_error(self, error: OSError) -> None:
        path = error.filename or "<unknown>"
        warning = DiscoveryError(path, error.strerror or str(error))
        logger.warning("Skipping unreadable directory: %s", warning)
        self.warnings.append(warning)

    def match(
        self,
        base_directory: Union[str, Path],
        include_patterns: Sequence[str],
        exclude_patterns: Sequence[str],
    ) -> Set[Path]:
        """
        Walks the directory tree, pruning excluded directories before
        descending into them, and returns the absolute paths of regular
        files that match an include pattern and no exclude pattern.
        Patterns are anchored at `base_directory`: '*.py' only matches
        files directly inside it, '**/*.py' matches at any depth.
        Directory symlinks are not followed.
        """
        base_dir = Path(os.path.abspath(base_directory))
        includes = normalize_patterns(include_patterns)
        excludes = normalize_patterns(exclude_patterns)
        excluded_subtrees = subtree_patterns(excludes)
        matches: Set[Path] = set()

        # os.walk lets us edit `dirs` in place so excluded subtrees are never entered
        for root, dirs, files in os.walk(base_dir, onerror=self._on_walk_error):
            root_path = Path(root)

            # --- 1. Prune Directories ---
            kept = []
            for d in sorted(dirs):
                dir_rel_path = (root_path / d).relative_to(base_dir)
                if is_path_matched(dir_rel_path, excluded_subtrees):
                    logger.debug("Pruning directory: %s", dir_rel_path.as_posix())
                    continue
                kept.append(d)
            dirs[:] = kept

            # --- 2. Process Files ---
            for f in files:
                file_abs_path = root_path / f
                rel_path = file_abs_path.relative_to(base_dir)

                # Exclude always wins over include
                if is_path_matched(rel_path, excludes):
                    continue
                if not is_path_matched(rel_path, includes):
                    continue
                # Broken links, sockets, fifos
                if not os.path.isfile(file_abs_path):
                    logger.debug("Skipping non-regular file: %s", rel_path.as_posix())
                    continue

                matches.add(file_abs_path)

        logger.debug("Matched %d files under %s", len(matches), base_dir)
        return matches

def match_files(
    base_directory: Union[str, Path],
    include_patterns: Sequence[str],
    exclude_patterns: Sequence[str],
) -> Set[Path]:
    return PatternMatcher().match(base_directory, include_patterns, exclude_patterns)
