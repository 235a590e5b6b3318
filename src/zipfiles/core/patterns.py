# src/zipfiles/core/patterns.py
from pathlib import Path
from typing import Iterable, List, Tuple, Union

from wcmatch import glob

# Shell-glob dialect: '**' spans directories, '{a,b}' alternation, hidden
# entries are not special, '!' and '#' are literal characters.
GLOB_FLAGS = glob.GLOBSTAR | glob.BRACE | glob.DOTGLOB | glob.FORCEUNIX

GLOBSTAR_SUFFIX = "/**"

def normalize_patterns(patterns: Iterable[str]) -> Tuple[str, ...]:
    """
    Drops blank entries and a leading './'; patterns are always relative
    to the directory being scanned.
    """
    cleaned = []
    for pattern in patterns:
        pattern = pattern.strip()
        while pattern.startswith("./"):
            pattern = pattern[2:]
        if pattern:
            cleaned.append(pattern)
    return tuple(cleaned)

def subtree_patterns(patterns: Iterable[str]) -> Tuple[str, ...]:
    """
    For every 'X/**' pattern returns 'X': a directory matching X has all of
    its descendants matched by 'X/**', so it can be pruned whole.
    """
    prefixes: List[str] = []
    for pattern in patterns:
        if pattern.endswith(GLOBSTAR_SUFFIX):
            prefix = pattern[:-len(GLOBSTAR_SUFFIX)]
            if prefix:
                prefixes.append(prefix)
    return tuple(prefixes)

def is_path_matched(rel_path: Union[Path, str], patterns: Tuple[str, ...]) -> bool:
    """Checks a path relative to the scan root against normalized patterns."""
    if not patterns:
        return False
    path_str = rel_path.as_posix() if isinstance(rel_path, Path) else rel_path
    return glob.globmatch(path_str, list(patterns), flags=GLOB_FLAGS)

def literal_at_any_depth(name: str) -> str:
    """Pattern matching a file called exactly `name` in any directory."""
    return "**/" + glob.escape(name)
