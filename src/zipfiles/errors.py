# src/zipfiles/errors.py
from pathlib import Path
from typing import Optional, Sequence, Tuple, Union

PathLike = Union[str, Path]

class ZipFilesError(Exception):
    """Base class for every error raised by zipfiles."""

class ConfigError(ZipFilesError):
    """A config file exists but is not valid JSON or has the wrong shape."""

    def __init__(self, message: str, path: Optional[PathLike] = None):
        self.path = Path(path) if path is not None else None
        if self.path is not None:
            message = f"{self.path}: {message}"
        super().__init__(message)

class DiscoveryError(ZipFilesError):
    """A root is missing or a directory could not be listed."""

    def __init__(self, path: PathLike, reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Cannot discover files in '{self.path}': {reason}")

class EmptySelectionError(ZipFilesError):
    def __init__(self, warnings: Sequence[DiscoveryError] = ()):
        self.warnings: Tuple[DiscoveryError, ...] = tuple(warnings)
        super().__init__("No files found matching the include/exclude patterns.")

class ReadError(ZipFilesError):
    def __init__(self, path: PathLike, reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Failed to read '{self.path}': {reason}")

class CancelledError(ZipFilesError):
    def __init__(self, message: str = "File combination was cancelled."):
        super().__init__(message)
