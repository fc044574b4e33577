"""Error taxonomy raised by the asset manifest pipeline."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Sequence


class AssetGenError(RuntimeError):
    """Base class for every failure that aborts a generation run."""


class ConfigurationError(AssetGenError):
    """Raised when a required directory or asset class is not configured."""


class NameCollisionError(AssetGenError):
    """Raised when a normalized file name would overwrite an unrelated file."""

    def __init__(self, source: Path, target: Path, *, other: Path | None = None) -> None:
        if other is not None:
            message = (
                f"Cannot rename {source} to {target.name}: {other} normalizes to the same name"
            )
        else:
            message = f"Cannot rename {source} to {target.name}: target file already exists"
        super().__init__(message)
        self.source = source
        self.target = target
        self.other = other


class DuplicateOverlapError(AssetGenError):
    """Raised when the same relative key path exists in both asset roots."""

    def __init__(self, duplicates: Iterable[str]) -> None:
        self.duplicates: List[str] = sorted(duplicates)
        listing = "\n".join(f"  - {item}" for item in self.duplicates)
        super().__init__(
            f"The following files exist in both base and public directories:\n{listing}"
        )


class FileSystemError(AssetGenError):
    """Raised when an I/O operation fails for a specific path."""

    def __init__(self, message: str, path: Path) -> None:
        super().__init__(f"{message}: {path}")
        self.path = path


class TreeKeyConflictError(AssetGenError):
    """Raised when two assets resolve to the same manifest key path."""

    def __init__(self, key_path: Sequence[str], sources: Sequence[str]) -> None:
        self.key_path = list(key_path)
        self.sources = list(sources)
        joined = ".".join(self.key_path)
        super().__init__(
            f"Manifest key '{joined}' is claimed by more than one entry: {', '.join(self.sources)}"
        )


__all__ = [
    "AssetGenError",
    "ConfigurationError",
    "DuplicateOverlapError",
    "FileSystemError",
    "NameCollisionError",
    "TreeKeyConflictError",
]
