"""Directory walking for eligible image assets."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Collection, Iterator, List

from .errors import FileSystemError
from .logging import get_logger
from .models import AssetFile
from .naming import split_extension

IMAGE_EXTENSIONS = frozenset(
    {
        ".png",
        ".jpg",
        ".jpeg",
        ".webp",
        ".gif",
        ".bmp",
        ".svg",
        ".avif",
    }
)

_LOGGER = get_logger("scanner")


class AssetWalker:
    """Recursively lists eligible asset files under a root directory."""

    def __init__(
        self,
        extensions: Collection[str] = IMAGE_EXTENSIONS,
        *,
        exclude_names: Collection[str] = (),
    ) -> None:
        self.extensions = frozenset(ext.lower() for ext in extensions)
        self.exclude_names = frozenset(exclude_names)

    def walk(self, root: Path) -> List[AssetFile]:
        """Return assets under ``root`` sorted by path."""
        if not root.exists():
            raise FileSystemError("Asset directory not found", root)
        if not root.is_dir():
            raise FileSystemError("Asset path is not a directory", root)

        assets = [
            AssetFile(path=path, extension=split_extension(path.name)[1])
            for path in self._iter_files(root)
        ]
        assets.sort(key=lambda asset: asset.path.as_posix())
        _LOGGER.debug("Found %d assets under %s", len(assets), root)
        return assets

    def _iter_files(self, root: Path) -> Iterator[Path]:
        def _raise(exc: OSError) -> None:
            raise FileSystemError(f"Cannot list directory ({exc.strerror})", Path(exc.filename or root))

        for dirpath, dirnames, filenames in os.walk(root, onerror=_raise):
            dirnames.sort()
            current_dir = Path(dirpath)
            for filename in filenames:
                if filename in self.exclude_names:
                    continue
                path = current_dir / filename
                if split_extension(filename)[1].lower() not in self.extensions:
                    continue
                if not path.is_file():
                    continue
                yield path


def relative_path(path: Path, root: Path) -> str:
    """Return the slash-separated path of ``path`` below ``root``."""
    return path.relative_to(root).as_posix()


def relative_key_path(path: Path, root: Path) -> str:
    """Return the root-relative path with the final segment's extension stripped."""
    rel = relative_path(path, root)
    directory, _, name = rel.rpartition("/")
    stem = split_extension(name)[0]
    return f"{directory}/{stem}" if directory else stem


__all__ = ["AssetWalker", "IMAGE_EXTENSIONS", "relative_key_path", "relative_path"]
