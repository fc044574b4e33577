"""On-disk renaming of assets to the configured naming convention."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List

from .errors import FileSystemError, NameCollisionError
from .logging import get_logger
from .models import NamingConvention, RenameRecord
from .naming import normalize_file_name
from .scanner import AssetWalker

_TEMP_SUFFIX = ".assetgen-tmp"


@dataclass
class RenamePlan:
    """Validated renames for one root, applied as a unit by ``RenameEngine.apply``."""

    root: Path
    convention: NamingConvention
    records: List[RenameRecord] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.records)

    def as_map(self) -> Dict[Path, Path]:
        return {record.source: record.target for record in self.records}


class RenameEngine:
    """Renames asset files in place so their names follow a naming convention."""

    def __init__(self, walker: AssetWalker | None = None) -> None:
        self.walker = walker or AssetWalker()
        self.logger = get_logger("renamer")

    def rename_all(self, root: Path, convention: NamingConvention) -> Dict[Path, Path]:
        """Plan, validate, and apply every rename under ``root``."""
        plan = self.plan(root, convention)
        self.apply(plan)
        return plan.as_map()

    def plan(self, root: Path, convention: NamingConvention) -> RenamePlan:
        """Compute renames for ``root`` without touching the disk.

        Raises NameCollisionError when a target is already taken by another
        file, or when two sources normalize to the same destination.
        """
        plan = RenamePlan(root=root, convention=convention)
        if convention is NamingConvention.UNCHANGED:
            return plan

        claimed: Dict[Path, Path] = {}
        for asset in self.walker.walk(root):
            source = asset.path
            converted = normalize_file_name(source.name, convention)
            if converted == source.name:
                continue
            target = source.with_name(converted)
            if target in claimed:
                raise NameCollisionError(source, target, other=claimed[target])
            if _exists(target) and not _same_file(source, target):
                raise NameCollisionError(source, target)
            claimed[target] = source
            plan.records.append(RenameRecord(source=source, target=target))

        self.logger.debug(
            "Planned %d renames under %s (%s)", len(plan), root, convention.value
        )
        return plan

    def apply(self, plan: RenamePlan) -> None:
        for record in plan.records:
            if record.case_only:
                self._rename_via_temporary(record)
            else:
                _rename(record.source, record.target)
            self.logger.debug("Renamed %s -> %s", record.source.name, record.target.name)

    @staticmethod
    def _rename_via_temporary(record: RenameRecord) -> None:
        # Case-insensitive file systems treat both names as one path.
        temp = record.source.with_name(f".{record.source.name}{_TEMP_SUFFIX}")
        counter = 1
        while _exists(temp):
            temp = record.source.with_name(f".{record.source.name}{_TEMP_SUFFIX}{counter}")
            counter += 1
        _rename(record.source, temp)
        _rename(temp, record.target)


def _exists(path: Path) -> bool:
    return os.path.lexists(path)


def _same_file(first: Path, second: Path) -> bool:
    try:
        return os.path.samefile(first, second)
    except OSError as exc:
        raise FileSystemError(f"Cannot compare files ({exc.strerror})", second) from exc


def _rename(source: Path, target: Path) -> None:
    try:
        os.rename(source, target)
    except OSError as exc:
        raise FileSystemError(f"Cannot rename to {target.name} ({exc.strerror})", source) from exc


__all__ = ["RenameEngine", "RenamePlan"]
