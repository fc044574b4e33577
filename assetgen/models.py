"""Core data models shared across assetgen components."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, Optional


class NamingConvention(str, Enum):
    """File naming convention applied to every asset under a root."""

    KEBAB_CASE = "kebab-case"
    SNAKE_CASE = "snake_case"
    UNCHANGED = "unchanged"


class PlatformMode(str, Enum):
    """Leaf representation used for manifest entries."""

    MODULE_IMPORT = "module-import"
    RUNTIME_RESOLVED = "runtime-resolved"
    STATIC_DESCRIPTOR = "static-descriptor"


class HeaderMode(str, Enum):
    """Banner written at the top of the generated module."""

    SHORT_INFO = "short_info"
    HIDDEN = "hidden"


@dataclass(frozen=True)
class AssetFile:
    """An eligible asset discovered on disk."""

    path: Path
    extension: str


@dataclass(frozen=True)
class RenameRecord:
    """Original and destination path of a single rename."""

    source: Path
    target: Path

    @property
    def case_only(self) -> bool:
        return self.source.name != self.target.name and (
            self.source.name.lower() == self.target.name.lower()
        )


@dataclass(frozen=True)
class AssetEntry:
    """An asset placed in the manifest, keyed by its relative key path."""

    key_path: str
    relative_path: str
    path: Path
    root: Path


@dataclass(frozen=True)
class StaticDescriptor:
    """Generation-time layout metadata for a publicly served image."""

    src: str
    width: int
    height: int


@dataclass
class GenerationSummary:
    """Outcome of one successful generator run."""

    primary_root: Path
    output_path: Path
    naming_convention: NamingConvention
    primary_count: int
    secondary_count: int = 0
    secondary_root: Optional[Path] = None
    renamed: Dict[Path, Path] = field(default_factory=dict)

    @property
    def total(self) -> int:
        return self.primary_count + self.secondary_count


class OutputLanguage(str, Enum):
    """Source language of the generated module."""

    TYPESCRIPT = "typescript"
    JAVASCRIPT = "javascript"

    @property
    def extension(self) -> str:
        return "ts" if self is OutputLanguage.TYPESCRIPT else "js"
