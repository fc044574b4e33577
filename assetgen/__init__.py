"""Asset manifest generation for front-end projects."""

from .config import AssetGenConfig, load_config
from .errors import (
    AssetGenError,
    ConfigurationError,
    DuplicateOverlapError,
    FileSystemError,
    NameCollisionError,
    TreeKeyConflictError,
)
from .models import GenerationSummary, HeaderMode, NamingConvention, OutputLanguage, PlatformMode
from .orchestrator import AssetGenerator

__all__ = [
    "AssetGenConfig",
    "AssetGenError",
    "AssetGenerator",
    "ConfigurationError",
    "DuplicateOverlapError",
    "FileSystemError",
    "GenerationSummary",
    "HeaderMode",
    "NameCollisionError",
    "NamingConvention",
    "OutputLanguage",
    "PlatformMode",
    "TreeKeyConflictError",
    "load_config",
]
