"""Pipeline orchestration for asset manifest generation."""

from __future__ import annotations

import os
import stat
import tempfile
from pathlib import Path, PurePosixPath
from typing import Dict, List, Optional, Sequence, Tuple

from .config import AssetGenConfig, ImageGeneratorConfig
from .emit import (
    BindingDeclaration,
    CodeEmitter,
    descriptor_declaration,
    import_declaration,
    runtime_reference,
)
from .emit.emitter import STATIC_IMAGE_TYPE
from .errors import AssetGenError, ConfigurationError, FileSystemError
from .images import read_dimensions
from .logging import get_logger
from .manifest import TreeBuilder, ensure_disjoint
from .models import AssetEntry, GenerationSummary, PlatformMode, StaticDescriptor
from .naming import IdentifierAllocator, binding_base
from .renamer import RenameEngine
from .reporting import LoggingReporter, Reporter, StatusEvent
from .scanner import AssetWalker, relative_key_path, relative_path

OUTPUT_STEM = "index"


class AssetGenerator:
    """Coordinates the rename, scan, build, and emit phases for asset classes."""

    def __init__(
        self,
        reporter: Reporter | None = None,
        emitter: CodeEmitter | None = None,
        tree_builder: TreeBuilder | None = None,
    ) -> None:
        self.reporter = reporter or LoggingReporter()
        self.emitter = emitter or CodeEmitter()
        self.tree_builder = tree_builder or TreeBuilder()
        self.logger = get_logger("orchestrator")

    def run_all(self, config: AssetGenConfig) -> List[GenerationSummary]:
        """Run every generator configured in ``config``."""
        assets = config.assets
        if assets is None or (assets.image is None and assets.svg is None):
            self.logger.warning("No generators configured; add an 'assets' block to .assetgen.yml")
            return []

        summaries: List[GenerationSummary] = []
        if assets.image is not None:
            self.logger.info("Running image assets generator...")
            summaries.append(self.generate_images(config))
        if assets.svg is not None:
            self.logger.info("SVG generation not yet implemented")
        return summaries

    def generate_images(self, config: AssetGenConfig) -> GenerationSummary:
        """Generate the image manifest module for ``config``."""
        try:
            image_config = self._require_image_config(config)
            primary_root = config.image_root()
            if not primary_root.is_dir():
                raise ConfigurationError(f"Images directory not found: {primary_root}")
            secondary_root = self._secondary_root(config)

            output_path = primary_root / f"{OUTPUT_STEM}.{config.language.extension}"
            walker = AssetWalker(exclude_names={output_path.name})
            renamer = RenameEngine(walker)
            convention = image_config.name_case
            self.logger.info("Starting image generation for %s", primary_root)

            roots = [root for root in (secondary_root, primary_root) if root is not None]
            plans = [renamer.plan(root, convention) for root in roots]
            renamed: Dict[Path, Path] = {}
            for plan in plans:
                renamer.apply(plan)
                renamed.update(plan.as_map())
            self.reporter.emit(StatusEvent("rename", {"renamed": len(renamed)}))
            if renamed:
                self.logger.info(
                    "Renamed %d files to match %s convention", len(renamed), convention.value
                )

            primary = self._collect(walker, primary_root)
            secondary = self._collect(walker, secondary_root) if secondary_root else []
            self.reporter.emit(
                StatusEvent("scan", {"primary": len(primary), "secondary": len(secondary)})
            )

            ensure_disjoint(
                (entry.key_path for entry in primary),
                (entry.key_path for entry in secondary),
            )
            self.reporter.emit(StatusEvent("detect", {"duplicates": 0}))

            leaves, declarations = self._bind(config, primary, secondary, image_config)
            tree = self.tree_builder.build(leaves)
            self.reporter.emit(StatusEvent("build", {"leaves": len(leaves)}))

            text = self.emitter.emit(
                tree,
                declarations,
                config.platform,
                language=config.language,
                header=image_config.info_comment,
                export_name=config.export_name,
            )
            self.reporter.emit(StatusEvent("emit", {"declarations": len(declarations)}))

            write_atomic(output_path, text)
            self.reporter.emit(
                StatusEvent("write", {"bytes": len(text.encode("utf-8"))}, str(output_path))
            )
        except AssetGenError as exc:
            self.reporter.emit(StatusEvent("failed", detail=str(exc)))
            raise

        summary = GenerationSummary(
            primary_root=primary_root,
            output_path=output_path,
            naming_convention=convention,
            primary_count=len(primary),
            secondary_count=len(secondary),
            secondary_root=secondary_root,
            renamed=renamed,
        )
        if summary.total == 0:
            self.logger.info("Image index generated with empty object (no images found)")
        else:
            self.logger.info("Image index generated with %d images", summary.total)
        return summary

    @staticmethod
    def _require_image_config(config: AssetGenConfig) -> ImageGeneratorConfig:
        if config.assets is None or config.assets.image is None:
            raise ConfigurationError(
                "Images configuration not found; configure 'assets.image' in .assetgen.yml"
            )
        return config.assets.image

    def _secondary_root(self, config: AssetGenConfig) -> Optional[Path]:
        if config.platform is not PlatformMode.STATIC_DESCRIPTOR:
            return None
        public_root = config.public_image_root()
        if public_root is None:
            return None
        if not public_root.is_dir():
            self.logger.debug("Public image directory %s not found; skipping", public_root)
            return None
        return public_root

    @staticmethod
    def _collect(walker: AssetWalker, root: Path) -> List[AssetEntry]:
        return [
            AssetEntry(
                key_path=relative_key_path(asset.path, root),
                relative_path=relative_path(asset.path, root),
                path=asset.path,
                root=root,
            )
            for asset in walker.walk(root)
        ]

    def _bind(
        self,
        config: AssetGenConfig,
        primary: Sequence[AssetEntry],
        secondary: Sequence[AssetEntry],
        image_config: ImageGeneratorConfig,
    ) -> Tuple[List[Tuple[str, str]], List[BindingDeclaration]]:
        """Allocate bindings in key path order and return tree leaves plus declarations."""
        reserved = {config.export_name}
        if secondary:
            reserved.add(STATIC_IMAGE_TYPE)
        allocator = IdentifierAllocator(reserved)
        secondary_paths = {entry.path for entry in secondary}
        ordered = sorted(
            [*primary, *secondary], key=lambda entry: (entry.key_path, entry.path.as_posix())
        )

        leaves: List[Tuple[str, str]] = []
        declarations: List[BindingDeclaration] = []
        for entry in ordered:
            if config.platform is PlatformMode.RUNTIME_RESOLVED:
                leaves.append((entry.key_path, runtime_reference(entry.relative_path)))
                continue
            identifier = allocator.allocate(binding_base(entry.key_path.split("/")))
            if entry.path in secondary_paths:
                width, height = read_dimensions(entry.path)
                descriptor = StaticDescriptor(
                    src=public_url(config, image_config, entry.relative_path),
                    width=width,
                    height=height,
                )
                declarations.append(descriptor_declaration(identifier, descriptor, config.language))
            else:
                declarations.append(import_declaration(identifier, entry.relative_path))
            leaves.append((entry.key_path, identifier))
        return leaves, declarations


def public_url(
    config: AssetGenConfig, image_config: ImageGeneratorConfig, relative: str
) -> str:
    """Return the URL a publicly served asset is reachable at."""
    public_dir = config.assets.public_dir if config.assets else None
    parts: List[str] = []
    if public_dir:
        public_name = PurePosixPath(public_dir.replace("\\", "/")).name
        # The public directory itself is served from the web root.
        if public_name and public_name != "public":
            parts.append(public_name)
    image_dir = PurePosixPath(image_config.base_dir.replace("\\", "/"))
    parts.extend(part for part in image_dir.parts if part not in {".", "/"})
    parts.append(relative)
    return "/" + "/".join(parts)


def write_atomic(path: Path, text: str) -> None:
    """Replace ``path`` with ``text`` so readers never observe a partial file."""
    temp_path: Path | None = None
    try:
        with tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
        ) as handle:
            temp_path = Path(handle.name)
            handle.write(text)
        os.chmod(temp_path, _output_mode(path))
        os.replace(temp_path, path)
    except OSError as exc:
        if temp_path is not None and temp_path.exists():
            temp_path.unlink()
        raise FileSystemError(f"Cannot write generated module ({exc.strerror})", path) from exc


def _output_mode(path: Path) -> int:
    # Temporary files are created 0600; keep the mode a plain write would give.
    if path.exists():
        return stat.S_IMODE(path.stat().st_mode)
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


__all__ = ["AssetGenerator", "OUTPUT_STEM", "public_url", "write_atomic"]
