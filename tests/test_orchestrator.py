"""Tests for assetgen.orchestrator."""

from __future__ import annotations

import os
import stat
from pathlib import Path

import pytest

from assetgen.config import load_config
from assetgen.errors import (
    ConfigurationError,
    DuplicateOverlapError,
    NameCollisionError,
    TreeKeyConflictError,
)
from assetgen.models import NamingConvention
from assetgen.orchestrator import AssetGenerator, write_atomic
from assetgen.reporting import RecordingReporter
from tests._fixtures.asset_builder import AssetProjectBuilder

_VITE_CONFIG = """
platform: vite-react
assets:
  base_dir: src/assets
  image:
    base_dir: images
    name_case: kebab-case
"""

_NEXT_CONFIG = """
platform: nextjs
assets:
  base_dir: src/assets
  public_dir: public
  image:
    base_dir: images
    name_case: kebab-case
    info_comment: hidden
"""


def _output(project: AssetProjectBuilder, name: str = "index.ts") -> Path:
    return project.root / "src" / "assets" / "images" / name


def test_generate_images_renames_and_binds_assets(project: AssetProjectBuilder) -> None:
    project.images(["src/assets/images/My Photo.PNG", "src/assets/images/icons/homeIcon.png"])
    config = project.config(_VITE_CONFIG)
    reporter = RecordingReporter()

    summary = AssetGenerator(reporter=reporter).generate_images(config)

    images_root = project.root / "src" / "assets" / "images"
    assert project.files("src/assets/images") == ["icons/home-icon.png", "index.ts", "my-photo.PNG"]
    assert summary.renamed == {
        images_root / "My Photo.PNG": images_root / "my-photo.PNG",
        images_root / "icons" / "homeIcon.png": images_root / "icons" / "home-icon.png",
    }
    assert summary.primary_count == 2
    assert summary.secondary_count == 0
    assert summary.naming_convention is NamingConvention.KEBAB_CASE
    assert summary.output_path == _output(project)

    text = _output(project).read_text(encoding="utf-8")
    assert text.startswith("/* AUTO-GENERATED FILE. DO NOT EDIT.")
    assert 'import icons_homeIcon from "./icons/home-icon.png";' in text
    assert 'import myPhoto from "./my-photo.PNG";' in text
    assert "  myPhoto: myPhoto" in text
    assert "    homeIcon: icons_homeIcon" in text
    assert reporter.phases() == ["rename", "scan", "detect", "build", "emit", "write"]


def test_generate_images_is_byte_stable_across_runs(project: AssetProjectBuilder) -> None:
    project.images(
        [
            "src/assets/images/b.png",
            "src/assets/images/a.png",
            "src/assets/images/z/c d.png",
            "src/assets/images/z/c-d-2.png",
        ]
    )
    config = project.config(_VITE_CONFIG)
    generator = AssetGenerator()

    generator.generate_images(config)
    first = _output(project).read_bytes()
    generator.generate_images(config)
    second = _output(project).read_bytes()

    assert first == second


def test_generate_images_suffixes_colliding_identifiers(project: AssetProjectBuilder) -> None:
    project.images(["src/assets/images/___/logo.png", "src/assets/images/logo.png"])
    config = project.config(_VITE_CONFIG.replace("kebab-case", "unchanged"))

    AssetGenerator().generate_images(config)

    text = _output(project).read_text(encoding="utf-8")
    # "___/logo" sorts before "logo", so it claims the unsuffixed identifier.
    assert 'import logo from "./___/logo.png";' in text
    assert 'import logo2 from "./logo.png";' in text
    assert "  _: {\n    logo: logo\n  },\n  logo: logo2\n" in text


def test_generate_images_binds_nested_paths(project: AssetProjectBuilder) -> None:
    project.images(["src/assets/images/x/y.png", "src/assets/images/x_y.png"])
    config = project.config(_VITE_CONFIG.replace("kebab-case", "unchanged"))

    AssetGenerator().generate_images(config)

    text = _output(project).read_text(encoding="utf-8")
    assert 'import x_y from "./x/y.png";' in text
    assert 'import xY from "./x_y.png";' in text


def test_generate_images_empty_root_exports_empty_structure(project: AssetProjectBuilder) -> None:
    (project.root / "src" / "assets" / "images").mkdir(parents=True)
    config = project.config(_VITE_CONFIG)

    summary = AssetGenerator().generate_images(config)

    assert summary.total == 0
    assert _output(project).read_text(encoding="utf-8").endswith(
        "export const ImageAssets = {} as const;\n"
    )


def test_generate_images_static_descriptor_reads_real_dimensions(
    project: AssetProjectBuilder,
) -> None:
    project.image("public/images/hero.png", size=(128, 64))
    project.image("src/assets/images/logo.png")
    config = project.config(_NEXT_CONFIG)

    summary = AssetGenerator().generate_images(config)

    assert summary.primary_count == 1
    assert summary.secondary_count == 1
    assert summary.secondary_root == (project.root / "public" / "images").resolve()
    text = _output(project).read_text(encoding="utf-8")
    assert text.splitlines()[0] == 'import type { StaticImageData } from "next/image";'
    assert (
        'const hero: StaticImageData = { src: "/images/hero.png", width: 128, height: 64 };'
        in text
    )
    assert 'import logo from "./logo.png";' in text
    assert "  hero: hero,\n  logo: logo\n" in text


def test_generate_images_rejects_cross_root_duplicates(project: AssetProjectBuilder) -> None:
    project.image("src/assets/images/images/logo.png")
    project.image("public/images/images/logo.jpg")
    config = project.config(_NEXT_CONFIG)
    reporter = RecordingReporter()

    with pytest.raises(DuplicateOverlapError) as excinfo:
        AssetGenerator(reporter=reporter).generate_images(config)

    assert excinfo.value.duplicates == ["images/logo"]
    assert not _output(project).exists()
    assert reporter.phases()[-1] == "failed"


def test_generate_images_collision_aborts_before_write(project: AssetProjectBuilder) -> None:
    project.images(["src/assets/images/icon.png", "src/assets/images/Icon.png"])
    if len(project.files("src/assets/images")) < 2:
        pytest.skip("file system is case-insensitive")
    config = project.config(_VITE_CONFIG)

    with pytest.raises(NameCollisionError):
        AssetGenerator().generate_images(config)

    assert not _output(project).exists()


def test_generate_images_rejects_ambiguous_tree_keys(project: AssetProjectBuilder) -> None:
    project.images(["src/assets/images/logo.png", "src/assets/images/logo.jpg"])
    config = project.config(_VITE_CONFIG)

    with pytest.raises(TreeKeyConflictError):
        AssetGenerator().generate_images(config)

    assert not _output(project).exists()


def test_generate_images_runtime_resolved_mode(project: AssetProjectBuilder) -> None:
    project.images(["src/assets/images/splash/Background Image.png"])
    config = project.config(_VITE_CONFIG.replace("vite-react", "react-native-cli"))

    AssetGenerator().generate_images(config)

    text = _output(project).read_text(encoding="utf-8")
    assert "import " not in text
    assert 'backgroundImage: require("./splash/background-image.png")' in text
    assert text.endswith("};\n")


def test_generate_images_javascript_output_name(project: AssetProjectBuilder) -> None:
    project.images(["src/assets/images/logo.png"])
    config = project.config(_VITE_CONFIG + "language: javascript\n")

    summary = AssetGenerator().generate_images(config)

    assert summary.output_path.name == "index.js"
    assert summary.output_path.exists()


def test_generate_images_requires_existing_root(project: AssetProjectBuilder) -> None:
    config = project.config(_VITE_CONFIG)

    with pytest.raises(ConfigurationError):
        AssetGenerator().generate_images(config)


def test_generate_images_requires_image_config(project: AssetProjectBuilder) -> None:
    config = project.config("assets:\n  base_dir: src\n  svg:\n    base_dir: icons\n")

    with pytest.raises(ConfigurationError):
        AssetGenerator().generate_images(config)


def test_missing_public_root_is_skipped(project: AssetProjectBuilder) -> None:
    project.images(["src/assets/images/logo.png"])
    config = project.config(_NEXT_CONFIG)

    summary = AssetGenerator().generate_images(config)

    assert summary.secondary_root is None
    assert "StaticImageData" not in _output(project).read_text(encoding="utf-8")


def test_run_all_skips_svg_and_handles_missing_generators(project: AssetProjectBuilder) -> None:
    project.images(["src/assets/images/logo.png"])
    config = project.config(_VITE_CONFIG + "  svg:\n    base_dir: icons\n")

    summaries = AssetGenerator().run_all(config)

    assert len(summaries) == 1
    assert AssetGenerator().run_all(load_config(project.root / "elsewhere")) == []


def test_write_atomic_replaces_existing_file(tmp_path: Path) -> None:
    target = tmp_path / "index.ts"
    target.write_text("old\n", encoding="utf-8")

    write_atomic(target, "new\n")

    assert target.read_text(encoding="utf-8") == "new\n"
    assert [path.name for path in tmp_path.iterdir()] == ["index.ts"]


def test_generate_images_keeps_assets_with_empty_normalized_name(
    project: AssetProjectBuilder,
) -> None:
    project.images(["src/assets/images/___.png", "src/assets/images/logo.png"])
    config = project.config(_VITE_CONFIG)
    images_root = project.root / "src" / "assets" / "images"

    summary = AssetGenerator().generate_images(config)

    assert summary.primary_count == 2
    assert summary.renamed == {images_root / "___.png": images_root / ".png"}
    text = _output(project).read_text(encoding="utf-8")
    assert 'import img from "./.png";' in text
    assert "  image: img,\n  logo: logo\n" in text


def test_generate_images_reports_missing_root_as_failure(project: AssetProjectBuilder) -> None:
    config = project.config(_VITE_CONFIG)
    reporter = RecordingReporter()

    with pytest.raises(ConfigurationError):
        AssetGenerator(reporter=reporter).generate_images(config)

    assert reporter.phases() == ["failed"]
    assert "Images directory not found" in (reporter.events[0].detail or "")


@pytest.mark.skipif(os.name == "nt", reason="POSIX permission bits")
def test_write_atomic_uses_umask_for_new_files(tmp_path: Path) -> None:
    target = tmp_path / "index.ts"
    previous = os.umask(0o022)
    try:
        write_atomic(target, "export const ImageAssets = {} as const;\n")
    finally:
        os.umask(previous)

    assert stat.S_IMODE(target.stat().st_mode) == 0o644


@pytest.mark.skipif(os.name == "nt", reason="POSIX permission bits")
def test_write_atomic_preserves_existing_mode(tmp_path: Path) -> None:
    target = tmp_path / "index.ts"
    target.write_text("old\n", encoding="utf-8")
    os.chmod(target, 0o640)

    write_atomic(target, "new\n")

    assert stat.S_IMODE(target.stat().st_mode) == 0o640
