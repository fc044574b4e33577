"""Configuration loading for assetgen (.assetgen.yml)."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Type, TypeVar

import yaml

from .errors import ConfigurationError
from .models import HeaderMode, NamingConvention, OutputLanguage, PlatformMode

CONFIG_FILENAME = ".assetgen.yml"

_E = TypeVar("_E", bound=Enum)

_PLATFORM_ALIASES = {
    "vite-react": PlatformMode.MODULE_IMPORT,
    "react-native-cli": PlatformMode.RUNTIME_RESOLVED,
    "nextjs": PlatformMode.STATIC_DESCRIPTOR,
}

_NAME_CASE_ALIASES = {
    "any": NamingConvention.UNCHANGED,
}


class ConfigError(ConfigurationError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class AssetClassConfig:
    """Settings shared by every asset class generator."""

    base_dir: str
    name_case: NamingConvention = NamingConvention.KEBAB_CASE
    info_comment: HeaderMode = HeaderMode.SHORT_INFO


@dataclass
class ImageGeneratorConfig(AssetClassConfig):
    """Image asset generator settings."""


@dataclass
class SvgGeneratorConfig(AssetClassConfig):
    """SVG asset generator settings."""


@dataclass
class AssetsConfig:
    """Asset directories and the generators configured for them."""

    base_dir: str
    public_dir: Optional[str] = None
    image: Optional[ImageGeneratorConfig] = None
    svg: Optional[SvgGeneratorConfig] = None


@dataclass
class AssetGenConfig:
    """Represents the settings defined in .assetgen.yml."""

    root: Path
    platform: PlatformMode = PlatformMode.MODULE_IMPORT
    language: OutputLanguage = OutputLanguage.TYPESCRIPT
    export_name: str = "ImageAssets"
    assets: Optional[AssetsConfig] = None

    def resolve(self, *parts: str) -> Path:
        """Resolve ``parts`` against the configuration root."""
        return self.root.joinpath(*parts).resolve()

    def image_root(self) -> Path:
        if self.assets is None or self.assets.image is None:
            raise ConfigurationError(
                "Images configuration not found; configure 'assets.image' in .assetgen.yml"
            )
        return self.resolve(self.assets.base_dir, self.assets.image.base_dir)

    def public_image_root(self) -> Optional[Path]:
        if self.assets is None or self.assets.image is None or not self.assets.public_dir:
            return None
        return self.resolve(self.assets.public_dir, self.assets.image.base_dir)


def load_config(config_path: Path) -> AssetGenConfig:
    """Load configuration from disk."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return AssetGenConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{config_file.name} must contain a mapping at the root")
    return parse_config(data, root=root)


def parse_config(data: Mapping[str, Any], *, root: Path) -> AssetGenConfig:
    """Build an AssetGenConfig from an already-decoded mapping."""
    platform_value = _as_str(data.get("platform") or data.get("project_type"))
    platform = PlatformMode.MODULE_IMPORT
    if platform_value:
        platform = _PLATFORM_ALIASES.get(platform_value) or _as_enum(
            PlatformMode, platform_value, "platform"
        )

    language = _as_enum(OutputLanguage, _as_str(data.get("language")), "language") or (
        OutputLanguage.TYPESCRIPT
    )
    export_name = _as_str(data.get("export_name")) or "ImageAssets"

    assets = None
    assets_data = _as_dict(data.get("assets"))
    if assets_data:
        base_dir = _as_str(assets_data.get("base_dir"))
        if not base_dir:
            raise ConfigError("'assets.base_dir' is required when 'assets' is configured")
        image_data = _as_dict(assets_data.get("image"))
        svg_data = _as_dict(assets_data.get("svg"))
        assets = AssetsConfig(
            base_dir=base_dir,
            public_dir=_as_str(assets_data.get("public_dir")),
            image=_asset_class(ImageGeneratorConfig, image_data, "image") if image_data else None,
            svg=_asset_class(SvgGeneratorConfig, svg_data, "svg") if svg_data else None,
        )

    return AssetGenConfig(
        root=root,
        platform=platform,
        language=language,
        export_name=export_name,
        assets=assets,
    )


def _asset_class(cls: Type[AssetClassConfig], data: Dict[str, Any], name: str) -> Any:
    base_dir = _as_str(data.get("base_dir"))
    if not base_dir:
        raise ConfigError(f"'assets.{name}.base_dir' is required")
    name_case_value = _as_str(data.get("name_case"))
    name_case = _NAME_CASE_ALIASES.get(name_case_value or "") or _as_enum(
        NamingConvention, name_case_value, f"assets.{name}.name_case"
    )
    info_comment = _as_enum(
        HeaderMode, _as_str(data.get("info_comment")), f"assets.{name}.info_comment"
    )
    return cls(
        base_dir=base_dir,
        name_case=name_case or NamingConvention.KEBAB_CASE,
        info_comment=info_comment or HeaderMode.SHORT_INFO,
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_enum(enum_type: Type[_E], value: Optional[str], field_name: str) -> Optional[_E]:
    if not value:
        return None
    try:
        return enum_type(value)
    except ValueError as exc:
        allowed = ", ".join(member.value for member in enum_type)
        raise ConfigError(f"Invalid {field_name} '{value}' (expected one of: {allowed})") from exc


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


__all__ = [
    "AssetClassConfig",
    "AssetGenConfig",
    "AssetsConfig",
    "CONFIG_FILENAME",
    "ConfigError",
    "ImageGeneratorConfig",
    "SvgGeneratorConfig",
    "load_config",
    "parse_config",
]
