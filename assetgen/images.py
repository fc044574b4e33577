"""Pixel dimension probing for static image descriptors."""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Optional, Tuple

from PIL import Image, UnidentifiedImageError

from .errors import FileSystemError

_LENGTH_PATTERN = re.compile(r"^\s*([0-9]*\.?[0-9]+)\s*(px)?\s*$")


def read_dimensions(path: Path) -> Tuple[int, int]:
    """Return ``(width, height)`` in pixels as stored in the file header."""
    if path.suffix.lower() == ".svg":
        return _read_svg_dimensions(path)
    try:
        with Image.open(path) as image:
            width, height = image.size
    except FileNotFoundError as exc:
        raise FileSystemError("Image not found", path) from exc
    except UnidentifiedImageError as exc:
        raise FileSystemError("Unsupported or corrupt image", path) from exc
    except OSError as exc:
        raise FileSystemError(f"Cannot read image ({exc})", path) from exc
    return int(width), int(height)


def _read_svg_dimensions(path: Path) -> Tuple[int, int]:
    try:
        root = ET.parse(path).getroot()
    except OSError as exc:
        raise FileSystemError(f"Cannot read image ({exc})", path) from exc
    except ET.ParseError as exc:
        raise FileSystemError("Unsupported or corrupt image", path) from exc

    width = _parse_length(root.get("width"))
    height = _parse_length(root.get("height"))
    if width is not None and height is not None:
        return width, height

    view_box = root.get("viewBox")
    if view_box:
        parts = view_box.replace(",", " ").split()
        if len(parts) == 4:
            try:
                return round(float(parts[2])), round(float(parts[3]))
            except ValueError:
                pass
    raise FileSystemError("SVG declares no usable width/height or viewBox", path)


def _parse_length(value: Optional[str]) -> Optional[int]:
    if not value:
        return None
    match = _LENGTH_PATTERN.match(value)
    if not match:
        return None
    return round(float(match.group(1)))


__all__ = ["read_dimensions"]
