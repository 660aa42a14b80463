from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
import logging
from pathlib import Path
from typing import Literal

from PIL import ImageFont


LOGGER = logging.getLogger(__name__)

DEFAULT_FONT_FAMILY = "DejaVu Sans"
DEFAULT_FONT_SIZE_PX = 30.0
FONT_FALLBACK_PATTERNS = (
    "dejavusans",
    "dejavu sans",
    "helvetica",
    "arial",
    "menlo",
    "courier",
)
FONT_DIRS = (
    Path.home() / "Library" / "Fonts",
    Path("/Library/Fonts"),
    Path("/System/Library/Fonts"),
    Path("/System/Library/Fonts/Supplemental"),
    Path("/usr/share/fonts"),
    Path("/usr/local/share/fonts"),
)

LoadedFont = ImageFont.FreeTypeFont | ImageFont.ImageFont


@dataclass(frozen=True)
class FontSpec:
    """Font definition from either system lookup or explicit file path.

    If `file_path` is set, it is loaded directly instead of searching font dirs.
    """

    family: str = DEFAULT_FONT_FAMILY
    size_px: float = DEFAULT_FONT_SIZE_PX
    file_path: str | None = None

    def __post_init__(self) -> None:
        if not self.family.strip() and self.file_path is None:
            raise ValueError("FontSpec requires `family` when `file_path` is not set")
        if self.file_path is not None and not str(self.file_path).strip():
            raise ValueError("FontSpec `file_path` must be non-empty when provided")
        if self.size_px <= 0:
            raise ValueError("FontSpec `size_px` must be > 0")

    @property
    def source_kind(self) -> Literal["system", "file"]:
        return "file" if self.file_path else "system"


def text_size(text: str, font: FontSpec, *, rotate_deg: int = 0) -> tuple[int, int]:
    """Measured (width, height) of `text`; quarter-turn rotations swap the axes."""

    loaded = load_font(font)
    if not text:
        ascent, descent = loaded.getmetrics()
        return (0, max(1, int(ascent + descent)))
    left, top, right, bottom = loaded.getbbox(text)
    w = max(0, int(right - left))
    h = max(1, int(bottom - top))
    if normalize_quarter_turns(rotate_deg) % 2 == 1:
        return (h, w)
    return (w, h)


def normalize_quarter_turns(rotate_deg: float) -> int:
    if rotate_deg % 90 != 0:
        raise ValueError("rotate_deg must be a multiple of 90")
    return int(rotate_deg // 90) % 4


@lru_cache(maxsize=64)
def load_font(font: FontSpec) -> LoadedFont:
    size = max(1, int(round(font.size_px)))
    font_path = Path(font.file_path) if font.file_path else _resolve_font_path(font.family)
    if font_path is None:
        LOGGER.warning("no font file found for family %r; using Pillow default font", font.family)
        return ImageFont.load_default(size=size)
    try:
        return ImageFont.truetype(str(font_path), size=size)
    except OSError as exc:
        LOGGER.warning("failed to load font %s (%s); using Pillow default font", font_path, exc)
        return ImageFont.load_default(size=size)


def _resolve_font_path(font_family: str) -> Path | None:
    wanted = font_family.strip().lower() if font_family.strip() else DEFAULT_FONT_FAMILY.lower()
    patterns = (wanted,) + FONT_FALLBACK_PATTERNS

    candidates: list[Path] = []
    for base in FONT_DIRS:
        if not base.exists():
            continue
        for ext in ("*.ttf", "*.otf", "*.ttc"):
            candidates.extend(sorted(base.rglob(ext)))

    for pattern in patterns:
        p = pattern.replace(" ", "")
        for path in candidates:
            stem = path.stem.lower().replace(" ", "")
            if p in stem:
                return path
    return None
