"""Map symbolic font identifiers to font files on disk."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

from PIL import ImageFont

from ..exceptions import UnresolvableFontError
from ..models import ResolvedFont

FONT_SUFFIXES = {".ttf", ".otf"}
DEFAULT_FONTS_DIR = Path("fonts")


@dataclass(frozen=True)
class FontSpec:
    font_id: str
    name: str
    filename: str
    recommended_size: float  # percent of video height
    description: str = ""


BUILTIN_FONTS = (
    FontSpec("dm-serif-display-italic", "DM Serif Display Italic", "DMSerifDisplay-Italic.ttf", 6,
             "Elegant italic serif for headlines"),
    FontSpec("dm-serif-display-regular", "DM Serif Display Regular", "DMSerifDisplay-Regular.ttf", 5,
             "High-contrast serif for titles and captions"),
    FontSpec("archivo-black", "Archivo Black", "ArchivoBlack-Regular.ttf", 7,
             "Heavy grotesque for bold statements"),
    FontSpec("cookie", "Cookie", "Cookie-Regular.ttf", 8,
             "Playful script font for creative and casual content"),
    FontSpec("fjalla-one", "Fjalla One", "FjallaOne-Regular.ttf", 6,
             "Condensed sans serif for punchy captions"),
    FontSpec("source-serif", "Source Serif", "SourceSerif4.ttf", 5,
             "Readable text serif for longer subtitles"),
    FontSpec("source-serif-italic", "Source Serif Italic", "SourceSerif4-Italic.ttf", 5,
             "Italic companion of Source Serif"),
)


class FontResolver:
    """Resolve font identifiers against one fonts directory.

    The resolver is owned by the caller and passed to the compiler; it keeps
    no state beyond its registry.
    """

    def __init__(
        self,
        fonts_dir: Union[str, Path] = DEFAULT_FONTS_DIR,
        fonts: Iterable[FontSpec] = BUILTIN_FONTS,
    ):
        self.fonts_dir = Path(fonts_dir)
        self._fonts: Dict[str, FontSpec] = {spec.font_id: spec for spec in fonts}

    def available_ids(self) -> List[str]:
        return list(self._fonts)

    def get_spec(self, font_id: str) -> FontSpec:
        spec = self._fonts.get(font_id)
        if spec is None:
            raise UnresolvableFontError(
                f"Unknown font type: {font_id}. Available fonts: {', '.join(self._fonts)}",
                available=self.available_ids(),
            )
        return spec

    def font_path(self, font_id: str) -> Path:
        return self.fonts_dir / self.get_spec(font_id).filename

    def exists(self, font_id: str) -> bool:
        try:
            return self.font_path(font_id).is_file()
        except UnresolvableFontError:
            return False

    def resolve(self, font_id: str) -> ResolvedFont:
        """Return the path and display name of ``font_id``.

        Raises ``UnresolvableFontError`` for unknown ids and missing files.
        """
        spec = self.get_spec(font_id)
        path = self.fonts_dir / spec.filename
        if not path.is_file():
            raise UnresolvableFontError(
                f'Font file "{spec.filename}" for "{spec.name}" not found. Expected path: {path}',
                available=self.available_ids(),
            )
        return ResolvedFont(font_id=font_id, path=str(path), name=spec.name)

    def available_files(self) -> List[str]:
        """Font files actually present in the fonts directory."""
        if not self.fonts_dir.is_dir():
            return []
        return sorted(
            p.name for p in self.fonts_dir.iterdir() if p.suffix.lower() in FONT_SUFFIXES
        )

    def family_name(self, font_id: str) -> Optional[str]:
        """Family and style embedded in the font file, e.g. ``"Cookie Regular"``."""
        try:
            path = self.font_path(font_id)
        except UnresolvableFontError:
            return None
        if not path.is_file():
            return None
        try:
            family, style = ImageFont.truetype(str(path), size=12).getname()
        except OSError:
            return None
        return " ".join(part for part in (family, style) if part)
