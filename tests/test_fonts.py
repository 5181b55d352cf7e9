import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from textoverlay.components.fonts import BUILTIN_FONTS, FontResolver, FontSpec
from textoverlay.exceptions import UnresolvableFontError


def test_builtin_registry_ids():
    assert [spec.font_id for spec in BUILTIN_FONTS] == [
        "dm-serif-display-italic",
        "dm-serif-display-regular",
        "archivo-black",
        "cookie",
        "fjalla-one",
        "source-serif",
        "source-serif-italic",
    ]


def test_resolve_existing_font(tmp_path):
    (tmp_path / "Cookie-Regular.ttf").write_bytes(b"")
    font = FontResolver(tmp_path).resolve("cookie")
    assert font.path == str(tmp_path / "Cookie-Regular.ttf")
    assert font.name == "Cookie"
    assert font.font_id == "cookie"


def test_resolve_unknown_id_lists_available(tmp_path):
    with pytest.raises(UnresolvableFontError) as excinfo:
        FontResolver(tmp_path).resolve("papyrus")
    assert "Unknown font type: papyrus" in str(excinfo.value)
    assert excinfo.value.available[0] == "dm-serif-display-italic"


def test_resolve_missing_file(tmp_path):
    with pytest.raises(UnresolvableFontError, match="not found"):
        FontResolver(tmp_path).resolve("archivo-black")


def test_custom_registry_and_file_listing(tmp_path):
    (tmp_path / "Mono.otf").write_bytes(b"")
    (tmp_path / "readme.txt").write_text("x")
    resolver = FontResolver(tmp_path, fonts=[FontSpec("mono", "Mono", "Mono.otf", 5)])
    assert resolver.available_ids() == ["mono"]
    assert resolver.exists("mono")
    assert not resolver.exists("cookie")
    assert resolver.available_files() == ["Mono.otf"]


def test_family_name_of_unreadable_file_is_none(tmp_path):
    (tmp_path / "Cookie-Regular.ttf").write_bytes(b"not a font")
    resolver = FontResolver(tmp_path)
    assert resolver.family_name("cookie") is None
    assert resolver.family_name("missing-id") is None
