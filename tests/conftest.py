from io import BytesIO

import pytest
from PIL import Image, ImageFont

BACKGROUND_SIZE = (400, 300)
BACKGROUND_COLOR = (20, 40, 80, 255)


def make_png(size=BACKGROUND_SIZE, color=BACKGROUND_COLOR) -> bytes:
    buffer = BytesIO()
    Image.new("RGBA", size, color).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def font_bytes() -> bytes:
    # Pillow >= 10.1 ships a FreeType default font when built with freetype2
    font = ImageFont.load_default(size=24)
    if not isinstance(font, ImageFont.FreeTypeFont):
        pytest.skip("Pillow built without FreeType support")
    return font.font_bytes


@pytest.fixture
def font_path(tmp_path, font_bytes):
    path = tmp_path / "font.otf"
    path.write_bytes(font_bytes)
    return path


@pytest.fixture
def background_bytes() -> bytes:
    return make_png()


@pytest.fixture
def background_path(tmp_path, background_bytes):
    path = tmp_path / "bg.png"
    path.write_bytes(background_bytes)
    return path


@pytest.fixture
def stub_measure():
    """Deterministic fractional widths: size / 2 + 0.25 per character."""
    def measure(char: str, size: int) -> float:
        return size / 2 + 0.25

    return measure
