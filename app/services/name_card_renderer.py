"""
Namecard Service - 이름 카드 렌더러

배경 이미지 위에 성/이름을 그려 PNG 바이트로 반환합니다.
- 첫 글자는 크게, 나머지 글자는 작게
- 성의 첫 글자만 강조 색상 적용
- 캔버스 너비는 글자 폭에 맞춰 자동 계산 (최소 너비 보장)

폰트/배경 로드, 색상 해석, PNG 인코딩 중 하나라도 실패하면
NameCardRenderError 하나로 전달되며 부분 결과는 반환하지 않습니다.
"""

import asyncio
import logging
from dataclasses import dataclass
from io import BytesIO
from pathlib import Path
from typing import Optional, Union

from PIL import Image, ImageColor, ImageDraw, ImageFont

from app.services.name_layout import (
    CardLayout,
    FontSizes,
    LayoutConfig,
    MeasureFn,
    layout_card,
    select_layout_config,
)

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

TRANSPARENT = (0, 0, 0, 0)


class NameCardRenderError(Exception):
    """이름 카드 렌더링 실패"""


@dataclass(frozen=True)
class RenderRequest:
    """렌더링 요청"""
    last_name: str = ""
    first_name: str = ""
    last_name_first_char_color: Optional[str] = None  # 예: "#FFD700"


class NameCardRenderer:
    """
    이름 카드 렌더러

    렌더링마다 레이아웃 설정, 폰트, 캔버스를 새로 만들기 때문에
    여러 요청에서 동시에 사용해도 안전합니다.
    """

    def __init__(
        self,
        background_path: PathLike,
        font_path: PathLike,
        font_family: str = "MyFont",
        default_color: str = "#FFFFFF",
    ):
        self.background_path = Path(background_path)
        self.font_path = Path(font_path)
        self.font_family = font_family
        self.default_color = default_color

    def select_config(self, request: RenderRequest) -> LayoutConfig:
        """요청에 맞는 레이아웃 설정 생성"""
        return select_layout_config(
            request.last_name,
            request.first_name,
            font_family=self.font_family,
            default_color=self.default_color,
        )

    def plan(self, request: RenderRequest) -> tuple[LayoutConfig, CardLayout]:
        """
        폰트만 로드하여 배치를 계산합니다 (그리지 않음).

        Returns:
            tuple: (레이아웃 설정, 글자 배치 결과)
        """
        config = self.select_config(request)
        fonts = self._load_fonts(config.font_sizes)
        layout = layout_card(
            request.last_name, request.first_name, config, self._measure_with(fonts)
        )
        return config, layout

    def render(self, request: RenderRequest) -> bytes:
        """
        이름 카드 PNG 생성

        Args:
            request: 렌더링 요청

        Returns:
            bytes: PNG 이미지 데이터

        Raises:
            NameCardRenderError: 폰트/배경 로드, 색상 해석, 인코딩 실패
        """
        try:
            config = self.select_config(request)
            fonts = self._load_fonts(config.font_sizes)
            background = self._load_background()

            default_fill = self._resolve_color(config.default_color)
            accent_fill = self._resolve_color(
                request.last_name_first_char_color or config.default_color
            )

            layout = layout_card(
                request.last_name,
                request.first_name,
                config,
                self._measure_with(fonts),
            )
            width, height = layout.canvas_width, background.height
            logger.debug(
                f"Rendering {config.script.value} card: "
                f"text_width={layout.text_width}, canvas={width}x{height}"
            )

            canvas = Image.new("RGBA", (width, height), TRANSPARENT)
            # 배경은 원점 기준 원본 크기 그대로, 캔버스 밖은 잘림
            canvas.alpha_composite(background.crop((0, 0, width, height)))

            draw = ImageDraw.Draw(canvas)
            for glyph in layout.glyphs:
                draw.text(
                    (glyph.x, glyph.y),
                    glyph.char,
                    font=fonts[glyph.size],
                    fill=accent_fill if glyph.accent else default_fill,
                    anchor="ls",
                )

            return self._encode_png(canvas)

        except NameCardRenderError:
            raise
        except Exception as e:
            logger.debug(f"Unexpected name card render error: {e}")
            raise NameCardRenderError(f"이미지 생성 중 오류: {e}") from e

    async def render_async(self, request: RenderRequest) -> bytes:
        """이벤트 루프를 막지 않도록 스레드에서 렌더링"""
        return await asyncio.to_thread(self.render, request)

    def _load_fonts(self, sizes: FontSizes) -> dict[int, ImageFont.FreeTypeFont]:
        """큰/작은 글자 폰트 로드"""
        fonts = {}
        for size in (sizes.large, sizes.small):
            try:
                fonts[size] = ImageFont.truetype(str(self.font_path), size)
            except OSError as e:
                raise NameCardRenderError(
                    f"폰트 로드 실패 ({self.font_family}): {self.font_path}: {e}"
                ) from e
        return fonts

    def _load_background(self) -> Image.Image:
        """배경 이미지 디코딩"""
        try:
            with Image.open(self.background_path) as img:
                img.load()
                return img.convert("RGBA")
        except OSError as e:
            # UnidentifiedImageError 포함
            raise NameCardRenderError(
                f"배경 이미지 로드 실패: {self.background_path}: {e}"
            ) from e

    @staticmethod
    def _resolve_color(color: str) -> tuple[int, int, int, int]:
        """CSS 색상 문자열을 RGBA로 변환"""
        try:
            return ImageColor.getcolor(color, "RGBA")
        except ValueError as e:
            raise NameCardRenderError(f"잘못된 색상 값: {color!r}") from e

    @staticmethod
    def _measure_with(fonts: dict[int, ImageFont.FreeTypeFont]) -> MeasureFn:
        def measure(char: str, size: int) -> float:
            return fonts[size].getlength(char)

        return measure

    @staticmethod
    def _encode_png(canvas: Image.Image) -> bytes:
        buffer = BytesIO()
        try:
            canvas.save(buffer, format="PNG")
        except (OSError, ValueError) as e:
            raise NameCardRenderError(f"PNG 인코딩 실패: {e}") from e
        return buffer.getvalue()


def generate_name_image(
    request: RenderRequest,
    background_path: PathLike,
    font_path: PathLike,
    font_family: str = "MyFont",
    default_color: str = "#FFFFFF",
) -> bytes:
    """
    이름 카드 생성 헬퍼 함수

    Args:
        request: 렌더링 요청
        background_path: 배경 이미지 경로
        font_path: 폰트 파일 경로
        font_family: 폰트 패밀리 이름
        default_color: 기본 글자 색상

    Returns:
        bytes: PNG 이미지 데이터
    """
    renderer = NameCardRenderer(
        background_path=background_path,
        font_path=font_path,
        font_family=font_family,
        default_color=default_color,
    )
    return renderer.render(request)
