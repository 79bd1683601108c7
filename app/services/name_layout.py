"""
Namecard Service - 이름 레이아웃 계산

이름 카드의 글자 배치를 계산합니다.
- 문자 체계 판별 (라틴 / CJK 및 기타)
- 문자 체계별 레이아웃 설정 선택
- 글자 폭 측정 (항상 정수 픽셀로 올림)
- 커서 이동 및 캔버스 너비 계산

측정 단계와 그리기 단계는 같은 배치 함수(_place_name)를 공유하므로
커서 계산이 항상 일치합니다.
"""

import math
import re
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Callable

# (글자, 폰트 크기) -> 픽셀 폭 (소수)
MeasureFn = Callable[[str, int], float]

# ASCII 영문/숫자/공백과 일부 문장부호만 허용 (빈 문자열도 통과)
LATIN_TEXT_PATTERN = re.compile(r"^[A-Za-z0-9\s.,!?'\"-]*$")


class ScriptKind(str, Enum):
    """문자 체계"""
    LATIN = "latin"
    CJK = "cjk"


class NameRole(str, Enum):
    """이름 구분"""
    LAST_NAME = "last_name"     # 성
    FIRST_NAME = "first_name"   # 이름


@dataclass(frozen=True)
class StartPosition:
    """첫 글자 위치 (y는 글자 기준선)"""
    x: int
    y_large: int
    y_small: int


@dataclass(frozen=True)
class Spacings:
    """구간별 간격 (픽셀)"""
    last_name_large_to_small: int
    last_name_small_to_small: int
    between_names: int
    first_name_large_to_small: int
    first_name_small_to_small: int
    one_char_last_name_padding: int = 0


@dataclass(frozen=True)
class FontSizes:
    """큰 글자 / 작은 글자 폰트 크기"""
    large: int
    small: int


@dataclass(frozen=True)
class LayoutConfig:
    """렌더링 1회분 레이아웃 설정"""
    script: ScriptKind
    start: StartPosition
    spacings: Spacings
    font_sizes: FontSizes
    font_family: str = "MyFont"
    default_color: str = "#FFFFFF"
    end_padding: int = 0
    min_width: int = 310

    def name_spacing(self, role: NameRole) -> tuple[int, int]:
        """(큰 글자→작은 글자, 작은 글자→작은 글자) 간격"""
        if role == NameRole.LAST_NAME:
            return (
                self.spacings.last_name_large_to_small,
                self.spacings.last_name_small_to_small,
            )
        return (
            self.spacings.first_name_large_to_small,
            self.spacings.first_name_small_to_small,
        )


@dataclass(frozen=True)
class GlyphPlacement:
    """그릴 글자 하나의 위치와 크기"""
    char: str
    x: int
    y: int
    size: int
    accent: bool = False


@dataclass(frozen=True)
class CardLayout:
    """카드 전체 배치 결과"""
    glyphs: tuple[GlyphPlacement, ...] = field(default_factory=tuple)
    text_width: int = 0
    canvas_width: int = 0


# 한 글자 성 뒤에 추가되는 여백
ONE_CHAR_LAST_NAME_PADDING = 20

# 문자 체계별 기본 레이아웃 (한 글자 성 여백은 선택 시 결정)
LAYOUT_PRESETS: dict[ScriptKind, LayoutConfig] = {
    ScriptKind.LATIN: LayoutConfig(
        script=ScriptKind.LATIN,
        start=StartPosition(x=110, y_large=194, y_small=202),
        spacings=Spacings(
            last_name_large_to_small=8,
            last_name_small_to_small=2,
            between_names=28,
            first_name_large_to_small=8,
            first_name_small_to_small=2,
        ),
        font_sizes=FontSizes(large=140, small=76),
        end_padding=-10,
        min_width=310,
    ),
    ScriptKind.CJK: LayoutConfig(
        script=ScriptKind.CJK,
        start=StartPosition(x=84, y_large=194, y_small=202),
        spacings=Spacings(
            last_name_large_to_small=4,
            last_name_small_to_small=0,
            between_names=16,
            first_name_large_to_small=4,
            first_name_small_to_small=0,
        ),
        font_sizes=FontSizes(large=136, small=72),
        end_padding=-20,
        min_width=310,
    ),
}


def is_latin_text(text: str) -> bool:
    """ASCII 영문/숫자/공백/일부 문장부호로만 이루어졌는지 확인"""
    return LATIN_TEXT_PATTERN.match(text) is not None


def detect_script(last_name: str, first_name: str) -> ScriptKind:
    """
    문자 체계 판별

    성과 이름이 각각 라틴 문자로 판별되어야 LATIN입니다.
    빈 문자열은 라틴으로 간주하므로, 한쪽이 비어 있으면 다른 쪽이 결과를 결정합니다.
    """
    if is_latin_text(last_name) and is_latin_text(first_name):
        return ScriptKind.LATIN
    return ScriptKind.CJK


def select_layout_config(
    last_name: str,
    first_name: str,
    font_family: str = "MyFont",
    default_color: str = "#FFFFFF",
) -> LayoutConfig:
    """
    렌더링마다 새 레이아웃 설정을 생성합니다.

    Args:
        last_name: 성
        first_name: 이름
        font_family: 폰트 패밀리 이름
        default_color: 기본 글자 색상

    Returns:
        LayoutConfig: 문자 체계에 맞는 설정
    """
    preset = LAYOUT_PRESETS[detect_script(last_name, first_name)]
    padding = ONE_CHAR_LAST_NAME_PADDING if len(last_name) == 1 else 0

    return replace(
        preset,
        spacings=replace(preset.spacings, one_char_last_name_padding=padding),
        font_family=font_family,
        default_color=default_color,
    )


def glyph_width(measure: MeasureFn, char: str, size: int) -> int:
    """글자 폭을 정수 픽셀로 올림"""
    return math.ceil(measure(char, size))


def _place_name(
    name: str,
    cursor: int,
    role: NameRole,
    config: LayoutConfig,
    measure: MeasureFn,
) -> tuple[list[GlyphPlacement], int]:
    """첫 글자는 크게, 나머지는 작게 배치하고 마지막 커서 위치를 반환"""
    large_to_small, small_to_small = config.name_spacing(role)
    sizes = config.font_sizes

    first_char = name[0]
    placements = [
        GlyphPlacement(first_char, cursor, config.start.y_large, sizes.large)
    ]
    cursor += glyph_width(measure, first_char, sizes.large)

    rest = name[1:]
    if rest:
        cursor += large_to_small
        for i, char in enumerate(rest):
            placements.append(
                GlyphPlacement(char, cursor, config.start.y_small, sizes.small)
            )
            cursor += glyph_width(measure, char, sizes.small)
            if i < len(rest) - 1:
                cursor += small_to_small

    return placements, cursor


def measure_name_width(
    name: str,
    config: LayoutConfig,
    measure: MeasureFn,
    role: NameRole = NameRole.LAST_NAME,
) -> int:
    """이름 한 구간의 가로 길이 (빈 문자열은 0)"""
    if not name:
        return 0
    _, end = _place_name(name, 0, role, config, measure)
    return end


def names_gap(last_name: str, first_name: str, config: LayoutConfig) -> int:
    """성과 이름 사이 간격 (둘 다 있을 때만)"""
    if last_name and first_name:
        return config.spacings.between_names + config.spacings.one_char_last_name_padding
    return 0


def measure_text_width(
    last_name: str,
    first_name: str,
    config: LayoutConfig,
    measure: MeasureFn,
) -> int:
    """성 + 간격 + 이름 전체 가로 길이"""
    return (
        measure_name_width(last_name, config, measure, NameRole.LAST_NAME)
        + names_gap(last_name, first_name, config)
        + measure_name_width(first_name, config, measure, NameRole.FIRST_NAME)
    )


def compute_canvas_width(text_width: int, config: LayoutConfig) -> int:
    """캔버스 너비 = max(최소 너비, 시작 x + 텍스트 폭 + 끝 여백)"""
    return max(config.min_width, config.start.x + text_width + config.end_padding)


def layout_card(
    last_name: str,
    first_name: str,
    config: LayoutConfig,
    measure: MeasureFn,
) -> CardLayout:
    """
    그리기 순서대로 글자 위치를 계산합니다.

    성의 첫 글자만 accent=True로 표시됩니다.
    """
    glyphs: list[GlyphPlacement] = []
    cursor = config.start.x

    if last_name:
        placed, cursor = _place_name(
            last_name, cursor, NameRole.LAST_NAME, config, measure
        )
        placed[0] = replace(placed[0], accent=True)
        glyphs.extend(placed)

    cursor += names_gap(last_name, first_name, config)

    if first_name:
        placed, cursor = _place_name(
            first_name, cursor, NameRole.FIRST_NAME, config, measure
        )
        glyphs.extend(placed)

    text_width = cursor - config.start.x
    return CardLayout(
        glyphs=tuple(glyphs),
        text_width=text_width,
        canvas_width=compute_canvas_width(text_width, config),
    )
