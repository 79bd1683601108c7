#!/usr/bin/env python3
"""
이름 카드 로컬 생성기
- 로컬 배경 이미지와 폰트 파일로 이름 카드 PNG 생성
- 서버 없이 레이아웃 확인용

사용 예:
    namecard-render --last-name 山田 --first-name 太郎 --color "#FFD700" \
        --background public/bg.png --font public/font.ttf --output out.png
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from app.core.config import settings
from app.core.logging import setup_logging
from app.services.name_card_renderer import (
    NameCardRenderError,
    NameCardRenderer,
    RenderRequest,
)

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="이름 카드 PNG 생성")
    parser.add_argument("--last-name", default="", help="성")
    parser.add_argument("--first-name", default="", help="이름")
    parser.add_argument("--color", default=None, help="성 첫 글자 색상 (예: #FFD700)")
    parser.add_argument("--background", required=True, help="배경 이미지 경로")
    parser.add_argument("--font", required=True, help="폰트 파일 경로")
    parser.add_argument("--output", default="namecard.png", help="출력 PNG 경로")
    parser.add_argument("--log-level", default=settings.log_level, help="로그 레벨")
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    renderer = NameCardRenderer(
        background_path=args.background,
        font_path=args.font,
        font_family=settings.font_family,
        default_color=settings.default_text_color,
    )

    try:
        image = renderer.render(RenderRequest(
            last_name=args.last_name,
            first_name=args.first_name,
            last_name_first_char_color=args.color,
        ))
    except NameCardRenderError as e:
        print(f"생성 실패: {e}", file=sys.stderr)
        return 1

    output = Path(args.output)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_bytes(image)
    print(f"Generated: {output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
