"""
Namecard Service - 이름 카드 생성 API

GET /api/generate?lastName=山田&firstName=太郎&color=FFD700
"""

import logging
from pathlib import Path
from typing import AsyncIterator, Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import PlainTextResponse, Response

from app.apis.asset_client import AssetClient
from app.core.config import Settings, get_settings
from app.services.name_card_renderer import NameCardRenderer, RenderRequest

logger = logging.getLogger(__name__)

router = APIRouter()


async def get_asset_client(
    settings: Settings = Depends(get_settings),
) -> AsyncIterator[AssetClient]:
    """요청마다 에셋 클라이언트 생성"""
    client = AssetClient(timeout=settings.download_timeout_seconds)
    try:
        yield client
    finally:
        await client.close()


def build_asset_url(base_url: str, asset_path: str) -> str:
    """기본 URL과 에셋 경로 결합"""
    return f"{base_url.rstrip('/')}/{asset_path.lstrip('/')}"


def accent_color_from_hex(color_hex: Optional[str]) -> Optional[str]:
    """'FFD700' -> '#FFD700'"""
    if not color_hex:
        return None
    return f"#{color_hex}"


@router.get("/generate")
async def generate_name_card(
    request: Request,
    last_name: str = Query(default="", alias="lastName"),
    first_name: str = Query(default="", alias="firstName"),
    color: Optional[str] = Query(default=None),
    settings: Settings = Depends(get_settings),
    asset_client: AssetClient = Depends(get_asset_client),
):
    """이름 카드 PNG 생성"""
    try:
        # 1. 에셋 준비 (배경 이미지, 폰트 병렬 다운로드)
        base_url = settings.asset_base_url or str(request.base_url)
        cache_dir = Path(settings.asset_cache_dir)

        background_path, font_path = await asset_client.download_assets([
            (
                build_asset_url(base_url, settings.background_asset_path),
                cache_dir / settings.background_cache_name,
            ),
            (
                build_asset_url(base_url, settings.font_asset_path),
                cache_dir / settings.font_cache_name,
            ),
        ])

        # 2. 이미지 생성
        renderer = NameCardRenderer(
            background_path=background_path,
            font_path=font_path,
            font_family=settings.font_family,
            default_color=settings.default_text_color,
        )
        image = await renderer.render_async(RenderRequest(
            last_name=last_name,
            first_name=first_name,
            last_name_first_char_color=accent_color_from_hex(color),
        ))

        # 3. 이미지 응답
        return Response(
            content=image,
            media_type="image/png",
            headers={"Cache-Control": settings.cache_control},
        )

    except Exception as e:
        logger.error(f"Error generating name card: {e}")
        return PlainTextResponse(f"이미지 생성 실패: {e}", status_code=500)
