"""
Namecard Service - 버전 API
"""

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from app.core.config import Settings, get_settings

router = APIRouter()


@router.get("/version")
async def get_version(settings: Settings = Depends(get_settings)):
    """서비스 버전 반환"""
    return Response(
        content=settings.app_version,
        headers={
            "content-type": "application/json; charset=UTF-8",
            "Access-Control-Allow-Origin": "*",
        },
    )
