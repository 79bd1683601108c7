"""
Namecard Service - 핵심 설정 모듈

환경변수 로드 및 애플리케이션 설정 관리
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """애플리케이션 설정"""

    # ==========================================================================
    # 서버 설정
    # ==========================================================================
    environment: str = Field(default="development", description="실행 환경")
    host: str = Field(default="0.0.0.0", description="서버 바인드 주소")
    port: int = Field(default=8000, description="서버 포트")
    log_level: str = Field(default="INFO", description="로그 레벨")
    app_version: str = Field(default="0.0.1", description="서비스 버전")

    # ==========================================================================
    # 에셋 설정 (배경 이미지, 폰트)
    # ==========================================================================
    asset_base_url: Optional[str] = Field(
        default=None,
        description="에셋 기본 URL (없으면 요청 URL 기준)",
    )
    background_asset_path: str = Field(
        default="/public/bg.png", description="배경 이미지 경로"
    )
    font_asset_path: str = Field(
        default="/public/DreamHanSerifCN-W10.ttf", description="폰트 파일 경로"
    )
    public_dir: str = Field(
        default="public", description="/public 경로로 제공할 정적 파일 디렉토리"
    )
    asset_cache_dir: str = Field(default="/tmp", description="에셋 캐시 디렉토리")
    background_cache_name: str = Field(
        default="bg.png", description="캐시된 배경 이미지 파일명"
    )
    font_cache_name: str = Field(default="ft.ttf", description="캐시된 폰트 파일명")
    download_timeout_seconds: float = Field(
        default=30.0, description="에셋 다운로드 타임아웃 (초)"
    )

    # ==========================================================================
    # 렌더링 설정
    # ==========================================================================
    font_family: str = Field(default="MyFont", description="폰트 패밀리 이름")
    default_text_color: str = Field(
        default="#FFFFFF", description="기본 글자 색상"
    )

    # ==========================================================================
    # 응답 설정
    # ==========================================================================
    cache_control: str = Field(
        default="public, max-age=3600, s-maxage=86400",
        description="이미지 응답 Cache-Control 헤더",
    )

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


@lru_cache()
def get_settings() -> Settings:
    """설정 싱글톤 인스턴스 반환"""
    return Settings()


# 전역 설정 인스턴스
settings = get_settings()
