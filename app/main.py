"""
Namecard Service - 메인 애플리케이션

이름 카드 이미지 생성 HTTP 서비스

엔드포인트:
1. GET /api/generate - 성/이름으로 이름 카드 PNG 생성
2. GET /api/version  - 서비스 버전
3. GET /health       - 상태 확인
4. /public/*         - 배경 이미지, 폰트 등 정적 에셋 (디렉토리가 있을 때)
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from app.api import generate, version
from app.core.config import settings
from app.core.logging import setup_logging

# 로깅 설정
setup_logging(settings.log_level)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(
        f"Namecard service starting (env={settings.environment}, "
        f"version={settings.app_version})"
    )
    yield
    logger.info("Namecard service stopped")


def create_app() -> FastAPI:
    """FastAPI 애플리케이션 생성"""
    app = FastAPI(
        title="Namecard API",
        description="Renders personalized name card images",
        version=settings.app_version,
        lifespan=lifespan,
    )

    app.include_router(generate.router, prefix="/api", tags=["namecard"])
    app.include_router(version.router, prefix="/api", tags=["version"])

    public_dir = Path(settings.public_dir)
    if public_dir.is_dir():
        app.mount("/public", StaticFiles(directory=public_dir), name="public")
    else:
        logger.warning(f"Static asset directory not found: {public_dir}")

    @app.get("/health")
    async def health_check():
        return {"status": "healthy"}

    return app


app = create_app()


def main():
    """메인 함수"""
    import argparse

    import uvicorn

    parser = argparse.ArgumentParser(description="Namecard 이미지 생성 서버")
    parser.add_argument("--host", default=settings.host, help="바인드 주소")
    parser.add_argument("--port", type=int, default=settings.port, help="서버 포트")

    args = parser.parse_args()

    uvicorn.run(app, host=args.host, port=args.port)


if __name__ == "__main__":
    main()
