"""
Namecard Service - 에셋 다운로드 클라이언트

배경 이미지와 폰트 파일을 내려받아 로컬 캐시에 저장합니다.
캐시 파일이 이미 있으면 다운로드를 건너뜁니다.
"""

import asyncio
import logging
import os
import uuid
from pathlib import Path
from typing import Optional, Union

import httpx

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class AssetDownloadError(Exception):
    """에셋 다운로드 실패"""


class AssetClient:
    """
    에셋 다운로드 클라이언트

    다운로드는 임시 파일(.part)에 먼저 기록한 뒤 캐시 경로로 교체하므로
    실패한 다운로드가 캐시에 남지 않습니다.
    """

    def __init__(
        self,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.client = httpx.AsyncClient(
            timeout=timeout,
            transport=transport,
            follow_redirects=True,
        )

    async def close(self):
        """클라이언트 종료"""
        await self.client.aclose()

    async def __aenter__(self) -> "AssetClient":
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()

    async def download_asset(self, url: str, dest_path: PathLike) -> Path:
        """
        URL에서 에셋을 내려받아 로컬 경로에 저장합니다.

        Args:
            url: 에셋 URL
            dest_path: 저장 경로

        Returns:
            Path: 저장된 (또는 이미 캐시된) 파일 경로

        Raises:
            AssetDownloadError: HTTP 오류 또는 네트워크 오류
        """
        dest = Path(dest_path)
        if dest.exists():
            logger.info(f"Asset already cached: {dest}")
            return dest

        logger.info(f"Downloading asset from {url}...")
        try:
            response = await self.client.get(url)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise AssetDownloadError(
                f"다운로드 실패: {e.response.status_code} {e.response.reason_phrase} ({url})"
            ) from e
        except httpx.HTTPError as e:
            raise AssetDownloadError(f"다운로드 실패: {url}: {e}") from e

        dest.parent.mkdir(parents=True, exist_ok=True)
        part_path = dest.with_name(f"{dest.name}.{uuid.uuid4().hex}.part")
        try:
            part_path.write_bytes(response.content)
            os.replace(part_path, dest)
        except OSError:
            part_path.unlink(missing_ok=True)
            raise

        logger.info(f"Asset saved to: {dest}")
        return dest

    async def download_assets(
        self, assets: list[tuple[str, PathLike]]
    ) -> list[Path]:
        """
        여러 에셋을 병렬로 내려받습니다.

        Args:
            assets: (URL, 저장 경로) 목록

        Returns:
            list[Path]: 입력 순서대로의 파일 경로
        """
        tasks = [
            asyncio.create_task(self.download_asset(url, path))
            for url, path in assets
        ]
        try:
            return list(await asyncio.gather(*tasks))
        finally:
            # 하나가 실패하면 나머지 다운로드도 중단
            pending = [task for task in tasks if not task.done()]
            for task in pending:
                task.cancel()
            await asyncio.gather(*pending, return_exceptions=True)

