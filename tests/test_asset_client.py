import asyncio

import httpx
import pytest

from app.apis.asset_client import AssetClient, AssetDownloadError


def make_client(routes, calls):
    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(str(request.url))
        if request.url.path in routes:
            return httpx.Response(200, content=routes[request.url.path])
        return httpx.Response(404)

    return AssetClient(transport=httpx.MockTransport(handler))


def test_download_asset_saves_file(tmp_path):
    calls = []
    dest = tmp_path / "cache" / "bg.png"

    async def scenario():
        async with make_client({"/public/bg.png": b"png-bytes"}, calls) as client:
            return await client.download_asset("http://assets.test/public/bg.png", dest)

    path = asyncio.run(scenario())

    assert path == dest
    assert dest.read_bytes() == b"png-bytes"
    assert calls == ["http://assets.test/public/bg.png"]
    assert list(dest.parent.glob("*.part")) == []


def test_download_asset_skips_cached_file(tmp_path):
    calls = []
    dest = tmp_path / "bg.png"
    dest.write_bytes(b"cached")

    async def scenario():
        async with make_client({"/public/bg.png": b"fresh"}, calls) as client:
            return await client.download_asset("http://assets.test/public/bg.png", dest)

    asyncio.run(scenario())

    assert calls == []
    assert dest.read_bytes() == b"cached"


def test_download_asset_http_error(tmp_path):
    dest = tmp_path / "ft.ttf"

    async def scenario():
        async with make_client({}, []) as client:
            return await client.download_asset("http://assets.test/public/missing.ttf", dest)

    with pytest.raises(AssetDownloadError, match="404"):
        asyncio.run(scenario())

    assert not dest.exists()
    assert list(tmp_path.glob("*.part")) == []


def test_download_asset_transport_error(tmp_path):
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    async def scenario():
        async with AssetClient(transport=httpx.MockTransport(handler)) as client:
            return await client.download_asset("http://assets.test/public/bg.png", tmp_path / "bg.png")

    with pytest.raises(AssetDownloadError, match="connection refused"):
        asyncio.run(scenario())


def test_download_assets_keeps_order(tmp_path):
    calls = []
    routes = {"/public/bg.png": b"bg", "/public/font.ttf": b"font"}

    async def scenario():
        async with make_client(routes, calls) as client:
            return await client.download_assets([
                ("http://assets.test/public/bg.png", tmp_path / "bg.png"),
                ("http://assets.test/public/font.ttf", tmp_path / "ft.ttf"),
            ])

    background, font = asyncio.run(scenario())

    assert background.read_bytes() == b"bg"
    assert font.read_bytes() == b"font"
    assert sorted(calls) == [
        "http://assets.test/public/bg.png",
        "http://assets.test/public/font.ttf",
    ]


def test_download_assets_propagates_failure(tmp_path):
    routes = {"/public/bg.png": b"bg"}

    async def scenario():
        async with make_client(routes, []) as client:
            return await client.download_assets([
                ("http://assets.test/public/bg.png", tmp_path / "bg.png"),
                ("http://assets.test/public/font.ttf", tmp_path / "ft.ttf"),
            ])

    with pytest.raises(AssetDownloadError):
        asyncio.run(scenario())

    assert not (tmp_path / "ft.ttf").exists()


def test_download_assets_cancels_siblings_on_failure(tmp_path):
    async def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/public/bg.png":
            await asyncio.sleep(0.5)
            return httpx.Response(200, content=b"bg")
        return httpx.Response(404)

    async def scenario():
        async with AssetClient(transport=httpx.MockTransport(handler)) as client:
            with pytest.raises(AssetDownloadError):
                await client.download_assets([
                    ("http://assets.test/public/bg.png", tmp_path / "bg.png"),
                    ("http://assets.test/public/font.ttf", tmp_path / "ft.ttf"),
                ])
            leftover = [t for t in asyncio.all_tasks() if t is not asyncio.current_task()]
        await asyncio.sleep(0.7)
        return leftover

    leftover = asyncio.run(scenario())

    assert leftover == []
    assert not (tmp_path / "bg.png").exists()
    assert list(tmp_path.glob("*.part")) == []


def test_download_asset_removes_part_file_when_replace_fails(tmp_path, monkeypatch):
    def failing_replace(src, dst):
        raise OSError("disk full")

    monkeypatch.setattr("app.apis.asset_client.os.replace", failing_replace)

    async def scenario():
        async with make_client({"/public/bg.png": b"bg"}, []) as client:
            return await client.download_asset("http://assets.test/public/bg.png", tmp_path / "bg.png")

    with pytest.raises(OSError, match="disk full"):
        asyncio.run(scenario())

    assert not (tmp_path / "bg.png").exists()
    assert list(tmp_path.glob("*.part")) == []
