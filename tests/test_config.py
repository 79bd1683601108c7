from app.core.config import Settings


def test_defaults():
    cfg = Settings(_env_file=None)

    assert cfg.port == 8000
    assert cfg.app_version == "0.0.1"
    assert cfg.background_asset_path == "/public/bg.png"
    assert cfg.font_cache_name == "ft.ttf"
    assert cfg.default_text_color == "#FFFFFF"
    assert cfg.asset_base_url is None


def test_env_override(monkeypatch):
    monkeypatch.setenv("PORT", "9000")
    monkeypatch.setenv("ASSET_BASE_URL", "https://cdn.test")

    cfg = Settings(_env_file=None)

    assert cfg.port == 9000
    assert cfg.asset_base_url == "https://cdn.test"
