import json

from domain.models import RoutingMode, SourceMode
from domain.settings import PortfolioSettings, load_settings


def write_config(tmp_path, data):
    path = tmp_path / "portfolio_config.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return str(path)


def test_defaults_when_file_missing(tmp_path):
    settings = load_settings(str(tmp_path / "missing.json"), environ={})
    assert settings == PortfolioSettings()
    assert settings.listing_url == "http://localhost:3000/portfolio/"


def test_file_values_are_applied(tmp_path):
    path = write_config(tmp_path, {
        "source_mode": "manifest",
        "routing_mode": "PATH",
        "base_url": "https://example.test/",
        "prefetch_concurrency": "4",
        "unknown_key": True,
    })
    settings = load_settings(path, environ={})
    assert settings.source_mode is SourceMode.MANIFEST
    assert settings.routing_mode is RoutingMode.PATH
    assert settings.prefetch_concurrency == 4
    assert settings.asset_root == "https://example.test/portfolio/"


def test_environment_overrides_file(tmp_path):
    path = write_config(tmp_path, {"routing_mode": "path"})
    settings = load_settings(path, environ={"PORTFOLIO_ROUTING_MODE": "hash", "PORTFOLIO_ROOT": "/art/"})
    assert settings.routing_mode is RoutingMode.HASH
    assert settings.listing_url == "http://localhost:3000/art/"


def test_invalid_values_fall_back(tmp_path):
    path = write_config(tmp_path, {"source_mode": "ftp", "prefetch_concurrency": "lots"})
    settings = load_settings(path, environ={})
    assert settings.source_mode is SourceMode.LISTING
    assert settings.prefetch_concurrency == 0


def test_broken_json_is_ignored(tmp_path):
    path = tmp_path / "portfolio_config.json"
    path.write_text("{not json", encoding="utf-8")
    assert load_settings(str(path), environ={}) == PortfolioSettings()
