import pytest

from content_loader.config import DEFAULT_MARKDOWN_EXTENSIONS, SiteConfig
from content_loader.loader import ContentLoader


def test_defaults():
    config = SiteConfig()
    assert str(config.content_dir) == "content"
    assert config.extension == ".md"
    assert config.sections == ("projects", "photos")
    assert config.markdown_extensions == DEFAULT_MARKDOWN_EXTENSIONS


def test_from_file_resolves_relative_content_dir(config_file, content_dir):
    config = SiteConfig.from_file(config_file(sections=["photos"]))
    assert config.content_dir == content_dir.resolve()
    assert config.sections == ("photos",)


def test_from_file_missing_raises():
    with pytest.raises(FileNotFoundError):
        SiteConfig.from_file("/definitely/not/here/config.json")


def test_from_file_invalid_json(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ValueError):
        SiteConfig.from_file(path)


@pytest.mark.parametrize("overrides", [
    {"extension": "md"},
    {"sections": "projects"},
    {"content_dir": ""},
    {"markdown_extensions": [1, 2]},
])
def test_from_file_rejects_bad_values(config_file, overrides):
    with pytest.raises(ValueError):
        SiteConfig.from_file(config_file(**overrides))


def test_unknown_keys_are_logged(config_file, caplog):
    SiteConfig.from_file(config_file(theme="dark"))
    assert "theme" in caplog.text


def test_load_without_file_uses_defaults(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("CONTENT_LOADER_CONFIG", raising=False)
    monkeypatch.delenv("CONTENT_DIR", raising=False)
    assert str(SiteConfig.load().content_dir) == "content"


def test_load_env_overrides(tmp_path, monkeypatch, config_file):
    path = config_file()
    other = tmp_path / "elsewhere"
    monkeypatch.setenv("CONTENT_LOADER_CONFIG", str(path))
    monkeypatch.setenv("CONTENT_DIR", str(other))
    config = SiteConfig.load()
    assert config.content_dir == other
    assert config.sections == ("projects", "photos")


def test_create_loader_passes_settings(config_file, content_dir):
    config = SiteConfig.from_file(config_file(extension=".markdown", markdown_extensions=["tables"]))
    loader = config.create_loader()
    assert isinstance(loader, ContentLoader)
    assert loader.content_dir == content_dir.resolve()
    assert loader.extension == ".markdown"
    assert loader.parser.extensions == ["tables"]
