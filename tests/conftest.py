import json
import pytest

from content_loader.loader import ContentLoader


@pytest.fixture
def content_dir(tmp_path):
    root = tmp_path / "content"
    root.mkdir()
    return root


@pytest.fixture
def write_post(content_dir):
    """write_post('projects', 'slug.md', text) -> Path"""
    def _write(section, filename, text, encoding="utf-8"):
        section_dir = content_dir / section
        section_dir.mkdir(parents=True, exist_ok=True)
        path = section_dir / filename
        if isinstance(text, bytes):
            path.write_bytes(text)
        else:
            path.write_text(text, encoding=encoding)
        return path
    return _write


@pytest.fixture
def loader(content_dir):
    return ContentLoader(content_dir)


@pytest.fixture
def config_file(tmp_path, content_dir):
    def _write(**overrides):
        data = {"content_dir": "content", "sections": ["projects", "photos"]}
        data.update(overrides)
        path = tmp_path / "config.json"
        path.write_text(json.dumps(data), encoding="utf-8")
        return path
    return _write
