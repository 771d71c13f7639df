import asyncio
import json

import pytest

from main import main

pytestmark = pytest.mark.cli


@pytest.fixture
def site(config_file, write_post):
    write_post("projects", "alpha.md", "---\ntitle: Alpha\nweight: 2\n---\nAlpha body")
    write_post("projects", "beta.md", '---\ntitle: Beta\ndate: "2024-02-02"\n---\nBeta body')
    write_post("photos", "sunset.md", "---\ntitle: Sunset\nextra:\n  remote_image: https://i/s.jpg\n---\n*wow*")
    return config_file()


def run_cli(capsys, *argv):
    code = asyncio.run(main(list(argv)))
    return code, capsys.readouterr().out


def test_lists_one_section(site, capsys):
    code, out = run_cli(capsys, "--config", str(site), "--section", "projects")
    assert code == 0
    assert [p["title"] for p in json.loads(out)] == ["Beta", "Alpha"]


def test_lists_all_configured_sections(site, capsys):
    code, out = run_cli(capsys, "--config", str(site))
    data = json.loads(out)
    assert code == 0
    assert set(data) == {"projects", "photos"}
    assert data["photos"][0]["slug"] == "sunset"


def test_single_post_with_status(site, capsys):
    code, out = run_cli(capsys, "--config", str(site), "-s", "photos", "-p", "sunset", "--status")
    data = json.loads(out)
    assert code == 0
    assert data["status"] == "ok"
    assert "<em>wow</em>" in data["content"]


def test_projects_page_order(site, capsys):
    _, out = run_cli(capsys, "--config", str(site), "--projects")
    assert [p["title"] for p in json.loads(out)] == ["Alpha", "Beta"]


def test_post_requires_section(site, capsys):
    code, _ = run_cli(capsys, "--config", str(site), "--post", "alpha")
    assert code == 2


def test_missing_config_file(tmp_path, capsys):
    code, out = run_cli(capsys, "--config", str(tmp_path / "missing.json"))
    assert code == 1
    assert out == ""
