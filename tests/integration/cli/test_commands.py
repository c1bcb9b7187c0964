"""Integration tests for the check, list and export commands"""

import pytest
from typer.testing import CliRunner

from blogstore.cli.cli import app


@pytest.fixture(name="runner")
def runner_fixture(tmp_path, monkeypatch):
    """CliRunner executing from a clean tmp directory with no config.yaml or env overrides."""
    monkeypatch.chdir(tmp_path)
    for name in ("CONTENT_DIR", "POSTS_DIR", "OUTPUT_DIR", "LOG_LEVEL"):
        monkeypatch.delenv(f"BLOGSTORE_{name}", raising=False)
    return CliRunner()


def test_help(runner):
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    assert "check" in result.output


def test_check_ok(runner, site):
    result = runner.invoke(app, ["check", str(site)])
    assert result.exit_code == 0, result.output
    assert "OK - 2 post(s), 1 page(s)" in result.output


def test_check_uses_configured_content_dir(runner, site, monkeypatch):
    monkeypatch.setenv("BLOGSTORE_CONTENT_DIR", str(site))
    result = runner.invoke(app, ["check"])
    assert result.exit_code == 0, result.output


def test_check_reports_violation(runner, make_site):
    root = make_site({"about.md": "---\ntitle: About\n---\nNo permalink.\n"})
    result = runner.invoke(app, ["check", str(root)])
    assert result.exit_code == 1
    assert "missing_permalink: about.md" in result.output


def test_check_missing_path(runner, tmp_path):
    result = runner.invoke(app, ["check", str(tmp_path / "nowhere")])
    assert result.exit_code == 1
    assert "not found" in result.output


def test_list_posts(runner, site):
    result = runner.invoke(app, ["list", str(site)])
    assert result.exit_code == 0, result.output
    lines = result.output.strip().splitlines()
    assert lines == [
        "2016-12-24\t2016-12-24-lazy-streams\tLazy streams",
        "2016-10-23\t2016-10-23-elixir-processes\tElixir processes",
    ]


def test_list_pages(runner, site):
    result = runner.invoke(app, ["list", str(site), "--pages"])
    assert result.exit_code == 0, result.output
    assert result.output.strip() == "/about/\tAbout"


def test_export_writes_documents(runner, site, tmp_path):
    out = tmp_path / "dist"
    result = runner.invoke(app, ["export", str(site), "--out-dir", str(out)])
    assert result.exit_code == 0, result.output
    assert "Exported 3 document(s)" in result.output
    assert (out / "_posts" / "2016-12-24-lazy-streams.md").exists()
    assert (out / "about.md").exists()


def test_verbose_flag_accepted(runner, site):
    result = runner.invoke(app, ["--verbose", "check", str(site)])
    assert result.exit_code == 0, result.output


def test_check_undecodable_file(runner, make_site):
    """Unreadable content is reported as an error, not a traceback."""
    root = make_site({})
    (root / "_posts").mkdir()
    (root / "_posts" / "2016-10-23-a.md").write_bytes(b"---\ntitle: \xff\xfe\n---\nBody\n")
    result = runner.invoke(app, ["check", str(root)])
    assert result.exit_code == 1
    assert "Could not read" in result.output


def test_list_custom_posts_dir(runner, make_site):
    root = make_site({"_articles/2016-10-23-a.md": "---\ntitle: A\n---\nBody\n"})
    result = runner.invoke(app, ["list", str(root), "--posts-dir", "_articles"])
    assert result.exit_code == 0, result.output
    assert result.output.strip() == "2016-10-23\t2016-10-23-a\tA"
