"""Integration tests for the guidepub CLI commands"""

import json

from guidepub.cli.cli import app


def test_build_cmd_exports_catalog(runner, site):
    """build writes per-guide JSON and index.json and reports dangling links."""
    result = runner.invoke(app, ["build", "--out-dir", str(site / "dist")])
    assert result.exit_code == 0, result.output
    assert "Built catalog of 3 guide(s)" in result.output
    assert "nonexistent-guide" in result.output
    index = json.loads((site / "dist" / "index.json").read_text())
    assert index["tags"]["performance"] == ["web-performance", "caching"]
    assert (site / "dist" / "guides" / "api-docs.json").exists()


def test_build_cmd_strict_fails_on_dangling(runner, site):
    result = runner.invoke(app, ["build", "--strict", "--out-dir", str(site / "dist")])
    assert result.exit_code == 1
    assert "unresolved related guide" in result.output
    assert not (site / "dist").exists()


def test_build_cmd_with_commit(runner, site):
    result = runner.invoke(app, ["build", "--out-dir", str(site / "dist"), "--commit"])
    assert result.exit_code == 0, result.output
    assert "3 created" in result.output


def test_build_cmd_duplicate_slug_fails(runner, site, guide):
    (site / "content" / "developers" / "caching.mdx").write_text(guide(title="Other Caching"))
    result = runner.invoke(app, ["build"])
    assert result.exit_code == 1
    assert "Duplicate slug 'caching'" in result.output


def test_build_cmd_unknown_category_fails(runner, site, guide):
    (site / "content" / "sales.mdx").write_text(guide(category="sales"))
    result = runner.invoke(app, ["build"])
    assert result.exit_code == 1
    assert "unknown category" in result.output


def test_check_cmd(runner, site):
    result = runner.invoke(app, ["check"])
    assert result.exit_code == 0, result.output
    assert "3 guide(s) OK, 1 unresolved" in result.output
    assert runner.invoke(app, ["check", "--strict"]).exit_code == 1


def test_show_cmd(runner, site):
    result = runner.invoke(app, ["show", "api-docs"])
    assert result.exit_code == 0, result.output
    assert "API Documentation & Design (api-docs)" in result.output
    assert "developers/api-docs.mdx" in result.output


def test_show_cmd_unknown_slug(runner, site):
    result = runner.invoke(app, ["show", "missing"])
    assert result.exit_code == 1
    assert "No guide with slug 'missing'" in result.output


def test_related_cmd(runner, site):
    result = runner.invoke(app, ["related", "api-docs"])
    assert result.exit_code == 0, result.output
    assert "web-performance\tWeb Performance" in result.output.splitlines()
    assert "nonexistent-guide\t" not in result.output


def test_tag_cmd_case_insensitive(runner, site):
    result = runner.invoke(app, ["tag", "PERFORMANCE"])
    assert result.exit_code == 0, result.output
    assert result.output.split() == ["web-performance", "caching"]


def test_category_cmd(runner, site):
    result = runner.invoke(app, ["category", "performance"])
    assert result.output.split() == ["web-performance", "caching"]
    assert runner.invoke(app, ["category", "architects"]).exit_code == 1


def test_commit_and_init_cmds(runner, site):
    assert runner.invoke(app, ["init"]).exit_code == 0
    first = runner.invoke(app, ["commit"])
    assert first.exit_code == 0, first.output
    assert "3 created" in first.output
    second = runner.invoke(app, ["commit"])
    assert "3 unchanged" in second.output
    reset = runner.invoke(app, ["init", "--reset"])
    assert "Existing data cleared." in reset.output


def test_check_cmd_invalid_utf8_reports_error(runner, site):
    """An undecodable guide fails with an Error line naming the file."""
    (site / "content" / "bad.mdx").write_bytes(b"\xff\xfe")
    result = runner.invoke(app, ["check"])
    assert result.exit_code == 1
    assert "Error: Content build failed" in result.output
    assert "bad.mdx" in result.output
    assert "not valid UTF-8" in result.output
