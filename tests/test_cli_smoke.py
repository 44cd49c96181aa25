from typer.testing import CliRunner

from guidepub.cli.cli import app


def test_cli_smoke():
    runner = CliRunner()
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    for name in ("build", "check", "show", "related", "tag", "category", "commit", "init"):
        assert name in result.output
