"""Tests for the cfg CLI command."""

from typer.testing import CliRunner

from semcmp.cli import app

runner = CliRunner()


def _row(output, label):
    return next(line for line in output.splitlines() if label in line)


class TestCfgCommand:
    def test_subset(self):
        result = runner.invoke(app, ["cfg", "unix", "any(unix, windows)"])
        assert result.exit_code == 0
        assert "yes" in _row(result.output, "A subset B")
        assert "no" in _row(result.output, "A superset B")
        assert "yes" in _row(result.output, "intersects")
        assert "no" in _row(result.output, "equivalent")

    def test_exclusive_targets(self):
        result = runner.invoke(app, ["cfg", 'target_os = "linux"', 'target_os = "macos"'])
        assert result.exit_code == 0
        assert "no" in _row(result.output, "intersects")

    def test_describes_both_sides(self):
        result = runner.invoke(app, ["cfg", "unix", "all(unix)"])
        assert 'A: cfg(target_family = "unix")' in result.output
        assert "yes" in _row(result.output, "equivalent")

    def test_malformed_predicate_is_reported(self):
        result = runner.invoke(app, ["cfg", 'foo = "bar"', "foo"])
        assert result.exit_code == 0
        assert "Unknown cfg key-value pair" in result.output

    def test_syntax_error(self):
        result = runner.invoke(app, ["cfg", "all(unix", "unix"])
        assert result.exit_code == 2
        assert "Cannot parse predicate" in result.output
