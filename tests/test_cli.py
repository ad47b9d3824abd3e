"""Tests for the command-line interface."""

from typer.testing import CliRunner

from pagefetch import __version__
from pagefetch.cli import app

runner = CliRunner()


class TestFetchCommand:
    def test_data_url(self):
        """Should print the rendered body."""
        result = runner.invoke(app, ["fetch", "data:text/html,<b>Hello</b>"])
        assert result.exit_code == 0
        assert "Hello" in result.output
        assert "<b>" not in result.output

    def test_file_listing(self, tmp_path):
        (tmp_path / "a.txt").write_text("hi")
        result = runner.invoke(app, ["fetch", tmp_path.as_uri()])
        assert result.exit_code == 0
        assert "a.txt" in result.output

    def test_raw_output(self):
        """--raw prints the response dump."""
        result = runner.invoke(app, ["fetch", "--raw", "data:,Hello"])
        assert result.exit_code == 0
        assert "Headers:" in result.output
        assert "Hello" in result.output

    def test_error_exit_code(self):
        """Fetch failures exit with status 1."""
        result = runner.invoke(app, ["fetch", "gopher://example.org/"])
        assert result.exit_code == 1
        assert "Error:" in result.output


class TestVersionCommand:
    def test_version(self):
        result = runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert __version__ in result.output
