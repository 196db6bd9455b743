"""Unit tests for CLI functionality."""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from token_studio import __version__
from token_studio.cli import cli


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def project(tmp_path: Path, monkeypatch) -> Path:
    """An empty project directory used as the working directory."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def diff_files(tmp_path: Path) -> tuple[str, str]:
    local = tmp_path / "local.json"
    host = tmp_path / "host.json"
    local.write_text(
        json.dumps(
            [
                {"name": "spacing/md", "type": "FLOAT", "modeValues": {"Default": 16}},
                {"name": "spacing/lg", "type": "FLOAT", "modeValues": {"Default": 20}},
            ]
        )
    )
    host.write_text(
        json.dumps(
            {
                "collection": {
                    "id": "VC:1",
                    "name": "Primitives",
                    "modes": [{"modeId": "1:0", "name": "Default"}],
                },
                "variables": [
                    {
                        "id": "V:1",
                        "name": "spacing/md",
                        "resolvedType": "FLOAT",
                        "modeValues": [
                            {"modeId": "1:0", "modeName": "Default", "value": 12}
                        ],
                    },
                    {
                        "id": "V:2",
                        "name": "spacing/xl",
                        "resolvedType": "FLOAT",
                        "modeValues": [
                            {"modeId": "1:0", "modeName": "Default", "value": 32}
                        ],
                    },
                ],
            }
        )
    )
    return str(local), str(host)


class TestMainCLI:
    """Test main CLI group functionality."""

    def test_cli_help(self, runner):
        """Test CLI help output lists the commands."""
        result = runner.invoke(cli, ["--help"])

        assert result.exit_code == 0
        assert "Token Studio" in result.output
        for command in ("palette", "generate", "diff"):
            assert command in result.output

    def test_cli_version(self, runner):
        """Test CLI version option."""
        result = runner.invoke(cli, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output

    def test_quiet_and_verbose_are_exclusive(self, runner):
        """Test --quiet and --verbose together is an error."""
        result = runner.invoke(cli, ["palette", "#3B82F6", "-q", "-v"])

        assert result.exit_code == 1
        assert "mutually exclusive" in result.output


class TestPaletteCommand:
    """Test the palette command."""

    def test_palette(self, runner):
        """Test every shade is printed with its description."""
        result = runner.invoke(cli, ["palette", "#3B82F6"])

        assert result.exit_code == 0
        lines = result.output.strip().splitlines()
        assert len(lines) == 31
        assert "brand-500  #3B82F6  brand base color" in result.output

    def test_palette_quiet_legacy(self, runner):
        """Test quiet output on the legacy scale."""
        result = runner.invoke(
            cli, ["palette", "10B981", "--name", "success", "--scale", "legacy", "-q"]
        )

        assert result.exit_code == 0
        lines = result.output.strip().splitlines()
        assert len(lines) == 11
        assert "success-500 #10B981" in lines

    def test_invalid_hex(self, runner):
        """Test a malformed color exits with the validation code."""
        result = runner.invoke(cli, ["palette", "blue"])

        assert result.exit_code == 2
        assert "Invalid hex color" in result.output


class TestGenerateCommand:
    """Test the generate command."""

    def test_generate_json_file(self, runner, project):
        """Test generating every tier to a JSON file."""
        result = runner.invoke(cli, ["generate", "-o", "tokens.json"])

        assert result.exit_code == 0, result.output
        assert "Wrote" in result.output
        assert "semantic:" in result.output
        document = json.loads((project / "tokens.json").read_text())
        assert document["primitives"]["colors"]["brand"]["brand-500"]["$value"] == "#3B82F6"
        assert "primary" in document["tokens"]["action"]
        assert document["components"]["button"]
        font_size = document["tokens"]["typography"]["page"]["hero"]["font-size"]
        assert font_size["$extensions"]["modes"]["Mobile (375px)"] == 39
        assert "icon-size: " in result.output

    def test_generate_with_breakpoint_config(self, runner, project):
        """Test configured breakpoints become the responsive modes."""
        (project / "token-studio.config.json").write_text(
            json.dumps({"breakpoints": {"showValueInModeName": False}})
        )

        result = runner.invoke(cli, ["generate", "-o", "tokens.json"])

        assert result.exit_code == 0, result.output
        document = json.loads((project / "tokens.json").read_text())
        padding = document["tokens"]["spacing"]["page"]["padding-x"]
        assert padding["$extensions"]["modes"] == {"Desktop": 24, "Tablet": 20, "Mobile": 16}

    def test_generate_css_to_stdout(self, runner, project):
        """Test CSS is printed when no output file is given."""
        result = runner.invoke(cli, ["generate", "--format", "css", "-q"])

        assert result.exit_code == 0
        assert result.output.startswith(":root {")
        assert "  --spacing-md: 12px;" in result.output

    def test_generate_without_semantic(self, runner, project):
        """Test --no-semantic only produces primitives."""
        result = runner.invoke(cli, ["generate", "--no-semantic", "-q"])

        document = json.loads(result.output)
        assert document["tokens"] == {}
        assert document["components"] == {}

    def test_generate_with_config_themes(self, runner, project):
        """Test configured themes add their modes."""
        config = project / "studio.json"
        config.write_text(
            json.dumps(
                {
                    "settings": {"separator": "."},
                    "themes": [{"name": "Green", "brandColor": "#10B981"}],
                }
            )
        )

        result = runner.invoke(cli, ["generate", "--config", str(config), "-q"])

        assert result.exit_code == 0
        document = json.loads(result.output)
        modes = document["tokens"]["action"]["primary"]["$extensions"]["modes"]
        assert set(modes) == {"light", "dark", "green-light", "green-dark"}
        assert "green-brand" in document["primitives"]["colors"]

    def test_generate_invalid_config(self, runner, project):
        """Test configuration errors are reported."""
        (project / "token-studio.config.json").write_text("{broken")

        result = runner.invoke(cli, ["generate"])

        assert result.exit_code == 1
        assert "Invalid JSON" in result.output


class TestDiffCommand:
    """Test the diff command."""

    def test_diff_summary(self, runner, diff_files):
        """Test the summary and per-change lines."""
        result = runner.invoke(cli, ["diff", *diff_files])

        assert result.exit_code == 0
        assert "Primitives: +1 ~1 -0 =0" in result.output
        assert "  ~ md [Default] 12 -> 16" in result.output
        assert '  + lg {"Default":20}' in result.output
        assert "xl" not in result.output

    def test_diff_include_deletes(self, runner, diff_files):
        """Test host-only variables are reported with --include-deletes."""
        result = runner.invoke(cli, ["diff", *diff_files, "--include-deletes"])

        assert "Primitives: +1 ~1 -1 =0" in result.output
        assert '  - xl {"Default":32}' in result.output

    def test_diff_json(self, runner, diff_files):
        """Test machine-readable output."""
        result = runner.invoke(cli, ["diff", *diff_files, "--json", "-c", "Spacing"])

        data = json.loads(result.output)
        assert data["collectionName"] == "Spacing"
        assert data["summary"]["add"] == 1

    def test_diff_quiet(self, runner, diff_files):
        """Test quiet output is the summary only."""
        result = runner.invoke(cli, ["diff", *diff_files, "-q"])

        assert result.output.strip() == "Primitives: +1 ~1 -0 =0"

    def test_diff_malformed_snapshot(self, runner, diff_files, tmp_path):
        """Test an invalid host snapshot fails cleanly."""
        local, _ = diff_files
        host = tmp_path / "bad.json"
        host.write_text(json.dumps({"variables": [{"name": "x"}]}))

        result = runner.invoke(cli, ["diff", local, str(host)])

        assert result.exit_code == 1
        assert "Malformed" in result.output

    def test_diff_invalid_json(self, runner, diff_files, tmp_path):
        """Test unreadable JSON exits with the validation code."""
        _, host = diff_files
        local = tmp_path / "broken.json"
        local.write_text("[")

        result = runner.invoke(cli, ["diff", str(local), host])

        assert result.exit_code == 2

    def test_diff_malformed_mode_values(self, runner, diff_files, tmp_path):
        """Test a local modeValues list that is not name/value pairs fails cleanly."""
        _, host = diff_files
        local = tmp_path / "pairs.json"
        local.write_text(
            json.dumps([{"name": "spacing/md", "type": "FLOAT", "modeValues": [["Default"]]}])
        )

        result = runner.invoke(cli, ["diff", str(local), host])

        assert result.exit_code == 2
        assert "Invalid local variable" in result.output
        assert result.exception is None or isinstance(result.exception, SystemExit)
