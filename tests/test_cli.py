"""Tests for the toposorter command line interface."""

import json
import tomllib
from pathlib import Path

import pytest
from typer.testing import CliRunner

from toposorter._cli.main import app

runner = CliRunner()


@pytest.fixture
def workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run each command from an empty directory so no outer pyproject.toml is picked up."""
    (tmp_path / "pyproject.toml").write_text("[project]\nname = 'cli-test'\n")
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def graph_file(workdir: Path) -> Path:
    path = workdir / "graph.toml"
    path.write_text('nodes = ["D"]\n\n[dependencies]\nA = ["C", "E"]\nB = ["A"]\nE = ["C"]\n')
    return path


@pytest.fixture
def cyclic_graph_file(workdir: Path) -> Path:
    path = workdir / "cyclic.toml"
    path.write_text('[dependencies]\na = ["b"]\nb = ["a"]\n')
    return path


class TestSortCommand:
    def test_text_output(self, graph_file: Path) -> None:
        result = runner.invoke(app, ["sort", str(graph_file)])

        assert result.exit_code == 0, result.output
        assert "Total: 5 nodes" in result.output

    def test_json_to_file(self, graph_file: Path, workdir: Path) -> None:
        output = workdir / "order.json"

        result = runner.invoke(app, ["sort", str(graph_file), "--format", "json", "-o", str(output)])

        assert result.exit_code == 0, result.output
        assert json.loads(output.read_text()) == ["D", "C", "E", "A", "B"]

    def test_toml_to_file(self, graph_file: Path, workdir: Path) -> None:
        output = workdir / "order.toml"

        result = runner.invoke(app, ["sort", str(graph_file), "-f", "toml", "-o", str(output)])

        assert result.exit_code == 0, result.output
        assert tomllib.loads(output.read_text()) == {"order": ["D", "C", "E", "A", "B"]}

    def test_text_to_file(self, graph_file: Path, workdir: Path) -> None:
        output = workdir / "order.txt"

        result = runner.invoke(app, ["sort", str(graph_file), "-o", str(output)])

        assert result.exit_code == 0, result.output
        assert output.read_text().splitlines() == ["D", "C", "E", "A", "B"]

    def test_json_to_stdout(self, graph_file: Path) -> None:
        result = runner.invoke(app, ["sort", str(graph_file), "--format", "json"])

        assert result.exit_code == 0, result.output
        assert '"E"' in result.output

    def test_cycle(self, cyclic_graph_file: Path) -> None:
        result = runner.invoke(app, ["sort", str(cyclic_graph_file)])

        assert result.exit_code == 1
        assert "Cycle detected" in result.output

    def test_missing_graph_file(self, workdir: Path) -> None:
        result = runner.invoke(app, ["sort", str(workdir / "missing.toml")])

        assert result.exit_code == 1
        assert "Cannot read graph file" in result.output

    @pytest.mark.usefixtures("workdir")
    def test_no_graph_given(self) -> None:
        result = runner.invoke(app, ["sort"])

        assert result.exit_code == 1
        assert "No graph file given" in result.output

    def test_graph_and_format_from_config(self, workdir: Path) -> None:
        (workdir / "graph.toml").write_text('[dependencies]\nx = ["y"]\n')
        (workdir / "pyproject.toml").write_text("[tool.toposorter]\ngraph = 'graph.toml'\nformat = 'toml'\n")
        output = workdir / "order.out"

        result = runner.invoke(app, ["sort", "-o", str(output)])

        assert result.exit_code == 0, result.output
        assert tomllib.loads(output.read_text()) == {"order": ["y", "x"]}

    def test_format_option_overrides_config(self, workdir: Path) -> None:
        (workdir / "graph.toml").write_text('[dependencies]\nx = ["y"]\n')
        (workdir / "pyproject.toml").write_text("[tool.toposorter]\ngraph = 'graph.toml'\nformat = 'toml'\n")
        output = workdir / "order.out"

        result = runner.invoke(app, ["sort", "--format", "json", "-o", str(output)])

        assert result.exit_code == 0, result.output
        assert json.loads(output.read_text()) == ["y", "x"]

    def test_invalid_config(self, workdir: Path, graph_file: Path) -> None:
        (workdir / "pyproject.toml").write_text("[tool.toposorter]\nformat = 'yaml'\n")

        result = runner.invoke(app, ["sort", str(graph_file)])

        assert result.exit_code == 1
        assert "yaml" in result.output

    def test_config_section_not_a_table(self, workdir: Path, graph_file: Path) -> None:
        (workdir / "pyproject.toml").write_text('[tool]\ntoposorter = "graph.toml"\n')

        result = runner.invoke(app, ["sort", str(graph_file)])

        assert result.exit_code == 1
        assert "expected a table" in result.output

    def test_output_path_is_directory(self, graph_file: Path, workdir: Path) -> None:
        output = workdir / "out"
        output.mkdir()

        result = runner.invoke(app, ["sort", str(graph_file), "-o", str(output)])

        assert result.exit_code == 1
        assert "Cannot write order" in result.output


class TestCheckCommand:
    def test_acyclic(self, graph_file: Path) -> None:
        result = runner.invoke(app, ["check", str(graph_file)])

        assert result.exit_code == 0, result.output
        assert "acyclic" in result.output

    def test_cyclic(self, cyclic_graph_file: Path) -> None:
        result = runner.invoke(app, ["check", str(cyclic_graph_file)])

        assert result.exit_code == 1
        assert "Cycle detected" in result.output
        assert "a -> b -> a" in result.output

    def test_verbose(self, graph_file: Path) -> None:
        result = runner.invoke(app, ["--verbose", "check", str(graph_file)])

        assert result.exit_code == 0, result.output
