"""Tests for the command-line interface."""

import pytest
from click.testing import CliRunner

from paretogp import __version__
from paretogp.cli import main


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def run_file(tmp_path, monkeypatch):
    for name in ("PARETOGP_SEED", "PARETOGP_POP_SIZE", "PARETOGP_NUM_GENS"):
        monkeypatch.delenv(name, raising=False)
    path = tmp_path / "toy.properties"
    path.write_text(
        "pop_size = 10\n"
        "num_gens = 3\n"
        "tourney_size = 3\n"
        "fitness_op = f1, f2\n"
        "initialize_op = toy_uniform\n"
        "xover_op = toy_one_point\n"
        "mutate_op = toy_gaussian\n"
        "seed = 7\n"
        "plugins = toy_problem\n"
    )
    return path


class TestCLI:
    """Test CLI commands."""

    def test_version(self, runner):
        result = runner.invoke(main, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output

    def test_run(self, runner, run_file, tmp_path):
        models = tmp_path / "models.txt"

        result = runner.invoke(main, ["run", str(run_file), "--models", str(models)])

        assert result.exit_code == 0, result.output
        assert "seed: 7" in result.output
        assert "Generations: 4" in result.output
        assert len(models.read_text().splitlines()) == 5

    def test_run_overrides(self, runner, run_file):
        result = runner.invoke(main, ["run", str(run_file), "-g", "1", "--seed", "3"])

        assert result.exit_code == 0, result.output
        assert "seed: 3" in result.output
        assert "Generations: 2" in result.output

    def test_run_unknown_operator(self, runner, run_file):
        run_file.write_text(run_file.read_text() + "mutate_op = point\n")

        result = runner.invoke(main, ["run", str(run_file)])

        assert result.exit_code == 1
        assert "point" in result.output

    def test_run_missing_file(self, runner, tmp_path):
        result = runner.invoke(main, ["run", str(tmp_path / "nope.properties")])

        assert result.exit_code != 0

    def test_operators(self, runner):
        result = runner.invoke(main, ["operators", "--plugin", "toy_problem"])

        assert result.exit_code == 0
        assert "toy_one_point" in result.output
        assert "crowded_tournament" in result.output
        assert "euclidean" in result.output

    def test_operators_bad_plugin(self, runner):
        result = runner.invoke(main, ["operators", "--plugin", "no_such_plugin_module"])

        assert result.exit_code == 1
