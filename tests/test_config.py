"""Tests for solver configuration and the command line."""

import json

import pytest
from knight_tour.cli import main, parse_position
from knight_tour.config import SolverConfig
from knight_tour.core.board import Position
from knight_tour.solvers import BacktrackingSolver, WarnsdorffSolver, RandomizedWarnsdorffSolver


class TestSolverConfig:
    """Tests for SolverConfig."""

    def test_defaults(self):
        config = SolverConfig()
        solver = config.build_solver()
        assert isinstance(solver, WarnsdorffSolver)
        assert not isinstance(solver, RandomizedWarnsdorffSolver)
        assert solver.prune_parity

    def test_build_each_algorithm(self):
        assert isinstance(SolverConfig(algorithm="backtracking").build_solver(), BacktrackingSolver)

        solver = SolverConfig(algorithm="randomized", max_attempts=5, seed=9).build_solver()
        assert isinstance(solver, RandomizedWarnsdorffSolver)
        assert solver.max_attempts == 5
        assert solver.seed == 9

    def test_unknown_algorithm(self):
        with pytest.raises(ValueError):
            SolverConfig(algorithm="genetic")

    def test_from_dict_ignores_unknown_keys(self):
        config = SolverConfig.from_dict({"algorithm": "randomized", "colour": "blue"})
        assert config.algorithm == "randomized"

    def test_from_json_file(self, tmp_path):
        path = tmp_path / "solver.json"
        path.write_text(json.dumps({"algorithm": "backtracking", "timeout_seconds": 2.5}))

        config = SolverConfig.from_json_file(str(path))

        assert config.algorithm == "backtracking"
        assert config.timeout_seconds == 2.5
        assert config.to_dict()["timeout_seconds"] == 2.5


class TestCli:
    """Tests for the command line."""

    def test_parse_position(self):
        assert parse_position("2,3") == Position(2, 3)
        with pytest.raises(ValueError):
            parse_position("2")

    def test_hint_json(self, capsys):
        main(["hint", "--size", "5", "--start", "0,0", "--json"])
        out = json.loads(capsys.readouterr().out)
        assert out["outcome"] == "found"
        assert out["hint"] in ({"row": 1, "col": 2}, {"row": 2, "col": 1})

    def test_check_with_visited(self, capsys):
        main(["check", "--size", "5", "--start", "1,2", "--visited", "0,0", "--json"])
        out = json.loads(capsys.readouterr().out)
        assert "possible" in out

    def test_solve_text(self, capsys):
        main(["solve", "--size", "5", "--start", "0,0"])
        assert "Tour found" in capsys.readouterr().out

    def test_impossible(self, capsys):
        main(["check", "--size", "3", "--start", "0,0"])
        assert "Tour not possible" in capsys.readouterr().out

    def test_bad_start_exits(self, capsys):
        with pytest.raises(SystemExit):
            main(["check", "--size", "5", "--start", "9,9"])
        assert "Error" in capsys.readouterr().out

    def test_starts(self, capsys):
        main(["starts", "--size", "5"])
        assert "13 of 25" in capsys.readouterr().out


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
