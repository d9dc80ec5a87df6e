"""Tests for the command-line interface."""

import json

import pytest
from kenken.cli import main
from kenken.core.puzzle import Puzzle
from kenken.core.validator import has_unique_solution

TUTORIAL = "3<5.a.0,1><3.a.2,5><4.a.3,6><3.a.4,7><3.f.8>"


class TestSolveCommand:
    """Tests for `kenken solve`."""

    def test_solve(self, capsys):
        main(["solve", "--puzzle", TUTORIAL, "--verbose"])
        out = capsys.readouterr().out
        assert "1 solution(s)" in out
        assert "| 2 3 1 |" in out
        assert "depth 0, easy" in out
        assert "Nodes: 1" in out

    def test_no_solution(self, capsys):
        main(["solve", "--puzzle", "2<5.a.0,1><3.a.2,3>"])
        assert "No solution" in capsys.readouterr().out

    def test_malformed_puzzle(self, capsys):
        with pytest.raises(SystemExit) as excinfo:
            main(["solve", "--puzzle", "3<5.a.0,1"])
        assert excinfo.value.code == 1
        assert "Error parsing puzzle" in capsys.readouterr().out

    def test_depth_exceeded(self, capsys):
        with pytest.raises(SystemExit) as excinfo:
            main(["solve", "--puzzle", "3<6.a.0,1,2><6.a.3,4,5><6.a.6,7,8>", "--max-depth", "0"])
        assert excinfo.value.code == 1
        assert "maximum recursion depth of 0" in capsys.readouterr().out

    def test_bad_cage_shape(self, capsys):
        with pytest.raises(SystemExit):
            main(["solve", "--puzzle", "3<1.s.0,1,2><6.a.3,4,5><6.a.6,7,8>"])
        assert "SUB cage" in capsys.readouterr().out


class TestGenerateCommand:
    """Tests for `kenken generate`."""

    def test_generate_json(self, tmp_path, capsys):
        output = tmp_path / "puzzles.json"
        main(["generate", "--size", "4", "--count", "2", "--seed", "3", "--output", str(output)])

        with open(output) as f:
            data = json.load(f)
        assert len(data) == 2
        for entry in data:
            puzzle = Puzzle.from_string(entry["puzzle"])
            assert Puzzle.from_dict(entry) == puzzle
            assert has_unique_solution(puzzle)

    def test_generate_to_folder(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        main(["generate", "--size", "3", "--count", "1", "--seed", "1"])
        assert (tmp_path / "puzzles" / "any" / "puzzle_any_1.txt").exists()

    def test_no_command(self):
        with pytest.raises(SystemExit):
            main([])


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
