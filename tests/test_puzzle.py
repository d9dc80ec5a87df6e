"""Unit tests for puzzle representation, Latin grids and validation."""

import random

import numpy as np
import pytest
from kenken.core.exceptions import CageShapeError, KenkenError
from kenken.core.grid import LatinGrid
from kenken.core.puzzle import Cage, Operation, Puzzle, Solution
from kenken.core.validator import (
    cage_satisfied,
    count_solutions,
    has_unique_solution,
    is_latin_square,
    validate_solution,
)
from kenken.solvers.area import Candidates, Solved

TUTORIAL_STRING = "3<5.a.0,1><3.a.2,5><4.a.3,6><3.a.4,7><3.f.8>"


class TestOperation:
    """Tests for operation codes."""

    @pytest.mark.parametrize("op,code", [
        (Operation.ADD, "a"),
        (Operation.SUB, "s"),
        (Operation.MUL, "m"),
        (Operation.DIV, "d"),
        (Operation.FREE, "f"),
    ])
    def test_opcode(self, op, code):
        assert op.opcode == code
        assert Operation.from_opcode(code) == op

    def test_unknown_opcode(self):
        with pytest.raises(ValueError):
            Operation.from_opcode("x")


class TestCage:
    """Tests for the Cage class."""

    def test_label(self):
        assert Cage(12, Operation.MUL, (0, 1)).label == "12x"
        assert Cage(3, Operation.FREE, (8,)).label == "3"

    def test_cells_become_tuple(self):
        cage = Cage(5, Operation.ADD, [0, 1])
        assert cage.cells == (0, 1)
        assert len(cage) == 2

    def test_negative_target(self):
        with pytest.raises(ValueError):
            Cage(-1, Operation.ADD, (0, 1))

    def test_dict_round_trip(self):
        cage = Cage(2, Operation.DIV, (4, 5))
        assert cage.to_dict() == {"target": 2, "operation": "div", "cells": [4, 5]}
        assert Cage.from_dict(cage.to_dict()) == cage


class TestPuzzle:
    """Tests for the Puzzle class."""

    def test_to_string(self, tutorial_puzzle):
        assert tutorial_puzzle.to_string() == TUTORIAL_STRING

    def test_from_string(self, tutorial_puzzle):
        assert Puzzle.from_string(TUTORIAL_STRING) == tutorial_puzzle

    def test_string_round_trip(self, puzzle_9x9):
        assert Puzzle.from_string(puzzle_9x9.to_string()) == puzzle_9x9

    def test_from_string_ignores_whitespace(self, tutorial_puzzle):
        text = "3 <5.a.0,1>\n<3.a.2,5> <4.a.3,6>\n<3.a.4,7> <3.f.8>\n"
        assert Puzzle.from_string(text) == tutorial_puzzle

    @pytest.mark.parametrize("text", [
        "",
        "x<1.f.0>",
        "3<5.a.0,1",
        "3<5.a.>",
        "3<5.q.0,1>",
        "3<5,a,0.1>",
        "0",
        "2<1.f.9>",
    ])
    def test_malformed_string(self, text):
        with pytest.raises(ValueError):
            Puzzle.from_string(text)

    def test_dict_round_trip(self, mixed_puzzle):
        assert Puzzle.from_dict(mixed_puzzle.to_dict()) == mixed_puzzle

    def test_invalid_size(self):
        with pytest.raises(ValueError):
            Puzzle(0, ())

    def test_cell_out_of_range(self):
        with pytest.raises(ValueError):
            Puzzle(2, (Cage(1, Operation.FREE, (4,)),))

    def test_cage_map(self, tutorial_puzzle):
        expected = np.array([[0, 0, 1], [2, 3, 1], [2, 3, 4]])
        assert np.array_equal(tutorial_puzzle.cage_map(), expected)

    def test_cage_map_uncovered(self):
        puzzle = Puzzle(2, (Cage(3, Operation.ADD, (0, 1)),))
        assert puzzle.cage_map().tolist() == [[0, 0], [-1, -1]]

    def test_str(self, tutorial_puzzle):
        assert str(tutorial_puzzle) == "\n".join([
            "+-------+",
            "| A A B |",
            "| C D B |",
            "| C D E |",
            "+-------+",
            "A  5+",
            "B  3+",
            "C  4+",
            "D  3+",
            "E  3",
        ])

    def test_str_many_cages(self):
        """Boards with more than 26 cages get two-letter names."""
        cages = tuple(Cage(1, Operation.FREE, (i,)) for i in range(36))
        text = str(Puzzle(6, cages))
        assert "| A  B  C  D  E  F  |" in text
        assert "AA  1" in text
        assert "AJ  1" in text

    def test_repr(self, tutorial_puzzle):
        assert repr(tutorial_puzzle) == "Puzzle(size=3, cages=5)"


class TestSolution:
    """Tests for the Solution class."""

    def test_from_area(self):
        area = [Solved(1), Solved(2), Solved(2), Solved(1)]
        solution = Solution.from_area(area, 3)
        assert solution.values == (1, 2, 2, 1)
        assert solution.depth == 3
        assert solution.size == 2

    def test_from_unsolved_area(self):
        with pytest.raises(ValueError):
            Solution.from_area([Solved(1), Candidates({1, 2})], 0)

    def test_to_grid(self):
        grid = Solution((2, 3, 1, 3, 1, 2, 1, 2, 3)).to_grid()
        assert grid.shape == (3, 3)
        assert grid[1, 2] == 2

    def test_str(self):
        assert str(Solution((2, 3, 1, 3, 1, 2, 1, 2, 3))) == "\n".join([
            "/-------\\",
            "| 2 3 1 |",
            "| 3 1 2 |",
            "| 1 2 3 |",
            "\\-------/",
        ])

    def test_to_dict(self):
        assert Solution((1, 2, 2, 1), 1).to_dict() == {"values": [1, 2, 2, 1], "depth": 1}


class TestLatinGrid:
    """Tests for the LatinGrid class."""

    def test_cyclic_square(self):
        grid = LatinGrid(3)
        assert grid.values() == [1, 2, 3, 2, 3, 1, 3, 1, 2]
        assert grid[5] == 1
        assert grid.is_latin()

    def test_shuffle_keeps_latin(self):
        rng = random.Random(42)
        for size in (2, 4, 7, 9):
            grid = LatinGrid(size)
            grid.shuffle(size * 2, rng)
            assert grid.is_latin()
            assert is_latin_square(grid.values(), size)

    def test_shuffle_is_seeded(self):
        first, second = LatinGrid(6), LatinGrid(6)
        first.shuffle(12, random.Random(5))
        second.shuffle(12, random.Random(5))
        assert first == second
        assert hash(first) == hash(second)

    def test_swaps_and_transpose(self):
        grid = LatinGrid(3)
        grid.swap_rows(0, 2)
        assert grid.values()[:3] == [3, 1, 2]
        grid.swap_cols(0, 1)
        assert grid.values()[:3] == [1, 3, 2]
        grid.transpose()
        assert grid.is_latin()

    def test_copy_is_independent(self):
        grid = LatinGrid(4)
        copy = grid.copy()
        copy.swap_rows(0, 1)
        assert grid != copy
        assert grid == LatinGrid(4)

    def test_not_latin(self):
        grid = LatinGrid(2, np.array([[1, 1], [2, 2]]))
        assert not grid.is_latin()

    def test_bad_shape(self):
        with pytest.raises(ValueError):
            LatinGrid(3, np.ones((2, 2), dtype=int))

    def test_str(self):
        assert str(LatinGrid(2)) == "/-----\\\n| 1 2 |\n| 2 1 |\n\\-----/"


class TestValidator:
    """Tests for validation helpers."""

    @pytest.mark.parametrize("cage,values,expected", [
        (Cage(5, Operation.ADD, (0, 1)), [2, 3], True),
        (Cage(5, Operation.ADD, (0, 1)), [1, 3], False),
        (Cage(24, Operation.MUL, (0, 1, 2)), [2, 3, 4], True),
        (Cage(2, Operation.SUB, (0, 1)), [1, 3], True),
        (Cage(2, Operation.SUB, (0, 1)), [3, 1], True),
        (Cage(0, Operation.SUB, (0, 1)), [2, 2], False),
        (Cage(2, Operation.DIV, (0, 1)), [4, 2], True),
        (Cage(1, Operation.DIV, (0, 1)), [3, 2], False),
        (Cage(1, Operation.DIV, (0, 1)), [3, 3], False),
        (Cage(2, Operation.ADD, (0, 3)), [1, 1], False),
        (Cage(9, Operation.MUL, (0, 4, 8)), [3, 1, 3], True),
        (Cage(9, Operation.MUL, (0, 4, 8)), [1, 3, 3], False),
        (Cage(7, Operation.ADD, (0, 1, 2)), [2, 2, 3], False),
        (Cage(3, Operation.FREE, (0,)), [3], True),
        (Cage(3, Operation.FREE, (0,)), [2], False),
    ])
    def test_cage_satisfied(self, cage, values, expected):
        assert cage_satisfied(cage, values) == expected

    def test_is_latin_square(self):
        assert is_latin_square([1, 2, 2, 1], 2)
        assert not is_latin_square([1, 2, 1, 2], 2)
        assert not is_latin_square([1, 2, 2], 2)

    def test_validate_solution(self, tutorial_puzzle):
        values = [2, 3, 1, 3, 1, 2, 1, 2, 3]
        assert validate_solution(tutorial_puzzle, values)
        assert validate_solution(tutorial_puzzle, Solution(tuple(values)))

        wrong = [3, 2, 1, 2, 1, 3, 1, 3, 2]
        assert is_latin_square(wrong, 3)
        assert not validate_solution(tutorial_puzzle, wrong)

    def test_count_solutions(self, two_solution_puzzle, row_sum_puzzle):
        assert count_solutions(two_solution_puzzle) == 2
        assert count_solutions(row_sum_puzzle) == 12
        assert count_solutions(row_sum_puzzle, limit=5) == 5

    def test_has_unique_solution(self, tutorial_puzzle, two_solution_puzzle):
        assert has_unique_solution(tutorial_puzzle)
        assert not has_unique_solution(two_solution_puzzle)

    def test_repeated_neighbour_in_cage(self, diagonal_puzzle):
        """A diagonal sum cage can't hold the same value twice in a row."""
        assert not validate_solution(diagonal_puzzle, [1, 2, 2, 1])
        assert count_solutions(diagonal_puzzle) == 0
        assert not has_unique_solution(diagonal_puzzle)


class TestExceptions:
    """Tests for the exception hierarchy."""

    def test_cage_shape_error(self):
        error = CageShapeError(Operation.SUB, 3, "exactly 2 cells")
        assert isinstance(error, KenkenError)
        assert isinstance(error, ValueError)
        assert "SUB" in str(error)
        assert error.cell_count == 3


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
