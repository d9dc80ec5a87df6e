"""Shared puzzles for the KenKen tests."""

import pytest
from kenken.core.puzzle import Cage, Operation, Puzzle

ADD, SUB, MUL, DIV, FREE = (
    Operation.ADD, Operation.SUB, Operation.MUL, Operation.DIV, Operation.FREE
)


@pytest.fixture
def tutorial_puzzle():
    """3x3 puzzle solvable by deduction alone."""
    return Puzzle(3, (
        Cage(5, ADD, (0, 1)),
        Cage(3, ADD, (2, 5)),
        Cage(4, ADD, (3, 6)),
        Cage(3, ADD, (4, 7)),
        Cage(3, FREE, (8,)),
    ))


@pytest.fixture
def mixed_puzzle():
    """3x3 puzzle using every operation."""
    return Puzzle(3, (
        Cage(5, ADD, (0, 1)),
        Cage(1, SUB, (2, 5)),
        Cage(3, DIV, (3, 4)),
        Cage(2, FREE, (6,)),
        Cage(3, DIV, (7, 8)),
    ))


@pytest.fixture
def puzzle_4x4():
    return Puzzle(4, (
        Cage(24, MUL, (0, 4, 5)),
        Cage(2, SUB, (1, 2)),
        Cage(7, ADD, (3, 7, 11)),
        Cage(12, ADD, (6, 10, 14, 15)),
        Cage(2, DIV, (8, 12)),
        Cage(3, SUB, (9, 13)),
    ))


@pytest.fixture
def puzzle_5x5():
    return Puzzle(5, (
        Cage(3, SUB, (0, 5)),
        Cage(12, ADD, (1, 2, 3)),
        Cage(10, MUL, (4, 9)),
        Cage(6, ADD, (6, 7, 8)),
        Cage(3, SUB, (10, 15)),
        Cage(2, DIV, (11, 16)),
        Cage(9, ADD, (12, 13, 14)),
        Cage(40, MUL, (17, 22, 21)),
        Cage(2, SUB, (18, 23)),
        Cage(3, SUB, (19, 24)),
        Cage(3, FREE, (20,)),
    ))


@pytest.fixture
def puzzle_9x9():
    return Puzzle(9, (
        Cage(8, SUB, (0, 1)),
        Cage(7, FREE, (2,)),
        Cage(2, SUB, (3, 4)),
        Cage(3, SUB, (5, 6)),
        Cage(10, ADD, (7, 16, 25)),
        Cage(90, MUL, (8, 17, 26)),
        Cage(3, DIV, (9, 10)),
        Cage(11, ADD, (11, 20)),
        Cage(7, ADD, (12, 21)),
        Cage(1, SUB, (13, 22)),
        Cage(2, DIV, (14, 15)),
        Cage(2, SUB, (18, 19)),
        Cage(24, MUL, (23, 32, 41)),
        Cage(9, FREE, (24,)),
        Cage(5, SUB, (27, 28)),
        Cage(8, SUB, (29, 38)),
        Cage(15, ADD, (30, 31)),
        Cage(60, MUL, (33, 34, 35)),
        Cage(70, MUL, (36, 37, 46, 45)),
        Cage(7, SUB, (39, 40)),
        Cage(2, DIV, (42, 51)),
        Cage(2, SUB, (43, 52)),
        Cage(56, MUL, (44, 53)),
        Cage(1, SUB, (47, 48)),
        Cage(54, MUL, (50, 49, 58)),
        Cage(30, MUL, (54, 55)),
        Cage(3, SUB, (56, 57)),
        Cage(8, SUB, (59, 60)),
        Cage(31, ADD, (61, 70, 79, 80)),
        Cage(2, DIV, (62, 71)),
        Cage(2, DIV, (63, 72)),
        Cage(4, DIV, (64, 65)),
        Cage(3, DIV, (66, 75)),
        Cage(5, FREE, (67,)),
        Cage(15, ADD, (68, 77, 76)),
        Cage(11, ADD, (69, 78)),
        Cage(2, DIV, (73, 74)),
    ))


@pytest.fixture
def two_solution_puzzle():
    """2x2 puzzle with exactly two solutions."""
    return Puzzle(2, (
        Cage(3, ADD, (0, 1)),
        Cage(3, ADD, (2, 3)),
    ))


@pytest.fixture
def row_sum_puzzle():
    """3x3 puzzle whose cages are the rows: every 3x3 Latin square solves it."""
    return Puzzle(3, (
        Cage(6, ADD, (0, 1, 2)),
        Cage(6, ADD, (3, 4, 5)),
        Cage(6, ADD, (6, 7, 8)),
    ))


@pytest.fixture
def diagonal_puzzle():
    """2x2 puzzle whose sum cages run along the diagonals."""
    return Puzzle(2, (
        Cage(2, ADD, (0, 3)),
        Cage(4, ADD, (1, 2)),
    ))
