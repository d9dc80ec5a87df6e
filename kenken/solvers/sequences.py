"""
Candidate-sequence generation for KenKen cages.

Each generator enumerates every assignment of values to a cage's cells that
meets the cage's arithmetic constraint. When an ``area`` (the cage's cells,
in cage order) is given, every position is restricted to what its cell still
admits: a solved cell forces its value, an unsolved cell its candidates.

Sum and product sequences never repeat a value in two consecutive positions.
Cages are grown as paths through the grid, so consecutive cells of a cage are
neighbours in one row or column and can't share a value.
"""

from __future__ import annotations
from typing import List, Optional, Sequence, Tuple

from .area import Cell, admits


def generate_sum(
    length: int,
    maximum: int,
    target: int,
    area: Optional[Sequence[Cell]] = None,
) -> List[List[int]]:
    """
    Enumerate sequences of ``length`` values in 1..maximum summing to ``target``.

    Branch and bound: a value is skipped when the positions left after it,
    each holding at least 1 and at most ``maximum``, could no longer reach
    the target.

    Args:
        length: Number of cells in the cage.
        maximum: Largest allowed value (the board size).
        target: Required sum.
        area: Optional current state of the cage's cells.

    Returns:
        All admissible sequences, in lexicographic order.
    """
    sequences: List[List[int]] = []
    sequence: List[int] = []

    def extend(total: int) -> None:
        pos = len(sequence)
        if pos == length:
            if total == target:
                sequences.append(list(sequence))
            return

        remaining = length - pos - 1
        for num in range(1, maximum + 1):
            if total + num + remaining > target:
                break
            if total + num + remaining * maximum < target:
                continue
            if sequence and sequence[-1] == num:
                continue
            if area is not None and not admits(area[pos], num):
                continue
            sequence.append(num)
            extend(total + num)
            sequence.pop()

    extend(0)
    return sequences


def generate_product(
    length: int,
    maximum: int,
    target: int,
    area: Optional[Sequence[Cell]] = None,
) -> List[List[int]]:
    """
    Enumerate sequences of ``length`` values in 1..maximum multiplying to ``target``.

    A value is skipped when the partial product no longer divides the target,
    or when the positions left (each between 1 and ``maximum``) could not
    reach it.

    Args:
        length: Number of cells in the cage.
        maximum: Largest allowed value (the board size).
        target: Required product.
        area: Optional current state of the cage's cells.

    Returns:
        All admissible sequences, in lexicographic order.
    """
    sequences: List[List[int]] = []
    sequence: List[int] = []

    def extend(product: int) -> None:
        pos = len(sequence)
        if pos == length:
            if product == target:
                sequences.append(list(sequence))
            return

        remaining = length - pos - 1
        for num in range(1, maximum + 1):
            partial = product * num
            if partial > target:
                break
            if target % partial != 0:
                continue
            if partial * maximum ** remaining < target:
                continue
            if sequence and sequence[-1] == num:
                continue
            if area is not None and not admits(area[pos], num):
                continue
            sequence.append(num)
            extend(partial)
            sequence.pop()

    extend(1)
    return sequences


def _orient_pairs(
    pairs: List[Tuple[int, int]],
    area: Optional[Sequence[Cell]],
) -> List[Tuple[int, int]]:
    """
    Emit each base pair forward and reversed, keeping the orientations the
    two cells admit. Each orientation is checked on its own.
    """
    oriented = []
    for a, b in pairs:
        if area is None:
            oriented.append((a, b))
            oriented.append((b, a))
            continue
        first, second = area[0], area[1]
        if admits(first, a) and admits(second, b):
            oriented.append((a, b))
        if admits(first, b) and admits(second, a):
            oriented.append((b, a))
    return oriented


def generate_difference(
    maximum: int,
    target: int,
    area: Optional[Sequence[Cell]] = None,
) -> List[Tuple[int, int]]:
    """
    Enumerate ordered pairs of distinct values in 1..maximum differing by ``target``.

    Args:
        maximum: Largest allowed value (the board size).
        target: Required absolute difference.
        area: Optional current state of the two cells.

    Returns:
        Admissible (first cell, second cell) pairs.
    """
    pairs = []
    for n in range(1, maximum + 1):
        d = n - target
        if 0 < d <= maximum and d != n:
            pairs.append((n, d))
    return _orient_pairs(pairs, area)


def generate_quotient(
    maximum: int,
    target: int,
    area: Optional[Sequence[Cell]] = None,
) -> List[Tuple[int, int]]:
    """
    Enumerate ordered pairs of distinct values in 1..maximum with quotient ``target``.

    Args:
        maximum: Largest allowed value (the board size).
        target: Required quotient of the larger value by the smaller one.
        area: Optional current state of the two cells.

    Returns:
        Admissible (first cell, second cell) pairs.
    """
    pairs = []
    for i in range(1, maximum + 1):
        for j in range(1, maximum + 1):
            if i != j and i % j == 0 and i // j == target:
                pairs.append((i, j))
    return _orient_pairs(pairs, area)
