"""Generator module for creating KenKen puzzles."""

from .generator import KenkenGenerator, Difficulty, DEFAULT_OPERATION_WEIGHTS

__all__ = ["KenkenGenerator", "Difficulty", "DEFAULT_OPERATION_WEIGHTS"]
