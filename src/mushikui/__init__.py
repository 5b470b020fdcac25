"""Digit model, arithmetic, parsing, and backtracking search for long-multiplication cryptarithms."""

from .model import Digit, Puzzle, ValidationError
from .solver_core import solve, count_solutions, is_unique
from .parser import parse_puzzle

__all__ = [
    "Digit",
    "Puzzle",
    "ValidationError",
    "solve",
    "count_solutions",
    "is_unique",
    "parse_puzzle",
]
