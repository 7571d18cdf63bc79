# Copyright (C) 2026 Lukas Huwald
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

import logging

import pytest

from kenken_solver.models import Grid, Puzzle, cage
from kenken_solver.settings import SolverConfig
from kenken_solver.solver import Solver, SolverStatus


def test_solve_unique_kenken(kenken_4x4: Puzzle, kenken_4x4_solution: Grid) -> None:
    result = Solver().solve(kenken_4x4)

    assert result.status == SolverStatus.SOLVED
    assert result.grid == kenken_4x4_solution
    assert result.solutions == [kenken_4x4_solution]
    assert result.count == 1
    assert result.alternates_truncated is False
    assert result.partial is None
    assert result.puzzle is kenken_4x4


def test_solve_first_only(sudoku_easy: Puzzle, sudoku_easy_solution: Grid) -> None:
    result = Solver().solve(sudoku_easy, first_only=True)

    assert result.status == SolverStatus.SOLVED
    assert result.grid == sudoku_easy_solution


def test_solve_ambiguous() -> None:
    result = Solver().solve(Puzzle.sudoku({}, dimension=4))

    assert result.status == SolverStatus.AMBIGUOUS
    assert result.grid is None
    assert result.count == 2
    assert len(result.solutions) == 2
    assert result.solutions[0] != result.solutions[1]
    assert result.alternates_truncated is False


def test_solve_ambiguous_with_cap() -> None:
    solver = Solver(SolverConfig(max_solutions=None, solution_cap=5))
    result = solver.solve(Puzzle.sudoku({}, dimension=4))

    assert result.status == SolverStatus.AMBIGUOUS
    assert result.count == 288
    assert len(result.solutions) == 5
    assert result.alternates_truncated is True


def test_solve_unsatisfiable() -> None:
    puzzle = Puzzle.kenken(2, [cage("c", 1, (0, 0)), cage("c", 1, (0, 1)), cage("+", 3, (1, 0), (1, 1))])
    result = Solver().solve(puzzle)

    assert result.status == SolverStatus.UNSATISFIABLE
    assert result.grid is None
    assert result.solutions == []
    assert result.count == 0


def test_solve_timeout() -> None:
    solver = Solver(SolverConfig(node_budget=0))
    result = solver.solve(Puzzle.sudoku({}, dimension=4))

    assert result.status == SolverStatus.TIMEOUT
    assert result.grid is None
    assert result.partial == ((0,) * 4,) * 4
    assert result.stats.nodes == 0


def test_timeout_after_first_solution() -> None:
    puzzle = Puzzle.sudoku({}, dimension=4)
    nodes_to_first = Solver().solve(puzzle, first_only=True).stats.nodes

    result = Solver(SolverConfig(node_budget=nodes_to_first)).solve(puzzle)

    assert result.status == SolverStatus.SOLVED
    assert result.grid is not None
    assert puzzle.is_solution(result.grid)
    assert result.alternates_truncated is True


def test_solve_logs_summary(kenken_4x4: Puzzle, caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.INFO, logger="kenken_solver.solver.solver"):
        Solver().solve(kenken_4x4)

    assert "KenKen 4x4: SOLVED (1 solution(s)" in caplog.text


def test_solve_many_keeps_order(kenken_4x4: Puzzle) -> None:
    unsatisfiable = Puzzle.kenken(1, [cage("c", 2, (0, 0))])
    results = Solver().solve_many([unsatisfiable, kenken_4x4, Puzzle.sudoku({}, dimension=4)])

    assert [r.status for r in results] == [
        SolverStatus.UNSATISFIABLE,
        SolverStatus.SOLVED,
        SolverStatus.AMBIGUOUS,
    ]
    assert results[1].puzzle is kenken_4x4


def test_solve_many_empty() -> None:
    assert Solver().solve_many([]) == []
