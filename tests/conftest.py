# Copyright (C) 2026 Lukas Huwald
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

import pytest
from puzzles import KENKEN_4X4, KENKEN_4X4_SOLUTION, SUDOKU_EASY, SUDOKU_EASY_SOLUTION, build_kenken, rows_to_grid

from kenken_solver.models import Grid, Puzzle


@pytest.fixture
def kenken_4x4() -> Puzzle:
    return build_kenken(4, KENKEN_4X4)


@pytest.fixture
def kenken_4x4_solution() -> Grid:
    return rows_to_grid(KENKEN_4X4_SOLUTION)


@pytest.fixture
def sudoku_easy() -> Puzzle:
    return Puzzle.sudoku_from_rows(rows_to_grid(SUDOKU_EASY))


@pytest.fixture
def sudoku_easy_solution() -> Grid:
    return rows_to_grid(SUDOKU_EASY_SOLUTION)
