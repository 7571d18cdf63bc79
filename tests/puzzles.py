# Copyright (C) 2026 Lukas Huwald
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

from kenken_solver.models import Cell, Grid, Puzzle, cage


def build_kenken(dimension: int, cages: list[tuple[str, int, list[int]]]) -> Puzzle:
    """Cages as (operation, target, positions) with positions written as row * 10 + col."""
    return Puzzle.kenken(
        dimension,
        [cage(op, target, *(Cell(p // 10, p % 10) for p in positions)) for op, target, positions in cages],
    )


def rows_to_grid(rows: list[str]) -> Grid:
    return tuple(tuple(int(ch) for ch in row) for row in rows)


def blank(grid: Grid, cells: list[tuple[int, int]]) -> list[list[int]]:
    rows = [list(row) for row in grid]
    for r, c in cells:
        rows[r][c] = 0
    return rows


# newdoku.com nr. 1278350
KENKEN_4X4 = [
    ("-", 1, [0, 1]),
    ("+", 8, [2, 3, 12]),
    ("*", 6, [10, 11, 20]),
    ("-", 2, [13, 23]),
    ("*", 16, [21, 30, 31]),
    ("+", 6, [22, 32, 33]),
]
KENKEN_4X4_SOLUTION = ["2341", "1234", "3412", "4123"]

# newdoku.com nr. 7888719
KENKEN_4X4_B = [
    ("+", 8, [0, 10, 11]),
    ("+", 5, [1, 2]),
    ("*", 8, [3, 13, 23]),
    ("+", 6, [12, 22, 32]),
    (":", 2, [20, 21]),
    ("*", 4, [30, 31]),
    ("c", 3, [33]),
]

KENKEN_5X5 = [
    ("+", 7, [0, 1, 10]),
    ("+", 9, [2, 3, 13]),
    ("c", 5, [4]),
    ("*", 40, [11, 12, 21]),
    ("-", 2, [14, 24]),
    ("*", 15, [20, 30]),
    ("*", 4, [22, 32]),
    ("c", 2, [23]),
    ("+", 6, [31, 40, 41]),
    (":", 2, [33, 34]),
    ("+", 12, [42, 43, 44]),
]

# newdoku.com nr. 8051833
KENKEN_7X7 = [
    ("+", 11, [0, 1, 10]),
    ("*", 24, [2, 3, 12]),
    ("*", 3, [4, 5]),
    ("*", 42, [6, 16, 26]),
    ("+", 17, [11, 21, 22, 23]),
    ("+", 12, [13, 14, 24]),
    ("*", 336, [15, 25, 35, 45]),
    ("+", 11, [20, 30, 40]),
    ("*", 42, [31, 41, 42, 43]),
    ("+", 15, [32, 33, 34]),
    ("*", 10, [36, 46]),
    ("+", 16, [44, 54, 64, 63]),
    ("*", 28, [50, 51, 60]),
    ("-", 5, [52, 53]),
    ("+", 11, [55, 56, 65]),
    (":", 3, [61, 62]),
    ("c", 4, [66]),
]

# newdoku.com nr. 7320085
KENKEN_8X8 = [
    ("*", 672, [0, 1, 2, 3]),
    (":", 2, [4, 5]),
    ("+", 23, [6, 7, 15, 16]),
    (":", 4, [10, 11]),
    (":", 4, [12, 13]),
    ("+", 19, [14, 24, 25, 35]),
    ("*", 12, [17, 27]),
    ("+", 19, [20, 21, 22, 30]),
    ("c", 6, [23]),
    ("+", 13, [26, 36, 37]),
    (":", 4, [31, 41]),
    ("-", 1, [32, 42]),
    ("+", 13, [33, 34, 43, 44]),
    (":", 3, [40, 50]),
    ("+", 18, [45, 46, 47]),
    ("*", 20, [51, 61]),
    ("*", 8, [52, 62]),
    ("+", 12, [53, 63]),
    ("*", 14, [54, 64]),
    ("+", 10, [55, 56]),
    (":", 2, [57, 67]),
    ("-", 1, [60, 70]),
    ("+", 11, [65, 75]),
    ("c", 8, [66]),
    ("+", 9, [71, 72]),
    (":", 2, [73, 74]),
    ("-", 6, [76, 77]),
]

# newdoku.com nr. 4379825
KENKEN_9X9 = [
    ("+", 8, [0, 1]),
    ("+", 7, [2, 3]),
    (":", 2, [4, 5]),
    ("+", 19, [6, 15, 16]),
    ("*", 28, [7, 8, 18]),
    ("-", 3, [10, 11]),
    ("+", 6, [12, 22]),
    (":", 9, [13, 14]),
    ("+", 25, [17, 26, 27, 36]),
    (":", 3, [20, 30]),
    (":", 8, [21, 31]),
    ("+", 10, [23, 24]),
    ("*", 8, [25, 35]),
    ("+", 21, [28, 37, 38]),
    ("*", 35, [32, 42]),
    ("+", 14, [33, 34]),
    ("*", 288, [40, 41, 50, 60]),
    ("*", 108, [43, 53, 54]),
    ("+", 21, [44, 45, 55, 56]),
    ("*", 24, [46, 47, 57]),
    ("+", 15, [48, 58, 68]),
    ("c", 7, [51]),
    ("+", 17, [52, 62, 63, 73]),
    ("*", 1134, [61, 70, 71, 80]),
    ("+", 21, [64, 74, 75]),
    ("*", 120, [65, 66, 76]),
    ("c", 4, [67]),
    ("*", 96, [72, 81, 82]),
    ("+", 13, [77, 86, 87]),
    ("*", 12, [78, 88]),
    ("+", 9, [83, 84, 85]),
]

SUDOKU_EASY = [
    "530070000",
    "600195000",
    "098000060",
    "800060003",
    "400803001",
    "700020006",
    "060000280",
    "000419005",
    "000080079",
]
SUDOKU_EASY_SOLUTION = [
    "534678912",
    "672195348",
    "198342567",
    "859761423",
    "426853791",
    "713924856",
    "961537284",
    "287419635",
    "345286179",
]

SUDOKU_EXPERT = [
    "050008269",
    "002043000",
    "009000000",
    "007000000",
    "000090040",
    "503000090",
    "000024605",
    "600000003",
    "040080000",
]

SUDOKU_EXPERT_B = [
    "000050006",
    "000001400",
    "012000009",
    "800000000",
    "700006050",
    "040000870",
    "003400000",
    "904600000",
    "000785000",
]


