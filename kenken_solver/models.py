# Copyright (C) 2026 Lukas Huwald
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

import math
from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Iterator, Mapping, Sequence

Grid = tuple[tuple[int, ...], ...]


class ValidationError(ValueError):
    """Raised when a puzzle definition is not internally consistent."""


class PuzzleKind(str, Enum):
    KENKEN = "KenKen"
    SUDOKU = "Sudoku"


class Operation(str, Enum):
    ADD = "+"
    MULTIPLY = "*"
    SUBTRACT = "-"
    DIVIDE = ":"
    CONSTANT = "c"

    @property
    def arity(self) -> int | None:
        mapping = {
            Operation.SUBTRACT: 2,
            Operation.DIVIDE: 2,
            Operation.CONSTANT: 1,
        }
        return mapping.get(self)

    @classmethod
    def from_symbol(cls, symbol: str) -> "Operation":
        aliases = {"/": cls.DIVIDE, "x": cls.MULTIPLY}
        if symbol in aliases:
            return aliases[symbol]
        try:
            return cls(symbol)
        except ValueError:
            raise ValidationError(f"Unknown cage operation: '{symbol}'") from None


@dataclass(frozen=True, order=True)
class Cell:
    row: int
    col: int

    def __str__(self) -> str:
        return f"({self.row},{self.col})"

    def index(self, dimension: int) -> int:
        return self.row * dimension + self.col

    def in_range(self, dimension: int) -> bool:
        return 0 <= self.row < dimension and 0 <= self.col < dimension


class GroupKind(str, Enum):
    ROW = "row"
    COLUMN = "column"
    BOX = "box"


@dataclass(frozen=True)
class Group:
    """N cells that must hold a permutation of 1..N."""

    kind: GroupKind
    index: int
    cells: tuple[Cell, ...]


@dataclass(frozen=True)
class Cage:
    operation: Operation
    target: int
    cells: tuple[Cell, ...]

    def __str__(self) -> str:
        positions = ".".join(f"{cell.row}{cell.col}" for cell in self.cells)
        return f"{self.target}{self.operation.value}{positions}"

    @property
    def is_one_dimensional(self) -> bool:
        """True if the cage has several cells, all in one row or all in one column."""
        if len(self.cells) < 2:
            return False
        rows = {cell.row for cell in self.cells}
        cols = {cell.col for cell in self.cells}
        return len(rows) == 1 or len(cols) == 1

    def holds(self, values: Sequence[int]) -> bool:
        if len(values) != len(self.cells):
            return False

        if self.operation == Operation.ADD:
            return sum(values) == self.target
        if self.operation == Operation.MULTIPLY:
            return math.prod(values) == self.target
        if self.operation == Operation.SUBTRACT:
            return len(values) == 2 and abs(values[0] - values[1]) == self.target
        if self.operation == Operation.DIVIDE:
            if len(values) != 2:
                return False
            low, high = sorted(values)
            return low > 0 and high % low == 0 and high // low == self.target
        return len(values) == 1 and values[0] == self.target


def cage(operation: Operation | str, target: int, *cells: Cell | tuple[int, int]) -> Cage:
    """Convenience constructor accepting operation symbols and (row, col) tuples."""
    if not isinstance(operation, Operation):
        operation = Operation.from_symbol(operation)
    return Cage(
        operation=operation,
        target=target,
        cells=tuple(c if isinstance(c, Cell) else Cell(*c) for c in cells),
    )


@dataclass(frozen=True)
class Puzzle:
    kind: PuzzleKind
    dimension: int
    cages: tuple[Cage, ...] = ()
    givens: tuple[tuple[Cell, int], ...] = ()
    groups: tuple[Group, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if isinstance(self.dimension, bool) or not isinstance(self.dimension, int) or self.dimension < 1:
            raise ValidationError(f"Dimension must be a positive integer, got {self.dimension!r}")

        if self.kind == PuzzleKind.KENKEN:
            self._validate_kenken()
        else:
            self._validate_sudoku()

        object.__setattr__(self, "groups", tuple(self._build_groups()))

    @classmethod
    def kenken(cls, dimension: int, cages: Iterable[Cage]) -> "Puzzle":
        return cls(kind=PuzzleKind.KENKEN, dimension=dimension, cages=tuple(cages))

    @classmethod
    def sudoku(cls, givens: Mapping[Cell, int], dimension: int = 9) -> "Puzzle":
        return cls(kind=PuzzleKind.SUDOKU, dimension=dimension, givens=tuple(sorted(givens.items())))

    @classmethod
    def sudoku_from_rows(cls, rows: Sequence[Sequence[int]]) -> "Puzzle":
        """Builds a Sudoku from rows of digits, 0 marking an open cell."""
        dimension = len(rows)
        givens: dict[Cell, int] = {}
        for r, row in enumerate(rows):
            if len(row) != dimension:
                raise ValidationError(f"Row {r} has {len(row)} cells, expected {dimension}")
            for c, value in enumerate(row):
                if value != 0:
                    givens[Cell(r, c)] = value
        return cls.sudoku(givens, dimension=dimension)

    @property
    def box_size(self) -> int | None:
        if self.kind != PuzzleKind.SUDOKU:
            return None
        return math.isqrt(self.dimension)

    @property
    def given_values(self) -> dict[Cell, int]:
        return dict(self.givens)

    def cells(self) -> Iterator[Cell]:
        for r in range(self.dimension):
            for c in range(self.dimension):
                yield Cell(r, c)

    def is_solution(self, grid: Grid) -> bool:
        """
        Checks a complete grid against every row, column, box and cage rule
        and against the given digits.
        """
        n = self.dimension
        if len(grid) != n or any(len(row) != n for row in grid):
            return False

        expected = set(range(1, n + 1))
        for group in self.groups:
            if {grid[cell.row][cell.col] for cell in group.cells} != expected:
                return False

        for cage_def in self.cages:
            if not cage_def.holds([grid[cell.row][cell.col] for cell in cage_def.cells]):
                return False

        return all(grid[cell.row][cell.col] == value for cell, value in self.givens)

    def _validate_kenken(self) -> None:
        n = self.dimension
        if self.givens:
            raise ValidationError("KenKen puzzles take no given digits")
        if not self.cages:
            raise ValidationError("KenKen puzzle has no cages")

        coverage: Counter[Cell] = Counter()
        for cage_def in self.cages:
            if not cage_def.cells:
                raise ValidationError(f"Cage {cage_def} has no cells")

            out_of_range = [str(cell) for cell in cage_def.cells if not cell.in_range(n)]
            if out_of_range:
                raise ValidationError(f"Cage {cage_def} has cells outside the {n}x{n} grid: {', '.join(out_of_range)}")

            if len(set(cage_def.cells)) != len(cage_def.cells):
                raise ValidationError(f"Cage {cage_def} lists a cell more than once")

            arity = cage_def.operation.arity
            if arity is not None and len(cage_def.cells) != arity:
                raise ValidationError(
                    f"Cage {cage_def}: operation '{cage_def.operation.value}' needs exactly {arity} "
                    f"cell(s), got {len(cage_def.cells)}"
                )

            target = cage_def.target
            if isinstance(target, bool) or not isinstance(target, int) or target < 1:
                raise ValidationError(f"Cage {cage_def}: target must be a positive integer, got {target!r}")

            coverage.update(cage_def.cells)

        overlapping = sorted(cell for cell, count in coverage.items() if count > 1)
        if overlapping:
            raise ValidationError(f"Cells belong to more than one cage: {', '.join(map(str, overlapping))}")

        missing = [cell for cell in self.cells() if cell not in coverage]
        if missing:
            raise ValidationError(f"Cells not covered by any cage: {', '.join(map(str, missing))}")

    def _validate_sudoku(self) -> None:
        n = self.dimension
        if self.cages:
            raise ValidationError("Sudoku puzzles take no cages")

        box = math.isqrt(n)
        if box * box != n:
            raise ValidationError(f"Sudoku dimension {n} is not a perfect square, boxes cannot be formed")

        seen: set[Cell] = set()
        for cell, value in self.givens:
            if not cell.in_range(n):
                raise ValidationError(f"Given digit at {cell} lies outside the {n}x{n} grid")
            if cell in seen:
                raise ValidationError(f"Cell {cell} is given more than once")
            if isinstance(value, bool) or not isinstance(value, int) or not 1 <= value <= n:
                raise ValidationError(f"Given digit at {cell} must lie in [1, {n}], got {value!r}")
            seen.add(cell)

    def _build_groups(self) -> Iterator[Group]:
        n = self.dimension
        for r in range(n):
            yield Group(GroupKind.ROW, r, tuple(Cell(r, c) for c in range(n)))
        for c in range(n):
            yield Group(GroupKind.COLUMN, c, tuple(Cell(r, c) for r in range(n)))

        box = self.box_size
        if box is None:
            return
        for b in range(n):
            top, left = box * (b // box), box * (b % box)
            yield Group(
                GroupKind.BOX,
                b,
                tuple(Cell(top + i // box, left + i % box) for i in range(n)),
            )


def format_grid(grid: Grid) -> str:
    width = len(str(len(grid)))
    return "\n".join(" ".join(str(value).rjust(width) for value in row) for row in grid) + "\n"
