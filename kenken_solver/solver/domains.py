from typing import Iterable, Sequence

from kenken_solver.models import Cell, Grid, Operation, Puzzle


class DomainStore:
    """
    Per-cell candidate sets for one solve attempt.

    Cells are addressed by their row-major index. Every removal goes through
    `restrict` and is appended to the trail, so `rollback` can restore the
    domains exactly as they were at any earlier `mark`.
    """

    def __init__(self, dimension: int, domains: Sequence[Iterable[int]]):
        if len(domains) != dimension * dimension:
            raise ValueError(f"Expected {dimension * dimension} domains, got {len(domains)}")
        self.dimension = dimension
        self.domains: list[set[int]] = [set(d) for d in domains]
        self.trail: list[tuple[int, int]] = []

    @classmethod
    def for_puzzle(cls, puzzle: Puzzle) -> "DomainStore":
        n = puzzle.dimension
        domains = [set(range(1, n + 1)) for _ in range(n * n)]

        for cell, value in puzzle.givens:
            domains[cell.index(n)] = {value}

        for cage_def in puzzle.cages:
            if cage_def.operation == Operation.CONSTANT:
                index = cage_def.cells[0].index(n)
                domains[index] = domains[index] & {cage_def.target}

        return cls(n, domains)

    def __len__(self) -> int:
        return len(self.domains)

    def cell_index(self, cell: Cell) -> int:
        return cell.index(self.dimension)

    def cell_at(self, index: int) -> Cell:
        return Cell(index // self.dimension, index % self.dimension)

    def domain(self, index: int) -> set[int]:
        """Returns the live candidate set. Callers must not modify it."""
        return self.domains[index]

    def value(self, index: int) -> int | None:
        domain = self.domains[index]
        if len(domain) == 1:
            return next(iter(domain))
        return None

    def restrict(self, index: int, value: int) -> bool:
        domain = self.domains[index]
        if value not in domain:
            return False
        domain.remove(value)
        self.trail.append((index, value))
        return True

    def keep_only(self, index: int, values: Iterable[int]) -> bool:
        allowed = set(values)
        changed = False
        for value in sorted(self.domains[index] - allowed):
            changed = self.restrict(index, value) or changed
        return changed

    def assign(self, index: int, value: int) -> bool:
        return self.keep_only(index, (value,))

    def mark(self) -> int:
        return len(self.trail)

    def rollback(self, mark: int) -> None:
        trail = self.trail
        while len(trail) > mark:
            index, value = trail.pop()
            self.domains[index].add(value)

    def changes_since(self, mark: int) -> set[int]:
        return {index for index, _ in self.trail[mark:]}

    def snapshot(self) -> tuple[frozenset[int], ...]:
        return tuple(frozenset(d) for d in self.domains)

    def has_empty_domain(self) -> bool:
        return any(not d for d in self.domains)

    def is_complete(self) -> bool:
        return all(len(d) == 1 for d in self.domains)

    def partial_grid(self) -> Grid:
        """Committed values row by row, 0 where a cell is still open."""
        n = self.dimension
        return tuple(tuple(self.value(r * n + c) or 0 for c in range(n)) for r in range(n))

    def grid(self) -> Grid:
        if not self.is_complete():
            raise ValueError("Domain store does not hold a complete assignment")
        return self.partial_grid()
