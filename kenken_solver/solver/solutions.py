from kenken_solver.models import Grid
from kenken_solver.solver.definitions import SolverStatus


class SolutionCollector:
    """Complete grids in discovery order, keeping at most `cap` of them in memory."""

    def __init__(self, cap: int | None = 10):
        self.cap = cap
        self.solutions: list[Grid] = []
        self.count = 0

    def add(self, grid: Grid) -> None:
        self.count += 1
        if self.cap is None or len(self.solutions) < self.cap:
            self.solutions.append(grid)

    @property
    def first(self) -> Grid | None:
        return self.solutions[0] if self.solutions else None

    @property
    def truncated(self) -> bool:
        return self.count > len(self.solutions)

    def classify(self) -> SolverStatus:
        if self.count == 0:
            return SolverStatus.UNSATISFIABLE
        if self.count == 1:
            return SolverStatus.SOLVED
        return SolverStatus.AMBIGUOUS
