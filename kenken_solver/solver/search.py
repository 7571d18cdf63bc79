import logging
import time
from dataclasses import dataclass, field

from kenken_solver.constraints import Constraint, Evaluation
from kenken_solver.models import Grid
from kenken_solver.solver.definitions import Consistency, SearchStats
from kenken_solver.solver.domains import DomainStore
from kenken_solver.solver.propagation import Propagator
from kenken_solver.solver.solutions import SolutionCollector

log = logging.getLogger(__name__)


@dataclass
class Frame:
    """One branch point: the chosen cell, its candidates and the trail position before branching."""

    index: int
    candidates: list[int]
    mark: int
    cursor: int = 0


@dataclass
class Search:
    store: DomainStore
    propagator: Propagator
    constraints: list[Constraint]
    collector: SolutionCollector
    max_solutions: int | None = 2
    node_budget: int | None = None
    stats: SearchStats = field(default_factory=SearchStats)
    partial: Grid | None = None
    exhausted: bool = False
    timed_out: bool = False

    def run(self) -> None:
        """
        Depth-first search with an explicit frame stack.

        Afterwards exactly one of these holds:
        - `exhausted`: the whole search space was explored.
        - `timed_out`: the node budget ran out; `partial` holds the last consistent state.
        - neither: the search stopped after reaching `max_solutions`.
        """
        start = time.perf_counter()
        try:
            self._run()
        finally:
            self.stats.elapsed = time.perf_counter() - start
            self.stats.propagation_steps = self.propagator.steps

    def _run(self) -> None:
        if self.propagator.propagate(self.store) == Consistency.CONTRADICTION:
            log.debug("Initial propagation found a contradiction")
            self.exhausted = True
            return

        root = self._select()
        if root is None:
            self._record()
            self.exhausted = True
            return

        stack: list[Frame] = [root]
        self.stats.max_depth = 1

        while stack:
            frame = stack[-1]
            self.store.rollback(frame.mark)

            if frame.cursor >= len(frame.candidates):
                stack.pop()
                self.stats.backtracks += 1
                log.debug(f"Backtracking from {self.store.cell_at(frame.index)}")
                continue

            if self.node_budget is not None and self.stats.nodes >= self.node_budget:
                log.warning(f"Node budget of {self.node_budget} exhausted at depth {len(stack)}")
                self.partial = self.store.partial_grid()
                self.timed_out = True
                return

            value = frame.candidates[frame.cursor]
            frame.cursor += 1
            self.stats.nodes += 1

            cell = self.store.cell_at(frame.index)
            log.debug(f"Depth {len(stack)}: trying {cell} = {value}")

            self.store.assign(frame.index, value)
            touched = self.store.changes_since(frame.mark)
            if self.propagator.propagate(self.store, touched) == Consistency.CONTRADICTION:
                continue

            child = self._select()
            if child is None:
                if self._record() and self._enough_solutions():
                    return
                continue

            stack.append(child)
            self.stats.max_depth = max(self.stats.max_depth, len(stack))

        self.exhausted = True

    def _select(self) -> Frame | None:
        """Most constrained open cell, ties broken by the lowest row-major index."""
        best_index: int | None = None
        best_size = 0
        for index in range(len(self.store)):
            size = len(self.store.domain(index))
            if size > 1 and (best_index is None or size < best_size):
                best_index, best_size = index, size
                if size == 2:
                    break

        if best_index is None:
            return None
        return Frame(
            index=best_index,
            candidates=sorted(self.store.domain(best_index)),
            mark=self.store.mark(),
        )

    def _record(self) -> bool:
        for constraint in self.constraints:
            evaluation = constraint.evaluate(self.store)
            if evaluation != Evaluation.SATISFIED:
                log.warning(f"Rejected complete assignment: {constraint} is {evaluation.value}")
                return False

        self.collector.add(self.store.grid())
        log.debug(f"Recorded solution {self.collector.count}")
        return True

    def _enough_solutions(self) -> bool:
        return self.max_solutions is not None and self.collector.count >= self.max_solutions
