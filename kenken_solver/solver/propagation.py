import logging
from collections import deque
from typing import Iterable

from kenken_solver.constraints import Constraint, PropagationResult
from kenken_solver.solver.definitions import Consistency, compute_watch_lists
from kenken_solver.solver.domains import DomainStore

log = logging.getLogger(__name__)


class Propagator:
    """
    Work-list fixpoint over the constraints of one puzzle.

    Only constraints watching a cell whose domain changed are re-run. Changes
    are read back from the store's trail, so a constraint that prunes cells
    outside its own scope still wakes up the constraints watching them.
    """

    def __init__(self, constraints: list[Constraint], dimension: int):
        self.constraints = constraints
        self.watchers = compute_watch_lists(constraints, dimension)
        self.steps = 0

    def propagate(self, store: DomainStore, touched: Iterable[int] | None = None) -> Consistency:
        if store.has_empty_domain():
            return Consistency.CONTRADICTION

        if touched is None:
            queue = deque(range(len(self.constraints)))
        else:
            queue = deque(self._watching(touched))
        queued = set(queue)

        while queue:
            position = queue.popleft()
            queued.discard(position)
            constraint = self.constraints[position]

            mark = store.mark()
            result = constraint.propagate(store)
            self.steps += 1

            if result == PropagationResult.CONTRADICTION:
                log.debug(f"Contradiction in {constraint}")
                return Consistency.CONTRADICTION

            for index in store.changes_since(mark):
                if not store.domain(index):
                    log.debug(f"{constraint} emptied the domain of {store.cell_at(index)}")
                    return Consistency.CONTRADICTION
                for watcher in self.watchers[index]:
                    if watcher not in queued:
                        queue.append(watcher)
                        queued.add(watcher)

        return Consistency.CONSISTENT

    def _watching(self, touched: Iterable[int]) -> list[int]:
        positions: set[int] = set()
        for index in touched:
            positions.update(self.watchers[index])
        return sorted(positions)
