import dataclasses
import logging
import multiprocessing
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Sequence

from joblib import effective_n_jobs

from kenken_solver.models import Grid, Puzzle, format_grid
from kenken_solver.settings import SolverConfig, load_config, parse_config
from kenken_solver.solver.definitions import SearchStats, SolverStatus, build_constraints
from kenken_solver.solver.domains import DomainStore
from kenken_solver.solver.propagation import Propagator
from kenken_solver.solver.search import Search
from kenken_solver.solver.solutions import SolutionCollector

log = logging.getLogger(__name__)


@dataclass
class SolverResult:
    """Outcome of solving one puzzle."""

    status: SolverStatus
    puzzle: Puzzle
    grid: Grid | None = None
    solutions: list[Grid] = field(default_factory=list)
    total_found_at_least: int = 0
    alternates_truncated: bool = False
    partial: Grid | None = None
    stats: SearchStats = field(default_factory=SearchStats)

    @property
    def count(self) -> int:
        return self.total_found_at_least


class Solver:
    def __init__(self, config: SolverConfig | None = None):
        self.config = config if config is not None else SolverConfig()

    def solve(self, puzzle: Puzzle, first_only: bool = False) -> SolverResult:
        """
        Solve a validated puzzle.

        Args:
            puzzle: The puzzle to solve.
            first_only: Stop at the first solution instead of checking for alternates.

        Returns:
            A SolverResult. SOLVED carries `grid`; AMBIGUOUS carries up to
            `solution_cap` grids in `solutions`; TIMEOUT carries `partial`.
        """
        config = self.config
        max_solutions = 1 if first_only else config.max_solutions

        store = DomainStore.for_puzzle(puzzle)
        constraints = build_constraints(puzzle, config)
        propagator = Propagator(constraints, puzzle.dimension)
        collector = SolutionCollector(cap=config.solution_cap)

        search = Search(
            store=store,
            propagator=propagator,
            constraints=constraints,
            collector=collector,
            max_solutions=max_solutions,
            node_budget=config.node_budget,
        )
        search.run()

        result = self._build_result(puzzle, search, collector)
        stats = result.stats
        log.info(
            f"{puzzle.kind.value} {puzzle.dimension}x{puzzle.dimension}: {result.status.value} "
            f"({collector.count} solution(s), {stats.nodes} nodes, {stats.backtracks} backtracks, "
            f"{stats.propagation_steps} propagation steps, {stats.elapsed:.3f}s)"
        )
        if result.grid is not None:
            log.debug(f"Solution:\n{format_grid(result.grid)}")
        return result

    def solve_many(self, puzzles: Sequence[Puzzle], n_jobs: int = 1) -> list[SolverResult]:
        """Solve independent puzzles, in worker processes if n_jobs allows it. Results keep input order."""
        n_workers = min(effective_n_jobs(n_jobs), max(len(puzzles), 1))
        if n_workers <= 1:
            return [self.solve(puzzle) for puzzle in puzzles]

        with multiprocessing.Pool(processes=n_workers) as pool:
            return pool.map(self.solve, puzzles)

    def _build_result(self, puzzle: Puzzle, search: Search, collector: SolutionCollector) -> SolverResult:
        stats = search.stats

        if collector.count == 0:
            if search.timed_out:
                return SolverResult(
                    status=SolverStatus.TIMEOUT,
                    puzzle=puzzle,
                    partial=search.partial,
                    stats=stats,
                )
            return SolverResult(status=SolverStatus.UNSATISFIABLE, puzzle=puzzle, stats=stats)

        status = collector.classify()
        if status == SolverStatus.SOLVED:
            return SolverResult(
                status=status,
                puzzle=puzzle,
                grid=collector.first,
                solutions=list(collector.solutions),
                total_found_at_least=1,
                alternates_truncated=not search.exhausted,
                stats=stats,
            )

        return SolverResult(
            status=status,
            puzzle=puzzle,
            solutions=list(collector.solutions),
            total_found_at_least=collector.count,
            alternates_truncated=collector.truncated,
            stats=stats,
        )


def create_solver(config_file: str | Path | None = None, **overrides: Any) -> Solver:
    """
    Create a Solver from a YAML settings file.

    Args:
        config_file: Path to the YAML settings file. If None, uses the packaged config/solver.yaml
        overrides: Individual settings that take precedence over the file.

    Returns:
        A Solver instance with the resulting configuration
    """
    config = load_config(config_file)
    if overrides:
        parse_config(overrides)
        config = dataclasses.replace(config, **overrides)
    return Solver(config)
