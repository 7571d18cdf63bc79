from dataclasses import dataclass
from enum import Enum

from kenken_solver.constraints import (
    AdditionCage,
    AllDifferent,
    CageConstraint,
    ConstantCage,
    Constraint,
    DivisionCage,
    MultiplicationCage,
    SubtractionCage,
)
from kenken_solver.models import Operation, Puzzle
from kenken_solver.settings import SolverConfig


class Consistency(Enum):
    CONSISTENT = "CONSISTENT"
    CONTRADICTION = "CONTRADICTION"


class SolverStatus(Enum):
    SOLVED = "SOLVED"
    UNSATISFIABLE = "UNSATISFIABLE"
    AMBIGUOUS = "AMBIGUOUS"
    TIMEOUT = "TIMEOUT"


@dataclass
class SearchStats:
    nodes: int = 0
    backtracks: int = 0
    max_depth: int = 0
    propagation_steps: int = 0
    elapsed: float = 0.0


CAGE_CONSTRAINTS: dict[Operation, type[CageConstraint]] = {
    Operation.ADD: AdditionCage,
    Operation.MULTIPLY: MultiplicationCage,
    Operation.SUBTRACT: SubtractionCage,
    Operation.DIVIDE: DivisionCage,
    Operation.CONSTANT: ConstantCage,
}


def build_constraints(puzzle: Puzzle, config: SolverConfig | None = None) -> list[Constraint]:
    """
    Creates the constraints of a puzzle: one AllDifferent per row, column and
    box, followed by one cage constraint per KenKen cage.
    """
    if config is None:
        config = SolverConfig()

    n = puzzle.dimension
    constraints: list[Constraint] = [
        AllDifferent(group=group, dimension=n, hidden_singles=config.hidden_singles) for group in puzzle.groups
    ]

    for cage in puzzle.cages:
        constraint_class = CAGE_CONSTRAINTS[cage.operation]
        constraints.append(
            constraint_class(
                cage=cage,
                dimension=n,
                enumeration_limit=config.cage_enumeration_limit,
                line_exclusion=config.line_exclusion,
                all_different=config.cage_all_different,
            )
        )

    return constraints


def compute_watch_lists(constraints: list[Constraint], dimension: int) -> list[list[int]]:
    """Maps each row-major cell index to the positions of the constraints covering that cell."""
    watchers: list[list[int]] = [[] for _ in range(dimension * dimension)]
    for position, constraint in enumerate(constraints):
        for index in constraint.indices:
            watchers[index].append(position)
    return watchers
