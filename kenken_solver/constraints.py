# Copyright (C) 2026 Lukas Huwald
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

import itertools
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Iterator

from kenken_solver.models import Cage, Cell, Group

if TYPE_CHECKING:
    from kenken_solver.solver.domains import DomainStore


class Evaluation(Enum):
    SATISFIED = "SATISFIED"
    VIOLATED = "VIOLATED"
    UNDETERMINED = "UNDETERMINED"


class PropagationResult(Enum):
    NO_PROGRESS = "NO_PROGRESS"
    PROGRESS = "PROGRESS"
    CONTRADICTION = "CONTRADICTION"


class Constraint(ABC):
    cells: tuple[Cell, ...]
    indices: tuple[int, ...]

    @abstractmethod
    def evaluate(self, store: "DomainStore") -> Evaluation:
        pass

    @abstractmethod
    def propagate(self, store: "DomainStore") -> PropagationResult:
        pass


# --- All-different groups ---


@dataclass
class AllDifferent(Constraint):
    group: Group
    dimension: int
    hidden_singles: bool = True
    cells: tuple[Cell, ...] = field(init=False)
    indices: tuple[int, ...] = field(init=False)

    def __post_init__(self) -> None:
        self.cells = self.group.cells
        self.indices = tuple(cell.index(self.dimension) for cell in self.cells)

    def __str__(self) -> str:
        return f"AllDifferent({self.group.kind.value} {self.group.index})"

    @property
    def is_permutation(self) -> bool:
        return len(self.cells) == self.dimension

    def evaluate(self, store: "DomainStore") -> Evaluation:
        seen: set[int] = set()
        complete = True
        for index in self.indices:
            domain = store.domain(index)
            if not domain:
                return Evaluation.VIOLATED
            if len(domain) > 1:
                complete = False
                continue
            value = next(iter(domain))
            if value in seen:
                return Evaluation.VIOLATED
            seen.add(value)
        return Evaluation.SATISFIED if complete else Evaluation.UNDETERMINED

    def propagate(self, store: "DomainStore") -> PropagationResult:
        progress = False

        # Naked singles: a committed value leaves every other cell of the group.
        pending = [index for index in self.indices if len(store.domain(index)) == 1]
        eliminated: set[int] = set()
        while pending:
            index = pending.pop()
            if index in eliminated:
                continue
            eliminated.add(index)
            value = store.value(index)
            if value is None:
                return PropagationResult.CONTRADICTION
            for other in self.indices:
                if other == index or not store.restrict(other, value):
                    continue
                progress = True
                remaining = len(store.domain(other))
                if remaining == 0:
                    return PropagationResult.CONTRADICTION
                if remaining == 1:
                    pending.append(other)

        places: dict[int, list[int]] = {}
        for index in self.indices:
            domain = store.domain(index)
            if not domain:
                return PropagationResult.CONTRADICTION
            for value in domain:
                places.setdefault(value, []).append(index)

        if len(places) < len(self.indices):
            return PropagationResult.CONTRADICTION

        if self.is_permutation:
            for value in range(1, self.dimension + 1):
                cells_for_value = places.get(value)
                if not cells_for_value:
                    return PropagationResult.CONTRADICTION
                if self.hidden_singles and len(cells_for_value) == 1:
                    if store.assign(cells_for_value[0], value):
                        progress = True

        return PropagationResult.PROGRESS if progress else PropagationResult.NO_PROGRESS


# --- Arithmetic cages ---


@dataclass
class CageConstraint(Constraint):
    """
    Shared behaviour of the arithmetic cages.

    Subclasses narrow domains with cheap operation-specific reasoning in
    `narrow`. Afterwards, if the product of the domain sizes is at most
    `enumeration_limit`, every complete tuple is enumerated and only values
    with a supporting tuple are kept.
    """

    cage: Cage
    dimension: int
    enumeration_limit: int = 4096
    line_exclusion: bool = True
    all_different: bool = False
    cells: tuple[Cell, ...] = field(init=False)
    indices: tuple[int, ...] = field(init=False)
    conflicts: tuple[tuple[int, int], ...] = field(init=False)
    line_peers: tuple[int, ...] = field(init=False)

    def __post_init__(self) -> None:
        self.cells = self.cage.cells
        self.indices = tuple(cell.index(self.dimension) for cell in self.cells)
        self.conflicts = tuple(
            (a, b)
            for a, b in itertools.combinations(range(len(self.cells)), 2)
            if self.all_different
            or self.cells[a].row == self.cells[b].row
            or self.cells[a].col == self.cells[b].col
        )
        self.line_peers = self._compute_line_peers()

    def __str__(self) -> str:
        return f"Cage({self.cage})"

    @property
    def target(self) -> int:
        return self.cage.target

    @abstractmethod
    def narrow(self, store: "DomainStore") -> PropagationResult:
        pass

    @abstractmethod
    def feasible(self, domains: list[set[int]]) -> bool:
        pass

    def evaluate(self, store: "DomainStore") -> Evaluation:
        domains = [store.domain(index) for index in self.indices]
        if any(not d for d in domains):
            return Evaluation.VIOLATED

        if all(len(d) == 1 for d in domains):
            values = tuple(next(iter(d)) for d in domains)
            if self.cage.holds(values) and self._no_conflicts(values):
                return Evaluation.SATISFIED
            return Evaluation.VIOLATED

        if not self.feasible(domains):
            return Evaluation.VIOLATED
        if self._enumerable(domains) and next(self._supported_tuples(domains), None) is None:
            return Evaluation.VIOLATED
        return Evaluation.UNDETERMINED

    def propagate(self, store: "DomainStore") -> PropagationResult:
        result = self.narrow(store)
        if result == PropagationResult.CONTRADICTION:
            return result
        progress = result == PropagationResult.PROGRESS

        domains = [store.domain(index) for index in self.indices]
        if not self._enumerable(domains):
            return PropagationResult.PROGRESS if progress else PropagationResult.NO_PROGRESS

        tuples = list(self._supported_tuples(domains))
        if not tuples:
            return PropagationResult.CONTRADICTION

        for position, index in enumerate(self.indices):
            if store.keep_only(index, {t[position] for t in tuples}):
                progress = True

        if self.line_exclusion and self.line_peers:
            common = set(tuples[0]).intersection(*tuples[1:])
            for peer in self.line_peers:
                for value in common:
                    if store.restrict(peer, value):
                        progress = True
                if not store.domain(peer):
                    return PropagationResult.CONTRADICTION

        return PropagationResult.PROGRESS if progress else PropagationResult.NO_PROGRESS

    def _enumerable(self, domains: list[set[int]]) -> bool:
        return math.prod(len(d) for d in domains) <= self.enumeration_limit

    def _supported_tuples(self, domains: list[set[int]]) -> Iterator[tuple[int, ...]]:
        for values in itertools.product(*(sorted(d) for d in domains)):
            if self._no_conflicts(values) and self.cage.holds(values):
                yield values

    def _no_conflicts(self, values: tuple[int, ...]) -> bool:
        return all(values[a] != values[b] for a, b in self.conflicts)

    def _compute_line_peers(self) -> tuple[int, ...]:
        """Cells sharing the cage's row (or column) but outside the cage, if the cage is one-dimensional."""
        if not self.cage.is_one_dimensional:
            return ()
        n = self.dimension
        first = self.cells[0]
        if all(cell.row == first.row for cell in self.cells):
            line = [first.row * n + c for c in range(n)]
        else:
            line = [r * n + first.col for r in range(n)]
        members = set(self.indices)
        return tuple(index for index in line if index not in members)


class ConstantCage(CageConstraint):
    def narrow(self, store: "DomainStore") -> PropagationResult:
        index = self.indices[0]
        changed = store.keep_only(index, (self.target,))
        if not store.domain(index):
            return PropagationResult.CONTRADICTION
        return PropagationResult.PROGRESS if changed else PropagationResult.NO_PROGRESS

    def feasible(self, domains: list[set[int]]) -> bool:
        return self.target in domains[0]


class _BoundsCage(CageConstraint):
    """Addition and multiplication: keep values whose complement fits the bounds of the other cells."""

    @abstractmethod
    def combine(self, values: list[int]) -> int:
        pass

    @abstractmethod
    def complement(self, value: int) -> int | None:
        pass

    def feasible(self, domains: list[set[int]]) -> bool:
        low = self.combine([min(d) for d in domains])
        high = self.combine([max(d) for d in domains])
        return low <= self.target <= high

    def narrow(self, store: "DomainStore") -> PropagationResult:
        progress = False
        changed = True
        while changed:
            changed = False
            domains = [store.domain(index) for index in self.indices]
            if any(not d for d in domains):
                return PropagationResult.CONTRADICTION
            if not self.feasible(domains):
                return PropagationResult.CONTRADICTION

            minimums = [min(d) for d in domains]
            maximums = [max(d) for d in domains]
            for position, index in enumerate(self.indices):
                rest_low = self.combine(minimums[:position] + minimums[position + 1 :])
                rest_high = self.combine(maximums[:position] + maximums[position + 1 :])
                allowed: set[int] = set()
                for value in domains[position]:
                    rest = self.complement(value)
                    if rest is not None and rest_low <= rest <= rest_high:
                        allowed.add(value)
                if store.keep_only(index, allowed):
                    progress = changed = True
                    if not allowed:
                        return PropagationResult.CONTRADICTION
                    break

        return PropagationResult.PROGRESS if progress else PropagationResult.NO_PROGRESS


class AdditionCage(_BoundsCage):
    def combine(self, values: list[int]) -> int:
        return sum(values)

    def complement(self, value: int) -> int | None:
        return self.target - value


class MultiplicationCage(_BoundsCage):
    def combine(self, values: list[int]) -> int:
        return math.prod(values)

    def complement(self, value: int) -> int | None:
        if value <= 0 or self.target % value != 0:
            return None
        return self.target // value


class _PairCage(CageConstraint):
    """Two-cell cages: a value survives if some candidate of the other cell pairs with it."""

    @abstractmethod
    def pairs(self, value: int, other: int) -> bool:
        pass

    def feasible(self, domains: list[set[int]]) -> bool:
        first, second = domains
        return any(self.pairs(v, w) for v in first for w in second)

    def narrow(self, store: "DomainStore") -> PropagationResult:
        first, second = self.indices
        progress = False
        for index, other in ((first, second), (second, first)):
            other_domain = store.domain(other)
            allowed = {v for v in store.domain(index) if any(self.pairs(v, w) for w in other_domain)}
            if store.keep_only(index, allowed):
                progress = True
            if not allowed:
                return PropagationResult.CONTRADICTION
        return PropagationResult.PROGRESS if progress else PropagationResult.NO_PROGRESS


class SubtractionCage(_PairCage):
    def pairs(self, value: int, other: int) -> bool:
        return abs(value - other) == self.target


class DivisionCage(_PairCage):
    def pairs(self, value: int, other: int) -> bool:
        low, high = min(value, other), max(value, other)
        return low > 0 and high % low == 0 and high // low == self.target
