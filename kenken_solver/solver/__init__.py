# Copyright (C) 2026 Lukas Huwald
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

from .definitions import Consistency, SearchStats, SolverStatus, build_constraints
from .domains import DomainStore
from .propagation import Propagator
from .search import Search
from .solutions import SolutionCollector
from .solver import Solver, SolverResult, create_solver

__all__ = [
    "Solver",
    "create_solver",
    "SolverStatus",
    "SolverResult",
    "SearchStats",
    "Search",
    "Propagator",
    "Consistency",
    "DomainStore",
    "SolutionCollector",
    "build_constraints",
]
