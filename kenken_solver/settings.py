# Copyright (C) 2026 Lukas Huwald
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Mapping

import yaml

DEFAULT_CONFIG_FILE = Path(__file__).parent / "config" / "solver.yaml"

_OPTIONAL_INTS = {"max_solutions": 1, "solution_cap": 1, "node_budget": 0}
_INTS = {"cage_enumeration_limit": 0}
_BOOLS = {"hidden_singles", "line_exclusion", "cage_all_different"}


@dataclass(frozen=True)
class SolverConfig:
    max_solutions: int | None = 2
    solution_cap: int | None = 10
    node_budget: int | None = None
    hidden_singles: bool = True
    cage_enumeration_limit: int = 4096
    line_exclusion: bool = True
    cage_all_different: bool = False


def parse_config(config_dict: Mapping[str, Any]) -> SolverConfig:
    """Parse solver settings from a dictionary.

    Expected format (every key optional):
        {
            "max_solutions": 2,
            "solution_cap": 10,
            "node_budget": null,
            "hidden_singles": true,
            "cage_enumeration_limit": 4096,
            "line_exclusion": true,
            "cage_all_different": false
        }

    `max_solutions`, `solution_cap` and `node_budget` accept null for "no limit".
    """
    known = {f.name for f in fields(SolverConfig)}
    values: dict[str, Any] = {}

    for key, raw in config_dict.items():
        if key not in known:
            raise ValueError(f"Unknown config key: '{key}'")

        if key in _BOOLS:
            if not isinstance(raw, bool):
                raise ValueError(f"Config key '{key}' must be true or false, got {raw!r}")
        elif key in _OPTIONAL_INTS:
            if raw is not None:
                _check_int(key, raw, _OPTIONAL_INTS[key])
        else:
            _check_int(key, raw, _INTS[key])

        values[key] = raw

    return SolverConfig(**values)


def load_config(config_file: str | Path | None = None) -> SolverConfig:
    """
    Load solver settings from a YAML file.

    Args:
        config_file: Path to the YAML file. If None, uses the packaged config/solver.yaml

    Returns:
        The parsed SolverConfig. An empty file yields the defaults.
    """
    path = DEFAULT_CONFIG_FILE if config_file is None else Path(config_file)

    with open(path) as f:
        config_data = yaml.safe_load(f)

    if config_data is None:
        return SolverConfig()
    if not isinstance(config_data, dict):
        raise ValueError(f"Config file {path} must contain a mapping, got {type(config_data).__name__}")
    return parse_config(config_data)


def _check_int(key: str, raw: Any, minimum: int) -> None:
    if isinstance(raw, bool) or not isinstance(raw, int):
        raise ValueError(f"Config key '{key}' must be an integer, got {raw!r}")
    if raw < minimum:
        raise ValueError(f"Config key '{key}' must be at least {minimum}, got {raw}")
