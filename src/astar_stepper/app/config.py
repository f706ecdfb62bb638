# src/astar_stepper/app/config.py
#!/usr/bin/env python3
"""
Viewer settings.

Defaults below, then environment, then command line:
- ENV: ASTAR_SEED, ASTAR_CELL_SIZE, ASTAR_DELAY_MS, ASTAR_LOG_LEVEL
- CLI: --seed=N --cell-size=PX --delay-ms=MS --headless
"""

import logging
import os
import sys
from dataclasses import dataclass
from typing import Mapping, Optional, Sequence

from astar_stepper.core.grid_gen import (
    ADJACENT_OBSTACLE_PROBABILITY,
    OBSTACLE_PROBABILITY,
)
from astar_stepper.core.types import ConfigError

CANVAS_WIDTH_PX = 600
CANVAS_HEIGHT_PX = 600
CELL_SIZE_PX = 30
DELAY_MS = 40


@dataclass(frozen=True)
class ViewerConfig:
    canvas_width: int = CANVAS_WIDTH_PX
    canvas_height: int = CANVAS_HEIGHT_PX
    cell_size: int = CELL_SIZE_PX
    delay_ms: int = DELAY_MS
    obstacle_probability: float = OBSTACLE_PROBABILITY
    adjacent_boost_probability: float = ADJACENT_OBSTACLE_PROBABILITY
    seed: Optional[int] = None
    headless: bool = False
    log_level: str = "INFO"

    @property
    def columns(self) -> int:
        return self.canvas_width // self.cell_size

    @property
    def rows(self) -> int:
        return self.canvas_height // self.cell_size


def _as_int(name: str, raw: str) -> int:
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from None


def resolve_config(argv: Optional[Sequence[str]] = None,
                   env: Optional[Mapping[str, str]] = None) -> ViewerConfig:
    argv = sys.argv[1:] if argv is None else argv
    env = os.environ if env is None else env

    values = {
        "seed": env.get("ASTAR_SEED"),
        "cell_size": env.get("ASTAR_CELL_SIZE"),
        "delay_ms": env.get("ASTAR_DELAY_MS"),
    }
    headless = False
    for arg in argv:
        if arg == "--headless":
            headless = True
        elif arg.startswith("--seed="):
            values["seed"] = arg.split("=", 1)[1]
        elif arg.startswith("--cell-size="):
            values["cell_size"] = arg.split("=", 1)[1]
        elif arg.startswith("--delay-ms="):
            values["delay_ms"] = arg.split("=", 1)[1]

    seed = _as_int("seed", values["seed"]) if values["seed"] is not None else None
    cell_size = CELL_SIZE_PX
    if values["cell_size"] is not None:
        cell_size = _as_int("cell size", values["cell_size"])
    delay_ms = DELAY_MS
    if values["delay_ms"] is not None:
        delay_ms = _as_int("delay", values["delay_ms"])

    if cell_size <= 0 or cell_size > min(CANVAS_WIDTH_PX, CANVAS_HEIGHT_PX):
        raise ConfigError(f"cell size out of range: {cell_size}")
    if delay_ms <= 0:
        raise ConfigError(f"delay must be positive, got {delay_ms}")
    log_level = env.get("ASTAR_LOG_LEVEL", "INFO").upper()
    if not isinstance(logging.getLevelName(log_level), int):
        raise ConfigError(f"unknown log level: {log_level}")

    return ViewerConfig(
        cell_size=cell_size,
        delay_ms=delay_ms,
        seed=seed,
        headless=headless,
        log_level=log_level,
    )
