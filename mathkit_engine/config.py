"""
Configuration for the math engine.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class EngineConfig:
    """Numeric and runtime settings shared by the engine."""

    # Tolerance used by on-demand checks (unit vectors, unitarity, normalization)
    atol: float = 1e-9

    # Step for central-difference derivatives
    derivative_step: float = 1e-6

    # Seed of the process-wide measurement generator (None = OS entropy)
    seed: Optional[int] = None

    log_level: int = logging.WARNING


# Default configuration instance
DEFAULT_CONFIG = EngineConfig()
