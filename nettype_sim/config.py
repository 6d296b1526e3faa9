"""
Dataclass configuration for the headless simulation runner.
"""

from dataclasses import dataclass, field
from typing import Optional

from nettype_sim.core.params import SimulationParams


@dataclass
class RunnerConfig:
    """Cadences and seeding for a SimulationRunner."""

    # Seconds between stepper calls (one visual frame at 60 fps)
    frame_interval: float = 1 / 60
    # Seconds between metrics snapshots
    metrics_interval: float = 2.0
    # Random seed for reproducibility (None for random)
    seed: Optional[int] = None
    # Initial simulation parameters
    params: SimulationParams = field(default_factory=SimulationParams)

    def __post_init__(self):
        if self.frame_interval <= 0 or self.metrics_interval <= 0:
            raise ValueError("Runner intervals must be positive")
