"""Simulation runner for network type simulation.

This module defines the SimulationRunner class, which plays the role of the
presentation loop in simulated time: a simpy process steps the topology once
per frame and another synthesizes metrics on a fixed interval.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, Generator, List, Optional, Union

import simpy
from loguru import logger

from nettype_sim.config import RunnerConfig
from nettype_sim.core.enums import NetworkType
from nettype_sim.core.metrics import MetricsSnapshot, synthesize
from nettype_sim.core.params import SimulationParams
from nettype_sim.core.simulator import step
from nettype_sim.core.topologies import generate
from nettype_sim.core.topology import Topology
from nettype_sim.utils.rng import SimulationRNG


@dataclass(frozen=True)
class MetricsRecord:
    """A metrics snapshot stamped with simulated time and network type."""

    time: float
    network_type: NetworkType
    snapshot: MetricsSnapshot


class SimulationRunner:
    """Headless driver owning the running topology.

    Attributes:
        env: SimPy environment providing the simulated clock.
        config: Cadences and seeding.
        rng: Random source shared by every engine call.
        network_type: Network type currently simulated.
        params: Clamped simulation parameters.
        topology: The running topology.
        paused: Whether frame stepping is suspended.
        frames: Frames stepped since the topology was generated.
        history: Metrics snapshots in emission order.
    """

    def __init__(
        self,
        network_type: Union[NetworkType, str] = NetworkType.LAN,
        config: Optional[RunnerConfig] = None,
        rng: Optional[SimulationRNG] = None,
        env: Optional[simpy.Environment] = None,
    ):
        """Initialize the runner and generate the first topology.

        Args:
            network_type: A NetworkType or its code.
            config: Runner configuration, defaults if None.
            rng: Random source, seeded from config.seed if None.
            env: SimPy environment, a new one if None.
        """
        self.config = config if config is not None else RunnerConfig()
        self.env = env if env is not None else simpy.Environment()
        self.rng = rng if rng is not None else SimulationRNG(self.config.seed)
        self.network_type = NetworkType.parse(network_type)
        self.params = self.config.params.clamped()
        self.paused = False
        self.frames = 0
        self.history: List[MetricsRecord] = []
        self.topology: Topology = generate(self.network_type, self.rng)

        self.hooks: Dict[str, List[Callable[..., Any]]] = {
            "frame": [],  # topology stepped
            "metrics": [],  # metrics snapshot synthesized
            "network_switched": [],  # topology regenerated for another type
            "sim_end": [],  # a run call finished
        }

        self._metrics_generation = 0
        self.env.process(self._frame_loop())
        self.env.process(self._metrics_loop(self._metrics_generation, sample_first=True))

    def _frame_loop(self) -> Generator[simpy.events.Event, Any, None]:
        while True:
            yield self.env.timeout(self.config.frame_interval)
            if self.paused:
                continue
            self.topology = step(
                self.topology, self.network_type, self.params.clamped(), self.rng
            )
            self.frames += 1
            self.call_hooks("frame", self.topology, self.env.now)

    def _metrics_loop(
        self, generation: int, sample_first: bool
    ) -> Generator[simpy.events.Event, Any, None]:
        # A loop whose generation is stale was superseded by restart_metrics
        if sample_first and generation == self._metrics_generation:
            self.sample_metrics()
        while True:
            yield self.env.timeout(self.config.metrics_interval)
            if generation != self._metrics_generation:
                return
            self.sample_metrics()

    def restart_metrics(self) -> MetricsRecord:
        """Take a snapshot now and restart the metrics cadence from this instant.

        Returns:
            The snapshot recorded immediately.
        """
        self._metrics_generation += 1
        record = self.sample_metrics()
        self.env.process(self._metrics_loop(self._metrics_generation, sample_first=False))
        return record

    def sample_metrics(self) -> MetricsRecord:
        """Synthesize a snapshot for the current network type and record it.

        Returns:
            The recorded MetricsRecord.
        """
        snapshot = synthesize(self.network_type, self.params.clamped(), self.rng)
        record = MetricsRecord(self.env.now, self.network_type, snapshot)
        self.history.append(record)
        self.call_hooks("metrics", record)
        return record

    def pause(self) -> None:
        self.paused = True

    def resume(self) -> None:
        self.paused = False

    def toggle_pause(self) -> bool:
        """Flip the pause state.

        Returns:
            The new pause state.
        """
        self.paused = not self.paused
        return self.paused

    def set_params(self, params: SimulationParams) -> None:
        """Replace the simulation parameters with a clamped copy.

        The metrics cadence restarts with a snapshot for the new parameters.

        Args:
            params: The new parameters.
        """
        self.params = params.clamped()
        logger.debug(f"Simulation parameters set to {self.params}")
        self.restart_metrics()

    def switch_network(self, network_type: Union[NetworkType, str]) -> Topology:
        """Discard the running topology and generate one for another type.

        Stepping resumes if it was paused, and the metrics cadence restarts
        with a snapshot for the new type.

        Args:
            network_type: A NetworkType or its code.

        Returns:
            The newly generated Topology.
        """
        self.network_type = NetworkType.parse(network_type)
        self.topology = generate(self.network_type, self.rng)
        self.frames = 0
        self.paused = False
        logger.info(f"Switched simulation to {self.network_type.value}")
        self.call_hooks("network_switched", self.network_type, self.topology)
        self.restart_metrics()
        return self.topology

    def register_hook(self, event_type: str, callback: Callable[..., Any]) -> None:
        """Register a callback function for a specific event type.

        Args:
            event_type: The type of event to register for.
            callback: The function to call when the event occurs.
        """
        if event_type not in self.hooks:
            raise ValueError(f"Unknown hook type: {event_type}")
        self.hooks[event_type].append(callback)

    def call_hooks(self, event_type: str, *args: Any, **kwargs: Any) -> None:
        """Call all registered callbacks for the given event type.

        Args:
            event_type: The type of event that occurred.
            *args, **kwargs: Arguments to pass to the callback functions.
        """
        if event_type in self.hooks:
            for callback in self.hooks[event_type]:
                callback(*args, **kwargs)

    def run(self, duration: float) -> List[MetricsRecord]:
        """Run the simulation for a specified duration.

        Args:
            duration: Simulated seconds to advance.

        Returns:
            The metrics history so far.
        """
        if duration <= 0:
            raise ValueError("Duration must be positive")
        logger.info(
            f"Running {self.network_type.value} simulation for {duration}s "
            f"(t={self.env.now:.2f})"
        )
        self.env.run(until=self.env.now + duration)
        self.call_hooks("sim_end", self.history)
        return self.history
