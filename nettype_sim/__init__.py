"""Simulation engine for network type archetypes.

The engine exposes four operations: ``lookup`` a network profile,
``generate`` a topology, ``step`` it forward, and ``synthesize`` metrics.
"""

from nettype_sim.core.enums import NetworkType, NodeKind
from nettype_sim.core.metrics import MetricsSnapshot, synthesize
from nettype_sim.core.params import SimulationParams
from nettype_sim.core.profiles import NetworkProfile, lookup
from nettype_sim.core.simulator import step
from nettype_sim.core.topologies import generate
from nettype_sim.core.topology import Topology
from nettype_sim.utils.rng import SimulationRNG

__all__ = [
    "MetricsSnapshot",
    "NetworkProfile",
    "NetworkType",
    "NodeKind",
    "SimulationParams",
    "SimulationRNG",
    "Topology",
    "generate",
    "lookup",
    "step",
    "synthesize",
]
