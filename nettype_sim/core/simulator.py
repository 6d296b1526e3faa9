"""Simulation stepper for network type simulation.

This module advances every in-flight packet of a topology by one time step,
rolls per-step losses and occasionally injects a new packet.
"""

from dataclasses import replace
from typing import List, Optional, Union

from loguru import logger

from nettype_sim.core.enums import NetworkType
from nettype_sim.core.packet import Packet, format_packet_id
from nettype_sim.core.params import EffectiveCharacteristics, SimulationParams
from nettype_sim.core.profiles import lookup
from nettype_sim.core.topology import Topology
from nettype_sim.traffic.generators import (
    SPAWN_PROBABILITY,
    SPAWN_SIZE_RANGE,
    distinct_pair,
    variable_size,
)
from nettype_sim.utils.rng import SimulationRNG, ensure_rng


def advance_packet(
    topology: Topology,
    packet: Packet,
    effective: EffectiveCharacteristics,
    rng: SimulationRNG,
) -> Packet:
    """Move a packet one step along its journey.

    Loss is re-rolled on every step, so a long-lived packet accumulates loss
    risk for as long as it stays in flight.

    Args:
        topology: Topology the packet travels in.
        packet: The packet to advance.
        effective: Effective characteristics for this step.
        rng: Random source.

    Returns:
        A new Packet with updated progress, loss flag and render position.
    """
    progress = min(packet.progress + effective.packet_speed, 1.0)
    lost = rng.random() < effective.loss_probability
    moved = replace(packet, progress=progress, lost=lost, x=None, y=None)

    position = topology.packet_position(moved)
    if position is not None:
        moved = replace(moved, x=position[0], y=position[1])
    return moved


def spawn_packet(
    topology: Topology, sequence: int, rng: SimulationRNG
) -> Optional[Packet]:
    """Create a packet between two distinct device or server nodes.

    Args:
        topology: Topology to pick endpoints from.
        sequence: Id sequence number for the new packet.
        rng: Random source.

    Returns:
        A fresh packet at progress 0, or None if fewer than two endpoints exist.
    """
    pair = distinct_pair(rng, topology.endpoints())
    if pair is None:
        return None
    source, target = pair
    return Packet(
        id=format_packet_id(sequence, rng.token()),
        source=source.id,
        target=target.id,
        size=variable_size(rng, *SPAWN_SIZE_RANGE)(),
        progress=0.0,
        lost=False,
        x=source.x,
        y=source.y,
    )


def step(
    topology: Topology,
    network_type: Union[NetworkType, str],
    params: Optional[SimulationParams] = None,
    rng: Optional[SimulationRNG] = None,
) -> Topology:
    """Advance a topology by one time step.

    Packets that were lost or had arrived at the end of the previous step are
    dropped first; the survivors move forward and roll for loss; then, with a
    fixed probability, one new packet is injected. Nodes and links are carried
    over unchanged.

    Args:
        topology: The current topology.
        network_type: A NetworkType or its code.
        params: Simulation parameters, defaults if None. Values are used as
            given; clamp them before calling.
        rng: Random source; a fresh unseeded one is used if None.

    Returns:
        A new Topology with the updated packet set.
    """
    rng = ensure_rng(rng)
    params = params if params is not None else SimulationParams()
    effective = EffectiveCharacteristics.from_profile(lookup(network_type), params)

    survivors = [packet for packet in topology.packets if not packet.is_finished]
    packets: List[Packet] = [
        advance_packet(topology, packet, effective, rng) for packet in survivors
    ]

    counter = topology.packet_counter
    if rng.chance(SPAWN_PROBABILITY):
        spawned = spawn_packet(topology, counter + 1, rng)
        if spawned is not None:
            counter += 1
            packets.append(spawned)

    logger.trace(
        f"Stepped {len(topology.packets)} -> {len(packets)} packets "
        f"at speed {effective.packet_speed:.4f}"
    )
    return topology.with_packets(packets, packet_counter=counter)
