"""Metrics synthesizer for network type simulation.

This module produces illustrative aggregate performance snapshots for a
network type. Snapshots are statistical draws around the profile's nominal
figures and do not depend on any live topology.
"""

import math
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional, Union

from nettype_sim.core.enums import NetworkType
from nettype_sim.core.params import EffectiveCharacteristics, SimulationParams
from nettype_sim.core.profiles import lookup
from nettype_sim.utils.rng import SimulationRNG, ensure_rng

# Distribution of packets sent per snapshot
PACKETS_SENT_MEAN: float = 1000.0
PACKETS_SENT_STD: float = 100.0


@dataclass(frozen=True)
class MetricsSnapshot:
    """Aggregate performance figures at one instant.

    Attributes:
        throughput: Throughput in Mbps.
        packets_sent: Packets sent.
        packets_received: Packets received.
        packet_loss: Packet loss in percent.
        latency: Latency in milliseconds.
        jitter: Jitter in milliseconds.
    """

    throughput: float
    packets_sent: int
    packets_received: int
    packet_loss: float
    latency: float
    jitter: float

    @property
    def lost_packets(self) -> int:
        return self.packets_sent - self.packets_received

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def jitter_factor(rng: SimulationRNG) -> float:
    """Uniform multiplicative noise in [0.9, 1.1)."""
    return 0.9 + rng.random() * 0.2


def synthesize(
    network_type: Union[NetworkType, str],
    params: Optional[SimulationParams] = None,
    rng: Optional[SimulationRNG] = None,
) -> MetricsSnapshot:
    """Synthesize a metrics snapshot for a network type.

    Args:
        network_type: A NetworkType or its code.
        params: Simulation parameters, defaults if None.
        rng: Random source; a fresh unseeded one is used if None.

    Returns:
        A MetricsSnapshot with floating figures rounded to two decimals.
    """
    rng = ensure_rng(rng)
    params = params if params is not None else SimulationParams()
    effective = EffectiveCharacteristics.from_profile(lookup(network_type), params)

    throughput = effective.bandwidth * effective.overhead * jitter_factor(rng)

    packets_sent = max(0, math.floor(rng.normal(PACKETS_SENT_MEAN, PACKETS_SENT_STD)))
    lost_packets = math.floor(packets_sent * (effective.loss_rate / 100))
    lost_packets = min(max(lost_packets, 0), packets_sent)
    packets_received = packets_sent - lost_packets
    packet_loss = (lost_packets / packets_sent) * 100 if packets_sent else 0.0

    latency = effective.latency * jitter_factor(rng)
    jitter = latency * 0.1 * rng.random()

    return MetricsSnapshot(
        throughput=round(throughput, 2),
        packets_sent=packets_sent,
        packets_received=packets_received,
        packet_loss=round(packet_loss, 2),
        latency=round(latency, 2),
        jitter=round(jitter, 2),
    )
