"""Simulation parameters for network type simulation.

This module defines the tunable parameter record shared by the stepper and
the metrics synthesizer, and the effective characteristics derived from a
profile and those parameters.
"""

import math
from dataclasses import dataclass, replace
from typing import Tuple

from nettype_sim.core.profiles import NetworkProfile

# Domain of the modifier sliders
MODIFIER_RANGE: Tuple[float, float] = (0.1, 2.0)

# Throughput multiplier applied once when encryption is active
ENCRYPTION_OVERHEAD: float = 0.85

# Progress units per step for every Mbps of effective bandwidth
SPEED_DIVISOR: float = 10000.0


def clamp_modifier(value: float) -> float:
    """Clamp a modifier to the slider domain.

    Args:
        value: Raw modifier value.

    Returns:
        The value limited to MODIFIER_RANGE, or 1.0 if it is not finite.
    """
    if not math.isfinite(value):
        return 1.0
    low, high = MODIFIER_RANGE
    return min(max(value, low), high)


@dataclass
class SimulationParams:
    """Tunable simulation parameters.

    Attributes:
        bandwidth_modifier: Multiplier on nominal bandwidth.
        latency_modifier: Multiplier on nominal latency.
        packet_loss_modifier: Multiplier on nominal packet loss.
        encryption: Forces the encryption overhead on, ORed with the profile flag.
    """

    bandwidth_modifier: float = 1.0
    latency_modifier: float = 1.0
    packet_loss_modifier: float = 1.0
    encryption: bool = False

    def clamped(self) -> "SimulationParams":
        """Return a copy with every modifier clamped to the slider domain."""
        return replace(
            self,
            bandwidth_modifier=clamp_modifier(self.bandwidth_modifier),
            latency_modifier=clamp_modifier(self.latency_modifier),
            packet_loss_modifier=clamp_modifier(self.packet_loss_modifier),
            encryption=bool(self.encryption),
        )


@dataclass(frozen=True)
class EffectiveCharacteristics:
    """Profile characteristics after applying simulation parameters.

    Attributes:
        bandwidth: Effective bandwidth in Mbps.
        latency: Effective latency in milliseconds.
        loss_rate: Effective packet loss in percent.
        overhead: Encryption overhead multiplier.
    """

    bandwidth: float
    latency: float
    loss_rate: float
    overhead: float

    @classmethod
    def from_profile(
        cls, profile: NetworkProfile, params: SimulationParams
    ) -> "EffectiveCharacteristics":
        encrypted = params.encryption or profile.encryption
        return cls(
            bandwidth=profile.bandwidth * params.bandwidth_modifier,
            latency=profile.latency * params.latency_modifier,
            loss_rate=profile.packet_loss * params.packet_loss_modifier,
            overhead=ENCRYPTION_OVERHEAD if encrypted else 1.0,
        )

    @property
    def packet_speed(self) -> float:
        """Progress a packet makes per step."""
        return (self.bandwidth * self.overhead) / SPEED_DIVISOR

    @property
    def loss_probability(self) -> float:
        """Per-step loss probability as a fraction."""
        return self.loss_rate / 100
