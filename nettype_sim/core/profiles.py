"""Network profile catalog.

This module holds the static nominal characteristics of every network type
archetype. Profiles are defined once at import time and never mutated.
"""

from dataclasses import dataclass
from typing import Dict, List, Union

from nettype_sim.core.enums import NetworkType


@dataclass(frozen=True)
class NetworkProfile:
    """Nominal characteristics of one network type.

    Attributes:
        id: Network type this profile describes.
        name: Display name.
        description: One-sentence description.
        bandwidth: Nominal bandwidth in Mbps.
        latency: Nominal latency in milliseconds.
        packet_loss: Nominal packet loss in percent.
        range: Nominal range in kilometres.
        encryption: Whether the network type requires encryption.
        color: Display color as a hex string.
        icon: Icon hint for the presentation layer.
    """

    id: NetworkType
    name: str
    description: str
    bandwidth: float
    latency: float
    packet_loss: float
    range: float
    encryption: bool
    color: str
    icon: str


PROFILES: Dict[NetworkType, NetworkProfile] = {
    NetworkType.LAN: NetworkProfile(
        id=NetworkType.LAN,
        name="Local Area Network",
        description="A network that connects computers within a limited area such as a home, school, or office building.",
        bandwidth=1000,
        latency=1,
        packet_loss=0.01,
        range=0.1,
        encryption=False,
        color="#3498db",
        icon="lan",
    ),
    NetworkType.MAN: NetworkProfile(
        id=NetworkType.MAN,
        name="Metropolitan Area Network",
        description="A network that connects computers within a city or large campus.",
        bandwidth=500,
        latency=5,
        packet_loss=0.5,
        range=50,
        encryption=False,
        color="#9b59b6",
        icon="network",
    ),
    NetworkType.WAN: NetworkProfile(
        id=NetworkType.WAN,
        name="Wide Area Network",
        description="A network that spans a large geographical area, often connecting different LANs.",
        bandwidth=100,
        latency=50,
        packet_loss=1,
        range=1000,
        encryption=False,
        color="#e74c3c",
        icon="wan",
    ),
    NetworkType.PAN: NetworkProfile(
        id=NetworkType.PAN,
        name="Personal Area Network",
        description="A network for connecting devices centered around an individual person, typically within a range of 10 meters.",
        bandwidth=50,
        latency=10,
        packet_loss=0.1,
        range=0.01,
        encryption=True,
        color="#2ecc71",
        icon="bluetooth",
    ),
    NetworkType.CAN: NetworkProfile(
        id=NetworkType.CAN,
        name="Campus Area Network",
        description="A network that connects multiple LANs within a university or business campus.",
        bandwidth=800,
        latency=3,
        packet_loss=0.2,
        range=5,
        encryption=False,
        color="#f39c12",
        icon="network",
    ),
    NetworkType.GAN: NetworkProfile(
        id=NetworkType.GAN,
        name="Global Area Network",
        description="A network that spans the globe, often using satellite links.",
        bandwidth=50,
        latency=500,
        packet_loss=2,
        range=20000,
        encryption=True,
        color="#1abc9c",
        icon="globe",
    ),
    NetworkType.WLAN: NetworkProfile(
        id=NetworkType.WLAN,
        name="Wireless Local Area Network",
        description="A network that connects devices wirelessly in a local area.",
        bandwidth=300,
        latency=2,
        packet_loss=0.5,
        range=0.1,
        encryption=True,
        color="#d35400",
        icon="wifi",
    ),
    NetworkType.EPN: NetworkProfile(
        id=NetworkType.EPN,
        name="Enterprise Private Network",
        description="A network used by enterprises to connect multiple offices and remote workers securely.",
        bandwidth=500,
        latency=20,
        packet_loss=0.1,
        range=100,
        encryption=True,
        color="#8e44ad",
        icon="server",
    ),
    NetworkType.VPN: NetworkProfile(
        id=NetworkType.VPN,
        name="Virtual Private Network",
        description="A technology that creates a secure encrypted connection over a less secure network.",
        bandwidth=50,
        latency=80,
        packet_loss=0.5,
        range=10000,
        encryption=True,
        color="#2c3e50",
        icon="lock",
    ),
    NetworkType.SAN: NetworkProfile(
        id=NetworkType.SAN,
        name="Storage Area Network",
        description="A dedicated network that provides access to consolidated storage devices.",
        bandwidth=1500,
        latency=0.5,
        packet_loss=0.01,
        range=0.1,
        encryption=False,
        color="#16a085",
        icon="database",
    ),
}


def lookup(network_type: Union[NetworkType, str]) -> NetworkProfile:
    """Get the profile for a network type.

    Args:
        network_type: A NetworkType or its code.

    Returns:
        The NetworkProfile for that type.
    """
    return PROFILES[NetworkType.parse(network_type)]


def all_profiles() -> List[NetworkProfile]:
    """Get every profile in enum order."""
    return [PROFILES[network_type] for network_type in NetworkType]


def network_icon(network_type: Union[NetworkType, str]) -> str:
    return lookup(network_type).icon
