"""Enumerations for network type simulation.

This module defines enumerations used throughout the simulator.
"""

from enum import Enum
from typing import Union


class NetworkType(Enum):
    """Enum for the network type archetypes.

    Attributes:
        LAN: Local area network.
        MAN: Metropolitan area network.
        WAN: Wide area network.
        PAN: Personal area network.
        CAN: Campus area network.
        GAN: Global area network.
        WLAN: Wireless local area network.
        EPN: Enterprise private network.
        VPN: Virtual private network.
        SAN: Storage area network.
    """

    LAN = "lan"
    MAN = "man"
    WAN = "wan"
    PAN = "pan"
    CAN = "can"
    GAN = "gan"
    WLAN = "wlan"
    EPN = "epn"
    VPN = "vpn"
    SAN = "san"

    @classmethod
    def parse(cls, value: Union["NetworkType", str]) -> "NetworkType":
        """Resolve a member or a case-insensitive type code.

        Args:
            value: A NetworkType or its code, e.g. "wlan".

        Returns:
            The matching NetworkType.

        Raises:
            ValueError: If the code does not name a network type.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            codes = ", ".join(member.value for member in cls)
            raise ValueError(
                f"Unknown network type '{value}', expected one of: {codes}"
            ) from None


class NodeKind(Enum):
    """Enum for the roles a node plays in a topology.

    Attributes:
        DEVICE: End-user device.
        ROUTER: Switch, router or access point.
        SERVER: Server, storage array or relay.
        CLOUD: Cloud or internet endpoint.
    """

    DEVICE = "device"
    ROUTER = "router"
    SERVER = "server"
    CLOUD = "cloud"

    @property
    def is_endpoint(self) -> bool:
        """Whether nodes of this kind may originate or receive spawned packets."""
        return self in (NodeKind.DEVICE, NodeKind.SERVER)
