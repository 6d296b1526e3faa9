#!/usr/bin/env python3
"""Visualize the generated topology of every network type."""

import os

import matplotlib.pyplot as plt

from nettype_sim.core.enums import NetworkType
from nettype_sim.core.topologies import generate
from nettype_sim.utils.rng import SimulationRNG
from nettype_sim.utils.visualization import draw_topology


def main() -> None:
    """Generate and visualize one topology per network type."""
    rng = SimulationRNG(42)

    output_dir: str = "results"

    os.makedirs(output_dir, exist_ok=True)

    fig, axes = plt.subplots(2, 5, figsize=(25, 10))
    for ax, network_type in zip(axes.flat, NetworkType):
        topology = generate(network_type, rng)
        draw_topology(topology, network_type, ax=ax, labels=False)

    fig.tight_layout()
    fig.savefig(os.path.join(output_dir, "network_topologies.png"), bbox_inches="tight", dpi=150)
    plt.close(fig)

    print(f"Topology visualizations have been saved to the '{output_dir}' directory.")


if __name__ == "__main__":
    main()
