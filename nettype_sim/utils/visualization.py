"""Visualization utilities for network type simulation.

This module provides functions for drawing topologies with their in-flight
packets and for plotting metrics over time and across network types.
"""

import os
from typing import Dict, List, Optional, Sequence, Tuple, Union

import matplotlib.pyplot as plt
import networkx as nx
import numpy as np

from nettype_sim.core.enums import NetworkType, NodeKind
from nettype_sim.core.profiles import lookup
from nettype_sim.core.runner import MetricsRecord
from nettype_sim.core.topology import CANVAS_HEIGHT, CANVAS_WIDTH, Topology

NODE_COLORS: Dict[NodeKind, str] = {
    NodeKind.DEVICE: "lightblue",
    NodeKind.ROUTER: "orange",
    NodeKind.SERVER: "lightgreen",
    NodeKind.CLOUD: "lightgray",
}

NODE_SIZES: Dict[NodeKind, int] = {
    NodeKind.DEVICE: 300,
    NodeKind.ROUTER: 600,
    NodeKind.SERVER: 500,
    NodeKind.CLOUD: 900,
}


def _finish(fig, filename: Optional[str], show: bool, block: bool = True) -> None:
    if filename:
        directory = os.path.dirname(filename)
        if directory:
            os.makedirs(directory, exist_ok=True)
        fig.savefig(filename)
        plt.close(fig)
    elif show:
        plt.show(block=block)
        if not block:
            plt.pause(0.001)


def draw_topology(
    topology: Topology,
    network_type: Union[NetworkType, str],
    ax=None,
    labels: bool = True,
):
    """Draw a topology and its visible packets onto an axes.

    Args:
        topology: Topology to draw.
        network_type: Network type, used for the link color and title.
        ax: Matplotlib axes, the current axes if None.
        labels: Whether to draw node names.

    Returns:
        The axes drawn on.
    """
    ax = ax if ax is not None else plt.gca()
    profile = lookup(network_type)
    graph = topology.to_graph()
    pos = nx.get_node_attributes(graph, "pos")

    nx.draw_networkx_edges(graph, pos, ax=ax, edge_color=profile.color, alpha=0.6, width=2)

    for kind in NodeKind:
        nodelist = [node.id for node in topology.nodes if node.kind == kind]
        if not nodelist:
            continue
        nx.draw_networkx_nodes(
            graph,
            pos,
            ax=ax,
            nodelist=nodelist,
            node_color=NODE_COLORS[kind],
            node_size=NODE_SIZES[kind],
            edgecolors="black",
            label=kind.value,
        )

    if labels:
        names = {node.id: node.name or node.id for node in topology.nodes}
        nx.draw_networkx_labels(graph, pos, labels=names, ax=ax, font_size=8)

    # Lost packets are never rendered
    positions = [p for p in (topology.packet_position(pk) for pk in topology.packets) if p]
    if positions:
        xs, ys = zip(*positions)
        ax.scatter(xs, ys, s=30, c=profile.color, edgecolors="white", zorder=3, label="packet")

    ax.set_xlim(0, CANVAS_WIDTH)
    ax.set_ylim(CANVAS_HEIGHT, 0)
    ax.set_title(f"{profile.name} ({len(topology.packets)} packets)")
    ax.axis("off")
    return ax


def save_topology_visualization(
    topology: Topology,
    network_type: Union[NetworkType, str],
    filename: Optional[str] = None,
    figsize: Tuple[int, int] = (10, 8),
    show: bool = True,
    block: bool = True,
) -> None:
    """Save topology visualization to a file.

    Args:
        topology: Topology to draw.
        network_type: Network type of the topology.
        filename: Output filename, or None to show it immediately.
        figsize: Figure size as (width, height) in inches.
        show: Whether to show the figure when no filename is given.
        block: Whether showing blocks until the window is closed.
    """
    fig, ax = plt.subplots(figsize=figsize)
    draw_topology(topology, network_type, ax=ax)
    ax.legend(loc="lower right", fontsize=8)
    fig.tight_layout()
    _finish(fig, filename, show, block)


def plot_metrics_history(
    records: Sequence[MetricsRecord],
    output_dir: Optional[str] = None,
    show: bool = True,
) -> None:
    """Plot throughput, latency and packet loss over simulated time.

    Args:
        records: Metrics records in emission order.
        output_dir: Directory to save the plot into.
        show: Whether to show the figure when no output directory is given.
    """
    fig, axes = plt.subplots(3, 1, figsize=(12, 9), sharex=True)

    times = [r.time for r in records]
    series = [
        ("throughput", "Throughput (Mbps)"),
        ("latency", "Latency (ms)"),
        ("packet_loss", "Packet Loss (%)"),
    ]
    for ax, (key, label) in zip(axes, series):
        ax.plot(times, [getattr(r.snapshot, key) for r in records], "o-")
        ax.set_ylabel(label)
        ax.grid(True, linestyle="--", alpha=0.7)

    # Mark network switches
    for previous, current in zip(records, records[1:]):
        if previous.network_type != current.network_type:
            for ax in axes:
                ax.axvline(current.time, color="gray", linestyle=":")

    axes[0].set_title("Synthesized Network Metrics")
    axes[-1].set_xlabel("Simulation Time (seconds)")
    fig.tight_layout()

    filename = os.path.join(output_dir, "metrics_history.png") if output_dir else None
    _finish(fig, filename, show)


def plot_network_comparison(
    summaries: Dict[str, Dict[str, float]],
    output_dir: Optional[str] = None,
    show: bool = True,
) -> None:
    """Plot mean metrics per network type as bar charts.

    Args:
        summaries: Summaries keyed by network type code.
        output_dir: Directory to save the plot into.
        show: Whether to show the figure when no output directory is given.
    """
    network_types: List[str] = list(summaries)
    x = np.arange(len(network_types))
    colors = [lookup(t).color for t in network_types]

    fig, axes = plt.subplots(1, 3, figsize=(15, 5))
    panels = [
        ("throughput", "Throughput (Mbps)", "Throughput Comparison"),
        ("latency", "Latency (ms)", "Latency Comparison"),
        ("packet_loss", "Packet Loss (%)", "Packet Loss Comparison"),
    ]
    for ax, (key, ylabel, title) in zip(axes, panels):
        means = [summaries[t][f"{key}_mean"] for t in network_types]
        stds = [summaries[t][f"{key}_std"] for t in network_types]
        ax.bar(x, means, yerr=stds, width=0.6, color=colors)
        ax.set_ylabel(ylabel)
        ax.set_title(title)
        ax.set_xlabel("Network Type")
        ax.set_xticks(x)
        ax.set_xticklabels([t.upper() for t in network_types])

    # Latency spans several orders of magnitude
    axes[1].set_yscale("log")
    fig.tight_layout()

    filename = os.path.join(output_dir, "network_comparison.png") if output_dir else None
    _finish(fig, filename, show)
