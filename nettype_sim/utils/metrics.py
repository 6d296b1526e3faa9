"""Metrics utilities for network type simulation.

This module provides functions for exporting and summarizing metrics
snapshots, including JSON and CSV export and per-network-type comparison.
"""

import csv
import json
import os
from typing import Any, Dict, Iterable, List, Optional, Sequence, Union

import numpy as np

from nettype_sim.core.enums import NetworkType
from nettype_sim.core.metrics import MetricsSnapshot, synthesize
from nettype_sim.core.params import SimulationParams
from nettype_sim.core.runner import MetricsRecord
from nettype_sim.utils.rng import SimulationRNG, ensure_rng

CSV_FIELDS: List[str] = [
    "time",
    "network_type",
    "throughput",
    "packets_sent",
    "packets_received",
    "packet_loss",
    "latency",
    "jitter",
]


def record_to_dict(record: MetricsRecord) -> Dict[str, Any]:
    """Flatten a metrics record into a JSON-serializable dictionary."""
    return {
        "time": record.time,
        "network_type": record.network_type.value,
        **record.snapshot.to_dict(),
    }


def _ensure_parent(filename: str) -> None:
    directory = os.path.dirname(filename)
    if directory:
        os.makedirs(directory, exist_ok=True)


def save_metrics_to_json(
    records: Sequence[MetricsRecord],
    filename: str = "results/metrics.json",
    summary: Optional[Dict[str, Any]] = None,
) -> None:
    """Save metrics records to a JSON file.

    Args:
        records: Metrics records to save.
        filename: Output filename.
        summary: Optional summary to store alongside the records.
    """
    _ensure_parent(filename)

    payload: Dict[str, Any] = {"records": [record_to_dict(r) for r in records]}
    if summary is not None:
        payload["summary"] = summary

    with open(filename, "w") as f:
        json.dump(payload, f, indent=2)


def save_metrics_to_csv(
    records: Sequence[MetricsRecord], filename: str = "results/metrics.csv"
) -> None:
    """Save metrics records to a CSV file, one row per snapshot.

    Args:
        records: Metrics records to save.
        filename: Output filename.
    """
    _ensure_parent(filename)

    with open(filename, "w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=CSV_FIELDS)
        writer.writeheader()
        for record in records:
            writer.writerow(record_to_dict(record))


def summarize_metrics(snapshots: Iterable[MetricsSnapshot]) -> Dict[str, float]:
    """Summarize a series of snapshots.

    Args:
        snapshots: Snapshots to summarize.

    Returns:
        Dictionary with mean and standard deviation of throughput, latency,
        jitter and packet loss, plus packet totals. All zeros if empty.
    """
    snapshots = list(snapshots)
    summary: Dict[str, float] = {"samples": len(snapshots)}

    for key in ("throughput", "latency", "jitter", "packet_loss"):
        values = np.array([getattr(s, key) for s in snapshots], dtype=float)
        summary[f"{key}_mean"] = float(values.mean()) if values.size else 0.0
        summary[f"{key}_std"] = float(values.std()) if values.size else 0.0

    summary["packets_sent"] = int(sum(s.packets_sent for s in snapshots))
    summary["packets_received"] = int(sum(s.packets_received for s in snapshots))
    summary["lost_packets"] = summary["packets_sent"] - summary["packets_received"]
    return summary


def compare_network_types(
    network_types: Optional[Iterable[Union[NetworkType, str]]] = None,
    params: Optional[SimulationParams] = None,
    samples: int = 50,
    rng: Optional[SimulationRNG] = None,
) -> Dict[str, Dict[str, float]]:
    """Compare synthesized metrics across network types.

    Args:
        network_types: Types to compare, every type if None.
        params: Simulation parameters applied to every type.
        samples: Snapshots drawn per type.
        rng: Random source shared by all draws.

    Returns:
        Summary dictionaries keyed by network type code.
    """
    rng = ensure_rng(rng)
    params = params.clamped() if params is not None else SimulationParams()
    types = [NetworkType.parse(t) for t in (network_types or list(NetworkType))]

    comparison: Dict[str, Dict[str, float]] = {}
    for network_type in types:
        snapshots = [synthesize(network_type, params, rng) for _ in range(samples)]
        comparison[network_type.value] = summarize_metrics(snapshots)
    return comparison
