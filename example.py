#!/usr/bin/env python3
"""Example network type simulation using the nettype_sim package.

This script demonstrates the four engine operations: looking up a profile,
generating a topology, stepping it frame by frame, and synthesizing metrics.
"""

from pprint import pprint

from nettype_sim import SimulationParams, SimulationRNG, generate, lookup, step, synthesize
from nettype_sim.config import RunnerConfig
from nettype_sim.core.runner import SimulationRunner


def run_manual_loop(network_type: str = "wlan", frames: int = 120, seed: int = 42) -> None:
    """Drive the engine by hand the way a render loop would."""
    rng = SimulationRNG(seed)
    profile = lookup(network_type)
    print(f"{profile.name}: {profile.bandwidth} Mbps, {profile.latency} ms, {profile.packet_loss}% loss")

    params = SimulationParams(bandwidth_modifier=1.5, encryption=True).clamped()
    topology = generate(network_type, rng)
    print(f"Generated {topology}")

    for _ in range(frames):
        topology = step(topology, network_type, params, rng)
    print(f"After {frames} frames: {topology}")

    pprint(synthesize(network_type, params, rng).to_dict())


def run_with_runner(seed: int = 42) -> None:
    """Let the simpy runner drive both cadences and switch network mid-run."""
    runner = SimulationRunner("lan", RunnerConfig(seed=seed))
    runner.register_hook(
        "metrics",
        lambda record: print(
            f"t={record.time:5.2f}s {record.network_type.value:>4} "
            f"{record.snapshot.throughput:8.2f} Mbps {record.snapshot.latency:7.2f} ms"
        ),
    )
    runner.run(5)
    runner.switch_network("gan")
    runner.run(5)


if __name__ == "__main__":
    run_manual_loop()
    run_with_runner()
