import argparse
import os
from typing import List, Optional

from nettype_sim.config import RunnerConfig
from nettype_sim.core.enums import NetworkType
from nettype_sim.core.params import SimulationParams
from nettype_sim.core.profiles import lookup
from nettype_sim.core.runner import SimulationRunner
from nettype_sim.utils.metrics import (
    compare_network_types,
    save_metrics_to_csv,
    save_metrics_to_json,
    summarize_metrics,
)
from nettype_sim.utils.rng import SimulationRNG
from nettype_sim.utils.visualization import (
    plot_metrics_history,
    plot_network_comparison,
    save_topology_visualization,
)


def network_type_arg(value: str) -> NetworkType:
    """argparse type converting a code into a NetworkType."""
    try:
        return NetworkType.parse(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))


def run_network_simulation(network_type: NetworkType, args: argparse.Namespace) -> None:
    """
    Run a headless simulation for one network type and save its metrics

    Args:
        network_type: Network type to simulate
        args: Parsed command line arguments
    """
    profile = lookup(network_type)
    print(f"\n=== Simulating {profile.name} ({network_type.value.upper()}) ===")

    params = SimulationParams(
        bandwidth_modifier=args.bandwidth,
        latency_modifier=args.latency,
        packet_loss_modifier=args.loss,
        encryption=args.encryption,
    )
    config = RunnerConfig(seed=args.seed, params=params)
    runner = SimulationRunner(network_type, config)
    records = runner.run(args.duration)

    summary = summarize_metrics(r.snapshot for r in records)
    print(f"Frames stepped: {runner.frames}")
    print(f"Packets in flight: {len(runner.topology.packets)}")
    print(f"Throughput: {summary['throughput_mean']:.2f} Mbps")
    print(f"Latency: {summary['latency_mean']:.2f} ms (jitter {summary['jitter_mean']:.2f} ms)")
    print(f"Packet Loss: {summary['packet_loss_mean']:.2f}%")

    prefix = os.path.join(args.output_dir, network_type.value)
    save_metrics_to_json(records, f"{prefix}_metrics.json", summary=summary)
    save_metrics_to_csv(records, f"{prefix}_metrics.csv")

    if args.visualize:
        save_topology_visualization(
            runner.topology, network_type, filename=f"{prefix}_topology.png"
        )
        plot_metrics_history(records, output_dir=os.path.join(args.output_dir, network_type.value))


def run_network_comparison(args: argparse.Namespace) -> None:
    """Compare synthesized metrics across every network type"""
    print("\n=== Comparing Network Types ===")
    params = SimulationParams(
        bandwidth_modifier=args.bandwidth,
        latency_modifier=args.latency,
        packet_loss_modifier=args.loss,
        encryption=args.encryption,
    )
    summaries = compare_network_types(params=params, rng=SimulationRNG(args.seed))

    for code, summary in summaries.items():
        print(
            f"{code.upper():>5}: {summary['throughput_mean']:9.2f} Mbps "
            f"{summary['latency_mean']:8.2f} ms {summary['packet_loss_mean']:6.2f}% loss"
        )

    if args.visualize:
        plot_network_comparison(summaries, output_dir=args.output_dir)


def main(argv: Optional[List[str]] = None):
    """Main function to run simulations

    Args:
        argv: Command line arguments, sys.argv[1:] if None.
    """
    parser = argparse.ArgumentParser(description="Network Type Simulation Engine")
    parser.add_argument(
        "--network",
        type=network_type_arg,
        default=NetworkType.LAN,
        help="Network type code (lan, man, wan, pan, can, gan, wlan, epn, vpn, san)",
    )
    parser.add_argument("--all", action="store_true", help="Simulate every network type")
    parser.add_argument(
        "--compare", action="store_true", help="Compare metrics across network types"
    )
    parser.add_argument(
        "--duration", type=float, default=10.0, help="Simulated seconds to run"
    )
    parser.add_argument("--bandwidth", type=float, default=1.0, help="Bandwidth modifier")
    parser.add_argument("--latency", type=float, default=1.0, help="Latency modifier")
    parser.add_argument("--loss", type=float, default=1.0, help="Packet loss modifier")
    parser.add_argument(
        "--encryption", action="store_true", help="Force the encryption overhead on"
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument(
        "--output-dir", default="results", help="Directory for metrics and figures"
    )
    parser.add_argument("--visualize", action="store_true", help="Save figures")

    args = parser.parse_args(argv)

    if args.duration <= 0:
        parser.error("--duration must be positive")

    os.makedirs(args.output_dir, exist_ok=True)

    network_types: List[NetworkType] = list(NetworkType) if args.all else [args.network]
    for network_type in network_types:
        run_network_simulation(network_type, args)

    if args.compare:
        run_network_comparison(args)


if __name__ == "__main__":
    main()
