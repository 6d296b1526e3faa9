import matplotlib

matplotlib.use("Agg")

from nettype_sim.config import RunnerConfig  # noqa: E402
from nettype_sim.core.runner import SimulationRunner  # noqa: E402
from nettype_sim.core.topologies import generate  # noqa: E402
from nettype_sim.utils.metrics import compare_network_types  # noqa: E402
from nettype_sim.utils.rng import SimulationRNG  # noqa: E402
from nettype_sim.utils.visualization import (  # noqa: E402
    plot_metrics_history,
    plot_network_comparison,
    save_topology_visualization,
)


def test_save_topology_visualization(tmp_path):
    filename = tmp_path / "figures" / "wan.png"
    save_topology_visualization(generate("wan", SimulationRNG(0)), "wan", filename=str(filename))
    assert filename.exists()


def test_plot_metrics_history(tmp_path):
    runner = SimulationRunner("lan", RunnerConfig(seed=1))
    runner.run(4.5)
    runner.switch_network("san")
    runner.run(2.0)
    plot_metrics_history(runner.history, output_dir=str(tmp_path))
    assert (tmp_path / "metrics_history.png").exists()


def test_plot_network_comparison(tmp_path):
    summaries = compare_network_types(samples=5, rng=SimulationRNG(2))
    plot_network_comparison(summaries, output_dir=str(tmp_path))
    assert (tmp_path / "network_comparison.png").exists()
