import pytest

from nettype_sim.config import RunnerConfig
from nettype_sim.core.enums import NetworkType
from nettype_sim.core.params import SimulationParams
from nettype_sim.core.runner import SimulationRunner


def create_runner(network_type="lan", seed=42, **kwargs) -> SimulationRunner:
    """Runner with cadences that land exactly on binary fractions"""
    config = RunnerConfig(frame_interval=0.5, metrics_interval=2.0, seed=seed, **kwargs)
    return SimulationRunner(network_type, config)


def test_runner_drives_both_cadences():
    runner = create_runner()
    frames = []
    runner.register_hook("frame", lambda topology, now: frames.append(now))

    records = runner.run(2.25)

    assert runner.frames == 4
    assert frames == [0.5, 1.0, 1.5, 2.0]
    assert [r.time for r in records] == [0.0, 2.0]
    assert all(r.network_type is NetworkType.LAN for r in records)


def test_pause_stops_stepping_but_not_metrics():
    runner = create_runner()
    before = runner.topology
    runner.pause()
    runner.run(4.5)
    assert runner.frames == 0
    assert runner.topology is before
    assert len(runner.history) == 3

    assert runner.toggle_pause() is False
    runner.run(1.0)
    assert runner.frames == 2


def test_switch_network_regenerates_topology():
    runner = create_runner()
    switched = []
    runner.register_hook("network_switched", lambda nt, topo: switched.append(nt))

    runner.run(2.25)
    topology = runner.switch_network("gan")
    assert switched == [NetworkType.GAN]
    assert runner.frames == 0
    assert topology.node("satellite1") is not None

    records = runner.run(2.5)
    assert [r.network_type.value for r in records] == ["lan", "lan", "gan", "gan"]
    assert [r.time for r in records] == [0.0, 2.0, 2.25, 4.25]
    assert runner.frames == 5


def test_switch_network_resumes_paused_runner():
    runner = create_runner()
    runner.pause()

    runner.switch_network("gan")
    assert runner.paused is False

    runner.run(1.0)
    assert runner.frames == 1


def test_switch_network_restarts_metrics_cadence():
    runner = create_runner()
    runner.run(1.5)
    runner.switch_network("gan")

    records = runner.run(2.25)

    assert [r.time for r in records] == [0.0, 1.5, 3.5]
    assert [r.network_type.value for r in records] == ["lan", "gan", "gan"]


def test_set_params_clamps():
    runner = create_runner()
    runner.set_params(SimulationParams(bandwidth_modifier=50, latency_modifier=0))
    assert runner.params.bandwidth_modifier == 2.0
    assert runner.params.latency_modifier == 0.1


def test_set_params_takes_snapshot_and_restarts_cadence():
    runner = create_runner()
    runner.run(1.0)

    runner.set_params(SimulationParams(bandwidth_modifier=2.0))
    assert [r.time for r in runner.history] == [0.0, 1.0]
    assert runner.history[-1].snapshot.throughput >= 1800

    records = runner.run(2.5)
    assert [r.time for r in records] == [0.0, 1.0, 3.0]


def test_initial_params_are_clamped():
    runner = create_runner(params=SimulationParams(packet_loss_modifier=-1))
    assert runner.params.packet_loss_modifier == 0.1


def test_sim_end_hook_receives_history():
    runner = create_runner()
    seen = []
    runner.register_hook("sim_end", seen.append)
    history = runner.run(1.0)
    assert seen == [history]


def test_unknown_hook_rejected():
    runner = create_runner()
    with pytest.raises(ValueError, match="Unknown hook type"):
        runner.register_hook("packet_teleported", print)


def test_invalid_durations_and_intervals():
    runner = create_runner()
    with pytest.raises(ValueError):
        runner.run(0)
    with pytest.raises(ValueError):
        RunnerConfig(frame_interval=0)


def test_seeded_runs_are_reproducible():
    def run(seed):
        runner = create_runner("wlan", seed=seed)
        runner.run(5.0)
        return [r.snapshot for r in runner.history], [p.id for p in runner.topology.packets]

    assert run(7) == run(7)
