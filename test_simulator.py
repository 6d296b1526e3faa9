from dataclasses import FrozenInstanceError

import pytest

from nettype_sim.core.enums import NetworkType, NodeKind
from nettype_sim.core.link import Link
from nettype_sim.core.node import Node
from nettype_sim.core.packet import Packet
from nettype_sim.core.params import SimulationParams
from nettype_sim.core.simulator import spawn_packet, step
from nettype_sim.core.topologies import generate
from nettype_sim.core.topology import Topology
from nettype_sim.utils.rng import SimulationRNG

NO_LOSS = SimulationParams(packet_loss_modifier=0.0)


def create_line_topology(*packets: Packet) -> Topology:
    """Two devices joined by a router, with the given packets in flight"""
    return Topology(
        nodes=(
            Node("a", 100, 300, NodeKind.DEVICE),
            Node("hub", 400, 300, NodeKind.ROUTER),
            Node("b", 700, 300, NodeKind.DEVICE),
        ),
        links=(Link("hub", "a"), Link("hub", "b")),
        packets=packets,
        packet_counter=len(packets),
    )


def find_packet(topology: Topology, packet_id: str):
    return next((p for p in topology.packets if p.id == packet_id), None)


def test_packet_arrives_then_leaves_active_set():
    """A packet at 0.99 reaches 1 and is gone on the following call"""
    topology = create_line_topology(Packet("p1", "a", "b", 500, progress=0.99))
    rng = SimulationRNG(0)

    stepped = step(topology, "lan", NO_LOSS, rng)
    packet = find_packet(stepped, "p1")
    assert packet is not None
    assert packet.progress == 1
    assert not packet.lost
    assert packet.position == pytest.approx((700, 300))

    assert find_packet(step(stepped, "lan", NO_LOSS, rng), "p1") is None


def test_lost_packet_is_removed_on_next_step():
    topology = create_line_topology(Packet("p1", "a", "b", 500, progress=0.2, lost=True))
    assert find_packet(step(topology, "lan", NO_LOSS, SimulationRNG(0)), "p1") is None


def test_speed_scales_with_bandwidth():
    topology = create_line_topology(Packet("p1", "a", "b", 500, progress=0.2))

    def progress_after(modifier: float) -> float:
        params = SimulationParams(bandwidth_modifier=modifier, packet_loss_modifier=0.0)
        return find_packet(step(topology, "lan", params, SimulationRNG(0)), "p1").progress

    slow, normal, fast = progress_after(0.5), progress_after(1.0), progress_after(2.0)
    assert slow == pytest.approx(0.25)
    assert normal == pytest.approx(0.3)
    assert fast == pytest.approx(0.4)


def test_encryption_slows_packets():
    topology = create_line_topology(Packet("p1", "a", "b", 500, progress=0.0))
    plain = step(topology, "lan", NO_LOSS, SimulationRNG(0))
    encrypted = step(
        topology,
        "lan",
        SimulationParams(packet_loss_modifier=0.0, encryption=True),
        SimulationRNG(0),
    )
    assert find_packet(plain, "p1").progress == pytest.approx(0.1)
    assert find_packet(encrypted, "p1").progress == pytest.approx(0.085)


def test_certain_loss_marks_every_packet_lost():
    """Loss is rolled on every step, not only at spawn"""
    topology = create_line_topology(
        Packet("p1", "a", "b", 500, progress=0.1),
        Packet("p2", "b", "a", 500, progress=0.4),
    )
    # wan loss is 1%, so a modifier of 100 makes loss certain
    params = SimulationParams(packet_loss_modifier=100.0)
    stepped = step(topology, "wan", params, SimulationRNG(0))
    for packet_id in ("p1", "p2"):
        packet = find_packet(stepped, packet_id)
        assert packet.lost
        assert packet.position is None


def test_nodes_and_links_pass_through_unchanged():
    topology = generate("man", SimulationRNG(1))
    stepped = step(topology, "man", SimulationParams(), SimulationRNG(2))
    assert stepped.nodes is topology.nodes
    assert stepped.links is topology.links


def test_step_does_not_mutate_input():
    original = Packet("p1", "a", "b", 500, progress=0.5)
    topology = create_line_topology(original)
    step(topology, "lan", NO_LOSS, SimulationRNG(0))
    assert original.progress == 0.5
    assert topology.packets == (original,)



def test_stepped_topology_is_hashable_and_immutable():
    packet = Packet("p1", "a", "b", 500, progress=0.1)
    topology = create_line_topology(packet)
    stepped = step(topology, "lan", NO_LOSS, SimulationRNG(4))
    assert hash(stepped) == hash(step(topology, "lan", NO_LOSS, SimulationRNG(4)))
    with pytest.raises(FrozenInstanceError):
        packet.progress = 1.0


@pytest.mark.parametrize("network_type", list(NetworkType))
def test_progress_stays_in_bounds(network_type):
    rng = SimulationRNG(8)
    params = SimulationParams(bandwidth_modifier=2.0)
    topology = generate(network_type, rng)
    for _ in range(200):
        topology = step(topology, network_type, params, rng)
        topology.validate()
        for packet in topology.packets:
            assert 0 <= packet.progress <= 1
            if packet.lost:
                assert packet.position is None


def test_spawned_packets_join_device_or_server_nodes():
    rng = SimulationRNG(4)
    topology = generate("epn", rng).with_packets([])
    spawned = []
    for _ in range(300):
        previous = {p.id for p in topology.packets}
        topology = step(topology, "epn", NO_LOSS, rng)
        spawned.extend(p for p in topology.packets if p.id not in previous)

    assert spawned, "no packet was injected in 300 steps"
    for packet in spawned:
        assert packet.progress == 0
        assert not packet.lost
        assert packet.source != packet.target
        assert topology.node(packet.source).kind.is_endpoint
        assert topology.node(packet.target).kind.is_endpoint
        assert 500 <= packet.size < 1500


def test_spawn_requires_two_endpoints():
    topology = Topology(
        nodes=(
            Node("hub", 400, 300, NodeKind.ROUTER),
            Node("a", 100, 300, NodeKind.DEVICE),
        ),
        links=(Link("hub", "a"),),
    )
    assert spawn_packet(topology, 1, SimulationRNG(0)) is None


def test_packet_counter_is_monotonic():
    rng = SimulationRNG(6)
    topology = generate("lan", rng)
    counters = [topology.packet_counter]
    for _ in range(100):
        topology = step(topology, "lan", NO_LOSS, rng)
        counters.append(topology.packet_counter)
    assert counters == sorted(counters)
    assert counters[-1] > counters[0]


def test_same_seed_reproduces_steps():
    def run(seed: int):
        rng = SimulationRNG(seed)
        topology = generate("san", rng)
        for _ in range(50):
            topology = step(topology, "san", SimulationParams(), rng)
        return [(p.id, p.progress, p.lost) for p in topology.packets]

    assert run(21) == run(21)
