import math

import pytest

from nettype_sim.core.enums import NetworkType, NodeKind
from nettype_sim.core.params import (
    ENCRYPTION_OVERHEAD,
    EffectiveCharacteristics,
    SimulationParams,
)
from nettype_sim.core.profiles import PROFILES, all_profiles, lookup, network_icon


def test_catalog_covers_every_network_type():
    """Every network type has exactly one profile keyed by its own id"""
    assert len(PROFILES) == 10
    for network_type in NetworkType:
        assert lookup(network_type).id is network_type
    assert [p.id for p in all_profiles()] == list(NetworkType)


def test_lookup_is_idempotent():
    first = lookup(NetworkType.WAN)
    second = lookup("wan")
    assert first is second
    assert first == lookup(NetworkType.WAN)


def test_reference_profile_values():
    lan = lookup("lan")
    assert (lan.bandwidth, lan.latency, lan.packet_loss) == (1000, 1, 0.01)
    assert not lan.encryption

    gan = lookup("gan")
    assert (gan.bandwidth, gan.latency, gan.packet_loss, gan.range) == (50, 500, 2, 20000)
    assert gan.encryption
    assert gan.color == "#1abc9c"
    assert network_icon("gan") == "globe"


def test_profiles_are_immutable():
    with pytest.raises(AttributeError):
        lookup("lan").bandwidth = 1


def test_parse_network_type_codes():
    assert NetworkType.parse("WLAN") is NetworkType.WLAN
    assert NetworkType.parse(" san ") is NetworkType.SAN
    assert NetworkType.parse(NetworkType.PAN) is NetworkType.PAN


def test_parse_rejects_unknown_codes():
    with pytest.raises(ValueError, match="Unknown network type"):
        NetworkType.parse("token-ring")


def test_endpoint_node_kinds():
    assert NodeKind.DEVICE.is_endpoint
    assert NodeKind.SERVER.is_endpoint
    assert not NodeKind.ROUTER.is_endpoint
    assert not NodeKind.CLOUD.is_endpoint


def test_params_clamped_to_slider_domain():
    params = SimulationParams(
        bandwidth_modifier=-3.0,
        latency_modifier=5.0,
        packet_loss_modifier=math.nan,
        encryption=True,
    )
    clamped = params.clamped()
    assert clamped.bandwidth_modifier == 0.1
    assert clamped.latency_modifier == 2.0
    assert clamped.packet_loss_modifier == 1.0
    assert clamped.encryption
    # The original record is left untouched
    assert params.bandwidth_modifier == -3.0


def test_effective_characteristics_scale_with_modifiers():
    params = SimulationParams(
        bandwidth_modifier=2.0, latency_modifier=0.5, packet_loss_modifier=1.5
    )
    effective = EffectiveCharacteristics.from_profile(lookup("man"), params)
    assert effective.bandwidth == pytest.approx(1000)
    assert effective.latency == pytest.approx(2.5)
    assert effective.loss_rate == pytest.approx(0.75)
    assert effective.loss_probability == pytest.approx(0.0075)
    assert effective.overhead == 1.0
    assert effective.packet_speed == pytest.approx(0.1)


def test_encryption_overhead_applied_once():
    """The profile flag and the override together still cost 15% only once"""
    encrypted_profile = lookup("pan")
    both = EffectiveCharacteristics.from_profile(
        encrypted_profile, SimulationParams(encryption=True)
    )
    profile_only = EffectiveCharacteristics.from_profile(
        encrypted_profile, SimulationParams()
    )
    override_only = EffectiveCharacteristics.from_profile(
        lookup("lan"), SimulationParams(encryption=True)
    )
    assert both.overhead == profile_only.overhead == ENCRYPTION_OVERHEAD
    assert override_only.overhead == ENCRYPTION_OVERHEAD
    assert both.packet_speed == pytest.approx(50 * 0.85 / 10000)
