"""Tests for network construction, connections and voltage state."""

import math
import pytest


def test_new_network_has_grounded_reference():
    """A fresh network holds only the ground node at 0V."""
    from supernodal.dc import Network, Known

    net = Network()
    assert net.num_nodes == 0
    assert net.gnd.name == "gnd"
    assert net.voltage_state(net.gnd) == Known(0.0)
    assert net.voltage(net.gnd) == 0.0


def test_node_creation_is_functional():
    """Creating a node returns a new network and leaves the old one untouched."""
    from supernodal.dc import Network, Unknown

    net0 = Network()
    net1, n1 = net0.node("n1")

    assert net0.num_nodes == 0
    assert net1.num_nodes == 1
    assert n1.index == 1
    assert isinstance(net1.voltage_state(n1), Unknown)
    assert net1.connections(n1) == ()
    assert net1.supernode_connection(n1) is None


def test_node_with_existing_name_is_reused():
    from supernodal.dc import Network

    net, n1 = Network().node("n1")
    net2, again = net.node("n1")

    assert again == n1
    assert net2 is net
    assert net.find("n1") == n1
    with pytest.raises(KeyError):
        net.find("missing")


def test_resistive_connection_is_symmetric():
    from supernodal.dc import Network, ResistiveEdge

    net = Network()
    net, a = net.node("a")
    net = net.connect(a, net.gnd, 220.0)

    assert net.connections(a) == (ResistiveEdge(net.gnd.index, 220.0),)
    assert net.connections(net.gnd) == (ResistiveEdge(a.index, 220.0),)


def test_parallel_resistors_are_combined():
    """Two resistors between the same nodes merge into one equivalent edge."""
    from supernodal.dc import Network

    net = Network()
    net, a = net.node("a")
    net = net.connect(a, net.gnd, 100.0)
    net = net.connect(net.gnd, a, 300.0)

    (edge,) = net.connections(a)
    assert edge.target == net.gnd.index
    assert abs(edge.resistance - 75.0) < 1e-9, f"Expected 75 ohm, got {edge.resistance}"
    (reverse,) = net.connections(net.gnd)
    assert abs(reverse.resistance - 75.0) < 1e-9


def test_supernode_connection_negates_raise_on_reverse_edge():
    from supernodal.dc import Network, SupernodeEdge

    net = Network()
    net, a = net.node("a")
    net, b = net.node("b")
    net = net.super_connect(a, b, 5.0)

    assert net.supernode_connection(a) == SupernodeEdge(b.index, 5.0)
    assert net.supernode_connection(b) == SupernodeEdge(a.index, -5.0)


@pytest.mark.parametrize("resistance", [0.0, -10.0, math.inf, math.nan])
def test_invalid_resistance_rejected(resistance):
    from supernodal.dc import Network
    from supernodal.errors import InvalidComponentError

    net, a = Network().node("a")
    with pytest.raises(InvalidComponentError):
        net.connect(a, net.gnd, resistance)


def test_invalid_resistance_is_a_value_error():
    from supernodal.dc import Network

    net, a = Network().node("a")
    with pytest.raises(ValueError):
        net.connect(a, net.gnd, -1.0)


def test_second_supernode_connection_rejected():
    """A node can only belong to a single supernode pair."""
    from supernodal.dc import Network
    from supernodal.errors import SupernodeConflictError

    net = Network()
    net, a = net.node("a")
    net, b = net.node("b")
    net, c = net.node("c")
    net = net.super_connect(a, b, 1.0)

    with pytest.raises(SupernodeConflictError):
        net.super_connect(b, c, 2.0)
    with pytest.raises(SupernodeConflictError):
        net.super_connect(c, a, 2.0)


def test_self_connection_rejected():
    from supernodal.dc import Network
    from supernodal.errors import InvalidComponentError

    net, a = Network().node("a")
    with pytest.raises(InvalidComponentError):
        net.connect(a, a, 10.0)
    with pytest.raises(InvalidComponentError):
        net.super_connect(a, a, 1.0)


def test_node_from_other_network_rejected():
    from supernodal.dc import Network
    from supernodal.errors import InvalidComponentError

    net = Network()
    other, foreign = Network().node("foreign")
    with pytest.raises(InvalidComponentError):
        net.connect(foreign, net.gnd, 10.0)


def test_reading_unknown_voltage_is_an_error():
    from supernodal.dc import Network
    from supernodal.errors import UnknownVoltageError

    net, a = Network().node("a")
    assert not net.has_known_voltage(a)
    with pytest.raises(UnknownVoltageError):
        net.voltage(a)
    with pytest.raises(LookupError):
        net.voltage(a)


def test_with_voltage_sets_known_state():
    from supernodal.dc import Network, Known

    net, a = Network().node("a")
    fixed = net.with_voltage(a, 3.3)

    assert fixed.has_known_voltage(a)
    assert fixed.voltage_state(a) == Known(3.3)
    assert not net.has_known_voltage(a)


def test_connections_do_not_mutate_original():
    from supernodal.dc import Network

    net, a = Network().node("a")
    connected = net.connect(a, net.gnd, 10.0)

    assert net.connections(a) == ()
    assert len(connected.connections(a)) == 1
