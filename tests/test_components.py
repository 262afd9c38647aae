"""
Test: R and VSource factories and branch current probing.
"""
import pytest


def test_vsource_sets_terminal_difference():
    """VSource(p, n, value) enforces V(p) - V(n) = value."""
    from supernodal.dc import Network, R, VSource, analyze

    net = Network()
    net, p = net.node("p")
    net, n = net.node("n")
    net, vs = VSource(net, p, n, name="vs", value=3.0)
    net, r1 = R(net, n, net.gnd, name="R1", value=1000.0)
    net, r2 = R(net, p, net.gnd, name="R2", value=1000.0)

    solved = analyze(net)
    diff = solved.voltage(p) - solved.voltage(n)
    assert abs(diff - 3.0) < 1e-5, f"Expected 3.0V across source, got {diff:.6f}V"
    # symmetric load: p and n sit at +1.5V and -1.5V
    assert abs(solved.voltage(p) - 1.5) < 1e-5
    assert abs(solved.voltage(n) + 1.5) < 1e-5


def test_component_refs_and_specs():
    from supernodal.dc import Network, R, VSource, ComponentRef

    net = Network()
    net, n1 = net.node("n1")
    net, vs = VSource(net, n1, net.gnd, name="vs", value=5.0)
    net, r1 = R(net, n1, net.gnd, name="R1", value=470.0)

    assert vs == ComponentRef("vs", "VSource")
    assert r1 == ComponentRef("R1", "R")
    spec = net.component(r1)
    assert spec.nodes == (n1.index, net.gnd.index)
    assert spec.value == 470.0


def test_duplicate_component_name_rejected():
    from supernodal.dc import Network, R
    from supernodal.errors import InvalidComponentError

    net = Network()
    net, n1 = net.node("n1")
    net, _ = R(net, n1, net.gnd, name="R1", value=100.0)
    with pytest.raises(InvalidComponentError):
        R(net, n1, net.gnd, name="R1", value=200.0)


def test_resistor_branch_current():
    """Series 100 + 200 ohm across 6V carries 20mA."""
    from supernodal.dc import Network, R, VSource, analyze, branch_current

    net = Network()
    net, n1 = net.node("n1")
    net, n2 = net.node("n2")
    net, vs = VSource(net, n1, net.gnd, name="vs", value=6.0)
    net, r1 = R(net, n1, n2, name="R1", value=100.0)
    net, r2 = R(net, n2, net.gnd, name="R2", value=200.0)

    solved = analyze(net)
    i1 = branch_current(solved, r1)
    i2 = branch_current(solved, r2)
    assert abs(i1 - 0.02) < 1e-6, f"Expected 20mA, got {i1 * 1000:.4f}mA"
    assert abs(i2 - 0.02) < 1e-6

    # current direction follows node_a -> node_b
    net, r3 = R(net, net.gnd, n2, name="R3", value=1e9)
    solved = analyze(net)
    assert branch_current(solved, r3) < 0


def test_bridge_cross_current():
    from supernodal.dc import Network, R, VSource, analyze, branch_current

    net = Network()
    net, top = net.node("top")
    net, left = net.node("l")
    net, right = net.node("r")
    net, _ = VSource(net, top, net.gnd, name="vs", value=10.0)
    net, _ = R(net, top, left, name="R1", value=100.0)
    net, _ = R(net, left, net.gnd, name="R2", value=200.0)
    net, _ = R(net, top, right, name="R3", value=200.0)
    net, _ = R(net, right, net.gnd, name="R4", value=100.0)
    net, r5 = R(net, left, right, name="R5", value=300.0)

    solved = analyze(net)
    i5 = branch_current(solved, r5)
    assert abs(i5 - 0.1 / 13.0) < 1e-6, f"Expected {0.1 / 13.0:.6f}A, got {i5:.6f}A"


def test_vsource_has_no_branch_current():
    from supernodal.dc import Network, R, VSource, analyze, branch_current

    net = Network()
    net, n1 = net.node("n1")
    net, vs = VSource(net, n1, net.gnd, name="vs", value=1.0)
    net, _ = R(net, n1, net.gnd, name="R1", value=10.0)

    with pytest.raises(ValueError):
        branch_current(analyze(net), vs)


def test_branch_current_before_analysis_raises():
    from supernodal.dc import Network, R, branch_current
    from supernodal.errors import UnknownVoltageError

    net = Network()
    net, n1 = net.node("n1")
    net, r1 = R(net, n1, net.gnd, name="R1", value=10.0)

    with pytest.raises(UnknownVoltageError):
        branch_current(net, r1)


def test_unknown_component_ref():
    from supernodal.dc import Network, ComponentRef, branch_current

    with pytest.raises(ValueError):
        branch_current(Network(), ComponentRef("nope", "R"))
