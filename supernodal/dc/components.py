"""Circuit component factory functions for DC analysis (functional style).

- R stamps a symmetric resistive connection
- VSource ties its terminals into a supernode with a fixed voltage difference
"""

from __future__ import annotations

from .network import Network, Node, ComponentSpec, ComponentRef


def R(
    net: Network,
    node_a: Node,
    node_b: Node,
    *,
    name: str,
    value: float,
) -> tuple[Network, ComponentRef]:
    """
    Create a resistor.

    Args:
        net: Network to add to
        node_a: First terminal (positive current direction is a -> b)
        node_b: Second terminal
        name: Component name (unique within the network)
        value: Resistance in Ohms, must be positive

    Returns:
        (new_network, component_ref)

    Example:
        net, r1 = R(net, n1, n2, name="R1", value=1000.0)  # 1 kOhm
    """
    net = net.connect(node_a, node_b, value)
    spec = ComponentSpec(
        name=name,
        kind="R",
        nodes=(node_a.index, node_b.index),
        value=float(value),
    )
    return net.add_component(spec)


def VSource(
    net: Network,
    node_p: Node,
    node_n: Node,
    *,
    name: str,
    value: float,
) -> tuple[Network, ComponentRef]:
    """
    Create an ideal DC voltage source: V(node_p) - V(node_n) = value.

    The two terminals form a supernode, so each terminal may belong to only
    one voltage source.

    Args:
        net: Network to add to
        node_p: Positive terminal
        node_n: Negative terminal
        name: Component name (unique within the network)
        value: Source voltage in Volts

    Returns:
        (new_network, component_ref)

    Example:
        net, vs = VSource(net, n1, net.gnd, name="vs", value=5.0)
    """
    net = net.super_connect(node_n, node_p, value)
    spec = ComponentSpec(
        name=name,
        kind="VSource",
        nodes=(node_p.index, node_n.index),
        value=float(value),
    )
    return net.add_component(spec)
