"""supernodal - DC nodal analysis with supernode handling.

The package solves steady-state node voltages of resistive networks where
ideal voltage sources tie pairs of nodes together into supernodes.

Usage:
    from supernodal.dc import Network, R, VSource, analyze

    net = Network()
    net, n1 = net.node("n1")
    net, vs = VSource(net, n1, net.gnd, name="vs", value=5.0)
    net, r1 = R(net, n1, net.gnd, name="R1", value=1000.0)
    net = analyze(net)
    net.voltage(n1)  # 5.0
"""

import logging

import jax

# Conductances in one network routinely span many decades; solve in float64.
jax.config.update("jax_enable_x64", True)

from . import dc, errors  # noqa: E402

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"
__all__ = ["dc", "errors", "__version__"]
