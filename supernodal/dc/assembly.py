"""Assembly of the nodal equation system.

For N unknown node voltages we build a square system
    G * V = b
with one row per unknown. Ordinary nodes contribute a KCL row:
    sum over resistors (V(n) - V(p)) / R = 0
A supernode pair (two nodes tied by an ideal voltage source) contributes one
dependency row and one combined KCL row:

    FIRST member m1 (processed first), own row:
        V(m1) - V(m2) = -voltage_raise        (raise stored on m1's edge)
    SECOND member m2, own row:
        KCL(m1) + KCL(m2) = 0

so the pair still adds exactly two rows for its two unknowns. When the
partner of the FIRST member already has a known voltage, the dependency row
fixes V(m1) directly and m1's resistors are not stamped anywhere.
"""

from __future__ import annotations
import logging
from enum import Enum
from typing import NamedTuple, Sequence

import jax.numpy as jnp
from jax import Array

from ..errors import AssemblyError
from .network import Network, Node, Known, Unknown

logger = logging.getLogger(__name__)


class PairRole(Enum):
    """Role of a node inside its supernode pair, by processing order."""
    FIRST = "first"    # writes the dependency equation into its own row
    SECOND = "second"  # receives the combined KCL equation of the pair


class LinearSystem(NamedTuple):
    """Assembled equation system G * V = b."""
    matrix: Array                    # (N, N) coefficient matrix
    vector: Array                    # (N,) right-hand side
    node_index: dict[int, int]       # node table index -> matrix index
    equation_rows: tuple[int, ...]   # rows that received an equation
    roles: dict[int, PairRole]       # node table index -> supernode role

    @property
    def size(self) -> int:
        return len(self.vector)


class _IndexCounter:
    """Matrix indices handed out sequentially, in order of first reference."""

    def __init__(self, net: Network, size: int):
        self.net = net
        self.size = size
        self.indices: dict[int, int] = {}

    def __call__(self, handle: int) -> int:
        idx = self.indices.get(handle)
        if idx is None:
            idx = len(self.indices)
            if idx >= self.size:
                raise AssemblyError(
                    f"Node {self.net.nodes[handle].name!r} has an unknown voltage but is "
                    f"not among the {self.size} unknown node(s) being assembled"
                )
            self.indices[handle] = idx
        return idx


def assemble(net: Network, unknown_nodes: Sequence[Node]) -> LinearSystem:
    """
    Build the coefficient matrix and right-hand side for ``unknown_nodes``.

    Args:
        net: Network holding the topology and the known voltages
        unknown_nodes: Nodes to solve for, in processing order (normally
            the output of ``find_unknown_nodes``)

    Returns:
        LinearSystem with one equation row per unknown node
    """
    size = len(unknown_nodes)
    matrix = jnp.zeros((size, size), dtype=jnp.float64)
    vector = jnp.zeros(size, dtype=jnp.float64)

    index = _IndexCounter(net, size)
    roles: dict[int, PairRole] = {}
    rows: set[int] = set()

    for node in unknown_nodes:
        handle = net.index_of(node)
        if not isinstance(net.voltages[handle], Unknown):
            raise AssemblyError(f"Node {node.name!r} already has a known voltage")

        col = index(handle)
        row = col

        edge = net.supernodes[handle]
        if edge is not None and roles.get(handle) is not PairRole.SECOND:
            partner = edge.target
            roles[handle] = PairRole.FIRST
            roles[partner] = PairRole.SECOND

            # Dependency: V(node) - V(partner) = -voltage_raise
            matrix = matrix.at[col, col].set(1.0)
            rows.add(col)
            partner_voltage = net.voltages[partner]
            if isinstance(partner_voltage, Known):
                vector = vector.at[col].set(partner_voltage.value - edge.voltage_raise)
                continue

            partner_col = index(partner)
            matrix = matrix.at[col, partner_col].set(-1.0)
            vector = vector.at[col].set(-edge.voltage_raise)
            row = partner_col

        for resistor in net.resistive[handle]:
            g = 1.0 / resistor.resistance
            matrix = matrix.at[row, col].add(g)

            neighbour_voltage = net.voltages[resistor.target]
            if isinstance(neighbour_voltage, Known):
                vector = vector.at[row].add(g * neighbour_voltage.value)
            else:
                matrix = matrix.at[row, index(resistor.target)].add(-g)
        rows.add(row)

    if len(rows) != size:
        raise AssemblyError(f"Assembled {len(rows)} equation(s) for {size} unknown node(s)")

    logger.debug("Assembled %d equation(s), %d supernode member(s)", size, len(roles))
    return LinearSystem(
        matrix=matrix,
        vector=vector,
        node_index=dict(index.indices),
        equation_rows=tuple(sorted(rows)),
        roles=roles,
    )
