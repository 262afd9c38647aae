"""DC operating point solver.

The analysis runs in four steps:
    1. traverse the network from ground to find the unknown node voltages
    2. assemble G * V = b (see assembly.py)
    3. solve the dense system with jax.numpy.linalg.solve
    4. write the solved voltages back onto a new Network
"""

from __future__ import annotations
import logging
from typing import NamedTuple

import jax.numpy as jnp
from jax import Array

from ..errors import SingularCircuitError
from .assembly import LinearSystem, assemble
from .network import Network, Node, ComponentRef
from .traversal import find_unknown_nodes

logger = logging.getLogger(__name__)


class AnalysisOptions(NamedTuple):
    """Solver configuration."""
    check_rank: bool = False  # opt-in rank screen before solving
    rank_rtol: float | None = None  # relative tolerance for matrix_rank (None = jax default)
    max_condition: float = 1e14  # larger condition numbers are treated as singular


DEFAULT_OPTIONS = AnalysisOptions()


class DCSolution(NamedTuple):
    """Result of solving a network for its unknown node voltages."""
    voltages: Array  # solved voltages, in matrix index order
    unknown_nodes: tuple[Node, ...]  # traversal order
    system: LinearSystem
    ground: Node

    @property
    def node_index(self) -> dict[int, int]:
        return self.system.node_index


def solve_linear(matrix: Array, vector: Array,
                 options: AnalysisOptions | None = None) -> Array:
    """
    Solve matrix * x = vector.

    Raises:
        SingularCircuitError: if the matrix is singular or ill-conditioned
            (condition number above options.max_condition, or rank deficient
            when options.check_rank is set), or the solution is not finite
    """
    if options is None:
        options = DEFAULT_OPTIONS

    size = vector.shape[0]
    if size == 0:
        return jnp.zeros(0, dtype=jnp.float64)

    matrix = jnp.asarray(matrix, dtype=jnp.float64)
    vector = jnp.asarray(vector, dtype=jnp.float64)

    if options.check_rank:
        rank = int(jnp.linalg.matrix_rank(matrix, rtol=options.rank_rtol))
        if rank < size:
            raise SingularCircuitError(
                f"Equation system is singular (rank {rank} for {size} unknowns)"
            )

    condition = float(jnp.linalg.cond(matrix))
    if not condition <= options.max_condition:
        raise SingularCircuitError(
            f"Equation system is singular or ill-conditioned (condition number {condition:.3e})"
        )

    solution = jnp.linalg.solve(matrix, vector)
    if not bool(jnp.all(jnp.isfinite(solution))):
        raise SingularCircuitError("Equation system has no finite solution")
    return solution


def solve(net: Network, ground: Node | None = None,
          options: AnalysisOptions | None = None) -> DCSolution:
    """
    Solve every node voltage reachable from ``ground``.

    Args:
        net: Network to analyze
        ground: Reference node, forced to 0V (default: net.gnd)
        options: Solver configuration

    Returns:
        DCSolution; the network itself is left untouched
    """
    if ground is None:
        ground = net.gnd
    net = net.with_voltage(ground, 0.0)

    unknown_nodes = find_unknown_nodes(net, ground)
    system = assemble(net, unknown_nodes)
    voltages = solve_linear(system.matrix, system.vector, options)

    logger.debug("Solved %d unknown voltage(s) with reference %r",
                 len(unknown_nodes), ground.name)
    return DCSolution(
        voltages=voltages,
        unknown_nodes=unknown_nodes,
        system=system,
        ground=ground,
    )


def write_voltages(net: Network, solution: DCSolution) -> Network:
    """Return ``net`` with every solved voltage (and 0V on ground) made known."""
    solved = solution.voltages.tolist()
    values = {net.node_at(handle): solved[idx]
              for handle, idx in solution.node_index.items()}
    values[solution.ground] = 0.0
    return net.with_voltages(values)


def analyze(net: Network, ground: Node | None = None,
            options: AnalysisOptions | None = None) -> Network:
    """
    Solve the network and write the voltages back.

    Returns:
        New Network in which every node reachable from ground has a known
        voltage. Unreachable nodes keep their previous state.
    """
    return write_voltages(net, solve(net, ground, options))


def balance_error(net: Network, solution: DCSolution) -> float:
    """
    Largest KCL violation (in amperes) of an analyzed network.

    Currents are summed per solved node; the two members of a supernode pair
    are summed together. A node tied by a supernode to a fixed voltage is
    skipped, since the source may supply any current.
    """
    residuals: dict[int, float] = {}
    for node in solution.unknown_nodes:
        handle = node.index
        group = handle
        edge = net.supernodes[handle]
        if edge is not None:
            if edge.target not in solution.node_index:
                continue
            group = min(handle, edge.target)

        v = net.voltage(node)
        current = sum((v - net.voltage(net.node_at(r.target))) / r.resistance
                      for r in net.resistive[handle])
        residuals[group] = residuals.get(group, 0.0) + current

    return max((abs(r) for r in residuals.values()), default=0.0)


def branch_current(net: Network, ref: ComponentRef) -> float:
    """Current through a resistor, flowing from its node_a to its node_b."""
    spec = net.component(ref)
    if spec.kind != "R":
        raise ValueError(f"Component {ref.name} has no branch current")
    node_a, node_b = (net.node_at(i) for i in spec.nodes)
    return (net.voltage(node_a) - net.voltage(node_b)) / spec.value
