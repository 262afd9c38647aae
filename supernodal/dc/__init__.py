"""supernodal DC analysis module.

Nodal analysis of resistive networks with ideal voltage sources handled as
supernodes. The dense solve uses jax.numpy.linalg.solve.

Components:
    - R: Resistor
    - VSource: Ideal voltage source (supernode connection)
"""

from .network import (
    Network,
    Node,
    Known,
    Unknown,
    Voltage,
    ResistiveEdge,
    SupernodeEdge,
    ComponentRef,
    ComponentSpec,
)
from .components import R, VSource
from .traversal import traverse, find_unknown_nodes
from .assembly import LinearSystem, PairRole, assemble
from .solver import (
    AnalysisOptions,
    DCSolution,
    solve_linear,
    solve,
    write_voltages,
    analyze,
    balance_error,
    branch_current,
)

__all__ = [
    # Network building
    "Network",
    "Node",
    "Known",
    "Unknown",
    "Voltage",
    "ResistiveEdge",
    "SupernodeEdge",
    "ComponentRef",
    "ComponentSpec",
    # Components
    "R",
    "VSource",
    # Analysis
    "traverse",
    "find_unknown_nodes",
    "LinearSystem",
    "PairRole",
    "assemble",
    "AnalysisOptions",
    "DCSolution",
    "solve_linear",
    "solve",
    "write_voltages",
    "analyze",
    "balance_error",
    "branch_current",
]
