"""Network and Node types for DC circuit topology (immutable/functional style).

Nodes are handles into dense per-node tables held by the Network. Edges refer
to their neighbour by node index, never by object, so the graph carries no
reference cycles.
"""

from __future__ import annotations
import math
from typing import NamedTuple, Mapping, Union, TYPE_CHECKING

from ..errors import InvalidComponentError, SupernodeConflictError, UnknownVoltageError

if TYPE_CHECKING:
    from .solver import AnalysisOptions


class Node(NamedTuple):
    """A node in the circuit (electrical connection point)."""
    name: str
    index: int  # row in the network's node tables (0 = ground)


class Known(NamedTuple):
    """Voltage fixed by the caller or written back after solving."""
    value: float


class Unknown(NamedTuple):
    """Voltage still to be solved for."""


Voltage = Union[Known, Unknown]

UNKNOWN = Unknown()


class ResistiveEdge(NamedTuple):
    """Resistor from the owning node to the node at ``target``."""
    target: int
    resistance: float  # ohms


class SupernodeEdge(NamedTuple):
    """
    Ideal voltage source from the owning node to the node at ``target``.

    The voltage rises by ``voltage_raise`` going from the owner to the target:
        V(target) - V(owner) = voltage_raise
    The reverse edge stored on the target carries the negated raise.
    """
    target: int
    voltage_raise: float


class ComponentRef(NamedTuple):
    """Reference to a component for later probing."""
    name: str
    kind: str  # "R" or "VSource"


class ComponentSpec(NamedTuple):
    """Specification of a named component (topology and value)."""
    name: str
    kind: str
    nodes: tuple[int, int]  # node indices
    value: float


class Network(NamedTuple):
    """
    Immutable DC circuit network.

    Build using functional style:
        net = Network()
        net, n1 = net.node("n1")
        net = net.connect(n1, net.gnd, 100.0)
        net = net.super_connect(net.gnd, n1, 5.0)  # V(n1) = V(gnd) + 5

    Each per-node table is indexed by ``Node.index``.
    """
    nodes: tuple[Node, ...] = (Node("gnd", 0),)
    voltages: tuple[Voltage, ...] = (Known(0.0),)
    resistive: tuple[tuple[ResistiveEdge, ...], ...] = ((),)
    supernodes: tuple[SupernodeEdge | None, ...] = (None,)
    components: tuple[ComponentSpec, ...] = ()

    @property
    def gnd(self) -> Node:
        """Ground node (reference, 0V)."""
        return self.nodes[0]

    @property
    def num_nodes(self) -> int:
        """Number of non-ground nodes."""
        return len(self.nodes) - 1

    # ------------------------------------------------------------------
    # Nodes
    # ------------------------------------------------------------------

    def node(self, name: str) -> tuple[Network, Node]:
        """
        Create a new node with unknown voltage and no connections.

        Returns (new_network, node). An existing node is returned unchanged
        if the name is already taken.
        """
        for n in self.nodes:
            if n.name == name:
                return self, n

        new_node = Node(name, len(self.nodes))
        new_net = self._replace(
            nodes=self.nodes + (new_node,),
            voltages=self.voltages + (UNKNOWN,),
            resistive=self.resistive + ((),),
            supernodes=self.supernodes + (None,),
        )
        return new_net, new_node

    def node_at(self, index: int) -> Node:
        """Node handle stored at a table index."""
        return self.nodes[index]

    def find(self, name: str) -> Node:
        """Look up a node by name."""
        for n in self.nodes:
            if n.name == name:
                return n
        raise KeyError(f"No node named {name!r}")

    def index_of(self, node: Node) -> int:
        """Table index of ``node``, validating that it belongs to this network."""
        if not 0 <= node.index < len(self.nodes) or self.nodes[node.index] != node:
            raise InvalidComponentError(f"Node {node.name!r} does not belong to this network")
        return node.index

    # ------------------------------------------------------------------
    # Voltages
    # ------------------------------------------------------------------

    def voltage_state(self, node: Node) -> Voltage:
        return self.voltages[self.index_of(node)]

    def has_known_voltage(self, node: Node) -> bool:
        return isinstance(self.voltage_state(node), Known)

    def voltage(self, node: Node) -> float:
        """Known voltage of a node; raises UnknownVoltageError otherwise."""
        state = self.voltage_state(node)
        if isinstance(state, Unknown):
            raise UnknownVoltageError(f"Voltage of node {node.name!r} is unknown")
        return state.value

    def with_voltage(self, node: Node, value: float) -> Network:
        """Return a network where ``node`` has the known voltage ``value``."""
        return self.with_voltages({node: value})

    def with_voltages(self, values: Mapping[Node, float]) -> Network:
        voltages = list(self.voltages)
        for node, value in values.items():
            voltages[self.index_of(node)] = Known(_finite(value, f"voltage of {node.name!r}"))
        return self._replace(voltages=tuple(voltages))

    # ------------------------------------------------------------------
    # Connections
    # ------------------------------------------------------------------

    def connections(self, node: Node) -> tuple[ResistiveEdge, ...]:
        """Resistive edges leaving ``node`` in insertion order."""
        return self.resistive[self.index_of(node)]

    def supernode_connection(self, node: Node) -> SupernodeEdge | None:
        return self.supernodes[self.index_of(node)]

    def connect(self, node_a: Node, node_b: Node, resistance: float) -> Network:
        """
        Add a resistor between two nodes (stored on both ends).

        A second resistor between the same pair is combined in parallel with
        the first, so every node has at most one edge per neighbour.
        """
        ia, ib = self._check_pair(node_a, node_b)
        resistance = _finite(resistance, "resistance")
        if resistance <= 0:
            raise InvalidComponentError(
                f"Resistance between {node_a.name!r} and {node_b.name!r} must be positive, "
                f"got {resistance}"
            )

        resistive = list(self.resistive)
        resistive[ia] = _add_parallel(resistive[ia], ib, resistance)
        resistive[ib] = _add_parallel(resistive[ib], ia, resistance)
        return self._replace(resistive=tuple(resistive))

    def super_connect(self, node_a: Node, node_b: Node, voltage_raise: float) -> Network:
        """
        Tie two nodes into a supernode with V(node_b) - V(node_a) = voltage_raise.

        The edge on ``node_b`` carries the negated raise. A node can take part
        in a single supernode connection only.
        """
        ia, ib = self._check_pair(node_a, node_b)
        voltage_raise = _finite(voltage_raise, "voltage raise")
        for node, idx in ((node_a, ia), (node_b, ib)):
            if self.supernodes[idx] is not None:
                raise SupernodeConflictError(
                    f"Node {node.name!r} already has a supernode connection"
                )

        supernodes = list(self.supernodes)
        supernodes[ia] = SupernodeEdge(ib, voltage_raise)
        supernodes[ib] = SupernodeEdge(ia, -voltage_raise)
        return self._replace(supernodes=tuple(supernodes))

    def _check_pair(self, node_a: Node, node_b: Node) -> tuple[int, int]:
        ia, ib = self.index_of(node_a), self.index_of(node_b)
        if ia == ib:
            raise InvalidComponentError(f"Cannot connect node {node_a.name!r} to itself")
        return ia, ib

    # ------------------------------------------------------------------
    # Components
    # ------------------------------------------------------------------

    def add_component(self, spec: ComponentSpec) -> tuple[Network, ComponentRef]:
        """
        Register a component specification.

        Returns (new_network, component_ref).
        """
        if any(c.name == spec.name for c in self.components):
            raise InvalidComponentError(f"Component {spec.name!r} already exists")
        new_net = self._replace(components=self.components + (spec,))
        return new_net, ComponentRef(spec.name, spec.kind)

    def component(self, ref: ComponentRef) -> ComponentSpec:
        for spec in self.components:
            if spec.name == ref.name:
                return spec
        raise ValueError(f"Component {ref.name} not found")

    def analyze(self, ground: Node | None = None,
                options: AnalysisOptions | None = None) -> Network:
        """
        Solve all voltages reachable from ``ground`` (default: gnd).

        Returns a new network with the solved voltages written back.
        """
        from .solver import analyze
        return analyze(self, ground, options)


def _finite(value: float, what: str) -> float:
    value = float(value)
    if not math.isfinite(value):
        raise InvalidComponentError(f"{what} must be finite, got {value}")
    return value


def _add_parallel(edges: tuple[ResistiveEdge, ...], target: int,
                  resistance: float) -> tuple[ResistiveEdge, ...]:
    for i, edge in enumerate(edges):
        if edge.target == target:
            combined = edge.resistance * resistance / (edge.resistance + resistance)
            return edges[:i] + (ResistiveEdge(target, combined),) + edges[i + 1:]
    return edges + (ResistiveEdge(target, resistance),)
