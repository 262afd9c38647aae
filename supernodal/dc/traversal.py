"""Breadth-first reachability over resistive and supernode edges."""

from __future__ import annotations
import logging
from collections import deque

from .network import Network, Node, Unknown

logger = logging.getLogger(__name__)


def traverse(net: Network, ground: Node) -> tuple[Node, ...]:
    """
    All nodes reachable from ``ground``, in breadth-first visitation order.

    The supernode partner of a node is discovered before its resistive
    neighbours; resistive neighbours follow edge insertion order. Nodes that
    are not connected to ground are simply absent.
    """
    start = net.index_of(ground)
    visited = {start}
    queue = deque([start])
    order = []

    while queue:
        current = queue.popleft()
        order.append(net.nodes[current])

        neighbours = [edge.target for edge in net.resistive[current]]
        supernode = net.supernodes[current]
        if supernode is not None:
            neighbours.insert(0, supernode.target)

        for neighbour in neighbours:
            if neighbour in visited:
                continue
            visited.add(neighbour)
            queue.append(neighbour)

    if len(order) < len(net.nodes):
        logger.debug("%d node(s) unreachable from %r are ignored",
                     len(net.nodes) - len(order), ground.name)
    return tuple(order)


def find_unknown_nodes(net: Network, ground: Node) -> tuple[Node, ...]:
    """Reachable nodes with unknown voltage, in first-visited order."""
    return tuple(n for n in traverse(net, ground)
                 if isinstance(net.voltages[n.index], Unknown))
