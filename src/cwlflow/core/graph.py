"""Adjacency model and execution order for pipeline graphs.

The visual editor allows several links between the same pair of nodes (one
per port pair). Ordering only cares about which node feeds which, so the
graph is first collapsed into ``SimpleNode`` records with at most one edge
per ordered pair, then sequenced with a FIFO variant of Kahn's algorithm.
"""

import logging
from collections import deque
from collections.abc import Iterable, Sequence

from .exceptions import NoEntryPointError
from .models import Link, Node, SimpleNode

logger = logging.getLogger(__name__)


def simplify_graph(nodes: Iterable[Node], links: Iterable[Link]) -> list[SimpleNode]:
    """Reduce a multi-edge graph to distinct predecessor/successor lists.

    Links referencing unknown nodes are dropped, as are repeated links
    between the same ordered pair of nodes (e.g. two links from different
    outlets of ``a`` into ``b``).

    Args:
        nodes: Graph nodes, in editor order
        links: Graph links, in editor order

    Returns:
        One SimpleNode per input node, in the same order
    """
    simple_nodes = [SimpleNode(id=node.id) for node in nodes]
    by_id = {simple.id: simple for simple in simple_nodes}

    for link in links:
        source = by_id.get(link.source_id)
        target = by_id.get(link.target_id)

        if source is None or target is None:
            logger.debug(
                f"Skipping dangling link {link.source_id} -> {link.target_id}",
                extra={"phase": "simplify"},
            )
            continue

        # several links between the same pair only differ by port index
        if target.id in source.outgoing:
            continue

        source.outgoing.append(target.id)
        target.incoming.append(source.id)

    return simple_nodes


def get_sequence(simple_nodes: Sequence[SimpleNode]) -> list[int]:
    """Compute a deterministic execution order.

    Nodes without predecessors seed a FIFO queue in list order. A node is
    queued once all of its predecessors have been visited, so ties are
    broken by the order in which nodes became ready.

    Nodes on a cycle (or only reachable through one) never become ready and
    are left out of the result. This is not an error; callers that need
    every node compare ``len(result)`` with the node count.

    Args:
        simple_nodes: Output of ``simplify_graph``

    Returns:
        Node ids in execution order

    Raises:
        NoEntryPointError: If no node has zero predecessors
    """
    by_id = {simple.id: simple for simple in simple_nodes}
    queue = deque(simple for simple in simple_nodes if not simple.incoming)

    if not queue:
        raise NoEntryPointError()

    sequence: list[int] = []
    visited: set[int] = set()

    while queue:
        simple = queue.popleft()
        sequence.append(simple.id)
        visited.add(simple.id)

        for next_id in simple.outgoing:
            next_node = by_id.get(next_id)
            if next_node is not None and all(prev in visited for prev in next_node.incoming):
                queue.append(next_node)

    if len(sequence) < len(simple_nodes):
        missing = find_unsequenced(simple_nodes, sequence)
        logger.warning(f"Nodes left out of the execution sequence (cycle or unreachable): {missing}")

    return sequence


def find_unsequenced(simple_nodes: Sequence[SimpleNode], sequence: Sequence[int]) -> list[int]:
    """Return ids of nodes missing from ``sequence``, in graph order."""
    seen = set(sequence)
    return [simple.id for simple in simple_nodes if simple.id not in seen]
