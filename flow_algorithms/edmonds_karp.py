import logging
from collections import deque
from typing import List, Optional, Tuple

from flow_algorithms.errors import SourceEqualsSink
from flow_algorithms.residual_network import ResidualNetwork

logger = logging.getLogger(__name__)

NO_PARENT = -1


def check_terminals(network: ResidualNetwork, source, sink) -> Tuple[int, int]:
    s = network.check_node(source)
    t = network.check_node(sink)
    if s == t:
        raise SourceEqualsSink(s)
    return s, t


def find_augmenting_path(network: ResidualNetwork, source: int, sink: int) -> Optional[List[int]]:
    """
    Breadth-first search from source over edges with positive residual capacity.

    Returns a parent list of length n (parents[v] is the node that discovered v,
    NO_PARENT for the source and undiscovered nodes) if sink is reachable,
    otherwise None. The network is not modified.
    """
    parents = [NO_PARENT] * network.n
    seen = [False] * network.n
    seen[source] = True
    q = deque([source])
    while q:
        u = q.popleft()
        for v in network.residual_neighbors(u):
            if not seen[v]:
                seen[v] = True
                parents[v] = u
                if v == sink:
                    return parents
                q.append(v)
    return None


def path_edges(parents: List[int], source: int, sink: int) -> List[Tuple[int, int]]:
    """Edges of the path encoded in parents, ordered source -> sink."""
    edges = []
    v = sink
    while v != source:
        u = parents[v]
        if u == NO_PARENT:
            raise ValueError(f"parent list has no path from {source} to {sink}")
        edges.append((u, v))
        v = u
    edges.reverse()
    return edges


def augment(network: ResidualNetwork, parents: Optional[List[int]], source: int, sink: int) -> int:
    """
    Push the bottleneck amount along the path in parents and return it.

    Forward residual capacities on the path drop by the bottleneck, reverse
    ones grow by the same amount.
    """
    if parents is None:
        raise ValueError("augment called without an augmenting path")
    edges = path_edges(parents, source, sink)

    bottleneck = min(network.adj[u][v].residual for u, v in edges)
    assert bottleneck > 0, "augmenting path contains a saturated edge"

    for u, v in edges:
        network.adj[u][v].residual -= bottleneck
        network.adj[v][u].residual += bottleneck
    network.augmentations += 1
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("augmented %d along %s", bottleneck, [source] + [v for _, v in edges])
    return bottleneck


def max_flow(network: ResidualNetwork, source, sink) -> int:
    """
    Edmonds-Karp: augment along shortest residual paths until the sink is
    unreachable from the source.

    The network is modified in place and ends up saturated. Returns the
    amount of flow pushed by this call, which on a fresh network is the
    maximum flow value. A second call on the same saturated network pushes
    nothing and returns 0; use network.net_outflow(source) for the total.
    """
    s, t = check_terminals(network, source, sink)
    flow = 0
    rounds = 0
    parents = find_augmenting_path(network, s, t)
    while parents is not None:
        flow += augment(network, parents, s, t)
        rounds += 1
        parents = find_augmenting_path(network, s, t)
    logger.info("max flow %d -> %d: value %d after %d augmentations", s, t, flow, rounds)
    return flow
