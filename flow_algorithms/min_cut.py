import logging
import warnings
from collections import deque
from typing import FrozenSet, List, NamedTuple, Tuple

from flow_algorithms.edmonds_karp import check_terminals
from flow_algorithms.errors import NotSaturated
from flow_algorithms.residual_network import ResidualNetwork

logger = logging.getLogger(__name__)


class CutPartition(NamedTuple):
    source_side: FrozenSet[int]
    sink_side: FrozenSet[int]
    # declared edges from source_side to sink_side, sorted
    cut_edges: List[Tuple[int, int]]
    capacity: int
    # False when the sink was still reachable, i.e. this is not a minimum cut
    saturated: bool


def reachable_from(network: ResidualNetwork, source: int) -> List[bool]:
    """Nodes reachable from source over edges with positive residual capacity."""
    seen = [False] * network.n
    seen[source] = True
    q = deque([source])
    while q:
        u = q.popleft()
        for v in network.residual_neighbors(u):
            if not seen[v]:
                seen[v] = True
                q.append(v)
    return seen


def min_cut(network: ResidualNetwork, source, sink) -> CutPartition:
    """
    Split the nodes into those reachable from source in the residual network
    and the rest. Run max_flow first: on a saturated network the declared
    edges crossing the split form a minimum s-t cut whose capacity equals the
    max flow value.

    If the sink is still reachable a NotSaturated warning is issued and the
    returned partition has saturated=False.
    """
    s, t = check_terminals(network, source, sink)
    seen = reachable_from(network, s)
    S = frozenset(v for v in range(network.n) if seen[v])
    T = frozenset(v for v in range(network.n) if not seen[v])

    saturated = not seen[t]
    if not saturated:
        warnings.warn(f"sink {t} is still reachable from source {s}; partition is not a minimum cut",
                      NotSaturated, stacklevel=2)

    cut_edges = sorted((u, v) for u, v, _ in network.edges() if seen[u] and not seen[v])
    capacity = sum(network.adj[u][v].original for u, v in cut_edges)
    logger.debug("cut %d -> %d: |S|=%d |T|=%d capacity %d", s, t, len(S), len(T), capacity)
    return CutPartition(S, T, cut_edges, capacity, saturated)
