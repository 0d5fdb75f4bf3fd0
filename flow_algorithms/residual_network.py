import logging
import operator
from typing import Dict, Iterable, Iterator, List, Tuple

import networkx as nx
import numpy as np

from flow_algorithms.errors import DuplicateEdge, InvalidNode, NegativeCapacity, SelfLoop

logger = logging.getLogger(__name__)


class ResidualNetwork:
    """
    Directed network with integer capacities, stored as one dict per node
    mapping neighbour -> capacity record.

    Every declared edge (u, v) has a record in adj[u][v] and a matching record
    in adj[v][u]. When (v, u) is not declared itself, the reverse record is
    synthetic: original capacity 0, residual capacity 0 until flow is pushed.
    """

    # capacity record for one ordered pair; not to be used outside the network
    class Edge:
        __slots__ = ("original", "residual", "declared")

        def __init__(self, original, residual, declared):
            self.original = original
            self.residual = residual
            self.declared = declared

        def __repr__(self):
            return f"Edge(original={self.original}, residual={self.residual}, declared={self.declared})"

    def __init__(self, n: int):
        n = operator.index(n)
        if n < 0:
            raise ValueError(f"node count must be >= 0, got {n}")
        self.n = n
        self.adj: List[Dict[int, "ResidualNetwork.Edge"]] = [{} for _ in range(n)]
        self.edge_count = 0
        # augmenting paths applied over the lifetime of this network
        self.augmentations = 0

    def __repr__(self):
        return f"ResidualNetwork(n={self.n}, edges={self.edge_count})"

    def check_node(self, node) -> int:
        try:
            idx = operator.index(node)
        except TypeError:
            raise InvalidNode(node, self.n) from None
        if idx < 0 or idx >= self.n:
            raise InvalidNode(node, self.n)
        return idx

    def _add_edge(self, u: int, v: int, cap: int):
        # a synthetic reverse record may already sit at adj[u][v]; promote it
        e = self.adj[u].get(v)
        if e is None:
            self.adj[u][v] = ResidualNetwork.Edge(cap, cap, True)
        else:
            e.original = cap
            e.residual = cap
            e.declared = True
        if u not in self.adj[v]:
            self.adj[v][u] = ResidualNetwork.Edge(0, 0, False)
        self.edge_count += 1

    def _record(self, u, v):
        return self.adj[self.check_node(u)].get(self.check_node(v))

    def capacity(self, u, v) -> int:
        e = self._record(u, v)
        return e.original if e is not None else 0

    def residual_capacity(self, u, v) -> int:
        e = self._record(u, v)
        return e.residual if e is not None else 0

    def set_residual_capacity(self, u, v, value: int):
        assert value >= 0, f"residual capacity of ({u}, {v}) would become {value}"
        e = self._record(u, v)
        assert e is not None, f"({u}, {v}) is not part of the residual network"
        e.residual = value

    def residual_neighbors(self, u: int) -> Iterator[int]:
        """Nodes v with residual_capacity(u, v) > 0, in insertion order."""
        for v, e in self.adj[u].items():
            if e.residual > 0:
                yield v

    def is_declared(self, u, v) -> bool:
        e = self._record(u, v)
        return e is not None and e.declared

    def flow_on(self, u, v) -> int:
        """
        Flow carried by the declared edge (u, v).

        When both (u, v) and (v, u) are declared they share one pair of
        records, so only the net flow is known; it is reported on the edge it
        runs along and the opposite edge carries 0.
        """
        e = self._record(u, v)
        if e is None or not e.declared:
            raise KeyError(f"({u}, {v}) is not a declared edge")
        return max(0, e.original - e.residual)

    def edges(self) -> Iterator[Tuple[int, int, int]]:
        """Declared edges as (u, v, capacity) triples."""
        for u in range(self.n):
            for v, e in self.adj[u].items():
                if e.declared:
                    yield u, v, e.original

    def flows(self) -> Dict[Tuple[int, int], int]:
        return {(u, v): self.flow_on(u, v) for u, v, _ in self.edges()}

    def flow_matrix(self) -> np.ndarray:
        F = np.zeros((self.n, self.n), dtype=int)
        for (u, v), f in self.flows().items():
            F[u, v] = f
        return F

    def capacity_matrix(self) -> np.ndarray:
        C = np.zeros((self.n, self.n), dtype=int)
        for u, v, cap in self.edges():
            C[u, v] = cap
        return C

    def net_outflow(self, node) -> int:
        """Flow leaving node minus flow entering it, over declared edges."""
        node = self.check_node(node)
        out = 0
        for v, e in self.adj[node].items():
            if e.declared:
                out += max(0, e.original - e.residual)
            back = self.adj[v][node]
            if back.declared:
                out -= max(0, back.original - back.residual)
        return out

    def copy(self) -> "ResidualNetwork":
        other = ResidualNetwork(self.n)
        other.adj = [{v: ResidualNetwork.Edge(e.original, e.residual, e.declared)
                      for v, e in row.items()} for row in self.adj]
        other.edge_count = self.edge_count
        other.augmentations = self.augmentations
        return other

    def to_networkx(self) -> nx.DiGraph:
        """Declared edges as a DiGraph with a 'capacity' attribute (flows are not exported)."""
        G = nx.DiGraph()
        G.add_nodes_from(range(self.n))
        for u, v, cap in self.edges():
            G.add_edge(u, v, capacity=cap)
        return G

    @classmethod
    def from_capacity_matrix(cls, matrix) -> "ResidualNetwork":
        """
        Build a network from an (n, n) capacity matrix; every non-zero entry
        [u, v] becomes a declared edge u -> v.
        """
        matrix = np.asarray(matrix)
        if matrix.ndim != 2 or matrix.shape[0] != matrix.shape[1]:
            raise ValueError(f"capacity matrix must be square, got shape {matrix.shape}")
        if not np.array_equal(matrix, np.round(matrix)):
            raise TypeError("capacity matrix must hold integer values")
        rows, cols = np.nonzero(matrix)
        edges = [(int(u), int(v), int(matrix[u, v])) for u, v in zip(rows, cols)]
        return build_network(matrix.shape[0], edges)


def _as_capacity(u, v, capacity) -> int:
    try:
        return operator.index(capacity)
    except TypeError:
        raise TypeError(f"capacity of edge ({u}, {v}) must be an integer, got {capacity!r}") from None


def build_network(node_count: int, edges: Iterable[Tuple[int, int, int]]) -> ResidualNetwork:
    """
    Build a residual network from (u, v, capacity) triples.

    Every edge is validated before the network is populated, so a failure
    never leaves a partially built network behind.

    Raises:
        InvalidNode: u or v outside [0, node_count).
        SelfLoop: u == v.
        NegativeCapacity: capacity < 0.
        DuplicateEdge: the same ordered pair appears twice.
    """
    net = ResidualNetwork(node_count)
    checked = []
    seen = set()
    for u, v, capacity in edges:
        u = net.check_node(u)
        v = net.check_node(v)
        if u == v:
            raise SelfLoop(u)
        cap = _as_capacity(u, v, capacity)
        if cap < 0:
            raise NegativeCapacity(u, v, cap)
        if (u, v) in seen:
            raise DuplicateEdge(u, v)
        seen.add((u, v))
        checked.append((u, v, cap))

    for u, v, cap in checked:
        net._add_edge(u, v, cap)
    logger.debug("built network with %d nodes and %d edges", net.n, net.edge_count)
    return net
