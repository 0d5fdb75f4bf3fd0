from typing import Dict, List, Tuple

import networkx as nx

from flow_algorithms.errors import EdgeListError
from flow_algorithms.residual_network import ResidualNetwork, build_network


def _label_order(labels):
    # numeric labels sort by value so that "10" comes after "9"
    try:
        return sorted(labels, key=int)
    except ValueError:
        return sorted(labels)


def read_edge_list(path) -> Tuple[int, List[Tuple[int, int, int]], Dict[int, str]]:
    """
    Read a whitespace separated "u v capacity" file ('#' starts a comment).

    Node labels are relabelled to 0..n-1, numerically when every label is an
    integer and as text otherwise. Returns (node_count, edges, names) where
    names maps the new ids back to the labels found in the file.

    Raises:
        EdgeListError: a line has a missing, extra or non-integer capacity.
    """
    try:
        G = nx.read_edgelist(path, comments="#", create_using=nx.DiGraph(),
                             nodetype=str, data=(("capacity", int),))
    except (TypeError, IndexError) as e:
        raise EdgeListError(path, e) from e

    ids = {label: i for i, label in enumerate(_label_order(G.nodes))}
    edges = []
    for u, v, d in G.edges(data=True):
        if "capacity" not in d:
            raise EdgeListError(path, f"edge {u} {v} has no capacity")
        edges.append((ids[u], ids[v], d["capacity"]))
    names = {i: label for label, i in ids.items()}
    return len(ids), edges, names


def network_from_digraph(G: nx.DiGraph, capacity="capacity") -> Tuple[ResidualNetwork, Dict[int, object]]:
    """
    Build a network from a DiGraph whose edges carry an integer capacity
    attribute. Returns the network and the id -> original node mapping.
    """
    H = nx.convert_node_labels_to_integers(G, ordering="sorted", label_attribute="name")
    names = {v: H.nodes[v]["name"] for v in H.nodes}
    edges = [(u, v, d[capacity]) for u, v, d in H.edges(data=True)]
    return build_network(H.number_of_nodes(), edges), names
