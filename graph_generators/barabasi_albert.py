import numpy as np


def generate_ba(n: int, m: int, max_capacity: int = 10) -> np.ndarray:
    """
    Generates a directed Barabási-Albert (BA) network using preferential attachment.

    Attachment is done on the undirected degree; every undirected edge is then
    kept in both directions with independent capacities, so node 0 reaches
    node n-1 whenever the graph is connected.

    Args:
        n (int): Total number of nodes.
        m (int): Number of edges to attach from a new node to existing nodes.
                 (m <= m0, where m0 is the initial number of nodes)
        max_capacity (int): Capacities are drawn uniformly from [1, max_capacity].

    Returns:
        np.ndarray: An (n, n) capacity matrix.
    """
    m0 = m  # initial number of nodes, must be >= m
    if n < m0:
        raise ValueError("n must be >= m")

    adj = np.zeros((n, n), dtype=bool)

    rows, cols = np.triu_indices(m0, k=1)
    adj[rows, cols] = True
    adj[cols, rows] = True

    degrees = np.sum(adj, axis=1).astype(int)

    for i in range(m0, n):
        current_degrees = degrees[:i]
        total_degree = np.sum(current_degrees)

        if total_degree == 0:
            # if disconnected, connect randomly
            targets = np.random.choice(i, size=m, replace=False)
        else:
            probabilities = current_degrees / total_degree
            targets = np.random.choice(
                i, size=m, replace=False, p=probabilities)

        adj[i, targets] = True
        adj[targets, i] = True

        degrees[i] = m
        degrees[targets] += 1

    matrix = np.zeros((n, n), dtype=int)
    matrix[adj] = np.random.randint(1, max_capacity + 1, size=int(adj.sum()))
    return matrix
