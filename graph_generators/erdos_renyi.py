import numpy as np


def generate_er(n: int, p: float, max_capacity: int = 10) -> np.ndarray:
    """
    Generates a directed Erdős-Rényi (G(n, p)) network.

    Each ordered pair (u, v), u != v, is an edge with probability p and gets
    an integer capacity drawn uniformly from [1, max_capacity].

    Returns:
        np.ndarray: An (n, n) capacity matrix (zero diagonal).
    """
    matrix = np.zeros((n, n), dtype=int)

    edges = np.random.rand(n, n) < p
    np.fill_diagonal(edges, False)

    matrix[edges] = np.random.randint(1, max_capacity + 1, size=int(edges.sum()))

    return matrix
