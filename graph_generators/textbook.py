from flow_algorithms.residual_network import ResidualNetwork, build_network

# s=0, w=1, x=2, z=3, y=4, t=5
TEXTBOOK_NODE_NAMES = ["s", "w", "x", "z", "y", "t"]
TEXTBOOK_SOURCE = 0
TEXTBOOK_SINK = 5

TEXTBOOK_EDGES = [
    (0, 1, 4),   # s->w
    (0, 2, 7),   # s->x
    (0, 3, 10),  # s->z
    (1, 4, 2),   # w->y
    (1, 5, 10),  # w->t
    (2, 1, 2),   # x->w
    (2, 3, 2),   # x->z
    (2, 4, 10),  # x->y
    (3, 4, 2),   # z->y
    (3, 5, 6),   # z->t
    (4, 5, 7),   # y->t
]


def textbook_network() -> ResidualNetwork:
    """Six node example network; its max flow from s to t is 19."""
    return build_network(len(TEXTBOOK_NODE_NAMES), TEXTBOOK_EDGES)
