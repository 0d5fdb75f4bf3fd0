class FlowNetworkError(ValueError):
    """Base class for invalid input passed to the flow routines."""


class InvalidNode(FlowNetworkError):
    def __init__(self, node, node_count):
        super().__init__(f"node {node!r} is not in [0, {node_count})")
        self.node = node
        self.node_count = node_count


class SelfLoop(FlowNetworkError):
    def __init__(self, node):
        super().__init__(f"self loop on node {node} is not allowed")
        self.node = node


class NegativeCapacity(FlowNetworkError):
    def __init__(self, u, v, capacity):
        super().__init__(f"edge ({u}, {v}) has negative capacity {capacity}")
        self.edge = (u, v)
        self.capacity = capacity


class DuplicateEdge(FlowNetworkError):
    def __init__(self, u, v):
        super().__init__(f"edge ({u}, {v}) declared more than once; merge parallel edges first")
        self.edge = (u, v)


class SourceEqualsSink(FlowNetworkError):
    def __init__(self, node):
        super().__init__(f"source and sink are both node {node}")
        self.node = node


class NotSaturated(UserWarning):
    """
    Emitted by min_cut when the sink is still reachable from the source.
    The returned partition is not a minimum cut in that case.
    """


class EdgeListError(FlowNetworkError):
    def __init__(self, path, reason):
        super().__init__(f"{path}: {reason}")
        self.path = path
