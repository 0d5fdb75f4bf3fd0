import logging

import networkx as nx
import numpy as np
import pytest

from flow_algorithms.edmonds_karp import NO_PARENT, augment, find_augmenting_path, max_flow, path_edges
from flow_algorithms.errors import InvalidNode, SourceEqualsSink
from flow_algorithms.residual_network import ResidualNetwork, build_network
from graph_generators.erdos_renyi import generate_er
from graph_generators.textbook import TEXTBOOK_SINK, TEXTBOOK_SOURCE, textbook_network


def assert_valid_flow(net, s, t, value):
    for u, v, cap in net.edges():
        assert 0 <= net.flow_on(u, v) <= cap
    for node in range(net.n):
        if node not in (s, t):
            assert net.net_outflow(node) == 0
    assert net.net_outflow(s) == value
    assert net.net_outflow(t) == -value


def test_textbook_max_flow():
    net = textbook_network()
    value = max_flow(net, TEXTBOOK_SOURCE, TEXTBOOK_SINK)
    assert value == 19
    assert_valid_flow(net, TEXTBOOK_SOURCE, TEXTBOOK_SINK, value)
    # every edge leaving the source side {s, z} is saturated
    for u, v in [(0, 1), (0, 2), (3, 4), (3, 5)]:
        assert net.flow_on(u, v) == net.capacity(u, v)
    assert net.flow_on(0, 3) == 8


def test_find_path_is_shortest_and_read_only():
    # 0 -> 1 -> 2 -> 3 and the shortcut 0 -> 3
    net = build_network(4, [(0, 1, 5), (1, 2, 5), (2, 3, 5), (0, 3, 1)])
    parents = find_augmenting_path(net, 0, 3)
    assert parents is not None
    assert path_edges(parents, 0, 3) == [(0, 3)]
    assert parents[0] == NO_PARENT
    assert net.residual_capacity(0, 3) == 1
    assert net.augmentations == 0


def test_find_path_none_when_unreachable():
    net = build_network(3, [(0, 1, 5), (2, 1, 5)])
    assert find_augmenting_path(net, 0, 2) is None


def test_augment_updates_forward_and_reverse():
    net = build_network(3, [(0, 1, 4), (1, 2, 3)])
    parents = find_augmenting_path(net, 0, 2)
    assert augment(net, parents, 0, 2) == 3
    assert net.residual_capacity(0, 1) == 1
    assert net.residual_capacity(1, 0) == 3
    assert net.residual_capacity(1, 2) == 0
    assert net.residual_capacity(2, 1) == 3
    assert net.augmentations == 1


def test_augment_without_path():
    net = build_network(2, [(0, 1, 4)])
    with pytest.raises(ValueError):
        augment(net, None, 0, 1)


def test_reverse_edges_undo_flow():
    # first path found is 0-1-2-5; the second round has to cancel 1->2
    # through the reverse record: 0-3-2-1-4-5
    net = build_network(6, [(0, 1, 1), (0, 3, 1), (1, 2, 1), (1, 4, 1),
                            (3, 2, 1), (2, 5, 1), (4, 5, 1)])
    parents = find_augmenting_path(net, 0, 5)
    assert path_edges(parents, 0, 5) == [(0, 1), (1, 2), (2, 5)]
    augment(net, parents, 0, 5)

    parents = find_augmenting_path(net, 0, 5)
    assert path_edges(parents, 0, 5) == [(0, 3), (3, 2), (2, 1), (1, 4), (4, 5)]
    augment(net, parents, 0, 5)

    assert max_flow(net, 0, 5) == 0
    assert net.flow_on(1, 2) == 0
    assert_valid_flow(net, 0, 5, 2)


def test_antiparallel_edges():
    net = build_network(3, [(0, 1, 5), (1, 0, 3), (1, 2, 4)])
    assert max_flow(net, 0, 2) == 4
    assert net.flow_on(0, 1) == 4
    assert net.flow_on(1, 0) == 0
    assert_valid_flow(net, 0, 2, 4)


def test_source_without_outgoing_capacity():
    net = build_network(3, [(1, 0, 5), (1, 2, 5)])
    assert max_flow(net, 0, 2) == 0
    assert net.augmentations == 0


def test_disconnected_sink_is_zero_flow():
    net = build_network(4, [(0, 1, 5), (2, 3, 5)])
    assert max_flow(net, 0, 3) == 0


def test_second_call_pushes_nothing():
    net = textbook_network()
    assert max_flow(net, 0, 5) == 19
    assert max_flow(net, 0, 5) == 0
    assert net.net_outflow(0) == 19


@pytest.mark.parametrize("source, sink, error", [
    (0, 0, SourceEqualsSink),
    (0, 6, InvalidNode),
    (-1, 5, InvalidNode),
])
def test_usage_errors_leave_network_unchanged(source, sink, error):
    net = textbook_network()
    with pytest.raises(error):
        max_flow(net, source, sink)
    assert all(f == 0 for f in net.flows().values())


@pytest.mark.parametrize("seed", range(10))
def test_matches_networkx_on_random_networks(seed):
    np.random.seed(seed)
    n = 12 + seed
    matrix = generate_er(n, 0.25)
    net = ResidualNetwork.from_capacity_matrix(matrix)
    expected = nx.maximum_flow_value(net.to_networkx(), 0, n - 1)

    value = max_flow(net, 0, n - 1)
    assert value == expected
    assert_valid_flow(net, 0, n - 1, value)
    # Edmonds-Karp round bound
    assert net.augmentations <= net.n * max(net.edge_count, 1)


def augment_step_by_step(net, s, t):
    total = 0
    rounds = 0
    parents = find_augmenting_path(net, s, t)
    while parents is not None:
        total += augment(net, parents, s, t)
        rounds += 1
        # capacity and conservation hold after every complete round
        assert_valid_flow(net, s, t, total)
        parents = find_augmenting_path(net, s, t)
    return total, rounds


def test_textbook_invariants_hold_between_rounds():
    net = textbook_network()
    total, rounds = augment_step_by_step(net, TEXTBOOK_SOURCE, TEXTBOOK_SINK)
    assert total == 19
    assert rounds == net.augmentations >= 2


@pytest.mark.parametrize("seed", range(6))
def test_random_invariants_hold_between_rounds(seed):
    np.random.seed(100 + seed)
    n = 10 + seed
    net = ResidualNetwork.from_capacity_matrix(generate_er(n, 0.3))
    total, _ = augment_step_by_step(net, 0, n - 1)
    assert total == nx.maximum_flow_value(net.to_networkx(), 0, n - 1)


def test_augment_path_logged_at_debug(caplog):
    net = build_network(3, [(0, 1, 4), (1, 2, 3)])
    with caplog.at_level(logging.DEBUG, logger="flow_algorithms.edmonds_karp"):
        augment(net, find_augmenting_path(net, 0, 2), 0, 2)
    assert "augmented 3 along [0, 1, 2]" in caplog.text


def test_augment_path_not_logged_above_debug(caplog):
    net = build_network(3, [(0, 1, 4), (1, 2, 3)])
    with caplog.at_level(logging.INFO, logger="flow_algorithms.edmonds_karp"):
        augment(net, find_augmenting_path(net, 0, 2), 0, 2)
    assert "augmented" not in caplog.text
