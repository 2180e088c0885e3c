"""Tests for the covering cycle and route graph."""

import numpy as np
import pytest

from shortcut_snake.route import RouteGraph, UnsupportedBoardError, build_cycle

EXPECTED_6X6 = np.array([
    [0, 35, 34, 33, 32, 31],
    [1, 10, 11, 20, 21, 30],
    [2, 9, 12, 19, 22, 29],
    [3, 8, 13, 18, 23, 28],
    [4, 7, 14, 17, 24, 27],
    [5, 6, 15, 16, 25, 26],
])


class TestBuildCycle:
    def test_six_by_six_layout(self):
        assert np.array_equal(build_cycle(6), EXPECTED_6X6)

    @pytest.mark.parametrize("size", [4, 6, 8, 10, 12])
    def test_sequence_is_permutation(self, size):
        route = build_cycle(size)
        assert sorted(route.ravel().tolist()) == list(range(size * size))

    @pytest.mark.parametrize("size", [4, 6, 8, 10, 12])
    def test_consecutive_cells_are_adjacent(self, size):
        graph = RouteGraph(size)
        for seq in range(graph.total):
            r1, c1 = graph.cell_of(seq)
            r2, c2 = graph.cell_of((seq + 1) % graph.total)
            assert abs(r1 - r2) + abs(c1 - c2) == 1

    @pytest.mark.parametrize("size", [3, 5, 7, 9, 1, 0])
    def test_odd_or_tiny_sizes_rejected(self, size):
        with pytest.raises(UnsupportedBoardError, match="even board size"):
            build_cycle(size)

    def test_unsupported_board_is_value_error(self):
        assert issubclass(UnsupportedBoardError, ValueError)


class TestRouteGraph:
    def test_lookups_are_inverse(self):
        graph = RouteGraph(6)
        for seq in range(graph.total):
            assert graph.sequence_of(graph.cell_of(seq)) == seq
            assert graph.node_at(graph.cell_of(seq)).sequence == seq

    @pytest.mark.parametrize("size", [4, 6, 8, 10])
    def test_every_node_reaches_its_successor(self, size):
        graph = RouteGraph(size)
        for node in graph.nodes:
            successor = graph.successor(node)
            assert node.edges, f"node {node.sequence} has no edges"
            assert node.edges[-1] is successor

    @pytest.mark.parametrize("size", [4, 6, 8, 10])
    def test_edges_move_forward_except_wraparound(self, size):
        graph = RouteGraph(size)
        last = graph.total - 1
        for node in graph.nodes:
            for target in node.edges:
                if node.sequence == last:
                    assert target.sequence == 0
                else:
                    assert target.sequence > node.sequence

    @pytest.mark.parametrize("size", [4, 6, 8, 10])
    def test_edges_sorted_longest_hop_first(self, size):
        graph = RouteGraph(size)
        for node in graph.nodes:
            hops = [node.hop(t, graph.total) for t in node.edges]
            assert hops == sorted(hops, reverse=True)

    def test_shortcut_edges_from_middle(self):
        graph = RouteGraph(6)
        node = graph.node_at((2, 2))
        assert node.sequence == 12
        assert [t.sequence for t in node.edges] == [19, 13]

    def test_start_and_wraparound_nodes(self):
        graph = RouteGraph(6)
        assert [t.sequence for t in graph.nodes[0].edges] == [1]
        assert [t.sequence for t in graph.nodes[35].edges] == [0]
        assert graph.nodes[35].hop(graph.nodes[0], graph.total) == 1

    def test_forward_relation(self):
        graph = RouteGraph(6)
        first, last = graph.nodes[0], graph.nodes[35]
        assert last.is_forward(first, graph.total)
        assert not first.is_forward(last, graph.total)
        assert graph.nodes[3].is_forward(graph.nodes[8], graph.total)
        assert not graph.nodes[8].is_forward(graph.nodes[3], graph.total)

    def test_odd_graph_rejected(self):
        with pytest.raises(UnsupportedBoardError):
            RouteGraph(7)
