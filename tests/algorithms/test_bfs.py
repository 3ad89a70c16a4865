import math

import numpy as np
import pytest

from ekflow.algorithms.bfs import (
    TraversalState,
    breadth_first_search,
    find_augmenting_path,
)
from ekflow.types import AugmentingPath, NodeColor


class TestBreadthFirstSearch:
    def test_diamond_state(self, diamond):
        found, state = breadth_first_search(diamond, 0, 3, 4)

        assert found
        assert state.parent == [None, 0, 0, 1]
        assert state.bottleneck == [math.inf, 6, 5, 4]
        assert state.depth == [0, 1, 1, 2]
        assert state.color == [NodeColor.EXAMINED] * 4
        assert not state.queue

    def test_sink_unreachable(self, disconnected_sink):
        found, state = breadth_first_search(disconnected_sink, 0, 2, 3)

        assert not found
        assert state.color == [
            NodeColor.EXAMINED,
            NodeColor.EXAMINED,
            NodeColor.UNDISCOVERED,
        ]
        assert state.parent[2] is None
        assert state.bottleneck[2] == math.inf
        assert state.depth[2] == -1

    def test_stops_when_sink_is_dequeued(self, early_sink):
        found, state = breadth_first_search(early_sink, 0, 4, 5)

        assert found
        assert state.color[4] == NodeColor.EXAMINED
        # Node 2 was discovered from node 1 but never examined
        assert state.color[2] == NodeColor.DISCOVERED
        assert state.color[3] == NodeColor.UNDISCOVERED
        assert list(state.queue) == [2]

    def test_residual_not_modified(self, diamond):
        before = diamond.copy()
        breadth_first_search(diamond, 0, 3, 4)
        np.testing.assert_array_equal(diamond, before)

    def test_lower_index_arcs_are_not_followed(self, backward_arc):
        found, state = breadth_first_search(backward_arc, 0, 3, 4)

        assert not found
        assert state.color[1] == NodeColor.UNDISCOVERED

    def test_self_loop_ignored(self):
        residual = np.array([[4.0, 1.0], [0.0, 0.0]])
        found, state = breadth_first_search(residual, 0, 1, 2)

        assert found
        assert state.parent == [None, 0]
        assert state.bottleneck[1] == 1.0

    def test_state_is_fresh_per_call(self, diamond):
        _, first = breadth_first_search(diamond, 0, 3, 4)
        _, second = breadth_first_search(diamond, 0, 3, 4)
        assert first is not second
        assert first == second


class TestTraversalState:
    def test_fresh(self):
        state = TraversalState.fresh(3)
        assert state.color == [NodeColor.UNDISCOVERED] * 3
        assert state.parent == [None, None, None]
        assert state.bottleneck == [math.inf] * 3
        assert state.depth == [-1, -1, -1]

    def test_discover_and_trace_back(self):
        state = TraversalState.fresh(4)
        state.discover(0, None, math.inf)
        state.discover(2, 0, 7.0)
        state.discover(3, 2, 9.0)

        assert state.bottleneck[3] == 7.0
        assert state.depth[3] == 2
        assert list(state.queue) == [0, 2, 3]
        assert state.trace_back(0, 3) == [0, 2, 3]


class TestFindAugmentingPath:
    def test_fewest_arcs_lowest_index_first(self, diamond):
        # Both 0->1->3 and 0->2->3 have two arcs; node 1 is discovered first.
        path = find_augmenting_path(diamond, 0, 3, 4)

        assert path == AugmentingPath(nodes=(0, 1, 3), bottleneck=4.0)
        assert path.arcs == ((0, 1), (1, 3))
        assert len(path) == 2

    def test_prefers_short_path_over_long(self, early_sink):
        path = find_augmenting_path(early_sink, 0, 4, 5)
        assert path.nodes == (0, 4)
        assert path.bottleneck == 2.0

    def test_no_path(self, disconnected_sink):
        assert find_augmenting_path(disconnected_sink, 0, 2, 3) is None

    def test_source_equals_sink(self, diamond):
        assert find_augmenting_path(diamond, 2, 2, 4) is None

    def test_bottleneck_is_minimum_along_path(self, bottleneck_chain):
        path = find_augmenting_path(bottleneck_chain, 0, 3, 4)
        assert path.nodes == (0, 1, 2, 3)
        assert path.bottleneck == 2.0

    def test_fractional_bottleneck_exact(self, fractional):
        path = find_augmenting_path(fractional, 0, 2, 3)
        assert path.bottleneck == 3.141

    @pytest.mark.parametrize("threshold,expected", [(0.0, (0, 1, 3)), (4.5, None)])
    def test_residual_threshold(self, diamond, threshold, expected):
        path = find_augmenting_path(diamond, 0, 3, 4, residual_threshold=threshold)
        assert (path.nodes if path is not None else None) == expected

    def test_zero_residual_blocks_arc(self, diamond):
        residual = diamond.copy()
        residual[1, 3] = 0.0
        path = find_augmenting_path(residual, 0, 3, 4)
        assert path.nodes == (0, 2, 3)
        assert path.bottleneck == 3.0
