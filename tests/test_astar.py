"""Tests for A* search algorithm."""

import heapq
import itertools
import math
import random
from collections import deque
from concurrent.futures import ThreadPoolExecutor

import pytest

from astar_engine.core.data_models import BoundedPathResult, Pather, PathResult
from astar_engine.search.astar import (
    AStarSearcher, SearchConfig, create_astar_searcher, find_path, find_path_bounded
)
from astar_engine.benchmark.harness import LARGE_WORLD
from astar_engine.world.grid_world import TileKind, decode, render
from astar_engine.world.graph import WeightedGraph


STRAIGHT_LINE = """
.....~......
.....MM.....
.F........T.
....MMM.....
............
"""

AROUND_MOUNTAIN = """
.....~......
.....MM.....
.F..MMMM..T.
....MMM.....
............
"""

BLOCKED = """
............
.........XXX
.F.......XTX
.........XXX
............
"""

MAZE = """
FX.X........
.X...XXXX.X.
.X.X.X....X.
...X.X.XXXXX
.XX..X.....T
"""

MOUNTAIN_CLIMBER = """
..F..M......
.....MM.....
....MMMM..T.
....MMM.....
............
"""

RIVER_SWIMMER = """
.....~......
.....~......
.F...X...T..
.....M......
.....M......
"""


def dijkstra_cost(start, goal):
    """Reference shortest-path cost, or None when unreachable."""
    dist = {id(start): 0.0}
    counter = itertools.count()
    heap = [(0.0, next(counter), start)]
    done = set()
    while heap:
        d, _, node = heapq.heappop(heap)
        if id(node) in done:
            continue
        if node is goal:
            return d
        done.add(id(node))
        for neighbor in node.path_neighbors():
            nd = d + node.path_neighbor_cost(neighbor)
            if nd < dist.get(id(neighbor), math.inf):
                dist[id(neighbor)] = nd
                heapq.heappush(heap, (nd, next(counter), neighbor))
    return None


def reachable(start, goal):
    seen = {id(start)}
    queue = deque([start])
    while queue:
        node = queue.popleft()
        for neighbor in node.path_neighbors():
            if neighbor is goal:
                return True
            if id(neighbor) not in seen:
                seen.add(id(neighbor))
                queue.append(neighbor)
    return False


def edge_cost_sum(path):
    """Sum of exact costs along a start-to-goal ordered path."""
    return sum(a.path_neighbor_cost(b) for a, b in zip(path, path[1:]))


def random_world(rng, width=12, height=8):
    chars = rng.choices(['.', '~', 'M', 'X'], weights=[60, 10, 10, 20], k=width * height)
    cells = rng.sample(range(width * height), 2)
    chars[cells[0]] = 'F'
    chars[cells[1]] = 'T'
    return '\n'.join(''.join(chars[y * width:(y + 1) * width]) for y in range(height))


class TestGridScenarios:
    """Scenario tests over text-encoded worlds."""

    @pytest.fixture
    def searcher(self):
        return AStarSearcher()

    def solve(self, searcher, world_text):
        tiles, start, goal = decode(world_text)
        result = searcher.find_path(start, goal)
        if result.found:
            print(render(tiles, result.path))
        return result, start, goal

    @pytest.mark.parametrize("world_text,expected_cost", [
        (STRAIGHT_LINE, 9),
        (AROUND_MOUNTAIN, 13),
        (MAZE, 27),
        (MOUNTAIN_CLIMBER, 12),
        (RIVER_SWIMMER, 11),
    ])
    def test_expected_costs(self, searcher, world_text, expected_cost):
        """Test known optimal costs on reference worlds."""
        result, start, goal = self.solve(searcher, world_text)

        assert result.found is True
        assert result.cost == expected_cost

    def test_straight_line(self, searcher):
        """Test that an open row yields a straight path."""
        result, start, goal = self.solve(searcher, STRAIGHT_LINE)

        assert result.cost == 9
        assert len(result.path) == 10
        assert all(tile.y == 2 for tile in result.path)

    def test_path_around_mountain(self, searcher):
        """Test that the path detours around the mountain."""
        result, start, goal = self.solve(searcher, AROUND_MOUNTAIN)

        assert result.cost == 13
        assert all(tile.kind is not TileKind.MOUNTAIN for tile in result.path)
        assert any(tile.y != 2 for tile in result.path)

    def test_blocked(self, searcher):
        """Test that an enclosed goal yields no path."""
        result, start, goal = self.solve(searcher, BLOCKED)

        assert result.found is False
        assert result.path == []
        assert result.cost == math.inf

    def test_river_preferred_over_mountain(self, searcher):
        """Test that a river crossing (2) beats a mountain crossing (3)."""
        result, start, goal = self.solve(searcher, RIVER_SWIMMER)

        kinds = {tile.kind for tile in result.path}
        assert TileKind.RIVER in kinds
        assert TileKind.MOUNTAIN not in kinds

    def test_path_orientation(self, searcher):
        """Test that paths run goal first and start last."""
        result, start, goal = self.solve(searcher, MAZE)

        assert result.path[0] is goal
        assert result.path[-1] is start
        assert result.start_to_goal()[0] is start

    @pytest.mark.parametrize("world_text", [
        STRAIGHT_LINE, AROUND_MOUNTAIN, MAZE, MOUNTAIN_CLIMBER, RIVER_SWIMMER, LARGE_WORLD
    ])
    def test_cost_matches_path(self, searcher, world_text):
        """Test that the reported cost is the sum of edge costs on the path."""
        result, start, goal = self.solve(searcher, world_text)

        assert result.cost == edge_cost_sum(result.start_to_goal())

    def test_consecutive_tiles_adjacent(self, searcher):
        """Test that every step of the path is a neighbor step."""
        result, start, goal = self.solve(searcher, LARGE_WORLD)
        path = result.start_to_goal()

        for a, b in zip(path, path[1:]):
            assert any(n is b for n in a.path_neighbors())


class TestSearchProperties:
    """Property tests against reference algorithms."""

    @pytest.mark.parametrize("seed", range(25))
    def test_optimal_on_random_worlds(self, seed):
        """Test cost optimality and soundness of 'no path' on random worlds."""
        rng = random.Random(seed)
        _, start, goal = decode(random_world(rng))

        result = find_path(start, goal)
        expected = dijkstra_cost(start, goal)

        assert result.found == reachable(start, goal)
        if expected is None:
            assert result.found is False
        else:
            assert result.found is True
            assert result.cost == pytest.approx(expected)

    def test_deterministic(self):
        """Test that repeated calls agree."""
        _, start, goal = decode(LARGE_WORLD)
        searcher = AStarSearcher()

        results = [searcher.find_path(start, goal) for _ in range(5)]

        assert len({r.cost for r in results}) == 1
        assert len({len(r.path) for r in results}) == 1

    def test_large_world_matches_reference(self):
        """Test the large benchmark world against Dijkstra."""
        _, start, goal = decode(LARGE_WORLD)

        result = find_path(start, goal)

        assert result.found is True
        assert result.cost == pytest.approx(dijkstra_cost(start, goal))


class TestBoundedSearch:
    """Test the bounded search mode."""

    @pytest.fixture
    def straight(self):
        _, start, goal = decode(STRAIGHT_LINE)
        return start, goal

    def test_generous_limits_match_unbounded(self, straight):
        """Test that large limits reproduce the unbounded path."""
        start, goal = straight
        searcher = AStarSearcher()

        full = searcher.find_path(start, goal)
        bounded = searcher.find_path_bounded(start, goal, try_limit=10000, len_max=1000)

        assert isinstance(bounded, BoundedPathResult)
        assert bounded.found is True
        assert len(bounded.path) == len(full.path)
        assert all(a is b for a, b in zip(bounded.path, full.path))

    @pytest.mark.parametrize("len_max", [1, 3, 9])
    def test_len_max_truncates_from_goal_end(self, straight, len_max):
        """Test that truncation keeps the nodes nearest the goal."""
        start, goal = straight
        full = find_path(start, goal)
        assert len(full.path) > len_max

        path, attempts = find_path_bounded(start, goal, try_limit=10000, len_max=len_max)

        assert len(path) == len_max
        assert path[0] is goal
        assert all(a is b for a, b in zip(path, full.path))
        assert all(tile is not start for tile in path)

    def test_len_max_does_not_change_attempts(self, straight):
        """Test that attempts report the true examination count."""
        start, goal = straight

        short = find_path_bounded(start, goal, try_limit=10000, len_max=1)
        long = find_path_bounded(start, goal, try_limit=10000, len_max=1000)

        assert short.attempts == long.attempts
        assert short.attempts > len(long.path)

    def test_try_limit_zero(self, straight):
        """Test that a zero budget stops at the first neighbor of start."""
        start, goal = straight

        path, attempts = find_path_bounded(start, goal, try_limit=0, len_max=100)

        assert path == []
        assert attempts == 1
        assert attempts <= len(start.path_neighbors())

    def test_try_limit_exceeded(self):
        """Test that an exhausted budget returns an empty path."""
        _, start, goal = decode(LARGE_WORLD)

        result = find_path_bounded(start, goal, try_limit=10, len_max=1000)

        assert result.path == []
        assert result.found is False
        assert result.attempts == 11

    def test_unreachable_goal_within_budget(self):
        """Test that a disconnected goal exhausts the frontier, not the budget."""
        _, start, goal = decode(BLOCKED)

        result = find_path_bounded(start, goal, try_limit=10000, len_max=1000)

        assert result.path == []
        assert 0 < result.attempts < 10000

    def test_defaults_from_config(self, straight):
        """Test that None limits fall back to the searcher configuration."""
        start, goal = straight
        searcher = create_astar_searcher(try_limit=0, len_max=2)

        result = searcher.find_path_bounded(start, goal)

        assert result.path == []
        assert result.attempts == 1

        searcher = create_astar_searcher(try_limit=10000, len_max=2)
        result = searcher.find_path_bounded(start, goal)
        assert len(result.path) == 2


class TestEdgeCases:
    """Edge cases on explicit graphs."""

    def test_start_equals_goal_with_self_loop(self):
        """Test that a zero-cost self-loop yields a single-node path."""
        graph = WeightedGraph()
        graph.add_edge('a', 'a', 0.0)
        graph.add_edge('a', 'b', 1.0)
        a = graph.node('a')

        path, cost, found = find_path(a, a)

        assert found is True
        assert cost == 0.0
        assert path == [a]

    def test_start_equals_goal_without_self_loop(self):
        """Test that start == goal without a self-loop reports no path."""
        graph = WeightedGraph()
        graph.add_edge('a', 'b', 1.0, bidirectional=True)
        graph.add_edge('b', 'c', 1.0, bidirectional=True)
        a = graph.node('a')

        result = find_path(a, a)

        assert result.found is False
        assert result.path == []

    def test_start_equals_goal_bounded(self):
        """Test the bounded mode on a cycle back to the start."""
        graph = WeightedGraph()
        graph.add_edge('a', 'b', 1.0, bidirectional=True)
        a = graph.node('a')

        result = find_path_bounded(a, a, try_limit=100, len_max=10)

        assert result.path == []
        assert result.attempts == 2

    def test_isolated_start(self):
        """Test a start node with no neighbors."""
        graph = WeightedGraph()
        graph.add_node('lonely')
        graph.add_node('goal')

        result = find_path(graph.node('lonely'), graph.node('goal'))
        bounded = find_path_bounded(graph.node('lonely'), graph.node('goal'), 0, 10)

        assert result.found is False
        assert bounded.path == []
        assert bounded.attempts == 0

    def test_direct_neighbor(self):
        """Test a goal one edge away."""
        graph = WeightedGraph()
        graph.add_edge('s', 'g', 2.5)

        result = find_path(graph.node('s'), graph.node('g'))

        assert result == PathResult([graph.node('g'), graph.node('s')], 2.5, True)

    def test_goal_matched_by_identity(self):
        """Test that a goal-equal node from another graph is not the goal."""
        first = WeightedGraph()
        first.add_edge('s', 'g', 1.0)
        second = WeightedGraph()
        second.add_node('g')

        result = find_path(first.node('s'), second.node('g'))

        assert result.found is False

    def test_goal_short_circuit_returns_first_contact(self):
        """Test that the search returns when the goal is first seen as a neighbor.

        The goal is reached from A before the cheaper route through B and C
        has been expanded, so the first route (cost 11) is returned even
        though a route of cost 3 exists and the heuristic is consistent.
        """
        estimates = {'B': 0.5}
        graph = WeightedGraph(heuristic=lambda a, b: estimates.get(a, 0.0))
        graph.add_edge('S', 'A', 1.0)
        graph.add_edge('S', 'B', 1.0)
        graph.add_edge('A', 'G', 10.0)
        graph.add_edge('B', 'C', 1.0)
        graph.add_edge('C', 'G', 1.0)
        s, g = graph.node('S'), graph.node('G')

        result = find_path(s, g)

        assert result.found is True
        assert result.cost == 11.0
        assert [n.name for n in result.path] == ['G', 'A', 'S']
        assert dijkstra_cost(s, g) == 3.0

    def test_cheaper_path_reopens_closed_node(self):
        """Test eviction and reopening when an inadmissible estimate misleads."""
        estimates = {'B': 4.5}
        graph = WeightedGraph(heuristic=lambda a, b: estimates.get(a, 0.0))
        graph.add_edge('S', 'A', 5.0)
        graph.add_edge('S', 'B', 1.0)
        graph.add_edge('B', 'A', 1.0)
        graph.add_edge('A', 'C', 1.0)
        graph.add_edge('C', 'G', 1.0)
        searcher = AStarSearcher()

        result = searcher.find_path(graph.node('S'), graph.node('G'))
        stats = searcher.get_search_stats()

        assert result.cost == 4.0
        assert [n.name for n in result.path] == ['G', 'C', 'A', 'B', 'S']
        assert stats['nodes_reopened'] == 1
        assert stats['frontier_removals'] == 1
        assert stats['nodes_expanded'] == 5

    def test_nodes_satisfy_protocol(self):
        """Test that the bundled node types implement Pather."""
        _, start, _ = decode(STRAIGHT_LINE)
        graph = WeightedGraph()
        graph.add_node('x')

        assert isinstance(start, Pather)
        assert isinstance(graph.node('x'), Pather)


class TestSearcherConfiguration:
    """Test configuration, statistics and factory."""

    def test_default_config(self):
        """Test default configuration values."""
        config = SearchConfig()

        assert config.try_limit == 10000
        assert config.len_max == 1000
        assert config.statistics_tracking is True

    def test_factory(self):
        """Test creating a searcher with custom parameters."""
        searcher = create_astar_searcher(try_limit=50, len_max=5, statistics_tracking=False)

        assert searcher.config.try_limit == 50
        assert searcher.config.len_max == 5
        assert searcher.config.statistics_tracking is False

    def test_search_statistics(self):
        """Test statistics collection."""
        _, start, goal = decode(STRAIGHT_LINE)
        searcher = AStarSearcher()

        searcher.find_path(start, goal)
        stats = searcher.get_search_stats()

        assert stats['termination_reason'] == 'goal_reached'
        assert stats['nodes_expanded'] > 0
        assert stats['neighbors_examined'] >= stats['nodes_expanded']
        assert stats['max_frontier_size'] > 0
        assert stats['computation_time'] >= 0
        assert stats['config']['try_limit'] == 10000

    def test_termination_reasons(self):
        """Test termination reasons for each outcome."""
        searcher = AStarSearcher()

        _, start, goal = decode(BLOCKED)
        searcher.find_path(start, goal)
        assert searcher.statistics.termination_reason == 'frontier_exhausted'

        _, start, goal = decode(LARGE_WORLD)
        searcher.find_path_bounded(start, goal, try_limit=3, len_max=10)
        assert searcher.statistics.termination_reason == 'try_limit_exceeded'
        assert searcher.statistics.neighbors_examined == 4

    def test_statistics_tracking_disabled(self):
        """Test that disabled tracking leaves statistics untouched."""
        _, start, goal = decode(STRAIGHT_LINE)
        searcher = create_astar_searcher(statistics_tracking=False)

        searcher.find_path(start, goal)

        assert searcher.statistics.nodes_expanded == 0
        assert searcher.statistics.termination_reason == 'unknown'


class TestConcurrentSearches:
    """Searches on separate threads share no state."""

    def test_shared_world_and_searcher(self):
        """Test concurrent searches over the same graph and searcher."""
        _, start, goal = decode(LARGE_WORLD)
        searcher = AStarSearcher()
        expected = dijkstra_cost(start, goal)

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(lambda _: searcher.find_path(start, goal), range(32)))

        assert all(r.found for r in results)
        assert {r.cost for r in results} == {expected}


if __name__ == "__main__":
    pytest.main([__file__])
