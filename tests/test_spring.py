"""
Tests for spring embedding
==========================

Tests the layout loop, the default and simple presets, determinism,
boundary containment and degenerate graphs.
"""

import math

import pytest

import networkx as nx

from graphspring.config import SurfaceConfig, LayoutConfigError
from graphspring.core.graph import (
    UndirectedGraph, DirectedGraph, from_networkx, vertices, edges, is_neighbor,
)
from graphspring.layout.coordinates import VertexCoordinate
from graphspring.layout.forces import ForceRule, NeighborAttraction, NonNeighborRepulsion
from graphspring.layout.spring import (
    LayoutContext, SpringEmbedder, netto_force, spring_embedding,
    default_spring_embedding, simple_spring_embedding,
)


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def grid() -> UndirectedGraph:
    edges = [
        (1, 2), (2, 3), (4, 5), (5, 6), (7, 8), (8, 9),
        (1, 4), (4, 7), (2, 5), (5, 8), (3, 6), (6, 9),
    ]
    return UndirectedGraph(range(1, 10), edges)


@pytest.fixture
def star() -> UndirectedGraph:
    """Two hubs, 9 and 10, with four leaves each."""
    edges = [(1, 9), (2, 9), (3, 9), (4, 9), (5, 10), (6, 10), (7, 10), (8, 10), (9, 10)]
    return UndirectedGraph.from_edges(edges)


@pytest.fixture
def surface() -> SurfaceConfig:
    return SurfaceConfig()


def _all_coordinates(history):
    for coords in history:
        yield from coords


# =============================================================================
# Scenarios
# =============================================================================

class TestGridScenario:

    def test_default_embedding_of_grid(self, grid):
        final, history = default_spring_embedding(grid, iterations=100, seed=42)

        assert len(final) == 9
        assert [c.vertex for c in final] == list(range(1, 10))
        assert all(c.dimensions == 2 for c in final)
        assert len(history) == 100
        assert history[-1] == final

    def test_simple_embedding_of_grid(self, grid):
        final, history = simple_spring_embedding(grid, iterations=100, seed=42)

        assert len(final) == 9
        assert all(c.dimensions == 2 for c in final)
        assert len(history) == 100

    def test_dimensionality_never_changes(self, grid):
        surface = SurfaceConfig({'limits': [10.0, 10.0, 10.0]})
        final, history = simple_spring_embedding(grid, iterations=10, seed=1, surface=surface)
        assert all(c.dimensions == 3 for c in _all_coordinates(history))


class TestSingleVertex:

    def test_vertex_at_the_centre_does_not_move(self, surface):
        g = UndirectedGraph([1])
        start = [VertexCoordinate(1, surface.center())]

        for embed in (default_spring_embedding, simple_spring_embedding):
            final, history = embed(g, iterations=25, initial=start)
            assert final == start
            assert len(history) == 25

    def test_lonely_vertex_keeps_its_random_position(self):
        g = UndirectedGraph([1])
        start, _ = simple_spring_embedding(g, iterations=0, seed=7)
        final, history = simple_spring_embedding(g, iterations=10, initial=start)
        assert final == start
        assert len(history) == 10

    @pytest.mark.parametrize("embed", [default_spring_embedding, simple_spring_embedding])
    def test_edgeless_graph_keeps_its_random_coordinates(self, embed):
        g = UndirectedGraph([1, 2, 3])
        start, _ = embed(g, iterations=0, seed=3)
        final, history = embed(g, iterations=20, seed=3)
        assert final == start
        assert all(coords == start for coords in history)

    def test_history_entries_are_independent_lists(self):
        g = UndirectedGraph([1, 2])
        final, history = simple_spring_embedding(g, iterations=3, seed=3)
        expected = list(final)

        history[0].append(VertexCoordinate(99, [0.0, 0.0]))
        assert final == expected
        assert history[1] == expected
        assert len({id(coords) for coords in history} | {id(final)}) == 4


# =============================================================================
# Engine properties
# =============================================================================

class TestDeterminism:

    @pytest.mark.parametrize("embed", [default_spring_embedding, simple_spring_embedding])
    def test_same_seed_same_layout(self, grid, embed):
        final_a, history_a = embed(grid, iterations=30, seed=123)
        final_b, history_b = embed(grid, iterations=30, seed=123)
        assert final_a == final_b
        assert history_a == history_b

    def test_different_seeds_differ(self, grid):
        final_a, _ = simple_spring_embedding(grid, iterations=5, seed=1)
        final_b, _ = simple_spring_embedding(grid, iterations=5, seed=2)
        assert final_a != final_b


class TestBoundaryContainment:

    @pytest.mark.parametrize("embed", [default_spring_embedding, simple_spring_embedding])
    def test_coordinates_stay_on_the_surface(self, star, surface, embed):
        _, history = embed(star, iterations=50, seed=11, surface=surface)
        eps = 1e-9
        for c in _all_coordinates(history):
            for dimension, position in enumerate(c.positions):
                assert -eps <= position <= surface.limit(dimension) + eps

    def test_boundary_correction_is_restoring(self, surface):
        assert netto_force(surface, 0, 5.0, 0.0, 0.0) == pytest.approx(0.0)
        assert netto_force(surface, 0, 1.0, 0.0, 0.0) > 0
        assert netto_force(surface, 0, 9.0, 0.0, 0.0) < 0
        assert netto_force(surface, 0, 5.0, 0.5, 0.2) == pytest.approx(0.3)


class TestSynchronousUpdate:

    def test_vertex_order_does_not_matter(self, grid):
        embedder = SpringEmbedder([NeighborAttraction()], [NonNeighborRepulsion()], seed=5)
        start, _ = embedder.embed(grid, iterations=0)

        context = LayoutContext(grid, vertices, is_neighbor, edges, embedder.surface)
        forward = {c.vertex: c.positions for c in embedder.next_embedding(context, start)}
        backward = {c.vertex: c.positions
                    for c in embedder.next_embedding(context, list(reversed(start)))}

        for v, positions in forward.items():
            assert backward[v] == pytest.approx(positions)

    def test_coincident_vertices_stay_finite(self):
        g = UndirectedGraph([1, 2, 3], [(1, 2)])
        start = [VertexCoordinate(v, [4.0, 4.0]) for v in (1, 2, 3)]
        final, _ = simple_spring_embedding(g, iterations=10, initial=start)
        assert all(math.isfinite(p) for c in final for p in c.positions)


# =============================================================================
# Run configuration
# =============================================================================

class TestRunConfiguration:

    def test_zero_iterations_returns_initial_placement(self, grid, surface):
        final, history = simple_spring_embedding(grid, iterations=0, seed=9)
        assert history == []
        for c in final:
            for dimension, position in enumerate(c.positions):
                assert surface.border(dimension) <= position
                assert position <= surface.limit(dimension) - surface.border(dimension)

    @pytest.mark.parametrize("iterations", [-1, 1.5, "10", True])
    def test_invalid_iterations(self, grid, iterations):
        with pytest.raises(LayoutConfigError):
            simple_spring_embedding(grid, iterations=iterations)

    def test_initial_coordinates_must_cover_all_vertices(self, grid):
        with pytest.raises(LayoutConfigError):
            simple_spring_embedding(grid, iterations=1, initial=[VertexCoordinate(1, [1, 1])])

    def test_initial_coordinates_must_match_surface(self):
        g = UndirectedGraph([1])
        with pytest.raises(LayoutConfigError):
            simple_spring_embedding(g, iterations=1, initial=[VertexCoordinate(1, [1, 1, 1])])

    def test_step_size_scales_movement(self):
        g = UndirectedGraph([1, 2], [(1, 2)])
        start = [VertexCoordinate(1, [2.0, 8.0]), VertexCoordinate(2, [6.0, 3.0])]
        full, _ = simple_spring_embedding(g, iterations=1, initial=start, clamp=False)
        half, _ = simple_spring_embedding(g, iterations=1, initial=start, clamp=False,
                                          step_size=0.5)

        for c_start, c_full, c_half in zip(start, full, half):
            for dimension in range(2):
                moved = c_full[dimension] - c_start[dimension]
                assert c_half[dimension] - c_start[dimension] == pytest.approx(0.5 * moved)

    def test_context_is_cleared_after_run(self, grid):
        seen = []

        class Recorder(ForceRule):
            def prepare(self, context):
                context.ensure_degrees()
                seen.append(context)

            def force(self, context, dimension, coord_v, coord_w):
                return 0.0

        spring_embedding(grid, attractors=[Recorder()], iterations=3, seed=0)
        assert seen[0].degrees is None
        assert seen[0].iteration == 0


# =============================================================================
# Pluggable accessors
# =============================================================================

class TestAccessors:

    def test_plain_adjacency_dict(self):
        adjacency = {1: [2], 2: [1, 3], 3: [2]}

        final, history = default_spring_embedding(
            adjacency,
            vertex_lister=lambda g: sorted(g),
            edge_lister=lambda g: [(v, w) for v in g for w in g[v] if v < w],
            neighbor_test=lambda v, g, w: w in g[v],
            iterations=10,
            seed=4,
        )
        assert [c.vertex for c in final] == [1, 2, 3]
        assert len(history) == 10

    def test_simple_preset_needs_no_edge_lister(self):
        adjacency = {1: [2], 2: [1, 3], 3: [2]}

        final, history = simple_spring_embedding(
            adjacency,
            vertex_lister=lambda g: sorted(g),
            iterations=5,
            neighbor_test=lambda v, g, w: w in g[v],
            seed=1,
        )
        assert [c.vertex for c in final] == [1, 2, 3]
        assert len(history) == 5

    def test_custom_rules_on_plain_adjacency_dict(self):
        adjacency = {1: [2], 2: [1, 3], 3: [2], 4: []}

        final, history = spring_embedding(
            adjacency,
            lambda g: sorted(g),
            [NeighborAttraction()],
            [NonNeighborRepulsion()],
            5,
            neighbor_test=lambda v, g, w: w in g[v],
            seed=1,
        )
        assert [c.vertex for c in final] == [1, 2, 3, 4]
        assert history[-1] == final

    def test_edgeless_plain_adjacency_dict_keeps_placement(self):
        adjacency = {"a": [], "b": []}
        lister = lambda g: sorted(g)
        test = lambda v, g, w: w in g[v]

        start, _ = simple_spring_embedding(adjacency, lister, 0, test, seed=2)
        final, _ = simple_spring_embedding(adjacency, lister, 3, test, seed=2)
        assert final == start

    def test_directed_graph_from_networkx(self):
        g = from_networkx(nx.cycle_graph(5, create_using=nx.DiGraph))
        assert isinstance(g, DirectedGraph)
        final, _ = default_spring_embedding(g, iterations=10, seed=8)
        assert len(final) == 5
