"""
Spring embedding.

Computes a layout of a graph in as many dimensions as the drawing
surface has, by simulating forces between its vertices:

    For every vertex v:
      For every dimension d:
        For every vertex w != v:
          Sum the attractor rules and sum the repulsor rules for (v, w).
        Average both sums over all w.
        Add the boundary correction of dimension d.
        Move v by the netto force.

All vertices move at once: the coordinates of iteration i + 1 are
computed from the coordinates of iteration i only. The run stops after
the requested number of iterations; there is no convergence test.
A graph without a single pair of adjacent vertices keeps its initial
placement for the whole run.

The engine only reaches the graph through three accessors supplied by
the caller: a vertex lister ``vertex_lister(g)``, an edge lister
``edge_lister(g)`` and a neighbor test ``neighbor_test(v, g, w)``.
"""

import time
import logging
from typing import Any, Callable, Iterable, List, Optional, Sequence, Tuple

import numpy as np

from ..config import SurfaceConfig, LayoutConfigError, LAYOUT_CONFIG
from ..core.graph import vertices, edges, is_neighbor
from ..core.traversal import distances
from .coordinates import VertexCoordinate, random_vertex_coordinates, check_coordinates
from .forces import (ForceRule, NeighborAttraction, NonNeighborRepulsion,
                     DistanceTargetForce, DegreeTargetForce)

logger = logging.getLogger('graphspring.layout')

__all__ = [
    "LayoutContext", "SpringEmbedder", "netto_force",
    "spring_embedding", "default_spring_embedding", "simple_spring_embedding",
]

VertexLister = Callable[[Any], Iterable]
EdgeLister = Callable[[Any], Iterable[Tuple]]
NeighborTest = Callable[[Any, Any, Any], bool]

Coordinates = List[VertexCoordinate]


class LayoutContext:
    """
    State of a single layout run.

    Holds the graph and its accessors, the surface, the iteration counter
    and the graph-wide values force rules need (degrees, graph distances
    and their maxima). A context lives for one run and is cleared when
    the run ends.
    """

    def __init__(self, graph, vertex_lister: VertexLister, neighbor_test: NeighborTest,
                 edge_lister: Optional[EdgeLister], surface: SurfaceConfig):
        self.graph = graph
        self.vertex_lister = vertex_lister
        self.neighbor_test = neighbor_test
        self.edge_lister = edge_lister
        self.surface = surface
        self.vertices = list(vertex_lister(graph))
        self.iteration = 0

        self.distances = None
        self.maximum_distance = None
        self.degrees = None
        self.maximum_degree = None

    def adjacent(self, v, w) -> bool:
        return bool(self.neighbor_test(v, self.graph, w))

    def ensure_distances(self):
        """Compute the pairwise graph distances and their maximum, once per run."""
        if self.distances is not None:
            return
        self.distances = distances(self.graph, self.vertex_lister, self.neighbor_test)
        self.maximum_distance = max(self.distances.values(), default=0)
        logger.debug("Maximum graph distance: %s", self.maximum_distance)

    def ensure_degrees(self):
        """Compute the degree of every vertex and the maximum degree, once per run."""
        if self.degrees is not None:
            return
        if self.edge_lister is not None:
            adjacent = {v: set() for v in self.vertices}
            for v, w in self.edge_lister(self.graph):
                if v == w:
                    continue
                if v in adjacent:
                    adjacent[v].add(w)
                if w in adjacent:
                    adjacent[w].add(v)
            self.degrees = {v: len(ns) for v, ns in adjacent.items()}
        else:
            self.degrees = {
                v: sum(1 for w in self.vertices if w != v and self.adjacent(v, w))
                for v in self.vertices
            }
        self.maximum_degree = max(self.degrees.values(), default=0)
        logger.debug("Maximum degree: %s", self.maximum_degree)

    def clear(self):
        self.distances = None
        self.maximum_distance = None
        self.degrees = None
        self.maximum_degree = None
        self.iteration = 0


def netto_force(surface: SurfaceConfig, dimension: int, position: float,
                attraction: float, repulsion: float) -> float:
    """
    Combine the forces on a vertex in one dimension.

    Besides attraction and repulsion, the floor of the dimension pushes
    the vertex up in proportion to how close it is to the floor, and the
    ceiling pushes it down in proportion to how close it is to the
    ceiling. Both cancel out at the middle of the dimension.
    """
    limit = surface.limit(dimension)
    floor_push = (limit - position) / limit
    ceiling_push = position / limit
    return attraction - repulsion + floor_push - ceiling_push


class SpringEmbedder:
    """Force-directed layout with pluggable attractor and repulsor rules."""

    def __init__(self,
                 attractors: Sequence[ForceRule] = (),
                 repulsors: Sequence[ForceRule] = (),
                 vertex_lister: VertexLister = vertices,
                 neighbor_test: NeighborTest = is_neighbor,
                 edge_lister: Optional[EdgeLister] = None,
                 surface: Optional[SurfaceConfig] = None,
                 step_size: float = LAYOUT_CONFIG['step_size'],
                 clamp: bool = LAYOUT_CONFIG['clamp'],
                 seed=LAYOUT_CONFIG['seed']):
        """
        Initialize a spring embedder.

        Parameters
        ----------
        attractors : sequence of ForceRule
            Rules whose values are added to a vertex's position
        repulsors : sequence of ForceRule
            Rules whose values are subtracted from a vertex's position
        vertex_lister : callable
            ``vertex_lister(g)`` returns the vertices to lay out
        neighbor_test : callable
            ``neighbor_test(v, g, w)`` succeeds for adjacent vertices
        edge_lister : callable, optional
            ``edge_lister(g)`` returns the (v, w) connections of the graph.
            Without one, degrees are counted with ``neighbor_test``
        surface : SurfaceConfig, optional
            Drawing surface, defaults to SURFACE_CONFIG
        step_size : float, optional
            Multiplier of the netto force per iteration
        clamp : bool, optional
            Keep every coordinate inside [0, limit]
        seed : int or numpy.random.Generator, optional
            Seed of the random initial placement
        """
        self.attractors = list(attractors)
        self.repulsors = list(repulsors)
        self.vertex_lister = vertex_lister
        self.neighbor_test = neighbor_test
        self.edge_lister = edge_lister
        self.surface = surface if surface is not None else SurfaceConfig()
        self.step_size = step_size
        self.clamp = clamp
        self.seed = seed

    def embed(self, graph, iterations: int = LAYOUT_CONFIG['iterations'],
              initial: Optional[Coordinates] = None) -> Tuple[Coordinates, List[Coordinates]]:
        """
        Run the spring embedding.

        Parameters
        ----------
        graph : object
            Graph understood by the accessors
        iterations : int
            Number of iterations, 0 or more
        initial : list of VertexCoordinate, optional
            Start coordinates; random placement on the surface if omitted

        Returns
        -------
        tuple
            (final coordinates, history) where history holds the
            coordinates after every iteration, so ``len(history) ==
            iterations`` and ``history[-1]`` is the final coordinates
        """
        if isinstance(iterations, bool) or not isinstance(iterations, (int, np.integer)) or iterations < 0:
            raise LayoutConfigError(f"Iterations must be a non-negative integer, got {iterations!r}")

        start_time = time.time()
        context = LayoutContext(graph, self.vertex_lister, self.neighbor_test,
                                self.edge_lister, self.surface)

        if initial is None:
            coords = random_vertex_coordinates(context.vertices, self.surface, self.seed)
        else:
            coords = check_coordinates(initial, context.vertices, self.surface)

        for rule in self.attractors + self.repulsors:
            rule.prepare(context)

        logger.info(f"Spring embedding of {len(coords)} vertices in "
                    f"{self.surface.dimensions} dimensions, {iterations} iterations")

        history = []
        try:
            context.ensure_degrees()
            if not context.maximum_degree:
                # Single vertex or no edges: nothing to lay out
                logger.info("Graph has no adjacent vertices, keeping the initial placement")
                history = [list(coords) for _ in range(iterations)]
            else:
                for iteration in range(1, iterations + 1):
                    context.iteration = iteration
                    coords = self.next_embedding(context, coords)
                    history.append(coords)
        finally:
            context.clear()

        logger.info(f"Spring embedding finished in {time.time() - start_time:.2f}s")
        return coords, history

    def next_embedding(self, context: LayoutContext, coords: Coordinates) -> Coordinates:
        """Compute the coordinates of the next iteration from ``coords``."""
        new_coords = []
        for coord_v in coords:
            new_positions = []
            for dimension, position in enumerate(coord_v.positions):
                attraction = self._inter_vertex(context, self.attractors, coords, dimension, coord_v)
                repulsion = self._inter_vertex(context, self.repulsors, coords, dimension, coord_v)
                force = netto_force(self.surface, dimension, position, attraction, repulsion)
                new_positions.append(self._update_position(dimension, position, force))
            new_coords.append(VertexCoordinate(coord_v.vertex, new_positions))
        return new_coords

    def _inter_vertex(self, context, rules, coords, dimension, coord_v) -> float:
        """Average, over all other vertices, the summed forces of ``rules`` on ``coord_v``."""
        if not rules:
            return 0.0
        forces = [
            sum(rule(context, dimension, coord_v, coord_w) for rule in rules)
            for coord_w in coords
            if coord_w.vertex != coord_v.vertex
        ]
        if not forces:
            return 0.0
        return float(np.mean(forces))

    def _update_position(self, dimension, position, force) -> float:
        new_position = position + self.step_size * force
        if self.clamp:
            new_position = min(max(new_position, 0.0), self.surface.limit(dimension))
        return new_position


def spring_embedding(graph,
                     vertex_lister: VertexLister = vertices,
                     attractors: Sequence[ForceRule] = (),
                     repulsors: Sequence[ForceRule] = (),
                     iterations: int = LAYOUT_CONFIG['iterations'],
                     initial: Optional[Coordinates] = None,
                     **kwargs):
    """
    Lay out a graph with the given force rules.

    Keyword arguments are passed on to :class:`SpringEmbedder`.

    Returns
    -------
    tuple
        (final coordinates, history)
    """
    embedder = SpringEmbedder(attractors, repulsors, vertex_lister=vertex_lister, **kwargs)
    return embedder.embed(graph, iterations, initial=initial)


def default_spring_embedding(graph,
                             vertex_lister: VertexLister = vertices,
                             edge_lister: EdgeLister = edges,
                             neighbor_test: NeighborTest = is_neighbor,
                             iterations: int = LAYOUT_CONFIG['iterations'],
                             initial: Optional[Coordinates] = None,
                             **kwargs):
    """
    Lay out a graph by graph distance and degree.

    The first dimension separates vertices in proportion to their graph
    distance, the second raises vertices in proportion to their degree.
    The maximum graph distance and the maximum degree are computed once,
    before the first iteration.
    """
    return spring_embedding(
        graph,
        vertex_lister,
        attractors=[DistanceTargetForce(dimension=0), DegreeTargetForce(dimension=1)],
        repulsors=[],
        iterations=iterations,
        initial=initial,
        edge_lister=edge_lister,
        neighbor_test=neighbor_test,
        **kwargs
    )


def simple_spring_embedding(graph,
                            vertex_lister: VertexLister = vertices,
                            iterations: int = LAYOUT_CONFIG['iterations'],
                            neighbor_test: NeighborTest = is_neighbor,
                            initial: Optional[Coordinates] = None,
                            **kwargs):
    """
    Lay out a graph by adjacency only.

    Neighbors attract and non-neighbors repulse, both as a function of
    their Euclidean distance. No graph distances are computed.
    """
    return spring_embedding(
        graph,
        vertex_lister,
        attractors=[NeighborAttraction()],
        repulsors=[NonNeighborRepulsion()],
        iterations=iterations,
        initial=initial,
        neighbor_test=neighbor_test,
        **kwargs
    )
