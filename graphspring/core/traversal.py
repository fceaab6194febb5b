"""
Search-based structural queries on graphs.

Paths, trails and cycles are enumerated by depth-first backtracking.
Every enumerator is a generator: asking for the next solution resumes
the search at its last choice point, and calling the enumerator again
starts an independent search. The visited-vertex and used-arc sets are
passed down the recursion, never shared between searches.

Directed graphs are traversed along their outgoing arcs, undirected
graphs along their edges (an edge is used up in both directions at
once). The absence of a route is an empty sequence, not an error; a
query vertex that does not occur in the graph raises
``UnknownVertexError``.
"""

import logging
from collections import deque
from typing import Callable, Dict, Iterator, Optional, Tuple

import networkx as nx

from ..config import UnknownVertexError
from .graph import underlying, to_networkx, vertices as list_vertices, is_neighbor

logger = logging.getLogger('graphspring.traversal')

__all__ = [
    "Route", "paths", "path", "trails", "trail", "walks", "walk",
    "cycles", "cycle", "has_cycle", "is_strict", "reachable",
    "strongly_connected", "connected", "weakly_connected",
    "distance", "distances",
]


class Route:
    """
    A path, trail, walk or cycle through a graph.

    Attributes
    ----------
    vertices : tuple
        Visited vertices, from the start to the end vertex
    arcs : tuple of tuple
        Traversed (v, w) pairs, in traversal order
    """

    def __init__(self, vertices, arcs):
        self.vertices = tuple(vertices)
        self.arcs = tuple(arcs)

    @property
    def start(self):
        return self.vertices[0]

    @property
    def end(self):
        return self.vertices[-1]

    def sequence(self) -> list:
        """Return the alternating vertex/arc list ``[v0, (v0, v1), v1, ...]``."""
        result = [self.vertices[0]]
        for arc, v in zip(self.arcs, self.vertices[1:]):
            result.extend([arc, v])
        return result

    def __len__(self):
        return len(self.arcs)

    def __eq__(self, other):
        return (isinstance(other, Route)
                and self.vertices == other.vertices
                and self.arcs == other.arcs)

    def __hash__(self):
        return hash((self.vertices, self.arcs))

    def __repr__(self):
        return f"Route({list(self.vertices)})"


def _check(g, *vs):
    for v in vs:
        if v not in g:
            raise UnknownVertexError(v)


def _search(g, v, w, visited, used, route_vs, route_as, unique_vertices):
    """
    Depth-first search from ``v`` to ``w``.

    ``visited`` and ``used`` are the vertices and arc keys already on the
    route. Reaching ``w`` yields the route and backtracks, so ``w`` is
    never passed through.
    """
    if v == w:
        yield Route(route_vs, route_as)
        return

    for x in g.successors(v):
        key = g.arc_key(v, x)
        if key in used:
            continue
        if unique_vertices and x in visited:
            continue
        yield from _search(g, x, w,
                           visited | {x}, used | {key},
                           route_vs + [x], route_as + [(v, x)],
                           unique_vertices)


def paths(v, g, w) -> Iterator[Route]:
    """
    Generate the paths from ``v`` to ``w``.

    A path repeats no vertex. ``paths(v, g, v)`` yields only the trivial
    route consisting of ``v`` alone.
    """
    _check(g, v, w)
    return _search(g, v, w, frozenset([v]), frozenset(), [v], [], True)


def path(v, g, w) -> Optional[Route]:
    """Return the first path from ``v`` to ``w``, or None."""
    return next(paths(v, g, w), None)


def trails(v, g, w) -> Iterator[Route]:
    """Generate the trails from ``v`` to ``w``: routes that repeat no arc."""
    _check(g, v, w)
    return _search(g, v, w, frozenset([v]), frozenset(), [v], [], False)


def trail(v, g, w) -> Optional[Route]:
    return next(trails(v, g, w), None)


def _reaching(g, w):
    """Return the vertices from which ``w`` can be reached, ``w`` included."""
    G = to_networkx(g)
    if g.directed:
        return nx.ancestors(G, w) | {w}
    return set(nx.node_connected_component(G, w))


def walks(v, g, w, max_length: Optional[int] = None) -> Iterator[Route]:
    """
    Generate the walks from ``v`` to ``w``.

    A walk may repeat vertices and arcs, so a graph with a cycle on the
    way has infinitely many of them. Walks are therefore produced in
    order of increasing length, and only through vertices from which
    ``w`` can still be reached, so that every next walk is found in
    finite time. Like paths, a walk ends the first time it reaches ``w``.

    Parameters
    ----------
    v, w : vertex
        Start and end vertex
    g : DirectedGraph or UndirectedGraph
        Graph to walk through
    max_length : int, optional
        Maximum number of arcs of a walk; unbounded if None

    Yields
    ------
    Route
    """
    _check(g, v, w)
    return _walks(g, v, w, max_length)


def _walks(g, v, w, max_length):
    alive = _reaching(g, w)
    if v not in alive:
        return

    queue = deque([(v, [v], [])])
    while queue:
        x, route_vs, route_as = queue.popleft()
        if x == w:
            yield Route(route_vs, route_as)
            continue
        if max_length is not None and len(route_as) >= max_length:
            continue
        for y in g.successors(x):
            if y in alive:
                queue.append((y, route_vs + [y], route_as + [(x, y)]))


def walk(v, g, w, max_length: Optional[int] = None) -> Optional[Route]:
    return next(walks(v, g, w, max_length), None)


def cycles(v, g) -> Iterator[Route]:
    """
    Generate the cycles through ``v``.

    A cycle leaves ``v`` along an arc (v, x) and returns to ``v`` along a
    path from ``x`` that does not use that arc again. Its only repeated
    vertex is ``v`` itself.
    """
    _check(g, v)
    return _cycles(g, v)


def _cycles(g, v):
    for x in g.successors(v):
        key = g.arc_key(v, x)
        if x == v:
            # Loop
            yield Route([v, v], [(v, v)])
            continue
        yield from _search(g, x, v, frozenset([x]), frozenset([key]),
                           [v, x], [(v, x)], True)


def cycle(v, g) -> Optional[Route]:
    return next(cycles(v, g), None)


def has_cycle(g) -> bool:
    """Succeed if some vertex of ``g`` lies on a cycle."""
    return any(cycle(v, g) is not None for v in g.vertices)


def is_strict(g) -> bool:
    """Succeed if ``g`` has no cycles (and therefore no loops)."""
    return not has_cycle(g)


def reachable(v, g, w) -> bool:
    """Succeed if there is a path from ``v`` to ``w``."""
    return path(v, g, w) is not None


def strongly_connected(g) -> bool:
    """
    Succeed if every vertex can reach every other vertex.

    This asks the path search for every ordered pair of distinct
    vertices, so it is quadratic in the number of vertices.
    """
    for v in g.vertices:
        for w in g.vertices:
            if v != w and not reachable(v, g, w):
                logger.debug("No path from %s to %s", v, w)
                return False
    return True


def connected(g) -> bool:
    """
    Succeed if a graph has a single component.

    Arc directions are ignored. The empty graph counts as connected.
    """
    if len(g) == 0:
        return True
    return nx.is_connected(to_networkx(underlying(g)))


def weakly_connected(g) -> bool:
    """Succeed if the underlying undirected graph of ``g`` is connected."""
    return connected(underlying(g))


def distance(v, g, w) -> Optional[int]:
    """
    Return the number of arcs on a shortest path from ``v`` to ``w``.

    Returns None when ``w`` cannot be reached from ``v``.
    """
    _check(g, v, w)
    try:
        return nx.shortest_path_length(to_networkx(g), v, w)
    except nx.NetworkXNoPath:
        return None


def distances(g,
              vertex_lister: Callable = list_vertices,
              neighbor_test: Callable = is_neighbor) -> Dict[Tuple, int]:
    """
    Compute the graph distance between every pair of connected vertices.

    The graph is only accessed through ``vertex_lister(g)`` and
    ``neighbor_test(v, g, w)``, so any graph representation the caller
    provides accessors for can be measured.

    Returns
    -------
    dict
        Maps (v, w) to the length of a shortest route, for v != w with w
        reachable from v. Unreachable pairs are absent.
    """
    vs = list(vertex_lister(g))
    G = nx.DiGraph()
    G.add_nodes_from(vs)
    G.add_edges_from((v, w) for v in vs for w in vs if w != v and neighbor_test(v, g, w))

    table = {}
    for v, lengths in nx.all_pairs_shortest_path_length(G):
        for w, length in lengths.items():
            if w != v:
                table[(v, w)] = length
    return table
