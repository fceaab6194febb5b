"""
Graph data structures for analysis and layout.

This module provides the directed graph (two mutually consistent
adjacency relations, incoming and outgoing) and the undirected graph
(one symmetric adjacency relation), together with the structural
queries that do not require search: neighbors, degree, subgraphs,
the underlying graph and orientations.
"""

from itertools import product
from typing import Iterator, List, Tuple

import networkx as nx

from ..config import GraphError, UnknownVertexError

__all__ = [
    "DirectedGraph", "UndirectedGraph",
    "vertices", "arcs", "edges", "neighbors", "in_neighbors", "out_neighbors",
    "is_neighbor", "degree", "in_degree", "out_degree",
    "vertex_induced_subgraph", "is_subgraph", "underlying", "orientation",
    "to_networkx", "from_networkx",
]


def _adjacency(vertices, pairs):
    """Build a vertex -> sorted neighbor tuple relation from (v, w) pairs."""
    relation = {v: set() for v in vertices}
    for v, w in pairs:
        relation[v].add(w)
    return {v: tuple(sorted(ns)) for v, ns in relation.items()}


class DirectedGraph:
    """
    A directed graph.

    The arc set is stored twice, once as an outgoing relation and once as
    an incoming relation. Both are derived from the same arcs, so an arc
    (v, w) occurs in the outgoing neighbors of v exactly when it occurs
    in the incoming neighbors of w.
    """

    directed = True

    def __init__(self, vertices, arcs=()):
        """
        Initialize a DirectedGraph.

        Parameters
        ----------
        vertices : iterable
            Vertices of the graph, any comparable hashable values
        arcs : iterable of tuple, optional
            Ordered (v, w) pairs; duplicates are dropped

        Raises
        ------
        UnknownVertexError
            If an arc names a vertex that is not in ``vertices``
        """
        self._vertices = tuple(sorted(set(vertices)))
        vertex_set = set(self._vertices)

        arc_set = set()
        for v, w in arcs:
            for x in (v, w):
                if x not in vertex_set:
                    raise UnknownVertexError(x)
            arc_set.add((v, w))
        self._arcs = tuple(sorted(arc_set))

        self._outgoing = _adjacency(self._vertices, self._arcs)
        self._incoming = _adjacency(self._vertices, ((w, v) for v, w in self._arcs))

    @classmethod
    def from_arcs(cls, arcs):
        """Create a DirectedGraph whose vertices are the endpoints of ``arcs``."""
        arcs = list(arcs)
        return cls({x for arc in arcs for x in arc}, arcs)

    def _check(self, v):
        if v not in self._outgoing:
            raise UnknownVertexError(v)

    def __contains__(self, v):
        return v in self._outgoing

    def __len__(self):
        return len(self._vertices)

    def __eq__(self, other):
        return (isinstance(other, DirectedGraph)
                and self._vertices == other._vertices
                and self._arcs == other._arcs)

    def __hash__(self):
        return hash((self._vertices, self._arcs))

    @property
    def vertices(self) -> Tuple:
        return self._vertices

    @property
    def arcs(self) -> Tuple:
        return self._arcs

    def out_neighbors(self, v) -> Tuple:
        self._check(v)
        return self._outgoing[v]

    def in_neighbors(self, v) -> Tuple:
        self._check(v)
        return self._incoming[v]

    def neighbors(self, v) -> Tuple:
        """Return the union of the incoming and outgoing neighbors of ``v``."""
        self._check(v)
        return tuple(sorted(set(self._incoming[v]) | set(self._outgoing[v])))

    def successors(self, v) -> Tuple:
        """Vertices a traversal may step to from ``v``."""
        return self.out_neighbors(v)

    @staticmethod
    def arc_key(v, w):
        return (v, w)

    def out_degree(self, v) -> int:
        return len(self.out_neighbors(v))

    def in_degree(self, v) -> int:
        return len(self.in_neighbors(v))

    def degree(self, v) -> int:
        return len(self.neighbors(v))

    def __repr__(self):
        return f"DirectedGraph(vertices={len(self._vertices)}, arcs={len(self._arcs)})"


class UndirectedGraph:
    """
    An undirected graph with a single symmetric adjacency relation.
    """

    directed = False

    def __init__(self, vertices, edges=()):
        """
        Initialize an UndirectedGraph.

        Parameters
        ----------
        vertices : iterable
            Vertices of the graph
        edges : iterable of tuple, optional
            Unordered (v, w) pairs; (v, w) and (w, v) denote the same edge

        Raises
        ------
        UnknownVertexError
            If an edge names a vertex that is not in ``vertices``
        """
        self._vertices = tuple(sorted(set(vertices)))
        vertex_set = set(self._vertices)

        edge_set = set()
        for v, w in edges:
            for x in (v, w):
                if x not in vertex_set:
                    raise UnknownVertexError(x)
            edge_set.add(tuple(sorted((v, w))))
        self._edges = tuple(sorted(edge_set))

        pairs = [(v, w) for v, w in self._edges] + [(w, v) for v, w in self._edges]
        self._adjacent = _adjacency(self._vertices, pairs)

    @classmethod
    def from_edges(cls, edges):
        """Create an UndirectedGraph whose vertices are the endpoints of ``edges``."""
        edges = list(edges)
        return cls({x for edge in edges for x in edge}, edges)

    def _check(self, v):
        if v not in self._adjacent:
            raise UnknownVertexError(v)

    def __contains__(self, v):
        return v in self._adjacent

    def __len__(self):
        return len(self._vertices)

    def __eq__(self, other):
        return (isinstance(other, UndirectedGraph)
                and self._vertices == other._vertices
                and self._edges == other._edges)

    def __hash__(self):
        return hash((self._vertices, self._edges))

    @property
    def vertices(self) -> Tuple:
        return self._vertices

    @property
    def edges(self) -> Tuple:
        return self._edges

    def neighbors(self, v) -> Tuple:
        self._check(v)
        return self._adjacent[v]

    def successors(self, v) -> Tuple:
        return self.neighbors(v)

    @staticmethod
    def arc_key(v, w):
        # An edge is used up whichever way it is traversed
        return frozenset((v, w))

    def degree(self, v) -> int:
        return len(self.neighbors(v))

    def __repr__(self):
        return f"UndirectedGraph(vertices={len(self._vertices)}, edges={len(self._edges)})"


# Module-level accessors. These double as the default vertex lister,
# edge lister and neighbor test of the layout engine.

def vertices(g) -> List:
    """Return the vertices of ``g`` in sorted order."""
    return list(g.vertices)


def arcs(g) -> List[Tuple]:
    """Return the arcs of a directed graph as sorted ordered pairs."""
    if not g.directed:
        raise GraphError("arcs() requires a directed graph, use edges()")
    return list(g.arcs)


def edges(g) -> List[Tuple]:
    """
    Return the connections of ``g``.

    For an undirected graph every edge is listed once as a sorted pair,
    for a directed graph this is the arc list.
    """
    if g.directed:
        return list(g.arcs)
    return list(g.edges)


def neighbors(v, g) -> Tuple:
    return g.neighbors(v)


def in_neighbors(v, g) -> Tuple:
    return g.in_neighbors(v)


def out_neighbors(v, g) -> Tuple:
    return g.out_neighbors(v)


def is_neighbor(v, g, w) -> bool:
    """Succeed if ``v`` and ``w`` are adjacent in either direction."""
    return w in g.neighbors(v)


def degree(g, v) -> int:
    return g.degree(v)


def in_degree(g, v) -> int:
    return g.in_degree(v)


def out_degree(g, v) -> int:
    return g.out_degree(v)


def vertex_induced_subgraph(g, vertex_subset):
    """
    Return the subgraph induced by a subset of the vertices.

    Parameters
    ----------
    g : DirectedGraph or UndirectedGraph
        The graph to restrict
    vertex_subset : iterable
        Vertices to keep; every one of them must occur in ``g``

    Returns
    -------
    DirectedGraph or UndirectedGraph
        Graph of the same kind with only the kept vertices and the
        connections among them
    """
    keep = set(vertex_subset)
    for v in keep:
        if v not in g:
            raise UnknownVertexError(v)
    kept = [(v, w) for v, w in edges(g) if v in keep and w in keep]
    return type(g)(keep, kept)


def is_subgraph(g1, g2) -> bool:
    """Succeed if every vertex and connection of ``g1`` occurs in ``g2``."""
    if g1.directed != g2.directed:
        return False
    return (set(g1.vertices) <= set(g2.vertices)
            and set(edges(g1)) <= set(edges(g2)))


def underlying(g) -> UndirectedGraph:
    """Return the undirected graph obtained by dropping the direction of every arc."""
    if not g.directed:
        return g
    return UndirectedGraph(g.vertices, g.arcs)


def orientation(g) -> Iterator[DirectedGraph]:
    """
    Generate every orientation of an undirected graph.

    Each edge (v, w), v <= w, is given direction v -> w first and w -> v
    on backtracking, so the 2**|E| orientations come out in a fixed order.
    """
    if g.directed:
        raise GraphError("orientation() requires an undirected graph")
    choices = [((v, w), (w, v)) for v, w in g.edges]
    for chosen in product(*choices):
        yield DirectedGraph(g.vertices, chosen)


def to_networkx(g):
    """
    Convert a graph to networkx.

    Returns
    -------
    networkx.DiGraph or networkx.Graph
    """
    G = nx.DiGraph() if g.directed else nx.Graph()
    G.add_nodes_from(g.vertices)
    G.add_edges_from(edges(g))
    return G


def from_networkx(G):
    """Create a DirectedGraph or UndirectedGraph from a networkx graph."""
    if G.is_directed():
        return DirectedGraph(G.nodes(), G.edges())
    return UndirectedGraph(G.nodes(), G.edges())
