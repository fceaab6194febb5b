"""
Vertex coordinates in an n-dimensional drawing surface.
"""

import numpy as np

from ..config import SurfaceConfig, LayoutConfigError

__all__ = ["VertexCoordinate", "euclidean_distance", "random_vertex_coordinates", "check_coordinates"]


class VertexCoordinate:
    """
    A vertex paired with its position, one float per dimension.
    """

    __slots__ = ('vertex', 'positions')

    def __init__(self, vertex, positions):
        """
        Initialize a VertexCoordinate.

        Parameters
        ----------
        vertex : hashable
            The vertex
        positions : sequence of float
            Position in every dimension
        """
        self.vertex = vertex
        self.positions = tuple(float(p) for p in positions)

    @property
    def dimensions(self) -> int:
        return len(self.positions)

    def __getitem__(self, dimension):
        return self.positions[dimension]

    def __eq__(self, other):
        return (isinstance(other, VertexCoordinate)
                and self.vertex == other.vertex
                and self.positions == other.positions)

    def __hash__(self):
        return hash((self.vertex, self.positions))

    def __repr__(self):
        coords = ", ".join(f"{p:.3f}" for p in self.positions)
        return f"VertexCoordinate({self.vertex!r}, [{coords}])"


def euclidean_distance(a, b) -> float:
    """Return the Euclidean distance between two coordinates or position sequences."""
    if isinstance(a, VertexCoordinate):
        a = a.positions
    if isinstance(b, VertexCoordinate):
        b = b.positions
    return float(np.linalg.norm(np.subtract(a, b)))


def random_vertex_coordinates(vertices, surface: SurfaceConfig, rng=None):
    """
    Place every vertex at a uniformly random position on the surface.

    Dimension ``d`` is drawn from ``[border_d, limit_d - border_d]``.

    Parameters
    ----------
    vertices : iterable
        Vertices to place, in the order the coordinates are returned
    surface : SurfaceConfig
        Drawing surface
    rng : numpy.random.Generator or int, optional
        Random generator or seed

    Returns
    -------
    list of VertexCoordinate
    """
    rng = np.random.default_rng(rng)
    low = np.array(surface.borders)
    high = np.array(surface.limits) - low

    return [VertexCoordinate(v, rng.uniform(low, high)) for v in vertices]


def check_coordinates(coords, vertices, surface: SurfaceConfig):
    """
    Validate caller supplied start coordinates.

    Raises
    ------
    LayoutConfigError
        If a vertex is missing or a coordinate has the wrong dimensionality
    """
    by_vertex = {c.vertex: c for c in coords}
    missing = [v for v in vertices if v not in by_vertex]
    if missing:
        raise LayoutConfigError(f"No initial coordinates for vertices {missing}")

    for c in coords:
        if c.dimensions != surface.dimensions:
            raise LayoutConfigError(
                f"Coordinate of {c.vertex!r} has {c.dimensions} dimensions, "
                f"the surface has {surface.dimensions}"
            )
    return [by_vertex[v] for v in vertices]
