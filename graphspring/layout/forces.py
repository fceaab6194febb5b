"""
Force rules for spring embedding.

A force rule computes the force vertex ``w`` exerts on vertex ``v`` in
one dimension. The engine adds the values of attractor rules to the
position of ``v`` and subtracts the values of repulsor rules, so a rule
that decomposes a magnitude along the line from ``v`` to ``w`` returns
``magnitude * (pos_w[d] - pos_v[d]) / distance(v, w)``.

Zero distance policy: two vertices at the same position have no
direction between them, so every rule contributes 0.0 for them. The
same holds for any contribution that would not be a finite number.
"""

import math
import logging

from .coordinates import euclidean_distance

logger = logging.getLogger('graphspring.forces')

__all__ = [
    "ForceRule", "NeighborAttraction", "NonNeighborRepulsion",
    "GraphDistanceAttraction", "DistanceTargetForce", "DegreeTargetForce",
]


def _finite(value: float) -> float:
    return value if math.isfinite(value) else 0.0


def _decompose(magnitude, dimension, coord_v, coord_w, distance):
    """Project a force of the given magnitude, pointing from v to w, on one dimension."""
    if distance <= 0.0:
        return 0.0
    delta = coord_w[dimension] - coord_v[dimension]
    return _finite(magnitude * delta / distance)


class ForceRule:
    """
    Base class for force rules.

    Subclasses implement :meth:`force`. :meth:`prepare` is called once
    per layout run, before the first iteration, and may store graph-wide
    values in the run's context.
    """

    def prepare(self, context):
        pass

    def force(self, context, dimension, coord_v, coord_w) -> float:
        raise NotImplementedError

    def __call__(self, context, dimension, coord_v, coord_w) -> float:
        return self.force(context, dimension, coord_v, coord_w)

    def __repr__(self):
        return f"{type(self).__name__}()"


class NeighborAttraction(ForceRule):
    """Adjacent vertices attract with ``2 * log10(d)``, d the Euclidean distance."""

    def force(self, context, dimension, coord_v, coord_w):
        if coord_v.positions == coord_w.positions:
            return 0.0
        if not context.adjacent(coord_v.vertex, coord_w.vertex):
            return 0.0

        distance = euclidean_distance(coord_v, coord_w)
        attraction = 2 * math.log10(distance)
        result = _decompose(attraction, dimension, coord_v, coord_w, distance)
        logger.debug("F_att,%d(%s,%s)=%f", dimension, coord_v.vertex, coord_w.vertex, result)
        return result


class NonNeighborRepulsion(ForceRule):
    """Non-adjacent vertices repulse with ``1 / sqrt(d)``, d the Euclidean distance."""

    def force(self, context, dimension, coord_v, coord_w):
        if coord_v.positions == coord_w.positions:
            return 0.0
        if context.adjacent(coord_v.vertex, coord_w.vertex):
            return 0.0

        distance = euclidean_distance(coord_v, coord_w)
        repulsion = 1 / math.sqrt(distance)
        result = _decompose(repulsion, dimension, coord_v, coord_w, distance)
        logger.debug("F_rep,%d(%s,%s)=%f", dimension, coord_v.vertex, coord_w.vertex, result)
        return result


class GraphDistanceAttraction(ForceRule):
    """
    Connected vertices attract with ``2 * log10(g)``, g their graph distance.

    The strength comes from the graph, the direction from the current
    positions.
    """

    def prepare(self, context):
        context.ensure_distances()

    def force(self, context, dimension, coord_v, coord_w):
        graph_distance = context.distances.get((coord_v.vertex, coord_w.vertex))
        if graph_distance is None:
            return 0.0

        distance = euclidean_distance(coord_v, coord_w)
        attraction = 2 * math.log10(graph_distance)
        return _decompose(attraction, dimension, coord_v, coord_w, distance)


class DistanceTargetForce(ForceRule):
    """
    Separate vertices along one axis in proportion to their graph distance.

    Two connected vertices should lie ``limit * g / g_max`` apart in the
    given dimension, with g their graph distance and g_max the largest
    graph distance in the graph. The force is the shortfall (or excess)
    of their actual separation relative to the limit, pushing them apart
    when they are too close and together when they are too far apart.
    """

    def __init__(self, dimension: int = 0):
        self.dimension = dimension

    def prepare(self, context):
        context.ensure_distances()

    def force(self, context, dimension, coord_v, coord_w):
        if dimension != self.dimension:
            return 0.0
        graph_distance = context.distances.get((coord_v.vertex, coord_w.vertex))
        if graph_distance is None or not context.maximum_distance:
            return 0.0

        position_v = coord_v[dimension]
        position_w = coord_w[dimension]
        delta = abs(position_v - position_w)
        if delta == 0.0:
            return 0.0

        limit = context.surface.limit(dimension)
        target = limit * (graph_distance / context.maximum_distance)
        force = (target - delta) / limit
        if position_v < position_w:
            force = -force

        logger.debug("[DELTA] V=%s\tAct=%.2f\tPot=%.2f\tF_%d=%.2f",
                     coord_v.vertex, delta, target, dimension, force)
        return force

    def __repr__(self):
        return f"DistanceTargetForce(dimension={self.dimension})"


class DegreeTargetForce(ForceRule):
    """
    Pull every vertex along one axis towards ``limit * degree / max_degree``.

    Better connected vertices end up higher on that axis.
    """

    def __init__(self, dimension: int = 1):
        self.dimension = dimension

    def prepare(self, context):
        context.ensure_degrees()

    def force(self, context, dimension, coord_v, coord_w):
        if dimension != self.dimension or not context.maximum_degree:
            return 0.0

        position_v = coord_v[dimension]
        limit = context.surface.limit(dimension)
        target = limit * (context.degrees[coord_v.vertex] / context.maximum_degree)
        force = (target - position_v) / limit

        logger.debug("[DEGREE] V=%s\tAct=%.2f\tPot=%.2f\tF_%d=%.2f",
                     coord_v.vertex, position_v, target, dimension, force)
        return force

    def __repr__(self):
        return f"DegreeTargetForce(dimension={self.dimension})"
