"""
Configuration for graph layout runs.

This module defines the default drawing surface and layout parameters,
the configuration class that validates them, the logger setup shared by
the package and the package's error classes.
"""

import os
import json
import logging
from typing import Dict, List, Optional

# Drawing surface: one upper limit and one border margin per dimension
SURFACE_CONFIG = {
    'limits': [10.0, 10.0],
    'borders': [0.5, 0.5]
}

# Spring embedding parameters
LAYOUT_CONFIG = {
    'iterations': 100,
    'step_size': 1.0,  # Euler step, 1.0 means no damping
    'clamp': True,  # keep coordinates inside [0, limit]
    'seed': None,
    'logger': {
        'level': 'INFO',
        'console': True
    }
}


# Error classes for the package
class GraphError(Exception):
    """Error in a graph construction or query."""
    pass

class UnknownVertexError(GraphError, KeyError):
    """A query named a vertex that does not occur in the graph."""

    def __init__(self, vertex):
        self.vertex = vertex
        super().__init__(vertex)

    def __str__(self):
        return f"Unknown vertex: {self.vertex!r}"

class LayoutConfigError(Exception):
    """Error in the configuration of a layout run."""
    pass


class SurfaceConfig:
    """Size of the surface a graph is embedded in."""

    def __init__(self, config_dict: Dict = None, config_file: str = None):
        """
        Initialize a surface configuration.

        Args:
            config_dict: Dictionary with 'limits' and/or 'borders'
            config_file: Path to a JSON file with the same keys

        Raises:
            LayoutConfigError: If the limits or borders are invalid
        """
        self.config = {
            'limits': list(SURFACE_CONFIG['limits']),
            'borders': list(SURFACE_CONFIG['borders'])
        }

        sources = []
        if config_file:
            if not os.path.exists(config_file):
                raise LayoutConfigError(f"Configuration file not found: {config_file}")
            with open(config_file, 'r') as f:
                sources.append(json.load(f))

        if config_dict:
            sources.append(config_dict)

        for source in sources:
            self.config.update(source)

        # A surface given only by its limits gets no border
        given = set().union(*sources)
        if 'limits' in given and 'borders' not in given:
            self.config['borders'] = [0.0] * len(self.config['limits'] or [])

        self._validate()

    def _validate(self):
        limits = self.config.get('limits')
        borders = self.config.get('borders')

        if not limits:
            raise LayoutConfigError("At least one dimension is required")
        if len(limits) != len(borders):
            raise LayoutConfigError(
                f"Got {len(limits)} limits but {len(borders)} borders"
            )

        try:
            self.config['limits'] = [float(limit) for limit in limits]
            self.config['borders'] = [float(border) for border in borders]
        except (TypeError, ValueError) as e:
            raise LayoutConfigError(f"Limits and borders must be numbers: {e}")

        for dimension, (limit, border) in enumerate(zip(self.limits, self.borders)):
            if limit <= 0:
                raise LayoutConfigError(f"Limit of dimension {dimension} must be positive")
            if border < 0 or border >= limit / 2:
                raise LayoutConfigError(
                    f"Border of dimension {dimension} must lie in [0, {limit / 2})"
                )

    @property
    def limits(self) -> List[float]:
        return self.config['limits']

    @property
    def borders(self) -> List[float]:
        return self.config['borders']

    @property
    def dimensions(self) -> int:
        return len(self.limits)

    def limit(self, dimension: int) -> float:
        return self.limits[dimension]

    def border(self, dimension: int) -> float:
        return self.borders[dimension]

    def center(self) -> List[float]:
        """Return the coordinates of the centre of the surface."""
        return [limit / 2 for limit in self.limits]

    def __repr__(self):
        return f"SurfaceConfig(limits={self.limits}, borders={self.borders})"


def setup_logger(name: str = 'graphspring', level: Optional[str] = None) -> logging.Logger:
    """
    Configure a package logger with a console handler.

    Args:
        name: Logger name
        level: Level name, defaults to LAYOUT_CONFIG['logger']['level']

    Returns:
        Configured logger
    """
    level = level or LAYOUT_CONFIG['logger']['level']

    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Only one console handler per logger, however often this is called
    if LAYOUT_CONFIG['logger']['console'] and not logger.handlers:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)

        formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
        console_handler.setFormatter(formatter)

        logger.addHandler(console_handler)

    return logger
