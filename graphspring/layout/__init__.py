"""
Force-directed layout of graphs.

This module places the vertices of a graph on an n-dimensional surface
by simulating attraction and repulsion between them.
"""

from .coordinates import *
from .forces import *
from .spring import *
