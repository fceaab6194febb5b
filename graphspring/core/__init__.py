"""
Core functionality for graphspring.

This module contains the graph data structures and the search-based
queries (paths, trails, walks, cycles, connectivity) on them.
"""

from .graph import *
from .traversal import *
