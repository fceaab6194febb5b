"""
graphspring - graph traversal and force-directed layout.
"""

__version__ = '0.1.0'

# Import main submodules for easy access
from . import config
from . import core
from . import layout
from . import io
