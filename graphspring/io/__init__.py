"""
Output of layout results.

This module converts and saves computed coordinates for use by
renderers and other downstream tools.
"""

from .exporters import *
