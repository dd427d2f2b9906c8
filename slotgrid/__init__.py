"""
slotgrid - find appointment start times on a 5-minute availability grid.
"""

__version__ = "0.1.0"
