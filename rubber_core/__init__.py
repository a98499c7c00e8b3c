"""
Rubber Stock core: sync and reconciliation layer for the rubber-compound
stock and mixing-formula API.
"""

__version__ = "1.0.0"
