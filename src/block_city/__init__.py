"""Block City - simulation core for a grid city-builder."""

__version__ = "0.1.0"
