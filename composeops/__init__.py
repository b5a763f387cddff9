"""Building blocks for multi-container project tooling."""

__version__ = "0.1.0"