"""Web content fetching and normalization for agents."""

__version__ = "0.1.0"
