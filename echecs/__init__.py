"""A two-player terminal chess game with move checking, check warnings and promotion."""

__version__ = "0.1.0"
__all__ = ["position", "pieces", "model", "board", "app"]