"""Procedural city street networks: L-system road growth, planar street graphs and area extraction."""

__version__ = "0.1.1"

__all__ = [
    "areaextractor",
    "graphic",
    "lsystem",
    "path",
    "patterns",
    "rng",
    "road",
    "roadlsystem",
    "streetgraph",
]