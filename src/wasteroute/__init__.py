"""Route optimization and truck allocation engine for waste collection."""

__version__ = "0.1.0"
