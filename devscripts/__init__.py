"""Personal developer workflow utilities."""

__version__ = "0.3.0"
