"""Small algorithms and process-coordination tools."""

__version__ = "0.1.0"