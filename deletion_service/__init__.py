"""Facebook data deletion callback service."""

__version__ = "1.0.0"
