"""Content-based track recommendation from seed tracks."""

__version__ = "0.1.0"
