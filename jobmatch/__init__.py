"""Developer job aggregation and skill-based ranking."""

__version__ = "1.0.0"
