"""homeboard - self-hosted household dashboard backend and client core."""

__version__ = "0.4.0"
