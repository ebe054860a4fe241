"""Building blocks for domain-driven, event-driven applications."""

__version__ = "0.1.0"