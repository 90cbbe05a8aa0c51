"""Building blocks for admin back ends: runtime registry, responses, claims, configuration and helpers."""

__version__ = "0.1.0"