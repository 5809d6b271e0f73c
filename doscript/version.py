"""Version information for doscript."""

__version__ = "0.1.0"
