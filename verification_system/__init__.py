"""Multi-agent content verification core."""

__version__ = "0.1.0"
