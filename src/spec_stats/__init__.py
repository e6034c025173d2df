"""Response delay statistics for web specification repositories."""

__version__ = "0.1.0"
