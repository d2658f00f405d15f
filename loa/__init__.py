"""Lines of Action rules engine and alpha-beta search."""

__version__ = "0.1.0"
