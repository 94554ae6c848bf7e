"""AOZ Core - registry backend for AI agent oaths."""

__version__ = "0.1.0"
