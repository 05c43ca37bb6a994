"""wikireader: encyclopedia article transformation and reading history."""

__version__ = "0.1.0"
