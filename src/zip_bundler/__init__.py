"""Bundle remotely hosted files into a single ZIP archive."""

__version__ = "0.1.0"
