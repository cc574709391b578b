"""traceproject - recorded trace archives as a virtual test project."""

__version__ = "0.1.0"
