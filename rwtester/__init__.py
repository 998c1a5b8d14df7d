"""Random-walk coverage and path-discovery experiments on graphs."""

__version__ = "0.1.0"
