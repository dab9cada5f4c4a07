"""A teaching shell with text utilities, process tools, an MVar demo and a bitmap font, on an in-memory console."""

__version__ = "0.1.0"