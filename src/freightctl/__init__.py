"""freightctl — freight quote pricing engine and CLI."""

__version__ = "0.1.0"
