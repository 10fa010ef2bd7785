"""DHL Express rate quoting for shipments."""

__version__ = "0.3.0"
