"""jotter - a filename-encoded journal that assembles into one HTML page."""

__version__ = "0.3.0"
