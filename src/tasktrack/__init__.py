"""Personal task tracker backed by a flat file."""

__version__ = "0.1.0"
