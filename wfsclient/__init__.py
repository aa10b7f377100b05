"""Django-friendly client for OGC Web Feature Service (WFS) servers."""

__version__ = "1.0.0"
