"""Politiquensemble: political news and civic education backend."""

__version__ = "1.0.0"
