"""Architex -- architecture pattern scaffolding."""

__version__ = "0.1.0"
