"""Relay for chat queries to a managed knowledge base."""

__version__ = "1.0.0"
