"""Rookwise — a two-player chess rules engine with navigable move history."""

__version__ = "0.1.0"
