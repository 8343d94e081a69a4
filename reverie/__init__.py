"""Reverie: model orchestration for the journaling companion."""

__version__ = "0.1.0"
