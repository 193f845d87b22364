"""Dining Review — allergy-friendliness reviews and rankings for restaurants."""

__version__ = "1.0.0"
