"""Breed-specific legislation tracker: duplicate submission detection."""

__version__ = "0.1.0"
