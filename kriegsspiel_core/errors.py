from __future__ import annotations


class InvalidConfiguration(ValueError):
    """Raised when a game cannot be created from the given players or boards."""


class PersistenceError(ValueError):
    """Raised when a saved game document cannot be decoded."""
