"""
Character persistence for Duel Arena.

Services depend on the CharacterRepository protocol; the in-memory store
suits tests and single runs, the JSON store backs the command line.
"""
from .paths import default_store_path
from .repository import CharacterRepository, InMemoryCharacterRepository, JsonCharacterRepository

__all__ = [
    "CharacterRepository",
    "InMemoryCharacterRepository",
    "JsonCharacterRepository",
    "default_store_path",
]
