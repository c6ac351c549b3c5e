"""
Duel Arena core package.

This package provides headless logic for one-on-one character duels:
- Character model with jobs, derived modifiers and progression
- Battle engine with initiative, mitigated damage and a round limit
- Repository abstraction with in-memory and JSON-file stores
- Services applying battle outcomes to stored characters

Front-ends (CLI, web handlers, etc.) should import and compose these services.
"""
from .characters import Character, Job, available_jobs, job_details
from .combat import Battle, BattleResult, FighterSnapshot
from .config import ArenaConfig
from .core.rng import RNG, RandomSource
from .errors import (
    ArenaError,
    ConfigError,
    DuplicateParticipant,
    InvalidJob,
    InvalidName,
    InvalidParticipant,
    InvalidVitality,
    MissingIdentity,
    MissingParticipant,
    NotFound,
    PersistenceError,
    SimulationError,
    ValidationError,
)
from .persistence import CharacterRepository, InMemoryCharacterRepository, JsonCharacterRepository
from .services import BattleService, CharacterService

__all__ = [
    "Character",
    "Job",
    "available_jobs",
    "job_details",
    "Battle",
    "BattleResult",
    "FighterSnapshot",
    "ArenaConfig",
    "RNG",
    "RandomSource",
    "ArenaError",
    "ConfigError",
    "DuplicateParticipant",
    "InvalidJob",
    "InvalidName",
    "InvalidParticipant",
    "InvalidVitality",
    "MissingIdentity",
    "MissingParticipant",
    "NotFound",
    "PersistenceError",
    "SimulationError",
    "ValidationError",
    "CharacterRepository",
    "InMemoryCharacterRepository",
    "JsonCharacterRepository",
    "BattleService",
    "CharacterService",
]
