"""
Combat package for Duel Arena.

Contains:
- Normalization of external records into battle-ready participants.
- The round-based Battle engine with initiative, mitigation and a round limit.
- The battle log that records every step as text and structured events.
"""

from .engine import Battle, BattleResult
from .fighter import (
    Fighter,
    FighterSnapshot,
    Participant,
    battle_ready_record,
    derive_defense,
    normalize_participant,
)
from .log import BattleEvent, BattleLog

__all__ = [
    "Battle",
    "BattleResult",
    "Fighter",
    "FighterSnapshot",
    "Participant",
    "battle_ready_record",
    "derive_defense",
    "normalize_participant",
    "BattleEvent",
    "BattleLog",
]
