from .battle_service import BattleService
from .character_service import CharacterService

__all__ = ["BattleService", "CharacterService"]
