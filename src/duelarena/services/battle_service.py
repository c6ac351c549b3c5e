from __future__ import annotations

import logging
from typing import Any, List, Optional

from pydantic import ValidationError as PydanticValidationError

from ..characters.character import Character
from ..combat.engine import Battle, BattleResult
from ..combat.fighter import battle_ready_record
from ..config import ArenaConfig
from ..core.rng import RandomSource
from ..errors import (
    DuplicateParticipant,
    InvalidParticipant,
    MissingParticipant,
    NotFound,
    SimulationError,
)
from ..persistence.repository import CharacterRepository
from ..schemas import BattleRecord, BattleRequest, BattleSummary, LoserSummary, WinnerSummary

logger = logging.getLogger(__name__)


class BattleService:
    """Resolve two stored characters, fight them and apply the outcome.

    After a battle the winner's stored vitality is set to what it has left and
    saved. Concurrent battles involving the same character are not
    serialized here; callers that need at-most-once write-back must provide it.
    """

    def __init__(
        self,
        repository: CharacterRepository,
        rng: Optional[RandomSource] = None,
        config: Optional[ArenaConfig] = None,
    ) -> None:
        self.repository = repository
        self.rng = rng
        self.config = config or ArenaConfig()
        self._battles: List[BattleRecord] = []

    def _resolve(self, identifier: Any) -> Character:
        character = self.repository.find_by_id(identifier)
        if character is None:
            raise NotFound(f"Character with ID {identifier} not found")
        return character

    def start_battle(self, first_id: Any, second_id: Any) -> BattleSummary:
        if first_id is None or second_id is None:
            raise MissingParticipant("Both character IDs are required")
        try:
            request = BattleRequest(first_id=first_id, second_id=second_id)
        except PydanticValidationError as exc:
            messages = [err.get("msg", "") for err in exc.errors()]
            if any("cannot battle itself" in m for m in messages):
                raise DuplicateParticipant("A character cannot battle itself") from exc
            if any("are required" in m for m in messages):
                raise MissingParticipant("Both character IDs are required") from exc
            # Anything else is an id of the wrong type, e.g. a float or a list
            raise InvalidParticipant("Character IDs must be strings or integers") from exc

        first = self._resolve(request.first_id)
        second = self._resolve(request.second_id)
        if first.uid == second.uid:
            raise DuplicateParticipant("A character cannot battle itself")

        default = self.config.combat.default_modifier
        battle = Battle(
            battle_ready_record(first, default),
            battle_ready_record(second, default),
            rng=self.rng,
            config=self.config.combat,
        )
        logger.info("Battle: %s (%s) vs %s (%s)", first.name, first.job.value, second.name, second.job.value)
        result = battle.execute()
        if result is None or result.winner is None or result.loser is None:
            raise SimulationError("Invalid battle result returned")

        winner = first if result.winner.id == first.uid else second
        winner.vitality = int(result.winner.current_vitality)
        self.repository.save(winner)
        logger.info("%s wins with %s vitality left", winner.name, winner.vitality)

        record = self._record(first, second, result)
        return BattleSummary(
            battle_id=record.id,
            winner=WinnerSummary(
                id=result.winner.id,
                name=result.winner.name,
                job=result.winner.job,
                remaining_vitality=result.winner.current_vitality,
            ),
            loser=LoserSummary(id=result.loser.id, name=result.loser.name, job=result.loser.job),
            rounds=result.rounds,
            round_limit_reached=result.round_limit_reached,
            battle_log=list(result.log),
        )

    def _record(self, first: Character, second: Character, result: BattleResult) -> BattleRecord:
        record = BattleRecord(
            id=len(self._battles) + 1,
            first_id=first.uid,
            second_id=second.uid,
            winner_id=result.winner.id,
            loser_id=result.loser.id,
            battle_log=list(result.log),
        )
        self._battles.append(record)
        logger.debug("Battle record %d stored", record.id)
        return record

    def list_battles(self) -> List[BattleRecord]:
        return list(self._battles)

    def get_battle(self, battle_id: int) -> BattleRecord:
        for record in self._battles:
            if record.id == battle_id:
                return record
        raise NotFound(f"Battle with ID {battle_id} not found")
