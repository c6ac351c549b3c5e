from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, Optional, Tuple

from ..config import CombatSettings
from ..core.rng import RNG, RandomSource
from ..errors import DuplicateParticipant, MissingParticipant, SimulationError
from .fighter import Fighter, FighterSnapshot, Participant, format_amount, normalize_participant
from .log import BattleEvent, BattleLog

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BattleResult:
    """Final outcome of one battle.

    ``log`` holds the human-readable lines in order; ``events`` holds the same
    entries with their type and structured data.
    """

    winner: FighterSnapshot
    loser: FighterSnapshot
    log: Tuple[str, ...]
    events: Tuple[BattleEvent, ...]
    rounds: int
    round_limit_reached: bool


class Battle:
    """One-on-one, round-based battle between two participant records.

    Records are validated and normalized on construction, so an invalid
    battle fails before anything is simulated. Each call to :meth:`execute`
    spawns fresh fighters and draws fresh randomness; the caller's records are
    never modified.
    """

    def __init__(
        self,
        first: Any,
        second: Any,
        rng: Optional[RandomSource] = None,
        config: Optional[CombatSettings] = None,
    ) -> None:
        if first is None or second is None:
            raise MissingParticipant("Two valid participants are required for a battle")
        self.config = config or CombatSettings()
        default = self.config.default_modifier
        self.first: Participant = normalize_participant(first, "Participant 1", default)
        self.second: Participant = normalize_participant(second, "Participant 2", default)
        if self.first.id == self.second.id:
            raise DuplicateParticipant("A participant cannot battle itself")
        self.rng: RandomSource = rng or RNG()

    def execute(self) -> BattleResult:
        """Run the battle to completion and return its result."""
        try:
            return self._run()
        except Exception as exc:
            logger.exception("Battle between %s and %s failed", self.first.name, self.second.name)
            raise SimulationError(f"Battle simulation failed: {exc}") from exc

    def _run(self) -> BattleResult:
        log = BattleLog()
        a = self.first.spawn()
        b = self.second.spawn()
        max_rounds = self.config.max_rounds

        log.add(
            "start",
            f"Battle between {a.name} ({a.job}) - {format_amount(a.current_vitality)} HP and "
            f"{b.name} ({b.job}) - {format_amount(b.current_vitality)} HP begins!",
            first=a.id,
            second=b.id,
        )

        rounds = 0
        limit_reached = False
        while a.alive and b.alive:
            rounds += 1
            log.add("round", f"Round {rounds}:", round=rounds)

            attacker, defender = self._initiative(a, b, log)

            if self._strike(attacker, defender, log):
                log.add("defeat", f"{defender.name} has been defeated!", defeated=defender.id)
                break

            if self._strike(defender, attacker, log):
                log.add("defeat", f"{attacker.name} has been defeated!", defeated=attacker.id)
                break

            if rounds >= max_rounds:
                limit_reached = True
                log.add("draw", f"Battle reached {max_rounds} rounds - ending in a draw!", rounds=rounds)
                break

        if a.alive and b.alive:
            # Only reachable through the round limit
            winner, loser = (a, b) if a.current_vitality >= b.current_vitality else (b, a)
            log.add(
                "draw",
                f"Battle ended in a technical draw! {winner.name} had more HP remaining "
                f"and is declared the winner.",
                winner=winner.id,
            )
        elif a.alive:
            winner, loser = a, b
        else:
            winner, loser = b, a

        log.add(
            "result",
            f"{winner.name} wins the battle! {winner.name} still has "
            f"{format_amount(winner.current_vitality)} HP remaining!",
            winner=winner.id,
            loser=loser.id,
            remaining=winner.current_vitality,
        )

        return BattleResult(
            winner=winner.snapshot(),
            loser=loser.snapshot(),
            log=log.lines(),
            events=tuple(log.events()),
            rounds=rounds,
            round_limit_reached=limit_reached,
        )

    def _initiative(self, a: Fighter, b: Fighter, log: BattleLog) -> Tuple[Fighter, Fighter]:
        """Roll initiative for both fighters; the first fighter wins ties."""
        roll_a = self.rng.random() * a.speed
        roll_b = self.rng.random() * b.speed
        if roll_a >= roll_b:
            fast, slow, fast_roll, slow_roll = a, b, roll_a, roll_b
        else:
            fast, slow, fast_roll, slow_roll = b, a, roll_b, roll_a
        log.add(
            "initiative",
            f"{fast.name} {fast_roll:.1f} speed was faster than {slow.name} {slow_roll:.1f} speed "
            f"and will begin this round.",
            first=fast.id,
            rolls={a.id: roll_a, b.id: roll_b},
        )
        return fast, slow

    def _strike(self, attacker: Fighter, defender: Fighter, log: BattleLog) -> bool:
        """Resolve one attack and report whether the defender fell."""
        raw = math.floor(self.rng.random() * attacker.attack_power)
        mitigation = math.floor(defender.defense / self.config.defense_divisor)
        damage = max(self.config.minimum_damage, raw - mitigation)
        defender.take_damage(damage)
        log.add(
            "attack",
            f"{attacker.name} attacks {defender.name} for {damage}, {defender.name} has "
            f"{format_amount(defender.current_vitality)} HP remaining.",
            attacker=attacker.id,
            defender=defender.id,
            raw_damage=raw,
            damage=damage,
            remaining=defender.current_vitality,
        )
        return not defender.alive
