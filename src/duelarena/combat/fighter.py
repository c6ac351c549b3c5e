"""Battle participants.

External records reach the engine in more than one shape, depending on the
store they came from. ``normalize_participant`` is the single place that maps
them onto the canonical :class:`Participant`. Accepted field names:

- identity: ``id`` (canonical) or ``_id``
- vitality: ``vitality`` (canonical), ``hp`` or ``health``; the first alias
  holding a positive number wins
- modifier triple: ``modifiers`` mapping with ``attack``, ``defense``, ``speed``
- legacy modifiers used when the triple is absent or partly broken:
  ``attack_power`` / ``attackModifier`` and ``speed`` / ``speedModifier``
"""
from __future__ import annotations

import copy
import logging
import math
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple

from ..characters.jobs import Job, round_half_up
from ..errors import (
    InvalidJob,
    InvalidName,
    InvalidParticipant,
    InvalidVitality,
    MissingIdentity,
)

logger = logging.getLogger(__name__)

ID_FIELDS: Tuple[str, ...] = ("id", "_id")
VITALITY_FIELDS: Tuple[str, ...] = ("vitality", "hp", "health")
LEGACY_ATTACK_FIELDS: Tuple[str, ...] = ("attack_power", "attackModifier")
LEGACY_SPEED_FIELDS: Tuple[str, ...] = ("speed", "speedModifier")
ATTRIBUTE_FIELDS: Tuple[str, ...] = ("strength", "dexterity", "intelligence")

DEFAULT_MODIFIER = 5


def is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


def format_amount(value: float) -> str:
    """Render vitality/damage without a trailing .0 for whole numbers."""
    if is_number(value) and float(value).is_integer():
        return str(int(value))
    return str(value)


def _first_present(data: Mapping[str, Any], names: Tuple[str, ...]) -> Any:
    # Falsy values (0, False, "") count as absent.
    for name in names:
        value = data.get(name)
        if value:
            return value
    return None


def _first_positive(data: Mapping[str, Any], names: Tuple[str, ...]) -> Optional[float]:
    for name in names:
        value = data.get(name)
        if is_number(value) and value > 0:
            return value
    return None


def _first_number(data: Mapping[str, Any], names: Tuple[str, ...]) -> Optional[float]:
    for name in names:
        value = data.get(name)
        if is_number(value):
            return value
    return None


def as_record(raw: Any, label: str = "Participant") -> Mapping[str, Any]:
    """Return a mapping view of raw, which may be a mapping or expose to_dict()."""
    if isinstance(raw, Mapping):
        return raw
    to_dict = getattr(raw, "to_dict", None)
    if callable(to_dict):
        data = to_dict()
        if isinstance(data, Mapping):
            return data
    raise InvalidParticipant(f"{label} must be a structured record")


def derive_defense(job: Any, strength: float, dexterity: float, intelligence: float) -> int:
    """Job-specific defense, used when a stored entity has no defense of its own."""
    parsed = Job.parse(job)
    if parsed is Job.WARRIOR:
        value = strength * 0.6 + dexterity * 0.2
    elif parsed is Job.THIEF:
        value = dexterity * 0.5 + strength * 0.2
    elif parsed is Job.MAGE:
        value = intelligence * 0.3 + dexterity * 0.3
    else:
        value = strength * 0.4 + dexterity * 0.4
    return int(round_half_up(value))


def battle_ready_record(entity: Any, default: float = DEFAULT_MODIFIER) -> Dict[str, Any]:
    """Build an engine record from a stored entity.

    Unlike the engine's own normalization, a missing defense is derived from
    the entity's attributes rather than replaced by the flat default.
    """
    data = as_record(entity)
    record = copy.deepcopy(dict(data))
    record["id"] = _first_present(data, ID_FIELDS)
    record["vitality"] = _first_positive(data, VITALITY_FIELDS)
    record["level"] = data.get("level") or 1
    for attr in ATTRIBUTE_FIELDS:
        value = data.get(attr)
        record[attr] = value if is_number(value) and value else default
    if isinstance(record.get("job"), Job):
        record["job"] = record["job"].value

    existing = data.get("modifiers")
    modifiers = dict(existing) if isinstance(existing, Mapping) else {}
    if not is_number(modifiers.get("attack")):
        modifiers["attack"] = _first_number(data, LEGACY_ATTACK_FIELDS) or default
    if not is_number(modifiers.get("defense")):
        modifiers["defense"] = derive_defense(
            record.get("job"), record["strength"], record["dexterity"], record["intelligence"]
        )
    if not is_number(modifiers.get("speed")):
        modifiers["speed"] = _first_number(data, LEGACY_SPEED_FIELDS) or default
    record["modifiers"] = modifiers
    return record


@dataclass(frozen=True)
class Participant:
    """A validated, normalized battle entrant. Fighters are spawned from it."""

    id: str
    name: str
    job: str
    level: int
    vitality: float
    attack_power: float
    defense: float
    speed: float

    def spawn(self) -> "Fighter":
        return Fighter(
            id=self.id,
            name=self.name,
            job=self.job,
            level=self.level,
            vitality=self.vitality,
            attack_power=self.attack_power,
            defense=self.defense,
            speed=self.speed,
        )


@dataclass(frozen=True)
class FighterSnapshot:
    """Immutable state of a fighter when the battle ended."""

    id: str
    name: str
    job: str
    level: int
    vitality: float
    current_vitality: float
    attack_power: float
    defense: float
    speed: float

    @property
    def alive(self) -> bool:
        return self.current_vitality > 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "job": self.job,
            "level": self.level,
            "vitality": self.vitality,
            "current_vitality": self.current_vitality,
            "modifiers": {"attack": self.attack_power, "defense": self.defense, "speed": self.speed},
        }


@dataclass
class Fighter:
    """Mutable per-battle combatant; current_vitality starts at vitality."""

    id: str
    name: str
    job: str
    level: int
    vitality: float
    attack_power: float
    defense: float
    speed: float
    current_vitality: float = field(init=False)

    def __post_init__(self) -> None:
        self.current_vitality = self.vitality

    @property
    def alive(self) -> bool:
        return self.current_vitality > 0

    def take_damage(self, amount: int) -> int:
        """Apply damage, clamping vitality at zero. Returns the damage dealt."""
        if amount < 0:
            raise ValueError("damage must be non-negative")
        self.current_vitality = max(0, self.current_vitality - amount)
        return amount

    def snapshot(self) -> FighterSnapshot:
        return FighterSnapshot(
            id=self.id,
            name=self.name,
            job=self.job,
            level=self.level,
            vitality=self.vitality,
            current_vitality=self.current_vitality,
            attack_power=self.attack_power,
            defense=self.defense,
            speed=self.speed,
        )


def normalize_participant(
    raw: Any, label: str = "Participant", default: float = DEFAULT_MODIFIER
) -> Participant:
    """Validate a record and map it onto the canonical Participant.

    Identity, name, job and vitality problems raise the matching validation
    error. Missing or non-numeric modifiers are repaired instead: each of
    attack, defense and speed falls back to its legacy field, then to
    ``default``.
    """
    data = copy.deepcopy(dict(as_record(raw, label)))

    identity = _first_present(data, ID_FIELDS)
    if identity is None:
        raise MissingIdentity(f"{label} must have an id or _id property")

    name = data.get("name")
    if not isinstance(name, str) or not name:
        raise InvalidName(f"{label} must have a valid name")

    job = data.get("job")
    if isinstance(job, Job):
        job = job.value
    if not isinstance(job, str) or not job:
        raise InvalidJob(f"{label} must have a valid job")

    vitality = _first_positive(data, VITALITY_FIELDS)
    if vitality is None:
        raise InvalidVitality(f"{label} must have a positive vitality/hp/health value")

    legacy_attack = _first_number(data, LEGACY_ATTACK_FIELDS)
    legacy_speed = _first_number(data, LEGACY_SPEED_FIELDS)
    modifiers = data.get("modifiers")
    if not isinstance(modifiers, Mapping):
        if modifiers is not None:
            logger.warning("%s has a malformed modifiers field; rebuilding it.", name)
        modifiers = {}
    repaired = []
    resolved: Dict[str, float] = {}
    for key, legacy in (("attack", legacy_attack), ("defense", None), ("speed", legacy_speed)):
        value = modifiers.get(key)
        if is_number(value):
            resolved[key] = value
        else:
            resolved[key] = legacy if legacy is not None else default
            repaired.append(key)
    if repaired and modifiers:
        logger.info("Repaired %s modifier(s) for %s: %s", len(repaired), name, ", ".join(repaired))

    level = data.get("level")
    return Participant(
        id=str(identity),
        name=name,
        job=job,
        level=int(level) if is_number(level) else 1,
        vitality=vitality,
        attack_power=resolved["attack"],
        defense=resolved["defense"],
        speed=resolved["speed"],
    )
