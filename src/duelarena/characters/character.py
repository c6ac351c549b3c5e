from __future__ import annotations

import logging
import re
import uuid
from typing import Any, Dict, Optional, Union

from ..errors import InvalidJob, InvalidName
from .jobs import Job, base_stats, compute_modifiers, level_growth

logger = logging.getLogger(__name__)

NAME_PATTERN = re.compile(r"^[A-Za-z_]{4,15}$")


def is_valid_name(name: Any) -> bool:
    return isinstance(name, str) and NAME_PATTERN.fullmatch(name) is not None


def _require_job(job: Union[Job, str, None]) -> Job:
    parsed = Job.parse(job)
    if parsed is None:
        raise InvalidJob("Invalid job: must be Warrior, Thief, or Mage")
    return parsed


class Character:
    """A named, job-based entity with four base attributes.

    Identity (``uid``) and ``name`` are fixed at creation. ``record_id`` is
    left for the repository that persists the character. Attack power and
    speed are derived from the job and attributes on every read, so they can
    never go stale after a job change, a level-up or a direct attribute edit.
    """

    def __init__(self, name: str, job: Union[Job, str]) -> None:
        if not is_valid_name(name):
            raise InvalidName(
                "Invalid name: must be 4-15 characters long and contain only letters or underscores"
            )
        parsed = _require_job(job)

        self._uid = uuid.uuid4().hex
        self._name = name
        self.record_id: Optional[int] = None
        self.job = parsed
        self.level = 1

        stats = base_stats(parsed)
        self.vitality = stats.vitality
        self.strength = stats.strength
        self.dexterity = stats.dexterity
        self.intelligence = stats.intelligence
        logger.debug("Created %s the %s (uid=%s)", name, parsed.value, self._uid)

    @property
    def uid(self) -> str:
        return self._uid

    @property
    def name(self) -> str:
        return self._name

    @property
    def attack_power(self) -> float:
        return compute_modifiers(self.job, self.strength, self.dexterity, self.intelligence).attack_power

    @property
    def speed(self) -> float:
        return compute_modifiers(self.job, self.strength, self.dexterity, self.intelligence).speed

    def matches_id(self, identifier: Any) -> bool:
        """True if identifier equals either the creation id or the record id."""
        if identifier is None or identifier == "":
            return False
        wanted = str(identifier)
        if self._uid == wanted:
            return True
        return self.record_id is not None and str(self.record_id) == wanted

    def change_job(self, new_job: Union[Job, str]) -> "Character":
        """Switch job, keeping vitality and the three attributes untouched."""
        parsed = _require_job(new_job)
        logger.debug("%s changes job %s -> %s", self._name, self.job.value, parsed.value)
        self.job = parsed
        return self

    def level_up(self) -> "Character":
        """Increase level by one and apply the job's attribute growth."""
        growth = level_growth(self.job)
        self.level += 1
        self.vitality += growth.vitality
        self.strength += growth.strength
        self.dexterity += growth.dexterity
        self.intelligence += growth.intelligence
        logger.debug("%s reached level %d", self._name, self.level)
        return self

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self._uid,
            "record_id": self.record_id,
            "name": self._name,
            "job": self.job.value,
            "level": self.level,
            "vitality": self.vitality,
            "strength": self.strength,
            "dexterity": self.dexterity,
            "intelligence": self.intelligence,
            "attack_power": self.attack_power,
            "speed": self.speed,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Character":
        """Restore a stored character without re-applying base stats."""
        character = cls(data["name"], data["job"])
        if data.get("id"):
            character._uid = str(data["id"])
        record_id = data.get("record_id")
        character.record_id = int(record_id) if record_id is not None else None
        character.level = int(data.get("level", 1))
        character.vitality = int(data.get("vitality", character.vitality))
        character.strength = int(data.get("strength", character.strength))
        character.dexterity = int(data.get("dexterity", character.dexterity))
        character.intelligence = int(data.get("intelligence", character.intelligence))
        return character

    def __repr__(self) -> str:  # pragma: no cover - cosmetic
        return (
            f"Character(name={self._name!r}, job={self.job.value!r}, level={self.level}, "
            f"vitality={self.vitality})"
        )
