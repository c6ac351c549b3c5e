from __future__ import annotations

import logging
from typing import Any, Dict, List, Tuple, Union

from ..characters.character import Character
from ..characters.jobs import Job, available_jobs, job_details
from ..errors import NotFound
from ..persistence.repository import CharacterRepository

logger = logging.getLogger(__name__)


class CharacterService:
    """Create, progress and remove characters held by a repository."""

    def __init__(self, repository: CharacterRepository) -> None:
        self.repository = repository

    def create(self, name: str, job: Union[Job, str]) -> Character:
        character = self.repository.save(Character(name, job))
        logger.info("Created %s the %s (record %s)", character.name, character.job.value, character.record_id)
        return character

    def list(self) -> List[Character]:
        return self.repository.list()

    def get(self, identifier: Any) -> Character:
        character = self.repository.find_by_id(identifier)
        if character is None:
            raise NotFound(f"Character with ID {identifier} not found")
        return character

    def change_job(self, identifier: Any, job: Union[Job, str]) -> Character:
        character = self.get(identifier)
        if Job.parse(job) is not character.job:
            character.change_job(job)
            self.repository.save(character)
        return character

    def level_up(self, identifier: Any) -> Character:
        character = self.get(identifier).level_up()
        return self.repository.save(character)

    def delete(self, identifier: Any) -> None:
        if not self.repository.delete(identifier):
            raise NotFound(f"Character with ID {identifier} not found")

    @staticmethod
    def available_jobs() -> Tuple[str, ...]:
        return available_jobs()

    @staticmethod
    def job_details() -> List[Dict[str, object]]:
        return job_details()
