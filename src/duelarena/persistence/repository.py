from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol

from ..characters.character import Character
from ..errors import ArenaError, PersistenceError

logger = logging.getLogger(__name__)


class CharacterRepository(Protocol):
    """Storage contract used by the services; the engine never touches it."""

    def find_by_id(self, identifier: Any) -> Optional[Character]: ...

    def save(self, character: Character) -> Character: ...

    def list(self) -> List[Character]: ...

    def delete(self, identifier: Any) -> bool: ...


class InMemoryCharacterRepository:
    """List-backed store; lookups match either the uid or the record id.

    The first save of a character assigns it the next sequential record id.
    """

    def __init__(self) -> None:
        self._characters: List[Character] = []

    def _next_record_id(self) -> int:
        ids = [c.record_id for c in self._characters if c.record_id is not None]
        return max(ids) + 1 if ids else 1

    def find_by_id(self, identifier: Any) -> Optional[Character]:
        for character in self._characters:
            if character.matches_id(identifier):
                return character
        return None

    def save(self, character: Character) -> Character:
        if character.record_id is None:
            character.record_id = self._next_record_id()
        for i, existing in enumerate(self._characters):
            if existing.uid == character.uid:
                self._characters[i] = character
                break
        else:
            self._characters.append(character)
        logger.debug("Saved %s as record %s", character.name, character.record_id)
        return character

    def list(self) -> List[Character]:
        return list(self._characters)

    def delete(self, identifier: Any) -> bool:
        for i, character in enumerate(self._characters):
            if character.matches_id(identifier):
                del self._characters[i]
                logger.debug("Deleted %s (record %s)", character.name, character.record_id)
                return True
        return False

    def __len__(self) -> int:
        return len(self._characters)


class JsonCharacterRepository(InMemoryCharacterRepository):
    """JSON-file-backed store.

    The whole collection is loaded on construction and rewritten atomically
    (temp file + os.replace) after every save or delete.
    """

    VERSION = 1

    def __init__(self, path: Path) -> None:
        super().__init__()
        self.path = Path(path)
        self._load()

    def _load(self) -> None:
        if not self.path.exists():
            logger.debug("No character store at %s yet", self.path)
            return
        try:
            payload = json.loads(self.path.read_text(encoding="utf-8"))
            records = payload.get("characters", [])
            self._characters = [Character.from_dict(r) for r in records]
        except (OSError, ValueError, KeyError, AttributeError, ArenaError) as exc:
            raise PersistenceError(f"Failed to read character store {self.path}: {exc}") from exc
        logger.info("Loaded %d character(s) from %s", len(self._characters), self.path)

    def _write(self) -> None:
        payload: Dict[str, Any] = {
            "version": self.VERSION,
            "characters": [c.to_dict() for c in self._characters],
        }
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2, sort_keys=True)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, self.path)
        except OSError as exc:
            raise PersistenceError(f"Failed to write character store {self.path}: {exc}") from exc
        logger.debug("Wrote %d character(s) to %s", len(self._characters), self.path)

    def save(self, character: Character) -> Character:
        saved = super().save(character)
        self._write()
        return saved

    def delete(self, identifier: Any) -> bool:
        deleted = super().delete(identifier)
        if deleted:
            self._write()
        return deleted
