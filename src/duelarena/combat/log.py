from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple
import logging

logger = logging.getLogger(__name__)

# Event types that are forwarded to standard logging at INFO; the rest go to DEBUG.
NOTABLE_EVENTS = frozenset({"defeat", "draw", "result"})


@dataclass(frozen=True)
class BattleEvent:
    """A log event emitted during a battle.

    Event types: "start", "round", "initiative", "attack", "defeat", "draw", "result".
    """

    type: str
    message: str
    data: Optional[Dict[str, Any]] = None


class BattleLog:
    """In-memory, ordered record of one battle."""

    def __init__(self) -> None:
        self._events: List[BattleEvent] = []

    def add(self, event_type: str, message: str, **data: Any) -> BattleEvent:
        ev = BattleEvent(type=event_type, message=message, data=data or None)
        self._events.append(ev)
        # Forward to standard logging for visibility if configured.
        if event_type in NOTABLE_EVENTS:
            logger.info(message)
        else:
            logger.debug(message)
        return ev

    def events(self) -> List[BattleEvent]:
        return list(self._events)

    def lines(self) -> Tuple[str, ...]:
        return tuple(ev.message for ev in self._events)
