from __future__ import annotations

from datetime import datetime, timezone
from typing import List, Union

from pydantic import BaseModel, Field, field_validator, model_validator

Identifier = Union[str, int]


class BattleRequest(BaseModel):
    """Two character ids to pit against each other."""

    first_id: Identifier = Field(..., description="ID of the first character")
    second_id: Identifier = Field(..., description="ID of the second character")

    @field_validator("first_id", "second_id", mode="before")
    @classmethod
    def reject_booleans(cls, v):
        if isinstance(v, bool):
            raise ValueError("Character IDs must be strings or integers")
        return v

    @field_validator("first_id", "second_id")
    @classmethod
    def ensure_not_blank(cls, v: Identifier) -> Identifier:
        if isinstance(v, str) and not v.strip():
            raise ValueError("Both character IDs are required")
        return v

    @model_validator(mode="after")
    def ensure_distinct(self) -> "BattleRequest":
        if str(self.first_id) == str(self.second_id):
            raise ValueError("A character cannot battle itself")
        return self


class WinnerSummary(BaseModel):
    id: str = Field(..., description="ID of the winning character")
    name: str
    job: str
    remaining_vitality: float = Field(..., description="Vitality left after the battle")


class LoserSummary(BaseModel):
    id: str = Field(..., description="ID of the losing character")
    name: str
    job: str


class BattleSummary(BaseModel):
    """What a caller gets back after a battle has been fought and applied."""

    battle_id: int
    winner: WinnerSummary
    loser: LoserSummary
    rounds: int = Field(..., description="Number of rounds the battle lasted")
    round_limit_reached: bool = False
    battle_log: List[str] = Field(default_factory=list)


class BattleRecord(BaseModel):
    """Entry of the battle history."""

    id: int
    first_id: str
    second_id: str
    winner_id: str
    loser_id: str
    battle_log: List[str] = Field(default_factory=list)
    date: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
