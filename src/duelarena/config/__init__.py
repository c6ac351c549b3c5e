from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass, field
from importlib import resources
from pathlib import Path
from typing import Optional

import yaml

from ..errors import ConfigError

logger = logging.getLogger(__name__)


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(frozen=True)
class CombatSettings:
    """Tunables of the round loop.

    Attributes:
        max_rounds: Rounds simulated before the battle is forced to resolve.
        defense_divisor: Defense is divided (and floored) by this before mitigation.
        minimum_damage: Damage floor applied to every strike.
        default_modifier: Fallback for missing attack/defense/speed modifiers.
    """

    max_rounds: int = 100
    defense_divisor: int = 3
    minimum_damage: int = 1
    default_modifier: float = 5

    def __post_init__(self) -> None:
        if not _is_int(self.max_rounds) or self.max_rounds < 1:
            raise ConfigError("combat.max_rounds must be a positive integer")
        if not _is_int(self.defense_divisor) or self.defense_divisor < 1:
            raise ConfigError("combat.defense_divisor must be a positive integer")
        if not _is_int(self.minimum_damage) or self.minimum_damage < 1:
            raise ConfigError("combat.minimum_damage must be a positive integer")
        modifier = self.default_modifier
        if isinstance(modifier, bool) or not isinstance(modifier, (int, float)) or modifier < 0:
            raise ConfigError("combat.default_modifier must be a non-negative number")


@dataclass(frozen=True)
class ArenaConfig:
    combat: CombatSettings = field(default_factory=CombatSettings)

    @staticmethod
    def _load_yaml(path: Path) -> dict:
        try:
            with path.open("r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ConfigError(f"Config file {path} is not valid YAML: {exc}") from exc
        if not isinstance(data, dict):
            raise ConfigError(f"Config file {path} must contain a mapping at the top level")
        return data

    @classmethod
    def _deep_merge(cls, base: dict, overlay: dict) -> dict:
        merged = dict(base)
        for k, v in (overlay or {}).items():
            if isinstance(v, dict) and isinstance(base.get(k), dict):
                merged[k] = cls._deep_merge(base[k], v)
            else:
                merged[k] = v
        return merged

    @classmethod
    def from_dict(cls, data: dict) -> "ArenaConfig":
        if not isinstance(data, dict):
            raise ConfigError("configuration must be a mapping")
        combat = data.get("combat") or {}
        if not isinstance(combat, dict):
            raise ConfigError("combat settings must be a mapping")
        try:
            return cls(combat=CombatSettings(**combat))
        except TypeError as exc:
            raise ConfigError(f"Unknown combat setting: {exc}") from exc

    @classmethod
    def load(cls, user_path: Optional[Path] = None) -> "ArenaConfig":
        """Load the packaged defaults and overlay an optional user YAML file."""
        try:
            with resources.files("duelarena.config").joinpath("default_config.yaml").open(
                "r", encoding="utf-8"
            ) as f:
                default_data = yaml.safe_load(f) or {}
        except FileNotFoundError:
            logger.warning("Default config not found; falling back to dataclass defaults.")
            default_data = dataclasses.asdict(ArenaConfig())

        user_data = {}
        if user_path is not None:
            user_path = Path(user_path)
            if user_path.exists():
                user_data = cls._load_yaml(user_path)
                logger.info("Loaded user config from %s", user_path)
            else:
                logger.warning("User config file not found: %s", user_path)

        config = cls.from_dict(cls._deep_merge(default_data, user_data))
        logger.debug("Config merged: %s", config)
        return config


__all__ = ["ArenaConfig", "CombatSettings"]
