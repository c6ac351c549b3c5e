import sys
from pathlib import Path
from typing import Iterable, List

import pytest

# Ensure 'src' is on sys.path for test imports without installing the package
ROOT = Path(__file__).resolve().parents[1]
src = ROOT / "src"
if str(src) not in sys.path:
    sys.path.insert(0, str(src))


class SequenceRNG:
    """Random source replaying fixed values, optionally cycling through them."""

    def __init__(self, values: Iterable[float], cycle: bool = False) -> None:
        self.values: List[float] = list(values)
        self.cycle = cycle
        self.calls = 0

    def random(self) -> float:
        if self.calls >= len(self.values):
            if not self.cycle or not self.values:
                raise RuntimeError("random sequence exhausted")
            value = self.values[self.calls % len(self.values)]
        else:
            value = self.values[self.calls]
        self.calls += 1
        return value


@pytest.fixture()
def sequence_rng():
    """Factory fixture: sequence_rng([0.5, 0.1], cycle=False) -> SequenceRNG."""
    return SequenceRNG


@pytest.fixture()
def warrior_record():
    return {
        "_id": "1",
        "name": "TestWarrior",
        "job": "Warrior",
        "level": 1,
        "hp": 20,
        "modifiers": {"attack": 9, "defense": 8, "speed": 4},
    }


@pytest.fixture()
def mage_record():
    return {
        "_id": "2",
        "name": "TestMage",
        "job": "Mage",
        "level": 1,
        "hp": 12,
        "modifiers": {"attack": 15, "defense": 4, "speed": 3},
    }
