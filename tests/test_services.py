import pytest

from duelarena.config import ArenaConfig
from duelarena.core.rng import RNG
from duelarena.errors import (
    DuplicateParticipant,
    InvalidJob,
    InvalidName,
    InvalidParticipant,
    MissingParticipant,
    NotFound,
    SimulationError,
)
from duelarena.persistence import InMemoryCharacterRepository
from duelarena.services import BattleService, CharacterService


@pytest.fixture()
def repo():
    return InMemoryCharacterRepository()


@pytest.fixture()
def characters(repo):
    return CharacterService(repo)


def test_battle_applies_winner_vitality(repo, characters, sequence_rng):
    conan = characters.create("Conan", "Warrior")
    shade = characters.create("Shade", "Thief")
    service = BattleService(repo, rng=sequence_rng([0.9, 0.1, 0.9, 0.0], cycle=True))

    summary = service.start_battle(conan.uid, shade.uid)

    assert summary.battle_id == 1
    assert summary.winner.id == conan.uid
    assert summary.winner.remaining_vitality == 18
    assert summary.loser.name == "Shade"
    assert summary.rounds == 3
    assert summary.battle_log[-1] == "Conan wins the battle! Conan still has 18 HP remaining!"
    assert repo.find_by_id(conan.uid).vitality == 18
    assert repo.find_by_id(shade.uid).vitality == 15


def test_battle_by_record_id(repo, characters):
    a = characters.create("Alpha", "Mage")
    b = characters.create("Bravo", "Thief")
    summary = BattleService(repo, rng=RNG(seed=7)).start_battle(1, "2")
    winner = repo.find_by_id(summary.winner.id)
    assert winner in (a, b)
    assert winner.vitality == summary.winner.remaining_vitality


def test_battle_history(repo, characters):
    a = characters.create("Alpha", "Warrior")
    b = characters.create("Bravo", "Thief")
    service = BattleService(repo, rng=RNG(seed=1))
    service.start_battle(a.uid, b.uid)
    service.start_battle(b.uid, a.uid)

    battles = service.list_battles()
    assert [r.id for r in battles] == [1, 2]
    record = service.get_battle(2)
    assert record.first_id == b.uid
    assert {record.winner_id, record.loser_id} == {a.uid, b.uid}
    assert record.battle_log[0].endswith("begins!")
    with pytest.raises(NotFound):
        service.get_battle(3)


@pytest.mark.parametrize("first, second", [(None, "1"), ("1", None), ("", "1"), ("1", "  ")])
def test_battle_requires_both_ids(repo, first, second):
    with pytest.raises(MissingParticipant):
        BattleService(repo).start_battle(first, second)


@pytest.mark.parametrize("first, second", [(1.5, "1"), ("1", ["2"]), (True, "2"), ("1", {"id": 2})])
def test_battle_rejects_ids_of_the_wrong_type(repo, characters, first, second):
    characters.create("Alpha", "Warrior")
    characters.create("Bravo", "Thief")
    with pytest.raises(InvalidParticipant, match="strings or integers"):
        BattleService(repo).start_battle(first, second)


def test_battle_rejects_same_character(repo, characters):
    a = characters.create("Alpha", "Warrior")
    service = BattleService(repo)
    with pytest.raises(DuplicateParticipant):
        service.start_battle(a.uid, a.uid)
    # Same character through its two identities
    with pytest.raises(DuplicateParticipant):
        service.start_battle(a.uid, a.record_id)


def test_battle_unknown_character(repo, characters):
    a = characters.create("Alpha", "Warrior")
    with pytest.raises(NotFound, match="Character with ID 42 not found"):
        BattleService(repo).start_battle(a.uid, 42)


def test_simulation_failure_leaves_characters_untouched(repo, characters, sequence_rng):
    a = characters.create("Alpha", "Warrior")
    b = characters.create("Bravo", "Thief")
    service = BattleService(repo, rng=sequence_rng([]))
    with pytest.raises(SimulationError):
        service.start_battle(a.uid, b.uid)
    assert (a.vitality, b.vitality) == (20, 15)
    assert service.list_battles() == []


def test_battle_uses_configured_round_limit(repo, characters, sequence_rng):
    a = characters.create("Alpha", "Warrior")
    b = characters.create("Bravo", "Warrior")
    config = ArenaConfig.from_dict({"combat": {"max_rounds": 2}})
    # Zero rolls: every strike deals the minimum of 1
    summary = BattleService(repo, rng=sequence_rng([0.0], cycle=True), config=config).start_battle(a.uid, b.uid)
    assert summary.rounds == 2
    assert summary.round_limit_reached is True
    assert summary.winner.id == a.uid
    assert a.vitality == 18
    assert b.vitality == 20


def test_character_service_crud(characters):
    c = characters.create("Merlin", "Mage")
    assert characters.get(c.record_id) is c
    assert characters.list() == [c]

    characters.change_job(c.uid, "Warrior")
    assert c.job.value == "Warrior"
    characters.level_up(c.uid)
    assert c.level == 2 and c.vitality == 17

    characters.delete(c.uid)
    with pytest.raises(NotFound):
        characters.get(c.uid)
    with pytest.raises(NotFound):
        characters.delete(c.uid)


def test_character_service_validation(characters):
    with pytest.raises(InvalidName):
        characters.create("x", "Mage")
    c = characters.create("Merlin", "Mage")
    with pytest.raises(InvalidJob):
        characters.change_job(c.uid, "Bard")
    assert characters.list() == [c]


def test_character_service_job_catalog():
    assert CharacterService.available_jobs() == ("Warrior", "Thief", "Mage")
    assert len(CharacterService.job_details()) == 3
