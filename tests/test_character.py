import pytest

from duelarena.characters import Character, Job, available_jobs, compute_modifiers, job_details
from duelarena.characters.jobs import level_growth, round_half_up
from duelarena.errors import InvalidJob, InvalidName


def test_warrior_base_stats_and_modifiers():
    c = Character("Conan", "Warrior")
    assert c.job is Job.WARRIOR
    assert c.level == 1
    assert (c.vitality, c.strength, c.dexterity, c.intelligence) == (20, 10, 5, 5)
    assert c.attack_power == pytest.approx(9)
    assert c.speed == pytest.approx(4)


def test_thief_and_mage_base_modifiers():
    thief = Character("Shade", Job.THIEF)
    assert thief.attack_power == pytest.approx(12)
    assert thief.speed == pytest.approx(8)

    mage = Character("Merlin", "Mage")
    assert mage.attack_power == pytest.approx(14.2)
    assert mage.speed == pytest.approx(2.9)


@pytest.mark.parametrize("name", ["abc", "a" * 16, "bad name", "name1", "", None, "Élan"])
def test_invalid_names_rejected(name):
    with pytest.raises(InvalidName):
        Character(name, "Warrior")


@pytest.mark.parametrize("name", ["abcd", "a" * 15, "Dark_Knight", "____"])
def test_boundary_names_accepted(name):
    assert Character(name, "Thief").name == name


@pytest.mark.parametrize("job", ["Paladin", "warrior", "", None])
def test_invalid_jobs_rejected(job):
    with pytest.raises(InvalidJob):
        Character("Conan", job)


def test_ids_are_unique_and_read_only():
    a = Character("Alpha", "Warrior")
    b = Character("Bravo", "Warrior")
    assert a.uid != b.uid
    with pytest.raises(AttributeError):
        a.uid = "x"  # type: ignore[misc]
    with pytest.raises(AttributeError):
        a.name = "Other"  # type: ignore[misc]


def test_level_up_warrior():
    c = Character("Conan", "Warrior")
    assert c.level_up() is c
    assert c.level == 2
    assert (c.vitality, c.strength, c.dexterity, c.intelligence) == (25, 12, 6, 6)
    assert c.attack_power == pytest.approx(10.8)
    assert c.speed == pytest.approx(4.8)


def test_level_up_thief_and_mage_growth():
    thief = Character("Shade", "Thief").level_up()
    assert (thief.vitality, thief.strength, thief.dexterity, thief.intelligence) == (18, 5, 12, 5)
    assert thief.attack_power == pytest.approx(14.5)
    assert thief.speed == pytest.approx(9.6)

    mage = Character("Merlin", "Mage").level_up()
    assert (mage.vitality, mage.strength, mage.dexterity, mage.intelligence) == (14, 6, 7, 12)
    assert mage.attack_power == pytest.approx(17)
    assert mage.speed == pytest.approx(3.4)


def test_change_job_keeps_attributes_and_recomputes():
    c = Character("Conan", "Warrior")
    assert c.change_job("Mage") is c
    assert c.job is Job.MAGE
    assert (c.vitality, c.strength, c.dexterity, c.intelligence) == (20, 10, 5, 5)
    assert c.attack_power == pytest.approx(9)
    assert c.speed == pytest.approx(3)


def test_change_job_invalid_leaves_character_untouched():
    c = Character("Conan", "Warrior")
    with pytest.raises(InvalidJob):
        c.change_job("Bard")
    assert c.job is Job.WARRIOR


def test_modifiers_follow_direct_attribute_edits():
    c = Character("Shade", "Thief")
    c.dexterity = 20
    assert c.attack_power == pytest.approx(22)
    assert c.speed == pytest.approx(16)


def test_mage_attack_override_near_sixteen_point_six():
    mage = Character("Merlin", "Mage")
    mage.intelligence = 12  # 0.2*5 + 0.2*6 + 1.2*12 = 16.6
    assert mage.attack_power == 17

    warrior = Character("Conan", "Warrior")
    warrior.strength, warrior.dexterity = 18, 11  # 14.4 + 2.2 = 16.6, not a Mage
    assert warrior.attack_power == pytest.approx(16.6)


def test_modifiers_are_pure():
    first = compute_modifiers("Thief", 7, 13, 3)
    second = compute_modifiers(Job.THIEF, 7, 13, 3)
    assert first == second


def test_default_formula_for_unknown_job():
    mods = compute_modifiers("Paladin", 6, 6, 6)
    assert mods.attack_power == pytest.approx(6.0)
    assert mods.speed == pytest.approx(5.4)
    growth = level_growth("Paladin")
    assert (growth.vitality, growth.strength, growth.dexterity, growth.intelligence) == (0, 0, 0, 0)


def test_rounding_to_two_decimals():
    assert compute_modifiers("Warrior", 3, 7, 1).attack_power == pytest.approx(3.8)
    assert compute_modifiers("Thief", 1, 1, 1).attack_power == pytest.approx(1.5)
    assert round_half_up(0.125, 2) == pytest.approx(0.13)
    assert round_half_up(4.5) == 5


def test_available_jobs_order():
    assert available_jobs() == ("Warrior", "Thief", "Mage")


def test_job_details():
    details = job_details()
    assert [d["name"] for d in details] == ["Warrior", "Thief", "Mage"]
    warrior = details[0]
    assert warrior["vitality"] == 20
    assert warrior["attack_formula"] == "80% of strength + 20% of dexterity"
    assert job_details("Mage")[0]["speed_formula"] == "40% of dexterity + 10% of strength"
    assert job_details("Paladin") == []


def test_serialization_roundtrip_keeps_identity():
    c = Character("Merlin", "Mage").level_up()
    c.record_id = 7
    data = c.to_dict()
    assert data["attack_power"] == pytest.approx(17)
    restored = Character.from_dict(data)
    assert restored.uid == c.uid
    assert restored.record_id == 7
    assert restored.level == 2
    assert restored.intelligence == 12
    assert restored.matches_id(7) and restored.matches_id("7") and restored.matches_id(c.uid)
    assert not restored.matches_id("8")
    assert not restored.matches_id(None)
