import argparse
import logging
import sys
from pathlib import Path

from .config import ArenaConfig
from .core.rng import RNG
from .errors import ArenaError
from .persistence import JsonCharacterRepository, default_store_path
from .services import BattleService, CharacterService
from .utils.logging import configure_logging

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog="duelarena",
        description="Duel Arena - create characters and let them fight turn-based duels",
    )
    parser.add_argument(
        "--store",
        dest="store_path",
        type=Path,
        default=None,
        help="Path to the JSON character store (defaults to the user data directory).",
    )
    parser.add_argument(
        "--config",
        dest="config_path",
        type=Path,
        default=None,
        help="Path to a YAML file overriding the default combat configuration.",
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed battles for reproducible results.")
    parser.add_argument("--debug", action="store_true", help="Enable verbose debug logging.")

    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("jobs", help="List the available jobs and their formulas.")
    create = sub.add_parser("create", help="Create a new character.")
    create.add_argument("name")
    create.add_argument("job")
    sub.add_parser("list", help="List stored characters.")
    show = sub.add_parser("show", help="Show one character.")
    show.add_argument("id")
    change = sub.add_parser("change-job", help="Change a character's job.")
    change.add_argument("id")
    change.add_argument("job")
    level = sub.add_parser("level-up", help="Level a character up.")
    level.add_argument("id")
    delete = sub.add_parser("delete", help="Delete a character.")
    delete.add_argument("id")
    battle = sub.add_parser("battle", help="Fight two characters.")
    battle.add_argument("first_id")
    battle.add_argument("second_id")
    return parser.parse_args(argv)


def _describe(character) -> str:
    return (
        f"[{character.record_id}] {character.name} - {character.job.value} lv{character.level} "
        f"VIT {character.vitality} STR {character.strength} DEX {character.dexterity} "
        f"INT {character.intelligence} | ATK {character.attack_power} SPD {character.speed}"
    )


def run(args, out=sys.stdout) -> int:
    config = ArenaConfig.load(user_path=args.config_path)
    repository = JsonCharacterRepository(args.store_path or default_store_path())
    characters = CharacterService(repository)

    if args.command == "jobs":
        for details in characters.job_details():
            print(
                f"{details['name']}: VIT {details['vitality']} STR {details['strength']} "
                f"DEX {details['dexterity']} INT {details['intelligence']} | "
                f"attack = {details['attack_formula']}; speed = {details['speed_formula']}",
                file=out,
            )
    elif args.command == "create":
        print(_describe(characters.create(args.name, args.job)), file=out)
    elif args.command == "list":
        for character in characters.list():
            print(_describe(character), file=out)
    elif args.command == "show":
        print(_describe(characters.get(args.id)), file=out)
    elif args.command == "change-job":
        print(_describe(characters.change_job(args.id, args.job)), file=out)
    elif args.command == "level-up":
        print(_describe(characters.level_up(args.id)), file=out)
    elif args.command == "delete":
        characters.delete(args.id)
        print(f"Deleted {args.id}", file=out)
    elif args.command == "battle":
        rng = RNG(seed=args.seed) if args.seed is not None else None
        summary = BattleService(repository, rng=rng, config=config).start_battle(args.first_id, args.second_id)
        for line in summary.battle_log:
            print(line, file=out)
    return 0


def main(argv=None) -> int:
    args = parse_args(argv)
    configure_logging(level=logging.DEBUG if args.debug else logging.WARNING)
    try:
        return run(args)
    except ArenaError as exc:
        logger.error("%s", exc)
        return 1
