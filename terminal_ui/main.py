"""The ``casino`` console script."""

import argparse
import dataclasses
import logging
import sys
from pathlib import Path
from typing import Sequence

from casino.config import AppConfig
from casino.game.state import RoundState
from casino.persistence import PersistenceError, SaveStore
from casino.session import CasinoSession
from casino.statistics import Statistics
from terminal_ui.console import Console
from terminal_ui.prompts import prompt_action, prompt_bet, prompt_insurance, prompt_yes_no
from terminal_ui.render import Narrator, format_statistics

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

COMMANDS = {
    "blackjack": "Play hands of blackjack",
    "stats": "Show lifetime statistics",
    "balance": "Show currency balance",
    "reset": "Clear game state and statistics",
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="casino", description="Play blackjack in the terminal.")
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log debug output, including every round event"
    )
    parser.add_argument(
        "--data-dir", type=Path, default=None, help="Directory holding the save and statistics files"
    )
    subparsers = parser.add_subparsers(dest="command")
    for name, help_text in COMMANDS.items():
        subparsers.add_parser(name, help=help_text)
    return parser


def configure_logging(level: str) -> None:
    logging.basicConfig(level=getattr(logging, level, logging.WARNING), format=LOG_FORMAT)


def play_round(session: CasinoSession, console: Console) -> bool:
    """
    Play one round to settlement.

    Returns:
        False if the player quit at the bet prompt
    """
    round_ = session.new_round()
    bet = prompt_bet(console, session.balance)
    if bet is None:
        session.abandon_round()
        return False

    Narrator(console, round_)
    if not round_.set_bet(bet):
        session.abandon_round()
        return True

    round_.initial_deal()
    if round_.state is RoundState.OFFERING_INSURANCE:
        if prompt_insurance(console, round_.insurance_cost):
            round_.place_insurance()
        else:
            round_.decline_insurance()

    while round_.state is RoundState.PLAYER_ACTIONS:
        action = prompt_action(
            console,
            round_.current_hand_index + 1,
            round_.current_hand,
            round_.available_actions(),
        )
        round_.perform(action)

    session.finish_round()
    return True


def play_blackjack(session: CasinoSession, console: Console) -> None:
    """Play rounds until the player quits or declines another hand."""
    console.print(f"Your money: {session.balance}")
    while play_round(session, console):
        console.print()
        if not prompt_yes_no(console, "Play another hand?", default=False):
            break
    console.print(f"You leave the table with {session.balance}.")


def show_stats(store: SaveStore, console: Console) -> None:
    snapshot = store.load_statistics()
    stats = snapshot.to_statistics() if snapshot else Statistics()
    for line in format_statistics(stats):
        console.print(line)


def show_balance(config: AppConfig, store: SaveStore, console: Console) -> None:
    session = CasinoSession.load(config, store)
    console.print(str(session.balance))


def reset(store: SaveStore, console: Console) -> None:
    removed = store.reset()
    if not removed:
        console.print("Nothing to reset.")
    for path in removed:
        console.print(f"Deleted {path}")


def main(argv: Sequence[str] | None = None, console: Console | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    console = console or Console()

    try:
        config = AppConfig()
        if args.data_dir is not None:
            config = dataclasses.replace(config, data_dir=args.data_dir.expanduser())
    except ValueError as exc:
        parser.error(f"invalid configuration: {exc}")

    configure_logging("DEBUG" if args.verbose else config.log_level)
    store = SaveStore(config.save_path, config.stats_path)
    command = args.command or "blackjack"
    logger.debug("Running %s with data in %s", command, config.data_dir)

    try:
        if command == "stats":
            show_stats(store, console)
        elif command == "balance":
            show_balance(config, store, console)
        elif command == "reset":
            reset(store, console)
        else:
            session = CasinoSession.load(config, store)
            play_blackjack(session, console)
    except PersistenceError as exc:
        logger.error("%s", exc)
        console.print(f"Error: {exc}")
        return 1
    except (EOFError, KeyboardInterrupt):
        # Mid-round: nothing was saved since the last finished round.
        console.print()
        console.print("The round is abandoned.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
