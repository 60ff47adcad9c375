"""Prompts that turn typed answers into bets and decisions."""

from casino.game.actions import PlayerAction
from casino.hand import Hand
from casino.money import Money, MoneyParseError
from terminal_ui.console import Console

QUIT_WORDS = ("q", "quit", "exit")
YES_WORDS = ("y", "yes")
NO_WORDS = ("n", "no")


def prompt_bet(console: Console, bankroll: Money) -> Money | None:
    """
    Ask for a bet until a stakeable amount is given.

    Returns:
        The bet, or None if the player quit (``q`` or end of input)
    """
    while True:
        try:
            text = console.input(f"How much will you bet? (you have {bankroll}, q to quit) ")
        except EOFError:
            return None

        text = text.strip()
        if text.lower() in QUIT_WORDS:
            return None

        try:
            amount = Money.parse(text)
        except MoneyParseError:
            console.print("That is not an amount of money, try again.")
            continue

        if not amount.is_positive or amount > bankroll:
            console.print("You can't bet that amount, try again.")
            continue
        return amount


def prompt_yes_no(console: Console, question: str, default: bool = False) -> bool:
    """Ask a y/n question. An empty answer or end of input gives ``default``."""
    hint = "[Y/n]" if default else "[y/N]"
    while True:
        try:
            text = console.input(f"{question} {hint} ").strip().lower()
        except EOFError:
            return default

        if not text:
            return default
        if text in YES_WORDS:
            return True
        if text in NO_WORDS:
            return False
        console.print("Please answer y or n.")


def prompt_insurance(console: Console, cost: Money) -> bool:
    return prompt_yes_no(console, f"The dealer shows an Ace. Insure for {cost}?")


def parse_action(text: str, actions: list[PlayerAction]) -> PlayerAction | None:
    """Match a menu number, an action name or its first letter."""
    text = text.strip().lower()
    if text.isdigit():
        index = int(text) - 1
        return actions[index] if 0 <= index < len(actions) else None

    for action in actions:
        names = (action.value, action.name.lower(), action.label.lower())
        if text in names or text == action.value[0]:
            return action
    return None


def prompt_action(
    console: Console,
    hand_number: int,
    hand: Hand,
    actions: list[PlayerAction],
) -> PlayerAction:
    """
    Offer the available actions for a hand as a numbered menu.

    Raises:
        EOFError: When input runs out mid-round.
    """
    console.print(f"Hand № {hand_number}: {hand}")
    for number, action in enumerate(actions, start=1):
        console.print(f"  {number}. {action.label}")

    while True:
        choice = parse_action(
            console.input(f"What will you do with hand № {hand_number}? "), actions
        )
        if choice is not None:
            return choice
        console.print("Pick one of the listed actions.")
