"""Narrates round events to the console."""

from casino.game.engine import BlackjackRound
from casino.game.events import EventType, GameEvent
from casino.money import Money
from casino.statistics import Statistics
from terminal_ui.console import Console

LABEL_WIDTH = 25
VALUE_WIDTH = 15

GIFT_STORY = (
    "* Unfortunately, you've run out of money.",
    "* However, a portly gentleman in a sharp suit was watching you play your final hand.",
    '* He says "I like your moxie, kiddo. Take this, and be a little more careful'
    " next time. This stuff doesn't grow on trees.\"",
    '* "Oh, and always remember the name: MISTER GREEN!"',
)


def aside(text: str) -> str:
    """Stage directions are prefixed with an asterisk."""
    return f"* {text}"


class Narrator:
    """
    Subscribes to a round and prints what happens in it.

    Only the console front end narrates; the engine itself never prints.
    """

    def __init__(self, console: Console, round_: BlackjackRound) -> None:
        self.console = console
        self.round = round_
        round_.subscribe(self.handle_event)

    @property
    def _balance(self) -> Money:
        return self.round.bankroll.balance

    def say(self, text: str = "") -> None:
        self.console.print(text)

    def show_dealer(self) -> None:
        self.say(f"Dealer's hand: {self.round.dealer_hand}")

    def show_hand(self, index: int) -> None:
        hand = self.round.player_hands[index]
        self.say(f"Hand № {index + 1}: {hand}")

    def handle_event(self, event: GameEvent) -> None:
        etype = event.event_type
        data = event.data

        if etype == EventType.BET_PLACED:
            self.say(f"Betting {data['amount']}")
        elif etype == EventType.SHOE_SHUFFLED:
            self.say(aside("The dealer shuffles a fresh shoe."))
        elif etype == EventType.ROUND_STARTED:
            self.say(aside("The dealer issues your cards."))
            self.show_dealer()
            self.say(f"Your hand: {self.round.player_hands[0]}")
        elif etype == EventType.PLAYER_BLACKJACK:
            self.say("You have a natural blackjack!")
        elif etype == EventType.INSURANCE_TAKEN:
            self.say(f"You make an additional {data['amount']} insurance bet.")
        elif etype == EventType.INSURANCE_DECLINED:
            self.say("You choose to forego making an insurance bet.")
        elif etype in (EventType.PLAYER_HIT, EventType.PLAYER_DOUBLE):
            self.say(aside("The dealer hands you another card."))
            self.show_hand(data["hand_index"])
        elif etype == EventType.PLAYER_SPLIT:
            self.say(aside("The dealer hands you another two cards."))
            self.show_hand(data["hand_index"])
            self.show_hand(data["hand_index"] + 1)
        elif etype == EventType.PLAYER_BUSTS:
            self.say(
                f"HAND № {data['hand_index'] + 1} BUST! You lose {data['amount']}. "
                f"You now have {self._balance}"
            )
        elif etype == EventType.DEALER_REVEALS:
            self.say(aside("Hole card revealed!"))
            self.show_dealer()
        elif etype == EventType.DEALER_HITS:
            self.say(aside("The dealer issues themself another card."))
            self.show_dealer()
        elif etype == EventType.PLAYER_WINS:
            self._announce_win(data)
        elif etype == EventType.PUSH:
            self.say("PUSH! Nobody wins.")
        elif etype == EventType.PLAYER_LOSES:
            self.say(f"HOUSE WINS! You lose {data['amount']}. You now have {self._balance}")
        elif etype == EventType.INSURANCE_WINS:
            self.say(
                f"DEALER BLACKJACK! Your insurance bet pays out {data['amount']}. "
                f"You now have {self._balance}."
            )
        elif etype == EventType.INSURANCE_LOSES:
            self.say(f"No dealer blackjack. Your {data['amount']} insurance bet is lost.")
        elif etype == EventType.STARTING_GIFT:
            for line in GIFT_STORY:
                self.say(line)
            self.say(aside(f"The man hands you {data['amount']}"))
        elif etype == EventType.INVALID_ACTION:
            self.say(data.get("message", "You can't do that now."))
        elif etype == EventType.INSUFFICIENT_FUNDS:
            self.say(f"You can't afford that. You have {data['available']}.")

    def _announce_win(self, data: dict) -> None:
        if data.get("dealer_bust"):
            headline = "DEALER BUST!"
        elif data.get("blackjack"):
            headline = "BLACKJACK!"
        else:
            headline = "YOU WIN!"
        self.say(f"{headline} You receive {data['amount']}. You now have {self._balance}")


def leader_line(label: str, value: object, indent: int = 0) -> str:
    """Format ``label......value`` padded to a fixed width."""
    pad = " " * indent
    return f"{pad}{label:.<{LABEL_WIDTH - indent}}{str(value):.>{VALUE_WIDTH}}"


def format_statistics(stats: Statistics) -> list[str]:
    """Render lifetime statistics as a dotted-leader table."""
    bj = stats.blackjack
    return [
        leader_line("Most money in the bank", stats.biggest_bankroll),
        leader_line("Times hit bankruptcy", stats.times_bankrupted),
        "",
        "Blackjack",
        leader_line("Hands played", stats.hands_played, indent=2),
        leader_line("Hands won", bj.hands_won, indent=2),
        leader_line("Hands lost", bj.hands_lost, indent=2),
        leader_line("Hands tied", bj.hands_push, indent=2),
        leader_line("Total money won", bj.money_won, indent=2),
        leader_line("Total money lost", bj.money_lost, indent=2),
        leader_line("Biggest win", bj.biggest_win, indent=2),
        leader_line("Biggest loss", bj.biggest_loss, indent=2),
    ]
