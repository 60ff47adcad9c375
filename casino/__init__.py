"""Casino core - money, cards, hands and the blackjack round engine."""

from casino.cards import Card, Rank, Shoe, Suit
from casino.hand import Hand
from casino.money import Money, MoneyParseError

__all__ = [
    "Card",
    "Rank",
    "Shoe",
    "Suit",
    "Hand",
    "Money",
    "MoneyParseError",
]
