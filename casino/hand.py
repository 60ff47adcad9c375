"""Hand evaluation for blackjack."""

from dataclasses import dataclass, field
from typing import Iterator

from casino.cards import FACE_DOWN_GLYPH, Card
from casino.money import Money

BLACKJACK = 21


@dataclass
class Hand:
    """
    A player or dealer hand.

    ``hidden_count`` is the number of leading cards the player cannot see;
    only the dealer's hole card is ever hidden. ``stake`` is the money riding
    on a player hand and stays zero for the dealer.
    """

    cards: list[Card] = field(default_factory=list)
    hidden_count: int = 0
    standing: bool = False
    doubling_down: bool = False
    stake: Money = field(default_factory=Money.zero)

    def add_card(self, card: Card) -> None:
        """Add a card to the hand."""
        self.cards.append(card)

    @property
    def value(self) -> int:
        """
        Calculate the hand total.

        Aces count 1, and a single Ace is promoted to 11 when that does not
        take the hand past 21. No more than one Ace is ever counted as 11.
        """
        total = sum(card.value for card in self.cards)
        if total <= 11 and any(card.is_ace for card in self.cards):
            total += 10
        return total

    @property
    def is_soft(self) -> bool:
        """Check if an Ace is currently being counted as 11."""
        hard_total = sum(card.value for card in self.cards)
        return self.value != hard_total

    @property
    def is_bust(self) -> bool:
        return self.value > BLACKJACK

    @property
    def is_natural_blackjack(self) -> bool:
        """Check if the hand is a natural blackjack (21 with 2 cards)."""
        return len(self.cards) == 2 and self.value == BLACKJACK

    @property
    def is_finished(self) -> bool:
        return self.standing or self.is_bust

    @property
    def can_double_down(self) -> bool:
        """Two cards totalling 10 or 11, not already doubled."""
        return (
            len(self.cards) == 2
            and not self.doubling_down
            and self.value in (10, 11)
        )

    @property
    def can_split(self) -> bool:
        """Two cards of the same rank."""
        return len(self.cards) == 2 and self.cards[0].rank == self.cards[1].rank

    @property
    def up_card(self) -> Card:
        """The dealer's face-up card (the second one dealt)."""
        return self.cards[1]

    @property
    def is_hidden(self) -> bool:
        return self.hidden_count > 0

    def split(self) -> "Hand":
        """
        Move the second card into a new hand and return it.

        Both hands are left with one card each; the caller deals the next
        card to each of them.

        Raises:
            ValueError: If the hand is not a splittable pair.
        """
        if not self.can_split:
            raise ValueError(f"Cannot split hand {self.cards!r}")
        return Hand(cards=[self.cards.pop()])

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    def __str__(self) -> str:
        shown = [
            FACE_DOWN_GLYPH if i < self.hidden_count else str(card)
            for i, card in enumerate(self.cards)
        ]
        cards_str = " ".join(shown)
        if self.is_hidden:
            value_str = "(?)"
        elif self.is_bust:
            value_str = f"({self.value}, BUST)"
        elif self.is_natural_blackjack:
            value_str = "(BLACKJACK)"
        elif self.is_soft:
            value_str = f"(soft {self.value})"
        else:
            value_str = f"({self.value})"
        return f"{cards_str} {value_str}"

    def __repr__(self) -> str:
        return f"Hand({self.cards!r}, value={self.value})"
