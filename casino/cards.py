"""Card and Shoe classes - immutable card representations."""

import logging
from dataclasses import dataclass
from enum import Enum, auto
from random import Random
from typing import Iterable, Iterator

logger = logging.getLogger(__name__)

CARDS_PER_DECK = 52
FACE_DOWN_GLYPH = "\U0001F0A0"


class Suit(Enum):
    """Card suits."""

    CLUBS = auto()
    DIAMONDS = auto()
    HEARTS = auto()
    SPADES = auto()

    def __str__(self) -> str:
        return _SUIT_SYMBOLS[self]

    @property
    def letter(self) -> str:
        return self.name[0]


_SUIT_SYMBOLS = {
    Suit.CLUBS: "♣",
    Suit.DIAMONDS: "♦",
    Suit.HEARTS: "♥",
    Suit.SPADES: "♠",
}

# First code point of each suit's row in the Unicode playing-card block.
_GLYPH_BASE = {
    Suit.SPADES: 0x1F0A0,
    Suit.HEARTS: 0x1F0B0,
    Suit.DIAMONDS: 0x1F0C0,
    Suit.CLUBS: 0x1F0D0,
}


class Rank(Enum):
    """Card ranks, valued by pip count."""

    ACE = 1
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13

    def __str__(self) -> str:
        if 2 <= self.value <= 10:
            return str(self.value)
        return self.name[0]

    @property
    def blackjack_value(self) -> int:
        """Return the hard blackjack value (Ace = 1, face cards = 10)."""
        return min(self.value, 10)


_RANK_CODES = {str(rank): rank for rank in Rank}
_RANK_CODES["T"] = Rank.TEN

_SUIT_CODES = {suit.letter: suit for suit in Suit}
_SUIT_CODES.update({symbol: suit for suit, symbol in _SUIT_SYMBOLS.items()})


@dataclass(frozen=True, slots=True)
class Card:
    """Immutable playing card."""

    rank: Rank
    suit: Suit

    def __str__(self) -> str:
        return f"{self.rank}{self.suit}"

    def __repr__(self) -> str:
        return f"Card({self.rank.name}, {self.suit.name})"

    @property
    def value(self) -> int:
        """Return the hard blackjack point value."""
        return self.rank.blackjack_value

    @property
    def is_ace(self) -> bool:
        return self.rank is Rank.ACE

    @property
    def code(self) -> str:
        """Short ASCII code such as ``'10H'`` or ``'AS'``."""
        return f"{self.rank}{self.suit.letter}"

    @property
    def glyph(self) -> str:
        """The Unicode playing-card character for this card."""
        # The block has a Knight between Jack and Queen.
        offset = self.rank.value if self.rank.value <= 11 else self.rank.value + 1
        return chr(_GLYPH_BASE[self.suit] + offset)

    @classmethod
    def from_string(cls, s: str) -> "Card":
        """Create a card from a string like '2♣', 'AS', '10h'."""
        s = s.strip().upper()
        if len(s) < 2:
            raise ValueError(f"Invalid card string: {s}")

        rank_str, suit_str = s[:-1], s[-1]
        if rank_str not in _RANK_CODES:
            raise ValueError(f"Invalid rank: {rank_str}")
        if suit_str not in _SUIT_CODES:
            raise ValueError(f"Invalid suit: {suit_str}")

        return cls(_RANK_CODES[rank_str], _SUIT_CODES[suit_str])


def standard_deck() -> list[Card]:
    """Return the 52 cards of one deck in a fixed order."""
    return [Card(rank, suit) for suit in Suit for rank in Rank]


class Shoe:
    """
    A multi-deck shoe that rebuilds itself once the cut point is passed.

    Cards are drawn from the end of the internal list. When fewer than
    ``threshold_count`` cards remain, the next draw first rebuilds the full
    shoe and shuffles it, so cards already dealt are never affected.
    """

    def __init__(
        self,
        num_decks: int = 4,
        penetration: float = 0.75,
        rng: Random | None = None,
        cards: Iterable[Card] | None = None,
    ) -> None:
        """
        Initialize a shoe.

        Args:
            num_decks: Number of decks in the shoe
            penetration: Fraction of the shoe dealt before it is rebuilt (0.0-1.0]
            rng: Random number generator for shuffling
            cards: Remaining cards to restore, top of the shoe last; a fresh
                shuffled shoe is built when omitted
        """
        if num_decks < 1:
            raise ValueError("Shoe must have at least 1 deck")
        if not 0.0 < penetration <= 1.0:
            raise ValueError("Penetration must be between 0 and 1")

        self._num_decks = num_decks
        self._penetration = penetration
        self._rng = rng or Random()
        if cards is None:
            self._cards: list[Card] = []
            self.shuffle()
        else:
            self._cards = list(cards)

    def shuffle(self) -> None:
        """Rebuild every deck and shuffle the whole shoe."""
        self._cards = [card for _ in range(self._num_decks) for card in standard_deck()]
        self._rng.shuffle(self._cards)

    def draw(self) -> Card:
        """Draw a card, rebuilding the shoe first if it has run low."""
        if self.needs_shuffle:
            logger.info(
                "Reshuffling %d-deck shoe with %d cards left",
                self._num_decks,
                len(self._cards),
            )
            self.shuffle()
        return self._cards.pop()

    @property
    def threshold_count(self) -> int:
        """Remaining-card count below which the shoe is rebuilt."""
        return int(self.total_cards * (1 - self._penetration))

    @property
    def needs_shuffle(self) -> bool:
        """Check if the next draw will rebuild the shoe."""
        return not self._cards or len(self._cards) < self.threshold_count

    @property
    def cards(self) -> list[Card]:
        """A copy of the remaining cards, top of the shoe last."""
        return list(self._cards)

    @property
    def cards_remaining(self) -> int:
        return len(self._cards)

    @property
    def total_cards(self) -> int:
        """Return the total number of cards in a full shoe."""
        return self._num_decks * CARDS_PER_DECK

    @property
    def num_decks(self) -> int:
        return self._num_decks

    @property
    def penetration(self) -> float:
        return self._penetration

    def __len__(self) -> int:
        return len(self._cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self._cards)
