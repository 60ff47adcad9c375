"""Pytest fixtures for casino tests."""

from fractions import Fraction
from random import Random

import pytest

from casino.bankroll import Bankroll
from casino.cards import Card, Rank, Shoe, Suit
from casino.config import AppConfig, BlackjackConfig
from casino.game.engine import BlackjackRound
from casino.hand import Hand
from casino.money import Money
from casino.statistics import Statistics


def stacked_shoe(*codes: str) -> Shoe:
    """A shoe that deals ``codes`` in the order given."""
    cards = [Card.from_string(code) for code in codes]
    return Shoe(num_decks=1, penetration=1.0, cards=reversed(cards))


def hand_of(*codes: str) -> Hand:
    hand = Hand()
    for code in codes:
        hand.add_card(Card.from_string(code))
    return hand


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return Random(42)


@pytest.fixture
def stack():
    """Build a shoe that deals the given card codes in order."""
    return stacked_shoe


@pytest.fixture
def make_hand():
    """Build a hand from card codes."""
    return hand_of


@pytest.fixture
def table_config():
    """Standard table rules, independent of the environment."""
    return BlackjackConfig(
        shoe_count=1,
        shuffle_at_penetration=1.0,
        payout_ratio=Fraction(1),
        blackjack_payout_ratio=Fraction(3, 2),
        insurance_payout_ratio=Fraction(2),
    )


@pytest.fixture
def app_config(tmp_path, table_config):
    """Application config writing into a temporary directory."""
    return AppConfig(
        blackjack=table_config,
        starting_gift=Money.from_major(1000),
        data_dir=tmp_path / "casino",
        log_level="WARNING",
    )


@pytest.fixture
def stats():
    return Statistics()


@pytest.fixture
def make_round(table_config, stats):
    """
    Build a round over a stacked shoe.

    Cards are dealt dealer, player, dealer, player, then in draw order.
    """

    def _make(*codes: str, balance: str = "100", gift: str = "1000") -> BlackjackRound:
        bankroll = Bankroll(Money.parse(balance), stats)
        return BlackjackRound(
            table_config,
            stacked_shoe(*codes),
            bankroll,
            stats=stats,
            starting_gift=Money.parse(gift),
        )

    return _make


@pytest.fixture
def blackjack_hand():
    """A natural blackjack hand."""
    return hand_of("AS", "KH")


@pytest.fixture
def soft_17_hand():
    """A soft 17 hand (A-6)."""
    return hand_of("AS", "6H")


@pytest.fixture
def pair_8s_hand():
    """A pair of 8s hand."""
    hand = Hand()
    hand.add_card(Card(Rank.EIGHT, Suit.SPADES))
    hand.add_card(Card(Rank.EIGHT, Suit.HEARTS))
    return hand
