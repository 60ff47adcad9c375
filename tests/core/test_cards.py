"""Tests for Card and Shoe classes."""

from collections import Counter
from random import Random

import pytest

from casino.cards import CARDS_PER_DECK, FACE_DOWN_GLYPH, Card, Rank, Shoe, Suit, standard_deck


class TestCard:
    """Tests for the Card class."""

    def test_card_creation(self):
        card = Card(Rank.ACE, Suit.SPADES)
        assert card.rank == Rank.ACE
        assert card.suit == Suit.SPADES

    def test_card_immutability(self):
        card = Card(Rank.ACE, Suit.SPADES)
        with pytest.raises(AttributeError):
            card.rank = Rank.KING

    def test_card_value(self):
        """Aces count 1 here; the hand decides when one counts 11."""
        assert Card(Rank.TWO, Suit.HEARTS).value == 2
        assert Card(Rank.TEN, Suit.HEARTS).value == 10
        assert Card(Rank.JACK, Suit.HEARTS).value == 10
        assert Card(Rank.QUEEN, Suit.HEARTS).value == 10
        assert Card(Rank.KING, Suit.HEARTS).value == 10
        assert Card(Rank.ACE, Suit.HEARTS).value == 1

    def test_card_is_ace(self):
        assert Card(Rank.ACE, Suit.SPADES).is_ace
        assert not Card(Rank.KING, Suit.SPADES).is_ace

    def test_card_from_string(self):
        assert Card.from_string("AS") == Card(Rank.ACE, Suit.SPADES)
        assert Card.from_string("2H") == Card(Rank.TWO, Suit.HEARTS)
        assert Card.from_string("10D") == Card(Rank.TEN, Suit.DIAMONDS)
        assert Card.from_string("TD") == Card(Rank.TEN, Suit.DIAMONDS)
        assert Card.from_string("kc") == Card(Rank.KING, Suit.CLUBS)

    def test_card_from_string_with_symbols(self):
        assert Card.from_string("A♠") == Card(Rank.ACE, Suit.SPADES)
        assert Card.from_string("K♥") == Card(Rank.KING, Suit.HEARTS)

    @pytest.mark.parametrize("text", ["", "A", "1S", "AX", "11H"])
    def test_card_from_string_rejects_garbage(self, text):
        with pytest.raises(ValueError):
            Card.from_string(text)

    def test_card_str_and_code(self):
        card = Card(Rank.TEN, Suit.HEARTS)
        assert str(card) == "10♥"
        assert card.code == "10H"
        assert Card.from_string(card.code) == card

    def test_card_glyph(self):
        assert Card(Rank.ACE, Suit.SPADES).glyph == "\U0001F0A1"
        assert Card(Rank.JACK, Suit.HEARTS).glyph == "\U0001F0BB"
        # Skips the Knight between Jack and Queen.
        assert Card(Rank.QUEEN, Suit.HEARTS).glyph == "\U0001F0BD"
        assert Card(Rank.KING, Suit.CLUBS).glyph == "\U0001F0DE"
        assert FACE_DOWN_GLYPH == "\U0001F0A0"


class TestStandardDeck:
    def test_has_every_card_once(self):
        deck = standard_deck()
        assert len(deck) == CARDS_PER_DECK
        assert len(set(deck)) == CARDS_PER_DECK


class TestShoe:
    """Tests for the Shoe class."""

    def test_fresh_shoe_has_every_deck(self, rng):
        shoe = Shoe(num_decks=4, penetration=0.75, rng=rng)
        assert len(shoe) == 208
        assert shoe.total_cards == 208
        counts = Counter(shoe)
        assert set(counts.values()) == {4}

    def test_same_seed_same_order(self):
        assert Shoe(num_decks=2, rng=Random(7)).cards == Shoe(num_decks=2, rng=Random(7)).cards

    def test_draw_takes_from_the_end(self, stack):
        shoe = stack("AS", "KH")
        assert shoe.draw() == Card(Rank.ACE, Suit.SPADES)
        assert shoe.draw() == Card(Rank.KING, Suit.HEARTS)

    def test_threshold_count(self):
        assert Shoe(num_decks=4, penetration=0.75).threshold_count == 52
        assert Shoe(num_decks=1, penetration=1.0).threshold_count == 0

    def test_no_shuffle_at_threshold(self, rng):
        shoe = Shoe(num_decks=4, penetration=0.75, rng=rng)
        while shoe.cards_remaining > 52:
            shoe.draw()
        assert not shoe.needs_shuffle
        shoe.draw()
        assert shoe.cards_remaining == 51
        assert shoe.needs_shuffle

    def test_reshuffles_below_threshold(self, rng):
        """Once fewer than 52 of 208 cards remain, the next draw comes from a full shoe."""
        shoe = Shoe(num_decks=4, penetration=0.75, rng=rng)
        while shoe.cards_remaining >= 52:
            shoe.draw()
        assert shoe.cards_remaining == 51

        shoe.draw()
        assert shoe.cards_remaining >= 207
        assert shoe.cards_remaining == 207

    def test_empty_shoe_rebuilds(self):
        shoe = Shoe(num_decks=1, penetration=1.0, cards=[])
        assert shoe.needs_shuffle
        shoe.draw()
        assert shoe.cards_remaining == CARDS_PER_DECK - 1

    def test_restored_cards_kept_in_order(self, stack):
        shoe = stack("2C", "3D", "4H")
        assert [card.code for card in shoe.cards] == ["4H", "3D", "2C"]

    def test_cards_is_a_copy(self, stack):
        shoe = stack("2C")
        shoe.cards.clear()
        assert shoe.cards_remaining == 1

    @pytest.mark.parametrize("decks,penetration", [(0, 0.75), (4, 0.0), (4, 1.5)])
    def test_rejects_bad_arguments(self, decks, penetration):
        with pytest.raises(ValueError):
            Shoe(num_decks=decks, penetration=penetration)
