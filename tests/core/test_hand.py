"""Tests for Hand evaluation."""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from casino.cards import FACE_DOWN_GLYPH, Card, Rank, Suit
from casino.hand import Hand
from casino.money import Money

cards = st.builds(Card, st.sampled_from(list(Rank)), st.sampled_from(list(Suit)))


class TestHandValue:
    """Tests for hand totals."""

    def test_empty_hand(self):
        hand = Hand()
        assert len(hand) == 0
        assert hand.value == 0
        assert not hand.is_soft
        assert not hand.is_natural_blackjack
        assert not hand.is_bust

    def test_add_card(self):
        hand = Hand()
        hand.add_card(Card(Rank.TEN, Suit.SPADES))
        assert len(hand) == 1
        assert hand.value == 10

    def test_soft_hand_value(self, soft_17_hand):
        assert soft_17_hand.value == 17
        assert soft_17_hand.is_soft

    def test_soft_to_hard_transition(self, make_hand):
        hand = make_hand("AS", "5H")
        assert hand.value == 16
        assert hand.is_soft

        hand.add_card(Card(Rank.EIGHT, Suit.CLUBS))
        assert hand.value == 14
        assert not hand.is_soft

    def test_only_one_ace_counts_eleven(self, make_hand):
        assert make_hand("AS", "AH", "9C").value == 21
        assert make_hand("AS", "AH").value == 12
        assert make_hand("AS", "AH", "AD", "AC").value == 14

    def test_bust(self, make_hand):
        hand = make_hand("10S", "6H", "KC")
        assert hand.value == 26
        assert hand.is_bust
        assert hand.is_finished

    @given(st.lists(cards, min_size=1, max_size=10))
    def test_value_bounds(self, drawn):
        hand = Hand(cards=list(drawn))
        hard_total = sum(card.value for card in drawn)
        assert hand.value in (hard_total, hard_total + 10)
        if hand.value == hard_total + 10:
            assert hand.value <= 21


class TestNaturalBlackjack:
    def test_ace_king_is_natural(self, blackjack_hand):
        assert blackjack_hand.is_natural_blackjack
        assert blackjack_hand.value == 21

    def test_ace_ten_is_natural(self, make_hand):
        assert make_hand("AD", "10C").is_natural_blackjack

    def test_three_sevens_are_not_natural(self, make_hand):
        hand = make_hand("7S", "7H", "7C")
        assert hand.value == 21
        assert not hand.is_natural_blackjack

    def test_natural_is_not_finished(self, blackjack_hand):
        assert not blackjack_hand.is_finished


class TestHandOptions:
    """Tests for double down and split eligibility."""

    @pytest.mark.parametrize("codes", [("5S", "5H"), ("6S", "5H"), ("9S", "2H"), ("4D", "6C")])
    def test_can_double_on_ten_or_eleven(self, make_hand, codes):
        assert make_hand(*codes).can_double_down

    @pytest.mark.parametrize("codes", [("5S", "4H"), ("10S", "2H"), ("AS", "KH")])
    def test_cannot_double_otherwise(self, make_hand, codes):
        assert not make_hand(*codes).can_double_down

    def test_cannot_double_three_cards(self, make_hand):
        assert not make_hand("2S", "3H", "5C").can_double_down

    def test_cannot_double_twice(self, make_hand):
        hand = make_hand("5S", "6H")
        hand.doubling_down = True
        assert not hand.can_double_down

    def test_can_split_same_rank(self, pair_8s_hand):
        assert pair_8s_hand.can_split

    def test_cannot_split_ten_values_of_different_rank(self, make_hand):
        assert not make_hand("10S", "KH").can_split

    def test_split_moves_second_card(self, pair_8s_hand):
        new_hand = pair_8s_hand.split()
        assert pair_8s_hand.cards == [Card(Rank.EIGHT, Suit.SPADES)]
        assert new_hand.cards == [Card(Rank.EIGHT, Suit.HEARTS)]
        assert new_hand.stake == Money.zero()

    def test_split_ineligible_hand_raises(self, make_hand):
        with pytest.raises(ValueError):
            make_hand("8S", "8H", "2C").split()


class TestHandDisplay:
    def test_hidden_card_and_value(self, make_hand):
        hand = make_hand("KS", "AH")
        hand.hidden_count = 1
        assert str(hand) == f"{FACE_DOWN_GLYPH} A♥ (?)"
        assert hand.up_card == Card(Rank.ACE, Suit.HEARTS)

    def test_revealed_values(self, make_hand):
        assert str(make_hand("10S", "8H")) == "10♠ 8♥ (18)"
        assert str(make_hand("AS", "6H")) == "A♠ 6♥ (soft 17)"
        assert str(make_hand("AS", "KH")) == "A♠ K♥ (BLACKJACK)"
        assert str(make_hand("10S", "6H", "KC")) == "10♠ 6♥ K♣ (26, BUST)"
