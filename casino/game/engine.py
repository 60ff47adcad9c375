"""Blackjack round engine with state machine."""

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable

from transitions import Machine

from casino.bankroll import Bankroll
from casino.cards import Card, Shoe
from casino.config import BlackjackConfig
from casino.game.actions import PlayerAction
from casino.game.events import EventEmitter, EventType, GameEvent
from casino.game.state import RoundState
from casino.hand import Hand
from casino.money import Money
from casino.statistics import Statistics, StatisticsSink

logger = logging.getLogger(__name__)

DEALER_STANDS_ON = 17


class HandResult(Enum):
    """How a player hand finished."""

    WIN = auto()
    BLACKJACK = auto()
    PUSH = auto()
    LOSS = auto()
    BUST = auto()


@dataclass(frozen=True)
class HandOutcome:
    """Settlement of one player hand."""

    hand_index: int
    result: HandResult
    stake: Money
    payout: Money

    @property
    def net(self) -> Money:
        return self.payout - self.stake


@dataclass(frozen=True)
class InsuranceOutcome:
    """Settlement of the insurance side bet."""

    stake: Money
    payout: Money

    @property
    def won(self) -> bool:
        return self.payout.is_positive


class BlackjackRound:
    """
    One round of blackjack, from stake to settlement.

    The round borrows the shoe and the bankroll from its owner. Every stake
    (main bet, double down, split, insurance) is taken from the bankroll at
    the moment it is placed, and settlement pays back stake plus winnings.

    Player actions return False and emit INVALID_ACTION or INSUFFICIENT_FUNDS
    when they are not allowed, leaving the round untouched. Once the last
    player hand is finished the dealer plays and the round settles without
    further input.
    """

    STATES = [s.name.lower() for s in RoundState]

    TRANSITIONS = [
        {"trigger": "accept_bet", "source": "placing_bet", "dest": "initial_deal"},
        {"trigger": "offer_insurance", "source": "initial_deal", "dest": "offering_insurance"},
        {
            "trigger": "start_play",
            "source": ["initial_deal", "offering_insurance"],
            "dest": "player_actions",
        },
        {"trigger": "finish_hands", "source": "player_actions", "dest": "dealer_reveal"},
        {"trigger": "all_hands_busted", "source": "player_actions", "dest": "settlement"},
        {"trigger": "dealer_to_draw", "source": "dealer_reveal", "dest": "dealer_draw"},
        {"trigger": "dealer_finished", "source": "dealer_draw", "dest": "settlement"},
        {"trigger": "close", "source": "settlement", "dest": "done"},
    ]

    def __init__(
        self,
        config: BlackjackConfig,
        shoe: Shoe,
        bankroll: Bankroll,
        stats: StatisticsSink | None = None,
        starting_gift: Money | None = None,
    ) -> None:
        """
        Set up a round waiting for a bet.

        Args:
            config: Payout ratios for this table
            shoe: Shoe to draw from; it is not rebuilt between rounds
            bankroll: Funds that stakes are taken from and payouts go to
            stats: Receives one call per resolved hand or insurance bet
            starting_gift: Granted if the bankroll is exactly zero after
                settlement; no gift when None
        """
        self.config = config
        self.shoe = shoe
        self.bankroll = bankroll
        self.stats: StatisticsSink = stats if stats is not None else Statistics()
        self.starting_gift = starting_gift

        self.dealer_hand = Hand(hidden_count=1)
        self.player_hands: list[Hand] = [Hand()]
        self.current_hand_index = 0
        self.bet = Money.zero()
        self.insurance_stake = Money.zero()
        self.splitting = False

        self.outcomes: list[HandOutcome] = []
        self.insurance_outcome: InsuranceOutcome | None = None
        self.total_staked = Money.zero()
        self.total_paid = Money.zero()
        self.gift_granted = False

        self.events = EventEmitter()
        self.machine = Machine(
            model=self,
            states=self.STATES,
            transitions=self.TRANSITIONS,
            initial="placing_bet",
            auto_transitions=False,
            model_attribute="_machine_state",
        )

    @property
    def state(self) -> RoundState:
        """Get current round state as enum."""
        return RoundState[self._machine_state.upper()]  # type: ignore[attr-defined]

    @property
    def is_over(self) -> bool:
        return self.state is RoundState.DONE

    @property
    def current_hand(self) -> Hand | None:
        """The hand awaiting a decision, if any."""
        if 0 <= self.current_hand_index < len(self.player_hands):
            return self.player_hands[self.current_hand_index]
        return None

    @property
    def net_result(self) -> Money:
        """Everything paid back minus everything staked."""
        return self.total_paid - self.total_staked

    def subscribe(
        self,
        handler: Callable[[GameEvent], None],
        event_type: EventType | None = None,
    ) -> None:
        """Subscribe to round events."""
        self.events.subscribe(handler, event_type)

    # Betting

    def set_bet(self, amount: Money) -> bool:
        """
        Stake the main bet.

        Returns:
            True if the bet was accepted
        """
        if self.state is not RoundState.PLACING_BET:
            self.events.emit(
                EventType.INVALID_ACTION,
                message="A bet has already been placed",
                state=self.state.name,
            )
            return False

        if not amount.is_positive:
            self.events.emit(EventType.INVALID_ACTION, message="Bet must be more than zero")
            return False

        if not self.bankroll.can_afford(amount):
            self.events.emit(
                EventType.INSUFFICIENT_FUNDS,
                required=amount,
                available=self.bankroll.balance,
            )
            return False

        self._stake(amount)
        self.bet = amount
        self.player_hands[0].stake = amount
        self.events.emit(EventType.BET_PLACED, amount=amount, bankroll=self.bankroll.balance)
        self.accept_bet()
        return True

    def initial_deal(self) -> None:
        """
        Deal dealer, player, dealer, player, with the dealer's first card face down.

        Raises:
            RuntimeError: If no bet is staked or cards were already dealt.
        """
        if self.state is not RoundState.INITIAL_DEAL or self.dealer_hand.cards:
            raise RuntimeError(f"Cannot do the initial deal in state {self.state}")

        player_hand = self.player_hands[0]
        self._deal_card_to(self.dealer_hand)
        self._deal_card_to(player_hand)
        self._deal_card_to(self.dealer_hand)
        self._deal_card_to(player_hand)

        self.events.emit(
            EventType.ROUND_STARTED,
            dealer_showing=str(self.dealer_hand.up_card),
            player_hand=str(player_hand),
        )

        if player_hand.is_natural_blackjack:
            self.events.emit(EventType.PLAYER_BLACKJACK, hand_index=0)

        if self.dealer_hand.up_card.is_ace and self.bankroll.can_afford(self.insurance_cost):
            self.events.emit(EventType.INSURANCE_OFFERED, cost=self.insurance_cost)
            self.offer_insurance()
            return

        self.start_play()

    # Insurance

    @property
    def insurance_cost(self) -> Money:
        """Insurance stakes half the main bet."""
        return self.bet / 2

    @property
    def can_place_insurance(self) -> bool:
        """Check if insurance is on offer and affordable."""
        if self.state is not RoundState.OFFERING_INSURANCE:
            return False
        return (
            self.dealer_hand.up_card.is_ace
            and self.insurance_cost.is_positive
            and self.bankroll.can_afford(self.insurance_cost)
        )

    def place_insurance(self) -> bool:
        """Stake half the bet against a dealer blackjack."""
        if not self.can_place_insurance:
            self.events.emit(EventType.INVALID_ACTION, message="Insurance is not available")
            return False

        cost = self.insurance_cost
        self._stake(cost)
        self.insurance_stake = cost
        self.events.emit(EventType.INSURANCE_TAKEN, amount=cost)
        self.start_play()
        return True

    def decline_insurance(self) -> bool:
        """Turn down the insurance offer."""
        if self.state is not RoundState.OFFERING_INSURANCE:
            self.events.emit(EventType.INVALID_ACTION, message="Insurance is not on offer")
            return False

        self.events.emit(EventType.INSURANCE_DECLINED)
        self.start_play()
        return True

    # Player actions

    @property
    def can_double_down(self) -> bool:
        """Check if doubling down is allowed and affordable."""
        hand = self._acting_hand()
        return (
            hand is not None
            and hand.can_double_down
            and self.bankroll.can_afford(self.bet)
        )

    @property
    def can_split(self) -> bool:
        """Check if splitting is allowed and affordable."""
        hand = self._acting_hand()
        return (
            hand is not None
            and not self.splitting
            and hand.can_split
            and self.bankroll.can_afford(self.bet)
        )

    def available_actions(self) -> list[PlayerAction]:
        """The actions to offer for the current hand."""
        if self._acting_hand() is None:
            return []
        actions = [PlayerAction.HIT, PlayerAction.STAND]
        if self.can_double_down:
            actions.append(PlayerAction.DOUBLE_DOWN)
        if self.can_split:
            actions.append(PlayerAction.SPLIT)
        return actions

    def perform(self, action: PlayerAction) -> bool:
        """Apply a player action to the current hand."""
        handlers: dict[PlayerAction, Callable[[], bool]] = {
            PlayerAction.HIT: self.hit,
            PlayerAction.STAND: self.stand,
            PlayerAction.DOUBLE_DOWN: self.double_down,
            PlayerAction.SPLIT: self.split,
        }
        return handlers[action]()

    def hit(self) -> bool:
        """Player hits (takes another card)."""
        hand = self._require_acting_hand("hit")
        if hand is None:
            return False

        self._deal_card_to(hand)
        self.events.emit(
            EventType.PLAYER_HIT,
            hand_index=self.current_hand_index,
            hand_value=hand.value,
        )
        self._forfeit_if_bust(hand)
        self._advance_to_next_hand()
        return True

    def stand(self) -> bool:
        """Player stands on the current hand."""
        hand = self._require_acting_hand("stand")
        if hand is None:
            return False

        hand.standing = True
        self.events.emit(
            EventType.PLAYER_STAND,
            hand_index=self.current_hand_index,
            hand_value=hand.value,
        )
        self._advance_to_next_hand()
        return True

    def double_down(self) -> bool:
        """Stake the bet again, take exactly one card, and stand."""
        hand = self._require_acting_hand("double down")
        if hand is None:
            return False

        if not self.can_double_down:
            self._reject_unavailable(hand.can_double_down, "Cannot double down on this hand")
            return False

        self._stake(self.bet)
        hand.stake += self.bet
        hand.doubling_down = True

        self._deal_card_to(hand)
        hand.standing = True
        self.events.emit(
            EventType.PLAYER_DOUBLE,
            hand_index=self.current_hand_index,
            hand_value=hand.value,
            stake=hand.stake,
        )
        self._forfeit_if_bust(hand)
        self._advance_to_next_hand()
        return True

    def split(self) -> bool:
        """Split a pair into two hands, each with its own stake."""
        hand = self._require_acting_hand("split")
        if hand is None:
            return False

        if not self.can_split:
            self._reject_unavailable(
                hand.can_split and not self.splitting, "Cannot split this hand"
            )
            return False

        self._stake(self.bet)
        self.splitting = True

        new_hand = hand.split()
        new_hand.stake = self.bet
        self.player_hands.insert(self.current_hand_index + 1, new_hand)

        self._deal_card_to(hand)
        self._deal_card_to(new_hand)

        self.events.emit(
            EventType.PLAYER_SPLIT,
            hand_index=self.current_hand_index,
            hand1_value=hand.value,
            hand2_value=new_hand.value,
        )
        return True

    # Dealer

    def reveal_hole_card(self) -> Card:
        """
        Turn the dealer's hole card face up.

        Raises:
            RuntimeError: If player hands are still being played.
        """
        if self.state is not RoundState.DEALER_REVEAL:
            raise RuntimeError(f"Cannot reveal the hole card in state {self.state}")

        self.dealer_hand.hidden_count = 0
        hole_card = self.dealer_hand.cards[0]
        self.events.emit(
            EventType.DEALER_REVEALS,
            card=str(hole_card),
            hand_value=self.dealer_hand.value,
        )
        if self.dealer_hand.is_natural_blackjack:
            self.events.emit(EventType.DEALER_BLACKJACK)
        return hole_card

    def _play_dealer(self) -> None:
        """Dealer draws until reaching 17 or more."""
        while self.dealer_hand.value < DEALER_STANDS_ON:
            self._deal_card_to(self.dealer_hand)
            self.events.emit(EventType.DEALER_HITS, hand_value=self.dealer_hand.value)

        if self.dealer_hand.is_bust:
            self.events.emit(EventType.DEALER_BUSTS, hand_value=self.dealer_hand.value)
        else:
            self.events.emit(EventType.DEALER_STANDS, hand_value=self.dealer_hand.value)

    # Internals

    def _acting_hand(self) -> Hand | None:
        if self.state is not RoundState.PLAYER_ACTIONS:
            return None
        return self.current_hand

    def _require_acting_hand(self, action: str) -> Hand | None:
        hand = self._acting_hand()
        if hand is None:
            self.events.emit(
                EventType.INVALID_ACTION,
                message=f"Cannot {action} now",
                state=self.state.name,
            )
        return hand

    def _reject_unavailable(self, allowed_by_hand: bool, message: str) -> None:
        if allowed_by_hand:
            self.events.emit(
                EventType.INSUFFICIENT_FUNDS,
                required=self.bet,
                available=self.bankroll.balance,
            )
        else:
            self.events.emit(EventType.INVALID_ACTION, message=message)

    def _stake(self, amount: Money) -> None:
        self.bankroll.stake(amount)
        self.total_staked += amount

    def _credit(self, amount: Money) -> None:
        if amount.is_positive:
            self.bankroll.credit(amount)
            self.total_paid += amount

    def _deal_card_to(self, hand: Hand) -> Card:
        """Draw one card from the shoe into a hand."""
        if self.shoe.needs_shuffle:
            self.events.emit(EventType.SHOE_SHUFFLED, cards_remaining=self.shoe.cards_remaining)
        card = self.shoe.draw()
        hand.add_card(card)

        is_dealer = hand is self.dealer_hand
        face_up = not (is_dealer and len(hand.cards) <= hand.hidden_count)
        self.events.emit(
            EventType.CARD_DEALT,
            card=str(card) if face_up else "??",
            hand="dealer" if is_dealer else f"player {self._index_of(hand) + 1}",
        )
        return card

    def _index_of(self, hand: Hand) -> int:
        # Hands compare by value, so look them up by identity.
        return next(i for i, h in enumerate(self.player_hands) if h is hand)

    def _forfeit_if_bust(self, hand: Hand) -> None:
        """A bust hand loses its stake immediately."""
        if hand.is_bust:
            self.stats.record_loss(hand.stake)
            self.events.emit(
                EventType.PLAYER_BUSTS,
                hand_index=self.current_hand_index,
                amount=hand.stake,
            )

    def _advance_to_next_hand(self) -> None:
        """Move past finished hands, then hand over to the dealer."""
        while (
            self.current_hand_index < len(self.player_hands)
            and self.player_hands[self.current_hand_index].is_finished
        ):
            self.current_hand_index += 1

        if self.current_hand_index < len(self.player_hands):
            return

        if all(hand.is_bust for hand in self.player_hands):
            self.all_hands_busted()
        else:
            self.finish_hands()
            self.reveal_hole_card()
            self.dealer_to_draw()
            self._play_dealer()
            self.dealer_finished()

        self._settle()

    def _settle(self) -> None:
        """Pay out each surviving hand and the insurance bet."""
        for index, hand in enumerate(self.player_hands):
            self.outcomes.append(self._settle_hand(index, hand))

        if self.insurance_stake.is_positive:
            self.insurance_outcome = self._settle_insurance()

        self.stats.update_bankroll(self.bankroll.balance)
        if self.starting_gift is not None and self.bankroll.replenish_if_empty(self.starting_gift):
            self.gift_granted = True
            self.events.emit(EventType.STARTING_GIFT, amount=self.starting_gift)

        logger.info(
            "Round settled: staked %s, paid %s, bankroll %s",
            self.total_staked,
            self.total_paid,
            self.bankroll.balance,
        )
        self.events.emit(
            EventType.ROUND_ENDED,
            result=self.net_result,
            bankroll=self.bankroll.balance,
        )
        self.close()

    def _settle_hand(self, index: int, hand: Hand) -> HandOutcome:
        stake = hand.stake
        if hand.is_bust:
            # Already forfeited when it busted.
            return HandOutcome(index, HandResult.BUST, stake, Money.zero())

        dealer_value = self.dealer_hand.value
        if self.dealer_hand.is_bust:
            result = HandResult.WIN
            payout = stake + stake * self.config.payout_ratio
        elif dealer_value == hand.value:
            result = HandResult.PUSH
            payout = stake
        elif dealer_value > hand.value:
            result = HandResult.LOSS
            payout = Money.zero()
        elif hand.is_natural_blackjack:
            result = HandResult.BLACKJACK
            payout = stake + stake * self.config.blackjack_payout_ratio
        else:
            result = HandResult.WIN
            payout = stake + stake * self.config.payout_ratio

        if result is HandResult.PUSH:
            self._credit(payout)
            self.stats.record_push()
            self.events.emit(EventType.PUSH, hand_index=index, amount=payout)
        elif result is HandResult.LOSS:
            self.stats.record_loss(stake)
            self.events.emit(EventType.PLAYER_LOSES, hand_index=index, amount=stake)
        else:
            self._credit(payout)
            self.stats.record_win(payout - stake)
            self.events.emit(
                EventType.PLAYER_WINS,
                hand_index=index,
                amount=payout,
                blackjack=result is HandResult.BLACKJACK,
                dealer_bust=self.dealer_hand.is_bust,
            )

        return HandOutcome(index, result, stake, payout)

    def _settle_insurance(self) -> InsuranceOutcome:
        """Insurance pays only against a dealer natural, even if every hand bust."""
        stake = self.insurance_stake
        if self.dealer_hand.is_natural_blackjack:
            payout = stake * self.config.insurance_payout_ratio
            self._credit(payout)
            self.stats.record_win(payout - stake)
            self.events.emit(EventType.INSURANCE_WINS, amount=payout)
        else:
            payout = Money.zero()
            self.stats.record_loss(stake)
            self.events.emit(EventType.INSURANCE_LOSES, amount=stake)
        return InsuranceOutcome(stake, payout)
