"""Lifetime statistics fed by the round engine."""

from dataclasses import dataclass, field
from typing import Protocol

from casino.money import Money


class StatisticsSink(Protocol):
    """What the engine reports each resolved outcome and bankroll change to."""

    def record_win(self, amount: Money) -> None: ...

    def record_loss(self, amount: Money) -> None: ...

    def record_push(self) -> None: ...

    def update_bankroll(self, amount: Money) -> None: ...


@dataclass
class BlackjackStatistics:
    """Per-hand blackjack results."""

    hands_won: int = 0
    hands_lost: int = 0
    hands_push: int = 0
    money_won: Money = field(default_factory=Money.zero)
    money_lost: Money = field(default_factory=Money.zero)
    biggest_win: Money = field(default_factory=Money.zero)
    biggest_loss: Money = field(default_factory=Money.zero)


@dataclass
class Statistics:
    """
    Cumulative statistics across every session.

    Implements ``StatisticsSink``. Win amounts are the profit over the stake;
    loss amounts are the stake forfeited.
    """

    biggest_bankroll: Money = field(default_factory=Money.zero)
    times_bankrupted: int = 0
    blackjack: BlackjackStatistics = field(default_factory=BlackjackStatistics)

    def record_win(self, amount: Money) -> None:
        bj = self.blackjack
        bj.hands_won += 1
        bj.money_won += amount
        bj.biggest_win = max(bj.biggest_win, amount)

    def record_loss(self, amount: Money) -> None:
        bj = self.blackjack
        bj.hands_lost += 1
        bj.money_lost += amount
        bj.biggest_loss = max(bj.biggest_loss, amount)

    def record_push(self) -> None:
        self.blackjack.hands_push += 1

    def update_bankroll(self, amount: Money) -> None:
        """Track the high-water mark and count trips to zero."""
        if amount > self.biggest_bankroll:
            self.biggest_bankroll = amount
        elif amount.is_zero:
            self.times_bankrupted += 1

    @property
    def hands_played(self) -> int:
        bj = self.blackjack
        return bj.hands_won + bj.hands_lost + bj.hands_push
