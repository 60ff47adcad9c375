"""The player's bankroll."""

import logging

from casino.money import Money
from casino.statistics import StatisticsSink

logger = logging.getLogger(__name__)


class InsufficientFundsError(Exception):
    """Raised when a stake exceeds the available balance."""


class Bankroll:
    """
    The player's funds.

    Every stake is deducted the moment it is placed, so the player can never
    commit more than they hold. Credits are reported to the statistics
    sink, if one is attached; the round reports the settled balance.
    """

    def __init__(self, balance: Money, stats: StatisticsSink | None = None) -> None:
        if balance.amount < 0:
            raise ValueError("Bankroll cannot start negative")
        self._balance = balance
        self._stats = stats

    @property
    def balance(self) -> Money:
        return self._balance

    def can_afford(self, amount: Money) -> bool:
        return amount <= self._balance

    def stake(self, amount: Money) -> None:
        """
        Take a stake out of the bankroll.

        Raises:
            InsufficientFundsError: If the balance does not cover the amount.
        """
        if not amount.is_positive:
            raise ValueError(f"Stake must be positive, got {amount}")
        if not self.can_afford(amount):
            raise InsufficientFundsError(
                f"Cannot stake {amount} with a balance of {self._balance}"
            )
        self._balance = self._balance - amount

    def credit(self, amount: Money) -> None:
        """Pay money into the bankroll."""
        if amount.amount < 0:
            raise ValueError(f"Cannot credit a negative amount: {amount}")
        self._set(self._balance + amount)

    def replenish_if_empty(self, gift: Money) -> bool:
        """
        Grant ``gift`` if the balance is exactly zero.

        Returns:
            True if the gift was granted
        """
        if not self._balance.is_zero:
            return False
        logger.info("Bankroll empty, granting starting gift of %s", gift)
        self.credit(gift)
        return True

    def _set(self, balance: Money) -> None:
        self._balance = balance
        if self._stats is not None:
            self._stats.update_bankroll(balance)

    def __repr__(self) -> str:
        return f"Bankroll({self._balance!r})"
