"""Casino session: bankroll, shoe and statistics across rounds."""

import logging
from random import Random

from casino.bankroll import Bankroll
from casino.cards import Shoe
from casino.config import AppConfig
from casino.game.engine import BlackjackRound
from casino.game.state import RoundState
from casino.money import Money
from casino.persistence import CasinoSnapshot, SaveStore, StatisticsSnapshot
from casino.statistics import Statistics

logger = logging.getLogger(__name__)


class CasinoSession:
    """
    Owns the bankroll, the shoe and the statistics between rounds.

    Each round borrows the shoe and bankroll from the session. State is
    written only at round boundaries, so quitting before a stake is placed,
    or losing the process mid-round, leaves the last saved bankroll intact.
    """

    def __init__(
        self,
        config: AppConfig,
        balance: Money,
        shoe: Shoe,
        stats: Statistics | None = None,
        store: SaveStore | None = None,
    ) -> None:
        self.config = config
        self.stats = stats if stats is not None else Statistics()
        if balance.is_positive:
            self.stats.update_bankroll(balance)
        self.bankroll = Bankroll(balance, self.stats)
        self.shoe = shoe
        self.store = store
        self.round: BlackjackRound | None = None

    @classmethod
    def new(
        cls,
        config: AppConfig,
        store: SaveStore | None = None,
        rng: Random | None = None,
    ) -> "CasinoSession":
        """Start a first-run session with the starting gift and a fresh shoe."""
        return cls(
            config,
            balance=config.starting_gift,
            shoe=cls._fresh_shoe(config, rng),
            store=store,
        )

    @classmethod
    def load(
        cls,
        config: AppConfig,
        store: SaveStore | None = None,
        rng: Random | None = None,
    ) -> "CasinoSession":
        """
        Restore a session from the save files, or start fresh if there are none.

        Raises:
            PersistenceError: If a save file exists but is unreadable.
        """
        store = store or SaveStore(config.save_path, config.stats_path)
        state = store.load_state()
        stats_snapshot = store.load_statistics()
        stats = stats_snapshot.to_statistics() if stats_snapshot else Statistics()

        if state is None:
            return cls(
                config,
                balance=config.starting_gift,
                shoe=cls._fresh_shoe(config, rng),
                stats=stats,
                store=store,
            )

        bj = config.blackjack
        if state.deck_count == bj.shoe_count and state.shoe:
            shoe = Shoe(
                num_decks=bj.shoe_count,
                penetration=bj.shuffle_at_penetration,
                rng=rng,
                cards=state.cards(),
            )
        else:
            logger.info(
                "Saved shoe (%d decks, %d cards) not reusable at a %d-deck table",
                state.deck_count,
                len(state.shoe),
                bj.shoe_count,
            )
            shoe = cls._fresh_shoe(config, rng)

        session = cls(config, balance=state.money(), shoe=shoe, stats=stats, store=store)
        session.bankroll.replenish_if_empty(config.starting_gift)
        return session

    @staticmethod
    def _fresh_shoe(config: AppConfig, rng: Random | None) -> Shoe:
        return Shoe(
            num_decks=config.blackjack.shoe_count,
            penetration=config.blackjack.shuffle_at_penetration,
            rng=rng,
        )

    @property
    def balance(self) -> Money:
        return self.bankroll.balance

    def new_round(self) -> BlackjackRound:
        """
        Open a round waiting for a bet.

        Raises:
            RuntimeError: If the previous round has not been finished.
        """
        if self.round is not None:
            raise RuntimeError("The current round has not been finished")

        self.round = BlackjackRound(
            self.config.blackjack,
            self.shoe,
            self.bankroll,
            stats=self.stats,
            starting_gift=self.config.starting_gift,
        )
        return self.round

    def finish_round(self) -> None:
        """Close a settled round and save."""
        if self.round is None or not self.round.is_over:
            raise RuntimeError("There is no settled round to finish")
        self.round = None
        self.save()

    def abandon_round(self) -> None:
        """Drop a round before any stake has been placed."""
        if self.round is not None and self.round.state is not RoundState.PLACING_BET:
            raise RuntimeError("Cannot abandon a round once a bet is staked")
        self.round = None

    def snapshot(self) -> CasinoSnapshot:
        return CasinoSnapshot.capture(
            self.bankroll.balance,
            self.shoe.num_decks,
            self.shoe.cards,
        )

    def save(self) -> None:
        """Write bankroll, shoe and statistics, if a store is attached."""
        if self.store is None:
            return
        self.store.save_state(self.snapshot())
        self.store.save_statistics(StatisticsSnapshot.capture(self.stats))
