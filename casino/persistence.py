"""Save-file schemas and storage."""

import logging
from decimal import Decimal
from pathlib import Path
from typing import TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from casino.cards import Card
from casino.money import Money
from casino.statistics import BlackjackStatistics, Statistics

logger = logging.getLogger(__name__)


class PersistenceError(Exception):
    """A save or statistics file could not be read or written."""


def _cents(value: Decimal) -> Decimal:
    return Money(value).amount


class CasinoSnapshot(BaseModel):
    """
    The persisted slice of a session: bankroll and shoe.

    Rounds in progress are never saved; a session restored from a snapshot
    always starts between rounds.
    """

    model_config = ConfigDict(frozen=True)

    bankroll: Decimal = Field(..., ge=0, description="Balance in dollars")
    deck_count: int = Field(..., ge=1, le=8)
    shoe: list[str] = Field(default_factory=list, description="Card codes, top of shoe last")

    @field_validator("bankroll")
    @classmethod
    def _check_bankroll(cls, value: Decimal) -> Decimal:
        return _cents(value)

    @field_validator("shoe")
    @classmethod
    def _check_cards(cls, codes: list[str]) -> list[str]:
        for code in codes:
            Card.from_string(code)
        return codes

    @classmethod
    def capture(cls, bankroll: Money, deck_count: int, cards: list[Card]) -> "CasinoSnapshot":
        return cls(
            bankroll=bankroll.amount,
            deck_count=deck_count,
            shoe=[card.code for card in cards],
        )

    def money(self) -> Money:
        return Money(self.bankroll)

    def cards(self) -> list[Card]:
        return [Card.from_string(code) for code in self.shoe]


class BlackjackStatisticsSnapshot(BaseModel):
    """Blackjack counters as stored on disk."""

    hands_won: int = Field(default=0, ge=0)
    hands_lost: int = Field(default=0, ge=0)
    hands_push: int = Field(default=0, ge=0)
    money_won: Decimal = Decimal("0")
    money_lost: Decimal = Decimal("0")
    biggest_win: Decimal = Decimal("0")
    biggest_loss: Decimal = Decimal("0")

    @field_validator("money_won", "money_lost", "biggest_win", "biggest_loss")
    @classmethod
    def _check_amounts(cls, value: Decimal) -> Decimal:
        return _cents(value)


class StatisticsSnapshot(BaseModel):
    """Lifetime statistics as stored on disk."""

    biggest_bankroll: Decimal = Decimal("0")
    times_bankrupted: int = Field(default=0, ge=0)
    blackjack: BlackjackStatisticsSnapshot = Field(default_factory=BlackjackStatisticsSnapshot)

    @field_validator("biggest_bankroll")
    @classmethod
    def _check_bankroll(cls, value: Decimal) -> Decimal:
        return _cents(value)

    @classmethod
    def capture(cls, stats: Statistics) -> "StatisticsSnapshot":
        bj = stats.blackjack
        return cls(
            biggest_bankroll=stats.biggest_bankroll.amount,
            times_bankrupted=stats.times_bankrupted,
            blackjack=BlackjackStatisticsSnapshot(
                hands_won=bj.hands_won,
                hands_lost=bj.hands_lost,
                hands_push=bj.hands_push,
                money_won=bj.money_won.amount,
                money_lost=bj.money_lost.amount,
                biggest_win=bj.biggest_win.amount,
                biggest_loss=bj.biggest_loss.amount,
            ),
        )

    def to_statistics(self) -> Statistics:
        bj = self.blackjack
        return Statistics(
            biggest_bankroll=Money(self.biggest_bankroll),
            times_bankrupted=self.times_bankrupted,
            blackjack=BlackjackStatistics(
                hands_won=bj.hands_won,
                hands_lost=bj.hands_lost,
                hands_push=bj.hands_push,
                money_won=Money(bj.money_won),
                money_lost=Money(bj.money_lost),
                biggest_win=Money(bj.biggest_win),
                biggest_loss=Money(bj.biggest_loss),
            ),
        )


ModelT = TypeVar("ModelT", bound=BaseModel)


class SaveStore:
    """
    Reads and writes the save and statistics files as JSON documents.

    A missing file is a first run and loads as None. A file that exists but
    cannot be read or parsed raises PersistenceError, since carrying on with
    an unknown bankroll is unsafe.
    """

    def __init__(self, save_path: Path, stats_path: Path) -> None:
        self.save_path = Path(save_path)
        self.stats_path = Path(stats_path)

    def load_state(self) -> CasinoSnapshot | None:
        return self._read(self.save_path, CasinoSnapshot)

    def load_statistics(self) -> StatisticsSnapshot | None:
        return self._read(self.stats_path, StatisticsSnapshot)

    def save_state(self, snapshot: CasinoSnapshot) -> None:
        self._write(self.save_path, snapshot)

    def save_statistics(self, snapshot: StatisticsSnapshot) -> None:
        self._write(self.stats_path, snapshot)

    def reset(self) -> list[Path]:
        """Delete both files, returning the ones that existed."""
        removed = []
        for path in (self.save_path, self.stats_path):
            if path.exists():
                try:
                    path.unlink()
                except OSError as exc:
                    raise PersistenceError(f"Failed to remove {path}: {exc}") from exc
                logger.info("Removed %s", path)
                removed.append(path)
        return removed

    def _read(self, path: Path, model: type[ModelT]) -> ModelT | None:
        if not path.exists():
            logger.info("No file at %s, starting fresh", path)
            return None

        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise PersistenceError(f"Unable to read {path}: {exc}") from exc

        try:
            snapshot = model.model_validate_json(text)
        except ValidationError as exc:
            raise PersistenceError(f"Unable to parse {path}: {exc}") from exc

        logger.info("Loaded %s", path)
        return snapshot

    def _write(self, path: Path, snapshot: BaseModel) -> None:
        tmp_path = path.with_suffix(path.suffix + ".tmp")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(snapshot.model_dump_json(indent=2), encoding="utf-8")
            tmp_path.replace(path)
        except OSError as exc:
            raise PersistenceError(f"Failed to write {path}: {exc}") from exc
        logger.info("Saved %s", path)
