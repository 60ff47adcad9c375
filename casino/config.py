"""Configuration management with environment variable support."""

import os
from dataclasses import dataclass, field
from fractions import Fraction
from pathlib import Path

from casino.money import Money


def _env_ratio(name: str, default: str) -> Fraction:
    """Read a payout ratio such as ``3/2`` from the environment."""
    return Fraction(os.getenv(name, default).strip())


def _default_data_dir() -> Path:
    return Path(os.getenv("CASINO_DATA_DIR", Path.home() / ".casino")).expanduser()


@dataclass(frozen=True)
class BlackjackConfig:
    """Table rules consumed by the round engine."""

    shoe_count: int = field(
        default_factory=lambda: int(os.getenv("CASINO_SHOE_COUNT", "4"))
    )
    shuffle_at_penetration: float = field(
        default_factory=lambda: float(os.getenv("CASINO_PENETRATION", "0.75"))
    )
    payout_ratio: Fraction = field(
        default_factory=lambda: _env_ratio("CASINO_PAYOUT_RATIO", "1/1")
    )
    blackjack_payout_ratio: Fraction = field(
        default_factory=lambda: _env_ratio("CASINO_BLACKJACK_PAYOUT_RATIO", "3/2")
    )
    insurance_payout_ratio: Fraction = field(
        default_factory=lambda: _env_ratio("CASINO_INSURANCE_PAYOUT_RATIO", "2/1")
    )

    def __post_init__(self) -> None:
        """Validate rule values."""
        if not 1 <= self.shoe_count <= 8:
            raise ValueError("shoe_count must be between 1 and 8")
        if not 0.0 < self.shuffle_at_penetration <= 1.0:
            raise ValueError("shuffle_at_penetration must be between 0 and 1")
        for name in ("payout_ratio", "blackjack_payout_ratio", "insurance_payout_ratio"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive")

    @property
    def shuffle_threshold_count(self) -> int:
        """Cards left in the shoe below which it is rebuilt."""
        return int(self.shoe_count * 52 * (1 - self.shuffle_at_penetration))


@dataclass(frozen=True)
class AppConfig:
    """Application configuration."""

    blackjack: BlackjackConfig = field(default_factory=BlackjackConfig)
    starting_gift: Money = field(
        default_factory=lambda: Money.parse(os.getenv("CASINO_STARTING_GIFT", "1000"))
    )
    data_dir: Path = field(default_factory=_default_data_dir)
    log_level: str = field(
        default_factory=lambda: os.getenv("CASINO_LOG_LEVEL", "WARNING").upper()
    )

    def __post_init__(self) -> None:
        if not self.starting_gift.is_positive:
            raise ValueError("starting_gift must be positive")

    @property
    def save_path(self) -> Path:
        """Where bankroll and shoe are persisted."""
        return self.data_dir / "state.json"

    @property
    def stats_path(self) -> Path:
        """Where lifetime statistics are persisted."""
        return self.data_dir / "stats.json"
