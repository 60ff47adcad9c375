"""Player decisions available during PLAYER_ACTIONS."""

from enum import Enum


class PlayerAction(Enum):
    """The closed set of choices offered for a hand."""

    HIT = "hit"
    STAND = "stand"
    DOUBLE_DOWN = "double"
    SPLIT = "split"

    @property
    def label(self) -> str:
        return {
            PlayerAction.HIT: "Hit",
            PlayerAction.STAND: "Stand",
            PlayerAction.DOUBLE_DOWN: "Double down",
            PlayerAction.SPLIT: "Split",
        }[self]
