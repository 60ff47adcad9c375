"""Round state enumeration."""

from enum import Enum, auto


class RoundState(Enum):
    """
    Round state machine states.

    Flow: PLACING_BET → INITIAL_DEAL → [OFFERING_INSURANCE] → PLAYER_ACTIONS
    → DEALER_REVEAL → DEALER_DRAW → SETTLEMENT → DONE

    When every player hand busts, PLAYER_ACTIONS goes straight to SETTLEMENT
    and the hole card stays hidden.
    """

    # Waiting for a stake
    PLACING_BET = auto()

    # Stake taken, cards not yet dealt
    INITIAL_DEAL = auto()

    # Dealer shows an Ace and the player can afford insurance
    OFFERING_INSURANCE = auto()

    # Player acts on hand ``current_hand_index``
    PLAYER_ACTIONS = auto()

    # Hole card turned over
    DEALER_REVEAL = auto()

    # Dealer drawing to 17
    DEALER_DRAW = auto()

    # Paying out
    SETTLEMENT = auto()

    # Round consumed
    DONE = auto()

    def __str__(self) -> str:
        return self.name.replace("_", " ").title()

