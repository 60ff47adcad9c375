"""Round engine and state management."""

from casino.game.actions import PlayerAction
from casino.game.engine import BlackjackRound, HandOutcome, HandResult, InsuranceOutcome
from casino.game.events import EventType, GameEvent
from casino.game.state import RoundState

__all__ = [
    "PlayerAction",
    "BlackjackRound",
    "HandOutcome",
    "HandResult",
    "InsuranceOutcome",
    "EventType",
    "GameEvent",
    "RoundState",
]
