"""
Rapsim: a week-by-week rap career simulation.

Provides the game state models, the weekly engine and the player actions.
"""

from .catalog import new_game
from .engine import advance_week
from .exceptions import InvalidActionError, SimulationError
from .models import GameState
from .notifications import Notification
from .rng import RandomSource, ScriptedRandom

__version__ = "1.0.0"

__all__ = [
    "new_game",
    "advance_week",
    "InvalidActionError",
    "SimulationError",
    "GameState",
    "Notification",
    "RandomSource",
    "ScriptedRandom",
]
