"""Exceptions raised by the simulation."""


class SimulationError(Exception):
    """Base class for simulation errors."""


class InvalidActionError(SimulationError, ValueError):
    """A player action was rejected; the message is meant for the player."""
