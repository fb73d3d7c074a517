"""Notifications emitted by the engine for the presentation layer."""

from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass
class Notification:
    """Something the player should hear about."""
    kind: str
    message: str
    week: int
    data: Dict[str, Any] = field(default_factory=dict)
