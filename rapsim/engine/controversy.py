"""
Controversies: random scandals the player has to answer.

A controversy carries informational base impacts for its severity; the only
effects ever applied are those of the response the player picks.
"""

import logging
import math
import uuid
from dataclasses import dataclass, replace
from typing import Dict, List, Optional, Tuple

from ..models import (
    Controversy,
    ControversyResponse,
    ControversyType,
    Severity,
    SocialMediaPlatform,
    StreamingPlatform,
)
from ..rng import RandomSource

logger = logging.getLogger(__name__)

# severity -> (reputation, streams, followers)
SEVERITY_IMPACTS: Dict[Severity, Tuple[int, int, int]] = {
    Severity.MINOR: (-2, 10_000, -1_000),
    Severity.MODERATE: (-5, 5_000, -3_000),
    Severity.MAJOR: (-10, -10_000, -8_000),
    Severity.SEVERE: (-20, -50_000, -20_000),
}

CONTROVERSY_TEXT: Dict[ControversyType, Tuple[str, str]] = {
    ControversyType.OFFENSIVE_TWEET: (
        "Controversial Tweet Surfaces",
        "An offensive tweet from your account has gone viral, causing public backlash.",
    ),
    ControversyType.LEAKED_AUDIO: (
        "Leaked Studio Audio",
        "Audio leaked from a studio session reveals you making questionable statements.",
    ),
    ControversyType.PUBLIC_FEUD: (
        "Public Feud Erupts",
        "You've been caught in a heated argument with another artist at a public event.",
    ),
    ControversyType.RELATIONSHIP_DRAMA: (
        "Relationship Drama",
        "Your personal relationship issues have become public, drawing media attention.",
    ),
    ControversyType.INAPPROPRIATE_COMMENTS: (
        "Inappropriate Interview Comments",
        "Comments you made during a recent interview are being criticized as inappropriate.",
    ),
    ControversyType.SUBSTANCE_ABUSE: (
        "Substance Abuse Allegations",
        "Reports are circulating about your alleged substance abuse issues.",
    ),
    ControversyType.LEGAL_TROUBLE: (
        "Legal Issues Surface",
        "You're facing legal trouble that has become public knowledge.",
    ),
    ControversyType.CONSPIRACY_THEORY: (
        "Conspiracy Theory",
        "Wild conspiracy theories about you are spreading on social media.",
    ),
}

# label, description, reputation, streams, followers
_RESPONSES = [
    ("apologize", "Issue a public apology", 5, -2_000, 1_000),
    ("deny", "Deny the allegations", -2, 0, -500),
    ("silent", "Stay silent and wait for it to blow over", -1, -5_000, -2_000),
    ("stunt", "Turn it into a publicity stunt", -3, 15_000, 5_000),
]

# (career level ceiling, [(cumulative percent, severity), ...])
_SEVERITY_TABLE = [
    (3, [(80, Severity.MINOR), (95, Severity.MODERATE), (100, Severity.MAJOR)]),
    (7, [(50, Severity.MINOR), (85, Severity.MODERATE), (97, Severity.MAJOR), (100, Severity.SEVERE)]),
    (None, [(30, Severity.MINOR), (65, Severity.MODERATE), (90, Severity.MAJOR), (100, Severity.SEVERE)]),
]


@dataclass
class ControversyOutcome:
    """Deltas actually applied by a response."""
    reputation: int
    streams: int
    followers: int


def standard_responses() -> List[ControversyResponse]:
    return [
        ControversyResponse(label, text, rep, streams, followers)
        for label, text, rep, streams, followers in _RESPONSES
    ]


def controversy_chance(career_level: int, reputation: float, max_percent: float = 5.0) -> float:
    """Weekly probability (0-1) of a new controversy."""
    return min(max_percent, career_level * 0.2 + reputation * 0.05) / 100


def pick_severity(career_level: int, rng: RandomSource) -> Severity:
    roll = rng.random() * 100
    for ceiling, bands in _SEVERITY_TABLE:
        if ceiling is None or career_level <= ceiling:
            for threshold, severity in bands:
                if roll < threshold:
                    return severity
            return bands[-1][1]
    return Severity.MINOR


def generate_controversy(
    controversy_type: ControversyType,
    severity: Severity,
    week: int,
) -> Controversy:
    title, description = CONTROVERSY_TEXT[controversy_type]
    reputation, streams, followers = SEVERITY_IMPACTS[severity]
    return Controversy(
        id=str(uuid.uuid4()),
        controversy_type=controversy_type,
        title=title,
        description=description,
        severity=severity,
        week=week,
        reputation_impact=reputation,
        stream_impact=streams,
        follower_impact=followers,
        responses=standard_responses(),
    )


def roll_controversy(
    active: List[Controversy],
    career_level: int,
    reputation: float,
    week: int,
    rng: RandomSource,
    max_percent: float = 5.0,
) -> Optional[Controversy]:
    """Weekly roll; never fires while another controversy is unresolved."""
    if active:
        return None
    if rng.random() >= controversy_chance(career_level, reputation, max_percent):
        return None
    controversy = generate_controversy(
        rng.choice(list(ControversyType)),
        pick_severity(career_level, rng),
        week,
    )
    logger.info("Controversy '%s' (%s) in week %s", controversy.title,
                controversy.severity.value, week)
    return controversy


def split_evenly(total: int, parts: int) -> List[int]:
    """Integer shares of ``total`` that add back up to it exactly."""
    if parts <= 0:
        return []
    base = math.floor(total / parts)
    shares = [base] * parts
    for i in range(total - base * parts):
        shares[i] += 1
    return shares


def spread_streams(platforms: List[StreamingPlatform], delta: int) -> List[StreamingPlatform]:
    """Apply a stream delta split evenly across platforms, never below zero."""
    shares = split_evenly(delta, len(platforms))
    return [replace(p, total_streams=max(0, p.total_streams + s)) for p, s in zip(platforms, shares)]


def spread_followers(platforms: List[SocialMediaPlatform], delta: int) -> List[SocialMediaPlatform]:
    """Apply a follower delta split evenly across social platforms, never below zero."""
    shares = split_evenly(delta, len(platforms))
    return [replace(p, followers=max(0, p.followers + s)) for p, s in zip(platforms, shares)]
