"""
Static game data: song tiers, platform tables, default rosters.

Every table here is read-only; the engine copies entries into the game state
when it needs to change them.
"""

import uuid
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from .models import (
    AIRapper,
    GameState,
    PlayerStats,
    SocialMediaPlatform,
    StreamingPlatform,
    Venue,
    VenueSize,
)
from .rng import RandomSource


@dataclass(frozen=True)
class TierInfo:
    """Lifetime bounds and phase coefficients for one song tier."""
    name: str
    cost: int
    popularity_weeks: Optional[int]  # None = never expires
    min_streams: int
    max_streams: int
    weekly_cap: int
    # Discovery phase: a + age*b + streams*c
    discovery: Tuple[float, float, float]
    # Viral-potential phase: max(floor, streams*rate)
    viral_floor: int
    viral_rate: float
    # Saturation phase: max(floor, streams*rate*slowdown)
    saturation_floor: int
    saturation_rate: float
    # Active-window multiplier applied to the popularity window
    window_extension: float


SONG_TIERS: Dict[int, TierInfo] = {
    1: TierInfo("Bad", 500, 8, 0, 10_000, 5_000,
                (10, 50, 0.05), 20, 0.10, 50, 0.05, 1.0),
    2: TierInfo("Mid", 1_000, 12, 10_000, 100_000, 25_000,
                (100, 200, 0.10), 200, 0.15, 100, 0.08, 2.0),
    3: TierInfo("Normal", 2_500, 20, 100_000, 1_000_000, 100_000,
                (500, 1_000, 0.15), 1_000, 0.20, 400, 0.10, 3.0),
    4: TierInfo("Hit", 10_000, 104, 1_000_000, 900_000_000, 500_000,
                (2_000, 5_000, 0.20), 5_000, 0.25, 2_000, 0.12, 5.0),
    5: TierInfo("Banger", 25_000, None, 10_000_000, 2_000_000_000, 2_000_000,
                (10_000, 20_000, 0.25), 20_000, 0.30, 10_000, 0.15, 5.0),
}

# Flopped low-tier songs fade faster than their tier would suggest
FLOP_LOW_TIER_EXTENSION = 1.5

# Free songs roll their tier: weights for tiers 1..5
FREE_TIER_WEIGHTS = [0.40, 0.40, 0.15, 0.04, 0.01]

# Canonical platform market share, used wherever streams are split by market
PLATFORM_MARKET_SHARE: Dict[str, float] = {
    "Spotify": 0.55,
    "YouTube Music": 0.28,
    "iTunes": 0.12,
    "SoundCloud": 0.05,
    "Amazon Music": 0.10,
    "Deezer": 0.03,
    "Tidal": 0.02,
    "Other": 0.08,
}
DEFAULT_MARKET_SHARE = 0.05

# Payout per stream in dollars
PLATFORM_PAYOUT_RATES: Dict[str, float] = {
    "Spotify": 0.012,
    "Apple Music": 0.0225,
    "iTunes": 0.018,
    "SoundCloud": 0.009,
    "YouTube Music": 0.015,
    "YouTube": 0.003,
    "YouTube Vevo": 0.0165,
    "Amazon Music": 0.012,
    "Tidal": 0.0252,
    "Deezer": 0.0105,
}
DEFAULT_PAYOUT_RATE = 0.012

# (minimum lifetime streams, level, title)
CAREER_LEVELS: List[Tuple[int, int, str]] = [
    (0, 1, "Unknown"),
    (100_000, 2, "Local Act"),
    (1_000_000, 3, "Underground"),
    (10_000_000, 4, "Rising Star"),
    (50_000_000, 5, "Established"),
    (100_000_000, 6, "Mainstream"),
    (500_000_000, 7, "Star"),
    (1_000_000_000, 8, "Superstar"),
    (5_000_000_000, 9, "Icon"),
    (10_000_000_000, 10, "Legend"),
]

DEFAULT_STREAMING_PLATFORMS = [
    "Spotify",
    "SoundCloud",
    "iTunes",
    "YouTube Music",
    "YouTube",
    "YouTube Vevo",
]

# name -> (followers, engagement)
DEFAULT_SOCIAL_PLATFORMS: Dict[str, Tuple[int, float]] = {
    "Twitter": (50, 5.0),
    "Instagram": (30, 8.0),
    "TikTok": (20, 12.0),
}

# Acceptance chance of a player feature request, by tier and fame level
FEATURE_REQUEST_CHANCES: Dict[int, Dict[str, float]] = {
    3: {"low": 0.05, "medium": 0.20, "high": 0.40},
    4: {"low": 0.01, "medium": 0.10, "high": 0.60},
    5: {"low": 0.001, "medium": 0.005, "high": 0.01},
}

# Subscription feature gates
FEATURE_ACCESS: Dict[str, List[str]] = {
    "tier5_songs": ["premium", "platinum"],
    "tier4_songs": ["standard", "premium", "platinum"],
    "premium_videos": ["premium", "platinum"],
    "exclusive_collabs": ["platinum"],
    "advanced_stats": ["premium", "platinum"],
    "stream_multiplier": ["standard", "premium", "platinum"],
    "high_quality_videos": ["premium", "platinum"],
    "unlimited_songs": ["platinum"],
}

# id, name, popularity, monthly listeners, lifetime streams, style, personality, feature cost
_AI_RAPPER_ROWS = [
    ("rapper_1", "21 Savvage", 85, 12_500_000, 450_000_000, "Trap", "mysterious", 75_000),
    ("rapper_2", "Lil Babby", 90, 15_000_000, 520_000_000, "Trap", "friendly", 85_000),
    ("rapper_3", "Drakke", 95, 40_000_000, 1_200_000_000, "Hip Hop/R&B", "arrogant", 250_000),
    ("rapper_4", "Lil Drukk", 80, 8_000_000, 320_000_000, "Trap/Mumble", "mysterious", 65_000),
    ("rapper_5", "King Vonn", 75, 5_000_000, 180_000_000, "Drill", "controversial", 45_000),
    ("rapper_6", "Naas", 65, 2_000_000, 80_000_000, "Old School", "humble", 25_000),
    ("rapper_7", "Thugg", 70, 3_500_000, 120_000_000, "Trap/Hip Hop", "arrogant", 35_000),
    ("rapper_8", "M.F. Gloom", 55, 1_200_000, 45_000_000, "Lyrical", "humble", 15_000),
    ("rapper_9", "Post Melon", 92, 38_000_000, 950_000_000, "Alternative/Hip Hop", "friendly", 150_000),
    ("rapper_10", "Jay-C", 98, 45_000_000, 1_800_000_000, "Hip Hop/Business", "arrogant", 500_000),
    ("rapper_11", "Eminence", 94, 42_000_000, 1_600_000_000, "Rap/Lyrical", "controversial", 350_000),
    ("rapper_12", "Chant the Rapper", 87, 30_000_000, 820_000_000, "Melodic Rap", "friendly", 90_000),
    ("rapper_13", "Doja Feline", 89, 32_000_000, 880_000_000, "Pop/Rap", "friendly", 100_000),
    ("rapper_14", "Nikki Mirage", 93, 36_000_000, 980_000_000, "Female Rap", "arrogant", 200_000),
    ("rapper_15", "Skepta Cal", 78, 7_000_000, 250_000_000, "Grime/UK Rap", "controversial", 50_000),
    ("rapper_16", "Kendrik", 82, 9_000_000, 350_000_000, "Conscious Rap", "humble", 60_000),
    ("rapper_17", "Gunna Wunna", 73, 4_500_000, 160_000_000, "Trap", "mysterious", 40_000),
    ("rapper_18", "Tech N9na", 79, 6_500_000, 230_000_000, "Speed Rap/Technical", "humble", 55_000),
    ("rapper_19", "Juicee", 76, 5_200_000, 185_000_000, "Emo Rap", "mysterious", 48_000),
    ("rapper_20", "J. Colee", 72, 4_000_000, 145_000_000, "Jazz Rap", "humble", 38_000),
    ("rapper_21", "Travi$ Scott", 88, 26_000_000, 780_000_000, "Commercial Rap", "arrogant", 120_000),
    ("rapper_22", "Megan Thee Thoroughbred", 81, 8_500_000, 320_000_000, "Female Hip Hop", "controversial", 70_000),
    ("rapper_23", "Snoop Catt", 84, 11_000_000, 400_000_000, "West Coast", "friendly", 80_000),
    ("rapper_24", "Tyler, The Inventor", 86, 18_000_000, 650_000_000, "Alternative Rap", "friendly", 95_000),
]

# id, name, city, capacity, cost, reputation required, size
_VENUE_ROWS = [
    ("venue_1", "The Basement", "New York", 200, 500, 10, VenueSize.SMALL),
    ("venue_2", "Club Echo", "Los Angeles", 350, 800, 20, VenueSize.SMALL),
    ("venue_3", "Urban Lounge", "Chicago", 800, 2_000, 30, VenueSize.MEDIUM),
    ("venue_4", "The Metro", "Atlanta", 1_200, 3_500, 40, VenueSize.MEDIUM),
    ("venue_5", "House of Blues", "Miami", 2_500, 8_000, 50, VenueSize.LARGE),
    ("venue_6", "Showbox Theater", "Seattle", 3_800, 12_000, 60, VenueSize.LARGE),
    ("venue_7", "Crypto Arena", "Los Angeles", 15_000, 50_000, 70, VenueSize.ARENA),
    ("venue_8", "Madison Square Garden", "New York", 20_000, 75_000, 80, VenueSize.ARENA),
    ("venue_9", "SoFi Stadium", "Los Angeles", 70_000, 250_000, 90, VenueSize.STADIUM),
    ("venue_10", "MetLife Stadium", "New Jersey", 82_500, 350_000, 95, VenueSize.STADIUM),
]

_TITLE_PREFIXES = ["The", "My", "Your", "Our", "Their"]
_TITLE_ADJECTIVES = [
    "Hot", "Cold", "Dark", "Bright", "Wild", "Smooth", "Hard", "Rich", "Lost",
    "Real", "Crazy", "Savage", "Chill", "Dope", "Lit", "Wavy", "Flex", "Boss",
]
_TITLE_NOUNS = [
    "Life", "Love", "Money", "Streets", "Game", "Dreams", "Time", "Heart",
    "Soul", "Mind", "Hood", "City", "Night", "Grind", "Drip", "Hustle",
    "Vibe", "Zone", "Fame", "Throne", "Paper", "Squad",
]
_TITLE_SUFFIXES = ["Flow", "Vibes", "Story", "Chronicles", "Anthem", "Season", "Code"]
_TITLE_SUBJECTS = ["Money", "Dreams", "Diamonds", "Secrets", "Ghosts", "Stars", "Shadows", "Chains"]
_TITLE_LOCATIONS = ["Hood", "Club", "City", "Streets", "Sky", "Rain", "Fire", "Studio", "Trap"]
_TITLE_STARTS = ["Nothing", "Rags", "Streets", "Bottom", "Zero", "Struggle", "Hustle"]
_TITLE_ENDS = ["Riches", "Fame", "Glory", "Top", "Millions", "Greatness", "Crown", "Legacy"]


def tier_info(tier: int) -> TierInfo:
    """Tier table entry; out-of-range tiers clamp to 1..5."""
    return SONG_TIERS[max(1, min(5, int(tier)))]


def market_share(platform: str) -> float:
    return PLATFORM_MARKET_SHARE.get(platform, DEFAULT_MARKET_SHARE)


def payout_rate(platform: str) -> float:
    return PLATFORM_PAYOUT_RATES.get(platform, DEFAULT_PAYOUT_RATE)


def career_level_for(total_streams: int) -> int:
    level = 1
    for threshold, lvl, _ in CAREER_LEVELS:
        if total_streams >= threshold:
            level = lvl
    return level


def career_title(level: int) -> str:
    for _, lvl, title in CAREER_LEVELS:
        if lvl == level:
            return title
    return CAREER_LEVELS[-1][2]


def generate_song_title(rng: RandomSource) -> str:
    """Random title in one of three patterns."""
    pattern = rng.randint(0, 2)
    if pattern == 1:
        return f"{rng.choice(_TITLE_SUBJECTS)} in the {rng.choice(_TITLE_LOCATIONS)}"
    if pattern == 2:
        return f"{rng.choice(_TITLE_STARTS)} to {rng.choice(_TITLE_ENDS)}"

    words = []
    if rng.random() > 0.5:
        words.append(rng.choice(_TITLE_PREFIXES))
    if rng.random() > 0.3:
        words.append(rng.choice(_TITLE_ADJECTIVES))
    words.append(rng.choice(_TITLE_NOUNS))
    if rng.random() > 0.5:
        words.append(rng.choice(_TITLE_SUFFIXES))
    return " ".join(words)


def default_ai_rappers() -> List[AIRapper]:
    return [
        AIRapper(
            id=row[0],
            name=row[1],
            popularity=row[2],
            monthly_listeners=row[3],
            total_streams=row[4],
            style=row[5],
            personality=row[6],
            feature_cost=row[7],
        )
        for row in _AI_RAPPER_ROWS
    ]


def default_venues() -> List[Venue]:
    return [
        Venue(
            id=row[0],
            name=row[1],
            city=row[2],
            capacity=row[3],
            cost=row[4],
            reputation_required=row[5],
            size=row[6],
        )
        for row in _VENUE_ROWS
    ]


def new_game(artist_name: str, artist_id: Optional[str] = None, max_energy: int = 100) -> GameState:
    """
    Build the starting state for a new career.

    Args:
        artist_name: Display name of the player
        artist_id: Stable id used to seed per-platform affinity; generated when omitted
        max_energy: Weekly energy budget

    Returns:
        GameState at week 1
    """
    return GameState(
        artist_name=artist_name,
        artist_id=artist_id or str(uuid.uuid4())[:8],
        current_week=1,
        stats=PlayerStats(),
        platforms=[StreamingPlatform(name=name) for name in DEFAULT_STREAMING_PLATFORMS],
        social_platforms=[
            SocialMediaPlatform(name=name, followers=followers, engagement=engagement)
            for name, (followers, engagement) in DEFAULT_SOCIAL_PLATFORMS.items()
        ],
        ai_rappers=default_ai_rappers(),
        venues=default_venues(),
        energy=max_energy,
        max_energy=max_energy,
    )
