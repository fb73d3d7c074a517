"""Data models for the career simulation."""

from __future__ import annotations

import copy
import math
from dataclasses import dataclass, field, fields, is_dataclass, MISSING
from enum import Enum
from typing import Any, Dict, List, Optional, Union, get_args, get_origin, get_type_hints


def as_number(value: Any, default: Any = 0) -> Any:
    """Return value if it is a finite int/float, else default."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    if isinstance(value, float) and not math.isfinite(value):
        return default
    return value


class PerformanceType(Enum):
    NORMAL = "normal"
    VIRAL = "viral"
    FLOP = "flop"
    COMEBACK = "comeback"


class Relationship(Enum):
    NEUTRAL = "neutral"
    FRIEND = "friend"
    RIVAL = "rival"
    ENEMY = "enemy"


class AlbumType(Enum):
    STANDARD = "standard"
    DELUXE = "deluxe"
    REMIX = "remix"
    EP = "ep"
    COMPILATION = "compilation"


class TrendType(Enum):
    RISING = "rising"
    FALLING = "falling"
    HOT = "hot"
    STABLE = "stable"


class ReleaseType(Enum):
    SINGLE = "single"
    EP = "ep"
    ALBUM = "album"
    DELUXE = "deluxe"
    REMIX = "remix"
    TOUR = "tour"


class Severity(Enum):
    MINOR = "minor"
    MODERATE = "moderate"
    MAJOR = "major"
    SEVERE = "severe"


class ControversyType(Enum):
    OFFENSIVE_TWEET = "offensive_tweet"
    LEAKED_AUDIO = "leaked_audio"
    PUBLIC_FEUD = "public_feud"
    RELATIONSHIP_DRAMA = "relationship_drama"
    INAPPROPRIATE_COMMENTS = "inappropriate_comments"
    SUBSTANCE_ABUSE = "substance_abuse"
    LEGAL_TROUBLE = "legal_trouble"
    CONSPIRACY_THEORY = "conspiracy_theory"


class RequestStatus(Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    EXPIRED = "expired"


class BeefStatus(Enum):
    ACTIVE = "active"
    WON = "won"
    LOST = "lost"
    DRAW = "draw"


class VenueSize(Enum):
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"
    ARENA = "arena"
    STADIUM = "stadium"


class ConcertStatus(Enum):
    SCHEDULED = "scheduled"
    PERFORMED = "performed"
    CANCELLED = "cancelled"


class TourStatus(Enum):
    PLANNING = "planning"
    ACTIVE = "active"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class MerchType(Enum):
    CLOTHING = "clothing"
    ACCESSORIES = "accessories"
    COLLECTIBLES = "collectibles"
    DIGITAL = "digital"
    LIMITED = "limited"


class SubscriptionType(Enum):
    NONE = "none"
    STANDARD = "standard"
    PREMIUM = "premium"
    PLATINUM = "platinum"


def _field_default(f) -> Any:
    if f.default is not MISSING:
        return f.default
    if f.default_factory is not MISSING:  # type: ignore[misc]
        return f.default_factory()  # type: ignore[misc]
    return None


def _encode(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if is_dataclass(value):
        return value.to_dict()
    if isinstance(value, list):
        return [_encode(v) for v in value]
    if isinstance(value, dict):
        return {str(k): _encode(v) for k, v in value.items()}
    return value


def _decode(tp: Any, value: Any, default: Any) -> Any:
    origin = get_origin(tp)
    args = get_args(tp)

    if origin is Union:
        if value is None:
            return None
        inner = next(a for a in args if a is not type(None))
        return _decode(inner, value, default)
    if origin in (list, List):
        if not isinstance(value, list):
            return default if default is not None else []
        return [_decode(args[0], v, None) for v in value]
    if origin in (dict, Dict):
        if not isinstance(value, dict):
            return default if default is not None else {}
        return {str(k): _decode(args[1], v, 0) for k, v in value.items()}
    if isinstance(tp, type) and issubclass(tp, Enum):
        try:
            return tp(value)
        except ValueError:
            if default is None:
                raise
            return default
    if isinstance(tp, type) and is_dataclass(tp):
        return tp.from_dict(value or {})
    if tp is int:
        number = as_number(value, default)
        return int(number) if number is not None else None
    if tp is float:
        number = as_number(value, default)
        return float(number) if number is not None else None
    if tp is bool:
        return bool(value)
    if tp is str:
        return "" if value is None else str(value)
    return value


class Record:
    """Mixin giving dataclasses a JSON-friendly dict form.

    ``from_dict`` tolerates legacy or corrupted saves: missing keys fall back
    to the field default and non-finite numbers are replaced by the default.
    """

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {f.name: _encode(getattr(self, f.name)) for f in fields(self)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]):
        """Create from dictionary."""
        hints = get_type_hints(cls)
        kwargs = {}
        for f in fields(cls):
            if f.name not in data:
                continue
            kwargs[f.name] = _decode(hints[f.name], data[f.name], _field_default(f))
        return cls(**kwargs)


@dataclass
class PlayerStats(Record):
    """Core career stats; all but wealth and career level live in 0-100."""
    career_level: int = 1
    reputation: float = 5.0
    wealth: float = 1000.0
    creativity: float = 20.0
    marketing: float = 10.0
    networking: float = 5.0
    fan_loyalty: float = 10.0
    stage_power: Optional[float] = None


@dataclass
class Song(Record):
    """A track owned by the player or by an AI rapper."""
    id: str
    title: str
    tier: int
    released: bool = False
    release_date: int = 0
    streams: int = 0
    is_active: bool = False
    performance_type: PerformanceType = PerformanceType.NORMAL
    performance_status_week: int = 0
    featuring: List[str] = field(default_factory=list)
    release_platforms: List[str] = field(default_factory=list)
    hype: float = 0.0
    quality: int = 50
    icon: str = ""
    ai_rapper_owner: Optional[str] = None
    ai_rapper_features_player: bool = False
    last_week_growth: int = 0
    platform_stream_distribution: Dict[str, int] = field(default_factory=dict)

    @property
    def is_ai_owned(self) -> bool:
        return self.ai_rapper_owner is not None

    def release_age(self, week: int) -> int:
        """Weeks since release, 0 during the release week."""
        return week - self.release_date


@dataclass
class StreamingPlatform(Record):
    name: str
    total_streams: int = 0
    listeners: int = 0
    revenue: float = 0.0
    is_unlocked: bool = True
    last_week_streams: int = 0


@dataclass
class SocialMediaPlatform(Record):
    name: str
    followers: int = 0
    posts: int = 0
    engagement: float = 0.0
    last_post_week: int = 0


@dataclass
class Album(Record):
    id: str
    title: str
    album_type: AlbumType = AlbumType.STANDARD
    song_ids: List[str] = field(default_factory=list)
    released: bool = False
    release_date: int = 0
    streams: int = 0
    sales: int = 0
    revenue: float = 0.0
    platform_streams: Dict[str, int] = field(default_factory=dict)
    critical_rating: Optional[float] = None
    fan_rating: Optional[float] = None
    chart_position: Optional[int] = None
    parent_album_id: Optional[str] = None
    exclusive_tracks: List[str] = field(default_factory=list)
    remix_artists: List[str] = field(default_factory=list)
    announced: bool = False
    cover_art: str = ""


@dataclass
class AIRapper(Record):
    """A simulated competitor artist."""
    id: str
    name: str
    popularity: int = 50
    monthly_listeners: int = 0
    total_streams: int = 0
    style: str = ""
    personality: str = ""
    feature_cost: int = 0
    relationship: Relationship = Relationship.NEUTRAL
    collab_count: int = 0
    last_collab_week: int = 0


@dataclass
class MarketTrend(Record):
    id: str
    name: str
    description: str
    trend_type: TrendType
    platforms: List[str] = field(default_factory=list)
    impact: int = 1
    duration: int = 2
    start_week: int = 0
    end_week: Optional[int] = None

    def remaining_weeks(self, week: int) -> int:
        return self.start_week + self.duration - week


@dataclass
class HypeEvent(Record):
    id: str
    event_type: ReleaseType
    name: str
    target_week: int
    hype_level: float = 0.0
    max_hype: float = 70.0
    decay_rate: float = 5.0
    announced: bool = False
    released: bool = False
    release_week: Optional[int] = None


@dataclass
class ControversyResponse(Record):
    label: str
    description: str
    reputation_modifier: int = 0
    stream_modifier: int = 0
    follower_modifier: int = 0


@dataclass
class Controversy(Record):
    id: str
    controversy_type: ControversyType
    title: str
    description: str
    severity: Severity
    week: int
    reputation_impact: int = 0
    stream_impact: int = 0
    follower_impact: int = 0
    responses: List[ControversyResponse] = field(default_factory=list)
    resolved: bool = False
    chosen_response: Optional[int] = None
    resolved_week: Optional[int] = None


@dataclass
class FeatureRequest(Record):
    """A collaboration request sent to the player by an AI rapper."""
    id: str
    rapper_id: str
    tier: int
    week_requested: int
    expires_week: int
    status: RequestStatus = RequestStatus.PENDING


@dataclass
class Beef(Record):
    id: str
    rapper_id: str
    started_week: int
    player_quality: float
    rapper_quality: Optional[float] = None
    status: BeefStatus = BeefStatus.ACTIVE
    resolved_week: Optional[int] = None
    rapper_reputation_gain: Optional[int] = None


@dataclass
class EventOption(Record):
    """One choice of a random event and what it does to the career."""
    text: str
    reputation: float = 0.0
    creativity: float = 0.0
    marketing: float = 0.0
    networking: float = 0.0
    fan_loyalty: float = 0.0
    wealth: float = 0.0
    follower_multiplier: float = 1.0
    listener_multiplier: float = 1.0


@dataclass
class RandomEvent(Record):
    id: str
    title: str
    description: str
    options: List[EventOption] = field(default_factory=list)
    required_reputation: float = 0.0
    week: Optional[int] = None
    chosen_option: Optional[int] = None


@dataclass
class Venue(Record):
    id: str
    name: str
    city: str
    capacity: int
    cost: int
    reputation_required: int = 0
    size: VenueSize = VenueSize.SMALL


@dataclass
class Concert(Record):
    id: str
    venue_id: str
    week: int
    ticket_price: float
    setlist: List[str] = field(default_factory=list)
    status: ConcertStatus = ConcertStatus.SCHEDULED
    attendance: int = 0
    revenue: float = 0.0
    profit: float = 0.0
    performance_quality: int = 0
    satisfaction: str = ""
    reputation_gain: int = 0
    tour_id: Optional[str] = None


@dataclass
class Tour(Record):
    id: str
    name: str
    venue_ids: List[str]
    start_week: int
    end_week: int
    ticket_price: float
    status: TourStatus = TourStatus.PLANNING
    current_venue_index: int = 0
    booked_cost: float = 0.0


@dataclass
class MerchandiseItem(Record):
    id: str
    name: str
    merch_type: MerchType
    price: float
    cost: float
    inventory: int = 0
    is_active: bool = True
    is_limited: bool = False
    limited_quantity: Optional[int] = None
    total_sold: int = 0
    revenue: float = 0.0
    profit: float = 0.0


@dataclass
class MerchandiseWeeklySales(Record):
    week: int
    units: Dict[str, int] = field(default_factory=dict)
    revenue: float = 0.0
    profit: float = 0.0


@dataclass
class WeeklyStats(Record):
    """Append-only ledger row captured once per week."""
    week: int
    total_streams: int
    total_followers: int
    total_listeners: int
    wealth: float
    reputation: float
    songs_released: int
    song_ids: List[str] = field(default_factory=list)
    revenue: float = 0.0


@dataclass
class Subscription(Record):
    subscription_type: SubscriptionType = SubscriptionType.NONE
    is_active: bool = False


@dataclass
class GameState(Record):
    """The whole career. Only the orchestrator and player actions replace it."""
    artist_name: str
    artist_id: str
    current_week: int = 1
    stats: PlayerStats = field(default_factory=PlayerStats)
    songs: List[Song] = field(default_factory=list)
    albums: List[Album] = field(default_factory=list)
    platforms: List[StreamingPlatform] = field(default_factory=list)
    social_platforms: List[SocialMediaPlatform] = field(default_factory=list)
    ai_rappers: List[AIRapper] = field(default_factory=list)
    market_trends: List[MarketTrend] = field(default_factory=list)
    past_market_trends: List[MarketTrend] = field(default_factory=list)
    hype_events: List[HypeEvent] = field(default_factory=list)
    past_hype_events: List[HypeEvent] = field(default_factory=list)
    active_controversies: List[Controversy] = field(default_factory=list)
    past_controversies: List[Controversy] = field(default_factory=list)
    feature_requests: List[FeatureRequest] = field(default_factory=list)
    beefs: List[Beef] = field(default_factory=list)
    random_events: List[RandomEvent] = field(default_factory=list)
    resolved_random_events: List[RandomEvent] = field(default_factory=list)
    venues: List[Venue] = field(default_factory=list)
    concerts: List[Concert] = field(default_factory=list)
    tours: List[Tour] = field(default_factory=list)
    merchandise: List[MerchandiseItem] = field(default_factory=list)
    merchandise_sales: List[MerchandiseWeeklySales] = field(default_factory=list)
    weekly_stats: List[WeeklyStats] = field(default_factory=list)
    subscription: Subscription = field(default_factory=Subscription)
    energy: int = 100
    max_energy: int = 100

    def clone(self) -> "GameState":
        return copy.deepcopy(self)

    def find_song(self, song_id: str) -> Optional[Song]:
        return next((s for s in self.songs if s.id == song_id), None)

    def find_album(self, album_id: str) -> Optional[Album]:
        return next((a for a in self.albums if a.id == album_id), None)

    def find_rapper(self, rapper_id: str) -> Optional[AIRapper]:
        return next((r for r in self.ai_rappers if r.id == rapper_id), None)

    def find_platform(self, name: str) -> Optional[StreamingPlatform]:
        return next((p for p in self.platforms if p.name == name), None)

    def find_venue(self, venue_id: str) -> Optional[Venue]:
        return next((v for v in self.venues if v.id == venue_id), None)

    @property
    def player_songs(self) -> List[Song]:
        return [s for s in self.songs if not s.is_ai_owned]

    @property
    def total_streams(self) -> int:
        return sum(p.total_streams for p in self.platforms)

    @property
    def total_listeners(self) -> int:
        return sum(p.listeners for p in self.platforms)

    @property
    def total_followers(self) -> int:
        return sum(s.followers for s in self.social_platforms)
