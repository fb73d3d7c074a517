"""Organic social-media follower growth."""

import math
from dataclasses import replace
from typing import List

from ..models import SocialMediaPlatform


def recency_multiplier(weeks_since_post: int) -> float:
    if weeks_since_post <= 0:
        return 2.0
    if weeks_since_post == 1:
        return 1.5
    if weeks_since_post <= 4:
        return 1.0
    return 0.5


def follower_growth(platform: SocialMediaPlatform, week: int) -> int:
    """Followers gained this week: 1% organic, scaled by engagement and posting recency."""
    weeks_since_post = max(0, week - platform.last_post_week)
    engagement = platform.engagement / 100 * 2
    return max(0, math.floor(platform.followers * 0.01 * engagement * recency_multiplier(weeks_since_post)))


def grow_followers(platforms: List[SocialMediaPlatform], week: int) -> List[SocialMediaPlatform]:
    return [replace(p, followers=p.followers + follower_growth(p, week)) for p in platforms]
