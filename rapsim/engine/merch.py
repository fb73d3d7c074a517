"""Weekly merchandise sales."""

import logging
import math
from dataclasses import dataclass, replace
from typing import List, Optional

from ..models import MerchandiseItem, MerchandiseWeeklySales, MerchType, PlayerStats
from ..rng import RandomSource

logger = logging.getLogger(__name__)


@dataclass
class MerchWeek:
    items: List[MerchandiseItem]
    sales: Optional[MerchandiseWeeklySales]


def type_multiplier(item: MerchandiseItem) -> float:
    if item.merch_type is MerchType.CLOTHING:
        return 1.2
    if item.merch_type is MerchType.ACCESSORIES:
        return 0.8
    if item.merch_type is MerchType.COLLECTIBLES:
        return 2.0 if item.is_limited else 0.6
    if item.merch_type is MerchType.DIGITAL:
        return 1.5
    if item.merch_type is MerchType.LIMITED:
        return 3.0
    return 1.0


def units_sold(item: MerchandiseItem, fan_base: int, stats: PlayerStats, rng: RandomSource) -> int:
    conversion = 0.001 + stats.reputation / 100 * 0.019
    marketing = (stats.marketing + 50) / 150
    price = max(0.3, 1 - item.price / 200)
    volume = math.floor(fan_base * conversion * type_multiplier(item) * marketing * price)

    available = item.inventory
    if item.is_limited and item.limited_quantity:
        available = min(available, item.limited_quantity - item.total_sold)
    volume = math.floor(min(volume, available) * rng.uniform(0.8, 1.2))
    return max(0, min(volume, available))


def process_merchandise(
    items: List[MerchandiseItem],
    fan_base: int,
    stats: PlayerStats,
    week: int,
    rng: RandomSource,
) -> MerchWeek:
    """Sell active items to the fan base; returns updated items and the week's sales row."""
    if not any(item.is_active for item in items):
        return MerchWeek(items, None)

    sales = MerchandiseWeeklySales(week=week)
    updated = []
    for item in items:
        if not item.is_active:
            updated.append(item)
            continue
        units = units_sold(item, fan_base, stats, rng)
        revenue = units * item.price
        profit = units * (item.price - item.cost)
        sales.units[item.id] = units
        sales.revenue += revenue
        sales.profit += profit
        updated.append(
            replace(
                item,
                inventory=item.inventory - units,
                total_sold=item.total_sold + units,
                revenue=item.revenue + revenue,
                profit=item.profit + profit,
            )
        )
    logger.debug("Week %s merchandise: %s units, profit %.2f", week, sum(sales.units.values()), sales.profit)
    return MerchWeek(updated, sales)
