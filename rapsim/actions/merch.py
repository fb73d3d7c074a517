"""Merchandise production."""

import logging
import uuid
from typing import Optional, Tuple

from ..exceptions import InvalidActionError
from ..models import GameState, MerchandiseItem, MerchType

logger = logging.getLogger(__name__)


def create_merchandise(
    state: GameState,
    name: str,
    merch_type: MerchType,
    price: float,
    cost: float,
    inventory: int,
    limited_quantity: Optional[int] = None,
) -> Tuple[GameState, str]:
    """Produce a run of merchandise, paying ``cost * inventory`` up front."""
    if price <= 0 or cost < 0 or inventory <= 0:
        raise InvalidActionError("Price and inventory must be positive.")
    production = cost * inventory
    if state.stats.wealth < production:
        raise InvalidActionError(
            f"You don't have enough money to produce this merchandise. You need ${production:,.0f}."
        )

    item = MerchandiseItem(
        id=str(uuid.uuid4()),
        name=name,
        merch_type=merch_type,
        price=price,
        cost=cost,
        inventory=inventory,
        is_limited=limited_quantity is not None or merch_type is MerchType.LIMITED,
        limited_quantity=limited_quantity,
    )
    new_state = state.clone()
    new_state.merchandise.append(item)
    new_state.stats.wealth -= production
    logger.info("Produced %s units of '%s'", inventory, name)
    return new_state, item.id


def restock_merchandise(state: GameState, item_id: str, units: int) -> GameState:
    item = next((m for m in state.merchandise if m.id == item_id), None)
    if item is None:
        logger.warning("Unknown merchandise item %s", item_id)
        return state
    if units <= 0:
        raise InvalidActionError("Restock at least one unit.")
    production = units * item.cost
    if state.stats.wealth < production:
        raise InvalidActionError(f"You need ${production:,.0f} to produce {units} more units.")

    new_state = state.clone()
    for m in new_state.merchandise:
        if m.id == item_id:
            m.inventory += units
            m.is_active = True
    new_state.stats.wealth -= production
    return new_state


def set_merchandise_active(state: GameState, item_id: str, active: bool) -> GameState:
    if not any(m.id == item_id for m in state.merchandise):
        logger.warning("Unknown merchandise item %s", item_id)
        return state
    new_state = state.clone()
    for m in new_state.merchandise:
        if m.id == item_id:
            m.is_active = active
    return new_state
