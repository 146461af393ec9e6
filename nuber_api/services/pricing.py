"""
Order line pricing.

A line starts at the dish's base price. Each submitted option is matched by
name against the dish's options (first match wins, unknown names are
ignored). A matched option with a flat extra adds that extra; otherwise the
submitted choice is matched by name against the option's choices and the
matching choice's extra, if any, is added.
"""
import logging
from decimal import Decimal
from typing import Any, Iterable, List, Mapping, Optional, Sequence

from nuber_api.schemas.order import OrderItemOption

logger = logging.getLogger(__name__)


def find_by_name(entries: Optional[Iterable[Mapping[str, Any]]], name: Optional[str]) -> Optional[Mapping[str, Any]]:
    """Return the first entry whose ``name`` equals ``name``, or None."""
    for entry in entries or ():
        if entry.get("name") == name:
            return entry
    return None


def to_decimal(value: Any) -> Decimal:
    return value if isinstance(value, Decimal) else Decimal(str(value))


def extra_of(entry: Mapping[str, Any]) -> Decimal:
    """The entry's surcharge; missing or null counts as zero."""
    extra = entry.get("extra")
    return Decimal("0") if extra is None else to_decimal(extra)


def option_surcharge(dish_options: Sequence[Mapping[str, Any]], submitted: OrderItemOption) -> Decimal:
    """Extra price contributed by one submitted option."""
    dish_option = find_by_name(dish_options, submitted.name)
    if dish_option is None:
        return Decimal("0")

    # A zero or missing extra falls through to the choices
    extra = extra_of(dish_option)
    if extra:
        logger.debug(f"USD + {extra} for option '{submitted.name}'")
        return extra

    choice = find_by_name(dish_option.get("choices"), submitted.choice)
    extra = extra_of(choice) if choice is not None else Decimal("0")
    if extra:
        logger.debug(f"USD + {extra} for choice '{submitted.choice}' of option '{submitted.name}'")
        return extra

    return Decimal("0")


def price_item(base_price: Any, dish_options: Optional[Sequence[Mapping[str, Any]]],
               submitted_options: List[OrderItemOption]) -> Decimal:
    """
    Price one order line.

    Args:
        base_price: The dish's base price
        dish_options: The dish's options as stored (list of dicts)
        submitted_options: Options chosen by the customer, in submission order

    Returns:
        Base price plus every applicable surcharge
    """
    price = to_decimal(base_price)
    for submitted in submitted_options:
        price += option_surcharge(dish_options or [], submitted)
    return price
