"""Food values, consumption priority and daily consumption."""
from __future__ import annotations

import math
from typing import Mapping

# Nutritional value per unit, in consumption priority order.
FOOD_VALUES: dict[str, float] = {
    "berries": 0.3,
    "rations": 1.0,
    "small_game": 0.8,
    "large_game": 2.0,
    "grain": 1.0,
}

CONSUMPTION_ORDER: tuple[str, ...] = tuple(FOOD_VALUES)


def total_food_value(stocks: Mapping[str, int]) -> float:
    return sum(stocks.get(name, 0) * value for name, value in FOOD_VALUES.items())


def food_needed(population: int, per_capita: float, rationing: float = 1.0) -> float:
    return max(0, population) * per_capita * rationing


def consume_food(stocks: Mapping[str, int], need: float) -> dict[str, int] | None:
    """Eat *need* worth of food in priority order.

    Each food is eaten up to ``ceil(remaining / value)`` units so the need is
    always fully covered. Returns the new stocks, or None (nothing eaten)
    when the total value on hand cannot cover the need.
    """
    if round(total_food_value(stocks) - need, 9) < 0:
        return None
    result = dict(stocks)
    remaining = need
    for name in CONSUMPTION_ORDER:
        if remaining <= 0:
            break
        value = FOOD_VALUES[name]
        have = result.get(name, 0)
        # float noise must not push the ceiling up a whole unit
        eaten = min(have, math.ceil(round(remaining / value, 9)))
        result[name] = max(0, have - eaten)
        remaining -= eaten * value
    return result
