"""Flat message lookup for chronicle text."""
from __future__ import annotations

import random as _random_mod
from typing import Any

MESSAGES: dict[str, str] = {
    "arrival": "Your expedition has arrived. The land offers both bounty and challenge.",
    "starvation": "Food supplies depleted. The colony goes hungry.",
    "not_enough_workers": "Not enough idle workers for expedition!",
    "expedition_departs": (
        "Expedition of {workers} settlers departs to explore distant lands. "
        "Expected return: Day {arrival_day}."
    ),
    "expedition_lost": (
        "The expedition to distant lands has gone missing. "
        "{workers} souls lost to the wilderness."
    ),
    "expedition_returns": (
        "Expedition returns! They discovered {terrain} and mapped their journey, "
        "revealing {revealed} hexes. {workers} settlers rejoin the colony."
    ),
    "unknown_lands": "unknown lands",
}

HIGH_MORALE: tuple[str, ...] = (
    "The settlers hum work songs as they toil. Morale is high.",
    "Children play by the river. Your colony thrives.",
    "The evening fires burn bright with laughter and stories.",
)

LOW_MORALE: tuple[str, ...] = (
    "Grumbling voices echo from the workers' quarters.",
    "The settlers move slowly, their spirits flagging.",
    "Tension hangs heavy in the air. Something must change.",
)


def message(key: str, **fields: Any) -> str:
    """Look up *key* and fill its placeholders. Raises KeyError for unknown keys."""
    return MESSAGES[key].format(**fields)


def morale_message(pool: tuple[str, ...], rng: _random_mod.Random) -> str:
    return pool[rng.randrange(len(pool))]
