"""System factories for the daily tick.

Every system has the signature ``(colony, state, ctx) -> state`` and returns
the state handed to the next one. The engine publishes whatever the last
system returns.
"""
from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING

from hexcolony.config import EconomyConfig
from hexcolony.food import consume_food, food_needed
from hexcolony.messages import HIGH_MORALE, LOW_MORALE, message, morale_message
from hexcolony.production import apply_production, compute_production
from hexcolony.state import season_for
from hexcolony.types import Severity, System

if TYPE_CHECKING:
    from hexcolony.colony import Colony
    from hexcolony.state import ColonyState
    from hexcolony.types import TickContext


def make_terrain_system() -> System:
    """Return a system that recounts revealed terrain when the map changed."""

    def terrain_system(colony: Colony, state: ColonyState, ctx: TickContext) -> ColonyState:
        colony.refresh_terrain()
        return state

    return terrain_system


def make_production_system() -> System:
    def production_system(colony: Colony, state: ColonyState, ctx: TickContext) -> ColonyState:
        produced = compute_production(state, colony.terrain_counts)
        return apply_production(state, produced)

    return production_system


def make_consumption_system(economy: EconomyConfig) -> System:
    """Return a system that feeds the colony and moves happiness.

    A shortfall is written to the chronicle once per episode; the episode
    ends the first day the colony is fed again.
    """

    def consumption_system(colony: Colony, state: ColonyState, ctx: TickContext) -> ColonyState:
        rationing = economy.rationing[state.policies.rationing]
        need = food_needed(state.population, economy.food_per_capita, rationing)
        stocks = consume_food(state.stocks, need)
        if stocks is not None:
            happiness = min(economy.happiness_max, state.happiness + economy.happiness_gain)
            return replace(state, stocks=stocks, happiness=happiness, food_shortfall=False)

        happiness = max(economy.happiness_min, state.happiness - economy.happiness_loss)
        if not state.food_shortfall:
            colony.chronicle.add(ctx.day, message("starvation"), Severity.DANGER)
        return replace(state, happiness=happiness, food_shortfall=True)

    return consumption_system


def make_expedition_system() -> System:
    def expedition_system(colony: Colony, state: ColonyState, ctx: TickContext) -> ColonyState:
        return colony.expeditions.resolve(
            state, colony.hexmap, colony.chronicle, ctx.day, ctx.random
        )

    return expedition_system


def make_day_system(economy: EconomyConfig) -> System:
    def day_system(colony: Colony, state: ColonyState, ctx: TickContext) -> ColonyState:
        return replace(state, day=ctx.day, season=season_for(ctx.day, economy.season_length))

    return day_system


def make_flavor_system(economy: EconomyConfig) -> System:
    """Return a system that adds a morale line every ``flavor_interval`` days."""

    def flavor_system(colony: Colony, state: ColonyState, ctx: TickContext) -> ColonyState:
        if state.day % economy.flavor_interval != 0:
            return state
        if state.happiness > economy.high_morale:
            colony.chronicle.add(state.day, morale_message(HIGH_MORALE, ctx.random))
        elif state.happiness < economy.low_morale:
            colony.chronicle.add(
                state.day, morale_message(LOW_MORALE, ctx.random), Severity.WARNING
            )
        return state

    return flavor_system


def make_purge_system() -> System:
    def purge_system(colony: Colony, state: ColonyState, ctx: TickContext) -> ColonyState:
        colony.expeditions.purge(state.day)
        return state

    return purge_system
