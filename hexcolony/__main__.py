"""Headless colony run: simulate some days and print the chronicle.

Usage:
  python -m hexcolony --seed 1234 --days 60
  python -m hexcolony --explore 3 --rationing strict --realtime --speed very_fast
"""
from __future__ import annotations

import argparse
import logging

from hexcolony.config import RATIONING, TICK_RATES
from hexcolony.hexgrid import hex_distance
from hexcolony.simulation import Simulation, build_simulation


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="hexcolony - headless colony simulation")
    p.add_argument("--seed", type=int, default=None, help="Map seed (default: random)")
    p.add_argument("--rng-seed", type=int, default=None,
                   help="Gameplay random seed (default: random)")
    p.add_argument("--days", type=int, default=30, help="Days to simulate (default: 30)")
    p.add_argument("--explore", type=int, default=0,
                   help="Workers sent on one expedition to the nearest unrevealed tile")
    p.add_argument("--rationing", choices=sorted(RATIONING), default="normal")
    p.add_argument("--speed", choices=sorted(TICK_RATES), default="very_fast",
                   help="Tick rate used with --realtime")
    p.add_argument("--realtime", action="store_true",
                   help="Pace days on the wall clock instead of running flat out")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = p.parse_args(argv)
    args.days = max(1, args.days)
    return args


def _nearest_unrevealed(sim: Simulation) -> tuple[int, int] | None:
    hidden = [t.coord for t in sim.hexmap if not t.revealed]
    if not hidden:
        return None
    return min(hidden, key=lambda c: (hex_distance(sim.colony_location, c), c))


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    sim = build_simulation(seed=args.seed, rng_seed=args.rng_seed)
    sim.set_policy("rationing", args.rationing)
    if args.explore > 0:
        target = _nearest_unrevealed(sim)
        if target is not None:
            sim.start_expedition(target[0], target[1], args.explore)

    if args.realtime:
        sim.set_tick_rate(args.speed)
        stop_day = sim.state.day + args.days

        def _stop_when_done(colony, ctx) -> None:
            if colony.state.day >= stop_day:
                ctx.request_stop()

        sim.engine.on_tick(_stop_when_done)
        sim.run_forever()
    else:
        sim.run(args.days)

    print(f"Map seed {sim.seed}, colony at {sim.colony_location}")
    for entry in sim.chronicle:
        print(f"[Day {entry.day:>4}] {entry.severity.value:<7} {entry.message}")
    st = sim.state
    print(
        f"Day {st.day} ({st.season}) - population {st.population}, "
        f"happiness {st.happiness:.2f}, food {st.total_food:.1f}"
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
