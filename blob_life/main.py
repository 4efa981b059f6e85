# blob_life/main.py
from __future__ import annotations
import argparse
import dataclasses
import logging

from .sim.config import DEFAULT, SIM, SimConfig, SimulationConfig
from .sim.live import LiveSim
from .sim.metrics import summarize_tick, append_csv

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Blob life: sorted-sweep predation and photosynthesis simulation")
    parser.add_argument("--ticks", type=int, default=SIM.ticks)
    parser.add_argument("--seed", type=int, default=SIM.seed)
    parser.add_argument("--pop", type=int, default=SIM.initial_population)
    parser.add_argument("--rate", type=float, default=DEFAULT.repro.rate, help="per-tick reproduction chance")
    parser.add_argument("--every", type=int, default=SIM.report_every, help="report/CSV stride in ticks")
    parser.add_argument("--csv", type=str, default=SIM.track_csv)
    parser.add_argument("--plot", action="store_true", default=SIM.enable_plot)
    parser.add_argument("--ui", action="store_true", help="launch real-time UI")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser

def run_headless(sim: SimConfig, config: SimulationConfig) -> LiveSim:
    live = LiveSim(config, seed=sim.seed)
    live.seed_world(n=sim.initial_population)
    every = max(1, sim.report_every)

    for _ in range(sim.ticks):
        stats = live.step()
        if stats.tick % every == 0 or live.extinct:
            row = summarize_tick(stats, live.world)
            print(
                f"Tick {row['tick']:5d} | N={row['n']:4d} "
                f"born={live.total_births:4d} eaten={live.total_kills:4d} starved={live.total_starved:4d} "
                f"avg_energy={row['avg_energy']:.2f} avg_radius={row['avg_radius']:.2f} "
                f"avg_power={row['avg_power']:+.2f} gen<={row['max_generation']}"
            )
            if sim.track_csv:
                append_csv(sim.track_csv, row)
        if live.extinct:
            print(f"Extinct after {live.tick} ticks")
            break
    return live

def run():
    args = build_parser().parse_args()
    logging.basicConfig(level=getattr(logging, args.log_level),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    config = dataclasses.replace(DEFAULT, repro=dataclasses.replace(DEFAULT.repro, rate=args.rate))
    config.validate()

    if args.ui:
        from .ui.app import run_ui
        run_ui(config, seed=args.seed, n=args.pop)
        return

    sim = dataclasses.replace(SIM, seed=args.seed, initial_population=args.pop, ticks=args.ticks,
                              report_every=args.every, track_csv=args.csv or None,
                              enable_plot=args.plot)
    live = run_headless(sim, config)

    if sim.enable_plot:
        from .sim.visualize import snapshot
        live.world.sort()
        snapshot(live.world, title=f"Tick {live.tick} (N={len(live.world)})")

if __name__ == "__main__":
    run()
