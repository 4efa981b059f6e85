# blob_life/sim/metrics.py
from __future__ import annotations
from typing import Dict
import os
import csv

from .engine import TickStats
from .world import World

def summarize_tick(stats: TickStats, world: World) -> Dict[str, float]:
    pop = world.creatures
    n = len(pop)
    d = max(n, 1)
    return dict(
        tick=stats.tick, n=n,
        births=stats.births, kills=stats.kills, starved=stats.starved,
        avg_energy=sum(c.energy for c in pop) / d,
        avg_speed=sum(c.speed for c in pop) / d,
        avg_radius=sum(c.radius for c in pop) / d,
        avg_metabolism=sum(c.metabolic_rate for c in pop) / d,
        avg_digestion=sum(c.digestion for c in pop) / d,
        avg_power=sum(c.power for c in pop) / d,
        max_generation=max((c.generation for c in pop), default=0),
    )

def append_csv(path: str, row: Dict[str, float]) -> None:
    folder = os.path.dirname(path)
    if folder:
        os.makedirs(folder, exist_ok=True)
    write_header = not os.path.exists(path)
    with open(path, "a", newline="") as f:
        w = csv.DictWriter(f, fieldnames=list(row.keys()))
        if write_header:
            w.writeheader()
        w.writerow(row)
