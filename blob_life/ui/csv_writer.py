# blob_life/ui/csv_writer.py
from __future__ import annotations
import csv
import os
import uuid
from typing import Dict, List, Optional

from ..sim.engine import TickStats
from ..sim.metrics import summarize_tick
from ..sim.world import World


class TickCsvLogger:
    """
    Append tick-level stats to a CSV file every `every` ticks.
    Each run gets its own session_id so several runs can share one file;
    analyze_csv.py filters on it.

    Usage from a UI loop:
        logger = TickCsvLogger()
        ...
        stats = live.step()
        logger.maybe_append(stats, live.world)
    """
    HEADER = [
        "session_id", "tick", "n", "births", "kills", "starved",
        "avg_energy", "avg_speed", "avg_radius", "avg_metabolism", "avg_digestion",
        "avg_power", "max_generation",
        "power_min", "power_q25", "power_median", "power_q75", "power_max",
        "notes",
    ]

    def __init__(self, path: str = "runs/ui_ticks.csv", every: int = 10, enabled: bool = True):
        self.path = path
        self.every = max(1, int(every))
        self.enabled = enabled
        self.session_id = uuid.uuid4().hex[:8]
        # counts accumulate between written rows
        self._births = self._kills = self._starved = 0

        folder = os.path.dirname(self.path)
        if folder:
            os.makedirs(folder, exist_ok=True)
        if not os.path.exists(self.path):
            with open(self.path, "w", newline="") as f:
                csv.DictWriter(f, fieldnames=self.HEADER).writeheader()

    @staticmethod
    def _quantiles(xs: List[float]) -> Dict[str, float]:
        """Nearest-rank q25/q50/q75 plus min/max."""
        if not xs:
            nan = float("nan")
            return dict(power_min=nan, power_q25=nan, power_median=nan, power_q75=nan, power_max=nan)
        q = sorted(xs)
        n = len(q)
        def at(p: float) -> float:
            i = int(round(p * (n - 1)))
            return q[max(0, min(n - 1, i))]
        return dict(
            power_min=q[0],
            power_q25=at(0.25),
            power_median=at(0.50),
            power_q75=at(0.75),
            power_max=q[-1],
        )

    def row(self, stats: TickStats, world: World, notes: Optional[str] = None) -> Dict:
        r = dict(session_id=self.session_id)
        r.update(summarize_tick(stats, world))
        r.update(self._quantiles([c.power for c in world.creatures]))
        r["notes"] = notes or ""
        return r

    def maybe_append(self, stats: TickStats, world: World, notes: Optional[str] = None) -> bool:
        """Accumulate stats; write one row when stats.tick hits the stride. Returns True if written."""
        self._births += stats.births
        self._kills += stats.kills
        self._starved += stats.starved
        if stats.tick % self.every != 0:
            return False
        if not self.enabled:
            self._births = self._kills = self._starved = 0
            return False
        total = TickStats(tick=stats.tick, kills=self._kills, starved=self._starved,
                          births=self._births, population=len(world))
        with open(self.path, "a", newline="") as f:
            w = csv.DictWriter(f, fieldnames=self.HEADER)
            w.writerow(self.row(total, world, notes))
        self._births = self._kills = self._starved = 0
        return True
