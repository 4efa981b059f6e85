# blob_life/sim/live.py
from __future__ import annotations
from typing import Dict, Optional, Tuple
import logging
import math

from .behaviors import Behavior
from .config import DEFAULT, SimulationConfig
from .engine import TickStats, step
from .genome import Genome, baseline_genome
from .models import Creature
from .rng import RNG
from .world import World

log = logging.getLogger(__name__)


class LiveSim:
    """
    Step-by-step driver for the UI and the headless runner.
    Owns the World, the random source and the tick counter.
    """
    def __init__(self, config: SimulationConfig = DEFAULT, seed: int = 42,
                 behavior: Optional[Behavior] = None):
        self.config = config.validate()
        self.seed = seed
        self.rng = RNG(seed)
        self.world = World(config)
        self.behavior = behavior
        self.tick: int = 0
        self.total_births = 0
        self.total_kills = 0
        self.total_starved = 0
        self.last_stats = TickStats()
        self._extinct_logged = False

    def seed_world(self, genome: Optional[Genome] = None, n: int = 1,
                   position: Tuple[float, float] = (0.0, 0.0)) -> None:
        """Place n copies of genome; extras land on a ring around position."""
        g = genome if genome is not None else baseline_genome()
        x0, y0 = position
        spread = self.config.world.max_radius * 2.0
        for i in range(n):
            if i == 0:
                x, y = x0, y0
            else:
                a = self.rng.angle()
                x, y = self.world.clamp_inside(x0 + spread * i ** 0.5 * math.cos(a),
                                               y0 + spread * i ** 0.5 * math.sin(a))
            self.world.spawn(g.copy(), x, y, born_tick=self.tick)
        self._extinct_logged = False

    def reset(self, seed: Optional[int] = None, genome: Optional[Genome] = None, n: int = 1) -> None:
        if seed is not None:
            self.seed = seed
        self.rng = RNG(self.seed)
        self.world = World(self.config)
        self.tick = 0
        self.total_births = self.total_kills = self.total_starved = 0
        self.last_stats = TickStats()
        self.seed_world(genome, n)

    def step(self) -> TickStats:
        stats = step(self.world, self.rng, self.tick, self.behavior)
        self.tick += 1
        self.total_births += stats.births
        self.total_kills += stats.kills
        self.total_starved += stats.starved
        self.last_stats = stats
        if not self.world.creatures and not self._extinct_logged:
            log.info("population went extinct at tick %d", self.tick)
            self._extinct_logged = True
        return stats

    def run(self, ticks: int) -> TickStats:
        stats = self.last_stats
        for _ in range(ticks):
            stats = self.step()
        return stats

    @property
    def extinct(self) -> bool:
        return not self.world.creatures

    # UI helpers
    def live_creatures(self) -> Tuple[Creature, ...]:
        return self.world.live_creatures()

    def followed(self) -> Optional[Creature]:
        return self.world.followed()

    def follow_next(self) -> Optional[Creature]:
        """Move the camera to the next creature in x order (wraps around)."""
        cs = self.world.creatures
        if not cs:
            self.world.follow(None)
            return None
        cur = self.world.followed()
        idx = cs.index(cur) if cur in cs else -1
        nxt = cs[(idx + 1) % len(cs)]
        self.world.follow(nxt)
        return nxt

    def stat_means(self) -> Dict[str, float]:
        cs = self.world.creatures
        n = len(cs)
        if n == 0:
            return dict(n=0, mean_speed=float('nan'), mean_radius=float('nan'),
                        mean_energy=float('nan'), mean_power=float('nan'))
        return dict(
            n=n,
            mean_speed=sum(c.speed for c in cs) / n,
            mean_radius=sum(c.radius for c in cs) / n,
            mean_energy=sum(c.energy for c in cs) / n,
            mean_power=sum(c.power for c in cs) / n,
        )
