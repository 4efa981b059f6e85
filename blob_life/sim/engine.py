# blob_life/sim/engine.py
from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional, Tuple
import logging
import math

from .behaviors import Behavior, apply_behavior
from .models import Creature
from .rng import RNG
from .world import World

log = logging.getLogger(__name__)


@dataclass
class TickStats:
    tick: int = 0
    kills: int = 0
    starved: int = 0
    births: int = 0
    population: int = 0

    @property
    def deaths(self) -> int:
        return self.kills + self.starved

# ---------------- fight ----------------
def _resolve_attack(me: Creature, prey: Creature) -> bool:
    if not prey.alive:
        return False  # already eaten this tick
    if me.power < prey.power:
        return False
    prey.alive = False
    me.energy += prey.energy * me.digestion
    me.kills += 1
    return True

def fight(world: World) -> int:
    """
    Every live creature eats each touching creature whose power is not above
    its own. Creatures are visited in ascending x, so with equal power the
    leftmost one wins. Returns the number of kills.
    """
    kills = 0
    for i, me in enumerate(world.creatures):
        if not me.alive:
            continue

        def visit(prey: Creature, me: Creature = me) -> None:
            nonlocal kills
            if _resolve_attack(me, prey):
                kills += 1
                log.debug("creature %d ate creature %d", me.id, prey.id)

        world.for_each_near(me.x, me.y, me.radius, i, visit)
    return kills

# ---------------- move ----------------
def _resolve_heading(me: Creature) -> None:
    n = math.hypot(me.dx, me.dy)
    if n > 0:
        me.odx = me.dx / n * me.speed
        me.ody = me.dy / n * me.speed
        me.dx = 0.0
        me.dy = 0.0

def _apply_motion(world: World, me: Creature) -> None:
    _resolve_heading(me)
    me.x, me.y = world.clamp_inside(me.x + me.odx, me.y + me.ody)

def _apply_energy(me: Creature) -> None:
    me.energy -= me.metabolic_rate
    if me.energy < 0:
        me.alive = False

def move(world: World) -> int:
    """Move, burn energy and purge the dead. Returns the number that starved."""
    starved = 0
    for me in world.creatures:
        if not me.alive:
            continue
        _apply_motion(world, me)
        _apply_energy(me)
        if not me.alive:
            starved += 1
    world.purge_dead()
    return starved

# ---------------- reproduce ----------------
def _split_direction(parent: Creature, rng: RNG) -> Tuple[float, float, float]:
    dx, dy = parent.odx, parent.ody
    l = math.hypot(dx, dy)
    if l == 0:
        a = rng.angle()
        return math.cos(a), math.sin(a), 1.0
    return dx, dy, l

def make_child(world: World, parent: Creature, rng: RNG, tick: int = 0) -> Creature:
    """Offspring placed behind the parent's heading, with a mutated copy of its genome."""
    repro = world.config.repro
    dx, dy, l = _split_direction(parent, rng)
    r = repro.split_distance * parent.radius / l
    return Creature.create(
        world.next_id(),
        parent.genome.mutated(rng, repro),
        parent.x - dx * r,
        parent.y - dy * r,
        world.config,
        parent_id=parent.id,
        generation=parent.generation + 1,
        born_tick=tick,
    )

def reproduce(world: World, rng: RNG, tick: int = 0) -> List[Creature]:
    """Give every live creature its chance to split; children join after the pass."""
    repro = world.config.repro
    spawned: List[Creature] = []
    for c in world.creatures:
        if not c.alive:
            continue
        if not rng.chance(repro.rate):
            continue
        if c.energy < repro.energy_threshold:
            continue
        c.energy -= repro.energy_cost
        spawned.append(make_child(world, c, rng, tick))

    world.extend(spawned)
    return spawned

# ---------------- tick ----------------
def step(world: World, rng: RNG, tick: int = 0, behavior: Optional[Behavior] = None) -> TickStats:
    """One full tick: sort, steer, fight, move, reproduce."""
    stats = TickStats(tick=tick)
    if not world.creatures:
        return stats

    world.sort()
    if behavior is not None:
        apply_behavior(world, behavior)
    stats.kills = fight(world)
    stats.starved = move(world)
    stats.births = len(reproduce(world, rng, tick))
    stats.population = len(world)
    if stats.kills or stats.starved or stats.births:
        log.debug("tick %d: +%d born, %d eaten, %d starved, N=%d",
                  tick, stats.births, stats.kills, stats.starved, stats.population)
    return stats
