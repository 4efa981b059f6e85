# blob_life/sim/behaviors.py
"""
Steering hook.

The engine only consumes a creature's intent vector; deciding it is left to a
Behavior plugged into LiveSim (or applied by hand). None ships here: without
one, creatures coast on their last heading and move only when offspring are
pushed away from their parent.
"""
from __future__ import annotations
from typing import Optional, Protocol, Tuple

from .models import Creature
from .world import World

Vec = Tuple[float, float]


class Behavior(Protocol):
    def intent(self, world: World, index: int, creature: Creature) -> Optional[Vec]:
        """Direction to steer towards this tick, or None to leave intent alone."""
        ...


def apply_behavior(world: World, behavior: Behavior) -> int:
    """Ask behavior for every live creature's intent; returns how many were steered."""
    steered = 0
    for i, c in enumerate(world.creatures):
        if not c.alive:
            continue
        v = behavior.intent(world, i, c)
        if v is None:
            continue
        c.set_intent(v[0], v[1])
        steered += 1
    return steered
