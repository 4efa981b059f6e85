# blob_life/sim/world.py
from __future__ import annotations
from typing import Callable, Iterable, Iterator, List, Optional, Tuple
import logging

from .config import DEFAULT, SimulationConfig
from .models import Creature

log = logging.getLogger(__name__)


class World:
    """
    The creature population, kept sorted by x so neighbour lookups only scan
    a narrow slice of it.

    Scans start max_radius to the left of the query and stop max_radius past
    it, so every creature radius must stay <= config.world.max_radius.
    """

    def __init__(self, config: SimulationConfig = DEFAULT, creatures: Iterable[Creature] = ()):
        config.validate()
        self.config = config
        self.width = config.world.width
        self.height = config.world.height
        self.max_radius = config.world.max_radius
        self.creatures: List[Creature] = []
        self._followed: Optional[Creature] = None
        self._next_id = 0
        self.extend(creatures)

    def __len__(self) -> int:
        return len(self.creatures)

    def __iter__(self) -> Iterator[Creature]:
        return iter(self.creatures)

    # --- population ---
    def next_id(self) -> int:
        self._next_id += 1
        return self._next_id

    def spawn(self, genome, x: float = 0.0, y: float = 0.0, **kw) -> Creature:
        c = Creature.create(self.next_id(), genome, x, y, self.config, **kw)
        self.add(c)
        return c

    def add(self, c: Creature) -> None:
        self.creatures.append(c)
        self._next_id = max(self._next_id, c.id)
        if self._followed is None:
            self._followed = c

    def extend(self, cs: Iterable[Creature]) -> None:
        for c in cs:
            self.add(c)

    def purge_dead(self) -> int:
        """Drop dead creatures (survivor order kept); retarget the camera if needed."""
        before = len(self.creatures)
        self.creatures = [c for c in self.creatures if c.alive]
        removed = before - len(self.creatures)
        if self._followed is not None and not self._followed.alive:
            lost = self._followed.id
            self._followed = self.creatures[0] if self.creatures else None
            log.info("followed creature %d died, now following %s", lost,
                     self._followed.id if self._followed else "nobody")
        return removed

    # --- camera ---
    def followed(self) -> Optional[Creature]:
        return self._followed

    def follow(self, c: Optional[Creature]) -> None:
        self._followed = c

    def live_creatures(self) -> Tuple[Creature, ...]:
        return tuple(c for c in self.creatures if c.alive)

    # --- spatial index ---
    def sort(self) -> None:
        # list.sort is stable: equal x keeps insertion order
        self.creatures.sort(key=lambda c: c.x)

    def lower_bound(self, x: float) -> int:
        """First index whose creature has x >= the query (len if none)."""
        lo, hi = 0, len(self.creatures)
        while lo < hi:
            mid = (lo + hi) // 2
            if self.creatures[mid].x < x:
                lo = mid + 1
            else:
                hi = mid
        return lo

    def for_each_near(self, x: float, y: float, r: float, exclude: int,
                      visit: Callable[[Creature], None]) -> None:
        """Call visit(c) for every creature whose circle touches circle (x, y, r), except index exclude."""
        mx = x + r + self.max_radius
        cs = self.creatures
        for i in range(self.lower_bound(x - r - self.max_radius), len(cs)):
            c = cs[i]
            if c.x > mx:
                break
            if i == exclude:
                continue
            dx = c.x - x
            dy = c.y - y
            rr = r + c.radius
            if dx * dx + dy * dy <= rr * rr:
                visit(c)

    def near(self, x: float, y: float, r: float, exclude: int = -1) -> List[Creature]:
        found: List[Creature] = []
        self.for_each_near(x, y, r, exclude, found.append)
        return found

    def visible(self, cx: float, cy: float, half_w: float, half_h: float) -> Iterator[Creature]:
        """Creatures that may overlap the view rectangle centred on (cx, cy)."""
        mx = cx + half_w + self.max_radius
        cs = self.creatures
        for i in range(self.lower_bound(cx - half_w - self.max_radius), len(cs)):
            c = cs[i]
            if c.x > mx:
                break
            if c.y + c.radius < cy - half_h or c.y - c.radius > cy + half_h:
                continue
            yield c

    # --- bounds ---
    def clamp_inside(self, x: float, y: float) -> Tuple[float, float]:
        w, h = self.width, self.height
        return min(max(x, -w), w), min(max(y, -h), h)
