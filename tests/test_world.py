"""
Sorted-sweep spatial index: lower_bound, for_each_near, visible, purge/follow.
"""
import random

import pytest

from blob_life.sim.config import ConfigError, SimulationConfig, WorldConfig
from blob_life.sim.world import World

from conftest import place


def random_world(seed: int, n: int = 80, spread: float = 150.0) -> World:
    r = random.Random(seed)
    w = World()
    for _ in range(n):
        place(w, r.uniform(-spread, spread), r.uniform(-spread, spread),
              power=r.uniform(0.0, 30.0))
    w.sort()
    return w


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------

class TestWorldInit:
    def test_rejects_inverted_radius_bounds(self):
        cfg = SimulationConfig(world=WorldConfig(min_radius=20.0, max_radius=16.0))
        with pytest.raises(ConfigError):
            World(cfg)

    def test_empty_world_follows_nobody(self, world):
        assert world.followed() is None
        assert world.live_creatures() == ()
        assert world.lower_bound(0.0) == 0

    def test_first_creature_is_followed(self, world):
        a = place(world, 5.0)
        place(world, -5.0)
        assert world.followed() is a

    def test_ids_are_unique_and_increasing(self, world):
        ids = [place(world, float(i)).id for i in range(5)]
        assert ids == sorted(set(ids))


# ---------------------------------------------------------------------------
# Sorting / lower_bound
# ---------------------------------------------------------------------------

class TestLowerBound:
    def test_sort_is_stable(self, world):
        a = place(world, 3.0)
        b = place(world, 1.0)
        c = place(world, 3.0)
        d = place(world, 3.0)
        world.sort()
        assert world.creatures == [b, a, c, d]

    @pytest.mark.parametrize("seed", range(5))
    def test_partition_property(self, seed):
        r = random.Random(seed)
        w = World()
        for _ in range(40):
            # coarse grid so duplicates are common
            place(w, float(r.randint(-10, 10)))
        w.sort()
        xs = [c.x for c in w.creatures]
        for q in [x + d for x in range(-12, 13) for d in (-0.5, 0.0, 0.5)]:
            i = w.lower_bound(q)
            assert all(x < q for x in xs[:i])
            assert all(x >= q for x in xs[i:])

    def test_boundaries(self, world):
        for x in (1.0, 2.0, 3.0):
            place(world, x)
        world.sort()
        assert world.lower_bound(-100.0) == 0
        assert world.lower_bound(100.0) == 3
        assert world.lower_bound(2.0) == 1


# ---------------------------------------------------------------------------
# Neighbour queries
# ---------------------------------------------------------------------------

class TestForEachNear:
    @pytest.mark.parametrize("seed", range(6))
    def test_matches_brute_force(self, seed):
        w = random_world(seed)
        r = random.Random(seed + 100)
        for _ in range(30):
            x, y = r.uniform(-160, 160), r.uniform(-160, 160)
            rad = r.uniform(0.0, 20.0)
            exclude = r.randrange(-1, len(w))
            expected = {
                c.id for i, c in enumerate(w.creatures)
                if i != exclude and (c.x - x) ** 2 + (c.y - y) ** 2 <= (rad + c.radius) ** 2
            }
            seen = []
            w.for_each_near(x, y, rad, exclude, seen.append)
            assert len(seen) == len(set(c.id for c in seen))
            assert {c.id for c in seen} == expected

    def test_excludes_self_index(self, world):
        a = place(world, 0.0)
        b = place(world, 3.0)
        world.sort()
        assert world.near(a.x, a.y, a.radius, exclude=0) == [b]
        assert world.near(a.x, a.y, a.radius) == [a, b]

    def test_touching_counts(self, world):
        a = place(world, 0.0)
        b = place(world, a.radius * 2)   # same genome, so same radius
        world.sort()
        assert world.near(a.x, a.y, a.radius, exclude=0) == [b]

    def test_bounding_box_corner_not_a_hit(self, world):
        a = place(world, 0.0, 0.0)
        s = 2 * a.radius * 0.8
        place(world, s, s)   # inside the box, outside the circle sum
        world.sort()
        assert world.near(a.x, a.y, a.radius, exclude=0) == []


class TestVisible:
    @pytest.mark.parametrize("seed", range(4))
    def test_never_drops_an_overlapping_creature(self, seed):
        w = random_world(seed, n=120, spread=300.0)
        cx, cy, hw, hh = 20.0, -10.0, 90.0, 60.0
        shown = {c.id for c in w.visible(cx, cy, hw, hh)}
        for c in w.creatures:
            overlaps = (c.x + c.radius >= cx - hw and c.x - c.radius <= cx + hw
                        and c.y + c.radius >= cy - hh and c.y - c.radius <= cy + hh)
            if overlaps:
                assert c.id in shown
        for c in w.visible(cx, cy, hw, hh):
            assert c.y + c.radius >= cy - hh and c.y - c.radius <= cy + hh
            assert abs(c.x - cx) <= hw + w.max_radius


# ---------------------------------------------------------------------------
# Purge / follow
# ---------------------------------------------------------------------------

class TestPurge:
    def test_keeps_survivor_order(self, world):
        cs = [place(world, float(i)) for i in range(5)]
        cs[1].alive = False
        cs[3].alive = False
        assert world.purge_dead() == 2
        assert world.creatures == [cs[0], cs[2], cs[4]]

    def test_followed_retargets_to_first_survivor(self, world):
        a = place(world, 0.0)
        b = place(world, 5.0)
        c = place(world, 9.0)
        world.follow(b)
        b.alive = False
        world.purge_dead()
        assert world.followed() is a
        a.alive = False
        world.purge_dead()
        assert world.followed() is c

    def test_followed_none_when_all_dead(self, world):
        a = place(world, 0.0)
        a.alive = False
        world.purge_dead()
        assert world.followed() is None
        assert len(world) == 0

    def test_live_creatures_skips_dead(self, world):
        a = place(world, 0.0)
        b = place(world, 1.0)
        a.alive = False
        assert world.live_creatures() == (b,)

    def test_clamp_inside(self, world):
        assert world.clamp_inside(805.0, -900.0) == (800.0, -800.0)
        assert world.clamp_inside(3.0, 4.0) == (3.0, 4.0)


def test_spawn_rejects_malformed_genome(world):
    with pytest.raises(ValueError):
        world.spawn({"speed": 0.0}, 0.0, 0.0)
    assert len(world) == 0
