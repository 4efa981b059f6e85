import pytest

from blob_life.sim.config import SimulationConfig
from blob_life.sim.genome import Genome
from blob_life.sim.rng import RNG
from blob_life.sim.world import World


def genome(speed=0.0, photosynth=1.0, digestion=0.0, power=0.0, **extra) -> Genome:
    alleles = {"speed": speed, "photosynth": photosynth, "digestion": digestion, "power": power}
    alleles.update(extra)
    return Genome(alleles)


def place(world: World, x: float, y: float = 0.0, energy: float | None = None, **alleles):
    """Spawn a creature with the given alleles at (x, y)."""
    c = world.spawn(genome(**alleles), x, y)
    if energy is not None:
        c.energy = energy
    return c


@pytest.fixture
def config() -> SimulationConfig:
    return SimulationConfig()


@pytest.fixture
def world(config) -> World:
    return World(config)


@pytest.fixture
def rng() -> RNG:
    return RNG(1234)
