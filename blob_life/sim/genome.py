# blob_life/sim/genome.py
from __future__ import annotations
from typing import Dict, Iterator, Mapping, Tuple
import math
import numbers

from .config import EnergyConfig, ReproConfig, WorldConfig
from .rng import RNG

REQUIRED_ALLELES: Tuple[str, ...] = ("speed", "photosynth", "digestion", "power")

Color = Tuple[int, int, int]


class GenomeError(ValueError):
    """Raised for a genome missing required alleles or holding non-finite values."""


class Genome:
    """
    Ordered allele name -> real value mapping.

    The key order is the insertion order of the mapping it was built from and
    never changes afterwards; radius, metabolism and colour all enumerate the
    alleles in that order.
    """
    __slots__ = ("_alleles",)

    def __init__(self, alleles: Mapping[str, float]):
        missing = [k for k in REQUIRED_ALLELES if k not in alleles]
        if missing:
            raise GenomeError(f"genome is missing required alleles: {', '.join(missing)}")
        checked: Dict[str, float] = {}
        for k, v in alleles.items():
            if isinstance(v, bool) or not isinstance(v, numbers.Real):
                raise GenomeError(f"allele {k!r} must be a real number, got {v!r}")
            v = float(v)
            if not math.isfinite(v):
                raise GenomeError(f"allele {k!r} must be finite, got {v}")
            checked[str(k)] = v
        self._alleles = checked

    def __getitem__(self, key: str) -> float:
        return self._alleles[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._alleles)

    def __len__(self) -> int:
        return len(self._alleles)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Genome):
            return NotImplemented
        return list(self._alleles.items()) == list(other._alleles.items())

    def __repr__(self) -> str:
        return f"Genome({self._alleles!r})"

    def keys(self):
        return self._alleles.keys()

    def values(self):
        return self._alleles.values()

    def items(self):
        return self._alleles.items()

    def as_dict(self) -> Dict[str, float]:
        return dict(self._alleles)

    def copy(self) -> "Genome":
        return Genome(self._alleles)

    def mutated(self, rng: RNG, repro: ReproConfig) -> "Genome":
        """Copy with each allele nudged by uniform(-span, span) with probability mutation_rate."""
        child: Dict[str, float] = {}
        for k, v in self._alleles.items():
            if rng.chance(repro.mutation_rate):
                v += rng.uniform(-repro.mutation_span, repro.mutation_span)
            child[k] = v
        return Genome(child)


def baseline_genome(photosynth: float = 1.0) -> Genome:
    """Starting genome: everything zero except photosynthesis."""
    return Genome({"speed": 0.0, "photosynth": photosynth, "digestion": 0.0, "power": 0.0})

# ---------------- trait curves ----------------
def bounded_growth(lo: float, hi: float, x: float, timescale: float) -> float:
    """Saturating curve from lo (at x=0) towards hi; 0 for negative input."""
    if x < 0:
        return 0.0
    return lo + (hi - lo) * (1.0 - math.exp(-x / timescale))

def speed_of(g: Genome, world: WorldConfig) -> float:
    return bounded_growth(0.0, world.max_speed, g["speed"], 1.0)

def radius_of(g: Genome, world: WorldConfig) -> float:
    return bounded_growth(world.min_radius, world.max_radius, sum(g.values()), 10.0)

def metabolic_rate_of(g: Genome, energy: EnergyConfig) -> float:
    # negative result: the creature gains energy every tick
    burn = bounded_growth(0.0, energy.max_metabolism, sum(v * v for v in g.values()),
                          energy.metabolism_timescale)
    sun = bounded_growth(0.0, energy.max_photosynthesis, g["photosynth"],
                         energy.photosynthesis_timescale)
    return burn - sun

def digestion_of(g: Genome, energy: EnergyConfig) -> float:
    return bounded_growth(energy.min_digestion, energy.max_digestion, g["digestion"], 1.0)

def _round_half_up(v: float) -> int:
    return int(math.floor(v + 0.5))

def color_of(g: Genome) -> Color:
    rgb = [0.0, 0.0, 0.0]
    for i, v in enumerate(g.values()):
        rgb[i % 3] += v
    r, gr, b = (_round_half_up(bounded_growth(0.0, 255.0, acc, 3.0)) for acc in rgb)
    return (r, gr, b)
