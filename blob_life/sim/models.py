# blob_life/sim/models.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Mapping, Optional, Tuple, Union
import math

from .config import SimulationConfig
from .genome import (
    Color, Genome, color_of, digestion_of, metabolic_rate_of, radius_of, speed_of,
)

Vec = Tuple[float, float]


@dataclass(eq=False)
class Creature:
    id: int
    genome: Genome
    x: float
    y: float
    # phenotype, derived once from the genome
    speed: float
    radius: float
    color: Color
    metabolic_rate: float
    digestion: float
    power: float
    energy: float
    alive: bool = True
    # steering accumulator, consumed by the next move
    dx: float = 0.0
    dy: float = 0.0
    # last resolved step; reused while there is no new intent
    odx: float = 0.0
    ody: float = 0.0
    parent_id: Optional[int] = None
    generation: int = 0
    born_tick: int = 0
    kills: int = 0

    @classmethod
    def create(
        cls,
        id: int,
        genome: Union[Genome, Mapping[str, float]],
        x: float,
        y: float,
        config: SimulationConfig,
        parent_id: Optional[int] = None,
        generation: int = 0,
        born_tick: int = 0,
    ) -> "Creature":
        g = genome if isinstance(genome, Genome) else Genome(genome)
        return cls(
            id=id, genome=g, x=float(x), y=float(y),
            speed=speed_of(g, config.world),
            radius=radius_of(g, config.world),
            color=color_of(g),
            metabolic_rate=metabolic_rate_of(g, config.energy),
            digestion=digestion_of(g, config.energy),
            power=g["power"],
            energy=config.energy.initial_energy,
            parent_id=parent_id, generation=generation, born_tick=born_tick,
        )

    def pos(self) -> Vec:
        return (self.x, self.y)

    def heading(self) -> Vec:
        return (self.odx, self.ody)

    def set_intent(self, dx: float, dy: float) -> None:
        self.dx, self.dy = dx, dy

    def add_intent(self, dx: float, dy: float) -> None:
        self.dx += dx
        self.dy += dy

    def touches(self, other: "Creature") -> bool:
        r = self.radius + other.radius
        return (self.x - other.x) ** 2 + (self.y - other.y) ** 2 <= r * r

    def distance_to(self, other: "Creature") -> float:
        return math.hypot(self.x - other.x, self.y - other.y)
