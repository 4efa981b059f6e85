# blob_life/sim/config.py
from __future__ import annotations
from dataclasses import dataclass, field


class ConfigError(ValueError):
    """Raised when a configuration would break a simulation invariant."""


# ------------------------------------------------------------
# WORLD / SPATIAL SETTINGS
# ------------------------------------------------------------
@dataclass(frozen=True)
class WorldConfig:
    # creatures live in [-width, width] x [-height, height]
    width: float = 800.0
    height: float = 800.0
    max_speed: float = 12.0
    min_radius: float = 4.0
    # hard upper bound on every radius; neighbour queries rely on it
    max_radius: float = 16.0

    def validate(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ConfigError(f"world bounds must be positive, got {self.width}x{self.height}")
        if self.max_speed < 0:
            raise ConfigError(f"max_speed must be >= 0, got {self.max_speed}")
        if self.max_radius <= 0:
            raise ConfigError(f"max_radius must be > 0, got {self.max_radius}")
        if self.min_radius < 0:
            raise ConfigError(f"min_radius must be >= 0, got {self.min_radius}")
        if self.min_radius > self.max_radius:
            raise ConfigError(
                f"min_radius ({self.min_radius}) exceeds max_radius ({self.max_radius})"
            )

# ------------------------------------------------------------
# ENERGY MODEL COEFFICIENTS
# ------------------------------------------------------------
@dataclass(frozen=True)
class EnergyConfig:
    initial_energy: float = 1.0
    max_metabolism: float = 0.1
    metabolism_timescale: float = 100.0
    max_photosynthesis: float = 0.1
    photosynthesis_timescale: float = 5.0
    min_digestion: float = 0.1
    max_digestion: float = 0.9

    def validate(self) -> None:
        if self.metabolism_timescale <= 0 or self.photosynthesis_timescale <= 0:
            raise ConfigError("energy timescales must be > 0")
        if self.min_digestion > self.max_digestion:
            raise ConfigError(
                f"min_digestion ({self.min_digestion}) exceeds max_digestion ({self.max_digestion})"
            )

# ------------------------------------------------------------
# REPRODUCTION / MUTATION
# ------------------------------------------------------------
@dataclass(frozen=True)
class ReproConfig:
    rate: float = 0.05              # per-tick chance a creature tries to split
    energy_threshold: float = 2.0   # below this, no offspring
    energy_cost: float = 1.0        # paid by the parent
    split_distance: float = 4.2     # child offset, in parent radii
    mutation_rate: float = 0.10     # per allele
    mutation_span: float = 0.5      # delta drawn from [-span, span]

    def validate(self) -> None:
        for name in ("rate", "mutation_rate"):
            v = getattr(self, name)
            if not 0.0 <= v <= 1.0:
                raise ConfigError(f"{name} must be within [0, 1], got {v}")
        if self.energy_threshold < 0 or self.energy_cost < 0:
            raise ConfigError("energy_threshold and energy_cost must be >= 0")
        if self.mutation_span < 0:
            raise ConfigError(f"mutation_span must be >= 0, got {self.mutation_span}")


@dataclass(frozen=True)
class SimulationConfig:
    """Everything the engine needs, handed explicitly to World and LiveSim."""
    world: WorldConfig = field(default_factory=WorldConfig)
    energy: EnergyConfig = field(default_factory=EnergyConfig)
    repro: ReproConfig = field(default_factory=ReproConfig)

    def validate(self) -> "SimulationConfig":
        self.world.validate()
        self.energy.validate()
        self.repro.validate()
        return self

# ------------------------------------------------------------
# HEADLESS SETTINGS
# ------------------------------------------------------------
@dataclass(frozen=False)
class SimConfig:
    seed: int = 42
    initial_population: int = 1
    ticks: int = 3000
    report_every: int = 100
    track_csv: str | None = "runs/ticks.csv"
    enable_plot: bool = False

# ------------------------------------------------------------
# EXPORT SINGLETONS
# ------------------------------------------------------------
WORLD = WorldConfig()
ENERGY = EnergyConfig()
REPRO = ReproConfig()
DEFAULT = SimulationConfig(WORLD, ENERGY, REPRO)
SIM = SimConfig()
