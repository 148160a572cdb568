"""Value types shared by puzzle generation and interaction.

Positions are expressed in world units, which use the same scale as the
source image's pixels. Waves and cuts are expressed in board units, where
one unit is the length of the edge being cut.
"""

import math
import random
from dataclasses import dataclass, field
from typing import List, Union

import numpy as np
from pydantic import BaseModel, Field

# Clamped ranges for a single wave component (board units)
MIN_AMPLITUDE = 0.01
MAX_AMPLITUDE = 0.05
MIN_PERIOD = 1.0  # Cycles over one unit of edge length
MAX_PERIOD = 20.0

Sampleable = Union[float, np.ndarray]


def _clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(value, upper))


@dataclass(frozen=True)
class Position:
    """An immutable point in world coordinates."""

    x: float
    y: float

    def add(self, other: "Position") -> "Position":
        """Return the component-wise sum of two positions."""
        return Position(self.x + other.x, self.y + other.y)

    def subtract(self, other: "Position") -> "Position":
        """Return the component-wise difference of two positions."""
        return Position(self.x - other.x, self.y - other.y)

    def scale(self, scalar: float) -> "Position":
        """Return this position multiplied by a scalar."""
        return Position(self.x * scalar, self.y * scalar)

    def distance_to(self, other: "Position") -> float:
        """Return the straight-line distance to another position."""
        return math.hypot(self.x - other.x, self.y - other.y)

    def __add__(self, other: "Position") -> "Position":
        return self.add(other)

    def __sub__(self, other: "Position") -> "Position":
        return self.subtract(other)

    def __str__(self) -> str:
        return f"({self.x:.2f}, {self.y:.2f})"


ORIGIN = Position(0.0, 0.0)


class ImageInfo(BaseModel):
    """The source image a puzzle is cut from."""

    url: str
    width: float = Field(..., gt=0, description="Pixel width of the image")
    height: float = Field(..., gt=0, description="Pixel height of the image")

    @property
    def aspect_ratio(self) -> float:
        """Width divided by height."""
        return self.width / self.height


@dataclass
class Wave:
    """A single sinusoidal component of a cut.

    Attributes:
        period: Number of cycles over one unit of edge length.
        amplitude: Maximum displacement from the straight line, in board units.
    """

    period: float
    amplitude: float

    def __post_init__(self) -> None:
        self.amplitude = _clamp(self.amplitude, MIN_AMPLITUDE, MAX_AMPLITUDE)
        self.period = _clamp(self.period, MIN_PERIOD, MAX_PERIOD)

    def sample(self, t: Sampleable) -> Sampleable:
        """Sample the wave at position t along the edge (0 to 1)."""
        return self.amplitude * np.sin(2.0 * math.pi * self.period * t)

    @classmethod
    def random(cls, rng: random.Random) -> "Wave":
        """Generate a wave with period and amplitude drawn uniformly from their ranges."""
        return cls(
            period=rng.uniform(MIN_PERIOD, MAX_PERIOD),
            amplitude=rng.uniform(MIN_AMPLITUDE, MAX_AMPLITUDE),
        )

    def __str__(self) -> str:
        return f"Wave(period: {self.period:.2f}, amplitude: {self.amplitude:.4f})"


@dataclass
class Cut:
    """The waviness of one shared grid edge, as a sum of waves."""

    components: List[Wave] = field(default_factory=list)

    def sample(self, t: Sampleable) -> Sampleable:
        """Return the total displacement from the straight line at position t."""
        total: Sampleable = np.zeros_like(t, dtype=float) if isinstance(t, np.ndarray) else 0.0
        for wave in self.components:
            total = total + wave.sample(t)
        return total

    @classmethod
    def random(cls, rng: random.Random, num_waves: int = 3) -> "Cut":
        """Generate a cut from a number of random waves."""
        return cls(components=[Wave.random(rng) for _ in range(num_waves)])

    def __str__(self) -> str:
        return f"Cut({len(self.components)} components)"
