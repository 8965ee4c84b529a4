from __future__ import annotations

import math
import random
from dataclasses import dataclass
from typing import List, Optional, Tuple

Offset = Tuple[float, float]

BLAST_PARTICLE_COUNT = 12
BLAST_DURATION = 0.8  # seconds the fade/fly-out animation lasts
BLAST_SPEED_RANGE: Tuple[float, float] = (100.0, 300.0)


@dataclass
class BlastParticle:
    """One cosmetic particle of a celebration burst.

    `offset` and `opacity` hold the end state of the fly-out; a renderer
    animates towards them over BLAST_DURATION, or asks `at()` for frames.
    """
    content: str
    angle: float  # degrees
    speed: float
    opacity: float = 1.0
    offset: Offset = (0.0, 0.0)

    def displacement(self) -> Offset:
        radians = self.angle * math.pi / 180
        return (math.cos(radians) * self.speed, math.sin(radians) * self.speed)

    def at(self, progress: float) -> Tuple[Offset, float]:
        """Offset and opacity at `progress` (0..1) along an ease-out curve."""
        t = min(max(progress, 0.0), 1.0)
        eased = 1 - (1 - t) ** 2
        dx, dy = self.displacement()
        return (dx * eased, dy * eased), 1.0 - eased


def make_blast(content: str, rng: Optional[random.Random] = None) -> List[BlastParticle]:
    """Builds a full burst: angles evenly spread over the circle, random speeds, end state applied."""
    rng = rng or random.Random()
    step = 360.0 / BLAST_PARTICLE_COUNT
    particles: List[BlastParticle] = []
    for i in range(BLAST_PARTICLE_COUNT):
        p = BlastParticle(content=content, angle=i * step, speed=rng.uniform(*BLAST_SPEED_RANGE))
        p.offset = p.displacement()
        p.opacity = 0.0
        particles.append(p)
    return particles
