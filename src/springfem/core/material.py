from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True, slots=True)
class Material:
    name: str
    E: float  # Young's modulus
    G: float  # Shear modulus
    nu: float  # Poisson's ratio
    rho: float  # Density
    fy: Optional[float] = None  # Yield strength

    def __post_init__(self) -> None:
        if self.E <= 0.0:
            raise ValueError("E must be positive")
        if self.G <= 0.0:
            raise ValueError("G must be positive")
        if self.rho < 0.0:
            raise ValueError("rho cannot be negative")
