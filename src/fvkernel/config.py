"""Pydantic v2 configuration system for the finite-volume kernel.

Provides validated, typed configuration for the grid, the physics
parameters consumed by the equation of state and the reconstruction
operators, and the hydrodynamic scheme. Supports JSON I/O and cross-field
validation.
"""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import BaseModel, Field, model_validator

from fvkernel.defs import NGHOST

SUPPORTED_ORDERS = (1, 3, 5)
SUPPORTED_RIEMANN_SOLVERS = ("roe_shallow_water",)

# Ghost width each reconstruction order reads/writes into
_REQUIRED_GHOSTS = {1: 2, 3: 2, 5: 3}


def required_ghosts(order: int) -> int:
    """Minimum ghost width needed by a reconstruction of the given order.

    Raises:
        ValueError: If *order* is not a supported reconstruction order.
    """
    if order not in _REQUIRED_GHOSTS:
        msg = f"Invalid reconstruction order {order}; expected one of {SUPPORTED_ORDERS}"
        raise ValueError(msg)
    return _REQUIRED_GHOSTS[order]


class PhysicsConfig(BaseModel):
    """Physical and numerical parameters shared by the EOS and reconstruction."""

    gamma: float = Field(1.4, gt=1, description="Adiabatic index (gamma - 1 = 0.4 by default)")
    weno_eps: float = Field(1e-10, gt=0, description="WENO smoothness regularisation epsilon")
    density_floor: float = Field(
        0.0, ge=0,
        description="Densities at or below this value are non-physical in primitive recovery",
    )

    @property
    def gm1(self) -> float:
        """gamma - 1."""
        return self.gamma - 1.0


class GridConfig(BaseModel):
    """Active extents and ghost width of one grid block."""

    dim2: int = Field(..., gt=0, description="Active cells along axis 2 (rows)")
    dim1: int = Field(..., gt=0, description="Active cells along axis 1 (columns)")
    nghost: int = Field(NGHOST, ge=1, description="Ghost cells on every side")


class HydroConfig(BaseModel):
    """Spatial scheme parameters."""

    order: int = Field(5, description="Reconstruction order: 1 (flat), 3 (WENO3) or 5 (WENO5)")
    riemann_solver: str = Field("roe_shallow_water", description="Riemann solver type")

    @model_validator(mode="after")
    def validate_scheme(self) -> HydroConfig:
        if self.order not in SUPPORTED_ORDERS:
            raise ValueError(
                f"order must be one of {SUPPORTED_ORDERS}, got {self.order}"
            )
        if self.riemann_solver not in SUPPORTED_RIEMANN_SOLVERS:
            raise ValueError(
                f"riemann_solver must be one of {SUPPORTED_RIEMANN_SOLVERS}, "
                f"got '{self.riemann_solver}'"
            )
        return self


class SolverConfig(BaseModel):
    """Top-level kernel configuration."""

    grid: GridConfig
    physics: PhysicsConfig = Field(default_factory=PhysicsConfig)
    hydro: HydroConfig = Field(default_factory=HydroConfig)

    @model_validator(mode="after")
    def validate_ghost_width(self) -> SolverConfig:
        needed = required_ghosts(self.hydro.order)
        if self.grid.nghost < needed:
            raise ValueError(
                f"order {self.hydro.order} reconstruction needs nghost >= {needed}, "
                f"got {self.grid.nghost}"
            )
        return self

    # --- I/O helpers ---

    @classmethod
    def from_file(cls, path: str | Path) -> SolverConfig:
        """Load configuration from a JSON file."""
        path = Path(path)
        with path.open() as f:
            data = json.load(f)
        return cls(**data)

    def to_json(self, path: str | Path | None = None) -> str:
        """Serialize to JSON string, optionally writing to file."""
        out = self.model_dump_json(indent=2)
        if path is not None:
            Path(path).write_text(out)
        return out
