"""Approximate Riemann solvers for face fluxes."""

from fvkernel.riemann.roe_shallow_water import (
    normal_offsets,
    roe_shallow_water,
    roe_shallow_water_sweep,
)

__all__ = ["normal_offsets", "roe_shallow_water", "roe_shallow_water_sweep"]
