"""Face interpolation of cell-averaged data (WENO and central polynomials)."""

from fvkernel.reconstruct.poly import interp_cp2, interp_cp3, interp_cp4
from fvkernel.reconstruct.weno3 import WENO_EPS, interp_weno3
from fvkernel.reconstruct.weno5 import interp_weno5

__all__ = [
    "WENO_EPS",
    "interp_cp2",
    "interp_cp3",
    "interp_cp4",
    "interp_weno3",
    "interp_weno5",
]
