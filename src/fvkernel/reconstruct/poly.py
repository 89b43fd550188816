"""Central polynomial interpolation of cell averages to a face.

Linear (non-adaptive) counterparts of the WENO interpolants; the face is
the left edge of ``phi_0`` in every stencil below.
"""

from __future__ import annotations

from numba import njit


@njit(cache=True)
def interp_cp2(phim1: float, phi: float) -> float:
    """| x_{-1} ^ x_0 |"""
    return 0.5 * (phim1 + phi)


@njit(cache=True)
def interp_cp3(phim1: float, phi: float, phip1: float) -> float:
    """| x_{-1} ^ x_0 | x_1 |"""
    return 1.0 / 6.0 * (2.0 * phim1 + 5.0 * phi - 1.0 * phip1)


@njit(cache=True)
def interp_cp4(phim2: float, phim1: float, phi: float, phip1: float) -> float:
    """| x_{-2} | x_{-1} ^ x_0 | x_1 |"""
    return -1.0 / 12.0 * (phim2 - 7.0 * phim1 - 7.0 * phi + phip1)
