"""Fifth-order WENO interpolation to a cell face (Jiang & Shu 1996).

Stencil (cell averages), value returned at the face marked ``^``:

    | phi_{-2} | phi_{-1} | phi_0 | phi_{+1} | phi_{+2} |
                          ^

Candidates:

    p0 = 1/3 phi_0 + 5/6 phi_{-1} - 1/6 phi_{-2}
    p1 = -1/6 phi_{+1} + 5/6 phi_0 + 1/3 phi_{-1}
    p2 = 1/3 phi_{+2} - 7/6 phi_{+1} + 11/6 phi_0

with linear weights ``d = (0.3, 0.6, 0.1)`` and the standard smoothness
indicators (curvature term weighted 13/12, gradient term 1/4).

Reference:
    Jiang G.-S. & Shu C.-W., JCP 126, 202 (1996).
"""

from __future__ import annotations

from numba import njit

from fvkernel.reconstruct.weno3 import WENO_EPS


@njit(cache=True)
def interp_weno5(
    phim2: float,
    phim1: float,
    phi: float,
    phip1: float,
    phip2: float,
    eps: float = WENO_EPS,
) -> float:
    """WENO5 face value from a 5-point stencil.

    Args:
        phim2, phim1: Upstream cell averages (far, near).
        phi: Cell average adjacent to the face.
        phip1, phip2: Cell averages on the far side (near, far).
        eps: Smoothness regularisation.

    Returns:
        Interpolated face value.
    """
    p0 = (1.0 / 3.0) * phi + (5.0 / 6.0) * phim1 - (1.0 / 6.0) * phim2
    p1 = (-1.0 / 6.0) * phip1 + (5.0 / 6.0) * phi + (1.0 / 3.0) * phim1
    p2 = (1.0 / 3.0) * phip2 - (7.0 / 6.0) * phip1 + (11.0 / 6.0) * phi

    beta0 = (13.0 / 12.0) * (phi - 2.0 * phim1 + phim2) ** 2 \
        + 0.25 * (3.0 * phi - 4.0 * phim1 + phim2) ** 2
    beta1 = (13.0 / 12.0) * (phip1 - 2.0 * phi + phim1) ** 2 \
        + 0.25 * (phip1 - phim1) ** 2
    beta2 = (13.0 / 12.0) * (phip2 - 2.0 * phip1 + phi) ** 2 \
        + 0.25 * (phip2 - 4.0 * phip1 + 3.0 * phi) ** 2

    alpha0 = 0.3 / (beta0 + eps) ** 2
    alpha1 = 0.6 / (beta1 + eps) ** 2
    alpha2 = 0.1 / (beta2 + eps) ** 2

    return (alpha0 * p0 + alpha1 * p1 + alpha2 * p2) / (alpha0 + alpha1 + alpha2)
