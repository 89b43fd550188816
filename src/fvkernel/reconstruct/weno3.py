"""Third-order WENO interpolation to a cell face.

Stencil (cell averages), value returned at the face marked ``^``:

    | phi_{-1} | phi_0 | phi_{+1} |
               ^

Two second-order candidates

    p0 = 1/2 phi_0 + 1/2 phi_{-1}
    p1 = -1/2 phi_{+1} + 3/2 phi_0

are blended with nonlinear weights ``alpha_k = d_k / (beta_k + eps)^2``,
``d = (1/3, 2/3)``, ``beta0 = (phi_{-1} - phi_0)^2``,
``beta1 = (phi_0 - phi_{+1})^2``.

Calling the function with the stencil mirrored gives the state at the
opposite face.
"""

from __future__ import annotations

from numba import njit

WENO_EPS = 1e-10


@njit(cache=True)
def interp_weno3(phim1: float, phi: float, phip1: float, eps: float = WENO_EPS) -> float:
    """WENO3 face value from a 3-point stencil.

    Args:
        phim1: Cell average upstream of the face.
        phi: Cell average adjacent to the face.
        phip1: Cell average on the far side.
        eps: Smoothness regularisation.

    Returns:
        Interpolated face value.
    """
    p0 = (1.0 / 2.0) * phi + (1.0 / 2.0) * phim1
    p1 = (-1.0 / 2.0) * phip1 + (3.0 / 2.0) * phi

    beta0 = (phim1 - phi) ** 2
    beta1 = (phi - phip1) ** 2

    alpha0 = (1.0 / 3.0) / ((beta0 + eps) * (beta0 + eps))
    alpha1 = (2.0 / 3.0) / ((beta1 + eps) * (beta1 + eps))

    alpha_sum_inv = 1.0 / (alpha0 + alpha1)

    w0 = alpha0 * alpha_sum_inv
    w1 = alpha1 * alpha_sum_inv

    return w0 * p0 + w1 * p1
