"""Ideal-gas equation of state on padded grid blocks.

Holds the primitive block ``w`` (density, velocity x/y/z, pressure) and the
conserved block ``u`` (density, momentum x/y/z, total energy) and converts
between them over the full padded grid, ghost cells included, so that
stencil reads near the boundary see consistent data:

    ke = 1/2 rho (vx^2 + vy^2 + vz^2)
    E  = ke + p / (gamma - 1)

Primitive recovery divides by density; cells with non-physical density are
reported before anything is written.
"""

from __future__ import annotations

import logging

import numpy as np
from numba import njit

from fvkernel.block.block2d import GridBlock
from fvkernel.config import PhysicsConfig
from fvkernel.defs import NGHOST, NHYDRO, Real
from fvkernel.eos.base import EquationOfStateBase

logger = logging.getLogger(__name__)


# ============================================================
# Cell-wise conversion kernels
# ============================================================

@njit(cache=True)
def _primitive_to_conserved_kernel(
    u: np.ndarray,
    w: np.ndarray,
    idx_u: np.ndarray,
    idx_w: np.ndarray,
    comps: np.ndarray,
    gm1: float,
) -> None:
    idn = comps[0]
    iv1 = comps[1]
    iv2 = comps[2]
    iv3 = comps[3]
    ipr = comps[4]

    for k in range(idx_w.shape[0]):
        a = idx_w[k]
        b = idx_u[k]

        rho = w[a + idn]
        vx = w[a + iv1]
        vy = w[a + iv2]
        vz = w[a + iv3]
        ke = 0.5 * rho * (vx * vx + vy * vy + vz * vz)
        ie = w[a + ipr] / gm1

        u[b + idn] = rho
        u[b + iv1] = rho * vx
        u[b + iv2] = rho * vy
        u[b + iv3] = rho * vz
        u[b + ipr] = ke + ie


@njit(cache=True)
def _conserved_to_primitive_kernel(
    w: np.ndarray,
    u: np.ndarray,
    idx_w: np.ndarray,
    idx_u: np.ndarray,
    comps: np.ndarray,
    gm1: float,
) -> None:
    idn = comps[0]
    iv1 = comps[1]
    iv2 = comps[2]
    iv3 = comps[3]
    ipr = comps[4]

    for k in range(idx_u.shape[0]):
        a = idx_w[k]
        b = idx_u[k]

        rho = u[b + idn]
        vx = u[b + iv1] / rho
        vy = u[b + iv2] / rho
        vz = u[b + iv3] / rho
        ke = 0.5 * rho * (vx * vx + vy * vy + vz * vz)

        w[a + idn] = rho
        w[a + iv1] = vx
        w[a + iv2] = vy
        w[a + iv3] = vz
        w[a + ipr] = gm1 * (u[b + ipr] - ke)


# ============================================================
# Equation of state
# ============================================================

class EquationOfState(EquationOfStateBase):
    """Ideal-gas EOS owning the primitive and conserved blocks.

    Args:
        dim2: Active cells along axis 2.
        dim1: Active cells along axis 1.
        nghost: Ghost width of both blocks.
        physics: Physical parameters (gamma, density floor).
    """

    def __init__(
        self,
        dim2: int,
        dim1: int,
        nghost: int = NGHOST,
        physics: PhysicsConfig | None = None,
    ) -> None:
        self.physics = physics if physics is not None else PhysicsConfig()

        # primitive and conserved variables
        self.w = GridBlock(NHYDRO, dim2, dim1, nghost)
        self.u = GridBlock(NHYDRO, dim2, dim1, nghost)

        # conserved variable registers for multi-stage integrators
        self._u1 = GridBlock(NHYDRO, dim2, dim1, nghost)
        self._u2 = GridBlock(NHYDRO, dim2, dim1, nghost)

        self.comps = self.w.comps()

        logger.info(
            "EquationOfState initialized: shape=%s, gamma=%.3f, density_floor=%.3e",
            self.w.shape(), self.physics.gamma, self.physics.density_floor,
        )

    def primitive_to_conserved(self) -> None:
        """Compute ``u`` from ``w`` on every cell of the padded grid."""
        with self.w.all() as w, self.u.all_mut() as u:
            _primitive_to_conserved_kernel(
                self.u.data, self.w.data, u.indices(), w.indices(),
                self.comps, self.physics.gm1,
            )
        logger.debug("primitive_to_conserved: %d cells", self.w.len12)

    def conserved_to_primitive(self) -> None:
        """Compute ``w`` from ``u`` on every cell of the padded grid.

        Raises:
            ValueError: If any cell has density at or below the floor, or a
                non-finite density. ``w`` is left unchanged in that case.
        """
        with self.w.all_mut() as w, self.u.all() as u:
            idx_u = u.indices()
            self._check_density(idx_u)
            _conserved_to_primitive_kernel(
                self.w.data, self.u.data, w.indices(), idx_u,
                self.comps, self.physics.gm1,
            )
        logger.debug("conserved_to_primitive: %d cells", self.u.len12)

    def _check_density(self, idx_u: np.ndarray) -> None:
        rho = self.u.data[idx_u + self.comps[0]]
        bad = ~np.isfinite(rho) | (rho <= self.physics.density_floor)
        if np.any(bad):
            first = int(idx_u[np.argmax(bad)])
            j = first // self.u.len1 - self.u.nghost
            i = first % self.u.len1 - self.u.nghost
            msg = (
                f"Non-physical density in {int(np.count_nonzero(bad))} cell(s); "
                f"first at (j={j}, i={i}) with rho={rho[np.argmax(bad)]!r} "
                f"(floor {self.physics.density_floor})"
            )
            raise ValueError(msg)

    def cost_conserved_to_primitive(self) -> Real:
        overhead = 1.0
        return Real(self.w.size()) * Real(self.u.size()) * overhead

    def cost_primitive_to_conserved(self) -> Real:
        overhead = 1.0
        return Real(self.w.size()) * Real(self.u.size()) * overhead
