"""Hydrodynamic face-state and flux orchestration.

``Hydro`` owns, for each wired direction, the left/right reconstructed face
states and the face fluxes. One spatial substep per direction is

    reconstruct(eos, direction, order)   # eos.w -> wls[d], wrs[d]
    riemann_solver(direction)            # wls[d], wrs[d] -> flx[d]

Applying the flux divergence to the conserved variables belongs to the time
integrator and is not provided here.
"""

from __future__ import annotations

import contextlib
import logging
from typing import TYPE_CHECKING

import numpy as np

from fvkernel.block.block2d import GridBlock
from fvkernel.config import SUPPORTED_RIEMANN_SOLVERS, PhysicsConfig
from fvkernel.defs import IDN, NGHOST, NHYDRO, SYSTEM, X1DIR, X2DIR, X3DIR
from fvkernel.hydro.reconstruct import reconstruct as _reconstruct
from fvkernel.riemann.roe_shallow_water import normal_offsets, roe_shallow_water_sweep

if TYPE_CHECKING:
    from fvkernel.eos.ideal_gas import EquationOfState

logger = logging.getLogger(__name__)

_WIRED_DIRECTIONS = (X1DIR, X2DIR)


class Hydro:
    """Face states and fluxes of one grid block.

    Args:
        dim2: Active cells along axis 2.
        dim1: Active cells along axis 1.
        nghost: Ghost width, equal to that of the EOS blocks.
        physics: Numerical parameters (WENO epsilon).
        riemann_solver: Name of the face flux solver.

    Raises:
        ValueError: If *riemann_solver* is not available.
    """

    X1DIR = X1DIR
    X2DIR = X2DIR
    X3DIR = X3DIR

    def __init__(
        self,
        dim2: int,
        dim1: int,
        nghost: int = NGHOST,
        physics: PhysicsConfig | None = None,
        riemann_solver: str = "roe_shallow_water",
    ) -> None:
        if riemann_solver not in SUPPORTED_RIEMANN_SOLVERS:
            msg = (
                f"Unknown Riemann solver '{riemann_solver}'; "
                f"expected one of {SUPPORTED_RIEMANN_SOLVERS}"
            )
            raise ValueError(msg)

        self.physics = physics if physics is not None else PhysicsConfig()
        self.riemann_solver_name = riemann_solver
        self.nghost = nghost

        # indexed by direction
        self.wls = [GridBlock(NHYDRO, dim2, dim1, nghost) for _ in _WIRED_DIRECTIONS]
        self.wrs = [GridBlock(NHYDRO, dim2, dim1, nghost) for _ in _WIRED_DIRECTIONS]
        self.flx = [GridBlock(NHYDRO, dim2, dim1, nghost) for _ in _WIRED_DIRECTIONS]

        self.comps = self.wls[X1DIR].comps()

        logger.info(
            "Hydro initialized: shape=%s, system=%s, riemann_solver=%s, weno_eps=%.1e",
            self.wls[X1DIR].shape(), SYSTEM, riemann_solver, self.physics.weno_eps,
        )

    # ----------------------------------------------------------
    # Reconstruction
    # ----------------------------------------------------------

    def reconstruct(self, eos: EquationOfState, direction: int, order: int) -> None:
        """Reconstruct face states along *direction* from ``eos.w``.

        Raises:
            ValueError: On an unsupported direction or order, insufficient
                ghost width, or a shape mismatch with *eos*.
        """
        _reconstruct(self, eos, direction, order)

    def reconstruct_x1(self, eos: EquationOfState, order: int) -> None:
        self.reconstruct(eos, X1DIR, order)

    def reconstruct_x2(self, eos: EquationOfState, order: int) -> None:
        self.reconstruct(eos, X2DIR, order)

    # ----------------------------------------------------------
    # Riemann solve
    # ----------------------------------------------------------

    def riemann_solver(self, direction: int) -> None:
        """Compute ``flx[direction]`` on every interior face normal to *direction*.

        The x2 sweep is the x1 sweep with the roles of the two in-plane
        velocity components exchanged.

        Raises:
            ValueError: If *direction* is not wired, or any face state has a
                non-positive or non-finite depth. No flux is written then.
        """
        if direction not in _WIRED_DIRECTIONS:
            msg = f"Invalid direction {direction}; only x1 ({X1DIR}) and x2 ({X2DIR}) are wired"
            raise ValueError(msg)
        idn, ivx, ivy = normal_offsets(direction, self.comps)

        wl_block = self.wls[direction]
        wr_block = self.wrs[direction]
        flx_block = self.flx[direction]

        with contextlib.ExitStack() as stack:
            wl = stack.enter_context(wl_block.interior_faces(direction))
            wr = stack.enter_context(wr_block.interior_faces(direction))
            flx = stack.enter_context(flx_block.interior_faces(direction, mutable=True))

            idx_l = wl.indices()
            idx_r = wr.indices()
            self._check_depth(wl_block, idx_l, "left")
            self._check_depth(wr_block, idx_r, "right")

            roe_shallow_water_sweep(
                flx_block.data, wl_block.data, wr_block.data,
                flx.indices(), idx_l, idx_r, idn, ivx, ivy,
            )

        logger.debug(
            "riemann_solver: direction=%d solver=%s faces=%d",
            direction, self.riemann_solver_name, idx_l.shape[0],
        )

    def riemann_solver_x1(self) -> None:
        self.riemann_solver(X1DIR)

    def riemann_solver_x2(self) -> None:
        self.riemann_solver(X2DIR)

    def _check_depth(self, block: GridBlock, idx: np.ndarray, side: str) -> None:
        h = block.data[idx + self.comps[IDN]]
        bad = ~np.isfinite(h) | (h <= 0.0)
        if np.any(bad):
            first = int(np.argmax(bad))
            base = int(idx[first])
            j = base // block.len1 - block.nghost
            i = base % block.len1 - block.nghost
            msg = (
                f"Non-positive or non-finite {side} depth on {int(np.count_nonzero(bad))} "
                f"face(s); first at (j={j}, i={i}) with h={h[first]!r}"
            )
            raise ValueError(msg)

    # ----------------------------------------------------------
    # Time-integration hook
    # ----------------------------------------------------------

    def add_flux_divergence(self, eos: EquationOfState, dt: float) -> None:
        """Apply ``-dt * div(flx)`` to ``eos.u``.

        Raises:
            NotImplementedError: Always; the time integrator is not part of
                this package.
        """
        msg = "add_flux_divergence requires a time integrator and is not implemented"
        raise NotImplementedError(msg)

    def __repr__(self) -> str:
        return f"Hydro(shape={self.wls[X1DIR].shape()}, riemann_solver={self.riemann_solver_name!r})"
