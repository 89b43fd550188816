"""Reconstruction of left/right face states from cell-centred primitives.

Along the chosen direction, cell ``0`` of every stencil window supplies the
right state at its lower face and the left state at its upper face:

    | w_{-2} | w_{-1} |* w_{0} *| w_{1} | w_{2} |
                      ^        ^
                      |        |
                      wr(i)    wl(i+1)

so the left-state window is the right-state window shifted by ``+1``. The
neighbour windows ``w_{k}`` are the primitive block's expanded interior
shifted by ``k`` along the direction. The same operator serves x1 and x2;
only the direction passed to the window factories changes.

Orders:
    1: flat copy of the cell value to both faces.
    3: WENO3 on (w_{-1}, w_0, w_{+1}), mirrored for the opposite face.
    5: WENO5 on (w_{-2} .. w_{+2}), mirrored for the opposite face.
"""

from __future__ import annotations

import contextlib
import logging
from typing import TYPE_CHECKING

import numpy as np
from numba import njit

from fvkernel.config import required_ghosts
from fvkernel.defs import X1DIR, X2DIR
from fvkernel.reconstruct.weno3 import interp_weno3
from fvkernel.reconstruct.weno5 import interp_weno5

if TYPE_CHECKING:
    from fvkernel.eos.ideal_gas import EquationOfState
    from fvkernel.hydro.hydro import Hydro

logger = logging.getLogger(__name__)

# Stencil offsets read by each order
_STENCILS = {
    1: (0,),
    3: (-1, 0, 1),
    5: (-2, -1, 0, 1, 2),
}


# ============================================================
# Sweep kernels
# ============================================================

@njit(cache=True)
def _flat_sweep(
    wl: np.ndarray,
    wr: np.ndarray,
    w: np.ndarray,
    idx_l: np.ndarray,
    idx_r: np.ndarray,
    idx_0: np.ndarray,
    comps: np.ndarray,
) -> None:
    for k in range(idx_0.shape[0]):
        for n in comps:
            val = w[idx_0[k] + n]
            wl[idx_l[k] + n] = val
            wr[idx_r[k] + n] = val


@njit(cache=True)
def _weno3_sweep(
    wl: np.ndarray,
    wr: np.ndarray,
    w: np.ndarray,
    idx_l: np.ndarray,
    idx_r: np.ndarray,
    idx_m1: np.ndarray,
    idx_0: np.ndarray,
    idx_p1: np.ndarray,
    comps: np.ndarray,
    eps: float,
) -> None:
    for k in range(idx_0.shape[0]):
        for n in comps:
            wm1 = w[idx_m1[k] + n]
            w0 = w[idx_0[k] + n]
            wp1 = w[idx_p1[k] + n]
            wl[idx_l[k] + n] = interp_weno3(wp1, w0, wm1, eps)
            wr[idx_r[k] + n] = interp_weno3(wm1, w0, wp1, eps)


@njit(cache=True)
def _weno5_sweep(
    wl: np.ndarray,
    wr: np.ndarray,
    w: np.ndarray,
    idx_l: np.ndarray,
    idx_r: np.ndarray,
    idx_m2: np.ndarray,
    idx_m1: np.ndarray,
    idx_0: np.ndarray,
    idx_p1: np.ndarray,
    idx_p2: np.ndarray,
    comps: np.ndarray,
    eps: float,
) -> None:
    for k in range(idx_0.shape[0]):
        for n in comps:
            wm2 = w[idx_m2[k] + n]
            wm1 = w[idx_m1[k] + n]
            w0 = w[idx_0[k] + n]
            wp1 = w[idx_p1[k] + n]
            wp2 = w[idx_p2[k] + n]
            wl[idx_l[k] + n] = interp_weno5(wp2, wp1, w0, wm1, wm2, eps)
            wr[idx_r[k] + n] = interp_weno5(wm2, wm1, w0, wp1, wp2, eps)


# ============================================================
# Driver
# ============================================================

def _check_arguments(hydro: Hydro, eos: EquationOfState, direction: int, order: int) -> None:
    if direction not in (X1DIR, X2DIR):
        msg = f"Invalid direction {direction}; only x1 ({X1DIR}) and x2 ({X2DIR}) are wired"
        raise ValueError(msg)
    if order not in _STENCILS:
        msg = f"Invalid reconstruction order {order}; expected one of {tuple(_STENCILS)}"
        raise ValueError(msg)
    if eos.w.shape() != hydro.wls[direction].shape() or eos.w.nghost != hydro.nghost:
        msg = (
            f"EOS block shape {eos.w.shape()} (nghost={eos.w.nghost}) does not match "
            f"Hydro face-state shape {hydro.wls[direction].shape()} (nghost={hydro.nghost})"
        )
        raise ValueError(msg)
    needed = required_ghosts(order)
    if eos.w.nghost < needed:
        msg = f"Order {order} reconstruction needs nghost >= {needed}, got {eos.w.nghost}"
        raise ValueError(msg)


def reconstruct(hydro: Hydro, eos: EquationOfState, direction: int, order: int) -> None:
    """Fill ``hydro.wls[direction]`` and ``hydro.wrs[direction]`` from ``eos.w``.

    Args:
        hydro: Owner of the face-state blocks.
        eos: Source of the cell-centred primitive variables.
        direction: ``X1DIR`` or ``X2DIR``.
        order: 1, 3 or 5.

    Raises:
        ValueError: On an unsupported direction or order, mismatched block
            shapes, or a ghost width too small for the order. Nothing is
            written in that case.
    """
    _check_arguments(hydro, eos, direction, order)

    eps = hydro.physics.weno_eps
    comps = hydro.comps
    wl_block = hydro.wls[direction]
    wr_block = hydro.wrs[direction]

    with contextlib.ExitStack() as stack:
        wl = stack.enter_context(wl_block.interior_shifted(direction, 1, mutable=True))
        wr = stack.enter_context(wr_block.interior_shifted(direction, 0, mutable=True))
        stencil = {
            k: stack.enter_context(eos.w.interior_shifted(direction, k))
            for k in _STENCILS[order]
        }

        idx_l = wl.indices()
        idx_r = wr.indices()
        idx = {k: view.indices() for k, view in stencil.items()}

        if order == 1:
            _flat_sweep(wl_block.data, wr_block.data, eos.w.data, idx_l, idx_r, idx[0], comps)
        elif order == 3:
            _weno3_sweep(
                wl_block.data, wr_block.data, eos.w.data,
                idx_l, idx_r, idx[-1], idx[0], idx[1],
                comps, eps,
            )
        else:
            _weno5_sweep(
                wl_block.data, wr_block.data, eos.w.data,
                idx_l, idx_r, idx[-2], idx[-1], idx[0], idx[1], idx[2],
                comps, eps,
            )

    logger.debug(
        "reconstruct: direction=%d order=%d cells=%d", direction, order, idx_l.shape[0],
    )
