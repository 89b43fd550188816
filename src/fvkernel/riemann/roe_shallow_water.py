"""Roe approximate Riemann solver for the 2D shallow-water system.

Density plays the role of the water depth ``h`` (gravity scaled to one).
For a face with normal velocity ``u`` and tangential velocity ``v``:

    F = (h u,  h u^2 + h^2 / 2,  h u v)

The Roe-linearised flux is the central average minus upwind dissipation,

    F = 1/2 (F_L + F_R) - 1/2 sum_r |lambda_r| W_r

with Roe averages

    u_bar = (sqrt(h_L) u_L + sqrt(h_R) u_R) / (sqrt(h_L) + sqrt(h_R))
    c_bar = sqrt((h_L + h_R) / 2),   h_bar = sqrt(h_L h_R)

wave strengths

    a1 = (c_bar dh - h_bar du) / (2 c_bar),  a2 = h_bar dv,
    a3 = (c_bar dh + h_bar du) / (2 c_bar)

and speeds ``|u_bar - c_bar|, |u_bar|, |u_bar + c_bar|``.

Face states and the flux are addressed with the block convention: a base
index per face plus per-variable plane offsets.
"""

from __future__ import annotations

import math

import numpy as np
from numba import njit

from fvkernel.defs import IDN, IVX, IVY, X1DIR, X2DIR


def normal_offsets(direction: int, comps: np.ndarray) -> tuple[int, int, int]:
    """Plane offsets ``(idn, ivx, ivy)`` with ``ivx`` normal to the face.

    Args:
        direction: Face normal, ``X1DIR`` or ``X2DIR``.
        comps: Plane offsets of the variables of the face-state blocks.

    Returns:
        Offsets of depth, normal velocity and tangential velocity.

    Raises:
        ValueError: If *direction* is not x1 or x2.
    """
    idn = int(comps[IDN])
    iv1 = int(comps[IVX])
    iv2 = int(comps[IVY])
    if direction == X1DIR:
        return idn, iv1, iv2
    if direction == X2DIR:
        return idn, iv2, iv1
    msg = f"Invalid direction {direction} for the shallow-water Riemann solver"
    raise ValueError(msg)


@njit(cache=True)
def roe_shallow_water(
    flx: np.ndarray,
    fi: int,
    wl: np.ndarray,
    li: int,
    wr: np.ndarray,
    ri: int,
    idn: int,
    ivx: int,
    ivy: int,
) -> None:
    """Roe flux at one face, written into ``flx`` at base index ``fi``.

    Args:
        flx: Flux buffer.
        fi: Base index of the face in ``flx``.
        wl: Left-state buffer (primitive: depth, velocities).
        li: Base index of the face in ``wl``.
        wr: Right-state buffer.
        ri: Base index of the face in ``wr``.
        idn: Plane offset of the depth.
        ivx: Plane offset of the face-normal velocity.
        ivy: Plane offset of the tangential velocity.
    """
    hl = wl[li + idn]
    hr = wr[ri + idn]
    ul = wl[li + ivx]
    ur = wr[ri + ivx]
    vl = wl[li + ivy]
    vr = wr[ri + ivy]

    sqhl = math.sqrt(hl)
    sqhr = math.sqrt(hr)

    ubar = (ul * sqhl + ur * sqhr) / (sqhl + sqhr)
    vbar = (vl * sqhl + vr * sqhr) / (sqhl + sqhr)
    cbar = math.sqrt(0.5 * (hl + hr))

    delh = hr - hl
    delu = ur - ul
    delv = vr - vl
    hbar = math.sqrt(hl * hr)

    a1 = 0.5 * (cbar * delh - hbar * delu) / cbar
    a2 = hbar * delv
    a3 = 0.5 * (cbar * delh + hbar * delu) / cbar

    # wave speeds
    s1 = abs(ubar - cbar)
    s2 = abs(ubar)
    s3 = abs(ubar + cbar)

    f_dn = 0.5 * (hl * ul + hr * ur)
    f_vx = 0.5 * (hl * ul ** 2 + 0.5 * hl ** 2 + hr * ur ** 2 + 0.5 * hr ** 2)
    f_vy = 0.5 * (hl * ul * vl + hr * ur * vr)

    # upwind dissipation, waves r = 1..3: a1 (1, u-c, v), a2 (0, 0, 1), a3 (1, u+c, v)
    f_dn -= 0.5 * s1 * a1 + 0.5 * s3 * a3
    f_vx -= 0.5 * s1 * a1 * (ubar - cbar) + 0.5 * s3 * a3 * (ubar + cbar)
    f_vy -= 0.5 * s1 * a1 * vbar + 0.5 * s2 * a2 + 0.5 * s3 * a3 * vbar

    flx[fi + idn] = f_dn
    flx[fi + ivx] = f_vx
    flx[fi + ivy] = f_vy


@njit(cache=True)
def roe_shallow_water_sweep(
    flx: np.ndarray,
    wl: np.ndarray,
    wr: np.ndarray,
    idx_f: np.ndarray,
    idx_l: np.ndarray,
    idx_r: np.ndarray,
    idn: int,
    ivx: int,
    ivy: int,
) -> None:
    """Apply :func:`roe_shallow_water` to every face of aligned windows."""
    for k in range(idx_f.shape[0]):
        roe_shallow_water(flx, idx_f[k], wl, idx_l[k], wr, idx_r[k], idn, ivx, ivy)
