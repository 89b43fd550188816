"""Two-dimensional data block with ghost halos.

A ``GridBlock`` stores ``nvar`` variables over a ``dim2 x dim1`` active
grid padded by ``nghost`` ghost cells on every side, in one contiguous
float64 buffer of ``nvar * len12`` elements:

    plane n  : data[n * len12 : (n + 1) * len12]
    cell j, i: (j + nghost) * len1 + (i + nghost)   (row-major, axis 2 slow)

Window layout (``o`` ghost, ``x`` active, ``*`` interior x1-faces):

    |o|o|o|o|o|o|o|o|
    |o*x*x*x*x*x*x*o|
    |o*x*x*x*x*x*x*o|
    |o*x*x*x*x*x*x*o|
    |o|o|o|o|o|o|o|o|

Logical coordinates ``(j, i)`` may be negative down to ``-nghost`` to reach
ghost cells. The default accessors are bounds-checked; ``get_unchecked``
and ``set_unchecked`` skip the checks for hot loops that have already
validated their indices.
"""

from __future__ import annotations

import numpy as np

from fvkernel.block.region import Region, RegionView, RegionViewMut, ViewRegistry
from fvkernel.defs import X1DIR, X2DIR, Real


class GridBlock:
    """Field of ``nvar`` variables on a padded 2D grid.

    Args:
        nvar: Number of variables (planes).
        dim2: Active cells along axis 2 (rows).
        dim1: Active cells along axis 1 (columns).
        nghost: Ghost cells on every side.

    Raises:
        ValueError: If any dimension is negative.
    """

    def __init__(self, nvar: int, dim2: int, dim1: int, nghost: int) -> None:
        if min(nvar, dim2, dim1, nghost) < 0:
            msg = f"Block dimensions must be non-negative, got {(nvar, dim2, dim1, nghost)}"
            raise ValueError(msg)

        self.nvar = nvar
        self.dim2 = dim2
        self.dim1 = dim1
        self.nghost = nghost
        self.len2 = dim2 + 2 * nghost
        self.len1 = dim1 + 2 * nghost
        self.len12 = self.len1 * self.len2
        self.data = np.zeros(nvar * self.len12, dtype=Real)

        self._registry = ViewRegistry()

    def size(self) -> int:
        return self.data.shape[0]

    def shape(self) -> tuple[int, int, int]:
        return (self.nvar, self.len2, self.len1)

    def icomp(self, n: int) -> int:
        """Plane offset of variable *n*.

        Raises:
            IndexError: If *n* is not in ``[0, nvar)``.
        """
        if not 0 <= n < self.nvar:
            msg = f"Variable index {n} out of range [0, {self.nvar})"
            raise IndexError(msg)
        return n * self.len12

    def comps(self) -> np.ndarray:
        """Plane offsets of all variables as an int64 array."""
        return np.array([self.icomp(n) for n in range(self.nvar)], dtype=np.int64)

    def as_array(self) -> np.ndarray:
        """The buffer viewed as ``(nvar, len2, len1)`` (shares memory)."""
        return self.data.reshape(self.nvar, self.len2, self.len1)

    # ----------------------------------------------------------
    # Element access
    # ----------------------------------------------------------

    def index(self, n: int, j: int, i: int) -> int:
        """Flat buffer index of variable *n* at logical cell ``(j, i)``.

        Raises:
            IndexError: If the cell lies outside the padded grid.
        """
        ng = self.nghost
        if not -ng <= j < self.dim2 + ng or not -ng <= i < self.dim1 + ng:
            msg = (
                f"Cell (j={j}, i={i}) outside padded range "
                f"[{-ng}, {self.dim2 + ng}) x [{-ng}, {self.dim1 + ng})"
            )
            raise IndexError(msg)
        return self.icomp(n) + (j + ng) * self.len1 + (i + ng)

    def get(self, n: int, j: int, i: int) -> float:
        return float(self.data[self.index(n, j, i)])

    def set(self, n: int, j: int, i: int, value: float) -> None:
        self.data[self.index(n, j, i)] = value

    def get_unchecked(self, n: int, j: int, i: int) -> float:
        """Read without bounds checks. Caller guarantees the cell is valid."""
        return self.data[n * self.len12 + (j + self.nghost) * self.len1 + (i + self.nghost)]

    def set_unchecked(self, n: int, j: int, i: int, value: float) -> None:
        """Write without bounds checks. Caller guarantees the cell is valid."""
        self.data[n * self.len12 + (j + self.nghost) * self.len1 + (i + self.nghost)] = value

    def at(self, j: int, i: int) -> np.ndarray:
        """Buffer slice starting at logical cell ``(j, i)`` of plane 0."""
        return self.data[self.index(0, j, i):]

    # ----------------------------------------------------------
    # Windows
    # ----------------------------------------------------------

    def _window(
        self, start2: int, end2: int, start1: int, end1: int, mutable: bool,
    ) -> RegionView:
        region = Region(start2, end2, start1, end1)
        region.check_within(self.len2, self.len1)
        if mutable:
            offsets = tuple(n * self.len12 for n in range(self.nvar))
            return RegionViewMut(self.data, self.len1, region, self._registry, offsets)
        return RegionView(self.data, self.len1, region, self._registry)

    def interior_shifted(self, direction: int, offset: int, mutable: bool = False) -> RegionView:
        """Active window expanded by one cell along *direction* and shifted by *offset*.

        Used to fetch neighbour stencils for reconstruction: along the axis
        the window covers ``[nghost + offset - 1, len - nghost + offset + 1)``.

        Raises:
            ValueError: If *direction* is not x1 or x2.
            IndexError: If the shifted window leaves the padded grid.
        """
        ng = self.nghost
        if direction == X1DIR:
            start = ng + offset - 1
            end = self.len1 - ng + offset + 1
            return self._window(ng, self.len2 - ng, start, end, mutable)
        if direction == X2DIR:
            start = ng + offset - 1
            end = self.len2 - ng + offset + 1
            return self._window(start, end, ng, self.len1 - ng, mutable)
        msg = f"Invalid direction {direction}; only x1 ({X1DIR}) and x2 ({X2DIR}) are wired"
        raise ValueError(msg)

    def interior_faces(self, direction: int, mutable: bool = False) -> RegionView:
        """Interior faces normal to *direction*: one more point than cells along it.

        Raises:
            ValueError: If *direction* is not x1 or x2.
        """
        ng = self.nghost
        if direction == X1DIR:
            return self._window(ng, self.len2 - ng, ng, self.len1 - ng + 1, mutable)
        if direction == X2DIR:
            return self._window(ng, self.len2 - ng + 1, ng, self.len1 - ng, mutable)
        msg = f"Invalid direction {direction}; only x1 ({X1DIR}) and x2 ({X2DIR}) are wired"
        raise ValueError(msg)

    def interior(self) -> RegionView:
        """Active (non-ghost) cells."""
        ng = self.nghost
        return self._window(ng, self.len2 - ng, ng, self.len1 - ng, False)

    def interior_mut(self) -> RegionViewMut:
        ng = self.nghost
        return self._window(ng, self.len2 - ng, ng, self.len1 - ng, True)

    def interior_x1(self, offset: int) -> RegionView:
        return self.interior_shifted(X1DIR, offset)

    def interior_x1_mut(self, offset: int) -> RegionViewMut:
        return self.interior_shifted(X1DIR, offset, mutable=True)

    def interior_x2(self, offset: int) -> RegionView:
        return self.interior_shifted(X2DIR, offset)

    def interior_x2_mut(self, offset: int) -> RegionViewMut:
        return self.interior_shifted(X2DIR, offset, mutable=True)

    def interior_f1(self) -> RegionView:
        return self.interior_faces(X1DIR)

    def interior_f1_mut(self) -> RegionViewMut:
        return self.interior_faces(X1DIR, mutable=True)

    def interior_f2(self) -> RegionView:
        return self.interior_faces(X2DIR)

    def interior_f2_mut(self) -> RegionViewMut:
        return self.interior_faces(X2DIR, mutable=True)

    def all(self) -> RegionView:
        """Full padded grid including ghost cells."""
        return self._window(0, self.len2, 0, self.len1, False)

    def all_mut(self) -> RegionViewMut:
        return self._window(0, self.len2, 0, self.len1, True)

    def live_views(self) -> list[RegionView]:
        """Views currently borrowing this block."""
        return self._registry.live_views()

    def __repr__(self) -> str:
        return (
            f"GridBlock(nvar={self.nvar}, dim2={self.dim2}, dim1={self.dim1}, "
            f"nghost={self.nghost})"
        )
