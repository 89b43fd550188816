"""One-dimensional data block with ghost cells.

Stores ``nvar`` variables over ``dim1`` active cells padded by ``nghost``
ghost cells, in one buffer of ``nvar * (dim1 + 2 * nghost)`` elements
(plane offset ``n * len1``). Traversals reuse the 2D window machinery with
a single row.
"""

from __future__ import annotations

import numpy as np

from fvkernel.block.region import Region, RegionView, RegionViewMut, ViewRegistry
from fvkernel.defs import Real


class GridBlock1D:
    """Field of ``nvar`` variables on a padded 1D grid."""

    def __init__(self, nvar: int, dim1: int, nghost: int) -> None:
        if min(nvar, dim1, nghost) < 0:
            msg = f"Block dimensions must be non-negative, got {(nvar, dim1, nghost)}"
            raise ValueError(msg)

        self.nvar = nvar
        self.dim1 = dim1
        self.nghost = nghost
        self.len1 = dim1 + 2 * nghost
        self.data = np.zeros(nvar * self.len1, dtype=Real)

        self._registry = ViewRegistry()

    def size(self) -> int:
        return self.data.shape[0]

    def shape(self) -> tuple[int, int]:
        return (self.nvar, self.len1)

    def icomp(self, n: int) -> int:
        if not 0 <= n < self.nvar:
            msg = f"Variable index {n} out of range [0, {self.nvar})"
            raise IndexError(msg)
        return n * self.len1

    def index(self, n: int, i: int) -> int:
        if not -self.nghost <= i < self.dim1 + self.nghost:
            msg = f"Cell i={i} outside padded range [{-self.nghost}, {self.dim1 + self.nghost})"
            raise IndexError(msg)
        return self.icomp(n) + i + self.nghost

    def get(self, n: int, i: int) -> float:
        return float(self.data[self.index(n, i)])

    def set(self, n: int, i: int, value: float) -> None:
        self.data[self.index(n, i)] = value

    def _window(self, mutable: bool) -> RegionView:
        region = Region(0, 1, self.nghost, self.len1 - self.nghost)
        if mutable:
            offsets = tuple(n * self.len1 for n in range(self.nvar))
            return RegionViewMut(self.data, self.len1, region, self._registry, offsets)
        return RegionView(self.data, self.len1, region, self._registry)

    def interior(self) -> RegionView:
        """Active cells."""
        return self._window(False)

    def interior_mut(self) -> RegionViewMut:
        return self._window(True)
