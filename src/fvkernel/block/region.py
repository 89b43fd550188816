"""Rectangular windows over a block's padded grid and their traversals.

A window is a ``Region``, the half-open rectangle
``[start2, end2) x [start1, end1)`` in padded coordinates. Views walk the
window with the outer index along axis 2 and the inner index along axis 1,
restarting the inner index at ``start1`` at the end of every row. Each step
produces the base index

    index = len1 * current2 + current1

of one cell; the caller reaches variable ``n`` by adding the plane offset
``n * len12``.

Views borrow the block they were built from. The block keeps a registry of
live views and rejects, at construction time, any mutable view that
overlaps another live view and any read view that overlaps a live mutable
view. A view stops being live once it is exhausted, closed, or garbage
collected. Views cannot be restarted in place; build a new one instead.

Classes:
    Region: Immutable window rectangle.
    ViewRegistry: Per-block bookkeeping of live views.
    RegionView: Read-only traversal yielding per-cell buffer slices.
    RegionViewMut: Exclusive traversal yielding ``CellHandle`` objects.
    CellHandle: Single-cell write handle bound to a mutable view.
"""

from __future__ import annotations

import weakref
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import numpy as np

if TYPE_CHECKING:
    from collections.abc import Iterator


# ============================================================
# Window rectangle
# ============================================================

@dataclass(frozen=True)
class Region:
    """Half-open window ``[start2, end2) x [start1, end1)`` in padded coordinates."""

    start2: int
    end2: int
    start1: int
    end1: int

    @property
    def size(self) -> int:
        """Number of cells in the window."""
        return max(self.end2 - self.start2, 0) * max(self.end1 - self.start1, 0)

    def overlaps(self, other: Region) -> bool:
        """True if the two windows share at least one cell."""
        if self.size == 0 or other.size == 0:
            return False
        return (
            self.start2 < other.end2
            and other.start2 < self.end2
            and self.start1 < other.end1
            and other.start1 < self.end1
        )

    def check_within(self, len2: int, len1: int) -> None:
        """Reject windows that leave the padded extent.

        Raises:
            IndexError: If any bound falls outside ``[0, len2] x [0, len1]``.
        """
        if not (0 <= self.start2 <= self.end2 <= len2 and 0 <= self.start1 <= self.end1 <= len1):
            msg = (
                f"Window rows [{self.start2}, {self.end2}) x cols [{self.start1}, {self.end1}) "
                f"exceeds padded extent {len2} x {len1}"
            )
            raise IndexError(msg)

    def indices(self, len1: int) -> np.ndarray:
        """Base indices of every cell in iteration order, shape ``(size,)``."""
        rows = np.arange(self.start2, self.end2, dtype=np.int64)
        cols = np.arange(self.start1, self.end1, dtype=np.int64)
        return (rows[:, np.newaxis] * len1 + cols[np.newaxis, :]).ravel()


# ============================================================
# Borrow bookkeeping
# ============================================================

class ViewRegistry:
    """Tracks the live views of one buffer and enforces the borrow rules."""

    def __init__(self) -> None:
        self._views: weakref.WeakSet[RegionView] = weakref.WeakSet()

    def acquire(self, view: RegionView) -> None:
        """Register *view*, refusing overlaps with conflicting live views.

        Raises:
            RuntimeError: If the window is already borrowed incompatibly.
        """
        for other in list(self._views):
            if not other.live or not other.region.overlaps(view.region):
                continue
            if other.mutable or view.mutable:
                kind = "mutable" if view.mutable else "read"
                msg = (
                    f"Cannot borrow {kind} view over {view.region}: overlaps live "
                    f"{'mutable' if other.mutable else 'read'} view over {other.region}"
                )
                raise RuntimeError(msg)
        self._views.add(view)

    def release(self, view: RegionView) -> None:
        self._views.discard(view)

    def live_views(self) -> list[RegionView]:
        """Snapshot of the currently live views."""
        return [v for v in list(self._views) if v.live]


# ============================================================
# Views
# ============================================================

class RegionView:
    """Lazy read-only traversal of a window.

    Yields ``data[index:]`` as a non-writeable numpy view starting at the
    cell's base index, so ``cell[n * len12]`` is variable ``n`` of that
    cell. Assigning through it raises ``ValueError``.

    Args:
        data: Flat buffer of the borrowed block.
        len1: Padded row length of the block.
        region: Window to traverse (already bounds-checked).
        registry: Borrow registry of the block.
    """

    mutable = False

    def __init__(
        self,
        data: np.ndarray,
        len1: int,
        region: Region,
        registry: ViewRegistry,
    ) -> None:
        self._data = data
        # read traversals hand out slices of a non-writeable alias
        self._readonly = data.view()
        self._readonly.flags.writeable = False
        self._registry = registry
        self.region = region
        self.len1 = len1
        self.start1 = region.start1
        self.end1 = region.end1
        self.end2 = region.end2
        self.current1 = region.start1
        self.current2 = region.start2 if region.size > 0 else region.end2
        self._live = True
        registry.acquire(self)

    @property
    def live(self) -> bool:
        """True while the view holds its borrow."""
        return self._live

    @property
    def size(self) -> int:
        """Number of cells in the whole window."""
        return self.region.size

    def indices(self) -> np.ndarray:
        """Base indices of the whole window in traversal order."""
        return self.region.indices(self.len1)

    def close(self) -> None:
        """End the borrow. Further steps stop the traversal."""
        if self._live:
            self._live = False
            self._registry.release(self)

    def __enter__(self) -> RegionView:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def __iter__(self) -> Iterator[Any]:
        return self

    def __next__(self) -> Any:
        if not self._live:
            raise StopIteration

        if self.current1 >= self.end1:
            self.current1 = self.start1
            self.current2 += 1

        if self.current2 >= self.end2:
            self.close()
            raise StopIteration

        index = self.len1 * self.current2 + self.current1
        self.current1 += 1

        return self._item(index)

    def _item(self, index: int) -> Any:
        return self._readonly[index:]

    def __repr__(self) -> str:
        state = "live" if self._live else "released"
        return f"{type(self).__name__}({self.region}, {state})"


class RegionViewMut(RegionView):
    """Exclusive traversal of a window yielding single-cell write handles.

    Args:
        data: Flat buffer of the borrowed block.
        len1: Padded row length of the block.
        region: Window to traverse (already bounds-checked).
        registry: Borrow registry of the block.
        offsets: Valid plane offsets ``n * len12`` of the block.
    """

    mutable = True

    def __init__(
        self,
        data: np.ndarray,
        len1: int,
        region: Region,
        registry: ViewRegistry,
        offsets: tuple[int, ...],
    ) -> None:
        self._offsets = frozenset(offsets)
        super().__init__(data, len1, region, registry)

    def _item(self, index: int) -> CellHandle:
        return CellHandle(self, index)

    def _check_offset(self, offset: int) -> None:
        if offset not in self._offsets:
            msg = f"Offset {offset} is not a variable plane offset of this block"
            raise IndexError(msg)

    def _check_live(self) -> None:
        if not self._live:
            msg = f"Write through a handle of a released view {self!r}"
            raise RuntimeError(msg)

    def read(self, index: int, offset: int) -> float:
        self._check_offset(offset)
        return self._data[index + offset]

    def write(self, index: int, offset: int, value: float) -> None:
        self._check_live()
        self._check_offset(offset)
        self._data[index + offset] = value

    def accumulate(self, index: int, offset: int, value: float) -> None:
        self._check_live()
        self._check_offset(offset)
        self._data[index + offset] += value


class CellHandle:
    """Write handle to one cell of a mutable view.

    ``handle[n * len12]`` reads variable ``n``; assignment writes it;
    ``handle.add(offset, value)`` accumulates into it. Writes are only
    accepted while the owning view is live.
    """

    __slots__ = ("_view", "index")

    def __init__(self, view: RegionViewMut, index: int) -> None:
        self._view = view
        self.index = index

    def __getitem__(self, offset: int) -> float:
        return self._view.read(self.index, offset)

    def __setitem__(self, offset: int, value: float) -> None:
        self._view.write(self.index, offset, value)

    def add(self, offset: int, value: float) -> None:
        self._view.accumulate(self.index, offset, value)

    def __repr__(self) -> str:
        return f"CellHandle(index={self.index})"
