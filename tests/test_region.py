"""Tests for windows, traversals and the exclusive-borrow rules."""

from __future__ import annotations

import gc

import numpy as np
import pytest

from fvkernel.block import CellHandle, GridBlock, Region, RegionViewMut
from fvkernel.defs import X1DIR


class TestRegion:
    def test_size(self):
        assert Region(1, 4, 2, 5).size == 9
        assert Region(3, 3, 0, 5).size == 0

    def test_overlaps(self):
        a = Region(0, 2, 0, 2)
        assert a.overlaps(Region(1, 3, 1, 3))
        assert not a.overlaps(Region(2, 4, 0, 2))
        assert not a.overlaps(Region(0, 2, 2, 4))
        assert not a.overlaps(Region(1, 1, 0, 2))

    def test_check_within(self):
        Region(0, 5, 0, 5).check_within(5, 5)
        with pytest.raises(IndexError):
            Region(0, 6, 0, 5).check_within(5, 5)
        with pytest.raises(IndexError):
            Region(-1, 2, 0, 5).check_within(5, 5)

    def test_indices_row_major(self):
        np.testing.assert_array_equal(Region(1, 3, 2, 4).indices(10), [12, 13, 22, 23])


class TestTraversal:
    """Lazy traversal and lease lifetime."""

    def setup_method(self):
        self.block = GridBlock(2, 3, 3, 1)
        self.block.data[:] = np.arange(self.block.size(), dtype=np.float64)

    def test_empty_window_yields_nothing(self):
        block = GridBlock(1, 0, 3, 1)
        assert list(block.interior()) == []

    def test_exhaustion_releases(self):
        view = self.block.interior_mut()
        assert view.live
        assert len(list(view)) == 9
        assert not view.live
        assert self.block.live_views() == []

    def test_exhausted_view_stays_exhausted(self):
        view = self.block.interior()
        list(view)
        assert list(view) == []

    def test_context_manager_releases(self):
        with self.block.interior_mut() as view:
            assert self.block.live_views() == [view]
        assert not view.live
        assert self.block.live_views() == []

    def test_release_on_exception(self):
        with pytest.raises(KeyError):
            with self.block.all_mut():
                raise KeyError("boom")
        assert self.block.live_views() == []

    def test_garbage_collected_view_releases(self):
        view = self.block.interior_mut()
        del view
        gc.collect()
        with self.block.interior_mut():
            pass

    def test_indices_cover_whole_window(self):
        view = self.block.interior()
        next(view)
        np.testing.assert_array_equal(view.indices(), [6, 7, 8, 11, 12, 13, 16, 17, 18])
        view.close()

    def test_mutable_yields_handles(self):
        with self.block.interior_mut() as view:
            assert isinstance(view, RegionViewMut)
            handle = next(view)
            assert isinstance(handle, CellHandle)
            assert handle.index == 6
            assert handle[self.block.icomp(1)] == 31.0


class TestBorrowRules:
    """Conflicting borrows are refused with RuntimeError."""

    def setup_method(self):
        self.block = GridBlock(2, 4, 4, 2)

    def test_read_views_coexist(self):
        a = self.block.interior()
        b = self.block.all()
        c = self.block.interior_shifted(X1DIR, 1)
        assert len(self.block.live_views()) == 3
        for view in (a, b, c):
            view.close()

    def test_mutable_excludes_read(self):
        view = self.block.interior_mut()
        with pytest.raises(RuntimeError):
            self.block.interior()
        with pytest.raises(RuntimeError):
            self.block.all()
        view.close()

    def test_read_excludes_mutable(self):
        view = self.block.all()
        with pytest.raises(RuntimeError):
            self.block.interior_mut()
        view.close()
        with self.block.interior_mut():
            pass

    def test_two_mutable_views_conflict(self):
        view = self.block.interior_faces(X1DIR, mutable=True)
        with pytest.raises(RuntimeError):
            self.block.interior_x1_mut(0)
        view.close()

    def test_other_blocks_unaffected(self):
        other = GridBlock(2, 4, 4, 2)
        with self.block.all_mut(), other.all_mut():
            pass

    def test_read_view_cells_not_writeable(self):
        for cell in self.block.interior():
            with pytest.raises(ValueError):
                cell[0] = 99.0
        assert np.all(self.block.data == 0.0)

    def test_read_view_cannot_reach_mutable_window(self):
        """A read slice extends past its window but stays non-writeable."""
        block = GridBlock(1, 1, 4, 1)
        read = block._window(1, 2, 1, 3, False)
        write = block._window(1, 2, 3, 5, True)
        cell = next(read)
        with pytest.raises(ValueError):
            cell[2] = 7.0
        assert block.get(0, 0, 2) == 0.0
        read.close()
        write.close()

    def test_refused_borrow_leaves_registry_clean(self):
        view = self.block.interior_mut()
        with pytest.raises(RuntimeError):
            self.block.interior()
        assert self.block.live_views() == [view]
        view.close()


class TestCellHandle:
    """Writes through handles."""

    def setup_method(self):
        self.block = GridBlock(2, 2, 2, 1)

    def test_set_and_add(self):
        with self.block.interior_mut() as view:
            for cell in view:
                cell[0] = 1.0
                cell.add(self.block.icomp(1), 2.5)
                cell.add(self.block.icomp(1), 2.5)
        arr = self.block.as_array()
        np.testing.assert_allclose(arr[0, 1:3, 1:3], 1.0)
        np.testing.assert_allclose(arr[1, 1:3, 1:3], 5.0)
        assert arr[0, 0, 0] == 0.0

    def test_invalid_offset(self):
        with self.block.interior_mut() as view:
            handle = next(view)
            with pytest.raises(IndexError):
                handle[1] = 3.0
            with pytest.raises(IndexError):
                handle.add(2 * self.block.len12, 1.0)

    def test_stale_handle_write(self):
        handles = list(self.block.interior_mut())
        assert len(handles) == 4
        with pytest.raises(RuntimeError):
            handles[0][0] = 1.0
        with pytest.raises(RuntimeError):
            handles[0].add(0, 1.0)
        assert np.all(self.block.data == 0.0)
