"""Tests for the Hydro orchestration: Riemann sweeps and the integrator hook."""

from __future__ import annotations

import logging

import numpy as np
import pytest

from fvkernel.defs import IDN, IPR, IVX, IVY, IVZ, SYSTEM, X1DIR, X2DIR, X3DIR
from fvkernel.eos import EquationOfState
from fvkernel.hydro import Hydro


class TestHydroConstruction:
    def test_blocks(self):
        hydro = Hydro(3, 4, 3)
        assert len(hydro.wls) == len(hydro.wrs) == len(hydro.flx) == 2
        for block in hydro.wls + hydro.wrs + hydro.flx:
            assert block.shape() == (5, 9, 10)
        np.testing.assert_array_equal(hydro.comps, hydro.wls[X1DIR].comps())

    def test_direction_constants(self):
        assert (Hydro.X1DIR, Hydro.X2DIR, Hydro.X3DIR) == (X1DIR, X2DIR, X3DIR)

    def test_unknown_riemann_solver(self):
        with pytest.raises(ValueError, match="lmars"):
            Hydro(3, 3, 3, riemann_solver="lmars")

    def test_construction_logs_flux_system(self, caplog):
        assert SYSTEM == "shallow_water"
        with caplog.at_level(logging.INFO, logger="fvkernel"):
            Hydro(2, 2, 1)
        assert "system=shallow_water" in caplog.text
        assert "riemann_solver=roe_shallow_water" in caplog.text


class TestRiemannSweep:
    """Flux sweeps over the interior faces."""

    def setup_method(self):
        self.hydro = Hydro(4, 5, 3)
        self.eos = EquationOfState(4, 5, 3)

    def _uniform(self, h, u, v):
        arr = self.eos.w.as_array()
        arr[IDN] = h
        arr[IVX] = u
        arr[IVY] = v
        arr[IVZ] = 0.0
        arr[IPR] = 1.0

    def test_uniform_state_x1(self):
        self._uniform(1.5, 0.2, -0.1)
        self.hydro.reconstruct_x1(self.eos, 5)
        self.hydro.riemann_solver_x1()
        flx = self.hydro.flx[X1DIR]
        for j in range(4):
            for i in range(6):
                np.testing.assert_allclose(flx.get(IDN, j, i), 1.5 * 0.2, rtol=1e-12)
                np.testing.assert_allclose(
                    flx.get(IVX, j, i), 1.5 * 0.04 + 0.5 * 1.5 ** 2, rtol=1e-12,
                )
                np.testing.assert_allclose(flx.get(IVY, j, i), 1.5 * 0.2 * -0.1, rtol=1e-12)
        # energy and vz flux are not produced by the shallow-water solver
        assert np.all(flx.as_array()[IVZ] == 0.0)
        assert np.all(flx.as_array()[IPR] == 0.0)

    def test_uniform_state_x2(self):
        self._uniform(1.5, 0.2, -0.1)
        self.hydro.reconstruct_x2(self.eos, 5)
        self.hydro.riemann_solver_x2()
        flx = self.hydro.flx[X2DIR]
        for j in range(5):
            for i in range(5):
                np.testing.assert_allclose(flx.get(IDN, j, i), 1.5 * -0.1, rtol=1e-12)
                np.testing.assert_allclose(
                    flx.get(IVY, j, i), 1.5 * 0.01 + 0.5 * 1.5 ** 2, rtol=1e-12,
                )
                np.testing.assert_allclose(flx.get(IVX, j, i), 1.5 * -0.1 * 0.2, rtol=1e-12)

    def test_only_interior_faces_written(self):
        self._uniform(1.0, 0.5, 0.0)
        self.hydro.reconstruct_x1(self.eos, 1)
        self.hydro.riemann_solver(X1DIR)
        arr = self.hydro.flx[X1DIR].as_array()
        ng = 3
        assert np.all(arr[IDN, ng:-ng, ng:-ng + 1] != 0.0)
        mask = np.ones(arr.shape[1:], dtype=bool)
        mask[ng:-ng, ng:-ng + 1] = False
        assert np.all(arr[IDN][mask] == 0.0)

    def test_x1_x2_symmetry(self, smooth_state):
        """The x2 sweep on the transposed state is the transposed x1 sweep."""
        hydro_a, eos_a = Hydro(6, 6, 3), EquationOfState(6, 6, 3)
        hydro_b, eos_b = Hydro(6, 6, 3), EquationOfState(6, 6, 3)
        smooth_state(eos_a.w)
        a = eos_a.w.as_array()
        b = eos_b.w.as_array()
        b[IDN] = a[IDN].T
        b[IVX] = a[IVY].T
        b[IVY] = a[IVX].T
        b[IVZ] = a[IVZ].T
        b[IPR] = a[IPR].T

        hydro_a.reconstruct(eos_a, X1DIR, 5)
        hydro_a.riemann_solver(X1DIR)
        hydro_b.reconstruct(eos_b, X2DIR, 5)
        hydro_b.riemann_solver(X2DIR)

        fa = hydro_a.flx[X1DIR].as_array()
        fb = hydro_b.flx[X2DIR].as_array()
        np.testing.assert_allclose(fb[IDN], fa[IDN].T, rtol=1e-13, atol=1e-15)
        np.testing.assert_allclose(fb[IVY], fa[IVX].T, rtol=1e-13, atol=1e-15)
        np.testing.assert_allclose(fb[IVX], fa[IVY].T, rtol=1e-13, atol=1e-15)

    def test_non_positive_depth_rejected(self):
        """Without reconstruction the face states are zero: nothing is written."""
        self.hydro.flx[X1DIR].data[:] = 9.0
        with pytest.raises(ValueError, match="depth"):
            self.hydro.riemann_solver_x1()
        assert np.all(self.hydro.flx[X1DIR].data == 9.0)
        assert self.hydro.flx[X1DIR].live_views() == []

    def test_nan_depth_rejected(self):
        self._uniform(1.0, 0.0, 0.0)
        self.hydro.reconstruct_x2(self.eos, 3)
        self.hydro.wrs[X2DIR].set(IDN, 2, 1, np.nan)
        with pytest.raises(ValueError, match=r"right depth"):
            self.hydro.riemann_solver_x2()
        assert np.all(self.hydro.flx[X2DIR].data == 0.0)

    @pytest.mark.parametrize("direction", [X3DIR, 3, -1])
    def test_unwired_direction(self, direction):
        with pytest.raises(ValueError):
            self.hydro.riemann_solver(direction)


def test_add_flux_divergence_not_implemented():
    hydro = Hydro(2, 2, 3)
    eos = EquationOfState(2, 2, 3)
    with pytest.raises(NotImplementedError):
        hydro.add_flux_divergence(eos, 1e-3)
