"""Tests for the mesh scaffold and the end-to-end flux pipeline."""

from __future__ import annotations

import logging

import numpy as np
import pytest

from fvkernel import Mesh, MeshBlock, SolverConfig
from fvkernel.defs import IDN, IVX, IVY, X1DIR, X2DIR


class TestMeshBlock:
    def test_owns_eos_and_hydro(self, small_config):
        block = MeshBlock(small_config)
        assert block.eos.w.shape() == (5, 10, 12)
        assert block.hydro.wls[X1DIR].shape() == block.eos.w.shape()
        assert block.hydro.physics is small_config.physics

    def test_compute_fluxes_smooth_state(self, small_config, smooth_state):
        block = MeshBlock(small_config)
        smooth_state(block.eos.w)
        block.compute_fluxes()
        for direction in (X1DIR, X2DIR):
            with block.hydro.flx[direction].interior_faces(direction) as faces:
                idx = faces.indices()
            data = block.hydro.flx[direction].data
            comps = block.hydro.comps
            for n in (IDN, IVX, IVY):
                values = data[idx + comps[n]]
                assert np.all(np.isfinite(values))
            # momentum flux normal to the face carries the hydrostatic h^2 / 2
            normal = IVX if direction == X1DIR else IVY
            assert np.all(data[idx + comps[normal]] > 0.0)

    def test_compute_fluxes_rejects_vacuum(self, small_config):
        block = MeshBlock(small_config)
        with pytest.raises(ValueError, match="depth"):
            block.compute_fluxes()

    def test_construction_logged(self, small_config, caplog):
        with caplog.at_level(logging.INFO, logger="fvkernel"):
            MeshBlock(small_config)
        assert "MeshBlock initialized" in caplog.text
        assert "Hydro initialized" in caplog.text
        assert "EquationOfState initialized" in caplog.text


class TestMesh:
    def test_container(self, small_config):
        mesh = Mesh()
        assert len(mesh) == 0
        blocks = [MeshBlock(small_config), MeshBlock(small_config)]
        for block in blocks:
            mesh.add_block(block)
        assert len(mesh) == 2
        assert list(mesh) == blocks

    @pytest.mark.slow
    def test_compute_fluxes_all_blocks(self, sample_config_dict, smooth_state):
        mesh = Mesh()
        for order in (1, 3, 5):
            sample_config_dict["hydro"]["order"] = order
            block = MeshBlock(SolverConfig(**sample_config_dict))
            smooth_state(block.eos.w, phase=0.1 * order)
            mesh.add_block(block)
        mesh.compute_fluxes()
        for block in mesh:
            for flx in block.hydro.flx:
                assert np.all(np.isfinite(flx.data))
                assert np.any(flx.data != 0.0)
