"""Mesh scaffold: blocks that own an EOS and a Hydro and sweep fluxes.

A ``MeshBlock`` is one padded grid block with its equation of state and
hydro face data, built from a :class:`~fvkernel.config.SolverConfig`. A
``Mesh`` is an ordered collection of blocks; no partitioning or ghost
exchange is performed, so each block's ghost cells must already be filled
when fluxes are computed.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

from fvkernel.config import SolverConfig
from fvkernel.defs import X1DIR, X2DIR
from fvkernel.eos.ideal_gas import EquationOfState
from fvkernel.hydro.hydro import Hydro

logger = logging.getLogger(__name__)


class MeshBlock:
    """One grid block of the mesh.

    Args:
        config: Validated solver configuration for this block.
    """

    def __init__(self, config: SolverConfig) -> None:
        self.config = config
        grid = config.grid

        self.eos = EquationOfState(grid.dim2, grid.dim1, grid.nghost, config.physics)
        self.hydro = Hydro(
            grid.dim2, grid.dim1, grid.nghost, config.physics,
            riemann_solver=config.hydro.riemann_solver,
        )

        logger.info(
            "MeshBlock initialized: %dx%d (nghost=%d), order=%d, riemann_solver=%s",
            grid.dim2, grid.dim1, grid.nghost,
            config.hydro.order, config.hydro.riemann_solver,
        )

    def compute_fluxes(self) -> None:
        """Reconstruct and solve the Riemann problem along x1, then x2.

        Raises:
            ValueError: If the primitive state yields non-physical face depths.
        """
        order = self.config.hydro.order
        for direction in (X1DIR, X2DIR):
            self.hydro.reconstruct(self.eos, direction, order)
            self.hydro.riemann_solver(direction)


class Mesh:
    """Ordered collection of mesh blocks."""

    def __init__(self) -> None:
        self.blocks: list[MeshBlock] = []

    def add_block(self, block: MeshBlock) -> None:
        self.blocks.append(block)

    def compute_fluxes(self) -> None:
        """Compute fluxes on every block in insertion order."""
        for block in self.blocks:
            block.compute_fluxes()
        logger.debug("Mesh.compute_fluxes: %d block(s)", len(self.blocks))

    def __len__(self) -> int:
        return len(self.blocks)

    def __iter__(self) -> Iterator[MeshBlock]:
        return iter(self.blocks)
