"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import numpy as np
import pytest

from fvkernel.block.block2d import GridBlock
from fvkernel.config import SolverConfig
from fvkernel.defs import IDN, IPR, IVX, IVY, IVZ


@pytest.fixture
def numbered_block():
    """3x3 block, one ghost layer, two variables, buffer filled 0, 1, 2, ..."""
    block = GridBlock(2, 3, 3, 1)
    block.data[:] = np.arange(block.size(), dtype=np.float64)
    return block


@pytest.fixture
def sample_config_dict():
    """Minimal valid SolverConfig as a dictionary."""
    return {
        "grid": {"dim2": 4, "dim1": 6, "nghost": 3},
        "physics": {"gamma": 1.4},
        "hydro": {"order": 5},
    }


@pytest.fixture
def small_config(sample_config_dict):
    """Small SolverConfig for fast unit tests."""
    return SolverConfig(**sample_config_dict)


def _fill_smooth_state(w: GridBlock, phase: float = 0.0) -> None:
    arr = w.as_array()
    jj, ii = np.meshgrid(
        np.arange(w.len2, dtype=np.float64),
        np.arange(w.len1, dtype=np.float64),
        indexing="ij",
    )
    arr[IDN] = 1.0 + 0.2 * np.sin(0.7 * ii + 0.3 * jj + phase)
    arr[IVX] = 0.1 * np.cos(0.5 * ii)
    arr[IVY] = 0.05 * np.sin(0.4 * jj)
    arr[IVZ] = 0.0
    arr[IPR] = 1.0 + 0.1 * np.cos(0.2 * ii + 0.1 * jj)


@pytest.fixture
def smooth_state():
    """Callable filling every cell of a primitive block with a positive-depth,
    smoothly varying state; takes the block and an optional phase."""
    return _fill_smooth_state
