"""fvkernel: 2D finite-volume kernel on padded grid blocks.

Grid blocks with checked windowed views, an ideal-gas equation of state,
WENO reconstruction, and a Roe shallow-water Riemann solver.
"""

from fvkernel.block import GridBlock, GridBlock1D, Region, RegionView, RegionViewMut
from fvkernel.config import GridConfig, HydroConfig, PhysicsConfig, SolverConfig
from fvkernel.eos import EquationOfState
from fvkernel.hydro import Hydro
from fvkernel.mesh import Mesh, MeshBlock

__version__ = "0.1.0"

__all__ = [
    "EquationOfState",
    "GridBlock",
    "GridBlock1D",
    "GridConfig",
    "Hydro",
    "HydroConfig",
    "Mesh",
    "MeshBlock",
    "PhysicsConfig",
    "Region",
    "RegionView",
    "RegionViewMut",
    "SolverConfig",
]
