"""Grid storage: padded data blocks and the windows that traverse them."""

from fvkernel.block.block1d import GridBlock1D
from fvkernel.block.block2d import GridBlock
from fvkernel.block.region import CellHandle, Region, RegionView, RegionViewMut

__all__ = [
    "CellHandle",
    "GridBlock",
    "GridBlock1D",
    "Region",
    "RegionView",
    "RegionViewMut",
]
