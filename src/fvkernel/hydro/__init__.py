"""Face-state reconstruction and flux orchestration."""

from fvkernel.hydro.hydro import Hydro

__all__ = ["Hydro"]
