"""Mesh and mesh-block containers."""

from fvkernel.mesh.mesh import Mesh, MeshBlock

__all__ = ["Mesh", "MeshBlock"]
