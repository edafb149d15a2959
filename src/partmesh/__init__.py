"""
partmesh

A Python package for splitting partitioned Gmsh meshes into per-partition
meshes with a globally numbered interface, for distributed finite element
solvers.
"""

from . import gmshio
from . import polymesh
from .config import DistributedMethod, IndexingBase, NodalOrdering
from .reader import MeshReader

__version__ = "0.1.0"

__all__ = [
    "gmshio",
    "polymesh",
    "DistributedMethod",
    "IndexingBase",
    "NodalOrdering",
    "MeshReader",
]
