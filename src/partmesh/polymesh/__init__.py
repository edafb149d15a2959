# -*- coding: utf-8 -*-
"""
This package provides the data structures and algorithms that turn a
partitioned Gmsh mesh into self-contained partition meshes.

It includes classes for representing the global mesh, the meshes of single
partitions, and the interfaces shared between partitions.

Key modules:
- core_mesh:              Elements grouped by physical group and type.
- interface:              Reconciliation and global numbering of interfaces.
- local_mesh:             The mesh of a single partition.
- mesh_partition_manager: Builds the local meshes of all partitions.
- reporting:              Text summaries of meshes and interfaces.
"""

from .core_mesh import CoreMesh, MeshKey, assemble_mesh
from .interface import Interface, InterfaceNumbering, PartitionPair, build_interfaces
from .local_mesh import LocalMesh
from .mesh_partition_manager import MeshPartitionManager

__all__ = [
    "CoreMesh",
    "MeshKey",
    "assemble_mesh",
    "Interface",
    "InterfaceNumbering",
    "PartitionPair",
    "build_interfaces",
    "LocalMesh",
    "MeshPartitionManager",
]
