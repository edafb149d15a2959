# -*- coding: utf-8 -*-
"""
A manager for splitting a partitioned mesh into local mesh instances.

This module provides the `MeshPartitionManager` class, which takes a global
`CoreMesh`, reconciles the interfaces between its partitions once, and then
creates one `LocalMesh` per partition.
"""

from typing import List, Optional, Sequence, Union

from ..config import IndexingBase, NodalOrdering
from .core_mesh import CoreMesh
from .interface import InterfaceNumbering, build_interfaces
from .local_mesh import LocalMesh
from .reporting import format_interface_summary, print_partition_summary


class MeshPartitionManager:
    """
    Manages the extraction of every partition of a global mesh.
    This class is designed as a stateless manager, providing class methods
    to reconcile interfaces and create local meshes.
    """

    @staticmethod
    def compute_interfaces(
        global_mesh: CoreMesh, strict: bool = True
    ) -> InterfaceNumbering:
        """
        Reconciles and numbers the interfaces of a global mesh.

        A mesh with a single partition has no interfaces.

        Args:
            global_mesh: The assembled global mesh.
            strict: Whether an interface seen from one side only is an error.

        Returns:
            The interface numbering shared by all partitions.
        """
        if not global_mesh.is_distributed:
            return InterfaceNumbering()
        return build_interfaces(global_mesh.mesh, strict=strict)

    @classmethod
    def create_local_meshes(
        cls,
        global_mesh: CoreMesh,
        nodal_ordering: Union[NodalOrdering, str] = NodalOrdering.GLOBAL,
        indexing_base: Union[IndexingBase, int] = IndexingBase.ONE,
        strict: bool = True,
        partitions: Optional[Sequence[int]] = None,
        interfaces: Optional[InterfaceNumbering] = None,
        verbose: bool = False,
    ) -> List[LocalMesh]:
        """
        Creates the local meshes of a partitioned global mesh.

        Args:
            global_mesh: The complete, assembled mesh.
            nodal_ordering: Connectivity numbering of the local meshes.
            indexing_base: Base of the ids in the local meshes.
            strict: Whether an interface seen from one side only is an error.
            partitions: Optional 1-based partition ids to extract. Defaults to
                all partitions.
            interfaces: A precomputed interface numbering. Computed from
                `global_mesh` if not given.
            verbose: If True, prints interface and partition summaries.

        Returns:
            A list of LocalMesh objects, in ascending partition order.
        """
        if interfaces is None:
            interfaces = cls.compute_interfaces(global_mesh, strict=strict)
        if verbose and global_mesh.is_distributed:
            print(format_interface_summary(interfaces))

        if partitions is None:
            partitions = range(1, global_mesh.number_of_partitions + 1)

        local_meshes = [
            LocalMesh.from_global_mesh(
                global_mesh,
                partition,
                interfaces=interfaces,
                nodal_ordering=nodal_ordering,
                indexing_base=indexing_base,
            )
            for partition in sorted(partitions)
        ]

        if verbose:
            print_partition_summary(local_meshes)
        return local_meshes
