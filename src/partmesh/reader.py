# -*- coding: utf-8 -*-
"""
High level reader of partitioned Gmsh meshes.

`MeshReader` reads and assembles the whole mesh and reconciles its partition
interfaces at construction, then extracts and writes every partition on
demand:

    reader = MeshReader("beam.msh", NodalOrdering.LOCAL, IndexingBase.ZERO)
    reader.write("output")
"""

import os
from typing import Dict, List, Optional, Union

from .config import DistributedMethod, IndexingBase, NodalOrdering, coerce_option
from .gmshio.records import NodeData
from .polymesh.core_mesh import CoreMesh, Mesh
from .polymesh.interface import InterfaceNumbering
from .polymesh.local_mesh import LocalMesh
from .polymesh.mesh_partition_manager import MeshPartitionManager
from .polymesh.reporting import format_mesh_summary
from .writer import write_partition


class MeshReader:
    """
    Reads a partitioned Gmsh file and writes one mesh document per partition.

    Attributes:
        file_name (str): The path of the .msh file.
        nodal_ordering (NodalOrdering): Local or global connectivity numbering.
        indexing_base (IndexingBase): Zero or one based output ids.
        distributed_method (DistributedMethod): Coupling convention recorded in
            the output.
        core_mesh (CoreMesh): The assembled global mesh.
        interfaces (InterfaceNumbering): The reconciled interfaces.
    """

    def __init__(
        self,
        file_name: Union[str, os.PathLike],
        nodal_ordering: Union[NodalOrdering, str] = NodalOrdering.GLOBAL,
        indexing_base: Union[IndexingBase, int] = IndexingBase.ONE,
        distributed_method: Union[DistributedMethod, str] = DistributedMethod.NONE,
        strict: bool = True,
        verbose: bool = False,
    ):
        """
        Reads the mesh and reconciles its interfaces.

        Args:
            file_name: The path to the .msh file.
            nodal_ordering: If LOCAL, each partition's connectivity is
                renumbered to local node indices and the local-to-global map
                gives the global ids back.
            indexing_base: Zero or one based ids in the output.
            distributed_method: Interface convention of the downstream solver.
            strict: Whether an interface seen from one side only is an error.
            verbose: If True, prints mesh and partition summaries.
        """
        self.file_name = os.fspath(file_name)
        self.nodal_ordering = coerce_option(NodalOrdering, nodal_ordering)
        self.indexing_base = coerce_option(IndexingBase, indexing_base)
        self.distributed_method = coerce_option(DistributedMethod, distributed_method)
        self.strict = strict
        self.verbose = verbose

        self.core_mesh = CoreMesh.from_msh(self.file_name)
        if self.verbose:
            print(format_mesh_summary(self.core_mesh))
        self.interfaces: InterfaceNumbering = MeshPartitionManager.compute_interfaces(
            self.core_mesh, strict=strict
        )

    @property
    def name(self) -> str:
        """The input file name without directory and extension."""
        return os.path.splitext(os.path.basename(self.file_name))[0]

    @property
    def mesh(self) -> Mesh:
        """Elements grouped by physical group name and element type."""
        return self.core_mesh.mesh

    @property
    def nodes(self) -> List[NodeData]:
        return self.core_mesh.nodes

    @property
    def names(self) -> Dict[int, str]:
        """Physical group names by physical id."""
        return self.core_mesh.physical_groups

    @property
    def number_of_partitions(self) -> int:
        return self.core_mesh.number_of_partitions

    def local_mesh(self, rank: int) -> LocalMesh:
        """Extracts the partition with 0-based index `rank`."""
        return LocalMesh.from_global_mesh(
            self.core_mesh,
            rank + 1,
            interfaces=self.interfaces,
            nodal_ordering=self.nodal_ordering,
            indexing_base=self.indexing_base,
        )

    def local_meshes(self) -> List[LocalMesh]:
        """Extracts every partition, in ascending order."""
        return MeshPartitionManager.create_local_meshes(
            self.core_mesh,
            nodal_ordering=self.nodal_ordering,
            indexing_base=self.indexing_base,
            interfaces=self.interfaces,
            verbose=self.verbose,
        )

    def write(
        self, output_dir: Optional[str] = None, print_indices: bool = True
    ) -> List[str]:
        """
        Writes one JSON mesh document per partition.

        Args:
            output_dir: Directory for the documents. Defaults to the directory
                of the input file.
            print_indices: Whether to write the original node and element ids.

        Returns:
            The paths of the written files, in partition order.
        """
        if output_dir is None:
            output_dir = os.path.dirname(os.path.abspath(self.file_name))

        written = []
        for local_mesh in self.local_meshes():
            path = write_partition(
                local_mesh,
                output_dir,
                self.name,
                self.number_of_partitions,
                distributed_method=self.distributed_method,
                print_indices=print_indices,
            )
            if self.verbose:
                print(f"Partition {local_mesh.rank} written to: {path}")
            written.append(path)
        return written
