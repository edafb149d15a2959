# -*- coding: utf-8 -*-
"""
Tools for extracting the mesh of a single partition.

This module provides the `LocalMesh` class, the portion of a global
`CoreMesh` owned by one partition. A `LocalMesh` holds the owned elements,
grouped as in the global mesh, the coordinates of the nodes they reference,
the local-to-global node map and the interfaces the partition shares with its
neighbours.

Key Features:
- Selection of the elements owned by a partition.
- A sorted, duplicate-free local-to-global node map.
- Optional renumbering of connectivity to local (rank based) node indices.
- Optional shift of all written ids to zero-based indexing.

Classes:
    LocalMesh: Represents the mesh of a single partition.
"""

from dataclasses import replace
from typing import Dict, List, Optional

import numpy as np
import numpy.typing as npt

from ..config import IndexingBase, NodalOrdering, coerce_option
from ..gmshio.records import NodeData
from .core_mesh import CoreMesh, Mesh, MeshKey
from .interface import Interface, InterfaceNumbering


def _filter_owned_elements(mesh: Mesh, partition: int) -> Mesh:
    """
    Keeps the elements owned by a partition.

    Args:
        mesh: The global mesh.
        partition: The 1-based partition id.

    Returns:
        The owned elements, grouped as in `mesh`. Empty groups are dropped.
    """
    owned: Mesh = {}
    for key, elements in mesh.items():
        selected = [e for e in elements if e.owner_partition == partition]
        if selected:
            owned[key] = selected
    return owned


def _initialize_node_map(process_mesh: Mesh) -> npt.NDArray[np.int_]:
    """
    Returns the sorted unique global node ids referenced by `process_mesh`.

    The position of a node id in this array is its local index.
    """
    connectivity = [
        np.asarray(e.connectivity, dtype=int)
        for elements in process_mesh.values()
        for e in elements
    ]
    if not connectivity:
        return np.array([], dtype=int)
    return np.unique(np.concatenate(connectivity))


def _renumber_connectivity(
    process_mesh: Mesh, l2g_nodes: npt.NDArray[np.int_]
) -> Mesh:
    """
    Rewrites connectivity from global node ids to 1-based local ranks.

    Args:
        process_mesh: The owned elements with global connectivity.
        l2g_nodes: Sorted local-to-global node map.

    Returns:
        A new mesh whose connectivity entries are positions in `l2g_nodes`,
        counted from one.

    Raises:
        KeyError: If a node id is missing from `l2g_nodes`.
    """
    local_mesh: Mesh = {}
    for key, elements in process_mesh.items():
        # All elements of a group share a type, hence a node count
        global_conn = np.array([e.connectivity for e in elements], dtype=int)
        ranks = np.searchsorted(l2g_nodes, global_conn)
        in_range = ranks < l2g_nodes.size
        if not np.all(in_range) or not np.array_equal(
            l2g_nodes[ranks[in_range]], global_conn[in_range]
        ):
            raise KeyError(f"A node of group {key} is not in the local-to-global map.")
        local_mesh[key] = [
            replace(e, connectivity=tuple(int(n) for n in row))
            for e, row in zip(elements, ranks + 1)
        ]
    return local_mesh


def _shift_element_ids(process_mesh: Mesh, offset: int) -> Mesh:
    """Subtracts `offset` from every element id and connectivity entry."""
    return {
        key: [
            replace(
                e,
                id=e.id - offset,
                connectivity=tuple(n - offset for n in e.connectivity),
            )
            for e in elements
        ]
        for key, elements in process_mesh.items()
    }


class LocalMesh:
    """
    Represents the mesh of a single partition.

    All ids held by a `LocalMesh` are in its output numbering: they are
    already renumbered (local ordering) and shifted (zero-based indexing) as
    requested at construction.

    Attributes:
        partition (int): The 1-based partition id, as stored in the file tags.
        rank (int): The 0-based partition index, `partition - 1`.
        nodal_ordering (NodalOrdering): Numbering of the connectivity.
        indexing_base (IndexingBase): Base of every written id.
        mesh (Dict[MeshKey, List[ElementData]]): Owned elements per group.
        nodes (List[NodeData]): Local nodes in local index order.
        node_coords (np.ndarray): An array of shape (N, 3) with the local node
            coordinates.
        l2g_nodes (np.ndarray): Map from local node index to global node id.
        interfaces (List[Interface]): Interfaces shared with other partitions.
        num_interface_nodes (int): Total interface nodes of the whole mesh.
    """

    def __init__(
        self,
        partition: int,
        mesh: Mesh,
        nodes: List[NodeData],
        node_coords: npt.NDArray[np.float64],
        l2g_nodes: npt.NDArray[np.int_],
        nodal_ordering: NodalOrdering = NodalOrdering.GLOBAL,
        indexing_base: IndexingBase = IndexingBase.ONE,
        interfaces: Optional[List[Interface]] = None,
        num_interface_nodes: int = 0,
    ):
        if partition < 1:
            raise ValueError("Partition ids must be positive integers.")

        self.partition = partition
        self.rank = partition - 1
        self.mesh = mesh
        self.nodes = nodes
        self.node_coords = node_coords
        self.l2g_nodes = l2g_nodes
        self.nodal_ordering = nodal_ordering
        self.indexing_base = indexing_base
        self.interfaces = interfaces or []
        self.num_interface_nodes = num_interface_nodes

    @property
    def offset(self) -> int:
        """Amount subtracted from file ids to get written ids."""
        return 1 if self.indexing_base is IndexingBase.ZERO else 0

    @property
    def n_nodes(self) -> int:
        return len(self.nodes)

    @property
    def n_elements(self) -> int:
        return sum(len(elements) for elements in self.mesh.values())

    @classmethod
    def from_global_mesh(
        cls,
        global_mesh: CoreMesh,
        partition: int,
        interfaces: Optional[InterfaceNumbering] = None,
        nodal_ordering: NodalOrdering = NodalOrdering.GLOBAL,
        indexing_base: IndexingBase = IndexingBase.ONE,
    ) -> "LocalMesh":
        """
        Factory method to construct the LocalMesh of a partition.

        The global mesh and the interface numbering are only read.

        Args:
            global_mesh: The assembled global mesh.
            partition: The 1-based id of the partition to extract.
            interfaces: The interface numbering of the global mesh, if any.
            nodal_ordering: Keep global node ids in the connectivity or
                renumber them to local ranks.
            indexing_base: Write zero-based or one-based ids.

        Returns:
            A new LocalMesh instance for the partition.

        Raises:
            ValueError: If the partition id is out of range.
        """
        nodal_ordering = coerce_option(NodalOrdering, nodal_ordering)
        indexing_base = coerce_option(IndexingBase, indexing_base)
        if not 1 <= partition <= global_mesh.number_of_partitions:
            raise ValueError(
                f"Partition {partition} is out of range, the mesh has "
                f"{global_mesh.number_of_partitions} partition(s)."
            )

        process_mesh = _filter_owned_elements(global_mesh.mesh, partition)
        l2g_nodes = _initialize_node_map(process_mesh)
        rows = global_mesh.node_rows(l2g_nodes)
        nodes = [global_mesh.nodes[r] for r in rows]
        node_coords = global_mesh.node_coords[rows].reshape(-1, 3)

        if nodal_ordering is NodalOrdering.LOCAL:
            process_mesh = _renumber_connectivity(process_mesh, l2g_nodes)

        # Index-base conversion comes last, everything above uses file ids
        if indexing_base is IndexingBase.ZERO:
            process_mesh = _shift_element_ids(process_mesh, 1)
            l2g_nodes = l2g_nodes - 1
            nodes = [replace(n, id=n.id - 1) for n in nodes]

        return cls(
            partition=partition,
            mesh=process_mesh,
            nodes=nodes,
            node_coords=node_coords,
            l2g_nodes=l2g_nodes,
            nodal_ordering=nodal_ordering,
            indexing_base=indexing_base,
            interfaces=interfaces.for_partition(partition) if interfaces else [],
            num_interface_nodes=interfaces.num_interface_nodes if interfaces else 0,
        )

    def connectivity(self, key: MeshKey) -> npt.NDArray[np.int_]:
        """Returns the connectivity of a group as an (n_elements, n_nodes) array."""
        return np.array([e.connectivity for e in self.mesh[key]], dtype=int)

    def element_ids(self, key: MeshKey) -> npt.NDArray[np.int_]:
        return np.array([e.id for e in self.mesh[key]], dtype=int)

    def connectivity_rows(self, key: MeshKey) -> npt.NDArray[np.int_]:
        """Returns the connectivity of a group as 0-based rows of `node_coords`."""
        conn = self.connectivity(key)
        if self.nodal_ordering is NodalOrdering.LOCAL:
            return conn - (1 - self.offset)
        return np.searchsorted(self.l2g_nodes, conn)

    def to_global_connectivity(self, key: MeshKey) -> npt.NDArray[np.int_]:
        """
        Maps the connectivity of a group back to global node ids.

        The result is in the indexing base of this mesh.
        """
        if self.nodal_ordering is NodalOrdering.GLOBAL:
            return self.connectivity(key)
        return self.l2g_nodes[self.connectivity_rows(key)]

    def interface_nodes(self, interface: Interface) -> npt.NDArray[np.int_]:
        """Returns the global node ids of an interface in the written base."""
        return interface.nodes - self.offset

    def interface_partitions(self) -> Dict[int, int]:
        """Map from neighbour partition (1-based) to the sign of this side."""
        return {i.partner(self.partition): i.sign(self.partition) for i in self.interfaces}
