# -*- coding: utf-8 -*-
"""
Core data structures for partitioned Gmsh meshes.

This module defines the `CoreMesh` class, the global, read-only view of a
partitioned mesh. Elements are grouped by (physical group name, element type)
and the number of partitions is discovered from the partition tags Gmsh
writes on every element.

Key Features:
- Reading mesh data from Gmsh .msh files (MSH 2.x ASCII).
- Grouping elements by physical group and element type, in file order.
- Discovering the number of partitions from owner and ghost tags.
- Fast node id to coordinate row lookup for partition extraction.

The `CoreMesh` is built once and then shared, unmodified, by every partition
extraction.
"""

import os
from typing import Dict, Iterator, List, NamedTuple, Sequence, Tuple, Union

import numpy as np
import numpy.typing as npt

from ..exceptions import MalformedInputError, UnknownPhysicalGroupError
from ..gmshio.element_types import node_count
from ..gmshio.parser import parse_msh
from ..gmshio.records import ElementData, NodeData, RawMeshData


class MeshKey(NamedTuple):
    """Key of an element group: physical group name and Gmsh element type."""

    name: str
    element_type: int


Mesh = Dict[MeshKey, List[ElementData]]


def assemble_mesh(
    nodes: Sequence[NodeData],
    physical_groups: Dict[int, str],
    raw_elements: Sequence[ElementData],
) -> Tuple[Mesh, int]:
    """
    Groups raw elements by physical group name and element type.

    Args:
        nodes: The nodes of the mesh, used to validate connectivity.
        physical_groups: Map from physical group id to name.
        raw_elements: The elements in file order.

    Returns:
        A tuple containing:
        - mesh: Map from `MeshKey` to the elements of that group, in file
          order. Keys are sorted.
        - number_of_partitions: The largest partition id referenced by any
          owner or ghost tag, at least 1.

    Raises:
        UnsupportedElementTypeError: If an element type is unknown.
        UnknownPhysicalGroupError: If an element refers to an undeclared
            physical group.
        MalformedInputError: If an element's connectivity does not match its
            type or refers to an unknown node, or if its owner tag is not
            positive or a ghost tag is not negative or names the owner.
    """
    node_ids = {node.id for node in nodes}
    if len(node_ids) != len(nodes):
        raise MalformedInputError("The $Nodes section contains duplicate node ids")

    mesh: Mesh = {}
    number_of_partitions = 1

    for element in raw_elements:
        if len(element.connectivity) != node_count(element.element_type):
            raise MalformedInputError(
                f"Element {element.id} of type {element.element_type} has "
                f"{len(element.connectivity)} nodes, expected "
                f"{node_count(element.element_type)}"
            )
        missing = [n for n in element.connectivity if n not in node_ids]
        if missing:
            raise MalformedInputError(
                f"Element {element.id} refers to undefined node(s) {missing}"
            )

        physical_id = element.physical_id
        if physical_id not in physical_groups:
            raise UnknownPhysicalGroupError(physical_id, element.id)

        key = MeshKey(physical_groups[physical_id], element.element_type)
        mesh.setdefault(key, []).append(element)

        if element.is_partitioned:
            owner = element.owner_partition
            if owner <= 0:
                raise MalformedInputError(
                    f"Element {element.id} has owner partition tag {owner}, "
                    "owner partitions must be positive"
                )
            number_of_partitions = max(number_of_partitions, owner)
            for tag in element.ghost_tags:
                if tag >= 0:
                    raise MalformedInputError(
                        f"Element {element.id} has ghost partition tag {tag}, "
                        "ghost partitions must be negative"
                    )
                if -tag == owner:
                    raise MalformedInputError(
                        f"Element {element.id} is a ghost of its own partition {owner}"
                    )
                number_of_partitions = max(number_of_partitions, -tag)

    return {key: mesh[key] for key in sorted(mesh)}, number_of_partitions


class CoreMesh:
    """
    Represents the global mesh read from a partitioned Gmsh file.

    Attributes:
        file_name (str): The path the mesh was read from, if any.
        version (float): The MSH format version of the input.
        physical_groups (Dict[int, str]): Map from physical group id to name.
        mesh (Dict[MeshKey, List[ElementData]]): Elements grouped by physical
            group name and element type.
        nodes (List[NodeData]): The nodes in file order.
        node_ids (np.ndarray): An array of shape (N,) with the node ids.
        node_coords (np.ndarray): An array of shape (N, 3) storing the x, y, z
            coordinates of each node, row-aligned with `node_ids`.
        number_of_partitions (int): Number of partitions found in the tags.
        declared_element_count (int): Element count declared by the file.
    """

    def __init__(self) -> None:
        """Initializes an empty CoreMesh."""
        self.file_name: str = ""
        self.version: float = 0.0
        self.physical_groups: Dict[int, str] = {}
        self.mesh: Mesh = {}
        self.nodes: List[NodeData] = []
        self.node_ids: npt.NDArray[np.int_] = np.array([], dtype=int)
        self.node_coords: npt.NDArray[np.float64] = np.empty((0, 3))
        self.number_of_partitions: int = 1
        self.declared_element_count: int = 0

        # Node id to row in node_coords
        self._id_to_index: Dict[int, int] = {}

    @classmethod
    def from_msh(cls, msh_file: Union[str, os.PathLike]) -> "CoreMesh":
        """Reads a .msh file and returns the assembled mesh."""
        core_mesh = cls()
        core_mesh.read_msh(msh_file)
        return core_mesh

    def read_msh(self, msh_file: Union[str, os.PathLike]) -> None:
        """
        Reads mesh data from a Gmsh .msh file.

        Args:
            msh_file: The path to the .msh file.
        """
        self.file_name = os.fspath(msh_file)
        self.load(parse_msh(msh_file))

    def load(self, raw: RawMeshData) -> None:
        """Assembles the mesh from already parsed MSH data."""
        self.mesh, self.number_of_partitions = assemble_mesh(
            raw.nodes, raw.physical_groups, raw.elements
        )
        self.version = raw.version
        self.physical_groups = dict(raw.physical_groups)
        self.declared_element_count = raw.declared_element_count

        self.nodes = list(raw.nodes)
        self.node_ids = np.array([n.id for n in raw.nodes], dtype=int)
        self.node_coords = np.array(
            [n.coordinates for n in raw.nodes], dtype=float
        ).reshape(-1, 3)
        self._id_to_index = {int(t): i for i, t in enumerate(self.node_ids)}

    @property
    def num_nodes(self) -> int:
        return len(self.nodes)

    @property
    def num_elements(self) -> int:
        return sum(len(elements) for elements in self.mesh.values())

    @property
    def is_distributed(self) -> bool:
        return self.number_of_partitions > 1

    def iter_elements(self) -> Iterator[Tuple[MeshKey, ElementData]]:
        """Yields every element with its group key, groups in key order."""
        for key, elements in self.mesh.items():
            for element in elements:
                yield key, element

    def node_rows(self, node_ids: Sequence[int]) -> npt.NDArray[np.int_]:
        """
        Returns the rows of `node_coords` holding the given node ids.

        Raises:
            KeyError: If a node id is not part of the mesh.
        """
        try:
            return np.array([self._id_to_index[int(n)] for n in node_ids], dtype=int)
        except KeyError as e:
            raise KeyError(f"Node id {e} not found in the mesh.") from e
