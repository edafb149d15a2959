# -*- coding: utf-8 -*-
"""
Plain records produced by the MSH parser.

`NodeData` and `ElementData` mirror one line of the `$Nodes` and `$Elements`
sections. `ElementData` also decodes the partition tags that Gmsh writes for
partitioned meshes:

    tags[0]              physical group id
    tags[1]              geometric entity id
    tags[2]              number of partition entries of the element
    tags[3]              owning partition (positive)
    tags[4:3 + tags[2]]  partitions holding a ghost copy (negative)
"""

from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from ..exceptions import MalformedInputError


@dataclass(frozen=True)
class NodeData:
    """A mesh node: its file id and x, y, z coordinates."""

    id: int
    coordinates: Tuple[float, float, float]


@dataclass(frozen=True)
class ElementData:
    """A raw element record as read from the `$Elements` section."""

    id: int
    element_type: int
    tags: Tuple[int, ...]
    connectivity: Tuple[int, ...]

    @property
    def physical_id(self) -> int:
        if not self.tags:
            raise MalformedInputError(f"Element {self.id} has no physical group tag")
        return self.tags[0]

    @property
    def num_partition_tags(self) -> int:
        """Number of partition entries, 0 for an unpartitioned element."""
        return self.tags[2] if len(self.tags) > 2 else 0

    @property
    def is_partitioned(self) -> bool:
        return self.num_partition_tags > 0

    @property
    def owner_partition(self) -> int:
        """
        Partition owning the element.

        Elements without partition tags belong to the first (and only)
        partition.
        """
        if not self.is_partitioned:
            return 1
        if len(self.tags) < 4:
            raise MalformedInputError(
                f"Element {self.id} declares {self.tags[2]} partition tags "
                f"but only {len(self.tags)} tags are present"
            )
        return self.tags[3]

    @property
    def ghost_tags(self) -> Tuple[int, ...]:
        """Raw ghost partition tags of the element, as stored (negative)."""
        if not self.is_partitioned:
            return ()
        end = 3 + self.tags[2]
        if len(self.tags) < max(end, 4):
            raise MalformedInputError(
                f"Element {self.id} declares {self.tags[2]} partition tags "
                f"but only {len(self.tags)} tags are present"
            )
        return self.tags[4:end]


@dataclass
class RawMeshData:
    """The three raw collections of an MSH file plus its header."""

    version: float = 0.0
    file_type: int = 0
    data_size: int = 8
    physical_groups: Dict[int, str] = field(default_factory=dict)
    physical_dimensions: Dict[int, int] = field(default_factory=dict)
    nodes: List[NodeData] = field(default_factory=list)
    elements: List[ElementData] = field(default_factory=list)
    declared_element_count: int = 0
