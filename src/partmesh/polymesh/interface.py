# -*- coding: utf-8 -*-
"""
Interface reconciliation between mesh partitions.

Gmsh marks every element on a partition boundary with its owning partition
and, as negative tags, the partitions holding a ghost copy of it. From these
tags this module derives the nodes shared by each pair of partitions and
numbers them globally, so that a distributed solver can address the interface
unknowns without communication.

The work is done in three steps:

1. `accumulate_interfaces`: one-sided node sets, keyed by (owner, sharer).
2. `reconcile_interfaces`:  intersection of (a, b) and (b, a) for a < b.
3. `number_interfaces`:     consecutive global indices, pair by pair in
   ascending (a, b) order and node by node in ascending node id order.

Functions
---------
:py:func:`build_interfaces`:
    Runs the three steps on an assembled mesh.
"""

import warnings
from dataclasses import dataclass, field
from typing import Dict, List, NamedTuple, Set, Tuple

import numpy as np
import numpy.typing as npt

from ..exceptions import AsymmetricInterfaceError
from .core_mesh import Mesh


class PartitionPair(NamedTuple):
    """Ordered pair of 1-based partition ids: element owner and ghost holder."""

    owner: int
    sharer: int

    def reversed(self) -> "PartitionPair":
        return PartitionPair(self.sharer, self.owner)


InterfaceMap = Dict[PartitionPair, Set[int]]


@dataclass(frozen=True, eq=False)
class Interface:
    """
    The agreed interface between two partitions.

    Attributes:
        master (int): The lower partition id of the pair (1-based).
        slave (int): The higher partition id of the pair (1-based).
        nodes (np.ndarray): Global node ids on the interface, ascending.
        global_start_id (int): Global interface index of `nodes[0]`.
    """

    master: int
    slave: int
    nodes: npt.NDArray[np.int_]
    global_start_id: int

    @property
    def size(self) -> int:
        return int(self.nodes.size)

    @property
    def global_indices(self) -> npt.NDArray[np.int_]:
        """Global interface index of every node, aligned with `nodes`."""
        return np.arange(self.global_start_id, self.global_start_id + self.size)

    def involves(self, partition: int) -> bool:
        return partition in (self.master, self.slave)

    def sign(self, partition: int) -> int:
        """Returns +1 if `partition` is the master side, -1 if it is the slave."""
        if partition == self.master:
            return 1
        if partition == self.slave:
            return -1
        raise ValueError(
            f"Partition {partition} is not part of interface "
            f"({self.master}, {self.slave})"
        )

    def partner(self, partition: int) -> int:
        self.sign(partition)
        return self.slave if partition == self.master else self.master


@dataclass
class InterfaceNumbering:
    """
    Globally numbered interfaces of a partitioned mesh.

    Attributes:
        interfaces (List[Interface]): Agreed interfaces in ascending
            (master, slave) order.
        num_interface_nodes (int): Total number of interface unknowns, i.e.
            one past the last global interface index.
        one_sided (InterfaceMap): The one-sided node sets the interfaces were
            reconciled from.
    """

    interfaces: List[Interface] = field(default_factory=list)
    num_interface_nodes: int = 0
    one_sided: InterfaceMap = field(default_factory=dict)

    def for_partition(self, partition: int) -> List[Interface]:
        """Returns the interfaces touching a 1-based partition id."""
        return [i for i in self.interfaces if i.involves(partition)]


def accumulate_interfaces(mesh: Mesh) -> InterfaceMap:
    """
    Collects, for every (owner, sharer) pair, the nodes of shared elements.

    Args:
        mesh: The assembled mesh.

    Returns:
        Map from `PartitionPair` to the set of node ids of the elements owned
        by `owner` that have a ghost copy in `sharer`. Partition tags are
        validated by `assemble_mesh`.
    """
    interface_map: InterfaceMap = {}
    for elements in mesh.values():
        for element in elements:
            if not element.is_partitioned:
                continue
            owner = element.owner_partition
            for tag in element.ghost_tags:
                interface_map.setdefault(PartitionPair(owner, -tag), set()).update(
                    element.connectivity
                )
    return interface_map


def reconcile_interfaces(
    interface_map: InterfaceMap, strict: bool = True
) -> Dict[Tuple[int, int], npt.NDArray[np.int_]]:
    """
    Intersects the two one-sided views of every partition pair.

    A node belongs to the interface of partitions a and b only if it is seen
    from both sides.

    Args:
        interface_map: One-sided node sets from `accumulate_interfaces`.
        strict: If True, a pair seen from one side only raises. Otherwise a
            warning is issued and the pair is left out.

    Returns:
        Map from (a, b), a < b, to the sorted agreed node ids, in ascending
        key order.

    Raises:
        AsymmetricInterfaceError: If `strict` and a pair has no reverse.
    """
    for pair in sorted(interface_map):
        if pair.reversed() not in interface_map:
            if strict:
                raise AsymmetricInterfaceError(pair.owner, pair.sharer)
            warnings.warn(
                f"Interface between partitions {pair.owner} and {pair.sharer} "
                f"is only seen from partition {pair.owner}; it is excluded"
            )

    agreed: Dict[Tuple[int, int], npt.NDArray[np.int_]] = {}
    for pair in sorted(interface_map):
        if pair.owner >= pair.sharer or pair.reversed() not in interface_map:
            continue
        common = interface_map[pair] & interface_map[pair.reversed()]
        agreed[(pair.owner, pair.sharer)] = np.array(sorted(common), dtype=int)
    return agreed


def number_interfaces(
    agreed: Dict[Tuple[int, int], npt.NDArray[np.int_]],
) -> Tuple[List[Interface], int]:
    """
    Assigns consecutive global indices to the agreed interface nodes.

    Args:
        agreed: Sorted node ids per (a, b) pair, from `reconcile_interfaces`.

    Returns:
        The interfaces in ascending (a, b) order and the total number of
        interface nodes.
    """
    interfaces: List[Interface] = []
    global_start_id = 0
    for (master, slave) in sorted(agreed):
        nodes = agreed[(master, slave)]
        interfaces.append(Interface(master, slave, nodes, global_start_id))
        global_start_id += int(nodes.size)
    return interfaces, global_start_id


def build_interfaces(mesh: Mesh, strict: bool = True) -> InterfaceNumbering:
    """
    Computes the globally numbered interfaces of an assembled mesh.

    Args:
        mesh: The assembled mesh.
        strict: Whether a one-sided interface is an error (see
            `reconcile_interfaces`).

    Returns:
        The interface numbering shared by all partitions.
    """
    one_sided = accumulate_interfaces(mesh)
    interfaces, total = number_interfaces(reconcile_interfaces(one_sided, strict))
    return InterfaceNumbering(interfaces, total, one_sided)
