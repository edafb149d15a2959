# -*- coding: utf-8 -*-
"""
JSON output of partition meshes.

Each partition is written to its own document, `<name>_<rank>.mesh`, or
`<name>.mesh` when the mesh has a single partition. A document is written to
a temporary file first and moved into place once complete, so a failed write
never leaves a truncated document behind.
"""

import json
import os
import tempfile
from typing import Any, Dict, List, Union

from .config import DistributedMethod, coerce_option
from .exceptions import MeshFileError
from .polymesh.local_mesh import LocalMesh


def partition_file_name(name: str, rank: int, number_of_partitions: int) -> str:
    """Returns the output file name of a 0-based partition index."""
    if number_of_partitions > 1:
        return f"{name}_{rank}.mesh"
    return f"{name}.mesh"


def partition_to_dict(
    local_mesh: LocalMesh,
    name: str,
    number_of_partitions: int,
    distributed_method: Union[DistributedMethod, str] = DistributedMethod.NONE,
    print_indices: bool = True,
) -> Dict[str, Any]:
    """
    Builds the JSON document of a partition.

    Args:
        local_mesh: The partition to serialize.
        name: The mesh name, usually the input file stem.
        number_of_partitions: Total number of partitions of the mesh.
        distributed_method: Interface convention recorded for the solver.
        print_indices: If True, the original node and element ids are written
            alongside coordinates and connectivity.

    Returns:
        A dictionary made only of JSON serializable values.
    """
    distributed_method = coerce_option(DistributedMethod, distributed_method)

    nodes: Dict[str, Any] = {"Coordinates": local_mesh.node_coords.tolist()}
    if print_indices:
        nodes["Indices"] = [n.id for n in local_mesh.nodes]

    elements: List[Dict[str, Any]] = []
    for key in local_mesh.mesh:
        group: Dict[str, Any] = {
            "Name": key.name,
            "Type": int(key.element_type),
            "NodalConnectivity": local_mesh.connectivity(key).tolist(),
        }
        if print_indices:
            group["Indices"] = local_mesh.element_ids(key).tolist()
        elements.append(group)

    document: Dict[str, Any] = {
        "Name": name,
        "Partition": local_mesh.rank,
        "NumberOfPartitions": number_of_partitions,
        "DistributedMethod": distributed_method.value,
        "NodalOrdering": local_mesh.nodal_ordering.value,
        "IndexingBase": local_mesh.indexing_base.value,
        "Nodes": nodes,
        "Elements": elements,
    }

    if number_of_partitions > 1:
        document["LocalToGlobalMap"] = local_mesh.l2g_nodes.tolist()
        document["Interface"] = [
            {
                "Partitions": [interface.master - 1, interface.slave - 1],
                "Value": interface.sign(local_mesh.partition),
                "Indices": local_mesh.interface_nodes(interface).tolist(),
                "GlobalStartId": interface.global_start_id,
            }
            for interface in local_mesh.interfaces
        ]
        document["NumInterfaceNodes"] = local_mesh.num_interface_nodes
    return document


def write_json_atomic(document: Dict[str, Any], path: str) -> None:
    """
    Writes a JSON document so that `path` is either complete or untouched.

    Raises:
        MeshFileError: If the file cannot be written.
    """
    directory = os.path.dirname(os.path.abspath(path))
    try:
        fd, tmp_path = tempfile.mkstemp(
            prefix=f".{os.path.basename(path)}.", suffix=".tmp", dir=directory
        )
    except OSError as e:
        raise MeshFileError(f"Failed to open {path} for writing: {e}") from e

    try:
        with os.fdopen(fd, "w") as fh:
            json.dump(document, fh, indent=2)
            fh.flush()
            os.fsync(fh.fileno())
        os.replace(tmp_path, path)
    except BaseException as e:
        if os.path.exists(tmp_path):
            os.unlink(tmp_path)
        if isinstance(e, OSError) and not isinstance(e, MeshFileError):
            raise MeshFileError(f"Failed to write {path}: {e}") from e
        raise


def write_partition(
    local_mesh: LocalMesh,
    output_dir: str,
    name: str,
    number_of_partitions: int,
    distributed_method: Union[DistributedMethod, str] = DistributedMethod.NONE,
    print_indices: bool = True,
) -> str:
    """
    Writes the JSON document of one partition.

    Args:
        local_mesh: The partition to write.
        output_dir: Directory receiving the file. Created if missing.
        name: Mesh name used as file stem and stored in the document.
        number_of_partitions: Total number of partitions of the mesh.
        distributed_method: Interface convention recorded for the solver.
        print_indices: Whether to write the original ids.

    Returns:
        The path of the written file.
    """
    try:
        os.makedirs(output_dir, exist_ok=True)
    except OSError as e:
        raise MeshFileError(f"Could not create output directory {output_dir}: {e}") from e

    path = os.path.join(
        output_dir, partition_file_name(name, local_mesh.rank, number_of_partitions)
    )
    document = partition_to_dict(
        local_mesh,
        name,
        number_of_partitions,
        distributed_method=distributed_method,
        print_indices=print_indices,
    )
    write_json_atomic(document, path)
    return path
