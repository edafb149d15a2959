# -*- coding: utf-8 -*-
"""
This module provides reporting functions for partitioned meshes.
"""
from __future__ import annotations
from typing import TYPE_CHECKING, Sequence

from ..gmshio.element_types import element_name

if TYPE_CHECKING:
    from .core_mesh import CoreMesh
    from .interface import InterfaceNumbering
    from .local_mesh import LocalMesh


def format_mesh_summary(mesh: "CoreMesh") -> str:
    """
    Formats a summary of the groups and partitions of a global mesh.
    """
    report = []
    report.append(f"\n{'--- Mesh Summary ---':^80}")
    if mesh.file_name:
        report.append(f"  File: {mesh.file_name} (MSH {mesh.version:g})")
    report.append(f"  Nodes: {mesh.num_nodes}")
    report.append(f"  Elements: {mesh.num_elements}")
    report.append(f"  Partitions: {mesh.number_of_partitions}")
    report.append(_format_group_table(mesh))
    return "\n".join(report)


def _format_group_table(mesh: "CoreMesh") -> str:
    """Formats the table of element groups."""
    lines = []
    lines.append(f"  {'Physical group':<30} {'Element type':<16} {'Count':>10}")
    lines.append(f"  {'-'*30} {'-'*16} {'-'*10}")
    for key, elements in mesh.mesh.items():
        lines.append(
            f"  {key.name:<30} {element_name(key.element_type):<16} {len(elements):>10}"
        )
    return "\n".join(lines)


def format_interface_summary(numbering: "InterfaceNumbering") -> str:
    """
    Formats the reconciled interfaces and their global index ranges.
    """
    lines = []
    lines.append(f"\n{'--- Interface Summary ---':^80}")
    if not numbering.interfaces:
        lines.append("  No interfaces found.")
        return "\n".join(lines)

    lines.append(f"  {'Partitions':<14} {'Nodes':>10} {'Global indices':>20}")
    lines.append(f"  {'-'*14} {'-'*10} {'-'*20}")
    for interface in numbering.interfaces:
        pair = f"{interface.master} - {interface.slave}"
        span = f"[{interface.global_start_id}, {interface.global_start_id + interface.size})"
        lines.append(f"  {pair:<14} {interface.size:>10} {span:>20}")
    lines.append(f"  Total interface nodes: {numbering.num_interface_nodes}")
    return "\n".join(lines)


def print_partition_summary(local_meshes: Sequence["LocalMesh"]) -> None:
    """Prints a summary of the element and node distribution across partitions."""
    print("--- Partition Summary ---")
    if not local_meshes:
        print("No partitions found.")
        return

    print(f"Number of partitions: {len(local_meshes)}")
    for local_mesh in local_meshes:
        print(
            f"  Partition {local_mesh.rank}: {local_mesh.n_elements} elements, "
            f"{local_mesh.n_nodes} nodes, {len(local_mesh.interfaces)} interfaces"
        )
