import numpy as np
import matplotlib.pyplot as plt
from matplotlib.patches import Polygon
from matplotlib.collections import PatchCollection

from ..gmshio.element_types import ElementType

# Corner nodes come first in Gmsh ordering, higher order nodes are not drawn
CORNER_COUNTS = {
    ElementType.TRIANGLE3: 3,
    ElementType.TRIANGLE6: 3,
    ElementType.TRIANGLE9: 3,
    ElementType.TRIANGLE10: 3,
    ElementType.TRIANGLE12: 3,
    ElementType.TRIANGLE15: 3,
    ElementType.TRIANGLE15_IC: 3,
    ElementType.TRIANGLE21: 3,
    ElementType.QUADRILATERAL4: 4,
    ElementType.QUADRILATERAL8: 4,
    ElementType.QUADRILATERAL9: 4,
}


def get_geometry_extent(nodes):
    """Computes the extent of the geometry based on node coordinates."""
    min_coords = np.min(nodes, axis=0)
    max_coords = np.max(nodes, axis=0)
    extent = np.linalg.norm(max_coords - min_coords)
    return extent if extent > 0 else 1.0


def plot_partition(local_mesh, filepath="partition.png", show_interface=True):
    """
    Plots the surface elements of a partition and saves the figure.

    Elements are colored by physical group. Interface nodes are marked.

    Args:
        local_mesh (LocalMesh): The partition to plot.
        filepath (str): The path to save the plot image.
        show_interface (bool): Whether to mark the interface nodes.

    Returns:
        int: The number of surface elements drawn.
    """
    nodes = local_mesh.node_coords[:, :2]
    surface_keys = [k for k in local_mesh.mesh if k.element_type in CORNER_COUNTS]

    fig, ax = plt.subplots(figsize=(10, 8))
    cmap = plt.get_cmap("tab20")

    n_drawn = 0
    for i, key in enumerate(surface_keys):
        n_corners = CORNER_COUNTS[key.element_type]
        rows = local_mesh.connectivity_rows(key)[:, :n_corners]
        patches = [Polygon(nodes[r], closed=True) for r in rows]
        collection = PatchCollection(
            patches, facecolor=cmap(i % 20), edgecolor="k", alpha=0.7, lw=0.5
        )
        ax.add_collection(collection)
        ax.plot([], [], "s", color=cmap(i % 20), label=key.name)
        n_drawn += len(patches)

    if show_interface and local_mesh.interfaces and nodes.size > 0:
        interface_ids = np.unique(
            np.concatenate([i.nodes for i in local_mesh.interfaces])
        )
        rows = np.searchsorted(local_mesh.l2g_nodes + local_mesh.offset, interface_ids)
        ax.scatter(nodes[rows, 0], nodes[rows, 1], s=12, c="red", label="interface")

    if nodes.size > 0:
        margin = 0.02 * get_geometry_extent(nodes)
        ax.set_xlim(nodes[:, 0].min() - margin, nodes[:, 0].max() + margin)
        ax.set_ylim(nodes[:, 1].min() - margin, nodes[:, 1].max() + margin)
    ax.set_aspect("equal")
    ax.set_title(f"Partition {local_mesh.rank}")
    if surface_keys or local_mesh.interfaces:
        ax.legend(loc="upper right", fontsize="small")

    plt.savefig(filepath, dpi=150, bbox_inches="tight")
    plt.close(fig)
    print(f"Partition plot saved to: {filepath}")
    return n_drawn
