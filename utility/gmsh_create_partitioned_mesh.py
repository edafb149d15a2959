import os
import gmsh


def create_partitioned_rectangle(
    length,
    height,
    nx,
    ny,
    n_parts,
    filename="data/rectangle_partitioned.msh",
    mesh_type="structured",
):
    """
    Creates a rectangle mesh, partitions it with Gmsh and saves it as MSH 2.2.

    The mesh is written with ghost cells, so every element on a partition
    boundary carries its owner and, as negative tags, the partitions holding a
    ghost copy. This is the input expected by `partmesh.MeshReader`.

    Args:
        length (float): The length of the rectangle along the x-axis.
        height (float): The height of the rectangle along the y-axis.
        nx (int): The number of elements along the length (x-axis).
        ny (int): The number of elements along the height (y-axis).
        n_parts (int): The number of partitions.
        filename (str): The path to save the output .msh file.
        mesh_type (str): "structured" (quads) or "triangular".
    """
    if mesh_type not in ["structured", "triangular"]:
        raise ValueError("mesh_type must be 'structured' or 'triangular'")
    if n_parts < 1:
        raise ValueError("n_parts must be a positive integer")

    output_dir = os.path.dirname(filename)
    if output_dir and not os.path.exists(output_dir):
        os.makedirs(output_dir)
        print(f"Created directory: {output_dir}")

    gmsh.initialize()
    gmsh.option.setNumber("General.Verbosity", 0)
    gmsh.model.add(f"{mesh_type}_partitioned")

    try:
        surface = gmsh.model.occ.addRectangle(0, 0, 0, length, height)
        gmsh.model.occ.synchronize()

        # --- Physical Groups ---
        left_bnd, right_bnd, top_bnd, bottom_bnd = [], [], [], []
        for curve in gmsh.model.getBoundary([(2, surface)], oriented=False):
            com = gmsh.model.occ.getCenterOfMass(curve[0], curve[1])
            if abs(com[0] - 0.0) < 1e-6:
                left_bnd.append(curve[1])
            elif abs(com[0] - length) < 1e-6:
                right_bnd.append(curve[1])
            elif abs(com[1] - 0.0) < 1e-6:
                bottom_bnd.append(curve[1])
            elif abs(com[1] - height) < 1e-6:
                top_bnd.append(curve[1])

        gmsh.model.addPhysicalGroup(1, left_bnd, name="left")
        gmsh.model.addPhysicalGroup(1, right_bnd, name="right")
        gmsh.model.addPhysicalGroup(1, bottom_bnd, name="bottom")
        gmsh.model.addPhysicalGroup(1, top_bnd, name="top")
        gmsh.model.addPhysicalGroup(2, [surface], name="domain")

        # --- Meshing ---
        if mesh_type == "structured":
            for curve_tag in bottom_bnd + top_bnd:
                gmsh.model.mesh.setTransfiniteCurve(curve_tag, nx + 1)
            for curve_tag in left_bnd + right_bnd:
                gmsh.model.mesh.setTransfiniteCurve(curve_tag, ny + 1)
            gmsh.model.mesh.setTransfiniteSurface(surface)
            gmsh.model.mesh.setRecombine(2, surface)
        else:
            char_length = min(length / nx, height / ny)
            gmsh.option.setNumber("Mesh.CharacteristicLengthMin", char_length * 0.9)
            gmsh.option.setNumber("Mesh.CharacteristicLengthMax", char_length * 1.1)

        gmsh.model.mesh.generate(2)

        # --- Partitioning ---
        if n_parts > 1:
            gmsh.option.setNumber("Mesh.PartitionCreateGhostCells", 1)
            gmsh.option.setNumber("Mesh.PartitionOldStyleMsh2", 1)
            gmsh.model.mesh.partition(n_parts)

        gmsh.option.setNumber("Mesh.MshFileVersion", 2.2)
        gmsh.option.setNumber("Mesh.Binary", 0)
        gmsh.write(filename)
    finally:
        gmsh.finalize()

    print(f"Successfully created {mesh_type} mesh with {n_parts} partition(s).")
    print(f"Mesh saved to: {filename}")
    return filename


if __name__ == "__main__":
    rect_length = 100.0
    rect_height = 50.0
    num_elements_x = 16
    num_elements_y = 8

    for parts in (1, 2, 4):
        print(f"Creating a structured mesh with {parts} partition(s).")
        create_partitioned_rectangle(
            rect_length,
            rect_height,
            num_elements_x,
            num_elements_y,
            parts,
            filename=f"data/rectangle_{parts}parts.msh",
            mesh_type="structured",
        )
        print("\n" + "=" * 40 + "\n")

    print("\nScript finished.")
