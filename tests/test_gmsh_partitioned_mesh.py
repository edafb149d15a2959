import contextlib
import importlib.util
import io
import os
import tempfile
import unittest
import warnings

from partmesh import MeshReader

HAS_GMSH = importlib.util.find_spec("gmsh") is not None

UTILITY_PATH = os.path.join(
    os.path.dirname(__file__), "..", "utility", "gmsh_create_partitioned_mesh.py"
)


def load_generator():
    spec = importlib.util.spec_from_file_location("gmsh_create_partitioned_mesh", UTILITY_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@unittest.skipUnless(HAS_GMSH, "gmsh is not installed")
class TestGmshPartitionedMesh(unittest.TestCase):
    """Reads meshes partitioned by Gmsh itself."""

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.generator = load_generator()

    def tearDown(self):
        self.tmpdir.cleanup()

    def create(self, n_parts, mesh_type="structured"):
        filename = os.path.join(self.tmpdir.name, f"rect_{n_parts}.msh")
        with contextlib.redirect_stdout(io.StringIO()):
            self.generator.create_partitioned_rectangle(
                4.0, 2.0, 8, 4, n_parts, filename=filename, mesh_type=mesh_type
            )
        return filename

    def read(self, filename):
        with warnings.catch_warnings():
            warnings.simplefilter("ignore")
            return MeshReader(filename, "local", strict=False)

    def test_single_partition(self):
        reader = self.read(self.create(1))
        self.assertEqual(reader.number_of_partitions, 1)
        self.assertEqual(reader.interfaces.num_interface_nodes, 0)
        (local_mesh,) = reader.local_meshes()
        self.assertEqual(local_mesh.n_nodes, 9 * 5)

    def test_four_partitions(self):
        reader = self.read(self.create(4))
        self.assertEqual(reader.number_of_partitions, 4)
        self.assertGreater(reader.interfaces.num_interface_nodes, 0)

        local_meshes = reader.local_meshes()
        owned = sum(m.n_elements for m in local_meshes)
        self.assertEqual(owned, sum(len(v) for v in reader.mesh.values()))
        for local_mesh in local_meshes:
            for interface in local_mesh.interfaces:
                self.assertTrue(set(interface.nodes) <= set(local_mesh.l2g_nodes))

        paths = reader.write(os.path.join(self.tmpdir.name, "out"))
        self.assertEqual(len(paths), 4)

    def test_triangular_mesh(self):
        reader = self.read(self.create(2, mesh_type="triangular"))
        self.assertEqual(reader.number_of_partitions, 2)
        self.assertEqual(len(reader.local_meshes()), 2)


if __name__ == "__main__":
    unittest.main()
