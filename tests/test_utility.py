import contextlib
import io
import tempfile
import unittest
from pathlib import Path

import matplotlib

matplotlib.use("Agg")

import numpy as np

from partmesh.common.utility import get_geometry_extent, plot_partition
from partmesh.config import IndexingBase, NodalOrdering
from partmesh.polymesh import MeshPartitionManager

from tests.common_meshes import SINGLE_PARTITION_MSH, TWO_PARTITION_MSH, load_core_mesh


class TestPlotPartition(unittest.TestCase):

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.tmp_path = Path(self.tmpdir.name)

    def tearDown(self):
        self.tmpdir.cleanup()

    def plot(self, local_mesh, name):
        filepath = self.tmp_path / name
        with contextlib.redirect_stdout(io.StringIO()):
            n_drawn = plot_partition(local_mesh, str(filepath))
        self.assertTrue(filepath.exists())
        return n_drawn

    def test_plot_partitions(self):
        """Only surface elements are drawn, boundary lines are skipped."""
        left, right = MeshPartitionManager.create_local_meshes(
            load_core_mesh(TWO_PARTITION_MSH)
        )
        self.assertEqual(self.plot(left, "left.png"), 2)
        self.assertEqual(self.plot(right, "right.png"), 2)

    def test_plot_local_zero_based_partition(self):
        local_meshes = MeshPartitionManager.create_local_meshes(
            load_core_mesh(TWO_PARTITION_MSH),
            nodal_ordering=NodalOrdering.LOCAL,
            indexing_base=IndexingBase.ZERO,
        )
        self.assertEqual(self.plot(local_meshes[1], "right.png"), 2)

    def test_plot_single_partition(self):
        (local_mesh,) = MeshPartitionManager.create_local_meshes(
            load_core_mesh(SINGLE_PARTITION_MSH)
        )
        self.assertEqual(self.plot(local_mesh, "single.png"), 4)

    def test_geometry_extent(self):
        nodes = np.array([[0.0, 0.0], [3.0, 4.0]])
        self.assertAlmostEqual(get_geometry_extent(nodes), 5.0)
        self.assertEqual(get_geometry_extent(np.zeros((2, 2))), 1.0)


if __name__ == "__main__":
    unittest.main()
