import contextlib
import io
import unittest
import warnings

import numpy as np

from partmesh.config import IndexingBase, NodalOrdering
from partmesh.exceptions import AsymmetricInterfaceError
from partmesh.polymesh import MeshPartitionManager

from tests.common_meshes import (
    ASYMMETRIC_MSH,
    SINGLE_PARTITION_MSH,
    THREE_PARTITION_MSH,
    TWO_PARTITION_MSH,
    load_core_mesh,
)


class TestMeshPartitionManager(unittest.TestCase):
    def setUp(self):
        """
        Sets up the three partition strip for testing.
        """
        self.global_mesh = load_core_mesh(THREE_PARTITION_MSH)
        self.local_meshes = MeshPartitionManager.create_local_meshes(
            global_mesh=self.global_mesh,
            nodal_ordering=NodalOrdering.LOCAL,
        )

    def test_create_local_meshes(self):
        """
        Tests that every partition is extracted, in ascending order.
        """
        self.assertEqual(len(self.local_meshes), 3)
        self.assertEqual([m.partition for m in self.local_meshes], [1, 2, 3])

        total_elements = sum(m.n_elements for m in self.local_meshes)
        self.assertEqual(total_elements, self.global_mesh.num_elements)

    def test_every_element_has_one_owner(self):
        owned = sorted(
            e.id
            for m in self.local_meshes
            for elements in m.mesh.values()
            for e in elements
        )
        self.assertEqual(owned, [1, 2, 3])

    def test_interfaces_are_shared(self):
        """All local meshes refer to one interface numbering."""
        first, middle, last = self.local_meshes
        self.assertIs(first.interfaces[0], middle.interfaces[0])
        self.assertIs(middle.interfaces[1], last.interfaces[0])
        for local_mesh in self.local_meshes:
            self.assertEqual(local_mesh.num_interface_nodes, 4)

    def test_selected_partitions(self):
        local_meshes = MeshPartitionManager.create_local_meshes(
            self.global_mesh, partitions=[3, 1]
        )
        self.assertEqual([m.partition for m in local_meshes], [1, 3])

    def test_precomputed_interfaces_are_used(self):
        interfaces = MeshPartitionManager.compute_interfaces(self.global_mesh)
        local_meshes = MeshPartitionManager.create_local_meshes(
            self.global_mesh, interfaces=interfaces
        )
        self.assertIs(local_meshes[0].interfaces[0], interfaces.interfaces[0])

    def test_options_are_forwarded(self):
        local_meshes = MeshPartitionManager.create_local_meshes(
            load_core_mesh(TWO_PARTITION_MSH),
            nodal_ordering="global",
            indexing_base=IndexingBase.ZERO,
        )
        left = local_meshes[0]
        self.assertIs(left.indexing_base, IndexingBase.ZERO)
        np.testing.assert_array_equal(left.l2g_nodes, [0, 1, 3, 4, 6, 7])

    def test_single_partition_has_no_interfaces(self):
        global_mesh = load_core_mesh(SINGLE_PARTITION_MSH)
        numbering = MeshPartitionManager.compute_interfaces(global_mesh)
        self.assertEqual(numbering.interfaces, [])
        self.assertEqual(numbering.num_interface_nodes, 0)

        local_meshes = MeshPartitionManager.create_local_meshes(global_mesh)
        self.assertEqual(len(local_meshes), 1)
        self.assertEqual(local_meshes[0].n_elements, 6)

    def test_asymmetric_interface(self):
        global_mesh = load_core_mesh(ASYMMETRIC_MSH)
        with self.assertRaises(AsymmetricInterfaceError):
            MeshPartitionManager.create_local_meshes(global_mesh)

        with warnings.catch_warnings():
            warnings.simplefilter("ignore")
            local_meshes = MeshPartitionManager.create_local_meshes(
                global_mesh, strict=False
            )
        self.assertEqual(len(local_meshes), 2)
        self.assertEqual(local_meshes[0].interfaces, [])

    def test_verbose_prints_summaries(self):
        buffer = io.StringIO()
        with contextlib.redirect_stdout(buffer):
            MeshPartitionManager.create_local_meshes(self.global_mesh, verbose=True)
        output = buffer.getvalue()
        self.assertIn("Interface Summary", output)
        self.assertIn("Total interface nodes: 4", output)
        self.assertIn("Partition 2: 1 elements", output)


if __name__ == "__main__":
    unittest.main()
