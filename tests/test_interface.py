import unittest
import warnings

import numpy as np

from partmesh.exceptions import AsymmetricInterfaceError
from partmesh.polymesh.interface import (
    PartitionPair,
    accumulate_interfaces,
    build_interfaces,
    number_interfaces,
    reconcile_interfaces,
)

from tests.common_meshes import (
    ASYMMETRIC_MSH,
    SINGLE_PARTITION_MSH,
    THREE_PARTITION_MSH,
    TWO_PARTITION_MSH,
    load_core_mesh,
)


class TestAccumulateInterfaces(unittest.TestCase):

    def test_one_sided_sets(self):
        """Each owner/sharer pair collects the nodes of its shared elements."""
        mesh = load_core_mesh(TWO_PARTITION_MSH)
        one_sided = accumulate_interfaces(mesh.mesh)
        self.assertEqual(
            one_sided,
            {
                PartitionPair(1, 2): {1, 2, 4, 5, 7, 8},
                PartitionPair(2, 1): {2, 3, 5, 6, 8, 9},
            },
        )

    def test_element_with_two_ghosts(self):
        mesh = load_core_mesh(THREE_PARTITION_MSH)
        one_sided = accumulate_interfaces(mesh.mesh)
        self.assertEqual(one_sided[PartitionPair(2, 1)], {2, 3, 6, 7})
        self.assertEqual(one_sided[PartitionPair(2, 3)], {2, 3, 6, 7})
        self.assertEqual(len(one_sided), 4)

    def test_unpartitioned_mesh_has_no_interfaces(self):
        mesh = load_core_mesh(SINGLE_PARTITION_MSH)
        self.assertEqual(accumulate_interfaces(mesh.mesh), {})


class TestReconcileInterfaces(unittest.TestCase):

    def test_intersection_of_both_sides(self):
        """Only nodes seen from both partitions are interface nodes."""
        one_sided = {
            PartitionPair(1, 2): {1, 2, 4, 5, 7, 8},
            PartitionPair(2, 1): {2, 3, 5, 6, 8, 9},
        }
        agreed = reconcile_interfaces(one_sided)
        self.assertEqual(list(agreed), [(1, 2)])
        np.testing.assert_array_equal(agreed[(1, 2)], [2, 5, 8])

    def test_agreed_set_is_subset_of_both_sides(self):
        mesh = load_core_mesh(THREE_PARTITION_MSH)
        one_sided = accumulate_interfaces(mesh.mesh)
        for (a, b), nodes in reconcile_interfaces(one_sided).items():
            self.assertLess(a, b)
            self.assertTrue(set(nodes) <= one_sided[PartitionPair(a, b)])
            self.assertTrue(set(nodes) <= one_sided[PartitionPair(b, a)])

    def test_asymmetric_pair_raises_by_default(self):
        one_sided = {PartitionPair(1, 2): {1, 2}, PartitionPair(1, 3): {2, 3}, PartitionPair(3, 1): {3}}
        with self.assertRaises(AsymmetricInterfaceError) as ctx:
            reconcile_interfaces(one_sided)
        self.assertEqual((ctx.exception.owner, ctx.exception.sharer), (1, 2))

    def test_asymmetric_pair_is_excluded_when_lenient(self):
        one_sided = {PartitionPair(1, 2): {1, 2}, PartitionPair(1, 3): {2, 3}, PartitionPair(3, 1): {3}}
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            agreed = reconcile_interfaces(one_sided, strict=False)
        self.assertEqual(len(caught), 1)
        self.assertEqual(list(agreed), [(1, 3)])
        np.testing.assert_array_equal(agreed[(1, 3)], [3])


class TestNumberInterfaces(unittest.TestCase):

    def test_numbering_is_contiguous_across_pairs(self):
        agreed = {
            (2, 3): np.array([3, 7]),
            (1, 2): np.array([2, 6]),
            (1, 4): np.array([1, 10, 11]),
        }
        interfaces, total = number_interfaces(agreed)
        self.assertEqual(
            [(i.master, i.slave) for i in interfaces], [(1, 2), (1, 4), (2, 3)]
        )
        self.assertEqual([i.global_start_id for i in interfaces], [0, 2, 5])
        self.assertEqual(total, 7)

        all_indices = np.concatenate([i.global_indices for i in interfaces])
        np.testing.assert_array_equal(all_indices, np.arange(total))

    def test_empty_input(self):
        interfaces, total = number_interfaces({})
        self.assertEqual(interfaces, [])
        self.assertEqual(total, 0)


class TestBuildInterfaces(unittest.TestCase):

    def test_two_partitions(self):
        """Two partitions sharing three nodes give one pair numbered 0..2."""
        numbering = build_interfaces(load_core_mesh(TWO_PARTITION_MSH).mesh)
        self.assertEqual(len(numbering.interfaces), 1)
        interface = numbering.interfaces[0]
        self.assertEqual((interface.master, interface.slave), (1, 2))
        np.testing.assert_array_equal(interface.nodes, [2, 5, 8])
        np.testing.assert_array_equal(interface.global_indices, [0, 1, 2])
        self.assertEqual(numbering.num_interface_nodes, 3)

    def test_three_partitions(self):
        numbering = build_interfaces(load_core_mesh(THREE_PARTITION_MSH).mesh)
        self.assertEqual(numbering.num_interface_nodes, 4)
        first, second = numbering.interfaces
        np.testing.assert_array_equal(first.nodes, [2, 6])
        np.testing.assert_array_equal(second.nodes, [3, 7])
        self.assertEqual(second.global_start_id, 2)

        self.assertEqual(len(numbering.for_partition(1)), 1)
        self.assertEqual(len(numbering.for_partition(2)), 2)
        self.assertEqual(first.sign(1), 1)
        self.assertEqual(first.sign(2), -1)
        self.assertEqual(second.sign(2), 1)
        self.assertEqual(second.partner(2), 3)
        with self.assertRaises(ValueError):
            first.sign(3)

    def test_asymmetric_mesh(self):
        mesh = load_core_mesh(ASYMMETRIC_MSH)
        with self.assertRaises(AsymmetricInterfaceError):
            build_interfaces(mesh.mesh)

        with warnings.catch_warnings():
            warnings.simplefilter("ignore")
            numbering = build_interfaces(mesh.mesh, strict=False)
        self.assertEqual(numbering.interfaces, [])
        self.assertEqual(numbering.num_interface_nodes, 0)

    def test_numbering_is_deterministic(self):
        first = build_interfaces(load_core_mesh(THREE_PARTITION_MSH).mesh)
        second = build_interfaces(load_core_mesh(THREE_PARTITION_MSH).mesh)
        for a, b in zip(first.interfaces, second.interfaces):
            np.testing.assert_array_equal(a.nodes, b.nodes)
            self.assertEqual(a.global_start_id, b.global_start_id)


if __name__ == "__main__":
    unittest.main()
