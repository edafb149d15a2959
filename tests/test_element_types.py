import unittest

from partmesh.exceptions import UnsupportedElementTypeError
from partmesh.gmshio.element_types import (
    NODES_PER_ELEMENT,
    ElementType,
    element_name,
    node_count,
)


class TestElementTypes(unittest.TestCase):

    def test_linear_elements(self):
        """Test the node counts of the first order element families."""
        self.assertEqual(node_count(ElementType.LINE2), 2)
        self.assertEqual(node_count(2), 3)
        self.assertEqual(node_count(3), 4)
        self.assertEqual(node_count(4), 4)
        self.assertEqual(node_count(5), 8)
        self.assertEqual(node_count(6), 6)
        self.assertEqual(node_count(7), 5)
        self.assertEqual(node_count(15), 1)

    def test_higher_order_elements(self):
        """Test a sample of the higher order element families."""
        self.assertEqual(node_count(ElementType.TETRAHEDRON10), 10)
        self.assertEqual(node_count(ElementType.HEXAHEDRON27), 27)
        self.assertEqual(node_count(ElementType.TRIANGLE15_IC), 15)
        self.assertEqual(node_count(92), 64)
        self.assertEqual(node_count(93), 125)

    def test_catalog_covers_every_named_type(self):
        """Every enum member has a node count."""
        self.assertEqual(len(NODES_PER_ELEMENT), len(ElementType))
        for element_type in ElementType:
            self.assertGreater(node_count(element_type), 0)

    def test_unknown_type_raises(self):
        """Test that type ids outside the catalog raise."""
        for bad_type in (0, 32, 91, 94, -1):
            with self.assertRaises(UnsupportedElementTypeError) as ctx:
                node_count(bad_type)
            self.assertEqual(ctx.exception.element_type, bad_type)

    def test_element_name(self):
        self.assertEqual(element_name(2), "TRIANGLE3")
        self.assertEqual(element_name(93), "HEXAHEDRON125")
        with self.assertRaises(UnsupportedElementTypeError):
            element_name(50)


if __name__ == "__main__":
    unittest.main()
