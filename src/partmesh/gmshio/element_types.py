# -*- coding: utf-8 -*-
"""
Catalog of the Gmsh element types understood by the reader.

Gmsh identifies every element family by an integer type id. The ASCII format
does not store the number of nodes of an element, so the parser looks it up
here to know how many connectivity entries follow the tags.
"""

from enum import IntEnum
from typing import Dict

from ..exceptions import UnsupportedElementTypeError


class ElementType(IntEnum):
    """Gmsh element numbering scheme."""

    # Linear elements
    LINE2 = 1
    TRIANGLE3 = 2
    QUADRILATERAL4 = 3
    TETRAHEDRON4 = 4
    HEXAHEDRON8 = 5
    PRISM6 = 6
    PYRAMID5 = 7
    # Quadratic elements
    LINE3 = 8
    TRIANGLE6 = 9
    QUADRILATERAL9 = 10  # 4 vertex, 4 edge and 1 face node
    TETRAHEDRON10 = 11
    HEXAHEDRON27 = 12
    PRISM18 = 13
    PYRAMID14 = 14
    POINT = 15
    QUADRILATERAL8 = 16
    HEXAHEDRON20 = 17
    PRISM15 = 18
    PYRAMID13 = 19
    # Higher order elements
    TRIANGLE9 = 20
    TRIANGLE10 = 21
    TRIANGLE12 = 22
    TRIANGLE15 = 23
    TRIANGLE15_IC = 24  # incomplete 15 node triangle
    TRIANGLE21 = 25
    EDGE4 = 26
    EDGE5 = 27
    EDGE6 = 28
    TETRAHEDRON20 = 29
    TETRAHEDRON35 = 30
    TETRAHEDRON56 = 31
    HEXAHEDRON64 = 92
    HEXAHEDRON125 = 93


NODES_PER_ELEMENT: Dict[int, int] = {
    ElementType.LINE2: 2,
    ElementType.TRIANGLE3: 3,
    ElementType.QUADRILATERAL4: 4,
    ElementType.TETRAHEDRON4: 4,
    ElementType.HEXAHEDRON8: 8,
    ElementType.PRISM6: 6,
    ElementType.PYRAMID5: 5,
    ElementType.LINE3: 3,
    ElementType.TRIANGLE6: 6,
    ElementType.QUADRILATERAL9: 9,
    ElementType.TETRAHEDRON10: 10,
    ElementType.HEXAHEDRON27: 27,
    ElementType.PRISM18: 18,
    ElementType.PYRAMID14: 14,
    ElementType.POINT: 1,
    ElementType.QUADRILATERAL8: 8,
    ElementType.HEXAHEDRON20: 20,
    ElementType.PRISM15: 15,
    ElementType.PYRAMID13: 13,
    ElementType.TRIANGLE9: 9,
    ElementType.TRIANGLE10: 10,
    ElementType.TRIANGLE12: 12,
    ElementType.TRIANGLE15: 15,
    ElementType.TRIANGLE15_IC: 15,
    ElementType.TRIANGLE21: 21,
    ElementType.EDGE4: 4,
    ElementType.EDGE5: 5,
    ElementType.EDGE6: 6,
    ElementType.TETRAHEDRON20: 20,
    ElementType.TETRAHEDRON35: 35,
    ElementType.TETRAHEDRON56: 56,
    ElementType.HEXAHEDRON64: 64,
    ElementType.HEXAHEDRON125: 125,
}


def node_count(element_type: int) -> int:
    """
    Returns the number of nodes of a Gmsh element type.

    Args:
        element_type: The Gmsh element type id.

    Returns:
        The number of connectivity entries of an element of this type.

    Raises:
        UnsupportedElementTypeError: If the type id is not in the catalog.
    """
    try:
        return NODES_PER_ELEMENT[element_type]
    except KeyError:
        raise UnsupportedElementTypeError(element_type) from None


def element_name(element_type: int) -> str:
    """Returns the catalog name of an element type, e.g. 'TRIANGLE3'."""
    try:
        return ElementType(element_type).name
    except ValueError:
        raise UnsupportedElementTypeError(element_type) from None
