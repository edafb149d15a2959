# -*- coding: utf-8 -*-
"""
Reading of Gmsh MSH 2.x ASCII files.

Key modules:
- element_types: Catalog of element type ids and their node counts.
- records:       Node and element records produced by the parser.
- parser:        Section-by-section reader of the MSH text format.
"""

from .element_types import ElementType, node_count, element_name
from .records import NodeData, ElementData, RawMeshData
from .parser import MshParser, parse_msh

__all__ = [
    "ElementType",
    "node_count",
    "element_name",
    "NodeData",
    "ElementData",
    "RawMeshData",
    "MshParser",
    "parse_msh",
]
