# -*- coding: utf-8 -*-
"""
Exceptions raised while reading, assembling and partitioning a mesh.

Every error is fatal for the current run. The messages carry enough context
(file name, section, element or node id) to locate the problem in the input.
"""


class PartMeshError(Exception):
    """Base class for all errors raised by partmesh."""


class MeshFileError(PartMeshError, OSError):
    """The mesh file could not be opened, or an output file could not be written."""


class MalformedInputError(PartMeshError, ValueError):
    """The input violates the record grammar (bad token, truncation, count mismatch)."""


class UnsupportedFormatVersionError(PartMeshError):
    """The declared MeshFormat version or file type is not supported."""


class UnsupportedElementTypeError(PartMeshError):
    """An element type id is not in the element type catalog."""

    def __init__(self, element_type: int, context: str = ""):
        self.element_type = element_type
        message = f"The element type id {element_type} is not supported"
        if context:
            message = f"{message} ({context})"
        super().__init__(message)


class UnknownPhysicalGroupError(PartMeshError, KeyError):
    """An element refers to a physical group id missing from $PhysicalNames."""

    def __init__(self, physical_id: int, element_id: int):
        self.physical_id = physical_id
        self.element_id = element_id
        super().__init__(
            f"Element {element_id} refers to physical group {physical_id}, "
            "which is not declared in $PhysicalNames"
        )

    def __str__(self) -> str:
        # KeyError would otherwise quote the message
        return str(self.args[0])


class AsymmetricInterfaceError(PartMeshError):
    """An interface between two partitions is only seen from one side."""

    def __init__(self, owner: int, sharer: int):
        self.owner = owner
        self.sharer = sharer
        super().__init__(
            f"Partition {owner} shares elements with partition {sharer}, but "
            f"partition {sharer} shares none with partition {owner}. "
            "The partitioned mesh is inconsistent."
        )
