# -*- coding: utf-8 -*-
"""
Parser for the Gmsh MSH 2.x ASCII format.

The file is a sequence of sections delimited by `$Name` / `$EndName` lines.
Four sections are read:

    $MeshFormat     version file-type data-size
    $PhysicalNames  count, then `dimension physical-id "name"` lines
    $Nodes          count, then `id x y z` lines
    $Elements       count, then `id type num-tags tag... node...` lines

Any other section is skipped. `$MeshFormat` must come before the sections
whose layout depends on the version.
"""

import math
import os
import warnings
from typing import IO, Iterator, List, Optional, Tuple, Union

from ..exceptions import (
    MalformedInputError,
    MeshFileError,
    UnsupportedElementTypeError,
    UnsupportedFormatVersionError,
)
from .element_types import node_count
from .records import ElementData, NodeData, RawMeshData

MIN_SUPPORTED_VERSION = 2.2
MAX_SUPPORTED_MAJOR_VERSION = 2

_VERSIONED_SECTIONS = ("PhysicalNames", "Nodes", "Elements")


class MshParser:
    """
    Single pass reader turning an MSH text stream into `RawMeshData`.

    Attributes:
        source (str): Name of the input used in error messages.
        data (RawMeshData): The collections filled by `parse`.
    """

    def __init__(self, stream: IO[str], source: str = "<stream>") -> None:
        self.source = source
        self.data = RawMeshData()
        self._lines: Iterator[Tuple[int, str]] = enumerate(stream, start=1)
        self._line_no = 0
        self._seen_sections: List[str] = []

    def parse(self) -> RawMeshData:
        """
        Reads the whole stream.

        Returns:
            The parsed physical groups, nodes and raw elements.

        Raises:
            MalformedInputError: On any structural violation of the format.
            UnsupportedFormatVersionError: If the version or file type is not
                supported.
            UnsupportedElementTypeError: If an element type is unknown.
        """
        while True:
            line = self._next_line(required=False)
            if line is None:
                break
            if not line.startswith("$"):
                self._fail(f"expected a section header, found '{line}'")

            section = line[1:]
            if section.startswith("End"):
                self._fail(f"'{line}' without a matching opening section")
            if section in self._seen_sections and section in (
                "MeshFormat",
                "Nodes",
                "Elements",
            ):
                self._fail(f"section ${section} appears more than once")
            if section in _VERSIONED_SECTIONS and "MeshFormat" not in self._seen_sections:
                self._fail(f"section ${section} appears before $MeshFormat")
            self._seen_sections.append(section)

            if section == "MeshFormat":
                self._read_mesh_format()
            elif section == "PhysicalNames":
                self._read_physical_names()
            elif section == "Nodes":
                self._read_nodes()
            elif section == "Elements":
                self._read_elements()
            else:
                self._skip_section(section)

        if "MeshFormat" not in self._seen_sections:
            raise MalformedInputError(f"{self.source}: no $MeshFormat section found")
        return self.data

    # ------------------------------------------------------------------
    # Line handling
    # ------------------------------------------------------------------

    def _next_line(self, section: str = "", required: bool = True) -> Optional[str]:
        """Returns the next non-blank stripped line, or None at end of file."""
        for line_no, raw in self._lines:
            self._line_no = line_no
            line = raw.strip()
            if line:
                return line
        if required:
            self._fail(f"unexpected end of file in ${section}")
        return None

    def _fail(self, message: str) -> None:
        raise MalformedInputError(f"{self.source}, line {self._line_no}: {message}")

    def _expect_end(self, section: str) -> None:
        line = self._next_line(section)
        if line != f"$End{section}":
            self._fail(f"expected $End{section}, found '{line}'")

    def _read_count(self, section: str) -> int:
        line = self._next_line(section)
        try:
            count = int(line)
        except ValueError:
            self._fail(f"expected the number of entries of ${section}, found '{line}'")
        if count < 0:
            self._fail(f"negative entry count {count} in ${section}")
        return count

    def _read_entry(self, section: str, count: int, index: int) -> str:
        line = self._next_line(section)
        if line.startswith("$"):
            self._fail(
                f"${section} declares {count} entries but only {index} were found"
            )
        return line

    def _to_ints(self, tokens: List[str], section: str) -> List[int]:
        try:
            return [int(t) for t in tokens]
        except ValueError:
            self._fail(f"non-integer value in ${section} record: {' '.join(tokens)}")

    # ------------------------------------------------------------------
    # Sections
    # ------------------------------------------------------------------

    def _read_mesh_format(self) -> None:
        tokens = self._next_line("MeshFormat").split()
        if len(tokens) != 3:
            self._fail(
                "expected 'version file-type data-size' in $MeshFormat, "
                f"found '{' '.join(tokens)}'"
            )
        try:
            version = float(tokens[0])
            file_type = int(tokens[1])
            data_size = int(tokens[2])
        except ValueError:
            self._fail(f"invalid $MeshFormat record '{' '.join(tokens)}'")
        if not math.isfinite(version):
            self._fail(f"invalid MSH version '{tokens[0]}' in $MeshFormat")

        if version < MIN_SUPPORTED_VERSION or int(version) > MAX_SUPPORTED_MAJOR_VERSION:
            raise UnsupportedFormatVersionError(
                f"{self.source}: MSH version {tokens[0]} is not supported, "
                f"a 2.x version of at least {MIN_SUPPORTED_VERSION} is required"
            )
        if file_type != 0:
            raise UnsupportedFormatVersionError(
                f"{self.source}: binary MSH files are not supported"
            )

        self.data.version = version
        self.data.file_type = file_type
        self.data.data_size = data_size
        self._expect_end("MeshFormat")

    def _read_physical_names(self) -> None:
        count = self._read_count("PhysicalNames")
        for i in range(count):
            tokens = self._read_entry("PhysicalNames", count, i).split(maxsplit=2)
            if len(tokens) != 3:
                self._fail(f"truncated $PhysicalNames record '{' '.join(tokens)}'")
            dimension, physical_id = self._to_ints(tokens[:2], "PhysicalNames")
            name = tokens[2].strip().strip('"')

            if physical_id in self.data.physical_groups:
                if self.data.physical_groups[physical_id] != name:
                    warnings.warn(
                        f"{self.source}: physical id {physical_id} is declared for both "
                        f"'{self.data.physical_groups[physical_id]}' and '{name}'; "
                        "keeping the first name"
                    )
                continue
            self.data.physical_groups[physical_id] = name
            self.data.physical_dimensions[physical_id] = dimension
        self._expect_end("PhysicalNames")

    def _read_nodes(self) -> None:
        count = self._read_count("Nodes")
        nodes: List[NodeData] = []
        for i in range(count):
            tokens = self._read_entry("Nodes", count, i).split()
            if len(tokens) != 4:
                self._fail(f"expected 'id x y z' in $Nodes, found '{' '.join(tokens)}'")
            try:
                node_id = int(tokens[0])
                coords = (float(tokens[1]), float(tokens[2]), float(tokens[3]))
            except ValueError:
                self._fail(f"invalid $Nodes record '{' '.join(tokens)}'")
            nodes.append(NodeData(node_id, coords))

        line = self._next_line("Nodes")
        if line != "$EndNodes":
            self._fail(f"$Nodes declares {count} entries but more were found")
        self.data.nodes = nodes

    def _read_elements(self) -> None:
        count = self._read_count("Elements")
        elements: List[ElementData] = []
        for i in range(count):
            tokens = self._read_entry("Elements", count, i).split()
            values = self._to_ints(tokens, "Elements")
            if len(values) < 3:
                self._fail(f"truncated $Elements record '{' '.join(tokens)}'")

            element_id, element_type, num_tags = values[:3]
            if num_tags < 0:
                self._fail(f"element {element_id} has a negative tag count")
            try:
                num_nodes = node_count(element_type)
            except UnsupportedElementTypeError:
                raise UnsupportedElementTypeError(
                    element_type,
                    f"{self.source}, line {self._line_no}, element {element_id}",
                ) from None

            expected = 3 + num_tags + num_nodes
            if len(values) != expected:
                self._fail(
                    f"element {element_id} of type {element_type} should have "
                    f"{num_tags} tags and {num_nodes} nodes, found "
                    f"{len(values) - 3} values"
                )
            tags = tuple(values[3 : 3 + num_tags])
            connectivity = tuple(values[3 + num_tags :])
            elements.append(ElementData(element_id, element_type, tags, connectivity))

        line = self._next_line("Elements")
        if line != "$EndElements":
            self._fail(f"$Elements declares {count} entries but more were found")
        self.data.elements = elements
        self.data.declared_element_count = count

    def _skip_section(self, section: str) -> None:
        end = f"$End{section}"
        while self._next_line(section) != end:
            pass


def parse_msh(source: Union[str, os.PathLike, IO[str]]) -> RawMeshData:
    """
    Parses an MSH 2.x ASCII file.

    Args:
        source: A path to the .msh file or an open text stream.

    Returns:
        The raw physical groups, nodes and elements of the file.

    Raises:
        MeshFileError: If the file cannot be opened or read.
        MalformedInputError: On a structural violation of the format.
        UnsupportedFormatVersionError: If the version is not supported.
        UnsupportedElementTypeError: If an element type is unknown.
    """
    if hasattr(source, "read"):
        name = getattr(source, "name", "<stream>")
        try:
            return MshParser(source, name).parse()
        except UnicodeDecodeError as e:
            raise MeshFileError(f"{name} is not a text file: {e}") from e

    path = os.fspath(source)
    try:
        with open(path, "r") as fh:
            return MshParser(fh, path).parse()
    except UnicodeDecodeError as e:
        raise MeshFileError(f"{path} is not a text file: {e}") from e
    except OSError as e:
        if isinstance(e, MeshFileError):
            raise
        raise MeshFileError(f"Could not read mesh file {path}: {e}") from e
