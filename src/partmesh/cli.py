# -*- coding: utf-8 -*-
"""Command line conversion of a partitioned Gmsh mesh to per-partition JSON files."""

from __future__ import annotations

import argparse
import sys

from .config import DistributedMethod, IndexingBase, NodalOrdering
from .exceptions import PartMeshError
from .reader import MeshReader


def _generate_parser() -> argparse.ArgumentParser:
    """Returns a parser for command line arguments."""
    parser = argparse.ArgumentParser(
        prog="partmesh",
        description="Split a partitioned Gmsh .msh file into one mesh file per partition.",
    )
    parser.add_argument("infile", type=str, help="Gmsh ASCII file (MSH 2.2).")
    parser.add_argument(
        "-o",
        "--output-dir",
        type=str,
        default=None,
        help="Directory for the output files. Defaults to the input file directory.",
    )
    parser.add_argument(
        "--ordering",
        choices=[m.value for m in NodalOrdering],
        default=NodalOrdering.GLOBAL.value,
        help="Keep global node ids in the connectivity or renumber them locally.",
    )
    parser.add_argument(
        "--base",
        type=int,
        choices=[m.value for m in IndexingBase],
        default=IndexingBase.ONE.value,
        help="Whether written ids start at 0 or 1.",
    )
    parser.add_argument(
        "--method",
        choices=[m.value for m in DistributedMethod],
        default=DistributedMethod.NONE.value,
        help="Interface coupling convention recorded for the solver.",
    )
    parser.add_argument(
        "--no-indices",
        action="store_true",
        help="Do not write the original node and element ids.",
    )
    parser.add_argument(
        "--lenient",
        action="store_true",
        help="Warn about and skip interfaces seen from one partition only.",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Whether or not to show information on stdout.",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """
    Runs the conversion.

    Args:
        argv: Command line options, defaults to `sys.argv[1:]`.

    Returns:
        The process exit status.
    """
    args = _generate_parser().parse_args(argv)

    try:
        reader = MeshReader(
            args.infile,
            nodal_ordering=args.ordering,
            indexing_base=args.base,
            distributed_method=args.method,
            strict=not args.lenient,
            verbose=not args.quiet,
        )
        reader.write(args.output_dir, print_indices=not args.no_indices)
    except PartMeshError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    if not args.quiet:
        print("Done!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
