#!/usr/bin/env python3
"""Report the adjustment values recorded in descriptor dumps.

Each positional argument is a layer's descriptor dump (XML).  The dumps
are loaded into an in-memory host, and every layer is read through the
same getters tooling uses against a live host, so the report shows what
a given host version would have returned.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
import sys
from typing import Sequence

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from psadj.config import DEFAULT_CONFIG, load_config  # noqa: E402
from psadj.dump import describe, load_descriptor_file  # noqa: E402
from psadj.extract import AdjustmentReader  # noqa: E402
from psadj.host import SnapshotHost  # noqa: E402


SCALARS = ("threshold", "vibrance", "saturation", "brightness", "contrast")


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Inspect adjustment values in recorded layer descriptor dumps.",
    )
    parser.add_argument("dumps", nargs="+", type=Path, help="Layer descriptor XML dumps")
    parser.add_argument(
        "--host-version",
        default="24.6.0",
        help="Host version string used to pick the extraction path (default: 24.6.0)",
    )
    parser.add_argument("--config", type=Path, default=None, help="JSON extraction config")
    parser.add_argument(
        "--keys",
        action="store_true",
        help="Also list every descriptor key with its value type",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log lookup errors")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = _build_arg_parser().parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        config = load_config(args.config) if args.config else DEFAULT_CONFIG
        layers = {path.stem: load_descriptor_file(path) for path in args.dumps}
    except (OSError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    host = SnapshotHost(layers, version=args.host_version)
    reader = AdjustmentReader(host, config)
    print(f"host {args.host_version}: {reader.resolve_path().value} path")

    for name, descriptor in layers.items():
        print(f"[{name}]")
        if args.keys:
            for line in describe(descriptor, indent=1):
                print(line)
        for prop in SCALARS:
            result = reader.read_property(name, prop)
            shown = "-" if result.value is None else str(result.value)
            print(f"  {prop:<10} {shown}")
        record = reader.get_adjustments(name)
        print(f"  record     {record.as_dict() if record is not None else 'none'}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
