"""Command line options for extracting EMWIN data from a packet stream."""

import argparse
import enum
import sys
from dataclasses import dataclass, field
from importlib import metadata
from typing import List


class Mode(enum.Enum):
    RAW = "raw"
    QBT = "qbt"
    EMWIN = "emwin"


@dataclass
class EmwinOptions:
    nanomsg: str = ""
    files: List[str] = field(default_factory=list)
    mode: Mode = Mode.RAW
    out: str = "."


class _Parser(argparse.ArgumentParser):
    def error(self, message):
        print(f"Invalid option: {message}", file=sys.stderr)
        raise SystemExit(1)


def _version() -> str:
    try:
        return metadata.version("lritkit")
    except metadata.PackageNotFoundError:
        return "unknown"


def _parser() -> argparse.ArgumentParser:
    parser = _Parser(
        description="Extract EMWIN data from packet stream.",
        epilog="If a nanomsg address to subscribe to is specified, FILE arguments are not used.",
    )
    parser.add_argument("--subscribe", metavar="ADDR", help="Address of nanomsg publisher")
    parser.add_argument("--mode", action="append", default=[],
                        help="One of raw, qbt, or emwin (default: raw)")
    parser.add_argument("--out", metavar="DIR", help="Output directory")
    parser.add_argument("--version", action="version", version=f"%(prog)s {_version()}")
    parser.add_argument("files", nargs="*", metavar="FILE")
    return parser


def parse_options(argv=None) -> EmwinOptions:
    args = _parser().parse_intermixed_args(argv)
    opts = EmwinOptions(files=list(args.files))
    if args.subscribe is not None:
        opts.nanomsg = args.subscribe
    if args.out is not None:
        opts.out = args.out
    # Unknown modes are ignored; the last recognised one wins.
    for value in args.mode:
        try:
            opts.mode = Mode(value)
        except ValueError:
            pass
    return opts