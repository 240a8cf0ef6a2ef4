"""Command line options for assembling LRIT files from a packet stream."""

import argparse
import re
import sys
from dataclasses import dataclass, field
from importlib import metadata
from typing import List, Set

_INTEGER = re.compile(r"\s*([+-]?\d+)")


@dataclass
class LritOptions:
    nanomsg: str = ""
    files: List[str] = field(default_factory=list)
    vcids: Set[int] = field(default_factory=set)
    dryrun: bool = False
    out: str = "."
    images: bool = False
    messages: bool = False
    text: bool = False
    dcs: bool = False
    emwin: bool = False


class _Parser(argparse.ArgumentParser):
    def error(self, message):
        print(f"Invalid option: {message}", file=sys.stderr)
        raise SystemExit(1)


def _version() -> str:
    try:
        return metadata.version("lritkit")
    except metadata.PackageNotFoundError:
        return "unknown"


def _leading_int(text: str) -> int:
    match = _INTEGER.match(text)
    if match is None:
        raise argparse.ArgumentTypeError(f"invalid VCID: {text!r}")
    return int(match.group(1))


def _parser() -> argparse.ArgumentParser:
    parser = _Parser(
        description="Assemble LRIT files from packet stream.",
        epilog="If a nanomsg address to subscribe to is specified, FILE arguments are not used.",
    )
    parser.add_argument("--subscribe", metavar="ADDR", help="Address of nanomsg publisher")
    parser.add_argument("-n", "--dry-run", dest="dryrun", action="store_true",
                        help="Don't write files")
    parser.add_argument("--out", metavar="DIR", help="Output directory")
    filtering = parser.add_argument_group("filtering")
    filtering.add_argument("--all", action="store_true", help="Include everything")
    filtering.add_argument("--images", action="store_true", help="Include image files")
    filtering.add_argument("--messages", action="store_true", help="Include message files")
    filtering.add_argument("--text", action="store_true", help="Include text files")
    filtering.add_argument("--dcs", action="store_true", help="Include DCS files")
    filtering.add_argument("--emwin", action="store_true", help="Include EMWIN files")
    filtering.add_argument("--vcid", action="append", type=_leading_int, default=[],
                           help="Process only specified VCIDs")
    parser.add_argument("--version", action="version", version=f"%(prog)s {_version()}")
    parser.add_argument("files", nargs="*", metavar="FILE")
    return parser


def parse_options(argv=None) -> LritOptions:
    args = _parser().parse_intermixed_args(argv)
    return LritOptions(
        nanomsg=args.subscribe if args.subscribe is not None else "",
        files=list(args.files),
        vcids=set(args.vcid),
        dryrun=args.dryrun,
        out=args.out if args.out is not None else ".",
        images=args.all or args.images,
        messages=args.all or args.messages,
        text=args.all or args.text,
        dcs=args.all or args.dcs,
        emwin=args.all or args.emwin,
    )