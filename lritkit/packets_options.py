"""Command line options for relaying and recording a packet stream."""

import argparse
import re
import sys
from dataclasses import dataclass, field
from importlib import metadata
from typing import List, Set

DEFAULT_FILENAME = "./packets-%FT%H:%M:00.raw"
_INTEGER = re.compile(r"\s*([+-]?\d+)")


@dataclass
class PacketsOptions:
    subscribe: str = ""
    publish: List[str] = field(default_factory=list)
    files: List[str] = field(default_factory=list)
    record: bool = False
    filename: str = DEFAULT_FILENAME
    vcids: Set[int] = field(default_factory=set)


class _Parser(argparse.ArgumentParser):
    def error(self, message):
        print(f"Invalid option: {message}", file=sys.stderr)
        raise SystemExit(1)


def _version() -> str:
    try:
        return metadata.version("lritkit")
    except metadata.PackageNotFoundError:
        return "unknown"


def _atoi(text: str) -> int:
    """Leading integer of ``text``, or 0 when there is none."""
    match = _INTEGER.match(text)
    return int(match.group(1)) if match else 0


def _parser() -> argparse.ArgumentParser:
    parser = _Parser(
        description="Relay and/or record packet stream.",
        epilog="If an address to subscribe to is specified, FILE arguments are ignored.",
    )
    parser.add_argument("--subscribe", metavar="ADDR", help="Address to subscribe to")
    parser.add_argument("--publish", metavar="ADDR", action="append", default=[],
                        help="Address to re-publish packets to")
    parser.add_argument("--vcid", action="append", type=_atoi, default=[],
                        help="Virtual Channel ID to filter (can be specified multiple times)")
    record = parser.add_argument_group("record packet stream")
    record.add_argument("--record", action="store_true",
                        help="Enable recording of packet stream to disk")
    record.add_argument("--filename", metavar="PATTERN",
                        help="Filename pattern for packet files (see strftime(3)) "
                             "(default: ./packets-%%FT%%H:%%M:00.raw)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {_version()}")
    parser.add_argument("files", nargs="*", metavar="FILE")
    return parser


def parse_options(argv=None) -> PacketsOptions:
    args = _parser().parse_intermixed_args(argv)
    return PacketsOptions(
        subscribe=args.subscribe if args.subscribe is not None else "",
        publish=list(args.publish),
        files=list(args.files),
        record=args.record,
        filename=args.filename if args.filename is not None else DEFAULT_FILENAME,
        vcids=set(args.vcid),
    )