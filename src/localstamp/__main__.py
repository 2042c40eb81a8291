"""Print the current local timestamp.

Usage:
    python -m localstamp [--offset -08:00] [--show-errors]
"""

import argparse
import sys
from typing import List, Optional, Sequence

from .api import get_local_timestamp, try_set_global_offset_from_str
from .errors import LocalStampError
from .logging_config import configure_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="localstamp", description=__doc__.splitlines()[0])
    parser.add_argument("--offset", help="explicit UTC offset, [+|-]HH[:]MM")
    parser.add_argument(
        "--show-errors",
        action="store_true",
        help="print soft errors hit while resolving the offset to stderr",
    )
    parser.add_argument("--log-level", help="overrides LOCALSTAMP_LOG_LEVEL")
    return parser


def join_offset_value(argv: Sequence[str]) -> List[str]:
    """Rewrite ``--offset VALUE`` as ``--offset=VALUE``.

    argparse treats ``-08:00`` as an option string, so a negative offset
    given as a separate argument would otherwise be rejected.
    """
    joined: List[str] = []
    items = iter(argv)
    for item in items:
        if item == "--offset":
            value = next(items, None)
            joined.append(item if value is None else f"{item}={value}")
        else:
            joined.append(item)
    return joined


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the command line interface and return the exit status."""
    if argv is None:
        argv = sys.argv[1:]
    args = build_parser().parse_args(join_offset_value(argv))
    configure_logging(args.log_level)

    try:
        if args.offset:
            try_set_global_offset_from_str(args.offset)
        timestamp, errors = get_local_timestamp()
    except LocalStampError as exc:
        print(f"error: {exc.message}", file=sys.stderr)
        return 1

    print(timestamp)
    if args.show_errors:
        for err in errors:
            print(f"warning: [{err.code.value}] {err.message}", file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())
