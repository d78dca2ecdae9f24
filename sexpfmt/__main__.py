"""CLI: python -m sexpfmt [options] <path>..."""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from .buffer import format_text
from .config import FormatConfig, load_config
from .files import DEFAULT_PATTERN, format_directory, format_file
from .types import FormatMode


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sexpfmt",
        description="Re-break S-expressions across lines using per-symbol skip counts.",
    )
    parser.add_argument("paths", nargs="+", help="files or directories to format, '-' for stdin")
    parser.add_argument("--one-line", action="store_true", help="collapse every form onto one line")
    parser.add_argument("--check", action="store_true", help="report files that would change, write nothing")
    parser.add_argument("--stdout", action="store_true", help="print formatted files instead of rewriting them")
    parser.add_argument("--config", help="JSON config file")
    parser.add_argument("--no-indent", action="store_true", help="skip the indentation pass")
    parser.add_argument("--pattern", default=DEFAULT_PATTERN, help="file glob used for directories (default: %(default)s)")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_config(args.config) if args.config else FormatConfig(indent=True)
    except (OSError, ValueError) as exc:
        print(f"error: cannot load config {args.config}: {exc}", file=sys.stderr)
        return 2
    if args.no_indent:
        config.indent = False
    mode = FormatMode.ONE_LINE if args.one_line else FormatMode.MULTI_LINE

    status = 0
    for name in args.paths:
        try:
            if name == "-":
                sys.stdout.write(format_text(sys.stdin.read(), config, mode))
                continue
            path = Path(name)
            if args.stdout:
                if path.is_dir():
                    print(f"error: {name}: --stdout takes files, not directories", file=sys.stderr)
                    status = 2
                    continue
                sys.stdout.write(format_text(path.read_text(encoding="utf-8"), config, mode))
                continue
            if path.is_dir():
                changed = format_directory(path, config, mode, pattern=args.pattern, write=not args.check)
            else:
                changed = [path] if format_file(path, config, mode, write=not args.check) else []
        except (OSError, SyntaxError) as exc:
            print(f"error: {name}: {exc}", file=sys.stderr)
            status = 2
            continue
        if args.check:
            for path in changed:
                print(f"would reformat {path}")
            if changed:
                status = max(status, 1)
    return status


if __name__ == "__main__":
    sys.exit(main())
