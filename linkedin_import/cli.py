from __future__ import annotations

import argparse
import asyncio
import json
import logging
from pathlib import Path

from . import config
from .handoff import MemoryStore, store_handoff
from .importer import import_linkedin


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Import LinkedIn data into resume JSON."
    )
    parser.add_argument(
        "file",
        type=Path,
        nargs="?",
        default=None,
        help="LinkedIn data export (.zip), profile PDF (.pdf) or resume JSON (.json)",
    )
    parser.add_argument("--url", default=None, help="LinkedIn profile URL to import")
    parser.add_argument(
        "--handoff",
        type=Path,
        default=None,
        help="JSON file holding data left by the LinkedIn OAuth redirect.",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Output JSON file path (prints to stdout when omitted)",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log debug details to stderr"
    )
    return parser


def configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else getattr(logging, config.LOG_LEVEL, logging.INFO)
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def main(argv: list[str] | None = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    store = MemoryStore()
    if args.handoff:
        try:
            payload = args.handoff.read_text(encoding="utf-8")
        except OSError as exc:
            parser.error(f"cannot read hand-off file {args.handoff}: {exc.strerror or exc}")
        store_handoff(store, payload)

    result = asyncio.run(import_linkedin(file=args.file, url=args.url, store=store))
    output = json.dumps(result.to_dict(), indent=2, ensure_ascii=False)
    if args.output:
        args.output.write_text(output, encoding="utf-8")
    else:
        print(output)
    return 0 if result.success else 1


if __name__ == "__main__":
    raise SystemExit(main())
