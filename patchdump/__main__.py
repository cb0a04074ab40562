"""Command line entry point: diff two directory trees of documents.

    python -m patchdump PRE_DIR POST_DIR -o dump

Each tree is laid out as ``<domain>/<path>``.
"""

from __future__ import annotations

import argparse
import logging
import sys

from patchdump.documents import DirectoryDocumentCollection
from patchdump.dumper import PatchDumper
from patchdump.errors import DumpRootError
from patchdump.settings import load_settings


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="patchdump",
        description="Dump and diff a document collection before and after patching",
    )
    parser.add_argument("pre_dir", help="directory holding the pre-patch documents")
    parser.add_argument("post_dir", help="directory holding the post-patch documents")
    parser.add_argument("-o", "--output", dest="output_root", default=None,
                        help="dump directory (wiped on every run)")
    parser.add_argument("--context", dest="context_lines", type=int, default=None,
                        help="context lines around each hunk")
    parser.add_argument("--extension", default=None,
                        help="structured document extension (default .json)")
    parser.add_argument("--header-prefix", default=None,
                        help="prefix of the paths in diff headers")
    parser.add_argument("--settings", default=None,
                        help="INI file with a [dump] section")
    parser.add_argument("-v", "--verbose", action="store_true", help="log per-document failures")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        settings = load_settings(
            args.settings,
            output_root=args.output_root,
            context_lines=args.context_lines,
            extension=args.extension,
            header_prefix=args.header_prefix,
        )
    except ValueError as e:
        print(f"patchdump: {e}", file=sys.stderr)
        return 2

    dumper = PatchDumper(settings)
    dumper.capture_pre_patch(DirectoryDocumentCollection(args.pre_dir))
    try:
        summary = dumper.capture_post_patch_and_diff(DirectoryDocumentCollection(args.post_dir))
    except DumpRootError as e:
        logging.getLogger("patchdump").error("%s", e)
        return 1

    print(f"{summary.modified} modified, {summary.added} new, "
          f"{summary.deleted} deleted, {summary.unchanged} unchanged")
    return 0


if __name__ == "__main__":
    sys.exit(main())
