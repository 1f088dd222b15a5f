"""Command-line interface for restructuring guide bodies."""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from guidetiles.config import GUIDETILES_CONCURRENCY
from guidetiles.exceptions import GuidetilesError
from guidetiles.report import format_result, summarize_body
from guidetiles.restructure import restructure_guide, restructure_guides
from guidetiles.transform import TileOptions, restructure_body
from guidetiles.utils.logging_config import configure_logging, get_logger

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="guidetiles",
        description="Restructure markdown guide bodies into container-wrapped tiles.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    file_parser = subparsers.add_parser("file", help="Restructure a local markdown file")
    file_parser.add_argument("path", type=Path, help="Markdown file to read")
    target = file_parser.add_mutually_exclusive_group()
    target.add_argument("-o", "--output", type=Path, help="Write the result to this file")
    target.add_argument("--in-place", action="store_true", help="Overwrite the input file")
    _add_transform_arguments(file_parser)

    guide_parser = subparsers.add_parser("guide", help="Restructure one stored guide")
    guide_parser.add_argument("slug", help="Slug of the guide")
    guide_parser.add_argument("--dry-run", action="store_true", help="Print the new body without saving it")
    _add_transform_arguments(guide_parser)

    batch_parser = subparsers.add_parser("batch", help="Restructure many stored guides")
    batch_parser.add_argument("slugs", nargs="*", help="Slugs to process (default: select by --domain)")
    batch_parser.add_argument("--domain", help="Only guides whose domain contains this text")
    batch_parser.add_argument("--limit", type=int, help="Maximum number of guides to select")
    batch_parser.add_argument("--dry-run", action="store_true", help="Report changes without saving them")
    batch_parser.add_argument(
        "--concurrency",
        type=int,
        default=GUIDETILES_CONCURRENCY,
        help="Guides processed at the same time",
    )
    _add_transform_arguments(batch_parser)

    return parser


def _add_transform_arguments(parser: argparse.ArgumentParser) -> None:
    defaults = TileOptions()
    parser.add_argument("--budget", type=int, default=defaults.budget_chars, help="Tile size budget in characters")
    parser.add_argument("--sentence-threshold", type=int, default=defaults.sentence_threshold)
    parser.add_argument("--length-threshold", type=int, default=defaults.length_threshold)
    parser.add_argument("--no-normalize", action="store_true", help="Keep long paragraphs as prose")
    parser.add_argument("--keep-fillers", action="store_true", help="Keep linking words when making bullets")
    parser.add_argument(
        "--intro-heading-name",
        action="append",
        dest="intro_heading_names",
        help="Heading that always gets its own tile (repeatable)",
    )
    parser.add_argument("--intro-heading", help="Heading to add above untitled leading content")


def options_from_args(args: argparse.Namespace) -> TileOptions:
    defaults = TileOptions()
    return TileOptions(
        budget_chars=args.budget,
        sentence_threshold=args.sentence_threshold,
        length_threshold=args.length_threshold,
        intro_heading_names=tuple(args.intro_heading_names or defaults.intro_heading_names),
        normalize_prose=not args.no_normalize,
        strip_fillers=not args.keep_fillers,
        intro_heading=args.intro_heading,
    )


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging("DEBUG" if args.verbose else "WARNING")

    try:
        options = options_from_args(args)
    except ValueError as exc:
        parser.error(str(exc))

    try:
        if args.command == "file":
            return _run_file(args, options)
        if args.command == "guide":
            return asyncio.run(_run_guide(args, options))
        return asyncio.run(_run_batch(args, options))
    except GuidetilesError as exc:
        logger.error("Command failed", extra={"command": args.command, "error": str(exc)})
        print(f"error: {exc}", file=sys.stderr)
        return 1


def _run_file(args: argparse.Namespace, options: TileOptions) -> int:
    path: Path = args.path
    if not path.is_file():
        print(f"error: file not found: {path}", file=sys.stderr)
        return 1
    original = path.read_text(encoding="utf-8")
    new_body = restructure_body(original, options)

    destination = path if args.in_place else args.output
    if destination is None:
        sys.stdout.write(new_body + "\n")
    else:
        destination.write_text(new_body + "\n", encoding="utf-8")
    print(summarize_body(original, new_body, options.container_open), file=sys.stderr)
    return 0


async def _run_guide(args: argparse.Namespace, options: TileOptions) -> int:
    result = await restructure_guide(args.slug, options=options, dry_run=args.dry_run)
    if args.dry_run:
        sys.stdout.write(result.body + "\n")
    print(format_result(result), file=sys.stderr)
    return 0


async def _run_batch(args: argparse.Namespace, options: TileOptions) -> int:
    results = await restructure_guides(
        args.slugs or None,
        domain=args.domain,
        limit=args.limit,
        options=options,
        dry_run=args.dry_run,
        concurrency=args.concurrency,
    )
    for result in results:
        print(format_result(result))
    updated = sum(1 for result in results if result.ok and result.changed)
    failed = sum(1 for result in results if not result.ok)
    print(f"\n{len(results)} guides, {updated} changed, {failed} failed")
    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
