"""
Command line entry point.

Usage:
    bookbinder wind                          Build manuscript/*wind*/ to output/
    bookbinder build path/to/book --verbose  Same, explicit subcommand
    bookbinder wind --font kai.ttf --line-height 1.6
    bookbinder wind --css custom.css         Use a hand-written style sheet

Flags override the matching book.yaml fields.
"""

import argparse
import os
import sys
from dataclasses import replace

from bookbinder.builders import BUILDERS
from bookbinder.config import BookConfig, ConfigError
from bookbinder.errors import BuildError
from bookbinder.resolve import find_book_dir


# ── Resolve book ───────────────────────────────────────────────────────


def resolve_book(identifier):
    """Find book directory, load config. Exits on failure."""
    project_root = os.getcwd()
    book_dir = find_book_dir(identifier, project_root)

    if not book_dir:
        print(f"Error: Could not find book '{identifier}'")
        print(f"  Searched in: {os.path.join(project_root, 'manuscript')}")
        print("  Tip: Run from the project root, or pass a direct path.")
        sys.exit(1)

    try:
        config = BookConfig.load(book_dir)
    except ConfigError as e:
        print(f"Error: {e}")
        sys.exit(1)

    return book_dir, config


# ── Build command ──────────────────────────────────────────────────────


def cmd_build(args):
    """Build the EPUB for one book."""
    book_dir, config = resolve_book(args.book)

    config.update({
        "out": args.out,
        "cover": args.cover,
        "font": args.font,
        "css": args.css,
        "align": args.align,
        "bottom": args.bottom,
        "indent": args.indent,
        "line_height": args.line_height,
        "lang": args.lang,
    })
    config.summary()

    try:
        book = config.to_book()
    except ConfigError as e:
        print(f"Error: {e}")
        sys.exit(1)

    if not book.sections:
        print(f"Error: No sections found in {book_dir}")
        sys.exit(1)

    # Relative output names land in the output directory
    if not os.path.isabs(book.out):
        output_dir = args.output_dir or os.path.join(os.getcwd(), "output")
        os.makedirs(output_dir, exist_ok=True)
        print(f"  Output: {output_dir}")
        book = replace(book, out=os.path.join(output_dir, book.out))

    builder = BUILDERS["epub"](book, verbose=args.verbose)
    try:
        result = builder.build()
    except BuildError as e:
        print(f"  ✗ {e}")
        sys.exit(1)

    print(f"\n{'─' * 60}")
    if not result.ok:
        print("  Done with errors: temporary files were not removed")
        sys.exit(1)
    print(f"  Done. {result.sections} section(s) in {result.output_file}")


# ── Argument Parser ────────────────────────────────────────────────────


def build_parser():
    parser = argparse.ArgumentParser(
        prog="bookbinder",
        description="Assemble an EPUB from pre-rendered HTML sections",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
examples:
  %(prog)s wind                        Build the book matching 'wind'
  %(prog)s wind --font kai.ttf         Embed a custom font
  %(prog)s wind --css custom.css       Use your own style sheet
        """,
    )

    sub = parser.add_subparsers(dest="command")

    build_p = sub.add_parser("build", help="Build the EPUB (default)")
    build_p.add_argument("book", help="Book number, keyword, or path")
    _add_build_args(build_p)

    return parser


def _add_build_args(parser):
    """Add style and output options to a parser."""
    style = parser.add_argument_group("style")
    style.add_argument("--align", help="Paragraph alignment (justify, left, ...)")
    style.add_argument("--bottom", help="Heading bottom margin (e.g. 1em)")
    style.add_argument("--indent", type=int, help="Heading indent in em")
    style.add_argument("--line-height", help="Heading line height (e.g. 1.5)")
    style.add_argument("--font", help="Font file to embed")
    style.add_argument("--css", help="Custom style sheet (disables generation)")

    opts = parser.add_argument_group("options")
    opts.add_argument("--cover", help="Cover image")
    opts.add_argument("--lang", help="Language code (default: zh)")
    opts.add_argument("--out", help="Output name without .epub")
    opts.add_argument("--output-dir", help="Override output directory")
    opts.add_argument("--verbose", "-v", action="store_true")


# ── Main ───────────────────────────────────────────────────────────────


def main(argv=None):
    parser = build_parser()
    argv = sys.argv[1:] if argv is None else list(argv)

    # Allow bare "bookbinder wind" without the "build" subcommand
    if argv and argv[0] != "build" and not argv[0].startswith("-"):
        argv = ["build"] + argv

    args = parser.parse_args(argv)

    dispatch = {
        "build": cmd_build,
    }

    handler = dispatch.get(args.command)
    if handler:
        handler(args)
    else:
        parser.print_help()
