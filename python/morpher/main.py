"""morpher CLI - Dictionary-driven sentence morphing.

Usage:
    python -m morpher.main --dictionary dict.opcorpora.txt "кот{сущ,род}"
    python -m morpher.main --download --export-index output/index.json
    echo "кот{сущ,мн}" | python -m morpher.main --index output/index.json
"""

import argparse
import sys
from pathlib import Path

from . import config as cfg
from .builder import REENTRY_POLICIES, build_index
from .ingest import LoadError, get_ingestor
from .morpher import SentenceMorpher
from .schema import DictionaryIndex


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser, defaults from config.json."""
    project_root = Path(__file__).parent.parent.parent
    encoding = cfg.default_encoding()
    group_reentry = cfg.default_group_reentry()

    parser = argparse.ArgumentParser(
        description="morpher - Dictionary-driven sentence morphing"
    )
    parser.add_argument(
        "sentences",
        nargs="*",
        help="Sentences to morph (default: read lines from stdin)",
    )
    # Source defaults from config.json are applied after parsing,
    # only when none of these was given
    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--dictionary",
        "-d",
        type=Path,
        help="Dictionary file (.txt, .zip or .bz2)",
    )
    source.add_argument(
        "--index",
        "-i",
        type=Path,
        help="Compiled JSON index (skips parsing the dictionary)",
    )
    source.add_argument(
        "--download",
        action="store_true",
        help="Download the dictionary into the cache directory",
    )
    parser.add_argument(
        "--cache-dir",
        "-c",
        type=Path,
        default=project_root / cfg.default_cache_dir(),
        help="Cache directory for downloaded sources",
    )
    parser.add_argument(
        "--encoding",
        type=str,
        default=encoding,
        help=f"Dictionary text encoding (default: {encoding})",
    )
    parser.add_argument(
        "--group-reentry",
        choices=REENTRY_POLICIES,
        default=group_reentry,
        help=f"Handling of repeated group ids (default: {group_reentry})",
    )
    parser.add_argument(
        "--no-intern",
        action="store_true",
        default=not cfg.default_intern_attributes(),
        help="Don't share attribute strings between forms",
    )
    parser.add_argument(
        "--export-index",
        type=Path,
        help="Save the compiled index as JSON",
    )
    parser.add_argument(
        "--force",
        "-f",
        action="store_true",
        default=cfg.get_default("force", False),
        help="Force re-download of the dictionary",
    )
    parser.add_argument(
        "--quiet",
        "-q",
        action="store_true",
        default=cfg.get_default("quiet", False),
        help="Only print morphed sentences",
    )
    return parser


def apply_source_defaults(args: argparse.Namespace) -> None:
    """Fill the dictionary source from config.json if none was given."""
    if args.dictionary or args.index or args.download:
        return

    index = cfg.get_default("index")
    dictionary = cfg.get_default("dictionary")
    if index:
        args.index = Path(index)
    elif dictionary:
        args.dictionary = Path(dictionary)


def load_morpher(args: argparse.Namespace) -> SentenceMorpher:
    """Load a morpher from the source selected on the command line.

    Raises:
        LoadError: If the dictionary or index is invalid.
        ValueError: If no source was given.
    """
    if args.index:
        return SentenceMorpher.from_index(args.index)

    ingestor_cls = get_ingestor(cfg.get_default("ingestor", "opencorpora"))

    if args.download:
        ingestor = ingestor_cls(
            cache_dir=args.cache_dir,
            encoding=args.encoding,
            quiet=args.quiet,
        )
        filepath = ingestor.download(force=args.force)
    elif args.dictionary:
        ingestor = ingestor_cls(encoding=args.encoding)
        filepath = args.dictionary
    else:
        raise ValueError("No dictionary source: use --dictionary, --index or --download")

    index, stats = build_index(
        ingestor.ingest_file(filepath),
        group_reentry=args.group_reentry,
        intern_attributes=not args.no_intern,
        source=str(filepath),
    )
    return SentenceMorpher(index, stats)


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    apply_source_defaults(args)

    def log(message: str = "") -> None:
        if not args.quiet:
            print(message, file=sys.stderr)

    log("=" * 60)
    log("morpher - Dictionary-driven Sentence Morphing")
    log("=" * 60)

    try:
        morpher = load_morpher(args)
    except (LoadError, ValueError, OSError) as e:
        print(f"ERROR - {e}", file=sys.stderr)
        return 1

    index: DictionaryIndex = morpher.index
    log(f"Source: {index.source or '(index)'}")
    if morpher.stats is not None:
        stats = morpher.stats
        log(f"  Lines read: {stats.total_lines:,}")
        log(f"  Groups: {stats.total_groups:,}")
        log(f"  Forms: {stats.total_forms:,}")
        log(f"  Words: {stats.total_words:,}")
        log(f"  Attributes: {stats.total_attributes:,}")
        if stats.reentered_groups:
            log(f"  Re-entered groups: {stats.reentered_groups:,}")
        if stats.discarded_forms:
            log(f"  Discarded forms: {stats.discarded_forms:,}")
    else:
        log(f"  Groups: {len(index.groups):,}")
        log(f"  Forms: {index.count_forms():,}")
        log(f"  Words: {len(index.words):,}")
        log(f"  Attributes: {len(index.attributes()):,}")

    if args.export_index:
        try:
            index.save(args.export_index)
        except OSError as e:
            print(f"ERROR - {e}", file=sys.stderr)
            return 1
        log(f"  Index written: {args.export_index}")

    log()

    sentences = args.sentences
    if not sentences and not args.export_index:
        sentences = (line.rstrip("\n") for line in sys.stdin)

    for sentence in sentences:
        print(morpher.morph(sentence))

    return 0


if __name__ == "__main__":
    sys.exit(main())
