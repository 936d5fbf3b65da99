import argparse
import logging
import sys
from pathlib import Path

from src.app_shell.config import ConfigError, create_store, validate_ops_rules
from src.components.gallery_index import (
    CompactIndexInput,
    FetchPageInput,
    IndexManager,
    create_index_manager,
    run_compact,
    run_fetch_page,
)
from src.rules.loader import load_rules
from src.rules.models import Rules

logger = logging.getLogger("cli")

RULES_PATH = "rules.yaml"


def get_index(rules_path: Path) -> tuple[IndexManager, Rules]:
    if not rules_path.exists():
        logger.error(f"Rules file {rules_path} not found.")
        sys.exit(1)

    rules = load_rules(rules_path)
    try:
        validate_ops_rules(rules)
    except ConfigError as e:
        logger.error(str(e))
        sys.exit(1)

    store = create_store(rules)
    return create_index_manager(store, rules.index), rules


def handle_compact(index: IndexManager, args: argparse.Namespace) -> None:
    report = run_compact(CompactIndexInput(), index)
    if not report.changed:
        print("Index already compact.")
        return
    print(
        f"Compacted: {report.pages_written} pages written, "
        f"{report.pages_deleted} deleted, {report.ids_moved} ids moved."
    )


def handle_stats(index: IndexManager, args: argparse.Namespace) -> None:
    meta = index.read_meta()
    lengths = index.page_lengths()
    stored = sum(lengths)

    print(f"Count:      {meta.count}")
    print(f"Page size:  {meta.page_size}")
    print(f"Pages:      {len(lengths)}")
    print(f"Stored ids: {stored}")
    for page_index, length in enumerate(lengths):
        print(f" - page {page_index}: {length}")

    if stored != meta.count:
        logger.warning(f"Count {meta.count} does not match stored ids {stored}.")


def handle_page(index: IndexManager, args: argparse.Namespace, rules: Rules) -> None:
    size = args.size if args.size is not None else rules.index.logical_page_size
    try:
        out = run_fetch_page(FetchPageInput(page_number=args.number, logical_page_size=size), index)
    except ValueError as e:
        logger.error(str(e))
        sys.exit(1)

    print(f"Page {out.page_number} / {out.total_pages}")
    for item_id in out.item_ids:
        print(item_id)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Gallery index maintenance CLI")
    parser.add_argument("--rules", default=RULES_PATH, help="Path to rules.yaml")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log page writes")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # compact
    subparsers.add_parser("compact", help="Repack underfull index pages")

    # stats
    subparsers.add_parser("stats", help="Show index metadata and page lengths")

    # page
    page_parser = subparsers.add_parser("page", help="Print the ids on a gallery page")
    page_parser.add_argument("number", type=int, help="1-based page number")
    page_parser.add_argument("--size", type=int, help="Ids per page (default from rules)")

    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    index, rules = get_index(Path(args.rules))

    if args.command == "compact":
        handle_compact(index, args)
    elif args.command == "stats":
        handle_stats(index, args)
    elif args.command == "page":
        handle_page(index, args, rules)


if __name__ == "__main__":
    main()
