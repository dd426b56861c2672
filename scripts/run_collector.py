"""
CLI script to run the Aozora Bunko ingestion pipeline.

Usage:
    python scripts/run_collector.py                 # Crawl listing pages from config
    python scripts/run_collector.py URL [URL ...]   # Crawl the given listing pages
    python scripts/run_collector.py --reset         # Full rebuild
    python scripts/run_collector.py --config path/to/config.json
"""

import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from aozora_search.core import get_config, AozoraSearchError, ConfigurationError  # noqa: E402
from aozora_search.core.config_loader import reload_config  # noqa: E402
from aozora_search.database import get_statistics  # noqa: E402
from aozora_search.indexer import IndexBuilder  # noqa: E402


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Collect Aozora Bunko works and index them for full-text search"
    )

    parser.add_argument(
        "listing_urls",
        nargs="*",
        metavar="LISTING_URL",
        help="Listing pages to crawl (defaults to crawler.listing_urls)"
    )

    parser.add_argument(
        "--reset",
        action="store_true",
        help="Drop existing index and rebuild from scratch"
    )

    parser.add_argument(
        "--config",
        type=str,
        help="Path to custom config.json file"
    )

    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output"
    )

    return parser.parse_args(argv)


def progress_callback(current: int, total: int, title: str) -> None:
    """Print progress to console."""
    percent = (current / total) * 100 if total > 0 else 0
    bar_width = 30
    filled = int(bar_width * current / total) if total > 0 else 0
    bar = "=" * filled + "-" * (bar_width - filled)

    print(f"\r[{bar}] {percent:5.1f}% ({current}/{total}) {title[:30]:<30}", end="", flush=True)


def main(argv=None) -> int:
    """Main entry point for the collector CLI."""
    args = parse_args(argv)

    try:
        if args.config:
            config = reload_config(Path(args.config))
        else:
            config = get_config()
    except ConfigurationError as e:
        print(f"Configuration error: {e.message}", file=sys.stderr)
        return 1

    listing_urls = args.listing_urls or config.crawler.listing_urls

    print("=" * 60)
    print("Aozora Search - Collector")
    print("=" * 60)
    print(f"Database path:     {config.paths.database_path}")
    print(f"Listing pages:     {len(listing_urls)}")
    print(f"Reset mode:        {args.reset}")
    print("=" * 60)

    callback = None if args.quiet else progress_callback

    builder = IndexBuilder(
        listing_urls=listing_urls,
        reset=args.reset,
        progress_callback=callback
    )

    try:
        stats = builder.build()
    except AozoraSearchError as e:
        print(f"\nFatal: {e.message}", file=sys.stderr)
        return 1

    if not args.quiet:
        print("\n")

    db_stats = get_statistics()

    print("=" * 60)
    print("Collection Complete")
    print("=" * 60)
    print(f"Listing pages:     {stats.listings_scanned:,}")
    print(f"Works found:       {stats.entries_found:,}")
    print(f"Works indexed:     {stats.entries_indexed:,}")
    print(f"Works skipped:     {stats.entries_skipped:,}")
    print(f"Works failed:      {stats.entries_failed:,}")
    print("-" * 60)
    print(f"Authors in store:  {db_stats['total_authors']:,}")
    print(f"Works in store:    {db_stats['total_works']:,}")
    print("=" * 60)

    if stats.errors:
        print(f"\nErrors ({len(stats.errors)}):")
        for error in stats.errors[:20]:
            print(f"  - {error}")
        if len(stats.errors) > 20:
            print(f"  ... and {len(stats.errors) - 20} more errors")

    return 0


if __name__ == "__main__":
    sys.exit(main())
