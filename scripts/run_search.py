"""
CLI script to browse and search the collected works.

Usage:
    python scripts/run_search.py authors
    python scripts/run_search.py titles AUTHOR_ID
    python scripts/run_search.py content AUTHOR_ID TITLE_ID
    python scripts/run_search.py query TEXT
    python scripts/run_search.py -d path/to/aozora.sqlite3 query TEXT

Exits 2 on usage errors and 1 on store failures.
"""

import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from aozora_search.core import get_config, AozoraSearchError  # noqa: E402
from aozora_search.core.config_loader import reload_config  # noqa: E402
from aozora_search.database import ContentRepository, use_database  # noqa: E402
from aozora_search.search import SearchEngine  # noqa: E402


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with its sub-commands."""
    parser = argparse.ArgumentParser(
        description="Browse and search collected Aozora Bunko works"
    )

    parser.add_argument(
        "-d", "--database",
        type=str,
        help="SQLite database (defaults to paths.database_path)"
    )

    parser.add_argument(
        "--config",
        type=str,
        help="Path to custom config.json file"
    )

    subparsers = parser.add_subparsers(dest="command", metavar="command")
    subparsers.required = True

    subparsers.add_parser("authors", help="List authors")

    titles = subparsers.add_parser("titles", help="List works of an author")
    titles.add_argument("author_id")

    content = subparsers.add_parser("content", help="Print the text of a work")
    content.add_argument("author_id")
    content.add_argument("title_id")

    query = subparsers.add_parser("query", help="Search works by words")
    query.add_argument("text", nargs="+")

    return parser


def show_authors(repository: ContentRepository) -> None:
    for author in repository.list_authors():
        print(f"Author ID: {author.author_id}, Author: {author.author}")


def show_titles(repository: ContentRepository, author_id: str) -> None:
    for title in repository.list_titles(author_id):
        print(f"Author ID: {title.author_id}, Title ID: {title.title_id}, Title: {title.title}")


def show_content(repository: ContentRepository, author_id: str, title_id: str) -> None:
    print(repository.get(author_id, title_id))


def query_content(engine: SearchEngine, text: str) -> None:
    for result in engine.query(text):
        author_id, author, title_id, title = result.as_tuple()
        print(f"{author_id} {title_id:>5}: {title} ({author})")


def main(argv=None) -> int:
    """Main entry point for the search CLI."""
    args = build_parser().parse_args(argv)

    try:
        if args.config:
            config = reload_config(Path(args.config))
        else:
            config = get_config()

        # all commands are read-only: a missing store is an error, never created
        use_database(args.database or config.paths.database_path, create=False)

        repository = ContentRepository()

        if args.command == "authors":
            show_authors(repository)
        elif args.command == "titles":
            show_titles(repository, args.author_id)
        elif args.command == "content":
            show_content(repository, args.author_id, args.title_id)
        elif args.command == "query":
            query_content(SearchEngine(), " ".join(args.text))

    except AozoraSearchError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
