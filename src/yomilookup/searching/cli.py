from __future__ import annotations

import argparse
import enum
import logging
import sys
from pathlib import Path
from typing import Callable, List, Optional

from ..config import EXIT_WORDS, Settings
from ..errors import LoadIOError, TokenizationError, YomiLookupError
from ..indexing.loader import load_index
from .render import format_results
from .resolver import CollectionMatches, LookupResolver
from .tokenizer import SudachiBaseForm

PROMPT = 'Enter search term (or "exit" to quit): '


class SessionState(enum.Enum):
    IDLE = "idle"
    AWAITING_INPUT = "awaiting_input"
    RESOLVING = "resolving"
    RENDERING = "rendering"
    CLOSED = "closed"


def is_exit_command(text: str) -> bool:
    return text.strip().lower() in EXIT_WORDS


class QuerySession:
    """Prompt, resolve and print until an exit word, EOF or Ctrl-C."""

    def __init__(
        self,
        resolver: LookupResolver,
        read: Callable[[str], str] = input,
        write: Callable[[str], None] = print,
    ):
        self.resolver = resolver
        self.read = read
        self.write = write
        self.state = SessionState.IDLE

    def query(self, text: str) -> List[CollectionMatches]:
        self.state = SessionState.RESOLVING
        try:
            results = self.resolver.resolve(text)
        except TokenizationError as exc:
            self.write(f"Base form lookup failed: {exc}")
            results = exc.partial
        self.state = SessionState.RENDERING
        if results:
            self.write(format_results(results))
        else:
            self.write("No entries found.")
        self.state = SessionState.IDLE
        return results

    def run(self) -> None:
        while self.state is not SessionState.CLOSED:
            self.state = SessionState.AWAITING_INPUT
            try:
                text = self.read(PROMPT)
            except (EOFError, KeyboardInterrupt):
                self.write("")
                self.close()
                break
            if is_exit_command(text):
                self.close()
                break
            text = text.strip()
            if not text:
                self.state = SessionState.IDLE
                continue
            try:
                self.query(text)
            except YomiLookupError as exc:
                self.write(f"Error: {exc}")
                self.state = SessionState.IDLE

    def close(self) -> None:
        self.state = SessionState.CLOSED


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Look up terms and readings in installed Yomichan dictionaries.",
    )
    parser.add_argument("query", nargs="?", help="Look up a single term and exit.")
    parser.add_argument(
        "--dictionaries",
        type=Path,
        default=None,
        help="Directory holding one subdirectory per dictionary collection.",
    )
    parser.add_argument(
        "--pattern",
        default=None,
        help="Glob for term-bank files inside each collection (e.g. 'term_bank_*.json').",
    )
    parser.add_argument(
        "--sudachi-dict",
        default=None,
        help="Sudachi system dictionary name ('small', 'core', 'full') or path.",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Threads used to read dictionary files.",
    )
    parser.add_argument("--no-progress", action="store_true", help="Hide the load progress bar.")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging.")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    settings = Settings.from_env().override(
        dictionaries_dir=args.dictionaries,
        file_pattern=args.pattern,
        sudachi_dict=args.sudachi_dict,
        load_workers=args.workers,
        show_progress=False if args.no_progress else None,
    )

    try:
        report = load_index(
            settings.dictionaries_dir,
            pattern=settings.file_pattern,
            workers=settings.load_workers,
            show_progress=settings.show_progress,
        )
    except LoadIOError as exc:
        print(f"Error loading dictionaries: {exc}", file=sys.stderr)
        return 1

    index = report.index
    print(f"Loaded {len(index)} entries from {len(index.collection_ids)} collections")
    if report.skipped_files:
        print(f"Skipped {len(report.skipped_files)} unreadable files")

    resolver = LookupResolver(index, SudachiBaseForm(settings.sudachi_dict))
    session = QuerySession(resolver)
    if args.query:
        results = session.query(args.query)
        return 0 if results else 1
    session.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
