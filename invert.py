#!/usr/bin/env python3
"""Build the inverted index (term -> documents) for the offline collection."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Dict, Iterator, List, Set, Tuple

from collection import DocName, DocumentStore, load_collection
from settings import COLLECTION_FILE, DOC_SUFFIX, INDEX_FILE, dprint

TRAILING_PUNCTUATION = ".,:;?*"
MARKER_PREFIXES = ("#start", "#end")
SECTION_LABELS = {"Section-1", "Section-2"}
NAME_PREFIX = "url"


class TermTable:
    """ordered term -> document mapping with idempotent inserts."""

    def __init__(self) -> None:
        self._postings: Dict[str, Set[DocName]] = {}

    def add(self, term: str, doc: DocName) -> None:
        self._postings.setdefault(term, set()).add(doc)

    def documents(self, term: str) -> List[DocName]:
        return sorted(self._postings.get(term, ()))

    def items(self) -> Iterator[Tuple[str, List[DocName]]]:
        """Yield (term, documents) with terms and documents in ascending order."""
        for term in sorted(self._postings):
            yield term, sorted(self._postings[term])

    def as_dict(self) -> Dict[str, List[DocName]]:
        return dict(self.items())

    def __contains__(self, term: object) -> bool:
        return term in self._postings

    def __len__(self) -> int:
        return len(self._postings)


def is_metadata_token(token: str) -> bool:
    """True for link-section markers, section labels and bare document names."""
    if token.startswith(MARKER_PREFIXES) or token in SECTION_LABELS:
        return True
    rest = token[len(NAME_PREFIX):]
    return token.startswith(NAME_PREFIX) and rest[:1].isascii() and rest[:1].isdigit()


def normalize_word(token: str) -> str:
    """Lowercase and strip trailing punctuation; returns "" for rejected tokens."""
    word = token.lower().rstrip(TRAILING_PUNCTUATION)
    if not word or not (word[0].isascii() and word[0].isalpha()):
        return ""
    return word


def index_document(table: TermTable, doc: DocName, body: str) -> None:
    for token in body.split():
        if is_metadata_token(token):
            continue
        word = normalize_word(token)
        if word:
            table.add(word, doc)


def build_index(store: DocumentStore, bodies: Dict[DocName, str]) -> TermTable:
    table = TermTable()
    for doc in store:
        index_document(table, doc.name, bodies[doc.name])
    return table


def write_index(path: Path, table: TermTable) -> None:
    # one line per term: "<term> <doc1> <doc2> ..."
    with path.open("w", encoding="utf-8") as handle:
        for term, docs in table.items():
            handle.write(f"{term} {' '.join(docs)}\n")


def load_term_table(path: Path) -> TermTable:
    if not path.exists():
        raise FileNotFoundError(f"Missing required file: {path}")
    table = TermTable()
    with path.open("r", encoding="utf-8") as handle:
        for line in handle:
            parts = line.split()
            if not parts:
                continue
            term, docs = parts[0], parts[1:]
            for doc in docs:
                table.add(term, doc)
    return table


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Build inverted index for the document collection")
    parser.add_argument("--collection", default=COLLECTION_FILE, help=f"Collection file (default: {COLLECTION_FILE})")
    parser.add_argument("--suffix", default=DOC_SUFFIX, help=f"Document file suffix (default: {DOC_SUFFIX})")
    parser.add_argument("--output", default=INDEX_FILE, help=f"Index output path (default: {INDEX_FILE})")
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    try:
        store, _, bodies = load_collection(Path(args.collection), suffix=args.suffix)
    except (OSError, ValueError) as exc:
        raise SystemExit(str(exc)) from exc
    if not len(store):
        raise SystemExit("No documents found in the collection; nothing to index")

    table = build_index(store, bodies)
    write_index(Path(args.output), table)
    dprint(f"Indexed {len(store)} documents, vocabulary size {len(table)}")


if __name__ == "__main__":
    main()
