#!/usr/bin/env python3
"""Answer multi-term queries using match counts and PageRank scores."""

from __future__ import annotations

import argparse
from collections import defaultdict
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Sequence

from invert import load_term_table
from pagerank import load_pagerank_list
from settings import INDEX_FILE, PAGERANK_FILE, dprint

TOP_K = 30


@dataclass
class QueryResult:
    name: str
    match_count: int
    score: float


def unique_preserve_order(items: Iterable[str]) -> List[str]:
    seen = set()
    ordered: List[str] = []
    for item in items:
        if item in seen:
            continue
        seen.add(item)
        ordered.append(item)
    return ordered


def match_documents(
    term_table: Mapping[str, Sequence[str]],
    pagerank_scores: Mapping[str, float],
    query_terms: Sequence[str],
    top_k: int = TOP_K,
) -> List[QueryResult]:
    """Rank documents by matched query terms, then PageRank, then name.

    Query terms are looked up exactly as given, without the lowercasing and
    punctuation stripping applied when the index was built. Only documents
    present in the PageRank table can appear in the results.
    """
    counts: Dict[str, int] = defaultdict(int)
    for term in unique_preserve_order(query_terms):
        # a document counts once per term even if listed twice
        for doc in set(term_table.get(term, ())):
            if doc in pagerank_scores:
                counts[doc] += 1

    # documents with no matched term never enter counts
    results = [
        QueryResult(name=doc, match_count=count, score=pagerank_scores[doc])
        for doc, count in counts.items()
    ]
    results.sort(key=lambda item: (-item.match_count, -item.score, item.name))
    return results[:top_k]


def search(
    term_table: Mapping[str, Sequence[str]],
    pagerank_scores: Mapping[str, float],
    query_terms: Sequence[str],
    top_k: int = TOP_K,
) -> List[str]:
    return [result.name for result in match_documents(term_table, pagerank_scores, query_terms, top_k)]


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Search the collection using the inverted index and PageRank")
    parser.add_argument("terms", nargs="+", help="Search terms, matched exactly as given")
    parser.add_argument("--index", default=INDEX_FILE, help=f"Inverted index file (default: {INDEX_FILE})")
    parser.add_argument("--pagerank", default=PAGERANK_FILE, help=f"PageRank list file (default: {PAGERANK_FILE})")
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    try:
        term_table = load_term_table(Path(args.index))
        pagerank_scores = load_pagerank_list(Path(args.pagerank))
    except (OSError, ValueError) as exc:
        raise SystemExit(str(exc)) from exc

    dprint("query_terms", args.terms)
    results = match_documents(term_table.as_dict(), pagerank_scores, args.terms)
    for result in results:
        dprint("match", result.name, result.match_count, result.score)
        print(result.name)


if __name__ == "__main__":
    main()
