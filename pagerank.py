#!/usr/bin/env python3
"""Compute PageRank scores for the link graph of the offline collection."""

from __future__ import annotations

import argparse
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List

from collection import DocName, Document, DocumentStore, LinkGraph, load_collection
from settings import COLLECTION_FILE, DOC_SUFFIX, PAGERANK_FILE, dprint


@dataclass
class PageRankResult:
    scores: Dict[DocName, float]
    iterations: int
    delta: float


def compute_pagerank(
    graph: LinkGraph,
    damping: float,
    threshold: float,
    max_iterations: int,
) -> PageRankResult:
    """Run synchronous PageRank iteration until convergence or max iterations.

    Every pass computes a complete new score vector from the previous one, so
    the order documents are visited in never affects the result. At least one
    pass always runs. Final scores are also stored on the graph's documents.
    """
    n = len(graph)
    if n == 0:
        raise ValueError("Cannot compute PageRank for an empty collection")

    names = graph.store.names()
    rank = {name: 1.0 / n for name in names}
    base = (1.0 - damping) / n
    iteration = 0

    while True:
        iteration += 1
        prev = rank
        rank = {}
        for name in names:
            total = 0.0
            # sorted so float summation order is reproducible
            for linker in sorted(graph.linkers(name)):
                degree = graph.out_degree(linker)
                total += prev[linker] / degree if degree else prev[linker] / n
            rank[name] = base + damping * total

        # l1 distance between consecutive vectors
        delta = sum(abs(rank[name] - prev[name]) for name in names)
        if delta < threshold or iteration >= max_iterations:
            break

    for doc in graph.store:
        doc.score = rank[doc.name]
    return PageRankResult(scores=rank, iterations=iteration, delta=delta)


def rank_documents(store: DocumentStore) -> List[Document]:
    # score descending, ties by name ascending
    return sorted(store, key=lambda doc: (-doc.score, doc.name))


def write_pagerank(path: Path, store: DocumentStore) -> None:
    with path.open("w", encoding="utf-8") as handle:
        for doc in rank_documents(store):
            handle.write(f"{doc.name}, {doc.out_degree}, {doc.score:.7f}\n")


def parse_pagerank_line(line: str) -> tuple[DocName, int, float] | None:
    """Parse "<name>, <outDegree>, <score>"; returns None for malformed lines."""
    parts = [part.strip() for part in line.split(",")]
    if len(parts) != 3:
        return None
    name, degree, score = parts
    if not name or len(name.split()) != 1:
        return None
    try:
        parsed = name, int(degree), float(score)
    except ValueError:
        return None
    # nan or inf would break the ranking order
    if not math.isfinite(parsed[2]):
        return None
    return parsed


def load_pagerank_list(path: Path) -> Dict[DocName, float]:
    if not path.exists():
        raise FileNotFoundError(f"Missing required file: {path}")
    scores: Dict[DocName, float] = {}
    with path.open("r", encoding="utf-8") as handle:
        for line in handle:
            if not line.strip():
                continue
            parsed = parse_pagerank_line(line)
            if parsed is None:
                dprint(f"Skipping malformed PageRank line: {line.rstrip()}")
                continue
            name, _, score = parsed
            scores[name] = score
    return scores


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Compute PageRank for the document collection")
    parser.add_argument("damping", type=float, help="Damping factor d, between 0 and 1")
    parser.add_argument("diff_pr", type=float, help="Convergence threshold on the total score change")
    parser.add_argument("max_iterations", type=int, help="Maximum number of iterations")
    parser.add_argument("--collection", default=COLLECTION_FILE, help=f"Collection file (default: {COLLECTION_FILE})")
    parser.add_argument("--suffix", default=DOC_SUFFIX, help=f"Document file suffix (default: {DOC_SUFFIX})")
    parser.add_argument("--output", default=PAGERANK_FILE, help=f"Output file for PageRank scores (default: {PAGERANK_FILE})")
    args = parser.parse_args()

    if not 0.0 <= args.damping <= 1.0:
        parser.error("damping must be between 0 and 1")
    if args.diff_pr < 0:
        parser.error("diff_pr must not be negative")
    if args.max_iterations < 1:
        parser.error("max_iterations must be at least 1")
    return args


def main() -> None:
    args = parse_args()
    try:
        store, graph, _ = load_collection(Path(args.collection), suffix=args.suffix)
    except (OSError, ValueError) as exc:
        raise SystemExit(str(exc)) from exc
    if not len(store):
        raise SystemExit("No documents found in the collection; cannot compute PageRank")

    result = compute_pagerank(graph, args.damping, args.diff_pr, args.max_iterations)
    write_pagerank(Path(args.output), store)

    print(f"Processed {len(store)} documents")
    print(f"Iterations: {result.iterations}")
    print(f"Final delta: {result.delta:.6e}")
    print(f"Output written to {args.output}")


if __name__ == "__main__":
    main()
