"""Environment-driven defaults shared by the indexing, PageRank and search scripts."""

from __future__ import annotations

import builtins
import os
import sys

from dotenv import load_dotenv

load_dotenv()
ENVIRONMENT = os.getenv("ENVIRONMENT")

COLLECTION_FILE = os.getenv("SEARCH_COLLECTION", "collection.txt")
DOC_SUFFIX = os.getenv("SEARCH_DOC_SUFFIX", ".txt")
INDEX_FILE = os.getenv("SEARCH_INDEX_FILE", "invertedIndex.txt")
PAGERANK_FILE = os.getenv("SEARCH_PAGERANK_FILE", "pagerankList.txt")


def dprint(*args, **kwargs):
    """Prints only if ENVIRONMENT is not 'prod'."""
    if ENVIRONMENT != "prod":
        # keep stdout free for results
        kwargs.setdefault("file", sys.stderr)
        builtins.print(*args, **kwargs)
