"""
Pytest fixtures for the collection, index, PageRank and search tests.

Builds a small on-disk collection in the same layout the scripts expect:
a collection file listing document names and one ``<name>.txt`` per document.
"""

import sys
from pathlib import Path

import pytest

_project_root = Path(__file__).parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))


def make_body(links, text):
    """Render a document body with a link section and a content section."""
    return (
        "#start Section-1\n\n"
        f"{' '.join(links)}\n\n"
        "#end Section-1\n\n"
        "#start Section-2\n\n"
        f"{text}\n\n"
        "#end Section-2\n"
    )


SAMPLE_DOCUMENTS = {
    "url11": (["url21", "url31", "url11"], "Mars has long been the subject of human interest."),
    "url21": (["url11", "url31", "url31"], "Early telescopic observations of Mars revealed color changes."),
    "url31": (["url21", "url99"], "Mercury is the smallest planet; Mars is larger."),
    "url41": ([], "The design of a spacecraft for Mars: a sample return?"),
}


@pytest.fixture
def make_collection(tmp_path):
    """Factory writing a collection of {name: (links, text)} under tmp_path."""

    def _make(documents, order=None):
        names = order if order is not None else list(documents)
        collection = tmp_path / "collection.txt"
        collection.write_text(" ".join(names) + "\n", encoding="utf-8")
        for name, (links, text) in documents.items():
            (tmp_path / f"{name}.txt").write_text(make_body(links, text), encoding="utf-8")
        return collection

    return _make


@pytest.fixture
def sample_collection(make_collection):
    return make_collection(SAMPLE_DOCUMENTS)
