"""Document store and link graph for the offline corpus."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Sequence, Set, Tuple

from settings import DOC_SUFFIX, dprint

DocName = str

LINK_START = ("#start", "Section-1")
LINK_END = ("#end", "Section-1")


class DuplicateDocumentError(ValueError):
    """Raised when the same document name is listed twice in a collection."""


@dataclass
class Document:
    name: DocName
    index: int
    out_degree: int = 0
    score: float = 0.0


class DocumentStore:
    """documents in load order, addressable by name."""

    def __init__(self) -> None:
        self._documents: List[Document] = []
        self._by_name: Dict[DocName, Document] = {}

    def add(self, name: DocName) -> Document:
        if name in self._by_name:
            raise DuplicateDocumentError(f"Duplicate document in collection: {name}")
        doc = Document(name=name, index=len(self._documents))
        self._documents.append(doc)
        self._by_name[name] = doc
        return doc

    def get(self, name: DocName) -> Document:
        return self._by_name[name]

    def names(self) -> List[DocName]:
        return [doc.name for doc in self._documents]

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __iter__(self) -> Iterator[Document]:
        return iter(self._documents)

    def __len__(self) -> int:
        return len(self._documents)


class LinkGraph:
    """directed graph over the documents of one store."""

    def __init__(self, store: DocumentStore) -> None:
        self.store = store
        self.outlinks: Dict[DocName, Set[DocName]] = {name: set() for name in store.names()}
        self.inlinks: Dict[DocName, Set[DocName]] = {name: set() for name in store.names()}

    def add_links(self, source: DocName, targets: Iterable[DocName]) -> None:
        """Record edges from source, dropping unknown targets and self-links."""
        edges = self.outlinks[source]
        for target in targets:
            if target == source or target not in self.store:
                continue
            edges.add(target)
            self.inlinks[target].add(source)
        # repeated links collapse to one edge, so degree is the set size
        self.store.get(source).out_degree = len(edges)

    def linkers(self, name: DocName) -> Set[DocName]:
        return self.inlinks[name]

    def out_degree(self, name: DocName) -> int:
        return self.store.get(name).out_degree

    def __len__(self) -> int:
        return len(self.store)


def load_documents(names: Sequence[DocName]) -> DocumentStore:
    """Register names in input order and give every document the uniform starting score."""
    store = DocumentStore()
    for name in names:
        store.add(name)
    n = len(store)
    for doc in store:
        doc.score = 1.0 / n
    return store


def _is_marker(tokens: Sequence[str], pos: int, marker: Tuple[str, str]) -> bool:
    return tuple(tokens[pos:pos + 2]) == marker


def parse_outgoing_links(store: DocumentStore, name: DocName, body: str) -> Set[DocName]:
    """Return the known documents referenced inside the link section of body."""
    tokens = body.split()
    links: Set[DocName] = set()
    in_section = False
    pos = 0
    while pos < len(tokens):
        if _is_marker(tokens, pos, LINK_START):
            in_section = True
            pos += 2
            continue
        if _is_marker(tokens, pos, LINK_END):
            in_section = False
            pos += 2
            continue
        token = tokens[pos]
        if in_section and token != name and token in store:
            links.add(token)
        pos += 1
    return links


def read_collection(path: Path) -> List[DocName]:
    if not path.exists():
        raise FileNotFoundError(f"Missing required file: {path}")
    return path.read_text(encoding="utf-8").split()


def read_document(directory: Path, name: DocName, suffix: str = DOC_SUFFIX) -> str:
    path = directory / f"{name}{suffix}"
    if not path.exists():
        raise FileNotFoundError(f"Missing required file: {path}")
    return path.read_text(encoding="utf-8")


def build_graph(store: DocumentStore, bodies: Dict[DocName, str]) -> LinkGraph:
    graph = LinkGraph(store)
    for doc in store:
        graph.add_links(doc.name, parse_outgoing_links(store, doc.name, bodies[doc.name]))
    return graph


def load_collection(
    path: Path,
    suffix: str = DOC_SUFFIX,
) -> Tuple[DocumentStore, LinkGraph, Dict[DocName, str]]:
    """Load the collection listed in path, reading every document body once.

    Document files are resolved relative to the directory holding the
    collection file. Any missing file aborts the whole load.
    """
    names = read_collection(path)
    store = load_documents(names)
    directory = path.parent
    bodies: Dict[DocName, str] = {}
    for name in store.names():
        dprint(f"Processing file: {name}")
        bodies[name] = read_document(directory, name, suffix)
    graph = build_graph(store, bodies)
    return store, graph, bodies
