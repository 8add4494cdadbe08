"""Flatten a taxonomy tree into path-annotated entries."""

from collections import Counter
from collections.abc import Iterable, Iterator, Sequence

from domain.taxonomy.models import FlatEntry, TaxonomyNode

PATH_SEPARATOR = " > "


def _walk(nodes: Iterable[TaxonomyNode], parent_path: str) -> Iterator[FlatEntry]:
    for node in nodes:
        path = f"{parent_path}{PATH_SEPARATOR}{node.name}" if parent_path else node.name
        yield FlatEntry(id=node.id, name=node.name, path=path)
        yield from _walk(node.children, path)


def flatten(roots: Iterable[TaxonomyNode]) -> list[FlatEntry]:
    """
    Project a taxonomy forest to one FlatEntry per node, pre-order depth-first.

    Children are visited in declaration order, so the output order is the natural
    display order for selectors. Nothing is dropped or deduplicated here; id
    uniqueness is a property of the input (see `find_duplicate_ids`).

    Examples:
        >>> from domain.taxonomy.models import Continent, Region
        >>> [e.path for e in flatten([Continent(id="na", name="North America",
        ...     regions=[Region(id="ca", name="Canada")])])]
        ['North America', 'North America > Canada']

    Args:
        roots: Top-level nodes (continents or sectors); may be empty

    Returns:
        Flat entries in pre-order
    """
    return list(_walk(roots, ""))


def find_duplicate_ids(entries: Sequence[FlatEntry]) -> list[str]:
    """Return ids that occur more than once, in first-seen order."""
    counts = Counter(e.id for e in entries)
    return [entry_id for entry_id, n in counts.items() if n > 1]
