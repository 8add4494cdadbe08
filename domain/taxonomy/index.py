"""Search and display-name resolution over flattened taxonomy entries."""

from collections.abc import Iterable, Iterator, Sequence
from functools import cached_property

from pydantic import BaseModel, Field

from domain.taxonomy.flatten import flatten
from domain.taxonomy.models import FlatEntry, TaxonomyNode


def search(entries: Iterable[FlatEntry], term: str) -> Iterator[FlatEntry]:
    """
    Lazily yield entries whose name or path contains `term`, ignoring case.

    An empty term matches everything. Input order is preserved; this is a filter,
    not a ranking.
    """
    needle = term.casefold()
    for entry in entries:
        if needle in entry.name.casefold() or needle in entry.path.casefold():
            yield entry


def build_lookup(entries: Iterable[FlatEntry]) -> dict[str, FlatEntry]:
    """Map id -> entry, keeping the first entry when an id repeats."""
    lookup: dict[str, FlatEntry] = {}
    for entry in entries:
        lookup.setdefault(entry.id, entry)
    return lookup


def _resolve(ids: Iterable[str], lookup: dict[str, FlatEntry]) -> list[str]:
    # stale or unknown ids fall back to the raw id
    return [lookup[i].name if i in lookup else i for i in ids]


def resolve_names(ids: Iterable[str], entries: Iterable[FlatEntry]) -> list[str]:
    """
    Resolve selected ids to display names.

    Examples:
        >>> resolve_names(["ca", "zz"], [FlatEntry(id="ca", name="Canada", path="Canada")])
        ['Canada', 'zz']

    Args:
        ids: Selected ids, in selection order
        entries: Flattened taxonomy

    Returns:
        One name per id; the id itself when no entry matches
    """
    return _resolve(ids, build_lookup(entries))


class TaxonomyIndex(BaseModel):
    """Immutable flattened taxonomy with search and cached id lookup."""

    entries: tuple[FlatEntry, ...] = Field(default_factory=tuple)

    @classmethod
    def from_roots(cls, roots: Iterable[TaxonomyNode]) -> "TaxonomyIndex":
        return cls(entries=tuple(flatten(roots)))

    @cached_property
    def by_id(self) -> dict[str, FlatEntry]:
        """Build the id lookup table once; entries never change after construction."""
        return build_lookup(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def get(self, entry_id: str) -> FlatEntry | None:
        return self.by_id.get(entry_id)

    def search(self, term: str) -> list[FlatEntry]:
        return list(search(self.entries, term))

    def resolve_names(self, ids: Sequence[str]) -> list[str]:
        return _resolve(ids, self.by_id)
