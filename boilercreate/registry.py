"""Content registry: catalogue identifier -> template body.

The registry is read-only once built.  Lookups return a tagged result
(:class:`Found` or :class:`NotFound`) instead of ``None`` so that callers must
handle a missing body explicitly; :meth:`ContentRegistry.require` turns a miss
into :class:`~boilercreate.errors.UnresolvedIdentifier`.

The default registry is loaded from the ``.js`` files shipped in
``boilercreate/content/`` and cached for the life of the process.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Union

from boilercreate.catalog import CatalogueEntry, Category
from boilercreate.errors import UnresolvedIdentifier

_DEFAULT_CONTENT_DIR = Path(__file__).parent / "content"


# ---------------------------------------------------------------------------
# Lookup results
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Found:
    """A registry hit carrying the template body."""

    entry: CatalogueEntry
    content: str


@dataclass(frozen=True)
class NotFound:
    """A registry miss for ``identifier`` in ``category``."""

    category: Category
    identifier: str


LookupResult = Union[Found, NotFound]


# ---------------------------------------------------------------------------
# ContentRegistry
# ---------------------------------------------------------------------------


class ContentRegistry:
    """Immutable mapping of ``Category`` x catalogue entry -> template body.

    Args:
        entries: ``{category: {identifier: body}}``.  Identifiers may be
            catalogue enum members or their hyphenated/camel-case strings;
            anything that is not a member of the category's catalogue is
            rejected with ``ValueError``.
    """

    def __init__(self, entries: Mapping[Category, Mapping[Union[CatalogueEntry, str], str]]) -> None:
        tables: dict[Category, Mapping[CatalogueEntry, str]] = {}
        for category in Category:
            table: dict[CatalogueEntry, str] = {}
            for identifier, content in entries.get(category, {}).items():
                member = category.resolve(identifier)
                if member is None:
                    raise ValueError(
                        f"{identifier!r} is not a catalogue {category.value}"
                    )
                table[member] = content
            tables[category] = MappingProxyType(table)
        self._tables: Mapping[Category, Mapping[CatalogueEntry, str]] = MappingProxyType(tables)

    # -- Construction ------------------------------------------------------

    @classmethod
    def from_directory(cls, root: str | Path) -> "ContentRegistry":
        """Load every ``<content_dir>/<identifier>.js`` body under *root*.

        Catalogue entries without a file are simply absent from the registry.
        """
        base = Path(root)
        entries: dict[Category, dict[CatalogueEntry, str]] = {}
        for category in Category:
            table: dict[CatalogueEntry, str] = {}
            for member in category.members:
                body_path = base / category.content_dir / f"{member.value}.js"
                if body_path.is_file():
                    table[member] = body_path.read_text(encoding="utf-8")
            entries[category] = table
        return cls(entries)

    # -- Queries -----------------------------------------------------------

    def lookup(self, category: Category, identifier: str) -> LookupResult:
        """Return ``Found(entry, content)`` or ``NotFound(category, identifier)``."""
        member = category.resolve(identifier)
        if member is not None:
            content = self._tables[category].get(member)
            if content is not None:
                return Found(member, content)
        return NotFound(category, identifier)

    def require(self, category: Category, identifier: str) -> Found:
        """Like :meth:`lookup` but raises ``UnresolvedIdentifier`` on a miss."""
        result = self.lookup(category, identifier)
        if isinstance(result, NotFound):
            raise UnresolvedIdentifier(category.value, identifier)
        return result

    def identifiers(self, category: Category) -> list[str]:
        """Hyphenated identifiers registered for *category*, in catalogue order."""
        table = self._tables[category]
        return [member.value for member in category.members if member in table]

    def __contains__(self, item: tuple[Category, str]) -> bool:
        category, identifier = item
        return isinstance(self.lookup(category, identifier), Found)


@lru_cache(maxsize=1)
def load_default_registry() -> ContentRegistry:
    """Return the process-wide registry built from the shipped content files."""
    return ContentRegistry.from_directory(_DEFAULT_CONTENT_DIR)
