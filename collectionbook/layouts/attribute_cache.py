"""Storage for computed layout attributes."""

from typing import Iterable

from PySide6.QtCore import QRectF

from collectionbook.layouts.attributes import LayoutAttributes
from collectionbook.layouts.index import HeaderIndex, ItemIndex


class AttributeCache:
    """
    Maps cell and header identities to their last computed attributes.

    Entries are owned by the cache. Every read returns a copy, so callers
    can never alter what later queries observe. An absent key means the
    entry has to be computed again before it is served.
    """

    def __init__(self) -> None:
        self._cells: dict[ItemIndex, LayoutAttributes] = {}
        self._headers: dict[HeaderIndex, LayoutAttributes] = {}

    def __len__(self) -> int:
        return len(self._cells) + len(self._headers)

    def __contains__(self, key: ItemIndex | HeaderIndex) -> bool:
        if isinstance(key, HeaderIndex):
            return key in self._headers
        return key in self._cells

    # Cells

    def get_cell(self, index: ItemIndex) -> LayoutAttributes | None:
        attributes = self._cells.get(index)
        return attributes.copy() if attributes is not None else None

    def store_cell(self, attributes: LayoutAttributes) -> None:
        self._cells[attributes.identity] = attributes

    def remove_cells(self, indexes: Iterable[ItemIndex]) -> list[ItemIndex]:
        """Drop the given cells. Returns the keys that were actually cached."""
        removed = []
        for index in indexes:
            if self._cells.pop(index, None) is not None:
                removed.append(index)
        return removed

    def cell_indexes(self) -> list[ItemIndex]:
        return sorted(self._cells)

    # Headers

    def get_header(self, index: HeaderIndex) -> LayoutAttributes | None:
        attributes = self._headers.get(index)
        return attributes.copy() if attributes is not None else None

    def store_header(self, attributes: LayoutAttributes) -> None:
        self._headers[attributes.identity] = attributes

    def remove_headers(self, indexes: Iterable[HeaderIndex]) -> list[HeaderIndex]:
        removed = []
        for index in indexes:
            if self._headers.pop(index, None) is not None:
                removed.append(index)
        return removed

    def header_indexes(self) -> list[HeaderIndex]:
        return sorted(self._headers)

    # Bulk

    def clear(self) -> None:
        self._cells.clear()
        self._headers.clear()

    def all_attributes(self) -> list[LayoutAttributes]:
        return [attributes.copy() for attributes in (*self._cells.values(), *self._headers.values())]

    def attributes_in_rect(self, rect: QRectF) -> list[LayoutAttributes]:
        """Copies of every cached cell and header whose frame intersects `rect`."""
        return [attributes.copy()
                for attributes in (*self._cells.values(), *self._headers.values())
                if rect.intersects(attributes.frame)]
