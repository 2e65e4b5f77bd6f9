"""Host-side data sources consumed by CollectionLayout."""

from typing import Protocol, Sequence

from PySide6.QtCore import QPointF, QRectF, QSizeF

from collectionbook.layouts.index import ItemIndex


class LayoutDataSource(Protocol):
    def number_of_sections(self) -> int: ...

    def number_of_items(self, section: int) -> int: ...

    def viewport_bounds(self) -> QRectF: ...

    def current_selection(self) -> ItemIndex | None: ...

    def touch_location(self) -> QPointF | None: ...


def section_shape(data_source: LayoutDataSource) -> tuple[int, ...]:
    """Item count of every section, read once per pass."""
    return tuple(data_source.number_of_items(section)
                 for section in range(data_source.number_of_sections()))


class SectionModel:
    """In-memory data source: item counts per section plus viewport state."""

    def __init__(self, item_counts: Sequence[int], width: float = 500.0, height: float = 800.0):
        self._item_counts = list(item_counts)
        self._bounds = QRectF(0.0, 0.0, width, height)
        self._selection: ItemIndex | None = None
        self._touch: QPointF | None = None

    def number_of_sections(self) -> int:
        return len(self._item_counts)

    def number_of_items(self, section: int) -> int:
        if 0 <= section < len(self._item_counts):
            return self._item_counts[section]
        return 0

    def viewport_bounds(self) -> QRectF:
        return QRectF(self._bounds)

    def current_selection(self) -> ItemIndex | None:
        return self._selection

    def touch_location(self) -> QPointF | None:
        return QPointF(self._touch) if self._touch is not None else None

    def set_item_counts(self, item_counts: Sequence[int]) -> None:
        self._item_counts = list(item_counts)

    def set_selection(self, selection: ItemIndex | None) -> None:
        self._selection = selection

    def set_touch_location(self, point: QPointF | None) -> None:
        self._touch = point

    def scroll_to(self, y: float) -> QRectF:
        """Move the viewport origin vertically. Returns the previous bounds."""
        old = QRectF(self._bounds)
        self._bounds.moveTop(y)
        return old

    def resize(self, width: float, height: float) -> QRectF:
        old = QRectF(self._bounds)
        self._bounds.setSize(QSizeF(width, height))
        return old
