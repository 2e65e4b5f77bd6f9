from typing import Iterable

from PySide6.QtCore import QRectF

from collectionbook.layouts.index import ItemIndex
from collectionbook.layouts.invalidation import InvalidationContext
from collectionbook.layouts.strategy import PlacementStrategy
from collectionbook.utils.flow_log import log_flow


class LayoutInvalidationService:
    """Owns invalidation decisions and cache eviction for CollectionLayout."""

    def __init__(self, layout):
        self._layout = layout

    def context_for_metrics_change(self) -> InvalidationContext:
        return InvalidationContext.everything('metrics')

    def context_for_selection_change(self) -> InvalidationContext:
        return InvalidationContext.everything('selection')

    def context_for_data_change(self) -> InvalidationContext:
        return InvalidationContext.everything('data')

    def context_for_items(self, indexes: Iterable[ItemIndex]) -> InvalidationContext:
        context = InvalidationContext(reason='items')
        context.invalidate_items(indexes)
        return context

    def context_for_bounds_change(self, old: QRectF, new: QRectF) -> InvalidationContext:
        """Decide what a scroll or resize makes stale."""
        # Cell size follows the width, so a resize restarts from scratch
        if old.width() != new.width():
            return InvalidationContext.everything('width')

        cache = self._layout._cache
        context = InvalidationContext(reason='bounds')
        strategy = self._layout.strategy
        if strategy is PlacementStrategy.STICKY_GRID:
            # Only headers move with the scroll offset
            context.invalidate_headers(cache.header_indexes())
        elif strategy is PlacementStrategy.STACK:
            context.invalidate_items(cache.cell_indexes())
            context.invalidate_headers(cache.header_indexes())
        return context

    def apply(self, context: InvalidationContext) -> None:
        """Evict everything the context names from the layout's cache."""
        if context.is_empty:
            return

        layout = self._layout
        cache = layout._cache
        if context.invalidate_everything:
            cache.clear()
            layout._displacement.detach_all()
        else:
            removed = cache.remove_cells(context.invalidated_items)
            removed += cache.remove_headers(context.invalidated_headers)
            layout._displacement.detach(removed)

        if context.invalidate_derived_metrics:
            layout._derived = None
        layout._needs_prepare = True

        log_flow("INVALIDATE", f"Applied {context}",
                 throttle_key=f"invalidate_{context.reason}", every_s=0.5)
