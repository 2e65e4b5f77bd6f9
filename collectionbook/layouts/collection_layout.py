"""Grid and stack layout engine driven by a host data source."""

from typing import Iterable

from PySide6.QtCore import QObject, QRectF, QSizeF, Signal

from collectionbook.layouts.attribute_cache import AttributeCache
from collectionbook.layouts.attributes import LayoutAttributes
from collectionbook.layouts.derived_metrics import DerivedMetrics, compute_derived_metrics
from collectionbook.layouts.displacement import SpringAnimator
from collectionbook.layouts.errors import ConfigurationError
from collectionbook.layouts.index import HeaderIndex, ItemIndex
from collectionbook.layouts.invalidation import InvalidationContext
from collectionbook.layouts.layout_displacement_service import LayoutDisplacementService
from collectionbook.layouts.layout_invalidation_service import LayoutInvalidationService
from collectionbook.layouts.metrics import Metrics
from collectionbook.layouts.placement import (place_grid_header, place_grid_item, place_stack_header,
                                              place_stack_item, place_sticky_header, stack_content_size)
from collectionbook.layouts.strategy import HeaderPolicy, PlacementStrategy
from collectionbook.models.section_model import LayoutDataSource, section_shape
from collectionbook.utils.flow_log import log_flow


class CollectionLayout(QObject):
    """
    Computes and caches placements for every cell and header of a host view.

    The host reports changes through the `on_*` methods and reads geometry
    through the `attributes_*` queries. Queries never observe evicted
    entries: missing attributes are regenerated before anything is returned.
    """

    # Emitted with the InvalidationContext that was applied
    layout_invalidated = Signal(object)

    def __init__(self, data_source: LayoutDataSource, metrics: Metrics | None = None,
                 strategy: PlacementStrategy = PlacementStrategy.GRID,
                 header_policy: HeaderPolicy = HeaderPolicy.PER_SECTION,
                 animator: SpringAnimator | None = None, parent: QObject | None = None):
        """
        Initialize the layout.

        Args:
            data_source: Host providing section shape, viewport and selection
            metrics: Layout metrics; defaults come from settings
            strategy: Placement algorithm
            header_policy: Header arrangement for grid strategies
            animator: Spring animator, used by the dynamics strategy only
            parent: Optional Qt parent

        Raises:
            ConfigurationError: If the viewport or strategy combination is unusable
        """
        super().__init__(parent)
        if (strategy in (PlacementStrategy.STICKY_GRID, PlacementStrategy.DYNAMICS)
                and header_policy is not HeaderPolicy.PER_SECTION):
            raise ConfigurationError(f"{strategy.value} layouts need per-section headers")

        self._data_source = data_source
        self._strategy = strategy
        self._header_policy = header_policy
        if metrics is None:
            metrics = (Metrics.passport_from_settings() if strategy is PlacementStrategy.STACK
                       else Metrics.grid_from_settings())
        self._metrics = metrics
        self._selection = data_source.current_selection()

        self._cache = AttributeCache()
        self._derived: DerivedMetrics | None = None
        self._shape: tuple[int, ...] = ()
        self._needs_prepare = True

        self._invalidation = LayoutInvalidationService(self)
        self._displacement = LayoutDisplacementService(
            self, animator if strategy is PlacementStrategy.DYNAMICS else None)

        self._validate_viewport(data_source.viewport_bounds())

    # Properties

    @property
    def strategy(self) -> PlacementStrategy:
        return self._strategy

    @property
    def header_policy(self) -> HeaderPolicy:
        return self._header_policy

    @property
    def metrics(self) -> Metrics:
        return self._metrics

    @property
    def selection(self) -> ItemIndex | None:
        return self._selection

    @property
    def displacement(self) -> LayoutDisplacementService:
        return self._displacement

    @property
    def derived_metrics(self) -> DerivedMetrics:
        """Offsets and cell size of the current pass (an empty placeholder for stack layouts)."""
        self._ensure_derived()
        return self._derived

    # Preparation

    def _validate_viewport(self, bounds: QRectF) -> None:
        if bounds.width() <= 0:
            raise ConfigurationError(f"viewport width must be > 0, got {bounds.width()}")
        if (self._strategy in (PlacementStrategy.STACK, PlacementStrategy.DYNAMICS)
                and bounds.height() <= 0):
            raise ConfigurationError(f"viewport height must be > 0, got {bounds.height()}")

    def _ensure_derived(self) -> None:
        if self._derived is not None:
            return
        self._shape = section_shape(self._data_source)
        if self._strategy is not PlacementStrategy.STACK:
            self._derived = compute_derived_metrics(self._metrics, self._shape,
                                                    self._data_source.viewport_bounds().width(),
                                                    self._header_policy)
        else:
            self._derived = DerivedMetrics(cell_size=QSizeF(), section_offsets=(0.0,))

    def _item_count(self, section: int) -> int:
        if 0 <= section < len(self._shape):
            return self._shape[section]
        return 0

    def _sections(self) -> range:
        # The stack only ever lays out its first section
        if self._strategy is PlacementStrategy.STACK:
            return range(min(1, len(self._shape)))
        return range(len(self._shape))

    def _contains_item(self, index: ItemIndex) -> bool:
        return index.section in self._sections() and 0 <= index.item < self._item_count(index.section)

    def _has_header(self, section: int) -> bool:
        if self._strategy is PlacementStrategy.STACK or self._header_policy is HeaderPolicy.SINGLE:
            return section == 0
        if self._header_policy is HeaderPolicy.NONE:
            return False
        return self._item_count(section) > 0

    def _place_item(self, index: ItemIndex, bounds: QRectF) -> LayoutAttributes:
        if self._strategy is PlacementStrategy.STACK:
            return place_stack_item(index, self._selection, self._item_count(0), self._metrics, bounds)
        return place_grid_item(index, self._derived, self._metrics, self._header_policy)

    def _place_header(self, section: int, bounds: QRectF) -> LayoutAttributes:
        if self._strategy is PlacementStrategy.STACK:
            return place_stack_header(self._metrics, bounds, self._selection is not None)
        if self._strategy is PlacementStrategy.STICKY_GRID:
            return place_sticky_header(section, self._derived, self._metrics, bounds.width(),
                                       self._item_count(section), bounds.y())
        return place_grid_header(section, self._derived, self._metrics, bounds.width(),
                                 self._item_count(section), self._header_policy)

    def prepare(self) -> None:
        """Regenerate every attribute missing from the cache."""
        if not self._needs_prepare:
            return
        self._ensure_derived()
        bounds = self._data_source.viewport_bounds()
        cache = self._cache
        created = 0

        for section in self._sections():
            for item in range(self._item_count(section)):
                index = ItemIndex(section, item)
                if index in cache:
                    continue
                attributes = self._place_item(index, bounds)
                cache.store_cell(attributes)
                self._displacement.attach(attributes)
                created += 1

        header_sections = [0] if self._header_policy is HeaderPolicy.SINGLE else self._sections()
        for section in header_sections:
            if not self._has_header(section) or HeaderIndex(section) in cache:
                continue
            attributes = self._place_header(section, bounds)
            cache.store_header(attributes)
            self._displacement.attach(attributes)
            created += 1

        self._needs_prepare = False
        log_flow("LAYOUT", f"Prepared {created} attributes ({len(cache)} cached, strategy={self._strategy.value})",
                 throttle_key="layout_prepare", every_s=0.5)

    # Queries

    def attributes_for_item(self, index: ItemIndex) -> LayoutAttributes | None:
        self.prepare()
        if not self._contains_item(index):
            return None
        return self._cache.get_cell(index)

    def attributes_for_header(self, section: int) -> LayoutAttributes | None:
        self.prepare()
        if not self._has_header(section):
            return None
        return self._cache.get_header(HeaderIndex(section))

    def attributes_in_rect(self, rect: QRectF) -> list[LayoutAttributes]:
        """Every cell and header whose frame intersects `rect`, in no particular order."""
        self.prepare()
        return self._cache.attributes_in_rect(rect)

    def content_size(self) -> QSizeF:
        self._ensure_derived()
        bounds = self._data_source.viewport_bounds()
        if self._strategy is PlacementStrategy.STACK:
            return stack_content_size(self._metrics, self._item_count(0), bounds, self._selection is not None)
        return QSizeF(bounds.width(), self._derived.content_height)

    # Invalidation

    def invalidate(self, context: InvalidationContext) -> InvalidationContext:
        self._invalidation.apply(context)
        if not context.is_empty:
            self.layout_invalidated.emit(context)
        return context

    def on_metrics_changed(self, metrics: Metrics) -> InvalidationContext:
        self._metrics = metrics
        return self.invalidate(self._invalidation.context_for_metrics_change())

    def on_selection_changed(self, selection: ItemIndex | None) -> InvalidationContext:
        self._selection = selection
        return self.invalidate(self._invalidation.context_for_selection_change())

    def should_invalidate_for_bounds_change(self, new: QRectF) -> bool:
        # Every variant reacts to scrolling
        return True

    def on_bounds_changed(self, old: QRectF, new: QRectF) -> bool:
        """
        React to a scroll or resize of the viewport.

        Args:
            old: Bounds before the change
            new: Bounds after the change (already reported by the data source)

        Returns:
            Whether the layout was invalidated
        """
        self._validate_viewport(new)
        context = self._invalidation.context_for_bounds_change(old, new)
        if self._strategy is PlacementStrategy.DYNAMICS and not context.invalidate_everything:
            self._displacement.animate_displacements(old, new, self._data_source.touch_location())
        self.invalidate(context)
        return self.should_invalidate_for_bounds_change(new)

    def reload_items(self, indexes: Iterable[ItemIndex]) -> InvalidationContext:
        return self.invalidate(self._invalidation.context_for_items(indexes))

    def reload_data(self) -> InvalidationContext:
        return self.invalidate(self._invalidation.context_for_data_change())
