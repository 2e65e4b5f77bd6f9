"""Per-item and per-header placement functions.

Everything here is pure: inputs in, a fresh `LayoutAttributes` out. The
layout engine decides when to call them and caches the results.
"""

from PySide6.QtCore import QRectF, QSizeF

from collectionbook.layouts.attributes import LayoutAttributes
from collectionbook.layouts.derived_metrics import DerivedMetrics
from collectionbook.layouts.errors import ConfigurationError
from collectionbook.layouts.index import HeaderIndex, ItemIndex
from collectionbook.layouts.metrics import Metrics
from collectionbook.layouts.strategy import HeaderPolicy


# Grid

def grid_cell_origin(index: ItemIndex, derived: DerivedMetrics, metrics: Metrics,
                     header_policy: HeaderPolicy = HeaderPolicy.PER_SECTION) -> tuple[float, float]:
    row, column = divmod(index.item, metrics.columns)
    side = derived.cell_side
    x = column * side
    y = row * side + derived.section_offsets[index.section]
    if header_policy is HeaderPolicy.PER_SECTION:
        y += metrics.header_height
    return x, y


def place_grid_item(index: ItemIndex, derived: DerivedMetrics, metrics: Metrics,
                    header_policy: HeaderPolicy = HeaderPolicy.PER_SECTION) -> LayoutAttributes:
    """Square cell at its column/row inside its section."""
    x, y = grid_cell_origin(index, derived, metrics, header_policy)
    frame = QRectF(x, y, derived.cell_size.width(), derived.cell_size.height())
    return LayoutAttributes(identity=index, frame=frame)


def place_grid_header(section: int, derived: DerivedMetrics, metrics: Metrics, viewport_width: float,
                      item_count: int, header_policy: HeaderPolicy = HeaderPolicy.PER_SECTION) -> LayoutAttributes:
    """Full-width header at the top of its section.

    With a single global header the header sits at the very top of the
    content instead.
    """
    y = 0.0 if header_policy is HeaderPolicy.SINGLE else derived.section_offsets[section]
    return LayoutAttributes(identity=HeaderIndex(section),
                            frame=QRectF(0.0, y, viewport_width, metrics.header_height),
                            z_index=item_count + 1)


# Sticky headers

def sticky_header_offset(section: int, derived: DerivedMetrics, metrics: Metrics, scroll_y: float) -> float:
    """
    Vertical position of a sticky header for the given scroll offset.

    A header whose section start has scrolled past the top rides along with
    the viewport until the next header reaches it. From that point (the
    boundary itself included) it is frozen just above the next section and
    scrolls away normally.
    """
    offset = derived.section_offsets[section]
    if scroll_y <= offset:
        return offset

    boundary = derived.section_offsets[section + 1] - metrics.header_height
    if scroll_y < boundary:
        return scroll_y
    return boundary


def place_sticky_header(section: int, derived: DerivedMetrics, metrics: Metrics, viewport_width: float,
                        item_count: int, scroll_y: float) -> LayoutAttributes:
    attributes = place_grid_header(section, derived, metrics, viewport_width, item_count)
    attributes.frame.moveTop(sticky_header_offset(section, derived, metrics, scroll_y))
    return attributes


# Stack (passport)

def elastic_separation(scroll_y: float, viewport_height: float, elasticity: float) -> float:
    """Stretch factor applied while the content is pulled past its top edge."""
    if viewport_height <= 0:
        raise ConfigurationError(f"viewport height must be > 0, got {viewport_height}")
    if scroll_y >= 0:
        return 1.0
    return 1.0 + (abs(scroll_y) / viewport_height) * elasticity


def _stack_frame(metrics: Metrics, viewport: QRectF, offset: float, height: float) -> QRectF:
    width = viewport.width() - metrics.insets.left - metrics.insets.right
    return QRectF(metrics.insets.left, offset, width, height)


def place_collapsed_item(index: ItemIndex, selection: ItemIndex, item_count: int, metrics: Metrics,
                         viewport: QRectF) -> LayoutAttributes:
    """Placement while a pass is selected.

    The selected pass is centred above the collapse band at full height; the
    rest are squeezed into the band, spread by their index fraction.
    """
    viewport_height = viewport.height()
    if index == selection:
        offset = (viewport_height - metrics.pass_height - metrics.collapse_height) / 2.0
        height = metrics.pass_height
    else:
        multiplier = index.item / item_count
        offset = viewport_height - (1.0 - multiplier) * metrics.collapse_height
        height = metrics.collapse_height / item_count + metrics.overlap

    return LayoutAttributes(identity=index,
                            frame=_stack_frame(metrics, viewport, offset, height),
                            z_index=index.item + 1)


def place_stacked_item(index: ItemIndex, item_count: int, metrics: Metrics, viewport: QRectF) -> LayoutAttributes:
    """Placement with no selection: separated passes that stick to the top and
    fan out elastically when the content is pulled down."""
    scroll_y = viewport.y()
    offset = index.item * metrics.separation + metrics.header_height + metrics.insets.top
    height = metrics.separation + metrics.overlap

    # Stick to the top (plus insets)
    offset = max(offset, scroll_y + metrics.insets.top)

    if scroll_y < 0:
        extra = elastic_separation(scroll_y, viewport.height(), metrics.elasticity)
        if index.item == 0:
            offset += scroll_y
            # Grow to meet where the second pass starts, stretched
            height += (metrics.separation + metrics.header_height + metrics.insets.top) * extra - offset
            height = min(height, metrics.pass_height)
        else:
            offset *= extra
            height *= extra

    if index.item == item_count - 1:
        height = metrics.pass_height

    return LayoutAttributes(identity=index,
                            frame=_stack_frame(metrics, viewport, offset, height),
                            z_index=index.item + 1)


def place_stack_item(index: ItemIndex, selection: ItemIndex | None, item_count: int, metrics: Metrics,
                     viewport: QRectF) -> LayoutAttributes:
    if selection is not None:
        return place_collapsed_item(index, selection, item_count, metrics, viewport)
    return place_stacked_item(index, item_count, metrics, viewport)


def stack_header_alpha(scroll_y: float, header_height: float, has_selection: bool) -> float:
    """Header opacity: hidden during selection, fading out past its half point."""
    if has_selection:
        return 0.0
    halfpoint = header_height / 2.0
    if scroll_y <= halfpoint:
        return 1.0
    if halfpoint <= 0:
        return 0.0
    return max(0.0, min(1.0, 1.0 - (scroll_y - halfpoint) / halfpoint))


def place_stack_header(metrics: Metrics, viewport: QRectF, has_selection: bool) -> LayoutAttributes:
    frame = QRectF(0.0, viewport.y(), viewport.width(), metrics.header_height)
    return LayoutAttributes(identity=HeaderIndex(0), frame=frame, z_index=0,
                            alpha=stack_header_alpha(viewport.y(), metrics.header_height, has_selection))


def stack_content_size(metrics: Metrics, item_count: int, viewport: QRectF, has_selection: bool) -> QSizeF:
    if has_selection:
        return QSizeF(viewport.width(), viewport.height())
    height = (metrics.separation * item_count + metrics.header_height
              + metrics.insets.top + metrics.insets.bottom)
    return QSizeF(viewport.width(), height)
