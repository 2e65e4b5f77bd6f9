"""Precomputed per-section offsets and cell size for grid layouts."""

import math
from dataclasses import dataclass
from typing import Sequence

from PySide6.QtCore import QSizeF

from collectionbook.layouts.errors import ConfigurationError
from collectionbook.layouts.metrics import Metrics
from collectionbook.layouts.strategy import HeaderPolicy


@dataclass(frozen=True)
class DerivedMetrics:
    """Geometry shared by every placement in one pass.

    `section_offsets` has one entry per section plus a trailing total, so
    `section_offsets[s]` is where section `s` starts and
    `section_offsets[-1]` is the content height.
    """
    cell_size: QSizeF
    section_offsets: tuple[float, ...]

    @property
    def cell_side(self) -> float:
        return self.cell_size.width()

    @property
    def section_count(self) -> int:
        return len(self.section_offsets) - 1

    @property
    def content_height(self) -> float:
        return self.section_offsets[-1]


def compute_cell_side(viewport_width: float, columns: int) -> float:
    if columns <= 0:
        raise ConfigurationError(f"columns must be > 0, got {columns}")
    if viewport_width <= 0:
        raise ConfigurationError(f"viewport width must be > 0, got {viewport_width}")
    return float(math.floor(viewport_width / columns))


def compute_derived_metrics(metrics: Metrics, section_shape: Sequence[int], viewport_width: float,
                            header_policy: HeaderPolicy = HeaderPolicy.PER_SECTION) -> DerivedMetrics:
    """
    Compute cell size and cumulative section offsets.

    Args:
        metrics: Current metrics
        section_shape: Item count of each section
        viewport_width: Width available to the grid
        header_policy: Where headers take vertical space

    Returns:
        DerivedMetrics for this pass

    Raises:
        ConfigurationError: If columns or viewport width are not positive
    """
    side = compute_cell_side(viewport_width, metrics.columns)

    height = 0.0
    if header_policy is HeaderPolicy.SINGLE:
        height = metrics.header_height
    offsets = [height]
    for items in section_shape:
        # Empty sections get neither rows nor a header
        if items > 0:
            rows = math.ceil(items / metrics.columns)
            height += rows * side
            if header_policy is HeaderPolicy.PER_SECTION:
                height += metrics.header_height
        offsets.append(height)

    return DerivedMetrics(cell_size=QSizeF(side, side), section_offsets=tuple(offsets))
