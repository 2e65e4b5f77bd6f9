"""Scroll displacement targets for spring-driven (dynamics) layouts.

The spring simulation itself lives behind `SpringAnimator`; this module only
computes where each attribute should be pushed.
"""

import math
from dataclasses import dataclass
from typing import Protocol

from PySide6.QtCore import QPointF, QSizeF

from collectionbook.layouts.attributes import LayoutAttributes
from collectionbook.layouts.errors import ConfigurationError
from collectionbook.layouts.index import HeaderIndex, ItemIndex

DISPLACEMENT_CONSTANT = 0.18


@dataclass
class SpringBehavior:
    """Attachment spring anchoring one attribute to its resting center."""
    key: ItemIndex | HeaderIndex
    anchor: QPointF
    damping: float
    length: float = 0.0
    frequency: float = 1.0


class SpringAnimator(Protocol):
    def add_behavior(self, behavior: SpringBehavior) -> None: ...

    def remove_behavior(self, key: ItemIndex | HeaderIndex) -> None: ...

    def remove_all_behaviors(self) -> None: ...

    def update_item(self, key: ItemIndex | HeaderIndex, attributes: LayoutAttributes) -> None: ...


def normalized_distance(touch: QPointF, center: QPointF, viewport_size: QSizeF) -> float:
    """Distance from the touch to `center`, relative to the viewport's short side."""
    shortest = min(viewport_size.width(), viewport_size.height())
    if shortest <= 0:
        raise ConfigurationError(f"viewport size must be positive, got {viewport_size}")
    return math.hypot(touch.x() - center.x(), touch.y() - center.y()) / shortest


def displacement_multiplier(distance: float, constant: float = DISPLACEMENT_CONSTANT) -> float:
    # Moves against the finger, quadratic in the distance
    return -(distance ** 2) * constant


def displace(attributes: LayoutAttributes, touch: QPointF, scroll_delta: float, viewport_size: QSizeF,
             constant: float = DISPLACEMENT_CONSTANT) -> LayoutAttributes:
    """
    Displaced copy of `attributes` for one scroll step.

    Args:
        attributes: Resting placement
        touch: Pointer location in content coordinates
        scroll_delta: Previous minus new vertical scroll offset
        viewport_size: Current viewport size
        constant: Displacement strength

    Returns:
        A copy whose center moved by `scroll_delta * multiplier` vertically
    """
    distance = normalized_distance(touch, attributes.center, viewport_size)
    displaced = attributes.copy()
    center = displaced.center
    center.setY(center.y() + scroll_delta * displacement_multiplier(distance, constant))
    displaced.center = center
    return displaced
