from typing import Iterable

from PySide6.QtCore import QPointF, QRectF

from collectionbook.layouts.attributes import LayoutAttributes
from collectionbook.layouts.displacement import SpringAnimator, SpringBehavior, displace
from collectionbook.layouts.index import HeaderIndex, ItemIndex
from collectionbook.utils.flow_log import log_flow
from collectionbook.utils.settings import get_float_setting


class LayoutDisplacementService:
    """Owns spring behaviours and scroll displacement for CollectionLayout."""

    def __init__(self, layout, animator: SpringAnimator | None = None):
        self._layout = layout
        self._animator = animator
        self._behaviors: dict[ItemIndex | HeaderIndex, SpringBehavior] = {}
        self.displacement_constant = get_float_setting('dynamics_displacement_constant')
        self.cell_damping = get_float_setting('dynamics_cell_damping')
        self.header_damping = get_float_setting('dynamics_header_damping')
        self.min_scroll_delta = get_float_setting('dynamics_min_scroll_delta')

    @property
    def animator(self) -> SpringAnimator | None:
        return self._animator

    def behavior_for(self, key: ItemIndex | HeaderIndex) -> SpringBehavior | None:
        return self._behaviors.get(key)

    def attach(self, attributes: LayoutAttributes) -> None:
        """Anchor a fresh attribute to its resting center."""
        if self._animator is None:
            return
        # Headers get weaker springs
        damping = self.header_damping if attributes.is_header else self.cell_damping
        behavior = SpringBehavior(key=attributes.identity, anchor=attributes.center, damping=damping)
        self._behaviors[attributes.identity] = behavior
        self._animator.add_behavior(behavior)

    def detach(self, keys: Iterable[ItemIndex | HeaderIndex]) -> None:
        if self._animator is None:
            return
        for key in keys:
            if self._behaviors.pop(key, None) is not None:
                self._animator.remove_behavior(key)

    def detach_all(self) -> None:
        if self._animator is None:
            return
        self._behaviors.clear()
        self._animator.remove_all_behaviors()

    def animate_displacements(self, old: QRectF, new: QRectF, touch: QPointF | None) -> list[LayoutAttributes]:
        """Push every anchored attribute away from the scroll, weighted by distance to the touch."""
        if self._animator is None or touch is None:
            return []
        delta = old.y() - new.y()
        if abs(delta) <= self.min_scroll_delta:
            return []

        cache = self._layout._cache
        displaced = []
        for key in list(self._behaviors):
            if isinstance(key, HeaderIndex):
                attributes = cache.get_header(key)
            else:
                attributes = cache.get_cell(key)
            if attributes is None:
                continue
            moved = displace(attributes, touch, delta, new.size(), self.displacement_constant)
            self._animator.update_item(key, moved)
            displaced.append(moved)

        log_flow("DYNAMICS", f"Displaced {len(displaced)} attributes (delta={delta:.1f})",
                 throttle_key="dynamics_displace", every_s=0.25)
        return displaced
