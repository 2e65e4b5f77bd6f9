from dataclasses import dataclass, field
from typing import Iterable

from collectionbook.layouts.index import HeaderIndex, ItemIndex


@dataclass
class InvalidationContext:
    """Describes which cached attributes a change makes stale.

    Returned by every setter on the layout so the trigger of a recompute is
    visible at the call site.
    """
    reason: str = ''
    invalidate_everything: bool = False
    # Cell size and section offsets must be recomputed
    invalidate_derived_metrics: bool = False
    invalidated_items: set[ItemIndex] = field(default_factory=set)
    invalidated_headers: set[HeaderIndex] = field(default_factory=set)

    @classmethod
    def everything(cls, reason: str) -> 'InvalidationContext':
        return cls(reason=reason, invalidate_everything=True, invalidate_derived_metrics=True)

    def invalidate_items(self, indexes: Iterable[ItemIndex]) -> None:
        self.invalidated_items.update(indexes)

    def invalidate_headers(self, indexes: Iterable[HeaderIndex]) -> None:
        self.invalidated_headers.update(indexes)

    @property
    def is_empty(self) -> bool:
        return not (self.invalidate_everything or self.invalidate_derived_metrics
                    or self.invalidated_items or self.invalidated_headers)

    def __str__(self) -> str:
        if self.invalidate_everything:
            return f"InvalidationContext(reason={self.reason!r}, everything)"
        return (f"InvalidationContext(reason={self.reason!r}, items={len(self.invalidated_items)}, "
                f"headers={len(self.invalidated_headers)})")
