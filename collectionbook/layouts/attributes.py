"""Placement results for cells and headers."""

from dataclasses import dataclass, field

from PySide6.QtCore import QPointF, QRectF

from collectionbook.layouts.index import HeaderIndex, ItemIndex


@dataclass
class LayoutAttributes:
    """Computed frame, z-order and opacity for one cell or header."""
    identity: ItemIndex | HeaderIndex
    frame: QRectF = field(default_factory=QRectF)
    z_index: int = 0
    alpha: float = 1.0

    @property
    def is_header(self) -> bool:
        return isinstance(self.identity, HeaderIndex)

    @property
    def center(self) -> QPointF:
        return self.frame.center()

    @center.setter
    def center(self, point: QPointF):
        self.frame.moveCenter(point)

    def copy(self) -> 'LayoutAttributes':
        """Detached copy; mutating it never touches cached state."""
        return LayoutAttributes(identity=self.identity,
                                frame=QRectF(self.frame),
                                z_index=self.z_index,
                                alpha=self.alpha)

    def __str__(self) -> str:
        f = self.frame
        return (f"LayoutAttributes({self.identity}, x={f.x()}, y={f.y()}, "
                f"w={f.width()}, h={f.height()}, z={self.z_index}, alpha={self.alpha})")
