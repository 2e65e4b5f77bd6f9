"""Value-type keys for cells and supplementary headers."""

from dataclasses import dataclass


@dataclass(frozen=True, order=True)
class ItemIndex:
    """Identifies a cell. Orders by section, then item."""
    section: int
    item: int

    def __str__(self) -> str:
        return f"ItemIndex(section={self.section}, item={self.item})"


@dataclass(frozen=True, order=True)
class HeaderIndex:
    """Identifies the header of a section."""
    section: int

    def __str__(self) -> str:
        return f"HeaderIndex(section={self.section})"
