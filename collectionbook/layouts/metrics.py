"""Tunable layout metrics.

A `Metrics` value is immutable; replacing it on a layout invalidates all
derived state (see `CollectionLayout.on_metrics_changed`).
"""

import dataclasses
from dataclasses import dataclass, field

from collectionbook.layouts.errors import ConfigurationError
from collectionbook.utils.settings import get_float_setting, get_int_setting


@dataclass(frozen=True)
class Insets:
    top: float = 0.0
    left: float = 0.0
    bottom: float = 0.0
    right: float = 0.0

    @classmethod
    def uniform(cls, value: float) -> 'Insets':
        return cls(top=value, left=value, bottom=value, right=value)


@dataclass(frozen=True)
class Metrics:
    """Configuration for one layout pass.

    Grid layouts read `columns` and `header_height`. The stack (passport)
    layout reads the pass-related fields and `header_height`.
    """
    columns: int = 5
    header_height: float = 60.0
    insets: Insets = field(default_factory=Insets)
    # How vertically separated each pass is at its furthest
    separation: float = 72.0
    # How much of a pass is additionally rendered under the next one
    overlap: float = 8.0
    # How tall a pass is when rendered fully
    pass_height: float = 480.0
    elasticity: float = 1.0
    # Height of the band collapsed passes are relegated to
    collapse_height: float = 96.0

    def __post_init__(self):
        if self.columns <= 0:
            raise ConfigurationError(f"columns must be > 0, got {self.columns}")
        if self.header_height < 0:
            raise ConfigurationError(f"header_height must be >= 0, got {self.header_height}")
        if self.elasticity < 0:
            raise ConfigurationError(f"elasticity must be >= 0, got {self.elasticity}")
        if self.collapse_height < 0:
            raise ConfigurationError(f"collapse_height must be >= 0, got {self.collapse_height}")

    def replace(self, **changes) -> 'Metrics':
        """Return a copy with the given fields changed (validated again)."""
        return dataclasses.replace(self, **changes)

    @classmethod
    def grid_from_settings(cls) -> 'Metrics':
        return cls(columns=get_int_setting('grid_columns'),
                   header_height=get_float_setting('grid_header_height'))

    @classmethod
    def passport_from_settings(cls) -> 'Metrics':
        return cls(
            header_height=get_float_setting('passport_header_height'),
            insets=Insets.uniform(get_float_setting('passport_inset')),
            separation=get_float_setting('passport_separation'),
            overlap=get_float_setting('passport_overlap'),
            pass_height=get_float_setting('passport_height'),
            elasticity=get_float_setting('passport_elasticity'),
            collapse_height=get_float_setting('passport_collapse_height'),
        )
