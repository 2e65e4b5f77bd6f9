from enum import Enum


class PlacementStrategy(Enum):
    GRID = 'grid'
    STICKY_GRID = 'sticky_grid'
    STACK = 'stack'
    DYNAMICS = 'dynamics'


class HeaderPolicy(Enum):
    # No supplementary headers at all
    NONE = 'none'
    # One header above all content; offsets start below it
    SINGLE = 'single'
    # One header per non-empty section
    PER_SECTION = 'per_section'
