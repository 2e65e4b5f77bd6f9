"""Factory for the layout used by each tutorial lesson."""

from enum import Enum

from collectionbook.layouts.collection_layout import CollectionLayout
from collectionbook.layouts.displacement import SpringAnimator
from collectionbook.layouts.metrics import Metrics
from collectionbook.layouts.strategy import HeaderPolicy, PlacementStrategy
from collectionbook.models.section_model import LayoutDataSource


class TutorialStep(Enum):
    BASIC_GRID = 0
    SINGLE_HEADER = 1
    SECTIONS = 2
    STICKY_HEADERS = 3
    DYNAMICS = 4
    PASSPORTS = 'passports'


# step -> (strategy, header policy)
STEP_CONFIGURATION = {
    TutorialStep.BASIC_GRID: (PlacementStrategy.GRID, HeaderPolicy.NONE),
    TutorialStep.SINGLE_HEADER: (PlacementStrategy.GRID, HeaderPolicy.SINGLE),
    TutorialStep.SECTIONS: (PlacementStrategy.GRID, HeaderPolicy.PER_SECTION),
    TutorialStep.STICKY_HEADERS: (PlacementStrategy.STICKY_GRID, HeaderPolicy.PER_SECTION),
    TutorialStep.DYNAMICS: (PlacementStrategy.DYNAMICS, HeaderPolicy.PER_SECTION),
    TutorialStep.PASSPORTS: (PlacementStrategy.STACK, HeaderPolicy.SINGLE),
}


def create_layout(step: TutorialStep, data_source: LayoutDataSource, metrics: Metrics | None = None,
                  animator: SpringAnimator | None = None) -> CollectionLayout:
    """Build the layout a lesson uses, on top of the given data source."""
    strategy, header_policy = STEP_CONFIGURATION[step]
    if metrics is None and step is TutorialStep.BASIC_GRID:
        # No headers, so no header space either
        metrics = Metrics.grid_from_settings().replace(header_height=0.0)
    return CollectionLayout(data_source, metrics=metrics, strategy=strategy,
                            header_policy=header_policy, animator=animator)
