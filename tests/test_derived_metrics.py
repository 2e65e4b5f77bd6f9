import pytest

from collectionbook.layouts.derived_metrics import compute_cell_side, compute_derived_metrics
from collectionbook.layouts.errors import ConfigurationError
from collectionbook.layouts.metrics import Metrics
from collectionbook.layouts.strategy import HeaderPolicy


def test_single_section_without_headers_matches_basic_grid():
    metrics = Metrics(columns=5, header_height=0.0)
    derived = compute_derived_metrics(metrics, [100], 500, HeaderPolicy.NONE)

    assert derived.cell_side == 100.0
    assert derived.cell_size.height() == 100.0
    assert derived.section_offsets == (0.0, 2000.0)
    assert derived.content_height == 2000.0


def test_cell_side_is_floored():
    assert compute_cell_side(503, 5) == 100.0
    assert compute_cell_side(499, 5) == 99.0


def test_offsets_accumulate_rows_and_headers():
    metrics = Metrics(columns=5, header_height=60.0)
    derived = compute_derived_metrics(metrics, [10, 7, 1], 500)

    # 2 rows + header, 2 rows + header, 1 row + header
    assert derived.section_offsets == (0.0, 260.0, 520.0, 680.0)
    assert derived.section_count == 3


def test_empty_sections_are_skipped_entirely():
    metrics = Metrics(columns=5, header_height=60.0)
    derived = compute_derived_metrics(metrics, [10, 0, 10], 500)

    assert derived.section_offsets == (0.0, 260.0, 260.0, 520.0)


@pytest.mark.parametrize("shape", [[], [0], [0, 0, 0], [3, 0, 12, 0, 99, 1], [1] * 20])
def test_offsets_start_at_zero_and_never_decrease(shape):
    derived = compute_derived_metrics(Metrics(columns=3, header_height=44.0), shape, 320)

    offsets = derived.section_offsets
    assert offsets[0] == 0.0
    assert len(offsets) == len(shape) + 1
    assert all(a <= b for a, b in zip(offsets, offsets[1:]))


def test_no_sections_has_zero_height():
    derived = compute_derived_metrics(Metrics(), [], 500)
    assert derived.content_height == 0.0


def test_single_header_policy_reserves_header_before_all_sections():
    metrics = Metrics(columns=5, header_height=60.0)

    derived = compute_derived_metrics(metrics, [100], 500, HeaderPolicy.SINGLE)
    assert derived.section_offsets == (60.0, 2060.0)

    empty = compute_derived_metrics(metrics, [], 500, HeaderPolicy.SINGLE)
    assert empty.content_height == 60.0


@pytest.mark.parametrize("width", [0, -1, -500.0])
def test_non_positive_viewport_width_is_a_configuration_error(width):
    with pytest.raises(ConfigurationError):
        compute_derived_metrics(Metrics(), [10], width)


def test_non_positive_columns_fail_at_metrics_construction():
    with pytest.raises(ConfigurationError):
        Metrics(columns=0)
    with pytest.raises(ConfigurationError):
        Metrics().replace(columns=-2)


def test_negative_heights_are_rejected():
    with pytest.raises(ConfigurationError):
        Metrics(header_height=-1.0)
    with pytest.raises(ConfigurationError):
        Metrics(collapse_height=-1.0)
    with pytest.raises(ConfigurationError):
        Metrics(elasticity=-0.5)
