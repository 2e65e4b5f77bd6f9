import pytest
from PySide6.QtCore import QRectF

from collectionbook.layouts.collection_layout import CollectionLayout
from collectionbook.layouts.errors import ConfigurationError
from collectionbook.layouts.index import HeaderIndex, ItemIndex
from collectionbook.layouts.metrics import Insets, Metrics
from collectionbook.layouts.placement import elastic_separation, place_stacked_item, stack_header_alpha
from collectionbook.layouts.strategy import PlacementStrategy
from collectionbook.models.passport_selection import PassportSelection
from collectionbook.models.sample_data import DESTINATIONS
from collectionbook.models.section_model import SectionModel

PASSPORT_METRICS = Metrics(header_height=72.0, insets=Insets.uniform(8.0), separation=72.0, overlap=8.0,
                           pass_height=480.0, elasticity=1.0, collapse_height=96.0)
COUNT = len(DESTINATIONS)


def make_stack_layout(height=600.0):
    model = SectionModel([COUNT], width=375.0, height=height)
    layout = CollectionLayout(model, metrics=PASSPORT_METRICS, strategy=PlacementStrategy.STACK)
    return model, layout


def scroll(model, layout, y):
    old = model.scroll_to(y)
    layout.on_bounds_changed(old, model.viewport_bounds())


def frame_tuple(attributes):
    frame = attributes.frame
    return (frame.x(), frame.y(), frame.width(), frame.height())


def test_passes_are_separated_below_the_header():
    _, layout = make_stack_layout()

    assert frame_tuple(layout.attributes_for_item(ItemIndex(0, 0))) == (8.0, 80.0, 359.0, 80.0)
    assert frame_tuple(layout.attributes_for_item(ItemIndex(0, 3))) == (8.0, 296.0, 359.0, 80.0)
    assert layout.attributes_for_item(ItemIndex(0, 3)).z_index == 4


def test_last_pass_spans_full_height():
    _, layout = make_stack_layout()

    last = layout.attributes_for_item(ItemIndex(0, COUNT - 1))
    assert last.frame.y() == (COUNT - 1) * 72.0 + 80.0
    assert last.frame.height() == 480.0


def test_passes_stick_to_the_top_when_scrolled_past():
    model, layout = make_stack_layout()

    scroll(model, layout, 500)

    assert layout.attributes_for_item(ItemIndex(0, 3)).frame.y() == 508.0
    assert layout.attributes_for_item(ItemIndex(0, 10)).frame.y() == 800.0


def test_overscroll_fans_passes_out():
    model, layout = make_stack_layout()

    scroll(model, layout, -60)

    first = layout.attributes_for_item(ItemIndex(0, 0))
    second = layout.attributes_for_item(ItemIndex(0, 1))
    # extra separation = 1 + 60 / 600 = 1.1
    assert first.frame.y() == pytest.approx(20.0)
    assert first.frame.height() == pytest.approx(80.0 + 152.0 * 1.1 - 20.0)
    assert second.frame.y() == pytest.approx(152.0 * 1.1)
    assert second.frame.height() == pytest.approx(88.0)


def test_first_pass_height_is_capped_on_hard_pulls():
    viewport = QRectF(0.0, -2000.0, 375.0, 600.0)

    first = place_stacked_item(ItemIndex(0, 0), COUNT, PASSPORT_METRICS, viewport)

    assert first.frame.height() == 480.0


def test_elastic_separation_grows_with_pull():
    pulls = [0.0, -1.0, -30.0, -120.0, -600.0]
    values = [elastic_separation(y, 600.0, 1.0) for y in pulls]

    assert values[0] == 1.0
    assert all(a < b for a, b in zip(values, values[1:]))
    assert elastic_separation(-60.0, 600.0, 0.0) == 1.0
    assert elastic_separation(-60.0, 600.0, 2.0) == pytest.approx(1.2)


def test_elastic_separation_needs_viewport_height():
    with pytest.raises(ConfigurationError):
        elastic_separation(-10.0, 0.0, 1.0)


def test_selection_collapses_others_and_centers_selected():
    _, layout = make_stack_layout()

    layout.on_selection_changed(ItemIndex(0, 5))

    selected = layout.attributes_for_item(ItemIndex(0, 5))
    assert frame_tuple(selected) == (8.0, 12.0, 359.0, 480.0)
    assert selected.z_index == 6

    first = layout.attributes_for_item(ItemIndex(0, 0))
    assert first.frame.y() == pytest.approx(600.0 - 96.0)
    assert first.frame.height() == pytest.approx(96.0 / COUNT + 8.0)

    middle = layout.attributes_for_item(ItemIndex(0, 15))
    assert middle.frame.y() == pytest.approx(600.0 - (1.0 - 15.0 / COUNT) * 96.0)


def test_selection_round_trip_restores_frames():
    _, layout = make_stack_layout()
    before = [layout.attributes_for_item(ItemIndex(0, item)) for item in range(COUNT)]

    layout.on_selection_changed(ItemIndex(0, 7))
    during = [layout.attributes_for_item(ItemIndex(0, item)) for item in range(COUNT)]
    layout.on_selection_changed(None)
    after = [layout.attributes_for_item(ItemIndex(0, item)) for item in range(COUNT)]

    assert during != before
    assert after == before


def test_selection_change_invalidates_everything():
    _, layout = make_stack_layout()
    layout.prepare()

    context = layout.on_selection_changed(ItemIndex(0, 1))

    assert context.invalidate_everything
    assert len(layout._cache) == 0


@pytest.mark.parametrize("scroll_y, selected, expected", [
    (-40.0, False, 1.0),
    (0.0, False, 1.0),
    (36.0, False, 1.0),
    (54.0, False, 0.5),
    (72.0, False, 0.0),
    (300.0, False, 0.0),
    (0.0, True, 0.0),
])
def test_header_alpha(scroll_y, selected, expected):
    assert stack_header_alpha(scroll_y, 72.0, selected) == pytest.approx(expected)


def test_header_rides_with_the_viewport_and_fades():
    model, layout = make_stack_layout()

    scroll(model, layout, 54)
    header = layout.attributes_for_header(0)

    assert frame_tuple(header) == (0.0, 54.0, 375.0, 72.0)
    assert header.alpha == pytest.approx(0.5)
    assert header.z_index == 0


def test_header_hidden_during_selection():
    _, layout = make_stack_layout()
    layout.on_selection_changed(ItemIndex(0, 2))

    assert layout.attributes_for_header(0).alpha == 0.0


def test_content_size_depends_on_selection():
    _, layout = make_stack_layout()

    size = layout.content_size()
    assert (size.width(), size.height()) == (375.0, 72.0 * COUNT + 72.0 + 16.0)

    layout.on_selection_changed(ItemIndex(0, 0))
    size = layout.content_size()
    assert (size.width(), size.height()) == (375.0, 600.0)


def test_scroll_invalidates_all_cached_stack_attributes():
    model, layout = make_stack_layout()
    layout.prepare()
    contexts = []
    layout.layout_invalidated.connect(contexts.append)

    scroll(model, layout, 10)

    assert len(contexts[0].invalidated_items) == COUNT
    assert contexts[0].invalidated_headers == {HeaderIndex(0)}


def test_stack_lays_out_first_section_only():
    model = SectionModel([3, 4], width=375.0, height=600.0)
    layout = CollectionLayout(model, metrics=PASSPORT_METRICS, strategy=PlacementStrategy.STACK)

    assert layout.attributes_for_item(ItemIndex(1, 0)) is None
    assert layout.attributes_for_header(1) is None
    assert len(layout.attributes_in_rect(QRectF(0, -1000, 375, 5000))) == 3 + 1


def test_stack_needs_viewport_height():
    model = SectionModel([3], width=375.0, height=0.0)
    with pytest.raises(ConfigurationError):
        CollectionLayout(model, metrics=PASSPORT_METRICS, strategy=PlacementStrategy.STACK)


def test_tap_selects_then_closes():
    model, layout = make_stack_layout()
    seen = []
    selection = PassportSelection(layout, model)
    selection.register_callback(seen.append)

    assert selection.tap(ItemIndex(0, 4)) == ItemIndex(0, 4)
    assert layout.selection == ItemIndex(0, 4)
    assert model.current_selection() == ItemIndex(0, 4)

    # A tap while open closes instead of switching passes
    assert selection.tap(ItemIndex(0, 9)) is None
    assert layout.selection is None
    assert seen == [ItemIndex(0, 4), None]


def test_clear_without_selection_is_a_no_op():
    selection = PassportSelection()
    assert selection.clear() is False
    selection.tap(ItemIndex(0, 0))
    assert selection.clear() is True
    assert selection.selection is None


def test_broken_callback_does_not_block_layout(capsys):
    model, layout = make_stack_layout()
    selection = PassportSelection(layout, model)

    def broken(_):
        raise RuntimeError("listener failed")

    selection.register_callback(broken)
    selection.tap(ItemIndex(0, 1))

    assert layout.selection == ItemIndex(0, 1)
    assert "listener failed" in capsys.readouterr().err
