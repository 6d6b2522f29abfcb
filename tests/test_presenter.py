import pytest

from gridbrowser.core.columns import ColumnDef, ColumnSet
from gridbrowser.core.presenter import (
    DEFAULT_EMPTY_MESSAGE,
    DEFAULT_EMPTY_SEARCH_MESSAGE,
    BrowserInputs,
    VisualState,
    present,
    select_visual_state,
)

COLUMNS = ColumnSet.of(
    [
        ColumnDef("name", lambda row: row["name"].upper(), header="Name", size=12),
        ColumnDef("city", lambda row: row["city"], header="City"),
    ]
)
ROWS = [
    {"id": 10, "name": "lamp", "city": "Recife"},
    {"id": 11, "name": "desk", "city": "Natal"},
]


@pytest.mark.parametrize(
    "is_loading, row_count, expected",
    [
        (True, 0, VisualState.LOADING),
        (True, 5, VisualState.LOADING),
        (False, 0, VisualState.EMPTY),
        (False, 1, VisualState.POPULATED),
        (False, 50, VisualState.POPULATED),
    ],
)
def test_visual_state_selection(is_loading, row_count, expected):
    assert select_visual_state(is_loading, row_count) is expected


def test_loading_renders_one_placeholder_row_per_page_slot():
    view = present(COLUMNS, BrowserInputs(data=ROWS, total_items=2, items_per_page=5, is_loading=True))

    assert view.state is VisualState.LOADING
    assert view.skeleton_rows == 5
    assert view.rows == ()
    assert view.pagination is None
    assert view.summary is None
    assert [header.width for header in view.headers] == [12, None]


def test_empty_without_search_uses_default_message():
    view = present(COLUMNS, BrowserInputs(data=[], total_items=0))

    assert view.state is VisualState.EMPTY
    assert view.empty_message == DEFAULT_EMPTY_MESSAGE
    assert not view.show_reset


def test_empty_with_committed_search_uses_search_message():
    view = present(COLUMNS, BrowserInputs(data=[], total_items=0), committed_term="sofa", can_reset=True)

    assert view.empty_message == DEFAULT_EMPTY_SEARCH_MESSAGE
    assert view.show_reset


def test_custom_empty_messages():
    view = present(
        COLUMNS,
        BrowserInputs(),
        committed_term="x",
        empty_message="Nothing here",
        empty_search_message="Nothing matches",
    )
    assert view.empty_message == "Nothing matches"


def test_populated_rows_keep_original_values():
    view = present(COLUMNS, BrowserInputs(data=ROWS, total_items=2), row_key=lambda row: row["id"])

    assert view.state is VisualState.POPULATED
    assert [row.cells for row in view.rows] == [("LAMP", "Recife"), ("DESK", "Natal")]
    assert [row.key for row in view.rows] == [10, 11]
    assert view.rows[1].row is ROWS[1]
    assert view.rows[1].index == 1


def test_row_key_defaults_to_index():
    view = present(COLUMNS, BrowserInputs(data=ROWS, total_items=2))
    assert [row.key for row in view.rows] == [0, 1]


def test_error_suppresses_grid():
    view = present(COLUMNS, BrowserInputs(data=ROWS, total_items=2, error=RuntimeError("timeout")))

    assert view.error_message == "Error loading data: timeout"
    assert not view.shows_grid
    assert view.rows == ()
    assert view.skeleton_rows == 0
    assert view.empty_message is None


def test_error_while_loading_still_suppresses_skeleton():
    view = present(COLUMNS, BrowserInputs(is_loading=True, error="offline"))

    assert view.error_message == "Error loading data: offline"
    assert view.skeleton_rows == 0


def test_pagination_hidden_for_single_page():
    view = present(COLUMNS, BrowserInputs(data=ROWS, total_items=2, items_per_page=15))
    assert view.pagination is None
    assert view.summary == (1, 2, 2)


def test_pagination_present_for_many_pages():
    view = present(COLUMNS, BrowserInputs(data=ROWS, total_items=100, current_page=3, items_per_page=10))

    assert view.pagination.total_pages == 10
    assert view.summary == (21, 30, 100)


def test_pagination_can_be_turned_off():
    view = present(
        COLUMNS, BrowserInputs(data=ROWS, total_items=100, items_per_page=10), show_pagination=False
    )
    assert view.pagination is None


def test_present_is_deterministic():
    inputs = BrowserInputs(data=ROWS, total_items=40, current_page=2, items_per_page=10)
    assert present(COLUMNS, inputs, "x") == present(COLUMNS, inputs, "x")


@pytest.mark.parametrize(
    "kwargs",
    [{"current_page": 0}, {"items_per_page": 0}, {"total_items": -1}],
)
def test_invalid_inputs_are_rejected(kwargs):
    with pytest.raises(ValueError):
        BrowserInputs(**kwargs)
