"""Tests for pagination and browse state."""

import pytest

from librarian.search.facets import FilterCriteria, SortOrder, TagLogic
from librarian.search.pagination import DEFAULT_PAGE_SIZE, BrowseState, paginate


class TestPaginate:
    """Test page slicing."""

    def test_fifty_items_page_size_24(self):
        items = list(range(50))

        first = paginate(items, 1, 24)
        last = paginate(items, 3, 24)

        assert first.items == list(range(24))
        assert last.items == [48, 49]
        assert first.total_pages == 3
        assert last.total_pages == 3

    def test_default_page_size(self):
        assert DEFAULT_PAGE_SIZE == 24
        assert len(paginate(list(range(30))).items) == 24

    def test_exact_multiple(self):
        page = paginate(list(range(48)), 2, 24)

        assert page.total_pages == 2
        assert not page.has_next
        assert page.has_previous

    def test_empty_input(self):
        page = paginate([], 1, 24)

        assert page.items == []
        assert page.total_pages == 0
        assert page.start == 0
        assert page.end == 0

    def test_page_past_end_is_empty(self):
        page = paginate(list(range(10)), 5, 4)

        assert page.items == []
        assert page.number == 5
        assert not page.has_next

    def test_page_below_one_clamped(self):
        assert paginate(list(range(10)), 0, 4).number == 1
        assert paginate(list(range(10)), -3, 4).items == [0, 1, 2, 3]

    def test_invalid_page_size(self):
        with pytest.raises(ValueError):
            paginate([1, 2, 3], 1, 0)

    def test_display_bounds(self):
        page = paginate(list(range(50)), 3, 24)

        assert page.start == 49
        assert page.end == 50


class TestBrowseState:
    """Test page reset rules."""

    @pytest.fixture
    def on_page_three(self):
        return BrowseState().go_to(3)

    def test_defaults(self):
        state = BrowseState()

        assert state.page == 1
        assert state.criteria == FilterCriteria()

    @pytest.mark.parametrize(
        "changes",
        [
            {"query": "dune"},
            {"format": "pdf"},
            {"tags": ["Fantasy"]},
            {"sort": SortOrder.TITLE_ASC},
        ],
    )
    def test_criteria_change_resets_page(self, on_page_three, changes):
        assert on_page_three.update(**changes).page == 1

    def test_tag_logic_change_keeps_page(self, on_page_three):
        state = on_page_three.update(tag_logic=TagLogic.OR)

        assert state.page == 3
        assert state.criteria.tag_logic == TagLogic.OR

    def test_unchanged_value_keeps_page(self, on_page_three):
        assert on_page_three.update(query="").page == 3

    def test_toggle_tag_resets_page(self, on_page_three):
        state = on_page_three.toggle_tag("Fantasy")

        assert state.page == 1
        assert state.criteria.tags == ("Fantasy",)

    def test_clear_filters(self):
        state = BrowseState.for_query("dune").toggle_tag("x").go_to(2).clear_filters()

        assert state.page == 1
        assert not state.criteria.is_filtered

    def test_go_to_keeps_criteria(self):
        state = BrowseState.for_query("dune").go_to(4)

        assert state.page == 4
        assert state.criteria.query == "dune"

    def test_states_are_immutable(self, on_page_three):
        on_page_three.update(query="x")
        assert on_page_three.page == 3
        assert on_page_three.criteria.query == ""

    def test_results(self, sample_records):
        state = BrowseState.for_query("tag:fiction").update(sort=SortOrder.TITLE_ASC)
        page = state.results(sample_records, page_size=2)

        assert [r.id for r in page.items] == [2, 1]
        assert page.total_items == 3
        assert page.total_pages == 2

        second = state.go_to(2).results(sample_records, page_size=2)
        assert [r.id for r in second.items] == [5]
