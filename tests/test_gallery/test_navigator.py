"""Tests for in-page stepping and boundary delegation of the viewer navigator."""

from __future__ import annotations

import pytest

from photobrowse.gallery.errors import EmptyPageError
from photobrowse.gallery.models import Landing, LoadRequest, PageLoaded, ViewerState
from photobrowse.gallery.navigator import ViewerNavigator
from tests.conftest import make_page


def _loaded(page, reveal=False, landing=None, sequence=1) -> PageLoaded:
    return PageLoaded(
        page=page,
        request=LoadRequest(reveal=reveal, landing=landing or Landing.first()),
        sequence=sequence,
    )


@pytest.fixture
def navigator() -> ViewerNavigator:
    nav = ViewerNavigator()
    nav.apply(_loaded(make_page(["A", "B", "C"])))
    return nav


class TestShowAndToggle:
    def test_starts_hidden(self):
        nav = ViewerNavigator()
        assert nav.state == ViewerState(current_index=0, visible=False)
        assert nav.current_image is None

    def test_show_opens_viewer(self, navigator):
        state = navigator.show(1)
        assert state == ViewerState(current_index=1, visible=True)
        assert navigator.current_image.id == "B"

    def test_show_is_idempotent(self, navigator):
        first = navigator.show(2)
        url = navigator.current_image_url
        second = navigator.show(2)
        assert first == second
        assert navigator.current_image_url == url

    def test_show_out_of_range(self, navigator):
        with pytest.raises(IndexError):
            navigator.show(3)
        with pytest.raises(IndexError):
            navigator.show(-1)

    def test_toggle_keeps_index(self, navigator):
        navigator.show(2)
        assert navigator.toggle() == ViewerState(current_index=2, visible=False)
        assert navigator.current_image is None
        assert navigator.toggle() == ViewerState(current_index=2, visible=True)

    def test_hide(self, navigator):
        navigator.show(1)
        assert navigator.hide().visible is False


class TestInPageStepping:
    def test_walk_forward_to_the_end_without_links(self, navigator):
        navigator.show(0)
        assert navigator.current_image.id == "A"

        assert navigator.next() is None
        assert navigator.state.current_index == 1
        assert navigator.current_image.id == "B"

        assert navigator.next() is None
        assert navigator.current_image.id == "C"

        # No "next" link: nothing happens at the edge
        assert navigator.next() is None
        assert navigator.state == ViewerState(current_index=2, visible=True)
        assert navigator.current_image.id == "C"

    def test_previous_at_start_without_link_is_noop(self, navigator):
        navigator.show(0)
        assert navigator.previous() is None
        assert navigator.state == ViewerState(current_index=0, visible=True)

    def test_steps_change_index_by_one(self, navigator):
        navigator.show(1)
        navigator.next()
        assert navigator.state.current_index == 2
        navigator.previous()
        navigator.previous()
        assert navigator.state.current_index == 0

    def test_no_page_means_no_step(self):
        nav = ViewerNavigator()
        assert nav.next() is None
        assert nav.previous() is None


class TestBoundaryDelegation:
    def test_next_at_last_image_requests_next_page(self):
        nav = ViewerNavigator()
        nav.apply(_loaded(make_page(["A", "B"], next="p2")))
        nav.show(1)

        request = nav.next()

        assert request == LoadRequest(cursor="p2", reveal=True, landing=Landing.first())
        # Position is untouched until the new page arrives
        assert nav.state == ViewerState(current_index=1, visible=True)

    def test_mid_page_never_requests(self):
        nav = ViewerNavigator()
        nav.apply(_loaded(make_page(["A", "B", "C"], next="p2", previous="p0")))
        nav.show(1)
        assert nav.next() is None
        assert nav.state.current_index == 2

    def test_previous_at_first_image_requests_last_of_previous_page(self):
        nav = ViewerNavigator()
        nav.apply(_loaded(make_page(["C", "D"], previous="p1")))
        nav.show(0)

        request = nav.previous()

        assert request == LoadRequest(cursor="p1", reveal=True, landing=Landing.last())

    def test_apply_forward_result_lands_on_first(self):
        nav = ViewerNavigator()
        nav.apply(_loaded(make_page(["A", "B"], next="p2")))
        nav.show(1)
        request = nav.next()

        nav.apply(PageLoaded(page=make_page(["C", "D"], previous="p1"), request=request, sequence=2))

        assert nav.state == ViewerState(current_index=0, visible=True)
        assert nav.current_image.id == "C"

    def test_apply_backward_result_lands_on_last(self):
        nav = ViewerNavigator()
        nav.apply(_loaded(make_page(["C", "D"], previous="p1")))
        nav.show(0)
        request = nav.previous()

        nav.apply(PageLoaded(page=make_page(["A", "B"], next="p2"), request=request, sequence=2))

        assert nav.state == ViewerState(current_index=1, visible=True)
        assert nav.current_image.id == "B"


class TestApply:
    def test_browse_load_keeps_viewer_closed(self):
        nav = ViewerNavigator()
        nav.apply(_loaded(make_page(["A", "B"])))
        assert nav.state == ViewerState(current_index=0, visible=False)
        assert nav.current_image is None

    def test_browse_load_keeps_open_viewer_open(self, navigator):
        navigator.show(2)
        navigator.apply(_loaded(make_page(["X", "Y"])))
        assert navigator.state == ViewerState(current_index=0, visible=True)
        assert navigator.current_image.id == "X"

    def test_index_is_never_carried_over(self, navigator):
        navigator.show(2)
        navigator.apply(_loaded(make_page(["X", "Y", "Z", "W"]), reveal=True))
        assert navigator.state.current_index == 0

    def test_empty_page_with_reveal_closes_viewer_and_reports(self):
        reported = []
        nav = ViewerNavigator(error_sink=reported.append)
        nav.apply(_loaded(make_page(["A"], next="p2")))
        nav.show(0)

        nav.apply(_loaded(make_page([]), reveal=True, sequence=2))

        assert nav.page.is_empty
        assert nav.state == ViewerState(current_index=0, visible=False)
        assert nav.current_image is None
        assert len(reported) == 1
        assert isinstance(reported[0], EmptyPageError)

    def test_empty_page_without_reveal_is_silent(self):
        reported = []
        nav = ViewerNavigator(error_sink=reported.append)
        nav.apply(_loaded(make_page([])))
        assert reported == []
        assert nav.next() is None
        with pytest.raises(IndexError):
            nav.show(0)

    def test_reset_keeps_visibility(self, navigator):
        navigator.show(1)
        state = navigator.reset()
        assert state == ViewerState(current_index=0, visible=True)
        assert navigator.page is None
        assert navigator.current_image is None
