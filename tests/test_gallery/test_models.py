"""Tests for gallery value types."""

from __future__ import annotations

import pytest

from photobrowse.gallery.errors import EmptyPageError
from photobrowse.gallery.models import (
    Direction,
    GalleryFilter,
    Landing,
    LandingKind,
    LINK_NAMES,
)
from tests.conftest import make_page


class TestGalleryFilter:
    def test_first_page_has_only_filter_params(self):
        f = GalleryFilter(path="/photos", params={"tag": "x"})
        assert f.query_params() == {"tag": "x"}

    def test_cursor_is_merged_under_c(self):
        f = GalleryFilter(path="/photos", params={"tag": "x"})
        assert f.query_params("abc") == {"tag": "x", "c": "abc"}

    def test_custom_cursor_param(self):
        f = GalleryFilter()
        assert f.query_params("abc", cursor_param="cursor") == {"cursor": "abc"}

    def test_params_are_read_only(self):
        f = GalleryFilter(params={"tag": "x"})
        with pytest.raises(TypeError):
            f.params["tag"] = "y"

    def test_query_params_returns_a_fresh_dict(self):
        f = GalleryFilter(params={"tag": "x"})
        f.query_params()["tag"] = "y"
        assert f.params["tag"] == "x"


class TestLanding:
    def test_numeric_contract(self):
        assert Landing.from_requested_index(None) == Landing.first()
        assert Landing.from_requested_index(0) == Landing.first()
        assert Landing.from_requested_index(-1) == Landing.last()
        assert Landing.from_requested_index(3) == Landing(LandingKind.AT_INDEX, 3)

    def test_resolve(self):
        assert Landing.first().resolve(4) == 0
        assert Landing.last().resolve(4) == 3
        assert Landing.at(2).resolve(4) == 2

    def test_explicit_index_past_end_is_clamped(self):
        assert Landing.at(10).resolve(4) == 3

    def test_empty_page_cannot_be_resolved(self):
        with pytest.raises(EmptyPageError):
            Landing.first().resolve(0)
        with pytest.raises(EmptyPageError):
            Landing.last().resolve(0)

    def test_negative_explicit_index_rejected(self):
        with pytest.raises(ValueError):
            Landing.at(-2)


class TestPage:
    def test_link_lookup_by_direction(self):
        page = make_page(["A", "B"], next="p2")
        assert page.link_for(Direction.FORWARD).cursor == "p2"
        assert page.link_for(Direction.BACKWARD) is None

    def test_length_and_emptiness(self):
        assert len(make_page(["A", "B", "C"])) == 3
        assert make_page([]).is_empty

    def test_link_names_table(self):
        assert LINK_NAMES[Direction.FORWARD] == "next"
        assert LINK_NAMES[Direction.BACKWARD] == "previous"
