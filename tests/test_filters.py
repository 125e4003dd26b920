"""Tests for filter registers and the derived filtered view."""

import itertools

from cowcatalog.herd.collection import CowCollection
from cowcatalog.herd.filters import (
    FilterCriteria,
    FilteredView,
    FilterRegisters,
    filter_cows,
    matches,
)
from tests.conftest import make_cow


def _herd():
    return [
        make_cow("TAG-1001", pen="Pen A", status="Active"),
        make_cow("tag-2002", pen="Pen B", status="In Treatment"),
        make_cow("TAG-1003", pen="Pen A", status="Deceased"),
        make_cow("TAG-3004", pen="Pen C", status="Active"),
    ]


def test_empty_criteria_is_identity():
    """With no filters the output is the full herd, same order, same objects."""
    herd = _herd()

    result = filter_cows(herd, FilterCriteria())

    assert result == herd
    assert all(out is original for out, original in zip(result, herd))


def test_search_is_case_insensitive_substring():
    """Search matches any part of the ear tag regardless of case."""
    herd = _herd()

    result = filter_cows(herd, FilterCriteria(search="TAG-2"))

    assert [cow.ear_tag for cow in result] == ["tag-2002"]


def test_status_is_exact_and_case_sensitive():
    """Status must match the enum value exactly."""
    herd = _herd()

    assert [cow.ear_tag for cow in filter_cows(herd, FilterCriteria(status="Active"))] == ["TAG-1001", "TAG-3004"]
    assert filter_cows(herd, FilterCriteria(status="active")) == []


def test_pen_is_exact():
    """Pen must match exactly, not as a substring."""
    herd = _herd()

    assert [cow.ear_tag for cow in filter_cows(herd, FilterCriteria(pen="Pen A"))] == ["TAG-1001", "TAG-1003"]
    assert filter_cows(herd, FilterCriteria(pen="Pen")) == []


def test_criteria_combine_with_and():
    """A cow appears iff it satisfies every non-empty criterion."""
    herd = _herd()
    searches = ["", "100", "tag"]
    statuses = ["", "Active", "Deceased"]
    pens = ["", "Pen A", "Pen C"]

    for search, status, pen in itertools.product(searches, statuses, pens):
        criteria = FilterCriteria(search=search, status=status, pen=pen)
        expected = [
            cow
            for cow in herd
            if (not search or search.lower() in cow.ear_tag.lower())
            and (not status or cow.status.value == status)
            and (not pen or cow.pen == pen)
        ]
        assert filter_cows(herd, criteria) == expected, criteria
        for cow in herd:
            assert matches(cow, criteria) == (cow in expected)


def test_registers_default_to_empty_and_are_independent():
    """Setting one register notifies only its own observers."""
    registers = FilterRegisters()
    search_seen, status_seen, pen_seen = [], [], []
    registers.search_term.subscribe(search_seen.append)
    registers.status_filter.subscribe(status_seen.append)
    registers.pen_filter.subscribe(pen_seen.append)

    registers.set_status_filter("Active")

    assert search_seen == [""]
    assert status_seen == ["", "Active"]
    assert pen_seen == [""]
    assert registers.snapshot() == FilterCriteria(status="Active")


def test_clear_resets_all_registers():
    registers = FilterRegisters()
    registers.set_search_term("TAG")
    registers.set_status_filter("Active")
    registers.set_pen_filter("Pen A")

    registers.clear()

    assert registers.snapshot().is_empty


def test_view_recomputes_on_every_source():
    """The view emits a fresh result for collection and register changes."""
    collection = CowCollection(_herd())
    registers = FilterRegisters()
    view = FilteredView(collection, registers)
    emitted = []
    view.subscribe(lambda cows: emitted.append([cow.ear_tag for cow in cows]))

    registers.set_pen_filter("Pen A")
    registers.set_status_filter("Active")
    collection.append(make_cow("TAG-5005", pen="Pen A", status="Active"))
    registers.set_search_term("5005")

    assert emitted == [
        ["TAG-1001", "tag-2002", "TAG-1003", "TAG-3004"],
        ["TAG-1001", "TAG-1003"],
        ["TAG-1001"],
        ["TAG-1001", "TAG-5005"],
        ["TAG-5005"],
    ]


def test_view_computes_once_on_construction():
    """Wiring four sources does not produce four initial emissions."""
    collection = CowCollection(_herd())
    view = FilteredView(collection, FilterRegisters())

    assert view.version == 1
    assert len(view.current()) == 4


def test_view_output_is_subset_by_identity():
    """The view never introduces new cow objects."""
    collection = CowCollection(_herd())
    registers = FilterRegisters()
    view = FilteredView(collection, registers)

    registers.set_search_term("100")

    canonical_ids = {id(cow) for cow in collection.current()}
    assert view.current()
    assert all(id(cow) in canonical_ids for cow in view.current())


def test_view_does_not_mutate_inputs():
    collection = CowCollection(_herd())
    registers = FilterRegisters()
    view = FilteredView(collection, registers)
    before = collection.current()

    registers.set_status_filter("Deceased")

    assert collection.current() == before
    assert [cow.ear_tag for cow in view.current()] == ["TAG-1003"]


def test_closed_view_stops_following_sources():
    """After close() the view keeps its last result and detaches upstream."""
    collection = CowCollection(_herd())
    registers = FilterRegisters()
    view = FilteredView(collection, registers)

    view.close()
    registers.set_pen_filter("Pen C")

    assert len(view.current()) == 4
    assert collection.subscriber_count == 0
    assert registers.pen_filter.subscriber_count == 0
