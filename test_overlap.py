#!/usr/bin/env python3
"""
Tests for clipping intervals to week rows
"""

from datetime import date, timedelta

from bookinglanes.layout.algorithms.overlap import NO_OVERLAP, classify_overlap, intervals_in_row
from bookinglanes.layout.core.date_grid import build_month_weeks
from bookinglanes.layout.core.interval import DirectBooking, PropagatedBlock
from bookinglanes.layout.core.normalizer import normalize_interval


def stay(id, start, end, scope="p1", cls=DirectBooking):
    return normalize_interval(cls(id, scope, start, end))


APRIL = build_month_weeks(date(2025, 4, 1))
FIRST_WEEK = APRIL[0]    # --, --, Apr 1 .. Apr 5
SECOND_WEEK = APRIL[1]   # Apr 6 .. Apr 12
LAST_WEEK = APRIL[-1]    # Apr 27 .. Apr 30, --, --, --


def test_interval_continuing_from_previous_week():
    placement = classify_overlap(SECOND_WEEK, stay("r1", date(2025, 4, 5), date(2025, 4, 10)))

    assert placement.start_slot == 0
    assert placement.end_slot == 4
    assert placement.continues_from_previous is True
    assert placement.continues_to_next is False


def test_interval_inside_one_week():
    placement = classify_overlap(SECOND_WEEK, stay("r1", date(2025, 4, 7), date(2025, 4, 9)))
    assert tuple(placement) == (1, 3, False, False)
    assert placement.slot_span == 3


def test_interval_spanning_whole_week():
    placement = classify_overlap(SECOND_WEEK, stay("r1", date(2025, 4, 1), date(2025, 4, 20)))
    assert tuple(placement) == (0, 6, True, True)


def test_interval_outside_row_does_not_overlap():
    assert classify_overlap(SECOND_WEEK, stay("r1", date(2025, 4, 1), date(2025, 4, 5))) == NO_OVERLAP
    assert classify_overlap(SECOND_WEEK, stay("r2", date(2025, 4, 13), date(2025, 4, 20))) == NO_OVERLAP
    assert not NO_OVERLAP.overlaps


def test_checkout_on_first_day_of_row_still_overlaps():
    placement = classify_overlap(SECOND_WEEK, stay("r1", date(2025, 4, 3), date(2025, 4, 6)))
    assert tuple(placement) == (0, 0, True, False)


def test_leading_padding_is_skipped():
    placement = classify_overlap(FIRST_WEEK, stay("r1", date(2025, 3, 28), date(2025, 4, 3)))

    assert placement.start_slot == 2
    assert placement.end_slot == 4
    assert placement.continues_from_previous is True


def test_trailing_padding_is_skipped():
    placement = classify_overlap(LAST_WEEK, stay("r1", date(2025, 4, 29), date(2025, 5, 3)))

    assert placement.start_slot == 2
    assert placement.end_slot == 3
    assert placement.continues_to_next is True


def test_single_day_interval():
    placement = classify_overlap(SECOND_WEEK, stay("r1", date(2025, 4, 8), date(2025, 4, 8)))
    assert tuple(placement) == (2, 2, False, False)


def test_single_day_interval_outside_month_is_not_rendered():
    assert classify_overlap(FIRST_WEEK, stay("r1", date(2025, 3, 31), date(2025, 3, 31))) == NO_OVERLAP


def test_placement_is_always_within_row_bounds():
    first = date(2025, 3, 20)
    for offset in range(0, 50, 2):
        for length in (0, 1, 3, 9, 20):
            start = first + timedelta(days=offset)
            interval = stay("r", start, start + timedelta(days=length))
            for row in APRIL:
                placement = classify_overlap(row, interval)
                if not placement.overlaps:
                    continue
                assert 0 <= placement.start_slot <= placement.end_slot < len(row)
                assert row[placement.start_slot] is not None
                assert row[placement.end_slot] is not None


def test_intervals_in_row_keeps_only_touching_intervals():
    inside = stay("a", date(2025, 4, 7), date(2025, 4, 8))
    outside = stay("b", date(2025, 4, 20), date(2025, 4, 22))
    block = stay("c", date(2025, 4, 11), date(2025, 4, 14), cls=PropagatedBlock)

    placed = intervals_in_row(SECOND_WEEK, [inside, outside, block])

    assert [interval.id for interval, _ in placed] == ["a", "c"]
    assert placed[1][1].continues_to_next is True
