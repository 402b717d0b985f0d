#!/usr/bin/env python3
"""
Tests for record categorization, parent/child relationships and day status
"""

from datetime import date

import pytest

from bookinglanes.layout.core.exceptions import InvalidIntervalError
from bookinglanes.layout.core.interval import DirectBooking, PropagatedBlock
from bookinglanes.layout.core.normalizer import normalize_date, normalize_interval
from bookinglanes.layout.utils.categorize import (
    categorize_for_property, category_for_record, intervals_from_records, is_visible_record,
)
from bookinglanes.layout.utils.day_status import EMPTY_DAY, day_status, intervals_for_property
from bookinglanes.layout.utils.relationships import (
    PropertyRelationships, RelationshipCache, generate_related_blocks,
)
from bookinglanes.models import IntervalCategory, PropertyType
from bookinglanes.schemas import PropertyIn, ReservationRecordIn


PROPERTIES = [
    PropertyIn(id="villa", name="Villa", type=PropertyType.PARENT),
    PropertyIn(id="u1", name="Unit 1", type=PropertyType.CHILD, parent_id="villa"),
    PropertyIn(id="u2", name="Unit 2", type=PropertyType.CHILD, parent_id="villa"),
    PropertyIn(id="cabin", name="Cabin"),
]


def record(id, property_id, start, end, **kwargs):
    return ReservationRecordIn(id=id, property_id=property_id, start_date=start, end_date=end, **kwargs)


def stay(id, scope, start, end, cls=DirectBooking, **kwargs):
    return normalize_interval(cls(id, scope, start, end, **kwargs))


@pytest.fixture
def relationships():
    return PropertyRelationships.from_properties(PROPERTIES)


# ================================
# RELATIONSHIPS
# ================================

def test_relationship_maps(relationships):
    assert relationships.is_parent("villa")
    assert not relationships.is_parent("u1")
    assert relationships.children_of("villa") == ["u1", "u2"]
    assert relationships.parent_of("u2") == "villa"
    assert relationships.parent_of("cabin") is None
    assert relationships.related_ids("villa") == ["u1", "u2"]
    assert relationships.related_ids("u1") == ["villa"]
    assert relationships.related_ids("cabin") == []


def test_relatedness_and_siblings(relationships):
    assert relationships.are_related("villa", "u1")
    assert relationships.are_related("u2", "villa")
    assert not relationships.are_related("u1", "u2")
    assert relationships.are_siblings("u1", "u2")
    assert not relationships.are_siblings("u1", "u1")
    assert not relationships.are_siblings("villa", "u1")


def test_parent_booking_blocks_every_child(relationships):
    booking = stay("r1", "villa", date(2025, 4, 2), date(2025, 4, 5))

    blocks = generate_related_blocks(booking, relationships)

    assert [block.scope_key for block in blocks] == ["u1", "u2"]
    assert all(isinstance(block, PropagatedBlock) for block in blocks)
    assert blocks[0].id == "r1:block:u1"
    assert blocks[0].source_id == "r1"
    assert blocks[0].start == booking.start and blocks[0].end == booking.end


def test_child_booking_blocks_only_its_parent(relationships):
    booking = stay("r2", "u1", date(2025, 4, 7), date(2025, 4, 9))
    assert [block.scope_key for block in generate_related_blocks(booking, relationships)] == ["villa"]


def test_standalone_booking_blocks_nothing(relationships):
    booking = stay("r9", "cabin", date(2025, 4, 7), date(2025, 4, 9))
    assert generate_related_blocks(booking, relationships) == []


def test_relationship_cache_reloads_after_ttl():
    now = [0.0]
    loads = []

    def loader():
        loads.append(now[0])
        return PropertyRelationships.from_properties(PROPERTIES)

    cache = RelationshipCache(loader, ttl_seconds=10, clock=lambda: now[0])
    assert not cache.is_fresh

    first = cache.get()
    now[0] = 5.0
    assert cache.get() is first
    assert len(loads) == 1

    now[0] = 10.0
    assert cache.get() is not first
    assert len(loads) == 2

    cache.clear()
    cache.get()
    assert len(loads) == 3


# ================================
# CATEGORIZATION
# ================================

def test_category_for_record_flags():
    assert category_for_record(record("a", "villa", "2025-04-01", "2025-04-02")) == IntervalCategory.DIRECT
    assert category_for_record(record("b", "villa", "2025-04-01", "2025-04-02",
                                      source_reservation_id="x")) == IntervalCategory.PROPAGATED_BLOCK
    assert category_for_record(record("c", "villa", "2025-04-01", "2025-04-02",
                                      is_blocking=True)) == IntervalCategory.PROPAGATED_BLOCK
    # The explicit relationship flag wins over the source link
    assert category_for_record(record("d", "villa", "2025-04-01", "2025-04-02", source_reservation_id="x",
                                      is_relationship_block=True)) == IntervalCategory.RELATIONSHIP_BLOCK


def test_manual_blocked_placeholders_are_hidden():
    placeholder = record("m1", "villa", "2025-04-01", "2025-04-02", notes="Blocked")
    real_block = record("b1", "villa", "2025-04-01", "2025-04-02", notes="Blocked", source_reservation_id="r2")

    assert not is_visible_record(placeholder)
    assert is_visible_record(real_block)
    assert [i.id for i in intervals_from_records([placeholder, real_block])] == ["b1"]


def test_intervals_from_records_normalizes_and_keeps_platform():
    intervals = intervals_from_records([record("r1", "villa", "2025-04-02", "2025-04-05", platform="Airbnb")])

    assert intervals[0].start.hour == 12
    assert intervals[0].scope_key == "villa"
    assert intervals[0].platform == "Airbnb"


def test_reversed_record_is_rejected():
    with pytest.raises(InvalidIntervalError):
        intervals_from_records([record("r1", "villa", "2025-04-05", "2025-04-02")])


def test_categorize_parent_view():
    records = [
        record("r1", "villa", "2025-04-02", "2025-04-05"),
        record("r2", "u1", "2025-04-07", "2025-04-09"),
        record("b1", "villa", "2025-04-07", "2025-04-09", status="Blocked", source_reservation_id="r2"),
        record("m1", "villa", "2025-04-20", "2025-04-21", notes="Blocked"),
        record("r3", "u2", "2025-04-10", "2025-04-12"),
        record("b2", "u1", "2025-04-02", "2025-04-05", status="Blocked", source_reservation_id="r1"),
        record("r4", "cabin", "2025-04-01", "2025-04-03"),
    ]

    categorized = categorize_for_property(records, "villa", ["u1", "u2"])

    assert [i.id for i in categorized.direct] == ["r1"]
    assert [i.id for i in categorized.propagated_blocks] == ["b1"]
    assert [i.id for i in categorized.relationship_blocks] == ["r2", "r3"]
    assert all(i.scope_key == "villa" for i in categorized.all())
    assert categorized.relationship_blocks[0].source_id == "r2"
    assert categorized.relationship_blocks[0].category == IntervalCategory.RELATIONSHIP_BLOCK


def test_categorize_child_view():
    records = [
        record("r1", "villa", "2025-04-02", "2025-04-05"),
        record("r2", "u1", "2025-04-07", "2025-04-09"),
        record("b2", "u1", "2025-04-02", "2025-04-05", status="Blocked", source_reservation_id="r1"),
        record("r3", "u2", "2025-04-10", "2025-04-12"),
    ]

    categorized = categorize_for_property(records, "u1", ["villa"])

    assert [i.id for i in categorized.direct] == ["r2"]
    assert [i.id for i in categorized.propagated_blocks] == ["b2"]
    assert [i.id for i in categorized.relationship_blocks] == ["r1"]


# ================================
# DAY STATUS
# ================================

def _day(value):
    return normalize_date(value)


def test_direct_booking_occupies_its_property(relationships):
    intervals = [stay("r1", "villa", date(2025, 4, 2), date(2025, 4, 5))]

    status = day_status("villa", _day(date(2025, 4, 3)), intervals, relationships)

    assert status.has_reservation
    assert not status.is_indirect
    assert [i.id for i in status.intervals] == ["r1"]


def test_parent_is_indirectly_occupied_by_child_booking(relationships):
    intervals = [stay("r2", "u1", date(2025, 4, 7), date(2025, 4, 9))]

    status = day_status("villa", _day(date(2025, 4, 8)), intervals, relationships)

    assert status.has_reservation
    assert status.is_indirect
    assert [i.id for i in status.intervals] == ["r2"]


def test_child_is_indirectly_occupied_by_parent_booking(relationships):
    intervals = [stay("r1", "villa", date(2025, 4, 2), date(2025, 4, 5))]

    status = day_status("u1", _day(date(2025, 4, 4)), intervals, relationships)

    assert status.has_reservation and status.is_indirect


def test_sibling_propagated_block_is_ignored(relationships):
    intervals = [
        stay("r2", "u1", date(2025, 4, 7), date(2025, 4, 9)),
        stay("r2:block:u2", "u2", date(2025, 4, 7), date(2025, 4, 9), cls=PropagatedBlock, source_id="r2"),
    ]

    assert intervals_for_property(intervals, "u2", relationships) == []
    assert day_status("u2", _day(date(2025, 4, 8)), intervals, relationships) == EMPTY_DAY


def test_block_does_not_make_related_property_indirectly_occupied(relationships):
    intervals = [stay("r1:block:u1", "u1", date(2025, 4, 2), date(2025, 4, 5), cls=PropagatedBlock, source_id="r1")]

    status = day_status("villa", _day(date(2025, 4, 3)), intervals, relationships)

    assert status == EMPTY_DAY


def test_unrelated_property_is_free(relationships):
    intervals = [stay("r1", "villa", date(2025, 4, 2), date(2025, 4, 5))]
    assert not day_status("cabin", _day(date(2025, 4, 3)), intervals, relationships).has_reservation
