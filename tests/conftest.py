import pytest

from seatplan.models import Attendee, OptimizationOptions, Relationship, Table


def _attendees(*ids, dietary=(), rsvp_status="confirmed"):
    return [
        Attendee(id=i, name=f"Guest {i}", rsvp_status=rsvp_status, dietary_restrictions="vegan" if i in dietary else None)
        for i in ids
    ]


def _tables(**capacities):
    return [Table(id=table_id, name=table_id, capacity=capacity) for table_id, capacity in capacities.items()]


def _rel(a, b, relationship_type, strength):
    return Relationship(guest_id=a, related_guest_id=b, relationship_type=relationship_type, strength=strength)


@pytest.fixture
def make_attendees():
    return _attendees


@pytest.fixture
def make_tables():
    return _tables


@pytest.fixture
def rel():
    return _rel


@pytest.fixture
def all_off():
    return OptimizationOptions(
        prioritize_families=False,
        avoid_conflicts=False,
        balance_tables=False,
        respect_dietary_restrictions=False,
        keep_couples_and_families_together=False,
    )
